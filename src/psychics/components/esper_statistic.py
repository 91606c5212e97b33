from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping


@dataclass(frozen=True, slots=True)
class EsperStatistic:
    """Weighted combination of caster attributes, e.g. ``{"attack": 1.5}``.

    The concrete value depends on the caster, so concepts only store the
    weights and a ``StatLookup`` supplies the number at render time.
    """

    ratios: tuple[tuple[str, float], ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, **ratios: float) -> "EsperStatistic":
        return cls(ratios=tuple(sorted((name, float(value)) for name, value in ratios.items())))

    @classmethod
    def from_config(cls, value: Any) -> "EsperStatistic":
        if not isinstance(value, Mapping):
            raise TypeError(f"expected a mapping of attribute to ratio, got {type(value).__name__}")
        ratios = []
        for name, ratio in value.items():
            if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
                raise TypeError(f"ratio for '{name}' must be a number")
            ratios.append((str(name), float(ratio)))
        return cls(ratios=tuple(sorted(ratios)))

    @property
    def attributes(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.ratios)

    def evaluate(self, attributes: Mapping[str, float]) -> float:
        return sum(ratio * float(attributes.get(name, 0.0)) for name, ratio in self.ratios)


StatLookup = Callable[[EsperStatistic], float]


def zero_stats(statistic: EsperStatistic) -> float:
    """Default lookup used when no caster is known."""
    return 0.0


def stats_from_attributes(attributes: Mapping[str, float]) -> StatLookup:
    snapshot = dict(attributes)
    return lambda statistic: statistic.evaluate(snapshot)
