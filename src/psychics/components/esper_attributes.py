from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from psychics.components.esper_statistic import StatLookup, stats_from_attributes


@dataclass(slots=True)
class EsperAttributes:
    """Caster attribute values (attack power, defense, ...) used to evaluate statistics."""

    values: Dict[str, float] = field(default_factory=dict)

    def stat_lookup(self) -> StatLookup:
        return stats_from_attributes(self.values)
