"""Data-only field schema consumed by :func:`psychics.config.binder.bind_config`.

A schema is a sequence of :class:`FieldSpec` descriptors. Each descriptor names
the attribute it fills, the configuration key it reads (``cooldown_ticks``
reads ``cooldown-ticks`` unless ``key`` is given), the semantic type the raw
value is converted to, and any range validators applied after conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional, Sequence


class FieldKind(Enum):
    STRING = auto()
    INTEGER = auto()
    FLOAT = auto()
    BOOLEAN = auto()
    ENUM = auto()
    STRING_LIST = auto()
    NESTED = auto()
    ITEM = auto()


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True, slots=True)
class RangeValidator:
    """Inclusive numeric bounds; either side may be open."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def check(self, value: float) -> Optional[str]:
        if self.minimum is not None and value < self.minimum:
            return f"{value} is below the minimum of {self.minimum}"
        if self.maximum is not None and value > self.maximum:
            return f"{value} is above the maximum of {self.maximum}"
        return None


def min_value(minimum: float) -> RangeValidator:
    return RangeValidator(minimum=minimum)


def value_range(minimum: Optional[float] = None, maximum: Optional[float] = None) -> RangeValidator:
    return RangeValidator(minimum=minimum, maximum=maximum)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    attr: str
    kind: FieldKind
    key: Optional[str] = None
    required: bool = False
    default: Any = UNSET
    validators: tuple[RangeValidator, ...] = ()
    enum_type: Optional[type[Enum]] = None
    factory: Optional[Callable[[Any], Any]] = None

    def __post_init__(self) -> None:
        if self.kind is FieldKind.ENUM and self.enum_type is None:
            raise ValueError(f"Field '{self.attr}' is an enum field without enum_type")
        if self.kind in (FieldKind.NESTED, FieldKind.ITEM) and self.factory is None:
            raise ValueError(f"Field '{self.attr}' needs a factory to build nested values")

    @property
    def config_key(self) -> str:
        return self.key if self.key is not None else self.attr.replace("_", "-")

    @property
    def has_default(self) -> bool:
        return self.default is not UNSET


Schema = Sequence[FieldSpec]


def merge_schemas(*schemas: Schema) -> tuple[FieldSpec, ...]:
    """Concatenate schemas; a later field replaces an earlier one with the same attr."""
    merged: dict[str, FieldSpec] = {}
    for schema in schemas:
        for spec in schema:
            merged.pop(spec.attr, None)
            merged[spec.attr] = spec
    return tuple(merged.values())


def schema_keys(schema: Schema) -> list[str]:
    return [spec.config_key for spec in schema]


__all__ = [
    "FieldKind",
    "FieldSpec",
    "RangeValidator",
    "Schema",
    "UNSET",
    "merge_schemas",
    "min_value",
    "schema_keys",
    "value_range",
]
