from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from psychics.components.esper_statistic import EsperStatistic


class DamageType(Enum):
    MELEE = "근접"
    RANGED = "원거리"
    FIRE = "화염"
    BLAST = "폭발"
    MAGIC = "마법"


@dataclass(frozen=True, slots=True)
class Damage:
    """Damage descriptor: what kind of damage, scaled by which statistic."""

    type: DamageType
    stats: EsperStatistic

    @classmethod
    def from_config(cls, value: Any) -> "Damage":
        if not isinstance(value, Mapping):
            raise TypeError(f"expected a mapping with 'type' and 'stats', got {type(value).__name__}")
        raw_type = value.get("type")
        if not isinstance(raw_type, str):
            raise TypeError("damage 'type' must be a string")
        try:
            damage_type = DamageType[raw_type.strip().upper()]
        except KeyError as exc:
            raise TypeError(f"unknown damage type '{raw_type}'") from exc
        return cls(type=damage_type, stats=EsperStatistic.from_config(value.get("stats", {})))
