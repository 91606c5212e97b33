from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping


@dataclass(slots=True)
class ItemStack:
    """Mutable item identity as handed around by the host inventory."""

    material: str
    amount: int = 1
    display_name: str | None = None

    def clone(self) -> "ItemStack":
        return replace(self)

    def is_similar(self, other: "ItemStack | None") -> bool:
        """Same kind of item, ignoring stack size."""
        if other is None:
            return False
        return self.material == other.material and self.display_name == other.display_name

    @classmethod
    def from_config(cls, value: Any) -> "ItemStack":
        if isinstance(value, str):
            return cls(material=value.strip().upper())
        if not isinstance(value, Mapping):
            raise TypeError(f"expected a material name or mapping, got {type(value).__name__}")
        material = value.get("material") or value.get("type")
        if not isinstance(material, str):
            raise TypeError("item 'material' must be a string")
        amount = value.get("amount", 1)
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise TypeError("item 'amount' must be an integer")
        display_name = value.get("display-name")
        if display_name is not None and not isinstance(display_name, str):
            raise TypeError("item 'display-name' must be a string")
        return cls(material=material.strip().upper(), amount=amount, display_name=display_name)
