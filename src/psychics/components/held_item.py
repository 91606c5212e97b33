from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from psychics.components.item_stack import ItemStack


@dataclass(slots=True)
class HeldItem:
    """Item currently in the caster's hand, checked against an ability's wand."""

    item: Optional[ItemStack] = None
