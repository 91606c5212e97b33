from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True)
class TooltipState:
    """Single tooltip state shared with whatever renders it."""

    visible: bool = False
    title: str = ""
    lines: Tuple[str, ...] = ()
    target_id: int | None = None
