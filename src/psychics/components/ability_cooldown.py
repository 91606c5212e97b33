from dataclasses import dataclass


@dataclass(slots=True)
class AbilityCooldown:
    """Tracks per-ability cooldown state in ticks remaining."""

    remaining_ticks: int = 0
    started_tick: int = -1
