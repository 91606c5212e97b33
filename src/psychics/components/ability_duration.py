from dataclasses import dataclass


@dataclass(slots=True)
class AbilityDuration:
    """Remaining ticks of an executed ability's lingering effect."""

    remaining_ticks: int
    started_tick: int = -1
