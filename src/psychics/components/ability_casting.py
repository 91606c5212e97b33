from dataclasses import dataclass


@dataclass(slots=True)
class AbilityCasting:
    """Present while an ability is in its casting window.

    A channeling cast (``channeling=True``) may be interrupted from outside;
    a hard cast always runs to completion.
    """

    remaining_ticks: int
    total_ticks: int
    channeling: bool = False

    @property
    def progress(self) -> float:
        if self.total_ticks <= 0:
            return 1.0
        return 1.0 - self.remaining_ticks / self.total_ticks
