from dataclasses import dataclass


@dataclass(slots=True)
class Mana:
    """Caster resource spent on ability costs."""

    current: float
    maximum: float

    def can_afford(self, cost: float) -> bool:
        return self.current >= cost
