from dataclasses import dataclass


@dataclass(slots=True)
class AbilityToggle:
    enabled: bool = False
