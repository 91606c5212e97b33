from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class AbilityListOwner:
    """Associates a caster entity with the ability instance entities it holds."""
    ability_entities: List[int] = field(default_factory=list)
