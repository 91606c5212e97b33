from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psychics.abilities.base import Ability
    from psychics.concept.ability_concept import AbilityConcept


@dataclass(slots=True)
class AbilityInstance:
    """Links an ability entity to its shared concept and per-caster runtime object."""

    concept: AbilityConcept
    ability: Ability
    owner_entity: int
