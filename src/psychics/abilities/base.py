from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional

from psychics.errors import ConceptStateError

if TYPE_CHECKING:
    from esper import World

    from psychics.concept.ability_concept import AbilityConcept


class Ability:
    """Per-caster runtime instance stamped out of an :class:`AbilityConcept`.

    Subclasses must be constructible without arguments; the concept is
    attached right after construction. ``active`` is the capability flag the
    loader checks to promote a concept's type to ACTIVE.
    """

    active: ClassVar[bool] = False

    def __init__(self) -> None:
        self._concept: Optional[AbilityConcept] = None

    def init_concept(self, concept: AbilityConcept) -> None:
        if self._concept is not None:
            raise ConceptStateError(f"Ability already bound to concept '{self._concept.name}'")
        self._concept = concept

    @property
    def concept(self) -> AbilityConcept:
        if self._concept is None:
            raise ConceptStateError("Ability has no concept attached")
        return self._concept

    # Hooks invoked by the ability systems. All default to no-ops.

    def on_attach(self, world: World, entity: int, owner_entity: int) -> None:
        pass

    def on_toggle(self, world: World, entity: int, owner_entity: int, enabled: bool) -> None:
        pass

    def on_expire(self, world: World, entity: int, owner_entity: int) -> None:
        pass


class ActiveAbility(Ability):
    """Ability cast on demand by its owner."""

    active: ClassVar[bool] = True

    def on_cast_start(self, world: World, entity: int, owner_entity: int) -> None:
        pass

    def on_cast(self, world: World, entity: int, owner_entity: int) -> None:
        pass

    def on_interrupt(self, world: World, entity: int, owner_entity: int) -> None:
        pass
