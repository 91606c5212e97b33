from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Sequence

from psychics.concept.ability_concept import (
    ABILITY_CONCEPT_SCHEMA,
    AbilityConcept,
    AbilityConceptDraft,
)
from psychics.config.schema import FieldSpec, merge_schemas
from psychics.errors import ConceptStateError, InstantiationError
from psychics.logger import get_logger
from psychics.tooltip.render import TooltipHook

if TYPE_CHECKING:
    from psychics.abilities.base import Ability
    from psychics.concept.psychic_concept import PsychicConcept

log = get_logger(__name__)

InitializeHook = Callable[[AbilityConcept], None]


class AbilityContainer:
    """Binds one runtime ability class to the concept loaded for it.

    ``extra_fields`` extends the common concept schema for abilities that
    need their own settings; their bound values end up in
    ``AbilityConcept.extras``.
    """

    def __init__(
        self,
        name: str,
        ability_class: type[Ability],
        *,
        display_name: Optional[str] = None,
        extra_fields: Sequence[FieldSpec] = (),
        on_initialize: Optional[InitializeHook] = None,
        on_render_tooltip: Optional[TooltipHook] = None,
    ) -> None:
        self.name = name
        self.ability_class = ability_class
        self.display_name = display_name or name
        self.extra_fields = tuple(extra_fields)
        self.on_initialize = on_initialize
        self.on_render_tooltip = on_render_tooltip
        self._concept: Optional[AbilityConcept] = None

    @property
    def active(self) -> bool:
        return bool(getattr(self.ability_class, "active", False))

    @property
    def ready(self) -> bool:
        return self._concept is not None

    @property
    def concept(self) -> AbilityConcept:
        if self._concept is None:
            raise ConceptStateError(f"Ability '{self.name}' has not been loaded")
        return self._concept

    def schema(self) -> tuple[FieldSpec, ...]:
        return merge_schemas(ABILITY_CONCEPT_SCHEMA, self.extra_fields)

    def validate(self) -> None:
        """Construct the runtime class once so packaging mistakes surface at load time."""
        try:
            self.ability_class()
        except Exception as exc:
            raise InstantiationError(self.name, exc) from exc

    def load(
        self,
        psychic_concept: PsychicConcept,
        config: Mapping[str, Any],
        *,
        strict_templates: bool = False,
    ) -> AbilityConcept:
        if self._concept is not None:
            raise ConceptStateError(f"Ability '{self.name}' is already loaded")
        self.validate()
        draft = AbilityConceptDraft()
        draft.bind(self.name, self, psychic_concept)
        concept = draft.initialize(config, strict_templates=strict_templates)
        self._concept = concept
        log.info("Loaded ability '%s' for psychic '%s'", self.name, psychic_concept.name)
        return concept

    def create_instance(self) -> Ability:
        concept = self.concept
        try:
            instance = self.ability_class()
        except Exception as exc:
            raise InstantiationError(self.name, exc) from exc
        instance.init_concept(concept)
        return instance
