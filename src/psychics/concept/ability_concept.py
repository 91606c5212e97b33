"""Ability blueprints.

A concept goes through ``UNINITIALIZED -> BOUND -> INITIALIZED`` exactly once.
:class:`AbilityConceptDraft` is the mutable form used while loading; a
successful :meth:`AbilityConceptDraft.initialize` freezes it into an
:class:`AbilityConcept`, which is read-only and safe to share between any
number of casters.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from psychics.components.ability_type import AbilityType
from psychics.components.damage import Damage
from psychics.components.esper_statistic import EsperStatistic, StatLookup, zero_stats
from psychics.components.item_stack import ItemStack
from psychics.config.binder import bind_config
from psychics.config.schema import FieldKind, FieldSpec, min_value
from psychics.constants import ticks_to_seconds
from psychics.errors import (
    ConceptStateError,
    ConfigValidationError,
    InitializeHookError,
    PsychicsError,
    TemplateResolutionError,
)
from psychics.logger import get_logger
from psychics.templates.engine import render_config_variables
from psychics.tooltip.builder import TooltipText
from psychics.tooltip import render as tooltip_render

if TYPE_CHECKING:
    from psychics.abilities.base import Ability
    from psychics.concept.container import AbilityContainer
    from psychics.concept.psychic_concept import PsychicConcept

log = get_logger(__name__)


ABILITY_CONCEPT_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("display_name", FieldKind.STRING),
    FieldSpec("type", FieldKind.ENUM, required=True, enum_type=AbilityType),
    FieldSpec("cooldown_ticks", FieldKind.INTEGER, default=0, validators=(min_value(0),)),
    FieldSpec("cost", FieldKind.FLOAT, default=0.0, validators=(min_value(0.0),)),
    FieldSpec("casting_ticks", FieldKind.INTEGER, default=0, validators=(min_value(0),)),
    FieldSpec("interruptible", FieldKind.BOOLEAN, default=False),
    FieldSpec("duration_ticks", FieldKind.INTEGER, default=0, validators=(min_value(0),)),
    FieldSpec("range", FieldKind.FLOAT, default=0.0, validators=(min_value(0.0),)),
    FieldSpec("damage", FieldKind.NESTED, factory=Damage.from_config),
    FieldSpec("healing", FieldKind.NESTED, factory=EsperStatistic.from_config),
    FieldSpec("wand", FieldKind.ITEM, factory=ItemStack.from_config),
    FieldSpec("description", FieldKind.STRING_LIST, required=True),
)

_CORE_ATTRS = frozenset(spec.attr for spec in ABILITY_CONCEPT_SCHEMA)


class ConceptState(Enum):
    UNINITIALIZED = auto()
    BOUND = auto()
    INITIALIZED = auto()
    FAILED = auto()


@dataclass(frozen=True, slots=True)
class AbilityConcept:
    """Validated, immutable definition of one ability."""

    name: str
    display_name: str
    type: AbilityType
    description: tuple[str, ...]
    cooldown_ticks: int = 0
    cost: float = 0.0
    casting_ticks: int = 0
    interruptible: bool = False
    duration_ticks: int = 0
    range: float = 0.0
    damage: Optional[Damage] = None
    healing: Optional[EsperStatistic] = None
    _wand: Optional[ItemStack] = field(default=None, repr=False, hash=False)
    extras: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    container: Optional[AbilityContainer] = field(default=None, compare=False, repr=False)
    psychic_concept: Optional[PsychicConcept] = field(default=None, compare=False, repr=False)

    @property
    def wand(self) -> Optional[ItemStack]:
        """A fresh copy of the bound wand item; mutating it never affects the concept."""
        return self._wand.clone() if self._wand is not None else None

    def with_wand(self, item: Optional[ItemStack]) -> "AbilityConcept":
        return replace(self, _wand=item.clone() if item is not None else None)

    def matches_wand(self, item: Optional[ItemStack]) -> bool:
        """True when no wand is required or ``item`` is the required wand."""
        if self._wand is None:
            return True
        return self._wand.is_similar(item)

    @property
    def cooldown_seconds(self) -> float:
        return ticks_to_seconds(self.cooldown_ticks)

    @property
    def casting_seconds(self) -> float:
        return ticks_to_seconds(self.casting_ticks)

    @property
    def duration_seconds(self) -> float:
        return ticks_to_seconds(self.duration_ticks)

    @property
    def channeled(self) -> bool:
        """Casting window can be interrupted from outside."""
        return self.interruptible and self.casting_ticks > 0

    def template_variables(self) -> dict[str, Any]:
        return timing_variables(
            display_name=self.display_name,
            cooldown_ticks=self.cooldown_ticks,
            cost=self.cost,
            casting_ticks=self.casting_ticks,
            duration_ticks=self.duration_ticks,
            range_=self.range,
        )

    def render_tooltip(self, stats: StatLookup = zero_stats) -> TooltipText:
        hook = self.container.on_render_tooltip if self.container is not None else None
        return tooltip_render.render_tooltip(self, stats, hook=hook)

    def create_ability_instance(self) -> Ability:
        if self.container is None:
            raise ConceptStateError(f"Concept '{self.name}' has no container")
        return self.container.create_instance()


def timing_variables(
    *,
    display_name: str,
    cooldown_ticks: int,
    cost: float,
    casting_ticks: int,
    duration_ticks: int,
    range_: float,
) -> dict[str, Any]:
    """Values shared by description variables and tooltip templates."""
    duration_time = ticks_to_seconds(duration_ticks)
    return {
        "display-name": display_name,
        "cooldown-time": ticks_to_seconds(cooldown_ticks),
        "cost": cost,
        "casting-time": ticks_to_seconds(casting_ticks),
        "range": range_,
        "duration": duration_time,
        "duration-time": duration_time,
    }


class AbilityConceptDraft:
    """Mutable concept used only while a configuration section is loaded."""

    def __init__(self) -> None:
        self.state = ConceptState.UNINITIALIZED
        self.name: Optional[str] = None
        self.container: Optional[AbilityContainer] = None
        self.psychic_concept: Optional[PsychicConcept] = None
        self.display_name: Optional[str] = None
        self.type = AbilityType.PASSIVE
        self.cooldown_ticks = 0
        self.cost = 0.0
        self.casting_ticks = 0
        self.interruptible = False
        self.duration_ticks = 0
        self.range = 0.0
        self.damage: Optional[Damage] = None
        self.healing: Optional[EsperStatistic] = None
        self.wand: Optional[ItemStack] = None
        self.description: tuple[str, ...] = ()
        self.extras: dict[str, Any] = {}

    def bind(self, name: str, container: AbilityContainer, psychic_concept: PsychicConcept) -> None:
        if self.state is not ConceptState.UNINITIALIZED:
            raise ConceptStateError(f"Concept '{self.name}' is already bound")
        self.name = name
        self.container = container
        self.psychic_concept = psychic_concept
        self.display_name = container.display_name
        self.state = ConceptState.BOUND

    def initialize(self, config: Mapping[str, Any], *, strict_templates: bool = False) -> AbilityConcept:
        """Bind ``config``, resolve the ability type and render description variables.

        The container's ``on_initialize`` hook sees the frozen concept last.
        Raises :class:`ConfigValidationError` when the section is invalid and
        :class:`InitializeHookError` when the hook fails; the draft is then
        FAILED and can never produce a concept.
        """
        if self.state is not ConceptState.BOUND:
            raise ConceptStateError(
                f"Concept '{self.name}' cannot be initialized from state {self.state.name}"
            )
        assert self.container is not None
        result = bind_config(config, self.container.schema(), owner=self.name or "?")
        if not result.ok:
            self.state = ConceptState.FAILED
            raise ConfigValidationError(result.owner, result.violations)

        for attr, value in result.values.items():
            if attr in _CORE_ATTRS:
                setattr(self, attr, value)
            else:
                self.extras[attr] = value
        # Active implementations are always cast on demand.
        if self.container.active:
            self.type = AbilityType.ACTIVE

        variables = self._config_variables(config)
        try:
            rendered = render_config_variables(self.description, variables, strict=strict_templates)
        except TemplateResolutionError:
            self.state = ConceptState.FAILED
            raise
        self.description = rendered.lines

        concept = self._freeze()
        hook = self.container.on_initialize
        if hook is not None:
            try:
                hook(concept)
            except PsychicsError:
                self.state = ConceptState.FAILED
                raise
            except Exception as exc:
                self.state = ConceptState.FAILED
                raise InitializeHookError(concept.name, exc) from exc
        self.state = ConceptState.INITIALIZED
        log.debug("Initialized ability concept '%s' (%s)", concept.name, concept.type.name)
        return concept

    def _config_variables(self, config: Mapping[str, Any]) -> dict[str, Any]:
        variables: dict[str, Any] = {
            key: value
            for key, value in config.items()
            if isinstance(value, (str, int, float, bool))
        }
        assert self.container is not None
        for spec in self.container.schema():
            if spec.attr in _CORE_ATTRS:
                value = getattr(self, spec.attr)
            else:
                value = self.extras.get(spec.attr)
            if isinstance(value, (str, int, float, bool, Enum)):
                variables[spec.config_key] = value
        variables.update(
            timing_variables(
                display_name=self.display_name or self.name or "",
                cooldown_ticks=self.cooldown_ticks,
                cost=self.cost,
                casting_ticks=self.casting_ticks,
                duration_ticks=self.duration_ticks,
                range_=self.range,
            )
        )
        return variables

    def _freeze(self) -> AbilityConcept:
        assert self.name is not None
        return AbilityConcept(
            name=self.name,
            display_name=self.display_name or self.name,
            type=self.type,
            description=tuple(self.description),
            cooldown_ticks=self.cooldown_ticks,
            cost=self.cost,
            casting_ticks=self.casting_ticks,
            interruptible=self.interruptible,
            duration_ticks=self.duration_ticks,
            range=self.range,
            damage=self.damage,
            healing=self.healing,
            _wand=self.wand.clone() if self.wand is not None else None,
            extras=MappingProxyType(dict(self.extras)),
            container=self.container,
            psychic_concept=self.psychic_concept,
        )
