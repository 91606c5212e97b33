from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Union

from psychics.abilities.base import Ability
from psychics.concept.container import AbilityContainer
from psychics.concept.psychic_concept import PsychicConcept
from psychics.config.binder import bind_config
from psychics.config.loader import load_config_file
from psychics.config.schema import FieldKind, FieldSpec
from psychics.events.bus import EventBus
from psychics.logger import get_logger

log = get_logger(__name__)

PSYCHIC_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("name", FieldKind.STRING, required=True),
    FieldSpec("display_name", FieldKind.STRING),
    FieldSpec("description", FieldKind.STRING_LIST, default=()),
)

Implementation = Union[type[Ability], AbilityContainer]


def build_psychic(
    config: Mapping[str, object],
    implementations: Mapping[str, Implementation],
    *,
    event_bus: Optional[EventBus] = None,
    strict_templates: bool = False,
) -> PsychicConcept:
    """Create a psychic from a configuration mapping and load its abilities.

    ``implementations`` maps ability names to runtime classes (or prepared
    containers for abilities that need extra fields or hooks).
    """
    result = bind_config(config, PSYCHIC_SCHEMA, owner=str(config.get("name", "<psychic>")))
    result.raise_for_errors()
    values = result.values
    psychic = PsychicConcept(
        values["name"],
        display_name=values.get("display_name"),
        description=values.get("description", ()),
    )
    for name, implementation in implementations.items():
        if isinstance(implementation, AbilityContainer):
            container = implementation
        else:
            container = AbilityContainer(name, implementation)
        psychic.add_container(container)
    psychic.load_abilities(config, event_bus=event_bus, strict_templates=strict_templates)
    log.info(
        "Psychic '%s' ready with %d/%d abilities",
        psychic.name,
        len(psychic.ready_containers()),
        len(psychic.registry),
    )
    return psychic


def load_psychic(
    path: Union[Path, str],
    implementations: Mapping[str, Implementation],
    *,
    event_bus: Optional[EventBus] = None,
    strict_templates: bool = False,
) -> PsychicConcept:
    config = load_config_file(path)
    return build_psychic(
        config, implementations, event_bus=event_bus, strict_templates=strict_templates
    )
