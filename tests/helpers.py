from __future__ import annotations

from typing import Any

from esper import World

from psychics.abilities.base import Ability, ActiveAbility
from psychics.components.ability_list_owner import AbilityListOwner
from psychics.concept.ability_concept import AbilityConcept
from psychics.concept.container import AbilityContainer
from psychics.concept.psychic_concept import PsychicConcept
from psychics.factories.abilities import create_ability_instance


def ability_config(**fields: Any) -> dict[str, Any]:
    """Minimal valid ability section; keyword underscores become config hyphens."""
    config: dict[str, Any] = {"type": "ACTIVE", "description": ["A test ability."]}
    for name, value in fields.items():
        config[name.replace("_", "-")] = value
    return config


def make_concept(
    config: dict[str, Any] | None = None,
    *,
    name: str = "test",
    ability_class: type[Ability] = ActiveAbility,
    psychic: PsychicConcept | None = None,
    **container_kwargs: Any,
) -> AbilityConcept:
    psychic = psychic or PsychicConcept("tester")
    container = AbilityContainer(name, ability_class, **container_kwargs)
    psychic.add_container(container)
    return container.load(psychic, config if config is not None else ability_config())


class RecordingAbility(ActiveAbility):
    """Active ability that records every hook call as (hook, owner) tuples."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, int]] = []

    def on_attach(self, world, entity, owner_entity):
        self.calls.append(("attach", owner_entity))

    def on_cast_start(self, world, entity, owner_entity):
        self.calls.append(("cast_start", owner_entity))

    def on_cast(self, world, entity, owner_entity):
        self.calls.append(("cast", owner_entity))

    def on_interrupt(self, world, entity, owner_entity):
        self.calls.append(("interrupt", owner_entity))

    def on_toggle(self, world, entity, owner_entity, enabled):
        self.calls.append(("toggle_on" if enabled else "toggle_off", owner_entity))

    def on_expire(self, world, entity, owner_entity):
        self.calls.append(("expire", owner_entity))


def spawn_caster_with_ability(
    world: World,
    config: dict[str, Any] | None = None,
    *,
    ability_class: type[Ability] = RecordingAbility,
    components: tuple[object, ...] = (),
) -> tuple[int, int]:
    """Create a caster entity holding one freshly loaded ability; returns (caster, ability)."""
    caster = world.create_entity(AbilityListOwner(), *components)
    psychic = PsychicConcept("caster")
    container = AbilityContainer("test", ability_class)
    psychic.add_container(container)
    container.load(psychic, config if config is not None else ability_config())
    ability_entity = create_ability_instance(world, container, caster)
    return caster, ability_entity
