from esper import World

from psychics.abilities.base import Ability
from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_instance import AbilityInstance
from psychics.components.ability_list_owner import AbilityListOwner
from psychics.components.ability_toggle import AbilityToggle
from psychics.concept.container import AbilityContainer
from psychics.concept.psychic_concept import PsychicConcept
from psychics.factories.abilities import (
    create_ability_instance,
    grant_psychic,
    remove_ability_instances,
)

from tests.helpers import RecordingAbility, ability_config


def _loaded_psychic():
    psychic = PsychicConcept("pyro")
    psychic.add_container(AbilityContainer("bolt", RecordingAbility))
    psychic.add_container(AbilityContainer("aura", Ability))
    psychic.load_abilities(
        {
            "abilities": {
                "bolt": ability_config(cooldown_ticks=10),
                "aura": ability_config(type="TOGGLE"),
            }
        }
    )
    return psychic


def test_instances_share_concept_but_not_state():
    world = World()
    psychic = _loaded_psychic()
    container = psychic.container("bolt")
    first_caster = world.create_entity()
    second_caster = world.create_entity(AbilityListOwner())

    first = create_ability_instance(world, container, first_caster)
    second = create_ability_instance(world, container, second_caster)

    first_instance = world.component_for_entity(first, AbilityInstance)
    second_instance = world.component_for_entity(second, AbilityInstance)
    assert first_instance.concept is second_instance.concept is container.concept
    assert first_instance.ability is not second_instance.ability
    assert world.component_for_entity(first, AbilityCooldown) is not world.component_for_entity(
        second, AbilityCooldown
    )
    assert world.component_for_entity(first_caster, AbilityListOwner).ability_entities == [first]
    assert world.component_for_entity(second_caster, AbilityListOwner).ability_entities == [second]
    assert first_instance.ability.calls == [("attach", first_caster)]


def test_grant_psychic_creates_one_instance_per_ready_ability():
    world = World()
    caster = world.create_entity(AbilityListOwner())
    entities = grant_psychic(world, _loaded_psychic(), caster)
    assert len(entities) == 2
    assert world.has_component(entities[1], AbilityToggle)
    assert not world.has_component(entities[0], AbilityToggle)


def test_remove_ability_instances_discards_entities():
    world = World()
    caster = world.create_entity(AbilityListOwner())
    entities = grant_psychic(world, _loaded_psychic(), caster)
    remove_ability_instances(world, caster)
    assert world.component_for_entity(caster, AbilityListOwner).ability_entities == []
    assert not any(world.entity_exists(entity) for entity in entities)
