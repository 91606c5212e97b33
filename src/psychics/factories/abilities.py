from __future__ import annotations

from esper import World

from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_instance import AbilityInstance
from psychics.components.ability_list_owner import AbilityListOwner
from psychics.components.ability_toggle import AbilityToggle
from psychics.components.ability_type import AbilityType
from psychics.concept.container import AbilityContainer
from psychics.concept.psychic_concept import PsychicConcept


def create_ability_instance(world: World, container: AbilityContainer, owner_entity: int) -> int:
    """Spawn a runtime ability entity for ``owner_entity`` from a loaded container."""
    ability = container.create_instance()
    concept = ability.concept
    components: list[object] = [
        AbilityInstance(concept=concept, ability=ability, owner_entity=owner_entity),
        AbilityCooldown(),
    ]
    if concept.type is AbilityType.TOGGLE:
        components.append(AbilityToggle())
    ability_entity = world.create_entity(*components)

    try:
        owner = world.component_for_entity(owner_entity, AbilityListOwner)
    except KeyError:
        world.add_component(owner_entity, AbilityListOwner(ability_entities=[ability_entity]))
    else:
        owner.ability_entities.append(ability_entity)
    ability.on_attach(world, ability_entity, owner_entity)
    return ability_entity


def grant_psychic(world: World, psychic: PsychicConcept, owner_entity: int) -> list[int]:
    """Create one instance per ready ability of ``psychic``."""
    return [
        create_ability_instance(world, container, owner_entity)
        for container in psychic.ready_containers()
    ]


def remove_ability_instances(world: World, owner_entity: int) -> None:
    """Discard every ability instance held by ``owner_entity``."""
    try:
        owner = world.component_for_entity(owner_entity, AbilityListOwner)
    except KeyError:
        return
    for ability_entity in list(owner.ability_entities):
        if world.entity_exists(ability_entity):
            world.delete_entity(ability_entity, immediate=True)
    owner.ability_entities.clear()
