from __future__ import annotations

from esper import World

from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_instance import AbilityInstance
from psychics.events.bus import (
    EventBus,
    EVENT_ABILITY_EXECUTE,
    EVENT_ABILITY_READY,
    EVENT_ABILITY_TOGGLED,
    EVENT_TICK,
)


class AbilityCooldownSystem:
    """Maintains per-ability cooldown timers and resets them on use.

    A cooldown armed during tick N starts counting down on tick N + 1, so an
    ability with ``cooldown_ticks = 40`` is ready again exactly 40 ticks after
    it executed regardless of system subscription order.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        # Hosts may number ticks from 0; anything armed before the first tick counts on it.
        self.current_tick = -1
        event_bus.subscribe(EVENT_ABILITY_EXECUTE, self.on_ability_used)
        event_bus.subscribe(EVENT_ABILITY_TOGGLED, self.on_ability_used)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_ability_used(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        instance = self._get_instance(ability_entity)
        if instance is None:
            return
        state = self._ensure_state(ability_entity)
        state.remaining_ticks = max(0, int(instance.concept.cooldown_ticks))
        tick = payload.get("tick")
        state.started_tick = int(tick) if tick is not None else self.current_tick

    def on_tick(self, sender, **payload) -> None:
        tick = payload.get("tick")
        self.current_tick = int(tick) if tick is not None else self.current_tick + 1
        ready: list[int] = []
        for ability_entity, state in list(self.world.get_component(AbilityCooldown)):
            if state.remaining_ticks <= 0 or state.started_tick == self.current_tick:
                continue
            state.remaining_ticks -= 1
            if state.remaining_ticks == 0:
                ready.append(ability_entity)
        for ability_entity in ready:
            instance = self._get_instance(ability_entity)
            self.event_bus.emit(
                EVENT_ABILITY_READY,
                ability_entity=ability_entity,
                owner_entity=instance.owner_entity if instance is not None else None,
            )

    def remaining(self, ability_entity: int) -> int:
        try:
            state = self.world.component_for_entity(ability_entity, AbilityCooldown)
        except KeyError:
            return 0
        return max(0, int(state.remaining_ticks))

    def _ensure_state(self, ability_entity: int) -> AbilityCooldown:
        try:
            return self.world.component_for_entity(ability_entity, AbilityCooldown)
        except KeyError:
            state = AbilityCooldown()
            self.world.add_component(ability_entity, state)
            return state

    def _get_instance(self, ability_entity: int) -> AbilityInstance | None:
        try:
            return self.world.component_for_entity(ability_entity, AbilityInstance)
        except KeyError:
            return None
