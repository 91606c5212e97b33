from __future__ import annotations

from esper import World

from psychics.abilities.base import ActiveAbility
from psychics.components.ability_casting import AbilityCasting
from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_duration import AbilityDuration
from psychics.components.ability_instance import AbilityInstance
from psychics.components.ability_toggle import AbilityToggle
from psychics.components.ability_type import AbilityType
from psychics.components.held_item import HeldItem
from psychics.components.mana import Mana
from psychics.events.bus import (
    EventBus,
    EVENT_ABILITY_CAST_REJECTED,
    EVENT_ABILITY_CAST_REQUEST,
    EVENT_ABILITY_CAST_STARTED,
    EVENT_ABILITY_EXECUTE,
    EVENT_ABILITY_EXPIRED,
    EVENT_ABILITY_INTERRUPT_REQUEST,
    EVENT_ABILITY_INTERRUPTED,
    EVENT_ABILITY_TOGGLED,
    EVENT_MANA_CHANGED,
    EVENT_TICK,
)
from psychics.logger import get_logger

log = get_logger(__name__)

REJECT_PASSIVE = "passive"
REJECT_COOLDOWN = "cooldown"
REJECT_CASTING = "casting"
REJECT_WAND = "wand"
REJECT_MANA = "mana"
REJECT_NOT_CASTING = "not_casting"
REJECT_UNINTERRUPTIBLE = "uninterruptible"


class AbilityCastingSystem:
    """Drives casting windows, channel interrupts, toggles and effect durations.

    Per tick, casting windows advance first (a finished window executes the
    ability), then lingering durations count down. Cooldowns are owned by
    :class:`AbilityCooldownSystem`.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        # Hosts may number ticks from 0; anything armed before the first tick counts on it.
        self.current_tick = -1
        event_bus.subscribe(EVENT_ABILITY_CAST_REQUEST, self.on_cast_request)
        event_bus.subscribe(EVENT_ABILITY_INTERRUPT_REQUEST, self.on_interrupt_request)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_cast_request(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        instance = self._get_instance(ability_entity)
        if instance is None:
            return
        owner_entity = instance.owner_entity
        concept = instance.concept

        reason = self._rejection_reason(ability_entity, instance)
        if reason is not None:
            self.event_bus.emit(
                EVENT_ABILITY_CAST_REJECTED,
                ability_entity=ability_entity,
                owner_entity=owner_entity,
                reason=reason,
            )
            return

        if concept.type is AbilityType.TOGGLE:
            self._toggle(ability_entity, instance)
            return

        self._spend_mana(owner_entity, concept.cost)
        if concept.casting_ticks > 0:
            self.world.add_component(
                ability_entity,
                AbilityCasting(
                    remaining_ticks=concept.casting_ticks,
                    total_ticks=concept.casting_ticks,
                    channeling=concept.interruptible,
                ),
            )
            if isinstance(instance.ability, ActiveAbility):
                instance.ability.on_cast_start(self.world, ability_entity, owner_entity)
            self.event_bus.emit(
                EVENT_ABILITY_CAST_STARTED,
                ability_entity=ability_entity,
                owner_entity=owner_entity,
                ticks=concept.casting_ticks,
                channeling=concept.interruptible,
            )
            return
        self._execute(ability_entity, instance)

    def on_interrupt_request(self, sender, **payload) -> None:
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        instance = self._get_instance(ability_entity)
        if instance is None:
            return
        casting = self._get_casting(ability_entity)
        if casting is None or not casting.channeling:
            reason = REJECT_NOT_CASTING if casting is None else REJECT_UNINTERRUPTIBLE
            self.event_bus.emit(
                EVENT_ABILITY_CAST_REJECTED,
                ability_entity=ability_entity,
                owner_entity=instance.owner_entity,
                reason=reason,
            )
            return
        self.world.remove_component(ability_entity, AbilityCasting)
        if isinstance(instance.ability, ActiveAbility):
            instance.ability.on_interrupt(self.world, ability_entity, instance.owner_entity)
        self.event_bus.emit(
            EVENT_ABILITY_INTERRUPTED,
            ability_entity=ability_entity,
            owner_entity=instance.owner_entity,
            remaining=casting.remaining_ticks,
        )

    def on_tick(self, sender, **payload) -> None:
        tick = payload.get("tick")
        self.current_tick = int(tick) if tick is not None else self.current_tick + 1

        finished: list[int] = []
        for ability_entity, casting in list(self.world.get_component(AbilityCasting)):
            casting.remaining_ticks = max(0, casting.remaining_ticks - 1)
            if casting.remaining_ticks == 0:
                finished.append(ability_entity)
        for ability_entity in finished:
            self.world.remove_component(ability_entity, AbilityCasting)
            instance = self._get_instance(ability_entity)
            if instance is not None:
                self._execute(ability_entity, instance)

        expired: list[int] = []
        for ability_entity, duration in list(self.world.get_component(AbilityDuration)):
            # Durations armed during this tick start counting on the next one.
            if duration.started_tick == self.current_tick:
                continue
            duration.remaining_ticks = max(0, duration.remaining_ticks - 1)
            if duration.remaining_ticks == 0:
                expired.append(ability_entity)
        for ability_entity in expired:
            self.world.remove_component(ability_entity, AbilityDuration)
            instance = self._get_instance(ability_entity)
            if instance is None:
                continue
            instance.ability.on_expire(self.world, ability_entity, instance.owner_entity)
            self.event_bus.emit(
                EVENT_ABILITY_EXPIRED,
                ability_entity=ability_entity,
                owner_entity=instance.owner_entity,
            )

    def _execute(self, ability_entity: int, instance: AbilityInstance) -> None:
        concept = instance.concept
        if isinstance(instance.ability, ActiveAbility):
            instance.ability.on_cast(self.world, ability_entity, instance.owner_entity)
        if concept.duration_ticks > 0:
            self.world.add_component(
                ability_entity,
                AbilityDuration(remaining_ticks=concept.duration_ticks, started_tick=self.current_tick),
            )
        log.debug("Ability '%s' executed by entity %s", concept.name, instance.owner_entity)
        self.event_bus.emit(
            EVENT_ABILITY_EXECUTE,
            ability_entity=ability_entity,
            owner_entity=instance.owner_entity,
            tick=self.current_tick,
        )

    def _toggle(self, ability_entity: int, instance: AbilityInstance) -> None:
        toggle = self._ensure_toggle(ability_entity)
        toggle.enabled = not toggle.enabled
        if toggle.enabled:
            self._spend_mana(instance.owner_entity, instance.concept.cost)
        instance.ability.on_toggle(self.world, ability_entity, instance.owner_entity, toggle.enabled)
        self.event_bus.emit(
            EVENT_ABILITY_TOGGLED,
            ability_entity=ability_entity,
            owner_entity=instance.owner_entity,
            enabled=toggle.enabled,
            tick=self.current_tick,
        )

    def _rejection_reason(self, ability_entity: int, instance: AbilityInstance) -> str | None:
        concept = instance.concept
        if concept.type is AbilityType.PASSIVE:
            return REJECT_PASSIVE
        if self._get_casting(ability_entity) is not None:
            return REJECT_CASTING
        cooldown = self._get_cooldown(ability_entity)
        if cooldown is not None and cooldown.remaining_ticks > 0:
            return REJECT_COOLDOWN
        if not concept.matches_wand(self._held_item(instance.owner_entity)):
            return REJECT_WAND
        turning_off = (
            concept.type is AbilityType.TOGGLE and self._ensure_toggle(ability_entity).enabled
        )
        if not turning_off:
            mana = self._get_mana(instance.owner_entity)
            if mana is not None and not mana.can_afford(concept.cost):
                return REJECT_MANA
        return None

    def _spend_mana(self, owner_entity: int, cost: float) -> None:
        if cost <= 0:
            return
        mana = self._get_mana(owner_entity)
        if mana is None:
            return
        mana.current = max(0.0, mana.current - cost)
        self.event_bus.emit(EVENT_MANA_CHANGED, entity=owner_entity, current=mana.current, delta=-cost)

    def _held_item(self, owner_entity: int):
        try:
            return self.world.component_for_entity(owner_entity, HeldItem).item
        except KeyError:
            return None

    def _ensure_toggle(self, ability_entity: int) -> AbilityToggle:
        try:
            return self.world.component_for_entity(ability_entity, AbilityToggle)
        except KeyError:
            toggle = AbilityToggle()
            self.world.add_component(ability_entity, toggle)
            return toggle

    def _get_instance(self, ability_entity: int) -> AbilityInstance | None:
        try:
            return self.world.component_for_entity(ability_entity, AbilityInstance)
        except KeyError:
            return None

    def _get_casting(self, ability_entity: int) -> AbilityCasting | None:
        try:
            return self.world.component_for_entity(ability_entity, AbilityCasting)
        except KeyError:
            return None

    def _get_cooldown(self, ability_entity: int) -> AbilityCooldown | None:
        try:
            return self.world.component_for_entity(ability_entity, AbilityCooldown)
        except KeyError:
            return None

    def _get_mana(self, owner_entity: int) -> Mana | None:
        try:
            return self.world.component_for_entity(owner_entity, Mana)
        except KeyError:
            return None
