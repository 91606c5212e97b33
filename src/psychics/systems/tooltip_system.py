from __future__ import annotations

from typing import Optional

from esper import World

from psychics import constants as c
from psychics.components.ability_casting import AbilityCasting
from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_instance import AbilityInstance
from psychics.components.ability_toggle import AbilityToggle
from psychics.components.esper_attributes import EsperAttributes
from psychics.components.esper_statistic import StatLookup, zero_stats
from psychics.components.tooltip_state import TooltipState
from psychics.events.bus import (
    EventBus,
    EVENT_ABILITY_CAST_REQUEST,
    EVENT_TOOLTIP_HIDE,
    EVENT_TOOLTIP_REQUEST,
)
from psychics.templates.engine import format_value


class TooltipSystem:
    """Renders ability tooltips on request and exposes them through TooltipState."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._state_entity: Optional[int] = None
        self._state = self._ensure_state()
        self.event_bus.subscribe(EVENT_TOOLTIP_REQUEST, self.on_tooltip_request)
        self.event_bus.subscribe(EVENT_TOOLTIP_HIDE, self.on_hide)
        self.event_bus.subscribe(EVENT_ABILITY_CAST_REQUEST, self.on_hide)

    @property
    def state(self) -> TooltipState:
        return self._state

    def _ensure_state(self) -> TooltipState:
        entries = list(self.world.get_component(TooltipState))
        if entries:
            self._state_entity, state = entries[0]
            return state
        self._state_entity = self.world.create_entity(TooltipState())
        return self.world.component_for_entity(self._state_entity, TooltipState)

    def on_tooltip_request(self, sender, **payload):
        ability_entity = payload.get("ability_entity")
        if ability_entity is None:
            return
        try:
            instance = self.world.component_for_entity(ability_entity, AbilityInstance)
        except KeyError:
            self._hide_tooltip()
            return
        tooltip = instance.concept.render_tooltip(self._stat_lookup(instance.owner_entity))
        lines = list(tooltip.lines[1:])
        lines.extend(self._live_state_lines(ability_entity))
        state = self._state
        state.visible = True
        state.title = tooltip.title
        state.lines = tuple(lines)
        state.target_id = int(ability_entity)

    def on_hide(self, sender, **payload):
        self._hide_tooltip()

    def _hide_tooltip(self) -> None:
        state = self._state
        state.visible = False
        state.title = ""
        state.lines = ()
        state.target_id = None

    def _stat_lookup(self, owner_entity: int) -> StatLookup:
        try:
            attributes = self.world.component_for_entity(owner_entity, EsperAttributes)
        except KeyError:
            return zero_stats
        return attributes.stat_lookup()

    def _live_state_lines(self, ability_entity: int) -> list[str]:
        details: list[str] = []
        try:
            cooldown = self.world.component_for_entity(ability_entity, AbilityCooldown)
        except KeyError:
            cooldown = None
        if cooldown is not None and cooldown.remaining_ticks > 0:
            seconds = c.ticks_to_seconds(cooldown.remaining_ticks)
            details.append(f"{c.STATE_COOLDOWN_REMAINING}: {format_value(seconds)} {c.UNIT_SECONDS}")
        try:
            casting = self.world.component_for_entity(ability_entity, AbilityCasting)
        except KeyError:
            casting = None
        if casting is not None:
            details.append(f"{c.STATE_CASTING}: {int(casting.progress * 100)}%")
        try:
            toggle = self.world.component_for_entity(ability_entity, AbilityToggle)
        except KeyError:
            toggle = None
        if toggle is not None and toggle.enabled:
            details.append(c.STATE_TOGGLE_ON)
        return details
