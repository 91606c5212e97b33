from esper import World

from psychics.abilities.base import Ability
from psychics.components.ability_casting import AbilityCasting
from psychics.components.ability_cooldown import AbilityCooldown
from psychics.components.ability_duration import AbilityDuration
from psychics.components.ability_instance import AbilityInstance
from psychics.components.ability_toggle import AbilityToggle
from psychics.components.held_item import HeldItem
from psychics.components.item_stack import ItemStack
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
    EVENT_ABILITY_READY,
    EVENT_ABILITY_TOGGLED,
    EVENT_MANA_CHANGED,
    EVENT_TICK,
)
from psychics.systems.ability_casting_system import AbilityCastingSystem
from psychics.systems.ability_cooldown_system import AbilityCooldownSystem

from tests.helpers import ability_config, spawn_caster_with_ability


class _Harness:
    def __init__(self, config=None, *, ability_class=None, components=(), cooldown_first=False):
        self.world = World()
        self.bus = EventBus()
        # Subscription order must not change timing.
        if cooldown_first:
            AbilityCooldownSystem(self.world, self.bus)
            AbilityCastingSystem(self.world, self.bus)
        else:
            AbilityCastingSystem(self.world, self.bus)
            AbilityCooldownSystem(self.world, self.bus)
        kwargs = {"components": components}
        if ability_class is not None:
            kwargs["ability_class"] = ability_class
        self.caster, self.ability = spawn_caster_with_ability(self.world, config, **kwargs)
        self.tick_number = 0
        self.events: list[tuple[str, dict]] = []
        for name in (
            EVENT_ABILITY_CAST_REJECTED,
            EVENT_ABILITY_CAST_STARTED,
            EVENT_ABILITY_EXECUTE,
            EVENT_ABILITY_EXPIRED,
            EVENT_ABILITY_INTERRUPTED,
            EVENT_ABILITY_READY,
            EVENT_ABILITY_TOGGLED,
            EVENT_MANA_CHANGED,
        ):
            self.bus.subscribe(name, self._recorder(name))

    def _recorder(self, name):
        def _record(sender, **payload):
            self.events.append((name, payload))
        return _record

    def cast(self):
        self.bus.emit(EVENT_ABILITY_CAST_REQUEST, ability_entity=self.ability, owner_entity=self.caster)

    def interrupt(self):
        self.bus.emit(EVENT_ABILITY_INTERRUPT_REQUEST, ability_entity=self.ability)

    def tick(self, count=1):
        for _ in range(count):
            self.tick_number += 1
            self.bus.emit(EVENT_TICK, tick=self.tick_number)

    def names(self):
        return [name for name, _ in self.events]

    def rejections(self):
        return [payload["reason"] for name, payload in self.events if name == EVENT_ABILITY_CAST_REJECTED]

    @property
    def calls(self):
        return self.world.component_for_entity(self.ability, AbilityInstance).ability.calls

    def cooldown(self):
        return self.world.component_for_entity(self.ability, AbilityCooldown).remaining_ticks


def test_instant_cast_executes_and_arms_cooldown():
    h = _Harness(ability_config(cooldown_ticks=40))
    h.cast()
    assert h.names() == [EVENT_ABILITY_EXECUTE]
    assert h.calls[-1] == ("cast", h.caster)
    assert h.cooldown() == 40

    h.tick(39)
    assert h.cooldown() == 1
    h.cast()
    assert h.rejections() == ["cooldown"]

    h.tick()
    assert h.cooldown() == 0
    assert h.names()[-1] == EVENT_ABILITY_READY


def test_casting_window_executes_after_casting_ticks():
    for cooldown_first in (False, True):
        h = _Harness(ability_config(casting_ticks=20, cooldown_ticks=40), cooldown_first=cooldown_first)
        h.cast()
        assert h.names() == [EVENT_ABILITY_CAST_STARTED]
        assert h.events[0][1]["channeling"] is False
        h.tick(19)
        assert EVENT_ABILITY_EXECUTE not in h.names()
        assert h.world.component_for_entity(h.ability, AbilityCasting).remaining_ticks == 1
        h.tick()
        assert EVENT_ABILITY_EXECUTE in h.names()
        assert not h.world.has_component(h.ability, AbilityCasting)
        # Cooldown armed on tick 20 starts counting on tick 21.
        assert h.cooldown() == 40
        h.tick(40)
        assert h.cooldown() == 0


def test_second_cast_while_casting_is_rejected():
    h = _Harness(ability_config(casting_ticks=10))
    h.cast()
    h.cast()
    assert h.rejections() == ["casting"]


def test_channeling_cast_can_be_interrupted():
    h = _Harness(ability_config(casting_ticks=20, interruptible=True, cooldown_ticks=40))
    h.cast()
    assert h.events[0][1]["channeling"] is True
    h.tick(5)
    h.interrupt()
    assert h.names()[-1] == EVENT_ABILITY_INTERRUPTED
    assert h.events[-1][1]["remaining"] == 15
    assert ("interrupt", h.caster) in h.calls
    h.tick(30)
    assert EVENT_ABILITY_EXECUTE not in h.names()
    # An interrupted channel does not go on cooldown.
    assert h.cooldown() == 0


def test_hard_cast_ignores_interrupts():
    h = _Harness(ability_config(casting_ticks=20))
    h.cast()
    h.interrupt()
    assert h.rejections() == ["uninterruptible"]
    h.tick(20)
    assert EVENT_ABILITY_EXECUTE in h.names()


def test_interrupt_without_cast_is_rejected():
    h = _Harness(ability_config(interruptible=True))
    h.interrupt()
    assert h.rejections() == ["not_casting"]


def test_passive_abilities_cannot_be_cast():
    h = _Harness(ability_config(type="PASSIVE"), ability_class=Ability)
    h.cast()
    assert h.rejections() == ["passive"]


def test_mana_is_checked_and_spent():
    h = _Harness(ability_config(cost=10.0), components=(Mana(current=15.0, maximum=30.0),))
    h.cast()
    mana = h.world.component_for_entity(h.caster, Mana)
    assert mana.current == 5.0
    assert (EVENT_MANA_CHANGED, {"entity": h.caster, "current": 5.0, "delta": -10.0}) in h.events
    h.cast()
    assert h.rejections() == ["mana"]
    assert mana.current == 5.0


def test_wand_gates_activation():
    held = HeldItem()
    h = _Harness(ability_config(wand="blaze_rod"), components=(held,))
    h.cast()
    assert h.rejections() == ["wand"]
    held.item = ItemStack(material="BLAZE_ROD", amount=1)
    h.cast()
    assert EVENT_ABILITY_EXECUTE in h.names()


def test_toggle_flips_and_charges_only_when_enabling():
    h = _Harness(
        ability_config(type="TOGGLE", cost=5.0, cooldown_ticks=2),
        ability_class=_ToggleAbility,
        components=(Mana(current=5.0, maximum=5.0),),
    )
    toggle = h.world.component_for_entity(h.ability, AbilityToggle)
    h.cast()
    assert toggle.enabled is True
    assert h.world.component_for_entity(h.caster, Mana).current == 0.0
    h.tick(2)
    # Turning off needs no mana.
    h.cast()
    assert toggle.enabled is False
    toggled = [p["enabled"] for name, p in h.events if name == EVENT_ABILITY_TOGGLED]
    assert toggled == [True, False]
    assert [call for call, _ in h.calls if call.startswith("toggle")] == ["toggle_on", "toggle_off"]


def test_duration_expires_after_duration_ticks():
    h = _Harness(ability_config(duration_ticks=3))
    h.cast()
    assert h.world.component_for_entity(h.ability, AbilityDuration).remaining_ticks == 3
    h.tick(2)
    assert EVENT_ABILITY_EXPIRED not in h.names()
    h.tick()
    assert h.names()[-1] == EVENT_ABILITY_EXPIRED
    assert ("expire", h.caster) in h.calls
    assert not h.world.has_component(h.ability, AbilityDuration)


class _ToggleAbility(Ability):
    def __init__(self):
        super().__init__()
        self.calls = []

    def on_toggle(self, world, entity, owner_entity, enabled):
        self.calls.append(("toggle_on" if enabled else "toggle_off", owner_entity))


def test_timers_count_from_a_zero_based_first_tick():
    h = _Harness(ability_config(cooldown_ticks=2, duration_ticks=2))
    h.cast()
    for tick in (0, 1):
        h.bus.emit(EVENT_TICK, tick=tick)
    assert h.cooldown() == 0
    assert EVENT_ABILITY_READY in h.names()
    assert EVENT_ABILITY_EXPIRED in h.names()
