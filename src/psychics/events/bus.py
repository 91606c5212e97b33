from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems alive without a caller-held reference.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                            # payload: tick=int


# ============================================================================
# LOADING
# ============================================================================
EVENT_ABILITY_LOADED = "ability_loaded"                        # payload: psychic=str, ability=str
EVENT_ABILITY_LOAD_FAILED = "ability_load_failed"              # payload: psychic=str, ability=str, error=PsychicsError


# ============================================================================
# CASTING & COOLDOWN
# ============================================================================
EVENT_ABILITY_CAST_REQUEST = "ability_cast_request"            # payload: ability_entity=int, owner_entity=int
EVENT_ABILITY_CAST_REJECTED = "ability_cast_rejected"          # payload: ability_entity=int, owner_entity=int, reason=str
EVENT_ABILITY_CAST_STARTED = "ability_cast_started"            # payload: ability_entity=int, owner_entity=int, ticks=int, channeling=bool
EVENT_ABILITY_INTERRUPT_REQUEST = "ability_interrupt_request"  # payload: ability_entity=int
EVENT_ABILITY_INTERRUPTED = "ability_interrupted"              # payload: ability_entity=int, owner_entity=int, remaining=int
EVENT_ABILITY_EXECUTE = "ability_execute"                      # payload: ability_entity=int, owner_entity=int
EVENT_ABILITY_EXPIRED = "ability_expired"                      # payload: ability_entity=int, owner_entity=int
EVENT_ABILITY_TOGGLED = "ability_toggled"                      # payload: ability_entity=int, owner_entity=int, enabled=bool
EVENT_ABILITY_READY = "ability_ready"                          # payload: ability_entity=int, owner_entity=int
EVENT_MANA_CHANGED = "mana_changed"                            # payload: entity=int, current=float, delta=float


# ============================================================================
# TOOLTIPS
# ============================================================================
EVENT_TOOLTIP_REQUEST = "tooltip_request"                      # payload: ability_entity=int
EVENT_TOOLTIP_HIDE = "tooltip_hide"                            # payload: none
