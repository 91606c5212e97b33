from enum import Enum, auto


class AbilityType(Enum):
    """How an ability is triggered.

    PASSIVE applies automatically, ACTIVE is cast on demand, TOGGLE is
    switched on and off by its owner.
    """
    PASSIVE = auto()
    ACTIVE = auto()
    TOGGLE = auto()
