# Simulation clock: the host advances abilities in discrete ticks.
TICKS_PER_SECOND = 20

# Tooltip title layout: display name left-aligned, ability type right-aligned.
TOOLTIP_TITLE_NAME_WIDTH = 16
TOOLTIP_TITLE_TYPE_WIDTH = 16

# Stat block labels and units, in display order.
STAT_COOLDOWN = "재사용 대기시간"
STAT_COST = "마나 소모"
STAT_CASTING = "시전 시간"
STAT_CHANNELING = "집중 시간"
STAT_DURATION = "지속 시간"
STAT_RANGE = "사거리"
STAT_HEALING = "치유량"
STAT_DAMAGE = "피해량"

UNIT_SECONDS = "초"
UNIT_BLOCKS = "블록"

# Environment variable consulted by psychics.logger when no level is given.
LOG_LEVEL_ENV = "PSYCHICS_LOG_LEVEL"


def ticks_to_seconds(ticks: int) -> float:
    return ticks / float(TICKS_PER_SECOND)

# Live state lines appended by the tooltip system.
STATE_COOLDOWN_REMAINING = "남은 재사용 대기시간"
STATE_CASTING = "시전 중"
STATE_TOGGLE_ON = "활성화됨"
