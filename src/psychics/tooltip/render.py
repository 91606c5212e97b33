from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

from psychics import constants as c
from psychics.components.esper_statistic import StatLookup, zero_stats
from psychics.logger import get_logger
from psychics.tooltip.builder import TooltipBuilder, TooltipText

if TYPE_CHECKING:
    from psychics.concept.ability_concept import AbilityConcept

log = get_logger(__name__)

TooltipHook = Callable[[TooltipBuilder, StatLookup], None]


def format_title(display_name: str, type_name: str) -> str:
    return f"{display_name:<{c.TOOLTIP_TITLE_NAME_WIDTH}}{type_name:>{c.TOOLTIP_TITLE_TYPE_WIDTH}}"


def build_tooltip(concept: AbilityConcept, stats: StatLookup = zero_stats) -> TooltipBuilder:
    """Standard tooltip sections for ``concept``, before any extension hook runs."""
    tooltip = TooltipBuilder()
    tooltip.title = format_title(concept.display_name, concept.type.name)
    tooltip.add_stats(c.STAT_COOLDOWN, concept.cooldown_seconds, c.UNIT_SECONDS)
    tooltip.add_stats(c.STAT_COST, concept.cost)
    casting_label = c.STAT_CHANNELING if concept.interruptible else c.STAT_CASTING
    tooltip.add_stats(casting_label, concept.casting_seconds, c.UNIT_SECONDS)
    tooltip.add_stats(c.STAT_DURATION, concept.duration_seconds, c.UNIT_SECONDS)
    tooltip.add_stats(c.STAT_RANGE, concept.range, c.UNIT_BLOCKS)
    if concept.healing is not None:
        tooltip.add_stats(c.STAT_HEALING, "<healing>")
    if concept.damage is not None:
        tooltip.add_stats(f"{c.STAT_DAMAGE}({concept.damage.type.value})", "<damage>")
    tooltip.add_description(concept.description)
    tooltip.add_templates(concept.template_variables())
    if concept.damage is not None:
        tooltip.add_templates({"damage": stats(concept.damage.stats)})
    if concept.healing is not None:
        tooltip.add_templates({"healing": stats(concept.healing)})
    return tooltip


def call_tooltip_hook(
    hook: TooltipHook, tooltip: TooltipBuilder, stats: StatLookup
) -> tuple[TooltipBuilder, Optional[Exception]]:
    """Run ``hook`` against a copy of ``tooltip``.

    Returns the hook's builder on success, or the untouched original together
    with the error the hook raised.
    """
    candidate = tooltip.copy()
    try:
        hook(candidate, stats)
    except Exception as exc:
        return tooltip, exc
    return candidate, None


def render_tooltip(
    concept: AbilityConcept,
    stats: StatLookup = zero_stats,
    *,
    hook: Optional[TooltipHook] = None,
) -> TooltipText:
    tooltip = build_tooltip(concept, stats)
    if hook is not None:
        tooltip, error = call_tooltip_hook(hook, tooltip, stats)
        if error is not None:
            # Tooltips are cosmetic; a broken extension only loses its own lines.
            log.debug("Tooltip hook for '%s' failed", concept.name, exc_info=error)
    return tooltip.build()
