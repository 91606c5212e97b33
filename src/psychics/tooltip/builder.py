from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from psychics.errors import TemplateResolutionWarning
from psychics.templates.engine import format_value, render_internal_templates


@dataclass(frozen=True, slots=True)
class TooltipStat:
    label: str
    value: Any
    unit: Optional[str] = None

    def render(self) -> str:
        text = f"{self.label}: {format_value(self.value)}"
        if self.unit:
            text = f"{text} {self.unit}"
        return text


@dataclass(frozen=True, slots=True)
class TooltipText:
    """Rendered tooltip: title, stat lines, description, then extension lines."""

    title: str
    stats: tuple[str, ...]
    description: tuple[str, ...]
    footer: tuple[str, ...] = ()
    unresolved: tuple[TemplateResolutionWarning, ...] = ()

    @property
    def lines(self) -> tuple[str, ...]:
        return (self.title, *self.stats, *self.description, *self.footer)

    def __str__(self) -> str:
        return "\n".join(self.lines)


class TooltipBuilder:
    """Collects tooltip sections; ``<name>`` templates are applied by :meth:`build`."""

    def __init__(self) -> None:
        self.title = ""
        self.stats: list[TooltipStat] = []
        self.description: list[str] = []
        self.footer: list[str] = []
        self.templates: dict[str, Any] = {}

    def add_stats(self, label: str, value: Any, unit: Optional[str] = None) -> None:
        # Zero-valued numbers carry no information on a tooltip.
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return
        self.stats.append(TooltipStat(label, value, unit))

    def add_description(self, lines: Iterable[str]) -> None:
        self.description.extend(lines)

    def add_footer(self, *lines: str) -> None:
        self.footer.extend(lines)

    def add_templates(self, templates: Mapping[str, Any]) -> None:
        self.templates.update(templates)

    def copy(self) -> "TooltipBuilder":
        clone = TooltipBuilder()
        clone.title = self.title
        clone.stats = list(self.stats)
        clone.description = list(self.description)
        clone.footer = list(self.footer)
        clone.templates = dict(self.templates)
        return clone

    def build(self, *, strict: bool = False) -> TooltipText:
        stats = render_internal_templates(
            (stat.render() for stat in self.stats), self.templates, strict=strict
        )
        description = render_internal_templates(self.description, self.templates, strict=strict)
        footer = render_internal_templates(self.footer, self.templates, strict=strict)
        return TooltipText(
            title=self.title,
            stats=stats.lines,
            description=description.lines,
            footer=footer.lines,
            unresolved=stats.unresolved + description.unresolved + footer.unresolved,
        )
