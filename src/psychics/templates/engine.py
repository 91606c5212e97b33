"""Two-phase placeholder rendering for ability text.

``$name`` placeholders are config variables. They are rendered once, when a
concept is initialized, against the concept's own bound values.

``<name>`` placeholders are internal templates. They are rendered on every
tooltip request against a map built from live timing fields and caster
statistics, and never modify the concept.

Unresolved placeholders are left verbatim and reported on the result. With
``strict=True`` they raise :class:`TemplateResolutionError` instead. Both
phases leave the other phase's syntax untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

from psychics.errors import TemplateResolutionError, TemplateResolutionWarning
from psychics.logger import get_logger

log = get_logger(__name__)

_NAME = r"[A-Za-z][A-Za-z0-9_]*(?:-[A-Za-z0-9_]+)*"
CONFIG_VARIABLE = re.compile(r"\$(" + _NAME + r")")
INTERNAL_TEMPLATE = re.compile(r"<(" + _NAME + r")>")


@dataclass(frozen=True, slots=True)
class RenderResult:
    lines: tuple[str, ...]
    unresolved: tuple[TemplateResolutionWarning, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.unresolved


def format_value(value: Any) -> str:
    """Text form of a template value; floats keep one decimal place minimum."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(item) for item in value)
    return str(value)


def render_config_variables(
    lines: Iterable[str], variables: Mapping[str, Any], *, strict: bool = False
) -> RenderResult:
    return _render(lines, variables, CONFIG_VARIABLE, "$", strict)


def render_internal_templates(
    lines: Iterable[str], templates: Mapping[str, Any], *, strict: bool = False
) -> RenderResult:
    return _render(lines, templates, INTERNAL_TEMPLATE, "<>", strict)


def _render(lines, values, pattern: re.Pattern, syntax: str, strict: bool) -> RenderResult:
    rendered: list[str] = []
    unresolved: list[TemplateResolutionWarning] = []
    for line in lines:
        def _substitute(match: re.Match) -> str:
            name = match.group(1)
            if name in values:
                return format_value(values[name])
            unresolved.append(TemplateResolutionWarning(name=name, line=line, syntax=syntax))
            return match.group(0)

        rendered.append(pattern.sub(_substitute, line))
    if unresolved:
        if strict:
            raise TemplateResolutionError(unresolved)
        log.debug(
            "Left %d unresolved '%s' placeholder(s): %s",
            len(unresolved),
            syntax,
            ", ".join(sorted({w.name for w in unresolved})),
        )
    return RenderResult(lines=tuple(rendered), unresolved=tuple(unresolved))
