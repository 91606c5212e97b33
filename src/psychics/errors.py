from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence


class PsychicsError(Exception):
    """Base class for every error raised while loading or rendering abilities."""


class ViolationKind(Enum):
    MISSING_FIELD = auto()
    OUT_OF_RANGE = auto()
    TYPE_MISMATCH = auto()


@dataclass(frozen=True, slots=True)
class FieldViolation:
    """One configuration problem found while binding a single field."""

    kind: ViolationKind
    key: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind.name}({self.key!r}): {self.message}"


class ConfigValidationError(PsychicsError):
    """Raised when a configuration section cannot be bound to a concept.

    Carries every violation found so the whole section can be fixed in one
    pass. ``kind`` and ``key`` mirror the first violation.
    """

    def __init__(self, owner: str, violations: Sequence[FieldViolation]) -> None:
        if not violations:
            raise ValueError("ConfigValidationError requires at least one violation")
        self.owner = owner
        self.violations: tuple[FieldViolation, ...] = tuple(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid configuration for '{owner}': {details}")

    @property
    def kind(self) -> ViolationKind:
        return self.violations[0].kind

    @property
    def key(self) -> str:
        return self.violations[0].key

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(v.key for v in self.violations)


class InstantiationError(PsychicsError):
    """The runtime implementation bound to a container cannot be constructed."""

    def __init__(self, container_name: str, cause: BaseException) -> None:
        self.container_name = container_name
        self.cause = cause
        super().__init__(f"Cannot instantiate ability '{container_name}': {cause!r}")


class ConceptStateError(PsychicsError):
    """A concept lifecycle step was attempted out of order or twice."""


@dataclass(frozen=True, slots=True)
class TemplateResolutionWarning:
    """Record of a placeholder that could not be resolved during rendering."""

    name: str
    line: str
    syntax: str  # "$" for config variables, "<>" for internal templates


class TemplateResolutionError(PsychicsError):
    """Raised by strict rendering when placeholders remain unresolved."""

    def __init__(self, unresolved: Sequence[TemplateResolutionWarning]) -> None:
        self.unresolved = tuple(unresolved)
        names = ", ".join(sorted({w.name for w in self.unresolved}))
        super().__init__(f"Unresolved template placeholders: {names}")


class ConfigFileError(PsychicsError):
    """A configuration file could not be read or is not a JSON object."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load configuration '{path}': {reason}")


class InitializeHookError(PsychicsError):
    """A container's ``on_initialize`` hook raised while a concept was loading."""

    def __init__(self, ability_name: str, cause: BaseException) -> None:
        self.ability_name = ability_name
        self.cause = cause
        super().__init__(f"Initialize hook of ability '{ability_name}' failed: {cause!r}")
