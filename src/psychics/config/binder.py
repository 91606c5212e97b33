from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from psychics.config.schema import FieldKind, FieldSpec, Schema
from psychics.errors import ConfigValidationError, FieldViolation, ViolationKind
from psychics.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BindResult:
    """Outcome of binding one configuration section against a schema.

    ``values`` maps attribute names to converted values for every field that
    bound cleanly (or fell back to its default). ``violations`` lists every
    field that did not.
    """

    owner: str
    values: Mapping[str, Any]
    violations: tuple[FieldViolation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def raise_for_errors(self) -> None:
        if self.violations:
            raise ConfigValidationError(self.owner, self.violations)


def bind_config(section: Mapping[str, Any], schema: Schema, *, owner: str) -> BindResult:
    """Convert and validate ``section`` against every field in ``schema``.

    All fields are processed before returning so that a single load reports
    every problem in the section.
    """
    values: dict[str, Any] = {}
    violations: list[FieldViolation] = []
    for spec in schema:
        key = spec.config_key
        raw = section.get(key)
        if raw is None:
            if spec.required:
                violations.append(
                    FieldViolation(ViolationKind.MISSING_FIELD, key, "required key is missing")
                )
            elif spec.has_default:
                values[spec.attr] = _copy_default(spec.default)
            continue
        try:
            value = convert_value(spec, raw)
        except (TypeError, ValueError) as exc:
            violations.append(FieldViolation(ViolationKind.TYPE_MISMATCH, key, str(exc)))
            continue
        problems = [msg for msg in (v.check(value) for v in spec.validators) if msg]
        if problems:
            for message in problems:
                violations.append(FieldViolation(ViolationKind.OUT_OF_RANGE, key, message))
            continue
        values[spec.attr] = value
    if violations:
        log.warning(
            "Configuration for '%s' has %d problem(s): %s",
            owner,
            len(violations),
            ", ".join(f"{v.kind.name}:{v.key}" for v in violations),
        )
    return BindResult(owner=owner, values=values, violations=tuple(violations))


def convert_value(spec: FieldSpec, raw: Any) -> Any:
    kind = spec.kind
    if kind is FieldKind.STRING:
        if not isinstance(raw, str):
            raise TypeError(f"expected a string, got {type(raw).__name__}")
        return raw
    if kind is FieldKind.INTEGER:
        if isinstance(raw, bool):
            raise TypeError("expected an integer, got bool")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        raise TypeError(f"expected an integer, got {type(raw).__name__}")
    if kind is FieldKind.FLOAT:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise TypeError(f"expected a number, got {type(raw).__name__}")
        return float(raw)
    if kind is FieldKind.BOOLEAN:
        if not isinstance(raw, bool):
            raise TypeError(f"expected true or false, got {type(raw).__name__}")
        return raw
    if kind is FieldKind.ENUM:
        return _convert_enum(spec.enum_type, raw)
    if kind is FieldKind.STRING_LIST:
        if isinstance(raw, str):
            return (raw,)
        if isinstance(raw, (list, tuple)) and all(isinstance(item, str) for item in raw):
            return tuple(raw)
        raise TypeError("expected a string or a list of strings")
    # NESTED and ITEM delegate to the collaborator type's own parser.
    return spec.factory(raw)


def _convert_enum(enum_type: type[Enum] | None, raw: Any) -> Enum:
    assert enum_type is not None
    if isinstance(raw, enum_type):
        return raw
    if not isinstance(raw, str):
        raise TypeError(f"expected one of {[m.name for m in enum_type]}, got {type(raw).__name__}")
    try:
        return enum_type[raw.strip().upper()]
    except KeyError as exc:
        raise ValueError(
            f"'{raw}' is not one of {', '.join(m.name for m in enum_type)}"
        ) from exc


def _copy_default(default: Any) -> Any:
    if isinstance(default, list):
        return tuple(default)
    if isinstance(default, dict):
        return dict(default)
    return default
