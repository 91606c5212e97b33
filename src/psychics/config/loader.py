from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from psychics.errors import ConfigFileError


def load_config_file(path: Path | str) -> dict[str, Any]:
    """Read a JSON configuration file whose top level is an object."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as exc:
        raise ConfigFileError(str(path), "file not found") from exc
    except json.JSONDecodeError as exc:
        raise ConfigFileError(str(path), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(payload, dict):
        raise ConfigFileError(str(path), "top level must be an object")
    return payload


def section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Nested configuration section, or an empty mapping when absent."""
    value = config.get(key)
    if isinstance(value, Mapping):
        return value
    return {}
