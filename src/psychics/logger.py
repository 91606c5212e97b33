"""Package logging helpers.

Usage
-----
    from psychics.logger import get_logger

    log = get_logger(__name__)
    log.info("Loaded %d abilities", count)

Every module logs through a child of the ``psychics`` logger. Library code
never installs handlers; applications either configure logging themselves or
call ``configure_logging`` once, which attaches a console handler and reads
the level from its argument or the ``PSYCHICS_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from psychics.constants import LOG_LEVEL_ENV

ROOT_LOGGER_NAME = "psychics"
DEFAULT_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

_configured = False


def _level_from_env() -> int:
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return DEFAULT_LEVEL
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else DEFAULT_LEVEL


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """Attach the console handler once and (re)apply the package log level."""
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level if level is not None else _level_from_env())
    return root


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
