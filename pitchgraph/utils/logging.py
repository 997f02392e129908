"""Root logger setup for the PitchGraph core.

``PITCHGRAPH_LOG_LEVEL`` (a level name such as ``debug``) pins the level for
the whole process; otherwise the stored ``debug_logging`` setting decides.
Connection-pool chatter from urllib3 is only shown while debugging.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

LEVEL_ENV_VAR = "PITCHGRAPH_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_TRANSPORT_LOGGERS = ("urllib3",)


def env_level() -> Optional[int]:
    """Level pinned by the environment, or ``None`` when unset or unknown."""
    name = os.environ.get(LEVEL_ENV_VAR, "").strip().upper()
    level = logging.getLevelName(name) if name else None
    return level if isinstance(level, int) else None


def _set_level(level: int) -> int:
    logging.getLogger().setLevel(level)
    transport = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport)
    return level


def configure_root(default_level: int = logging.INFO) -> int:
    """Install a stderr handler once and return the effective level."""
    level = env_level() or default_level
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%H:%M:%S")
    return _set_level(level)


def apply_debug_preference(debug_enabled: bool) -> int:
    pinned = env_level()
    if pinned is not None:
        return _set_level(pinned)
    return _set_level(logging.DEBUG if debug_enabled else logging.INFO)


def env_debug_requested() -> bool:
    pinned = env_level()
    return pinned is not None and pinned <= logging.DEBUG
