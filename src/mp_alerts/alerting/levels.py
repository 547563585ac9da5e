"""Alerting – severity level table.

Levels are compared by integer rank only.  Every rank has exactly one
canonical name and vice versa.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any

from mp_alerts.kernel.errors import UnknownLevelError


class Level(IntEnum):
    """Ordered severity levels."""

    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


DEFAULT_COLORS: dict[int, str] = {
    Level.DEBUG: "#eee",  # gray
    Level.INFO: "#0f0",  # green
    Level.WARNING: "#ff0",  # yellow
    Level.ERROR: "#f00",  # red
    Level.CRITICAL: "#f00",  # red
}

_RANKS: frozenset[int] = frozenset(int(level) for level in Level)


def is_level(value: Any) -> bool:
    """Return True if *value* is a valid rank or canonical level name."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value in _RANKS
    if isinstance(value, str):
        return value in Level.__members__
    return False


def rank_of(value: Any) -> int:
    """Return the integer rank for a :class:`Level`, rank or level name.

    Raises
    ------
    UnknownLevelError
        When *value* matches neither a valid rank nor a valid name.
    """
    if not is_level(value):
        raise UnknownLevelError(value)
    if isinstance(value, str):
        return int(Level[value])
    return int(value)


def level_name(value: Any) -> str:
    """Return the canonical name for a rank or level name."""
    return Level(rank_of(value)).name


__all__ = ["DEFAULT_COLORS", "Level", "is_level", "level_name", "rank_of"]
