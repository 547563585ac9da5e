"""Alerting – log entries and the canonical LogEvent.

A log call accepts either a :class:`PlainMessage` or a
:class:`StructuredEntry`.  Raw call input (strings, exceptions, mappings) is
converted with :func:`coerce_entry`, then :func:`build_event` produces the
immutable :class:`LogEvent` handed to formatters.
"""
from __future__ import annotations

import dataclasses
import traceback
from collections.abc import Mapping
from typing import Any, Sequence, Union

from mp_alerts.alerting.levels import DEFAULT_COLORS, level_name
from mp_alerts.alerting.trail import (
    Trail,
    TrailFrame,
    capture_frames,
    extract_trail,
    frames_from_traceback,
)
from mp_alerts.kernel.errors import BaseError, InvalidLogCallError

_ENTRY_KEYS = frozenset({"message", "name", "stack", "context"})


@dataclasses.dataclass(frozen=True)
class PlainMessage:
    """A bare text message."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text:
            raise InvalidLogCallError()


@dataclasses.dataclass(frozen=True)
class StructuredEntry:
    """An explicit entry, usually derived from an exception.

    ``frames`` holds live traceback frames when the entry came from a raised
    exception; they take precedence over parsing ``stack``.
    """

    message: str
    name: str | None = None
    stack: str | None = None
    context: Mapping[str, Any] | None = None
    frames: Sequence[TrailFrame] | None = dataclasses.field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if (
            not isinstance(self.message, str)
            or not self.message
            or not isinstance(self.name, (str, type(None)))
            or not isinstance(self.stack, (str, type(None)))
            or not isinstance(self.context, (Mapping, type(None)))
        ):
            raise InvalidLogCallError()

    @classmethod
    def from_exception(cls, exc: BaseException) -> "StructuredEntry":
        """Build an entry from *exc*; raised exceptions carry their traceback.

        The message is the exception's text, or its class name when it has
        none (``raise TimeoutError()``).
        """
        stack: str | None = None
        frames: list[TrailFrame] | None = None
        if exc.__traceback__ is not None:
            stack = "".join(traceback.format_exception(exc)).rstrip()
            frames = frames_from_traceback(exc.__traceback__)
        name = type(exc).__name__
        # BaseError renders str() as JSON
        text = exc.message if isinstance(exc, BaseError) else str(exc)
        return cls(message=text or name, name=name, stack=stack, frames=frames)


LogEntry = Union[PlainMessage, StructuredEntry]


def coerce_entry(value: Any) -> LogEntry:
    """Convert raw log call input into a :data:`LogEntry`.

    Raises
    ------
    InvalidLogCallError
        When *value* is not a non-empty string, an exception, a mapping with a non-empty ``message`` or an entry instance.
    """
    if isinstance(value, (PlainMessage, StructuredEntry)):
        return value
    if isinstance(value, str):
        return PlainMessage(value)
    if isinstance(value, BaseException):
        return StructuredEntry.from_exception(value)
    if isinstance(value, Mapping):
        if (
            not _ENTRY_KEYS.issuperset(value.keys())
            or "message" not in value
            or any(item is None for item in value.values())
        ):
            raise InvalidLogCallError()
        return StructuredEntry(**value)
    raise InvalidLogCallError()


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """Canonical record rendered by formatters."""

    app_name: str
    level: int
    level_name: str
    color: str
    message: str
    trail: Trail = dataclasses.field(default_factory=Trail)
    context: dict[str, Any] = dataclasses.field(default_factory=dict)
    name: str | None = None
    stack: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view, with the trail reduced to its present fields."""
        data = dataclasses.asdict(self)
        data["trail"] = self.trail.as_dict()
        return data


def build_event(
    *,
    app_name: str,
    level: int,
    entry: LogEntry,
    context: Mapping[str, Any] | None = None,
    colors: Mapping[int, str] | None = None,
    frames: Sequence[TrailFrame] | None = None,
    root: str | None = None,
) -> LogEvent:
    """Normalize *entry* into a :class:`LogEvent`.

    Explicit stacks already start at the error origin and are used as is.
    Otherwise *frames* (or a stack captured here) is searched for the first
    frame outside the alerting package.  An explicit *context* wins over the
    entry's own.
    """
    name: str | None = None
    stack: str | None = None
    entry_context: Mapping[str, Any] | None = None
    if isinstance(entry, StructuredEntry):
        message = entry.message
        name, stack, entry_context = entry.name, entry.stack, entry.context
    else:
        message = entry.text

    if isinstance(entry, StructuredEntry) and entry.frames:
        trail = extract_trail(entry.frames, root=root)
    elif stack:
        trail = extract_trail(stack, root=root)
    else:
        trail = extract_trail(frames if frames is not None else capture_frames(), True, root=root)

    if context is not None:
        merged = dict(context)
    elif entry_context is not None:
        merged = dict(entry_context)
    else:
        merged = {}

    return LogEvent(
        app_name=app_name,
        level=level,
        level_name=level_name(level),
        color=(colors or {}).get(level) or DEFAULT_COLORS[level],
        message=message,
        trail=trail,
        context=merged,
        name=name,
        stack=stack,
    )


__all__ = [
    "LogEntry",
    "LogEvent",
    "PlainMessage",
    "StructuredEntry",
    "build_event",
    "coerce_entry",
]
