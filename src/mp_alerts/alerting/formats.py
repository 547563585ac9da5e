"""Alerting – formatter registry and the built-in SLACK renderer."""
from __future__ import annotations

import threading
import time
from datetime import UTC, datetime
from enum import IntEnum
from typing import Any, Callable, Union

from mp_alerts.alerting.events import LogEvent
from mp_alerts.kernel.errors import InvalidConfigError, UnknownFormatError

Payload = Union[str, dict[str, Any]]
RenderFn = Callable[[LogEvent], Payload]
FormatSpec = Union[int, str, RenderFn]


class LogFormat(IntEnum):
    """Built-in format ids."""

    SLACK = 1


def slack_formatter(event: LogEvent) -> dict[str, Any]:
    """Render *event* as a Slack ``attachments`` payload with Block Kit blocks."""
    blocks: list[dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": f"[{event.level_name}] {event.app_name}", "emoji": True},
        },
        {
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": f"{event.name}: {event.message}" if event.name else event.message,
            },
        },
    ]

    if event.stack:
        blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": f"```{event.stack}```"}})

    ts = int(time.time())
    fallback = datetime.fromtimestamp(ts, UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    elements: list[dict[str, Any]] = [
        {"type": "mrkdwn", "text": f"<!date^{ts}^{{date_num}} {{time_secs}}|{fallback}>"},
    ]

    trail = event.trail
    if trail:
        scope = f"/{trail.scope}" if trail.scope else ""
        elements.append({
            "type": "plain_text",
            "text": f"{trail.file}{scope} line {trail.line}:{trail.column}",
            "emoji": True,
        })

    for key, value in event.context.items():
        elements.append({"type": "plain_text", "text": f"{key}: {value}", "emoji": True})

    blocks.append({"type": "context", "elements": elements})

    return {"attachments": [{"color": event.color, "blocks": blocks}]}


class FormatterRegistry:
    """Maps format ids and names to render functions.

    ``resolve`` accepts a registered id, a registered name or any callable,
    which is passed through unchanged.
    """

    def __init__(self) -> None:
        self._by_id: dict[int, RenderFn] = {}
        self._ids: dict[str, int] = {}
        self._lock = threading.Lock()

    @classmethod
    def with_defaults(cls) -> "FormatterRegistry":
        registry = cls()
        registry.register(LogFormat.SLACK, LogFormat.SLACK.name, slack_formatter)
        return registry

    def register(self, format_id: int, name: str, render: RenderFn) -> None:
        """Register *render* under *format_id* and *name*."""
        if (
            isinstance(format_id, bool)
            or not isinstance(format_id, int)
            or not isinstance(name, str)
            or not name
            or not callable(render)
        ):
            raise InvalidConfigError("A format needs an int id, a non-empty name and a callable")
        with self._lock:
            if format_id in self._by_id or name in self._ids:
                raise InvalidConfigError(f"Format {format_id!r}/{name!r} is already registered")
            self._by_id[int(format_id)] = render
            self._ids[name] = int(format_id)

    def is_known(self, log_format: Any) -> bool:
        try:
            self.resolve(log_format)
        except UnknownFormatError:
            return False
        return True

    def resolve(self, log_format: Any) -> RenderFn:
        """Return the render function for *log_format*.

        Raises
        ------
        UnknownFormatError
            When *log_format* is neither registered nor callable.
        """
        if isinstance(log_format, str):
            format_id = self._ids.get(log_format)
            if format_id is not None:
                return self._by_id[format_id]
        elif isinstance(log_format, int) and not isinstance(log_format, bool):
            render = self._by_id.get(int(log_format))
            if render is not None:
                return render
        elif callable(log_format):
            return log_format
        raise UnknownFormatError(log_format)

    def names(self) -> dict[int, str]:
        return {format_id: name for name, format_id in self._ids.items()}


_default_formats = FormatterRegistry.with_defaults()


def default_formats() -> FormatterRegistry:
    """Return the process-wide formatter registry."""
    return _default_formats


__all__ = [
    "FormatSpec",
    "FormatterRegistry",
    "LogFormat",
    "Payload",
    "RenderFn",
    "default_formats",
    "slack_formatter",
]
