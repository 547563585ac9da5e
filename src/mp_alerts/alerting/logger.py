"""Alerting – AlertLogger.

An :class:`AlertLogger` validates its configuration eagerly, filters by
minimum level, renders each event through its formatter and hands the
payload to the injected ``send`` callable.

Typical usage::

    async def send(payload):
        ...  # post to a webhook, enqueue, etc.

    log = AlertLogger({"send": send, "app_name": "billing", "min_level": "ERROR"})
    await log.error(exc, {"user": "alice"})
"""
from __future__ import annotations

import asyncio
import dataclasses
import inspect
import logging
import threading
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, Coroutine

from mp_alerts.alerting.events import build_event, coerce_entry
from mp_alerts.alerting.formats import FormatterRegistry, LogFormat, Payload, RenderFn, default_formats
from mp_alerts.alerting.levels import Level, is_level, level_name, rank_of
from mp_alerts.kernel.errors import (
    InvalidConfigError,
    InvalidFormatterError,
    InvalidLogCallError,
    UnknownLevelError,
)

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "My App"
DEFAULT_MIN_LEVEL = Level.WARNING
DEFAULT_FORMAT = LogFormat.SLACK

CONFIG_KEYS = frozenset({"send", "format", "app_name", "min_level", "colors"})

_UNSET: Any = object()

Send = Callable[[Payload], Any]


@dataclasses.dataclass(frozen=True)
class LoggerConfig:
    """Resolved, validated logger configuration."""

    send: Send
    render: RenderFn
    app_name: str = DEFAULT_APP_NAME
    min_level: int = DEFAULT_MIN_LEVEL
    colors: dict[int, str] | None = None


def _normalize_colors(colors: Any) -> dict[int, str]:
    if not isinstance(colors, Mapping):
        raise InvalidConfigError()
    try:
        normalized = {rank_of(key): value for key, value in colors.items()}
    except UnknownLevelError as exc:
        raise InvalidConfigError(cause=exc) from exc
    if not all(isinstance(value, str) for value in normalized.values()):
        raise InvalidConfigError()
    return normalized


def _checked(config: Any) -> Mapping[str, Any]:
    if not isinstance(config, Mapping) or not CONFIG_KEYS.issuperset(config.keys()):
        raise InvalidConfigError()
    return config


async def _skip() -> None:
    return None


async def _deliver(send: Send, payload: Payload) -> Any:
    result = send(payload)
    if inspect.isawaitable(result):
        return await result
    return result


class AlertLogger:
    """Leveled alert logger bound to one delivery callable.

    Parameters
    ----------
    config:
        Mapping with ``send`` (required), ``format``, ``app_name``,
        ``min_level`` and ``colors``.
    formats:
        Formatter registry used to resolve ``format``.  Defaults to the
        process-wide registry.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        *,
        formats: FormatterRegistry | None = None,
    ) -> None:
        self._formats = formats or default_formats()
        self._lock = threading.Lock()
        self._config: LoggerConfig = self._resolve(None, **_checked(config))

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def set_config(self, config: Mapping[str, Any]) -> LoggerConfig:
        """Apply a configuration mapping (see :meth:`configure`)."""
        return self.configure(**_checked(config))

    def configure(
        self,
        *,
        send: Any = _UNSET,
        format: Any = _UNSET,  # noqa: A002
        app_name: Any = _UNSET,
        min_level: Any = _UNSET,
        colors: Any = _UNSET,
    ) -> LoggerConfig:
        """Validate and store a new configuration.

        Omitted fields keep their current values, or the defaults
        (``format=SLACK``, ``app_name="My App"``, ``min_level=WARNING``) on
        first configuration.  The new configuration replaces the old one
        atomically.

        Raises
        ------
        InvalidConfigError
            When any field is invalid or ``send`` was never supplied.
        """
        with self._lock:
            self._config = self._resolve(
                self._config,
                send=send,
                format=format,
                app_name=app_name,
                min_level=min_level,
                colors=colors,
            )
            return self._config

    def _resolve(
        self,
        current: LoggerConfig | None,
        *,
        send: Any = _UNSET,
        format: Any = _UNSET,  # noqa: A002
        app_name: Any = _UNSET,
        min_level: Any = _UNSET,
        colors: Any = _UNSET,
    ) -> LoggerConfig:
        if send is _UNSET:
            send = current.send if current else None
        if format is _UNSET:
            format = current.render if current else DEFAULT_FORMAT  # noqa: A001
        if app_name is _UNSET:
            app_name = current.app_name if current else DEFAULT_APP_NAME
        if min_level is _UNSET:
            min_level = current.min_level if current else DEFAULT_MIN_LEVEL
        if colors is _UNSET:
            resolved_colors = current.colors if current else None
        else:
            resolved_colors = _normalize_colors(colors)

        if (
            not callable(send)
            or not self._formats.is_known(format)
            or not is_level(min_level)
            or not isinstance(app_name, str)
            or not app_name
        ):
            raise InvalidConfigError()

        logger.debug(
            "alert logger configured app_name=%s min_level=%s",
            app_name,
            level_name(min_level),
        )
        return LoggerConfig(
            send=send,
            render=self._formats.resolve(format),
            app_name=app_name,
            min_level=rank_of(min_level),
            colors=resolved_colors,
        )

    def log(
        self,
        level: int | str,
        entry: Any,
        context: Mapping[str, Any] | None = None,
    ) -> Coroutine[Any, Any, Any]:
        """Log *entry* at *level*.

        Arguments are validated and the call site is recorded immediately;
        the returned awaitable delivers the rendered payload through ``send``
        and resolves to its result.  Events below ``min_level`` resolve to
        ``None`` without rendering or sending.

        Nothing is sent until the coroutine is awaited or scheduled; a bare
        ``log.error("x")`` is dropped.  Use :meth:`log_nowait` for
        fire-and-forget calls.

        Raises
        ------
        InvalidLogCallError
            On a bad level, entry or context.
        InvalidFormatterError
            When the formatter raises.
        """
        if not is_level(level) or not isinstance(context, (Mapping, type(None))):
            raise InvalidLogCallError()
        log_entry = coerce_entry(entry)

        config = self.config
        rank = rank_of(level)
        if rank < config.min_level:
            logger.debug("alert dropped below min level level=%s", level_name(rank))
            return _skip()

        event = build_event(
            app_name=config.app_name,
            level=rank,
            entry=log_entry,
            context=context,
            colors=config.colors,
        )
        try:
            payload = config.render(event)
        except Exception as exc:
            raise InvalidFormatterError(f"Failed to format log event body: {exc}", cause=exc) from exc

        return _deliver(config.send, payload)

    def log_nowait(
        self,
        level: int | str,
        entry: Any,
        context: Mapping[str, Any] | None = None,
    ) -> asyncio.Future[Any]:
        """Like :meth:`log`, but schedule delivery on the running event loop.

        Validation errors still raise here.  Keep the returned task to observe
        delivery failures.
        """
        return asyncio.ensure_future(self.log(level, entry, context))

    def debug(self, entry: Any, context: Mapping[str, Any] | None = None) -> Awaitable[Any]:
        return self.log(Level.DEBUG, entry, context)

    def info(self, entry: Any, context: Mapping[str, Any] | None = None) -> Awaitable[Any]:
        return self.log(Level.INFO, entry, context)

    def warning(self, entry: Any, context: Mapping[str, Any] | None = None) -> Awaitable[Any]:
        return self.log(Level.WARNING, entry, context)

    def error(self, entry: Any, context: Mapping[str, Any] | None = None) -> Awaitable[Any]:
        return self.log(Level.ERROR, entry, context)

    def critical(self, entry: Any, context: Mapping[str, Any] | None = None) -> Awaitable[Any]:
        return self.log(Level.CRITICAL, entry, context)

    def __repr__(self) -> str:
        config = self._config
        return f"{type(self).__name__}(app_name={config.app_name!r}, min_level={level_name(config.min_level)})"


__all__ = [
    "CONFIG_KEYS",
    "DEFAULT_APP_NAME",
    "DEFAULT_FORMAT",
    "DEFAULT_MIN_LEVEL",
    "AlertLogger",
    "LoggerConfig",
]
