"""Alerting errors – validation failures raised by the alerting core."""

from __future__ import annotations

from typing import Any

from mp_alerts.kernel.errors.base import BaseError

CONFIG_SHAPE = (
    "Required: send (callable). Optional: format (str|int|callable=1), "
    "min_level (str|int=3), app_name (str='My App'), colors (mapping)"
)
LOG_CALL_SHAPE = (
    "Required: level (str|int), entry (str|BaseException|mapping with a non-empty "
    "'message'). Optional: context (mapping)"
)


class AlertingError(BaseError):
    """Base class for errors raised by the alerting core."""

    default_code = "alerting_error"


class UnknownLevelError(AlertingError):
    """The value is neither a valid level rank nor a level name."""

    default_code = "unknown_level"

    def __init__(self, level: Any, **kwargs: Any) -> None:
        super().__init__(f"Unknown level: {level!r}", **kwargs)
        self.level = level


class UnknownFormatError(AlertingError):
    """The value is neither a registered format id, name nor a callable."""

    default_code = "unknown_format"

    def __init__(self, log_format: Any, **kwargs: Any) -> None:
        super().__init__(f"Invalid format: {log_format!r}", **kwargs)
        self.log_format = log_format


class InvalidConfigError(AlertingError):
    """Logger configuration is malformed or missing a required field."""

    default_code = "invalid_config"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        if message is None:
            message = f"Invalid arguments. {CONFIG_SHAPE}"
        super().__init__(message, **kwargs)


class InvalidLogCallError(AlertingError):
    """A log call was made with malformed arguments."""

    default_code = "invalid_log_call"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        if message is None:
            message = f"Invalid arguments. {LOG_CALL_SHAPE}"
        super().__init__(message, **kwargs)


class InvalidFormatterError(AlertingError):
    """The configured formatter raised while rendering a log event."""

    default_code = "invalid_formatter"


class NotConfiguredError(AlertingError):
    """A logger was looked up before it was ever configured."""

    default_code = "not_configured"

    def __init__(self, key: Any, label: str, **kwargs: Any) -> None:
        super().__init__(f"{label} does not yet exist, please supply config.", **kwargs)
        self.key = key


__all__ = [
    "CONFIG_SHAPE",
    "LOG_CALL_SHAPE",
    "AlertingError",
    "InvalidConfigError",
    "InvalidFormatterError",
    "InvalidLogCallError",
    "NotConfiguredError",
    "UnknownFormatError",
    "UnknownLevelError",
]
