"""
mp_alerts – leveled alert logging with pluggable formatters and delivery.

Import path convention::

    from mp_alerts import get_logger, Level, LogFormat
    from mp_alerts.adapters.http import SlackWebhookSender
    from mp_alerts.config import AlertSettings, EnvSettingsLoader
"""

from mp_alerts.alerting import (
    DEFAULT,
    AlertLogger,
    Level,
    LogEvent,
    LogFormat,
    LoggerRegistry,
    StructuredEntry,
    Trail,
    get_logger,
)

__version__ = "0.1.0"
__all__ = [
    "DEFAULT",
    "AlertLogger",
    "Level",
    "LogEvent",
    "LogFormat",
    "LoggerRegistry",
    "StructuredEntry",
    "Trail",
    "__version__",
    "get_logger",
]
