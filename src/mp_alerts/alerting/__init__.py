"""Alerting – leveled alert loggers with pluggable formatters and delivery."""
from mp_alerts.alerting.events import (
    LogEntry,
    LogEvent,
    PlainMessage,
    StructuredEntry,
    build_event,
    coerce_entry,
)
from mp_alerts.alerting.formats import (
    FormatterRegistry,
    LogFormat,
    Payload,
    RenderFn,
    default_formats,
    slack_formatter,
)
from mp_alerts.alerting.levels import DEFAULT_COLORS, Level, is_level, level_name, rank_of
from mp_alerts.alerting.logger import AlertLogger, LoggerConfig
from mp_alerts.alerting.registry import DEFAULT, LoggerRegistry, default_registry, get_logger
from mp_alerts.alerting.trail import Trail, TrailFrame, extract_trail, parse_stack

__all__ = [
    "DEFAULT",
    "DEFAULT_COLORS",
    "AlertLogger",
    "FormatterRegistry",
    "Level",
    "LogEntry",
    "LogEvent",
    "LogFormat",
    "LoggerConfig",
    "LoggerRegistry",
    "Payload",
    "PlainMessage",
    "RenderFn",
    "StructuredEntry",
    "Trail",
    "TrailFrame",
    "build_event",
    "coerce_entry",
    "default_formats",
    "default_registry",
    "extract_trail",
    "get_logger",
    "is_level",
    "level_name",
    "parse_stack",
    "rank_of",
    "slack_formatter",
]
