"""Kernel – error hierarchy shared by every layer."""

from mp_alerts.kernel.errors import (
    AlertingError,
    BaseError,
    ExternalServiceError,
    InfrastructureError,
    InvalidConfigError,
    InvalidFormatterError,
    InvalidLogCallError,
    NotConfiguredError,
    UnknownFormatError,
    UnknownLevelError,
)

__all__ = [
    "AlertingError",
    "BaseError",
    "ExternalServiceError",
    "InfrastructureError",
    "InvalidConfigError",
    "InvalidFormatterError",
    "InvalidLogCallError",
    "NotConfiguredError",
    "UnknownFormatError",
    "UnknownLevelError",
]
