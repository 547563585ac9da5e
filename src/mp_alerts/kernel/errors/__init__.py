"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── AlertingError          (alerting.py)
    │   ├── UnknownLevelError
    │   ├── UnknownFormatError
    │   ├── InvalidConfigError
    │   ├── InvalidLogCallError
    │   ├── InvalidFormatterError
    │   └── NotConfiguredError
    └── InfrastructureError    (infrastructure.py)
        ├── TimeoutError
        └── ExternalServiceError
"""

from mp_alerts.kernel.errors.alerting import (
    AlertingError,
    InvalidConfigError,
    InvalidFormatterError,
    InvalidLogCallError,
    NotConfiguredError,
    UnknownFormatError,
    UnknownLevelError,
)
from mp_alerts.kernel.errors.base import BaseError
from mp_alerts.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
)
from mp_alerts.kernel.errors.infrastructure import TimeoutError as InfrastructureTimeoutError

__all__ = [
    "AlertingError",
    "BaseError",
    "ExternalServiceError",
    "InfrastructureError",
    "InfrastructureTimeoutError",
    "InvalidConfigError",
    "InvalidFormatterError",
    "InvalidLogCallError",
    "NotConfiguredError",
    "UnknownFormatError",
    "UnknownLevelError",
]
