"""Config – settings dataclasses for wiring an alert logger from the environment."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from mp_alerts.alerting.formats import default_formats
from mp_alerts.alerting.levels import is_level
from mp_alerts.config.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Subclasses declare fields with defaults and set ``_prefix``; loaders read
    ``<PREFIX>_<FIELD>`` variables.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AlertSettings(Settings):
    """Settings for a Slack-webhook backed alert logger (``ALERTS_*``)."""

    _prefix: ClassVar[str] = "ALERTS"

    webhook_url: str
    app_name: str = "My App"
    min_level: str = "WARNING"
    format: str = "SLACK"
    timeout: float = 10.0
    raise_errors: bool = True

    def _validate(self) -> None:
        if not self.webhook_url.startswith(("https://", "http://")):
            raise InvalidSettingValueError("webhook_url", self.webhook_url, "expected an http(s) URL")
        if not self.app_name:
            raise InvalidSettingValueError("app_name", self.app_name, "must not be empty")
        if not is_level(self.min_level):
            raise InvalidSettingValueError("min_level", self.min_level, "unknown level name")
        if not default_formats().is_known(self.format):
            raise InvalidSettingValueError("format", self.format, "unknown format name")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")

    def logger_config(self, send: Any) -> dict[str, Any]:
        """Return an :class:`~mp_alerts.alerting.AlertLogger` config mapping bound to *send*."""
        return {
            "send": send,
            "format": self.format,
            "app_name": self.app_name,
            "min_level": self.min_level,
        }


__all__ = ["AlertSettings", "Settings"]
