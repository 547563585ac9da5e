"""Config – errors raised while loading alert settings."""
from __future__ import annotations

from mp_alerts.kernel.errors import BaseError


class ConfigError(BaseError):
    """Settings could not be loaded or constructed."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without a default was not provided by any source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Missing required setting {setting_name}")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting was provided but cannot be used."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"{setting_name}={value!r} rejected: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
