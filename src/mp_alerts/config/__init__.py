"""Config – 12-factor settings for wiring alert loggers."""

from mp_alerts.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_alerts.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from mp_alerts.config.settings import AlertSettings, Settings

__all__ = [
    "AlertSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
