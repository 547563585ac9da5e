"""Config – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any, TypeVar

from mp_alerts.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from mp_alerts.config.settings import Settings

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``<PREFIX>_<FIELD>``.

    Parameters
    ----------
    environ:
        Variables to read.  Defaults to :data:`os.environ` at load time.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)
            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue
            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}", cause=exc) from exc

    def _coerce(self, env_key: str, value: str, type_hint: Any) -> Any:
        hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
        if hint == "bool":
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise InvalidSettingValueError(env_key, value, "expected a boolean")
        if hint in ("int", "float"):
            try:
                return int(value) if hint == "int" else float(value)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, value, f"expected {hint}") from exc
        return value


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file, then load like :class:`EnvSettingsLoader`.

    Process environment variables win over the file unless *override* is set.
    The process environment itself is never modified.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        try:
            from dotenv import dotenv_values  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'mp-alerts[dotenv]' to use DotenvSettingsLoader") from exc
        file_values = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            environ = {**os.environ, **file_values}
        else:
            environ = {**file_values, **os.environ}
        return EnvSettingsLoader(environ).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
