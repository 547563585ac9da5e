"""Alerting – LoggerRegistry.

Keyed collection of :class:`AlertLogger` instances with lazy creation on the
first call that supplies a configuration.  Applications may own their own
registry; the module-level :func:`get_logger` uses a process-wide one.
"""
from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Hashable

from mp_alerts.alerting.formats import FormatterRegistry
from mp_alerts.alerting.logger import AlertLogger
from mp_alerts.kernel.errors import InvalidConfigError, NotConfiguredError


class _DefaultKey:
    """Sentinel identity of the default logger."""

    _instance: "_DefaultKey | None" = None

    def __new__(cls) -> "_DefaultKey":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DEFAULT"


DEFAULT = _DefaultKey()

LoggerKey = Hashable


def _is_key(value: Any) -> bool:
    if value is DEFAULT:
        return True
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _label(key: LoggerKey) -> str:
    return "The default logger" if key is DEFAULT else f"Logger id {key!r}"


class LoggerRegistry:
    """Owns every :class:`AlertLogger` it creates, keyed by ``str``/``int`` or :data:`DEFAULT`."""

    def __init__(self, formats: FormatterRegistry | None = None) -> None:
        self._formats = formats
        self._loggers: dict[LoggerKey, AlertLogger] = {}
        self._lock = threading.RLock()

    def get(self, key: LoggerKey = DEFAULT) -> AlertLogger:
        """Return the logger for *key*.

        Raises
        ------
        NotConfiguredError
            When no configuration was ever supplied for *key*.
        """
        if not _is_key(key):
            raise InvalidConfigError(f"Invalid logger key: {key!r} (expected str, int or DEFAULT)")
        with self._lock:
            found = self._loggers.get(key)
        if found is None:
            raise NotConfiguredError(key, _label(key))
        return found

    def configure(self, key: LoggerKey, config: Mapping[str, Any]) -> AlertLogger:
        """Create the logger for *key*, or merge *config* into the existing one."""
        if not _is_key(key):
            raise InvalidConfigError(f"Invalid logger key: {key!r} (expected str, int or DEFAULT)")
        with self._lock:
            existing = self._loggers.get(key)
            if existing is not None:
                existing.set_config(config)
                return existing
            created = AlertLogger(config, formats=self._formats)
            self._loggers[key] = created
            return created

    def get_logger(
        self,
        key_or_config: LoggerKey | Mapping[str, Any] | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> AlertLogger:
        """Resolve a logger, creating or reconfiguring it when a config is given.

        * ``get_logger()`` – the default logger.
        * ``get_logger("key")`` – the keyed logger.
        * ``get_logger({...})`` – create/update the default logger.
        * ``get_logger("key", {...})`` – create/update the keyed logger.
        """
        if isinstance(key_or_config, Mapping):
            if config is not None:
                raise InvalidConfigError("Pass either a key and a config, or a config alone")
            key: LoggerKey = DEFAULT
            config = key_or_config
        elif key_or_config is None:
            key = DEFAULT
        else:
            key = key_or_config

        if config is None:
            return self.get(key)
        return self.configure(key, config)

    def keys(self) -> list[LoggerKey]:
        with self._lock:
            return list(self._loggers)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._loggers

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)


_default_registry = LoggerRegistry()


def default_registry() -> LoggerRegistry:
    """Return the process-wide registry behind :func:`get_logger`."""
    return _default_registry


def get_logger(
    key_or_config: LoggerKey | Mapping[str, Any] | None = None,
    config: Mapping[str, Any] | None = None,
) -> AlertLogger:
    """Resolve a logger from the process-wide registry (see :meth:`LoggerRegistry.get_logger`)."""
    return _default_registry.get_logger(key_or_config, config)


__all__ = ["DEFAULT", "LoggerKey", "LoggerRegistry", "default_registry", "get_logger"]
