"""Unit tests for alert settings and loaders."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, ClassVar

import pytest

from mp_alerts.alerting.logger import AlertLogger
from mp_alerts.config import (
    AlertSettings,
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
)

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"


@dataclasses.dataclass
class RetrySettings(Settings):
    _prefix: ClassVar[str] = "RETRY"

    attempts: int = 3


def _clear_alert_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("WEBHOOK_URL", "APP_NAME", "MIN_LEVEL", "FORMAT", "TIMEOUT", "RAISE_ERRORS"):
        monkeypatch.delenv(f"ALERTS_{name}", raising=False)


# ---------------------------------------------------------------------------
# AlertSettings
# ---------------------------------------------------------------------------


class TestAlertSettings:
    def test_defaults(self) -> None:
        settings = AlertSettings(webhook_url=WEBHOOK)
        assert settings.app_name == "My App"
        assert settings.min_level == "WARNING"
        assert settings.format == "SLACK"
        assert settings.timeout == 10.0
        assert settings.raise_errors is True

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"webhook_url": "hooks.slack.com"}, "webhook_url"),
            ({"app_name": ""}, "app_name"),
            ({"min_level": "LOUD"}, "min_level"),
            ({"format": "XML"}, "format"),
            ({"timeout": 0}, "timeout"),
        ],
    )
    def test_validation(self, overrides: dict[str, Any], field: str) -> None:
        values = {"webhook_url": WEBHOOK, **overrides}
        with pytest.raises(InvalidSettingValueError) as exc_info:
            AlertSettings(**values)
        assert exc_info.value.setting_name == field

    def test_logger_config_builds_logger(self) -> None:
        async def send(payload: Any) -> None:
            return None

        settings = AlertSettings(webhook_url=WEBHOOK, app_name="Billing", min_level="ERROR")
        log = AlertLogger(settings.logger_config(send))
        assert log.config.app_name == "Billing"
        assert log.config.min_level == 4
        assert log.config.send is send


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_alert_env(monkeypatch)
        monkeypatch.setenv("ALERTS_WEBHOOK_URL", WEBHOOK)
        monkeypatch.setenv("ALERTS_MIN_LEVEL", "CRITICAL")
        monkeypatch.setenv("ALERTS_TIMEOUT", "2.5")
        monkeypatch.setenv("ALERTS_RAISE_ERRORS", "off")
        settings = EnvSettingsLoader().load(AlertSettings)
        assert settings.webhook_url == WEBHOOK
        assert settings.min_level == "CRITICAL"
        assert settings.timeout == 2.5
        assert settings.raise_errors is False

    def test_explicit_environ(self) -> None:
        settings = EnvSettingsLoader({"ALERTS_WEBHOOK_URL": WEBHOOK, "ALERTS_APP_NAME": "Jobs"}).load(
            AlertSettings
        )
        assert settings.app_name == "Jobs"

    def test_missing_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_alert_env(monkeypatch)
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader().load(AlertSettings)
        assert exc_info.value.setting_name == "ALERTS_WEBHOOK_URL"

    def test_bad_float(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"ALERTS_WEBHOOK_URL": WEBHOOK, "ALERTS_TIMEOUT": "soon"}).load(AlertSettings)
        assert exc_info.value.setting_name == "ALERTS_TIMEOUT"

    def test_bad_bool(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"ALERTS_WEBHOOK_URL": WEBHOOK, "ALERTS_RAISE_ERRORS": "maybe"}).load(
                AlertSettings
            )

    def test_validation_error_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"ALERTS_WEBHOOK_URL": WEBHOOK, "ALERTS_MIN_LEVEL": "LOUD"}).load(AlertSettings)
        assert exc_info.value.setting_name == "min_level"

    def test_int_fields(self) -> None:
        assert EnvSettingsLoader({"RETRY_ATTEMPTS": "5"}).load(RetrySettings).attempts == 5

    def test_construction_failure_wrapped(self) -> None:
        @dataclasses.dataclass
        class Broken(Settings):
            _prefix: ClassVar[str] = "BROKEN"

            value: str = "x"

            def _validate(self) -> None:
                raise RuntimeError("nope")

        with pytest.raises(ConfigError) as exc_info:
            EnvSettingsLoader({}).load(Broken)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# DotenvSettingsLoader
# ---------------------------------------------------------------------------


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_alert_env(monkeypatch)
        env_file = tmp_path / ".env"
        env_file.write_text(f"ALERTS_WEBHOOK_URL={WEBHOOK}\nALERTS_APP_NAME=FromFile\n")
        settings = DotenvSettingsLoader(str(env_file)).load(AlertSettings)
        assert settings.app_name == "FromFile"

    def test_process_env_wins_by_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _clear_alert_env(monkeypatch)
        monkeypatch.setenv("ALERTS_APP_NAME", "FromEnv")
        env_file = tmp_path / ".env"
        env_file.write_text(f"ALERTS_WEBHOOK_URL={WEBHOOK}\nALERTS_APP_NAME=FromFile\n")
        assert DotenvSettingsLoader(str(env_file)).load(AlertSettings).app_name == "FromEnv"
        assert DotenvSettingsLoader(str(env_file), override=True).load(AlertSettings).app_name == "FromFile"
