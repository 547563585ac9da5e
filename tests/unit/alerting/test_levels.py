"""Unit tests for the alerting level table."""

from __future__ import annotations

import pytest

from mp_alerts.alerting.levels import DEFAULT_COLORS, Level, is_level, level_name, rank_of
from mp_alerts.kernel.errors import UnknownLevelError


class TestRankOf:
    @pytest.mark.parametrize("level", list(Level))
    def test_rank_and_name_agree(self, level: Level) -> None:
        assert rank_of(int(level)) == rank_of(level.name) == int(level)

    def test_accepts_enum_member(self) -> None:
        assert rank_of(Level.ERROR) == 4

    def test_order(self) -> None:
        ranks = [rank_of(n) for n in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == 5

    @pytest.mark.parametrize("value", [0, 6, -1, "warning", "WARN", "", None, 3.0, True, [3]])
    def test_unknown_raises(self, value: object) -> None:
        with pytest.raises(UnknownLevelError) as exc_info:
            rank_of(value)
        assert exc_info.value.level == value
        assert exc_info.value.code == "unknown_level"


class TestLevelName:
    def test_from_rank(self) -> None:
        assert level_name(1) == "DEBUG"
        assert level_name(5) == "CRITICAL"

    def test_from_name(self) -> None:
        assert level_name("INFO") == "INFO"

    def test_unknown(self) -> None:
        with pytest.raises(UnknownLevelError):
            level_name(42)


class TestIsLevel:
    def test_valid(self) -> None:
        assert is_level(3)
        assert is_level("ERROR")

    def test_bool_is_not_a_rank(self) -> None:
        assert not is_level(True)

    def test_invalid(self) -> None:
        assert not is_level("nope")
        assert not is_level(None)


class TestDefaultColors:
    def test_every_level_has_a_color(self) -> None:
        assert set(DEFAULT_COLORS) == {int(level) for level in Level}

    def test_error_and_critical_are_red(self) -> None:
        assert DEFAULT_COLORS[Level.ERROR] == DEFAULT_COLORS[Level.CRITICAL] == "#f00"
