"""Unit tests for the formatter registry and the SLACK renderer."""

from __future__ import annotations

import time
from typing import Any

import pytest

from mp_alerts.alerting.events import LogEvent
from mp_alerts.alerting.formats import FormatterRegistry, LogFormat, default_formats, slack_formatter
from mp_alerts.alerting.trail import Trail
from mp_alerts.kernel.errors import InvalidConfigError, UnknownFormatError


def _event(**overrides: Any) -> LogEvent:
    values: dict[str, Any] = {
        "app_name": "Billing",
        "level": 4,
        "level_name": "ERROR",
        "color": "#f00",
        "message": "charge failed",
    }
    values.update(overrides)
    return LogEvent(**values)


def _blocks(payload: dict[str, Any]) -> list[dict[str, Any]]:
    return payload["attachments"][0]["blocks"]


# ---------------------------------------------------------------------------
# FormatterRegistry
# ---------------------------------------------------------------------------


class TestFormatterRegistry:
    def test_resolve_by_id_and_name(self) -> None:
        registry = FormatterRegistry.with_defaults()
        assert registry.resolve(1) is slack_formatter
        assert registry.resolve(LogFormat.SLACK) is slack_formatter
        assert registry.resolve("SLACK") is slack_formatter

    def test_callable_passes_through(self) -> None:
        def render(event: LogEvent) -> str:
            return event.message

        assert FormatterRegistry().resolve(render) is render

    @pytest.mark.parametrize("value", [2, "slack", "JSON", None, True, 1.0])
    def test_unknown_format(self, value: object) -> None:
        with pytest.raises(UnknownFormatError):
            FormatterRegistry.with_defaults().resolve(value)

    def test_is_known(self) -> None:
        registry = FormatterRegistry.with_defaults()
        assert registry.is_known("SLACK")
        assert not registry.is_known(99)

    def test_register_custom_format(self) -> None:
        registry = FormatterRegistry.with_defaults()

        def text(event: LogEvent) -> str:
            return f"{event.level_name}: {event.message}"

        registry.register(2, "TEXT", text)
        assert registry.resolve(2) is text
        assert registry.resolve("TEXT") is text
        assert registry.names() == {1: "SLACK", 2: "TEXT"}

    def test_register_duplicate_rejected(self) -> None:
        registry = FormatterRegistry.with_defaults()
        with pytest.raises(InvalidConfigError):
            registry.register(1, "OTHER", slack_formatter)
        with pytest.raises(InvalidConfigError):
            registry.register(7, "SLACK", slack_formatter)

    def test_register_requires_callable(self) -> None:
        with pytest.raises(InvalidConfigError):
            FormatterRegistry().register(3, "X", "not callable")  # type: ignore[arg-type]

    def test_default_registry_has_slack(self) -> None:
        assert default_formats().resolve("SLACK") is slack_formatter


# ---------------------------------------------------------------------------
# slack_formatter
# ---------------------------------------------------------------------------


class TestSlackFormatter:
    def test_header_and_color(self) -> None:
        payload = slack_formatter(_event())
        assert payload["attachments"][0]["color"] == "#f00"
        header = _blocks(payload)[0]
        assert header["type"] == "header"
        assert header["text"] == {"type": "plain_text", "text": "[ERROR] Billing", "emoji": True}

    def test_body_without_name(self) -> None:
        body = _blocks(slack_formatter(_event()))[1]
        assert body == {"type": "section", "text": {"type": "mrkdwn", "text": "charge failed"}}

    def test_body_prefixes_name(self) -> None:
        body = _blocks(slack_formatter(_event(name="CardDeclined")))[1]
        assert body["text"]["text"] == "CardDeclined: charge failed"

    def test_stack_block(self) -> None:
        blocks = _blocks(slack_formatter(_event(stack="Traceback ...")))
        assert len(blocks) == 4
        assert blocks[2]["text"]["text"] == "```Traceback ...```"

    def test_no_stack_block_without_stack(self) -> None:
        blocks = _blocks(slack_formatter(_event()))
        assert [b["type"] for b in blocks] == ["header", "section", "context"]

    def test_timestamp_element(self) -> None:
        before = int(time.time())
        context = _blocks(slack_formatter(_event()))[-1]
        after = int(time.time())
        text = context["elements"][0]["text"]
        assert text.startswith("<!date^")
        ts = int(text.split("^")[1])
        assert before <= ts <= after
        assert "{date_num} {time_secs}|" in text

    def test_trail_element_with_scope(self) -> None:
        trail = Trail(scope="charge", file="billing/service.py", line=12, column=5)
        elements = _blocks(slack_formatter(_event(trail=trail)))[-1]["elements"]
        assert elements[1]["text"] == "billing/service.py/charge line 12:5"

    def test_trail_element_without_scope(self) -> None:
        trail = Trail(file="index.js", line=3, column=1)
        elements = _blocks(slack_formatter(_event(trail=trail)))[-1]["elements"]
        assert elements[1]["text"] == "index.js line 3:1"

    def test_empty_trail_omits_element(self) -> None:
        elements = _blocks(slack_formatter(_event(context={"user": "alice"})))[-1]["elements"]
        assert len(elements) == 2
        assert elements[1]["text"] == "user: alice"

    def test_context_elements_in_order(self) -> None:
        trail = Trail(file="a.py", line=1, column=1)
        event = _event(trail=trail, context={"user": "alice", "attempt": 3})
        elements = _blocks(slack_formatter(event))[-1]["elements"]
        assert [e["text"] for e in elements[2:]] == ["user: alice", "attempt: 3"]
        assert all(e["type"] == "plain_text" and e["emoji"] for e in elements[1:])
