"""Tests for the Rich tool display module."""

from __future__ import annotations

import io

from rich.console import Console

from toolwire.cli.display import ToolDisplay, _format_parameters, _truncate
from toolwire.routing.router import IntentMatch
from toolwire.tools.base import InvocationResponse


def _make_display() -> tuple[ToolDisplay, io.StringIO]:
    """Create a display with captured output."""
    buf = io.StringIO()
    console = Console(file=buf, width=200, no_color=True)
    return ToolDisplay(console=console), buf


# ── Helpers ───────────────────────────────────────────────────


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert _truncate("hello", 10) == "hello"

    def test_over_limit_truncated(self) -> None:
        result = _truncate("a" * 2500)
        assert len(result) < 2500
        assert result.endswith("...")

    def test_custom_limit(self) -> None:
        assert _truncate("hello world", 5) == "hello ..."


class TestFormatParameters:
    def test_required_and_optional(self) -> None:
        schema = {
            "type": "object",
            "properties": {"a": {"type": "string"}, "b": {"type": "number"}},
            "required": ["a"],
        }
        assert _format_parameters(schema) == "a: string, b?: number"

    def test_no_parameters(self) -> None:
        assert _format_parameters({"type": "object", "properties": {}, "required": []}) == "-"


# ── Tool listing ──────────────────────────────────────────────


class TestShowTools:
    def test_table(self, dispatcher) -> None:
        display, buf = _make_display()
        display.show_tools(dispatcher.list_tools())
        out = buf.getvalue()
        assert f"Tools ({len(dispatcher.registry)})" in out
        assert "write-file" in out
        assert "filePath: string" in out

    def test_empty(self) -> None:
        display, buf = _make_display()
        display.show_tools([])
        assert "No tools registered." in buf.getvalue()


# ── Responses ─────────────────────────────────────────────────


class TestShowResponse:
    def test_success_panel(self) -> None:
        display, buf = _make_display()
        display.show_response("echo", InvocationResponse.text("Tool echo: hi"))
        out = buf.getvalue()
        assert "RESULT" in out
        assert "(echo)" in out
        assert "Tool echo: hi" in out

    def test_error_panel(self) -> None:
        display, buf = _make_display()
        display.show_response("nope", InvocationResponse.failure("Unknown tool: nope"))
        out = buf.getvalue()
        assert "ERROR" in out
        assert "Unknown tool: nope" in out

    def test_markup_in_result_is_literal(self) -> None:
        display, buf = _make_display()
        display.show_response("echo", InvocationResponse.text("[bold]x[/bold]"))
        assert "[bold]x[/bold]" in buf.getvalue()


# ── Routing ───────────────────────────────────────────────────


class TestShowMatch:
    def test_match_with_arguments(self) -> None:
        display, buf = _make_display()
        match = IntentMatch(
            tool_name="calculate",
            arguments={"expression": "2 + 3 * 4"},
            rationale="The request asks for a calculation.",
            rule="calculate",
        )
        display.show_match(match)
        out = buf.getvalue()
        assert "calculate  [calculate]" in out
        assert "The request asks for a calculation." in out
        assert "2 + 3 * 4" in out

    def test_match_without_arguments(self) -> None:
        display, buf = _make_display()
        display.show_match(IntentMatch(tool_name="system-info", rule="system"))
        out = buf.getvalue()
        assert "system-info" in out
        assert "arguments" not in out
