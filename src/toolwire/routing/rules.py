"""Keyword rule tables for the intent router.

Rules are checked in order against the lower-cased input; the first
rule with a keyword contained in the text wins. Each rule carries a
``synthesize`` callable that builds the tool arguments from the raw
(not lower-cased) text.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

Variant = Literal["assistant", "literal"]
Synthesizer = Callable[[str], dict[str, Any]]

EXAMPLE_EXPRESSION = "2 + 3 * 4"
EXAMPLE_JSON = '{"name":"张三","age":25,"city":"北京"}'
EXAMPLE_TEXT = "这是一个测试文本，用于分析统计信息。"

FALLBACK_TOOL = "echo"

_ARITHMETIC_SPAN = re.compile(r"[\d.\s()+\-*/%^]*\d[\d.\s()+\-*/%^]*")
_JSON_SPAN = re.compile(r"\{.*\}|\[.*\]", re.DOTALL)


@dataclass(frozen=True, slots=True)
class RouteRule:
    """One ordered routing rule."""

    name: str
    keywords: tuple[str, ...]
    tool_name: str
    synthesize: Synthesizer
    rationale: str

    def matches(self, lowered: str) -> bool:
        return any(k in lowered for k in self.keywords)


# ── Argument synthesis ───────────────────────────────────────


def _constant(**arguments: Any) -> Synthesizer:
    def _synthesize(_text: str) -> dict[str, Any]:
        return dict(arguments)

    return _synthesize


def _echo_text(text: str) -> dict[str, Any]:
    return {"message": text}


def extract_expression(text: str) -> str | None:
    """Return the longest arithmetic-looking span of *text*, if any."""
    spans = [m.group().strip() for m in _ARITHMETIC_SPAN.finditer(text)]
    spans = [s for s in spans if s]
    if not spans:
        return None
    return max(spans, key=len)


def extract_json(text: str) -> str | None:
    """Return the first ``{...}`` or ``[...]`` span of *text*, if any."""
    m = _JSON_SPAN.search(text)
    return m.group() if m else None


def _literal_expression(text: str) -> dict[str, Any]:
    return {"expression": extract_expression(text) or text}


def _literal_json(text: str) -> dict[str, Any]:
    return {"jsonString": extract_json(text) or EXAMPLE_JSON}


def _literal_text(text: str) -> dict[str, Any]:
    return {"text": text}


# ── Rule tables ──────────────────────────────────────────────


def build_rules(variant: Variant = "assistant", default_directory: str = "./") -> tuple[RouteRule, ...]:
    """Build the ordered rule table, ending with the catch-all rule.

    ``assistant`` fills tool arguments with fixed examples; ``literal``
    pulls them out of the user's text where it can.
    """
    if variant == "assistant":
        calculate_args = _constant(expression=EXAMPLE_EXPRESSION)
        json_args = _constant(jsonString=EXAMPLE_JSON)
        text_args = _constant(text=EXAMPLE_TEXT)
    elif variant == "literal":
        calculate_args = _literal_expression
        json_args = _literal_json
        text_args = _literal_text
    else:
        msg = f"Unknown router variant: {variant!r}"
        raise ValueError(msg)

    return (
        RouteRule(
            "calculate",
            ("计算", "算", "数学"),
            "calculate",
            calculate_args,
            "The request asks for a calculation.",
        ),
        RouteRule(
            "json",
            ("json", "格式化", "数据"),
            "json-format",
            json_args,
            "The request involves formatting JSON data.",
        ),
        RouteRule(
            "text",
            ("文本", "统计", "分析"),
            "text-stats",
            text_args,
            "The request asks for text analysis.",
        ),
        RouteRule(
            "system",
            ("系统", "状态", "信息"),
            "system-info",
            _constant(),
            "The request asks about system status.",
        ),
        RouteRule(
            "files",
            ("文件", "读取", "目录"),
            "list-directory",
            _constant(dirPath=default_directory),
            "The request involves files or directories.",
        ),
        RouteRule(
            "echo",
            ("回显", "echo"),
            FALLBACK_TOOL,
            _echo_text,
            "The request asks for an echo.",
        ),
        RouteRule(
            "default",
            (),
            FALLBACK_TOOL,
            _echo_text,
            "No keyword matched; echoing the message back.",
        ),
    )
