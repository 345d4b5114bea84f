"""Text statistics tool: character, word, line and sentence counts."""

from __future__ import annotations

import json
import re
from typing import Any

from toolwire.tools.base import ParameterSpec

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def compute_stats(text: str) -> dict[str, int]:
    """Return counts for *text*. Pure function of the string."""
    return {
        "characters": len(text),
        "words": len(text.split()),
        "lines": len(text.split("\n")),
        "sentences": sum(1 for s in _SENTENCE_SPLIT.split(text) if s.strip()),
    }


class TextStatsTool:
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "text-stats"

    @property
    def description(self) -> str:
        return "Count characters, words, lines and sentences in a text."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("text", description="Text to analyze."),)

    async def execute(self, **kwargs: Any) -> str:
        return json.dumps(compute_stats(kwargs["text"]), indent=2)
