"""JSON format tool: parses and re-serializes with 2-space indentation."""

from __future__ import annotations

import json
from typing import Any

from toolwire.tools.base import ParameterSpec


def _reject_constant(name: str) -> Any:
    msg = f"Invalid JSON: {name} is not a valid JSON value"
    raise ValueError(msg)


class JsonFormatTool:
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "json-format"

    @property
    def description(self) -> str:
        return "Pretty-print a JSON document with 2-space indentation."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("jsonString", description="JSON text to format."),)

    async def execute(self, **kwargs: Any) -> str:
        """Parse and re-serialize. Key order is preserved.

        Raises:
            ValueError: If the input is not valid JSON.
        """
        raw: str = kwargs["jsonString"]
        try:
            parsed = json.loads(raw, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON: {e}"
            raise ValueError(msg) from e
        return json.dumps(parsed, indent=2, ensure_ascii=False)
