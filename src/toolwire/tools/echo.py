"""Echo tool: returns the message with a fixed label."""

from __future__ import annotations

from typing import Any

from toolwire.tools.base import ParameterSpec

ECHO_LABEL = "Tool echo: "


class EchoTool:
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo a message back to the caller."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("message", description="Message to echo."),)

    async def execute(self, **kwargs: Any) -> str:
        return f"{ECHO_LABEL}{kwargs['message']}"
