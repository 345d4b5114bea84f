"""Exception hierarchy for toolwire.

Every module imports from here. The hierarchy is:

    ToolwireError
    ├── ToolError(tool_name)
    │   ├── UnknownToolError
    │   ├── SchemaViolationError(parameter, reason)
    │   └── ToolExecutionError
    ├── ToolRegistrationError
    ├── ExpressionError
    └── ConfigError
"""

from __future__ import annotations


class ToolwireError(Exception):
    """Base exception for all toolwire errors."""


# ─── Tool Errors ──────────────────────────────────────────────


class ToolError(ToolwireError):
    """Base for errors raised while invoking a named tool."""

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        super().__init__(message)


class UnknownToolError(ToolError):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(tool_name, f"Unknown tool: {tool_name}")


class SchemaViolationError(ToolError):
    """Arguments do not satisfy the tool's parameter schema.

    ``reason`` is one of ``missing``, ``wrong type`` or ``invalid format``.
    """

    def __init__(
        self,
        tool_name: str,
        parameter: str,
        reason: str,
        detail: str | None = None,
    ) -> None:
        self.parameter = parameter
        self.reason = reason
        msg = f"Invalid arguments for tool '{tool_name}': parameter '{parameter}' {reason}"
        if detail:
            msg += f" ({detail})"
        super().__init__(tool_name, msg)


class ToolExecutionError(ToolError):
    """The tool's own logic failed (I/O, parse, network, evaluation)."""


# ─── Registry Errors ──────────────────────────────────────────


class ToolRegistrationError(ToolwireError):
    """Invalid or conflicting tool registration."""


# ─── Expression Errors ────────────────────────────────────────


class ExpressionError(ToolwireError):
    """Arithmetic expression could not be parsed or evaluated."""

    def __init__(self, message: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        super().__init__(message)


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(ToolwireError):
    """Invalid configuration."""
