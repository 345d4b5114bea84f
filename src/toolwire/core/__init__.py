"""Core types, errors, and shared utilities."""

from toolwire.core.errors import (
    ConfigError,
    ExpressionError,
    SchemaViolationError,
    ToolError,
    ToolExecutionError,
    ToolRegistrationError,
    ToolwireError,
    UnknownToolError,
)
from toolwire.core.log import setup_logging

__all__ = [
    "ConfigError",
    "ExpressionError",
    "SchemaViolationError",
    "ToolError",
    "ToolExecutionError",
    "ToolRegistrationError",
    "ToolwireError",
    "UnknownToolError",
    "setup_logging",
]
