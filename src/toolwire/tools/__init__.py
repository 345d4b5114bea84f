"""Tool layer: definitions, registry, argument validation and dispatch.

Concrete tools live in their own modules; :mod:`toolwire.tools.defaults`
assembles them into a registry.
"""

from toolwire.tools.base import (
    ContentBlock,
    InvocationRequest,
    InvocationResponse,
    ParameterSpec,
    ParamType,
    Tool,
    ToolDefinition,
)
from toolwire.tools.defaults import build_dispatcher, build_registry
from toolwire.tools.dispatcher import Dispatcher
from toolwire.tools.registry import ToolRegistry

__all__ = [
    "ContentBlock",
    "Dispatcher",
    "InvocationRequest",
    "InvocationResponse",
    "ParamType",
    "ParameterSpec",
    "Tool",
    "ToolDefinition",
    "ToolRegistry",
    "build_dispatcher",
    "build_registry",
]
