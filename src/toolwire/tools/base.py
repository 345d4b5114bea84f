"""Tool protocol and data types.

Defines the ``Tool`` protocol that concrete tool classes satisfy, the
immutable ``ToolDefinition`` record the registry stores, and the
request/response envelope the dispatcher produces.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from toolwire.core.errors import ToolRegistrationError


class ParamType(str, Enum):
    """Primitive argument types a parameter may declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One named argument accepted by a tool."""

    name: str
    type: ParamType = ParamType.STRING
    description: str = ""
    required: bool = True
    format: str | None = None

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.format:
            schema["format"] = self.format
        return schema


@dataclass(frozen=True, slots=True)
class ContentBlock:
    """A unit of response payload. Only ``text`` blocks are produced."""

    value: str
    kind: str = "text"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.kind, "text": self.value}


@dataclass(frozen=True, slots=True)
class InvocationResponse:
    """Envelope returned for every invocation, successful or not.

    Failures are data: they carry a diagnostic text block exactly where a
    result would be, with ``is_error`` set so callers may style them.
    """

    content: tuple[ContentBlock, ...]
    is_error: bool = False

    def __post_init__(self) -> None:
        if not self.content:
            msg = "InvocationResponse requires at least one content block"
            raise ValueError(msg)

    @classmethod
    def text(cls, value: str) -> InvocationResponse:
        return cls(content=(ContentBlock(value),))

    @classmethod
    def failure(cls, message: str) -> InvocationResponse:
        return cls(content=(ContentBlock(message),), is_error=True)

    @property
    def text_value(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(b.value for b in self.content if b.kind == "text")

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": [b.to_dict() for b in self.content],
            "isError": self.is_error,
        }


@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """A call to a named tool with its arguments."""

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)


Executor = Callable[[dict[str, Any]], Awaitable["str | InvocationResponse"]]


@runtime_checkable
class Tool(Protocol):
    """Protocol that all tool implementations must satisfy."""

    @property
    def name(self) -> str:
        """Unique name for this tool."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        ...

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        """Declared arguments, in display order."""
        ...

    async def execute(self, **kwargs: Any) -> str:
        """Execute the tool with validated arguments.

        Returns:
            Text result of the tool execution.

        Raises:
            Exception: On execution failure.
        """
        ...


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Immutable registry entry: name, description, parameters, executor."""

    name: str
    description: str
    parameters: tuple[ParameterSpec, ...]
    executor: Executor

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            msg = "Tool name must be a non-empty string"
            raise ToolRegistrationError(msg)
        # Must be hashable: argument models are cached per definition.
        object.__setattr__(self, "parameters", tuple(self.parameters))
        seen: set[str] = set()
        for param in self.parameters:
            if param.name in seen:
                msg = f"Tool '{self.name}' declares parameter '{param.name}' twice"
                raise ToolRegistrationError(msg)
            seen.add(param.name)

    @classmethod
    def from_tool(cls, tool: Tool) -> ToolDefinition:
        """Build a definition whose executor calls ``tool.execute``."""

        async def _execute(arguments: dict[str, Any]) -> str:
            return await tool.execute(**arguments)

        return cls(
            name=tool.name,
            description=tool.description,
            parameters=tuple(tool.parameters),
            executor=_execute,
        )

    @property
    def parameters_schema(self) -> dict[str, Any]:
        """JSON Schema object describing the accepted arguments."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.parameters},
            "required": [p.name for p in self.parameters if p.required],
        }

    def describe(self) -> dict[str, Any]:
        """Enumeration entry: name, description and parameter schema."""
        return {
            "name": self.name,
            "description": self.description,
            "parameterSchema": self.parameters_schema,
        }
