"""Tool registry: the name → definition mapping.

Built once at startup (see :func:`toolwire.tools.defaults.build_registry`)
and handed by reference to the dispatcher and the intent router.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolwire.core.errors import ToolRegistrationError, UnknownToolError
from toolwire.tools.base import Tool, ToolDefinition

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of tool definitions, ordered by registration.

    Duplicate names are rejected unless ``replace=True`` is passed, in
    which case the new definition takes the old one's place.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition | Tool, *, replace: bool = False) -> ToolDefinition:
        """Register a tool definition, or any object satisfying :class:`Tool`.

        Returns:
            The stored definition.

        Raises:
            ToolRegistrationError: If the name is already registered and
                ``replace`` is false, or if *tool* is neither a definition
                nor a :class:`Tool`.
        """
        if isinstance(tool, ToolDefinition):
            definition = tool
        elif isinstance(tool, Tool):
            definition = ToolDefinition.from_tool(tool)
        else:
            msg = f"Cannot register object of type {type(tool).__name__} as a tool"
            raise ToolRegistrationError(msg)

        if definition.name in self._tools and not replace:
            msg = f"Tool already registered: {definition.name}"
            raise ToolRegistrationError(msg)

        self._tools[definition.name] = definition
        logger.debug("Registered tool: %s", definition.name)
        return definition

    def get(self, name: str) -> ToolDefinition:
        """Get a tool definition by name.

        Raises:
            UnknownToolError: If the tool is not found.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_definitions(self) -> list[ToolDefinition]:
        """Return all definitions in registration order."""
        return list(self._tools.values())

    def list_names(self) -> list[str]:
        """Return names of all registered tools."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(list(self._tools.values()))
