"""Dispatcher: validates and executes tool invocations.

``invoke`` never raises for tool-level problems. Unknown tools, schema
violations, executor exceptions and timeouts all come back as an
:class:`InvocationResponse` with ``is_error=True`` and a diagnostic text
block.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Any

from toolwire.core.errors import ToolError, ToolExecutionError
from toolwire.tools.base import InvocationResponse
from toolwire.tools.validation import validate_arguments

if TYPE_CHECKING:
    from toolwire.tools.base import InvocationRequest
    from toolwire.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs named tools from a :class:`ToolRegistry`.

    Args:
        registry: Registry to resolve tool names against.
        timeout: Seconds allowed per invocation; ``None`` disables.
    """

    def __init__(self, registry: ToolRegistry, *, timeout: float | None = None) -> None:
        self._registry = registry
        self._timeout = timeout

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def list_tools(self) -> list[dict[str, Any]]:
        """Enumerate registered tools as ``{name, description, parameterSchema}``."""
        return [d.describe() for d in self._registry.list_definitions()]

    async def invoke_request(self, request: InvocationRequest) -> InvocationResponse:
        return await self.invoke(request.tool_name, request.arguments)

    async def invoke(self, tool_name: str, arguments: Any = None) -> InvocationResponse:
        """Look up, validate and execute *tool_name* with *arguments*."""
        t0 = time.monotonic()
        try:
            response = await self._invoke(tool_name, arguments)
        except ToolError as exc:
            logger.warning("Tool %s failed: %s", tool_name, exc)
            response = InvocationResponse.failure(str(exc))

        elapsed = time.monotonic() - t0
        logger.info(
            "Tool %s: %.3fs -> %s",
            tool_name,
            elapsed,
            "error" if response.is_error else "ok",
        )
        return response

    async def _invoke(self, tool_name: str, arguments: Any) -> InvocationResponse:
        definition = self._registry.get(tool_name)
        validated = validate_arguments(definition, arguments)

        logger.debug("Executing tool %s with %s", tool_name, sorted(validated))
        try:
            if self._timeout is None:
                result = await definition.executor(validated)
            else:
                result = await asyncio.wait_for(definition.executor(validated), timeout=self._timeout)
        except Exception as exc:
            if isinstance(exc, TimeoutError) and self._timeout is not None:
                msg = f"Tool '{tool_name}' timed out after {self._timeout:g}s"
                raise ToolExecutionError(tool_name, msg) from None
            logger.debug("Executor for %s raised", tool_name, exc_info=True)
            msg = f"Tool '{tool_name}' failed: {str(exc) or type(exc).__name__}"
            raise ToolExecutionError(tool_name, msg) from exc

        if isinstance(result, InvocationResponse):
            return result
        return InvocationResponse.text(str(result))
