"""MCP server exposing the toolwire registry over stdio."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

if TYPE_CHECKING:
    from toolwire.config.schema import ToolwireConfig
    from toolwire.tools.dispatcher import Dispatcher

server = Server("toolwire")

_dispatcher: Dispatcher | None = None


def set_dispatcher(dispatcher: Dispatcher | None) -> None:
    """Install the dispatcher the handlers use (``None`` resets it)."""
    global _dispatcher
    _dispatcher = dispatcher


def _get_dispatcher() -> Dispatcher:
    """Return the installed dispatcher, building a default one on first use."""
    global _dispatcher
    if _dispatcher is None:
        from toolwire.config.loader import load_config
        from toolwire.tools.defaults import build_dispatcher

        _dispatcher = build_dispatcher(load_config())
    return _dispatcher


def _get_tools() -> list[Tool]:
    """Translate registry entries into MCP tool definitions."""
    return [
        Tool(
            name=entry["name"],
            description=entry["description"],
            inputSchema=entry["parameterSchema"],
        )
        for entry in _get_dispatcher().list_tools()
    ]


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available MCP tools."""
    return _get_tools()


@server.call_tool(validate_input=False)  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    """Handle tool calls. Failures come back flagged, never as exceptions.

    Arguments are checked by the dispatcher, not by the SDK.
    """
    response = await _get_dispatcher().invoke(name, arguments or {})
    return CallToolResult(
        content=[TextContent(type="text", text=block.value) for block in response.content],
        isError=response.is_error,
    )


async def run_server(config: ToolwireConfig | None = None) -> None:
    """Start the MCP server on stdio."""
    if config is not None:
        from toolwire.tools.defaults import build_dispatcher

        set_dispatcher(build_dispatcher(config))

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
