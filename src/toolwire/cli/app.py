"""Main CLI application.

Click commands for toolwire: tools, call, route, chat, serve, mcp, demo.
"""

from __future__ import annotations

import asyncio
import json as json_mod
import sys
from typing import TYPE_CHECKING, Any

import click

from toolwire import __version__
from toolwire.config.loader import load_config
from toolwire.core.errors import ConfigError, ToolwireError
from toolwire.core.log import setup_logging

if TYPE_CHECKING:
    from toolwire.config.schema import ToolwireConfig
    from toolwire.tools.dispatcher import Dispatcher


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> ToolwireConfig:
    """Load config with user-friendly error handling, then set up logging."""
    try:
        config = load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy
    setup_logging(config.logging)
    return config


def _build_dispatcher(config: ToolwireConfig) -> Dispatcher:
    from toolwire.tools.defaults import build_dispatcher

    try:
        return build_dispatcher(config)
    except ToolwireError as e:
        _error(str(e))
        raise  # unreachable


def _parse_arguments(args_json: str | None, pairs: tuple[str, ...]) -> dict[str, Any]:
    """Merge ``--args`` JSON with ``-a key=value`` pairs (pairs win)."""
    arguments: dict[str, Any] = {}
    if args_json:
        try:
            parsed = json_mod.loads(args_json)
        except json_mod.JSONDecodeError as e:
            _error(f"--args is not valid JSON: {e}")
            raise  # unreachable
        if not isinstance(parsed, dict):
            _error("--args must be a JSON object")
        arguments.update(parsed)
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            _error(f"Expected key=value, got {pair!r}")
        arguments[key] = value
    return arguments


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="toolwire")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """toolwire - Tool invocation and intent routing.

    Call registered tools directly, or describe what you want and let
    the router pick one.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── tools ────────────────────────────────────────────────────────


@cli.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def tools(ctx: click.Context, as_json: bool) -> None:
    """List registered tools and their parameters."""
    config = _load_config(ctx.obj["config_path"])
    dispatcher = _build_dispatcher(config)
    listing = dispatcher.list_tools()

    if as_json:
        click.echo(json_mod.dumps(listing, indent=2, ensure_ascii=False))
        return

    from toolwire.cli.display import ToolDisplay

    ToolDisplay().show_tools(listing)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("tool_name")
@click.option("--args", "args_json", default=None, help="Arguments as a JSON object.")
@click.option(
    "-a",
    "--arg",
    "pairs",
    multiple=True,
    help="String argument as key=value (repeatable).",
)
@click.pass_context
def call(ctx: click.Context, tool_name: str, args_json: str | None, pairs: tuple[str, ...]) -> None:
    """Invoke TOOL_NAME and print its result.

    Exits with status 1 when the tool reports a failure.
    """
    config = _load_config(ctx.obj["config_path"])
    arguments = _parse_arguments(args_json, pairs)
    dispatcher = _build_dispatcher(config)

    response = asyncio.run(dispatcher.invoke(tool_name, arguments))

    from toolwire.cli.display import ToolDisplay

    ToolDisplay().show_response(tool_name, response)
    if response.is_error:
        sys.exit(1)


# ── route ────────────────────────────────────────────────────────


@cli.command()
@click.argument("text")
@click.pass_context
def route(ctx: click.Context, text: str) -> None:
    """Show which tool the router would pick for TEXT."""
    from toolwire.cli.display import ToolDisplay
    from toolwire.routing.router import build_router

    config = _load_config(ctx.obj["config_path"])
    dispatcher = _build_dispatcher(config)
    try:
        router = build_router(config, dispatcher.registry)
    except ToolwireError as e:
        _error(str(e))
        return

    ToolDisplay().show_match(router.route(text))


# ── chat ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("message")
@click.pass_context
def chat(ctx: click.Context, message: str) -> None:
    """Route MESSAGE to a tool and run it."""
    from toolwire.cli.display import ToolDisplay
    from toolwire.routing.router import build_router

    config = _load_config(ctx.obj["config_path"])
    dispatcher = _build_dispatcher(config)
    try:
        router = build_router(config, dispatcher.registry)
    except ToolwireError as e:
        _error(str(e))
        return

    match = router.route(message)
    response = asyncio.run(dispatcher.invoke(match.tool_name, match.arguments))

    display = ToolDisplay()
    display.show_match(match)
    display.show_response(match.tool_name, response)


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.option("--host", default=None, help="Bind host (default: from config).")
@click.option("--port", type=int, default=None, help="Bind port (default: from config).")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload for development.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    import uvicorn

    from toolwire.api.app import create_app

    config = _load_config(ctx.obj["config_path"])

    effective_host = host or config.api.host
    effective_port = port or config.api.port

    app = create_app(config)
    click.echo(f"Starting toolwire API on {effective_host}:{effective_port}")
    uvicorn.run(
        app,
        host=effective_host,
        port=effective_port,
        reload=reload,
    )


# ── mcp ─────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def mcp(ctx: click.Context) -> None:
    """Start the MCP server on stdio for AI agent integration."""
    from toolwire.mcp.server import run_server

    config = _load_config(ctx.obj["config_path"])
    asyncio.run(run_server(config))


# ── demo ────────────────────────────────────────────────────────

DEMO_CALLS: tuple[tuple[str, dict[str, Any]], ...] = (
    ("echo", {"message": "Hello MCP!"}),
    ("calculate", {"expression": "2 + 3 * 4"}),
    ("json-format", {"jsonString": '{"name":"张三","age":25}'}),
    ("text-stats", {"text": "这是一个测试文本"}),
    ("system-info", {}),
)


@cli.command()
@click.option(
    "--url",
    default=None,
    help="Run against a toolwire API server instead of in-process.",
)
@click.pass_context
def demo(ctx: click.Context, url: str | None) -> None:
    """Run a short tour of the built-in tools."""
    from toolwire.cli.display import ToolDisplay

    display = ToolDisplay()

    if url:
        import httpx

        from toolwire.client import ToolwireAPIError, ToolwireClient
        from toolwire.tools.base import ContentBlock, InvocationResponse

        client = ToolwireClient(base_url=url)
        try:
            for tool_name, arguments in DEMO_CALLS:
                try:
                    payload = client.call_tool_sync(tool_name, arguments)
                except (ToolwireAPIError, httpx.HTTPError) as e:
                    _error(f"{url}: {e}")
                    return
                blocks = tuple(ContentBlock(b["text"]) for b in payload["content"]) or (ContentBlock(""),)
                display.show_response(tool_name, InvocationResponse(blocks, bool(payload["isError"])))
        finally:
            client.close()
            asyncio.run(client.aclose())
        return

    config = _load_config(ctx.obj["config_path"])
    dispatcher = _build_dispatcher(config)

    async def _run() -> None:
        for tool_name, arguments in DEMO_CALLS:
            display.show_response(tool_name, await dispatcher.invoke(tool_name, arguments))

    asyncio.run(_run())
