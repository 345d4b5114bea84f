"""Rich display for tool listings, invocation results and routing.

Accepts an optional :class:`~rich.console.Console` so tests can capture
output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from toolwire.routing.router import IntentMatch
    from toolwire.tools.base import InvocationResponse

_TRUNCATE_LEN = 2000


def _truncate(text: str, limit: int = _TRUNCATE_LEN) -> str:
    """Truncate text to *limit* characters with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + " ..."


def _format_parameters(schema: dict[str, Any]) -> str:
    required = set(schema.get("required", []))
    parts = []
    for name, prop in schema.get("properties", {}).items():
        marker = "" if name in required else "?"
        parts.append(f"{name}{marker}: {prop.get('type', 'any')}")
    return ", ".join(parts) or "-"


class ToolDisplay:
    """Renders toolwire objects to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    # ── Enumeration ───────────────────────────────────────────

    def show_tools(self, tools: Sequence[dict[str, Any]]) -> None:
        """Display registered tools as a table."""
        if not tools:
            self._console.print("No tools registered.")
            return

        table = Table(title=f"Tools ({len(tools)})", title_style="bold")
        table.add_column("Name", style="bold cyan", no_wrap=True)
        table.add_column("Parameters")
        table.add_column("Description")
        for entry in tools:
            table.add_row(
                entry["name"],
                _format_parameters(entry.get("parameterSchema", {})),
                entry.get("description", ""),
            )
        self._console.print(table)

    # ── Invocation ────────────────────────────────────────────

    def show_response(self, tool_name: str, response: InvocationResponse) -> None:
        """Display an invocation result; failures get a red border."""
        if response.is_error:
            title = f"[bold red]ERROR[/bold red] ({tool_name})"
            style = "red"
        else:
            title = f"[bold green]RESULT[/bold green] ({tool_name})"
            style = "green"
        self._console.print(
            Panel(
                Text(_truncate(response.text_value)),
                title=title,
                border_style=style,
            )
        )

    # ── Routing ───────────────────────────────────────────────

    def show_match(self, match: IntentMatch) -> None:
        """Display which tool the router picked and why."""
        line = Text("→ ", style="bold cyan")
        line.append(match.tool_name, style="bold")
        line.append(f"  [{match.rule}]", style="dim")
        self._console.print(line)
        if match.rationale:
            self._console.print(Text(f"  {match.rationale}", style="dim"))
        if match.arguments:
            self._console.print(Text(f"  arguments: {match.arguments}", style="dim"))
