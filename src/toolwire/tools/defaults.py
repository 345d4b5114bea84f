"""Built-in tool set and the factories that wire it up.

The registry is populated in a fixed order so that tool enumeration is
stable: echo, read-file, write-file, list-directory, json-format,
calculate, fetch-url, system-info, text-stats.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from toolwire.tools.calculate import CalculateTool
from toolwire.tools.dispatcher import Dispatcher
from toolwire.tools.echo import EchoTool
from toolwire.tools.fetch_url import FetchUrlTool
from toolwire.tools.file_ops import ListDirectoryTool, ReadFileTool, WriteFileTool
from toolwire.tools.json_format import JsonFormatTool
from toolwire.tools.registry import ToolRegistry
from toolwire.tools.system_info import SystemInfoTool
from toolwire.tools.text_stats import TextStatsTool

if TYPE_CHECKING:
    import httpx

    from toolwire.config.schema import ToolwireConfig

logger = logging.getLogger(__name__)


def build_registry(
    config: ToolwireConfig | None = None,
    *,
    fetch_transport: httpx.AsyncBaseTransport | None = None,
) -> ToolRegistry:
    """Create a registry holding every built-in tool.

    ``fetch-url`` is left out when ``tools.fetch.enabled`` is false.
    """
    from toolwire.config.schema import ToolwireConfig as TConfig

    config = config or TConfig()
    files = config.tools.files

    registry = ToolRegistry()
    registry.register(EchoTool())
    registry.register(ReadFileTool(files))
    registry.register(WriteFileTool(files))
    registry.register(ListDirectoryTool(files))
    registry.register(JsonFormatTool())
    registry.register(CalculateTool())
    if config.tools.fetch.enabled:
        registry.register(FetchUrlTool(config.tools.fetch, transport=fetch_transport))
    registry.register(SystemInfoTool())
    registry.register(TextStatsTool())

    logger.debug("Built registry with %d tools", len(registry))
    return registry


def build_dispatcher(config: ToolwireConfig | None = None, registry: ToolRegistry | None = None) -> Dispatcher:
    """Create a dispatcher over *registry* (or a fresh built-in one)."""
    from toolwire.config.schema import ToolwireConfig as TConfig

    config = config or TConfig()
    if registry is None:
        registry = build_registry(config)
    return Dispatcher(registry, timeout=config.tools.invoke_timeout)
