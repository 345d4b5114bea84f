"""System info tool: platform, runtime, uptime, memory and time."""

from __future__ import annotations

import json
import platform
import sys
import time
from datetime import UTC, datetime
from typing import Any

from toolwire.tools.base import ParameterSpec

_START_TIME = time.monotonic()


def _memory_usage() -> dict[str, int]:
    """Peak resident set size of this process, in bytes."""
    try:
        import resource
    except ImportError:  # not available on Windows
        return {}
    usage = resource.getrusage(resource.RUSAGE_SELF)
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    scale = 1 if sys.platform == "darwin" else 1024
    return {"maxRss": usage.ru_maxrss * scale}


def collect_system_info() -> dict[str, Any]:
    return {
        "platform": sys.platform,
        "pythonVersion": platform.python_version(),
        "uptime": round(time.monotonic() - _START_TIME, 3),
        "memoryUsage": _memory_usage(),
        "currentTime": datetime.now(UTC).isoformat(),
    }


class SystemInfoTool:
    """Implements the :class:`Tool` protocol."""

    @property
    def name(self) -> str:
        return "system-info"

    @property
    def description(self) -> str:
        return "Report platform, Python version, uptime, memory usage and the current time."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return ()

    async def execute(self, **kwargs: Any) -> str:
        return json.dumps(collect_system_info(), indent=2)
