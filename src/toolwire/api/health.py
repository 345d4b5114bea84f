"""Health check endpoints."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])

_START_TIME = time.monotonic()


@router.get("/api/health")
async def health() -> dict[str, str]:
    """Basic health check -- always returns quickly."""
    return {"status": "ok"}


@router.get("/api/health/detailed")
async def health_detailed(request: Request) -> dict[str, Any]:
    """Detailed health check with registry status."""
    from toolwire import __version__

    registry = request.app.state.registry
    status = "ok" if len(registry) else "degraded"
    return {
        "status": status,
        "version": __version__,
        "uptime_seconds": round(time.monotonic() - _START_TIME, 1),
        "tools": len(registry),
        "router_variant": request.app.state.router.variant,
    }
