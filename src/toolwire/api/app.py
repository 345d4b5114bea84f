"""FastAPI application factory for the toolwire REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

if TYPE_CHECKING:
    from toolwire.config.schema import ToolwireConfig
    from toolwire.tools.registry import ToolRegistry


def create_app(
    config: ToolwireConfig | None = None,
    registry: ToolRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The registry, dispatcher and router are built once here and shared
    by every request through ``app.state``.
    """
    from toolwire import __version__
    from toolwire.config.loader import load_config
    from toolwire.routing.router import build_router
    from toolwire.tools.defaults import build_dispatcher, build_registry

    if config is None:
        config = load_config()
    if registry is None:
        registry = build_registry(config)

    app = FastAPI(
        title="toolwire",
        description="Tool invocation and intent routing API",
        version=__version__,
    )
    app.state.config = config
    app.state.registry = registry
    app.state.dispatcher = build_dispatcher(config, registry)
    app.state.router = build_router(config, registry)

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from toolwire.api.health import router as health_router
    from toolwire.api.routes.chat import router as chat_router
    from toolwire.api.routes.tools import router as tools_router

    app.include_router(tools_router)
    app.include_router(chat_router)
    app.include_router(health_router)

    return app
