"""Shared test fixtures for toolwire."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from toolwire.config.schema import ToolwireConfig
from toolwire.tools.base import ParameterSpec, ParamType, ToolDefinition
from toolwire.tools.defaults import build_registry
from toolwire.tools.dispatcher import Dispatcher
from toolwire.tools.registry import ToolRegistry

FETCH_BODY = "<html><body>hello from the mock transport</body></html>"


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """Keep user config files and leftover log handlers out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    monkeypatch.delenv("TOOLWIRE_CONFIG", raising=False)
    yield
    logger = logging.getLogger("toolwire")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)


def _fetch_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, text=FETCH_BODY)


@pytest.fixture
def fetch_transport() -> httpx.MockTransport:
    """Transport answering every fetch-url request with FETCH_BODY."""
    return httpx.MockTransport(_fetch_handler)


@pytest.fixture
def config(tmp_path) -> ToolwireConfig:
    """Default config with file tools confined to a temp directory."""
    return ToolwireConfig.model_validate(
        {
            "tools": {
                "invoke_timeout": 5.0,
                "files": {"allowed_dir": str(tmp_path)},
            },
        }
    )


@pytest.fixture
def registry(config: ToolwireConfig, fetch_transport: httpx.MockTransport) -> ToolRegistry:
    """Registry with every built-in tool, fetch-url on a mock transport."""
    return build_registry(config, fetch_transport=fetch_transport)


@pytest.fixture
def dispatcher(registry: ToolRegistry) -> Dispatcher:
    return Dispatcher(registry, timeout=5.0)


@pytest.fixture
def make_definition() -> Any:
    """Factory fixture for ToolDefinition with a recording executor.

    The returned definition's executor appends each argument dict it
    receives to ``calls``.
    """

    def _make(
        name: str = "sample",
        *,
        parameters: tuple[ParameterSpec, ...] = (ParameterSpec("value", ParamType.STRING),),
        result: Any = "ok",
        calls: list[dict[str, Any]] | None = None,
    ) -> ToolDefinition:
        async def _executor(arguments: dict[str, Any]) -> Any:
            if calls is not None:
                calls.append(arguments)
            if isinstance(result, BaseException):
                raise result
            return result

        return ToolDefinition(
            name=name,
            description=f"{name} tool",
            parameters=parameters,
            executor=_executor,
        )

    return _make


@pytest.fixture
def fetch_body() -> str:
    """Body served by the ``fetch_transport`` fixture."""
    return FETCH_BODY
