"""Fetch URL tool: GETs a resource and returns the start of its body.

Provides the first ``max_chars`` characters of the response text,
followed by ``...`` when the body was longer.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from toolwire.tools.base import ParameterSpec

if TYPE_CHECKING:
    from toolwire.config.schema import FetchConfig

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "..."


class FetchUrlTool:
    """HTTP fetch using ``httpx.AsyncClient``.

    Implements the :class:`Tool` protocol. A custom *transport* may be
    injected (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        from toolwire.config.schema import FetchConfig as FConfig

        self._config = config or FConfig()
        self._transport = transport

    @property
    def name(self) -> str:
        return "fetch-url"

    @property
    def description(self) -> str:
        return "Fetch a URL and return up to the first 1000 characters of its body."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (ParameterSpec("url", description="Absolute http(s) URL to fetch.", format="url"),)

    async def execute(self, **kwargs: Any) -> str:
        """Fetch the URL.

        Raises:
            RuntimeError: On timeouts and transport-level failures.
        """
        url: str = kwargs["url"]
        text = await self._fetch(url, self._config.max_chars + 1)
        return self._truncate(text)

    async def _fetch(self, url: str, max_chars: int) -> str:
        """Stream the body, stopping once *max_chars* characters are decoded."""
        parts: list[str] = []
        received = 0
        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
            transport=self._transport,
        ) as client:
            try:
                async with client.stream("GET", url) as resp:
                    async for chunk in resp.aiter_text():
                        parts.append(chunk)
                        received += len(chunk)
                        if received >= max_chars:
                            break
            except httpx.TimeoutException as e:
                msg = f"Request to {url} timed out after {self._config.timeout:g}s"
                raise RuntimeError(msg) from e
            except httpx.HTTPError as e:
                msg = f"Request to {url} failed: {e}"
                raise RuntimeError(msg) from e

        logger.debug("Fetched %s -> HTTP %d (%d chars read)", url, resp.status_code, received)
        return "".join(parts)[:max_chars]

    def _truncate(self, text: str) -> str:
        """Truncate text to max_chars characters."""
        limit = self._config.max_chars
        if len(text) <= limit:
            return text
        return text[:limit] + TRUNCATION_MARKER
