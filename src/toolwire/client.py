"""ToolwireClient -- async and sync client for the toolwire REST API."""

from __future__ import annotations

from typing import Any, cast

import httpx


class ToolwireAPIError(Exception):
    """Error from the toolwire API."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")


class ToolwireClient:
    """Client for the toolwire REST API.

    Provides both async and sync interfaces. Tool failures are not
    exceptions: ``call_tool`` returns the envelope with ``isError`` set.
    Only HTTP errors raise :class:`ToolwireAPIError`.

    Usage (async)::

        async with ToolwireClient("http://localhost:8080") as client:
            result = await client.call_tool("calculate", {"expression": "2 + 3 * 4"})
            print(result["content"][0]["text"])

    Usage (sync)::

        client = ToolwireClient("http://localhost:8080")
        match = client.route_sync("帮我计算 2 + 3 * 4")
        print(match["toolName"])
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = 30.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sync_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._async_client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
        )
        self._sync_client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=sync_transport,
        )

    async def __aenter__(self) -> ToolwireClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._async_client.aclose()

    def close(self) -> None:
        self._sync_client.close()

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code >= 400:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ToolwireAPIError(response.status_code, str(detail))

    # -- Async methods ---------------------------------------------------------

    async def list_tools(self) -> list[dict[str, Any]]:
        resp = await self._async_client.get("/api/tools")
        self._raise_for_status(resp)
        return cast("list[dict[str, Any]]", resp.json()["tools"])

    async def call_tool(self, tool_name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = await self._async_client.post(
            "/api/tools/call",
            json={"toolName": tool_name, "arguments": arguments or {}},
        )
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    async def route(self, text: str) -> dict[str, Any]:
        resp = await self._async_client.post("/api/route", json={"text": text})
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    async def chat(self, message: str) -> dict[str, Any]:
        resp = await self._async_client.post("/api/chat", json={"message": message})
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    async def health(self) -> bool:
        try:
            resp = await self._async_client.get("/api/health")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    # -- Sync wrappers ---------------------------------------------------------

    def list_tools_sync(self) -> list[dict[str, Any]]:
        resp = self._sync_client.get("/api/tools")
        self._raise_for_status(resp)
        return cast("list[dict[str, Any]]", resp.json()["tools"])

    def call_tool_sync(self, tool_name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = self._sync_client.post(
            "/api/tools/call",
            json={"toolName": tool_name, "arguments": arguments or {}},
        )
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    def route_sync(self, text: str) -> dict[str, Any]:
        resp = self._sync_client.post("/api/route", json={"text": text})
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    def chat_sync(self, message: str) -> dict[str, Any]:
        resp = self._sync_client.post("/api/chat", json={"message": message})
        self._raise_for_status(resp)
        return cast("dict[str, Any]", resp.json())

    def health_sync(self) -> bool:
        try:
            resp = self._sync_client.get("/api/health")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False
