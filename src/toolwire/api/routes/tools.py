"""Tool enumeration and invocation endpoints.

Tool failures are part of the response envelope, so ``/api/tools/call``
answers 200 whether or not the tool succeeded.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tools", tags=["tools"])


class CallToolRequest(BaseModel):
    toolName: str  # noqa: N815
    arguments: dict[str, Any] | None = None


class ContentBlockModel(BaseModel):
    type: str
    text: str


class CallToolResponse(BaseModel):
    content: list[ContentBlockModel]
    isError: bool  # noqa: N815


class ToolListResponse(BaseModel):
    tools: list[dict[str, Any]]


@router.get("", response_model=ToolListResponse)
async def list_tools(request: Request) -> ToolListResponse:
    """List registered tools with their parameter schemas."""
    dispatcher = request.app.state.dispatcher
    return ToolListResponse(tools=dispatcher.list_tools())


@router.post("/call", response_model=CallToolResponse)
async def call_tool(body: CallToolRequest, request: Request) -> CallToolResponse:
    """Invoke a tool and return its response envelope."""
    dispatcher = request.app.state.dispatcher
    response = await dispatcher.invoke(body.toolName, body.arguments)
    return CallToolResponse.model_validate(response.to_dict())
