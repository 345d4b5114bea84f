"""Intent routing endpoints: route only, or route then invoke."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["routing"])


class RouteRequest(BaseModel):
    text: str


class RouteResponse(BaseModel):
    toolName: str  # noqa: N815
    arguments: dict[str, Any]
    rationale: str | None = None


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    match: RouteResponse
    result: dict[str, Any]


@router.post("/route", response_model=RouteResponse)
async def route(body: RouteRequest, request: Request) -> RouteResponse:
    """Pick a tool for free text without running it."""
    match = request.app.state.router.route(body.text)
    return RouteResponse(**match.to_dict())


@router.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, request: Request) -> ChatResponse:
    """Route a message to a tool and run it."""
    match = request.app.state.router.route(body.message)
    response = await request.app.state.dispatcher.invoke(match.tool_name, match.arguments)
    logger.debug("Chat %r handled by %s", body.message[:80], match.tool_name)
    return ChatResponse(match=RouteResponse(**match.to_dict()), result=response.to_dict())
