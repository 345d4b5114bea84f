"""Keyword-based intent routing."""

from toolwire.routing.router import IntentMatch, IntentRouter, build_router
from toolwire.routing.rules import RouteRule, build_rules

__all__ = [
    "IntentMatch",
    "IntentRouter",
    "RouteRule",
    "build_router",
    "build_rules",
]
