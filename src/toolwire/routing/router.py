"""Intent router: maps free text to a tool name and arguments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from toolwire.core.errors import ToolRegistrationError
from toolwire.routing.rules import FALLBACK_TOOL, RouteRule, Variant, build_rules

if TYPE_CHECKING:
    from toolwire.config.schema import ToolwireConfig
    from toolwire.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IntentMatch:
    """Result of routing: which tool to call and with what."""

    tool_name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    rationale: str | None = None
    rule: str = "default"

    def to_dict(self) -> dict[str, Any]:
        return {
            "toolName": self.tool_name,
            "arguments": dict(self.arguments),
            "rationale": self.rationale,
        }


class IntentRouter:
    """Ordered keyword router, first match wins.

    Rules naming a tool missing from *registry* are skipped, so every
    match names a registered tool. The fallback ``echo`` tool must be
    registered.

    Raises:
        ToolRegistrationError: If the fallback tool is not registered.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        variant: Variant = "assistant",
        default_directory: str = "./",
        rules: tuple[RouteRule, ...] | None = None,
    ) -> None:
        if FALLBACK_TOOL not in registry:
            msg = f"Intent router requires the '{FALLBACK_TOOL}' tool to be registered"
            raise ToolRegistrationError(msg)
        if rules is None:
            rules = build_rules(variant, default_directory)
        self._rules = tuple(r for r in rules if r.tool_name in registry)
        self._variant = variant

    @property
    def rules(self) -> tuple[RouteRule, ...]:
        return self._rules

    @property
    def variant(self) -> Variant:
        return self._variant

    def route(self, text: str) -> IntentMatch:
        """Pick a tool for *text*. Never raises."""
        lowered = text.lower()
        for rule in self._rules:
            if rule.keywords and not rule.matches(lowered):
                continue
            match = IntentMatch(
                tool_name=rule.tool_name,
                arguments=rule.synthesize(text),
                rationale=rule.rationale,
                rule=rule.name,
            )
            logger.debug("Routed %r -> %s (rule %s)", text[:80], match.tool_name, rule.name)
            return match

        # Only reachable with a custom rule table lacking a catch-all.
        return IntentMatch(tool_name=FALLBACK_TOOL, arguments={"message": text})


def build_router(config: ToolwireConfig, registry: ToolRegistry) -> IntentRouter:
    """Create a router configured from ``config.router``."""
    return IntentRouter(
        registry,
        variant=config.router.variant,
        default_directory=config.router.default_directory,
    )
