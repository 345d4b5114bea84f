"""Calculate tool: evaluates arithmetic in the sandboxed evaluator."""

from __future__ import annotations

from typing import Any

from toolwire.tools.base import ParameterSpec
from toolwire.tools.expression import evaluate, format_number


class CalculateTool:
    """Arithmetic and math-function evaluation.

    Implements the :class:`Tool` protocol. Expressions go through
    :func:`toolwire.tools.expression.evaluate`, never through ``eval``.
    """

    @property
    def name(self) -> str:
        return "calculate"

    @property
    def description(self) -> str:
        return "Evaluate a math expression, e.g. 2 + 3 * 4 or sqrt(16) + 2^3."

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return (
            ParameterSpec(
                "expression",
                description="Math expression using + - * / % ^, parentheses and functions like sqrt or pow.",
            ),
        )

    async def execute(self, **kwargs: Any) -> str:
        """Evaluate the expression.

        Returns:
            ``"<expression> = <result>"``.

        Raises:
            ExpressionError: If the expression is malformed or cannot be
                evaluated to a finite number.
        """
        expression: str = kwargs["expression"]
        result = evaluate(expression)
        return f"{expression} = {format_number(result)}"
