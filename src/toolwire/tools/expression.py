"""Sandboxed arithmetic evaluator used by the ``calculate`` tool.

A small recursive-descent parser over numbers, ``+ - * / % ^ **``,
parentheses, a few constants and an allow-list of math functions.
Nothing in the input is ever handed to ``eval``; any name outside the
allow-list is an error.

Grammar::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/" | "%") unary)*
    unary   := ("+" | "-") unary | power
    power   := primary (("^" | "**") unary)?
    primary := NUMBER | NAME | NAME "(" [expr ("," expr)*] ")" | "(" expr ")"

Names may carry a ``Math.`` prefix (``Math.sqrt(16)``, ``Math.PI``) for
callers that still send JavaScript-style expressions.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from toolwire.core.errors import ExpressionError

MAX_EXPRESSION_LENGTH = 1000
MAX_DEPTH = 100

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<name>[A-Za-z_][A-Za-z_0-9]*(?:\.[A-Za-z_][A-Za-z_0-9]*)?)
  | (?P<op>\*\*|[-+*/%^(),])
    """,
    re.VERBOSE,
)

_NAMESPACE_PREFIX = "math."


def _js_round(x: float) -> float:
    return float(math.floor(x + 0.5))


_CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
}

# name -> (callable, min args, max args or None for variadic)
_FUNCTIONS: dict[str, tuple[Callable[..., float], int, int | None]] = {
    "sqrt": (math.sqrt, 1, 1),
    "pow": (math.pow, 2, 2),
    "abs": (abs, 1, 1),
    "min": (min, 1, None),
    "max": (max, 1, None),
    "round": (_js_round, 1, 1),
    "floor": (math.floor, 1, 1),
    "ceil": (math.ceil, 1, 1),
    "exp": (math.exp, 1, 1),
    "log": (math.log, 1, 1),
    "log10": (math.log10, 1, 1),
    "log2": (math.log2, 1, 1),
    "sin": (math.sin, 1, 1),
    "cos": (math.cos, 1, 1),
    "tan": (math.tan, 1, 1),
    "asin": (math.asin, 1, 1),
    "acos": (math.acos, 1, 1),
    "atan": (math.atan, 1, 1),
    "hypot": (math.hypot, 1, None),
}


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str
    pos: int


def _tokenize(source: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(source):
        m = _TOKEN_RE.match(source, pos)
        if m is None:
            raise ExpressionError(f"Unexpected character {source[pos]!r}", pos)
        kind = m.lastgroup or ""
        if kind != "ws":
            tokens.append(_Token(kind, m.group(), pos))
        pos = m.end()
    tokens.append(_Token("end", "", len(source)))
    return tokens


def _canonical_name(raw: str) -> str:
    name = raw.lower()
    if name.startswith(_NAMESPACE_PREFIX):
        name = name[len(_NAMESPACE_PREFIX) :]
    return name


class _Parser:
    def __init__(self, source: str) -> None:
        self._tokens = _tokenize(source)
        self._index = 0
        self._depth = 0

    # ── Token helpers ─────────────────────────────────────────

    @property
    def _current(self) -> _Token:
        return self._tokens[self._index]

    def _advance(self) -> _Token:
        token = self._tokens[self._index]
        self._index += 1
        return token

    def _accept(self, *texts: str) -> _Token | None:
        token = self._current
        if token.kind == "op" and token.text in texts:
            return self._advance()
        return None

    def _expect(self, text: str) -> None:
        if self._accept(text) is None:
            token = self._current
            found = repr(token.text) if token.kind != "end" else "end of expression"
            raise ExpressionError(f"Expected {text!r} but found {found}", token.pos)

    # ── Grammar ───────────────────────────────────────────────

    def parse(self) -> float:
        if self._current.kind == "end":
            raise ExpressionError("Empty expression")
        value = self._expr()
        token = self._current
        if token.kind != "end":
            raise ExpressionError(f"Unexpected token {token.text!r}", token.pos)
        return value

    @contextmanager
    def _nested(self) -> Iterator[None]:
        self._depth += 1
        if self._depth > MAX_DEPTH:
            raise ExpressionError("Expression is nested too deeply", self._current.pos)
        try:
            yield
        finally:
            self._depth -= 1

    def _expr(self) -> float:
        with self._nested():
            value = self._term()
            while (op := self._accept("+", "-")) is not None:
                rhs = self._term()
                value = value + rhs if op.text == "+" else value - rhs
            return value

    def _term(self) -> float:
        value = self._unary()
        while (op := self._accept("*", "/", "%")) is not None:
            rhs = self._unary()
            if op.text == "*":
                value = value * rhs
            elif rhs == 0:
                raise ExpressionError("Division by zero", op.pos)
            elif op.text == "/":
                value = value / rhs
            else:
                value = math.fmod(value, rhs)
        return value

    def _unary(self) -> float:
        if (op := self._accept("+", "-")) is not None:
            with self._nested():
                value = self._unary()
            return -value if op.text == "-" else value
        return self._power()

    def _power(self) -> float:
        base = self._primary()
        if (op := self._accept("^", "**")) is not None:
            with self._nested():
                exponent = self._unary()
            try:
                return math.pow(base, exponent)
            except (OverflowError, ValueError) as e:
                raise ExpressionError(f"Cannot raise {base:g} to {exponent:g}: {e}", op.pos) from e
        return base

    def _primary(self) -> float:
        token = self._current
        if token.kind == "number":
            self._advance()
            return float(token.text)
        if token.kind == "name":
            self._advance()
            return self._name(token)
        if self._accept("(") is not None:
            value = self._expr()
            self._expect(")")
            return value
        if token.kind == "end":
            raise ExpressionError("Unexpected end of expression", token.pos)
        raise ExpressionError(f"Unexpected token {token.text!r}", token.pos)

    def _name(self, token: _Token) -> float:
        name = _canonical_name(token.text)
        if self._accept("(") is not None:
            if name not in _FUNCTIONS:
                raise ExpressionError(f"Unknown function {token.text!r}", token.pos)
            args = self._arguments()
            return self._call(name, token, args)
        if name in _CONSTANTS:
            return _CONSTANTS[name]
        if name in _FUNCTIONS:
            raise ExpressionError(f"Function {token.text!r} must be called", token.pos)
        raise ExpressionError(f"Unknown name {token.text!r}", token.pos)

    def _arguments(self) -> list[float]:
        args: list[float] = []
        if self._accept(")") is not None:
            return args
        args.append(self._expr())
        while self._accept(",") is not None:
            args.append(self._expr())
        self._expect(")")
        return args

    def _call(self, name: str, token: _Token, args: list[float]) -> float:
        func, min_args, max_args = _FUNCTIONS[name]
        if len(args) < min_args or (max_args is not None and len(args) > max_args):
            expected = str(min_args) if min_args == max_args else f"at least {min_args}"
            raise ExpressionError(
                f"{token.text}() takes {expected} argument(s), got {len(args)}",
                token.pos,
            )
        try:
            return float(func(*args))
        except (OverflowError, ValueError) as e:
            raise ExpressionError(f"{token.text}() failed: {e}", token.pos) from e


def evaluate(expression: str) -> float:
    """Evaluate *expression* and return a finite float.

    Raises:
        ExpressionError: On syntax errors, unknown names, bad arity,
            division by zero, domain errors or non-finite results.
    """
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(
            f"Expression too long ({len(expression)} > {MAX_EXPRESSION_LENGTH} characters)"
        )
    value = _Parser(expression).parse()
    if not math.isfinite(value):
        raise ExpressionError("Result is not a finite number")
    return value


def format_number(value: float) -> str:
    """Render integral values without a fractional part (``14`` not ``14.0``)."""
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)
