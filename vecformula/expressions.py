"""Expression tree and parser for vector formulas.

Grammar, from lowest to highest precedence::

    expr        := level1
    level1      := level2 (("+" | "-") level2)*
    level2      := level3 (("*" | "/" | "mod") level3)*
    level3      := simple ("**" simple)*
    simple      := number | "(" expr ")" | ("+" | "-") simple
                 | identifier "(" expr ("," expr)* ")"
                 | letters "[" int (":" int)* "]"
                 | letters

Numbers may carry a sign and an exponent, and ``nan``, ``inf`` and
``infinity`` are numbers too. Whitespace between tokens is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TypeVar, Union

__all__ = [
    "ParseError",
    "UnaryOp",
    "BinaryOp",
    "VariableExpression",
    "IndexExpression",
    "UnaryExpression",
    "FunctionCall",
    "BinaryExpression",
    "Expression",
    "parse_expression",
]

T = TypeVar("T")


class ParseError(ValueError):
    """Raised when text is not a complete, well-formed expression."""

    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.position = position
        super().__init__(f"Failed at: `{text[position:]}`")


class UnaryOp(Enum):
    PLUS = "+"
    MINUS = "-"


class BinaryOp(Enum):
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    MOD = "mod"
    POW = "**"


@dataclass(frozen=True)
class VariableExpression:
    """A named scalar constant."""

    name: str


@dataclass(frozen=True)
class IndexExpression:
    """An element (one index) or a range (two indexes) of a named row."""

    name: str
    args: tuple[int, ...]


@dataclass(frozen=True)
class UnaryExpression:
    op: UnaryOp
    arg: Expression


@dataclass(frozen=True)
class FunctionCall:
    function: str
    args: tuple[Expression, ...]


@dataclass(frozen=True)
class BinaryExpression:
    """A left-associative chain of operators of equal precedence."""

    first: Expression
    ops: tuple[tuple[BinaryOp, Expression], ...]


Expression = Union[
    float,
    VariableExpression,
    IndexExpression,
    UnaryExpression,
    FunctionCall,
    BinaryExpression,
]

_SPACE = re.compile(r"\s*")
_NUMBER = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:infinity|inf|nan))"
)
_INT = re.compile(r"[+-]?\d+")
_LETTERS = re.compile(r"[A-Za-z]+")
_IDENTIFIER = re.compile(r"[A-Za-z_]+")
_UNARY = re.compile(r"[+-]")

_LEVELS: dict[int, tuple[BinaryOp, ...]] = {
    1: (BinaryOp.PLUS, BinaryOp.MINUS),
    2: (BinaryOp.MOD, BinaryOp.MUL, BinaryOp.DIV),
    3: (BinaryOp.POW,),
}


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def skip(self) -> None:
        self.pos = _SPACE.match(self.text, self.pos).end()

    def token(self, pattern: re.Pattern[str]) -> Optional[str]:
        self.skip()
        match = pattern.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group()

    def literal(self, symbol: str) -> bool:
        self.skip()
        if self.text.startswith(symbol, self.pos):
            self.pos += len(symbol)
            return True
        return False

    def separated(
        self, item: Callable[[], Optional[T]], separator: str
    ) -> Optional[list[T]]:
        first = item()
        if first is None:
            return None
        items = [first]
        while True:
            saved = self.pos
            if not self.literal(separator):
                break
            following = item()
            if following is None:
                self.pos = saved
                break
            items.append(following)
        return items

    def expr(self) -> Optional[Expression]:
        return self.binary(1)

    def operator(self, level: int) -> Optional[BinaryOp]:
        for op in sorted(_LEVELS[level], key=lambda o: len(o.value), reverse=True):
            if self.literal(op.value):
                return op
        return None

    def binary(self, level: int) -> Optional[Expression]:
        def operand() -> Optional[Expression]:
            return self.simple() if level == 3 else self.binary(level + 1)

        first = operand()
        if first is None:
            return None
        ops: list[tuple[BinaryOp, Expression]] = []
        while True:
            saved = self.pos
            op = self.operator(level)
            if op is None:
                break
            rhs = operand()
            if rhs is None:
                self.pos = saved
                break
            ops.append((op, rhs))
        return BinaryExpression(first, tuple(ops)) if ops else first

    def integer(self) -> Optional[int]:
        digits = self.token(_INT)
        return None if digits is None else int(digits)

    def simple(self) -> Optional[Expression]:
        start = self.pos

        number = self.token(_NUMBER)
        if number is not None:
            return float(number)

        if self.literal("("):
            inner = self.expr()
            if inner is not None and self.literal(")"):
                return inner
        self.pos = start

        sign = self.token(_UNARY)
        if sign is not None:
            arg = self.simple()
            if arg is not None:
                return UnaryExpression(UnaryOp(sign), arg)
        self.pos = start

        name = self.token(_IDENTIFIER)
        if name is not None and self.literal("("):
            args = self.separated(self.expr, ",")
            if args is not None and self.literal(")"):
                return FunctionCall(name, tuple(args))
        self.pos = start

        name = self.token(_LETTERS)
        if name is not None and self.literal("["):
            indexes = self.separated(self.integer, ":")
            if indexes is not None and self.literal("]"):
                return IndexExpression(name, tuple(indexes))
        self.pos = start

        name = self.token(_LETTERS)
        if name is not None:
            return VariableExpression(name)
        self.pos = start
        return None


def parse_expression(text: str) -> Expression:
    """Parse the whole of ``text`` into an expression tree."""
    parser = _Parser(text)
    result = parser.expr()
    parser.skip()
    if result is None or parser.pos != len(text):
        raise ParseError(text, parser.pos)
    return result