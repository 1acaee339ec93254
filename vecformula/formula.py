"""Evaluation and assignment of vector formulas of the form ``target = source``."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Optional, Union

from .expressions import (
    BinaryExpression,
    BinaryOp,
    Expression,
    FunctionCall,
    IndexExpression,
    UnaryExpression,
    UnaryOp,
    VariableExpression,
    parse_expression,
)
from .operands import add, divide, multiply, power, subtract
from .plugins import Plugin, load_plugin

__all__ = ["FormulaError", "FormulaParser", "format_vector", "main"]

CONSTANTS_FILE = "constants.csv"

_BINARY = {
    BinaryOp.PLUS: add,
    BinaryOp.MINUS: subtract,
    BinaryOp.MUL: multiply,
    BinaryOp.DIV: divide,
    BinaryOp.POW: power,
}


class FormulaError(ValueError):
    """Raised when a formula cannot be evaluated or assigned."""


def format_vector(values: Sequence[float]) -> str:
    """Render values as ``{ a b c }``."""
    return "{ " + "".join(f"{value:g} " for value in values) + "}"


class FormulaParser:
    """Evaluates formulas over named constants and named data rows.

    ``rows`` maps a row name to a mutable list of values; assignments to
    indexed rows change those lists in place. ``plugins`` maps function names
    to plugins; without it, functions are looked up with :func:`load_plugin`.
    """

    def __init__(
        self,
        path: Union[str, os.PathLike[str]] = "./",
        rows: Optional[MutableMapping[str, list[float]]] = None,
        plugins: Optional[Mapping[str, Plugin]] = None,
    ) -> None:
        self.path = path
        self.constants: dict[str, float] = {}
        self.rows: MutableMapping[str, list[float]] = {} if rows is None else rows
        self.plugins = plugins
        if os.path.isfile(os.path.join(path, CONSTANTS_FILE)):
            self.load_constants(path)

    def load_constants(self, path: Union[str, os.PathLike[str]]) -> None:
        """Read ``name value`` pairs from ``constants.csv`` in ``path``."""
        file_path = os.path.join(path, CONSTANTS_FILE)
        try:
            with open(file_path, encoding="utf-8") as handle:
                words = handle.read().split()
        except OSError as exc:
            raise FormulaError("No constant's file") from exc
        if len(words) % 2:
            raise FormulaError("Malformed constants file")
        for name, value in zip(words[::2], words[1::2]):
            try:
                self.constants[name] = float(value)
            except ValueError as exc:
                raise FormulaError(f"Malformed constant value: {value}") from exc

    def parse(self, text: str) -> list[float]:
        """Parse ``target = source``, perform the assignment and return the values."""
        compact = "".join(text.split())
        position = compact.find("=")
        if position == 0:
            raise FormulaError("No data to the left of equality")
        if position < 0:
            raise FormulaError("No equality")
        if position != compact.rfind("="):
            raise FormulaError("Too much equality")
        target = parse_expression(compact[:position])
        source = parse_expression(compact[position + 1 :])
        return self.assign(target, source)

    def _row(self, name: str) -> list[float]:
        try:
            return self.rows[name]
        except KeyError:
            raise FormulaError(f"Unknown row: {name}") from None

    @staticmethod
    def _check_index(row: Sequence[float], index: int) -> None:
        if not 0 <= index < len(row):
            raise FormulaError(f"Index out of range: {index}")

    def assign(self, target: Expression, source: Expression) -> list[float]:
        """Store the value of ``source`` into ``target`` and return it."""
        if isinstance(target, float):
            raise FormulaError("You cannot assign anything to a number")
        if isinstance(target, UnaryExpression):
            raise FormulaError("You cannot assign anything to a unary operation")
        if isinstance(target, BinaryExpression):
            raise FormulaError("You cannot assign anything to a binary operation")
        if isinstance(target, FunctionCall):
            raise FormulaError("You cannot assign anything to a function call")

        data = self.evaluate(source)
        if isinstance(target, VariableExpression):
            if len(data) != 1:
                raise FormulaError("You can't assign multiple values to a constant")
            self.constants[target.name] = data[0]
            return data

        row = self._row(target.name)
        if len(target.args) == 1 and len(data) == 1:
            (index,) = target.args
            self._check_index(row, index)
            row[index] = data[0]
            return data
        if len(target.args) == 2:
            start, end = target.args
            if start > end:
                raise FormulaError("Wrong indexes")
            self._check_index(row, start)
            self._check_index(row, end)
            if end - start + 1 != len(data):
                raise FormulaError("Impossible to convert sizes")
            row[start : end + 1] = data
            return data
        raise FormulaError("Too much indexes")

    def _plugin(self, name: str) -> Plugin:
        if self.plugins is not None:
            try:
                return self.plugins[name]
            except KeyError:
                raise FormulaError("Unknown function") from None
        try:
            return load_plugin(name)
        except LookupError:
            raise FormulaError("Unknown function") from None

    def evaluate(self, expression: Union[Expression, str]) -> list[float]:
        """Evaluate an expression (or expression text) to a vector of values."""
        if isinstance(expression, str):
            expression = parse_expression(expression)
        if isinstance(expression, (int, float)):
            return [float(expression)]
        if isinstance(expression, UnaryExpression):
            value = self.evaluate(expression.arg)[0]
            return [-value if expression.op is UnaryOp.MINUS else +value]
        if isinstance(expression, FunctionCall):
            args = [value for arg in expression.args for value in self.evaluate(arg)]
            plugin = self._plugin(expression.function)
            try:
                return [plugin.calculate(args)]
            except (ValueError, ArithmeticError) as exc:
                raise FormulaError("Unknown function") from exc
        if isinstance(expression, VariableExpression):
            try:
                return [self.constants[expression.name]]
            except KeyError:
                raise FormulaError("Unknown variable") from None
        if isinstance(expression, IndexExpression):
            row = self._row(expression.name)
            if len(expression.args) == 1 and row:
                (index,) = expression.args
                self._check_index(row, index)
                return [row[index]]
            if len(expression.args) == 2 and len(row) >= 2:
                start, end = expression.args
                if start > end:
                    raise FormulaError("Wrong indexes")
                self._check_index(row, start)
                self._check_index(row, end)
                return list(row[start : end + 1])
            raise FormulaError("Too much indexes")
        if isinstance(expression, BinaryExpression):
            result = self.evaluate(expression.first)
            for op, operand in expression.ops:
                try:
                    combine = _BINARY[op]
                except KeyError:
                    raise FormulaError("Unknown operator") from None
                result = combine(result, self.evaluate(operand))
            return result
        raise FormulaError(f"Unsupported expression: {expression!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Read one formula from standard input, apply it and print the result."""
    arguments = argparse.ArgumentParser(
        description="Evaluate a single formula of the form target = source."
    )
    arguments.add_argument(
        "--constants-dir",
        default="./",
        help=f"directory holding {CONSTANTS_FILE}",
    )
    options = arguments.parse_args(argv)

    parser = FormulaParser(options.constants_dir)
    line = sys.stdin.readline()
    try:
        result = parser.parse(line)
    except (ValueError, ArithmeticError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"FormulaParser::parse(exp) : {format_vector(result)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())