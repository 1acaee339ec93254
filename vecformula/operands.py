"""Element-wise arithmetic on vectors of floats with single-value broadcasting.

Every operation follows the same shape rules:

* if ``second`` holds exactly one value, it is applied to every item of ``first``;
* otherwise, if ``first`` holds exactly one value, it is applied to every item
  of ``second``;
* otherwise both vectors must have the same length and are combined pairwise.

Any other combination of lengths raises :class:`SizeMismatchError`.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Sequence

__all__ = [
    "SizeMismatchError",
    "add",
    "subtract",
    "multiply",
    "divide",
    "power",
]

_DIVIDE_BY_ZERO = "Divide by zero"


class SizeMismatchError(ValueError):
    """Raised when two vectors cannot be brought to a common length."""

    def __init__(self, first_size: int, second_size: int) -> None:
        self.first_size = first_size
        self.second_size = second_size
        super().__init__(
            f"Impossible to convert sizes ({first_size} and {second_size})"
        )


def _combine(
    first: Sequence[float],
    second: Sequence[float],
    op: Callable[[float, float], float],
) -> list[float]:
    """Apply ``op`` under the broadcasting rules of this module.

    When only ``first`` holds one value, ``op`` is called as
    ``op(second[i], first[0])``.
    """
    if len(second) == 1:
        scalar = second[0]
        return [op(value, scalar) for value in first]
    if len(first) == 1:
        scalar = first[0]
        return [op(value, scalar) for value in second]
    if len(first) == len(second):
        return [op(a, b) for a, b in zip(first, second)]
    raise SizeMismatchError(len(first), len(second))


def add(first: Sequence[float], second: Sequence[float]) -> list[float]:
    """Add two vectors element-wise."""
    return _combine(first, second, operator.add)


def subtract(first: Sequence[float], second: Sequence[float]) -> list[float]:
    """Subtract two vectors element-wise.

    When only ``first`` holds one value, that value is subtracted from each
    item of ``second``.
    """
    return _combine(first, second, operator.sub)


def multiply(first: Sequence[float], second: Sequence[float]) -> list[float]:
    """Multiply two vectors element-wise."""
    return _combine(first, second, operator.mul)


def divide(first: Sequence[float], second: Sequence[float]) -> list[float]:
    """Divide two vectors element-wise.

    Only a single-valued ``second`` gives a true quotient; a single-valued
    ``first`` and same-length vectors are combined by multiplication, with a
    zero divisor rejected in every case.
    """
    if len(second) == 1:
        divisor = second[0]
        if first and divisor == 0:
            raise ZeroDivisionError(_DIVIDE_BY_ZERO)
        return [value / divisor for value in first]
    if len(first) == 1:
        factor = first[0]
        if second and factor == 0:
            raise ZeroDivisionError(_DIVIDE_BY_ZERO)
        return [value * factor for value in second]
    if len(first) == len(second):
        if any(value == 0 for value in second):
            raise ZeroDivisionError(_DIVIDE_BY_ZERO)
        return [a * b for a, b in zip(first, second)]
    raise SizeMismatchError(len(first), len(second))


def power(first: Sequence[float], second: Sequence[float]) -> list[float]:
    """Raise vectors to powers element-wise.

    When only ``first`` holds one value, each item of ``second`` is raised to
    that value.
    """
    return _combine(first, second, math.pow)