"""Aggregate functions that formulas can call by name."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

__all__ = ["Plugin", "SumPlugin", "ArithmeticAveragePlugin", "load_plugin"]

_NO_INPUT = "No input in function"


class Plugin(ABC):
    """A function that reduces a vector of values to a single number."""

    @abstractmethod
    def calculate(self, values: Iterable[float]) -> float:
        """Reduce ``values`` to one number."""


class SumPlugin(Plugin):
    """Sum of all values."""

    def calculate(self, values: Iterable[float]) -> float:
        items = list(values)
        if not items:
            raise ValueError(_NO_INPUT)
        return float(sum(items))


class ArithmeticAveragePlugin(Plugin):
    """Arithmetic mean of all values."""

    def calculate(self, values: Iterable[float]) -> float:
        items = list(values)
        if not items:
            raise ValueError(_NO_INPUT)
        return sum(items) / len(items)


_REGISTRY: dict[str, type[Plugin]] = {
    "sum": SumPlugin,
    "arithmetic_average": ArithmeticAveragePlugin,
}


def load_plugin(name: str) -> Plugin:
    """Return a new instance of the plugin registered under ``name``."""
    try:
        plugin_class = _REGISTRY[name]
    except KeyError:
        raise LookupError(f"Unknown function: {name}") from None
    return plugin_class()