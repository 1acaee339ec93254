"""Parse and evaluate vector formulas with assignments, rows, constants and plugins."""

__version__ = "0.1.0"
__all__ = ["expressions", "formula", "operands", "plugins"]