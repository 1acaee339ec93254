# vecformula

A small language for formulas over vectors of numbers. A formula is a
single assignment, `target = expression`. The target is a named constant or
an indexed row. The expression is arithmetic over numbers, constants,
elements and ranges of rows, and calls to function plugins.

## Expressions

`vecformula.expressions.parse_expression(text)` turns text into a tree of
frozen dataclasses: `VariableExpression`, `IndexExpression`,
`UnaryExpression`, `FunctionCall` and `BinaryExpression`. A bare number
becomes a `float`. Text that is not a complete expression raises
`ParseError`, a subclass of `ValueError`.

The parser accepts:

- numbers such as `3`, `2.5`, `1e-3`, `nan` and `inf`
- parentheses: `(a + b)`
- unary `+` and `-`
- binary operators, from loosest to tightest binding:
  - `+` and `-`
  - `*`, `/` and `mod`
  - `**`
- constants by name, letters only: `pi`
- row elements and ranges: `data[2]` or `data[0:3]`
- function calls, with names made of letters and `_`:
  `sum(data[0:3], 4)` or `arithmetic_average(x, y)`

Whitespace between tokens is ignored. `mod` is parsed, but evaluating it
raises `FormulaError("Unknown operator")`.

## Vector arithmetic

Every value is a vector of floats. `vecformula.operands` has `add`,
`subtract`, `multiply`, `divide` and `power`. They share these shape rules:

- if the second operand holds one value, it is applied to each item of the
  first;
- otherwise, if the first operand holds one value, the operation is applied
  with each item of the second on the left and that value on the right. So
  `subtract([1], [5, 7])` gives `[4.0, 6.0]`, and `power([2], [3, 4])` gives
  `[9.0, 16.0]`;
- otherwise both must have the same length and are combined pair by pair.

Any other pair of lengths raises `SizeMismatchError`, a subclass of
`ValueError`.

`divide` gives a true quotient only when the second operand holds one value.
When only the first holds one value, or both have the same length, the items
are multiplied. A zero divisor, or a zero factor in those cases, raises
`ZeroDivisionError`.

## Functions

`vecformula.plugins` has the abstract base class `Plugin`, with one method,
`calculate(values)`, that reduces values to one number. Two plugins come with
the package:

- `sum`, as `SumPlugin`
- `arithmetic_average`, as `ArithmeticAveragePlugin`

Both raise `ValueError` when they are given no values. `load_plugin(name)`
returns a new instance by name and raises `LookupError` for an unknown name.

In a formula, a call joins the values of all its arguments into one vector
and passes it to the plugin. An unknown name, or a plugin that raises
`ValueError` or `ArithmeticError`, gives `FormulaError("Unknown function")`.

## Evaluating and assigning

```python
from vecformula.formula import FormulaParser, format_vector

parser = FormulaParser(path="./", rows={"data": [1.0, 2.0, 3.0, 4.0]})
parser.parse("total = sum(data[0:2])")   # returns [6.0]
parser.parse("data[3] = total * 2")      # data is now [1.0, 2.0, 3.0, 12.0]

print(format_vector(parser.evaluate("data[0:1] * 10")))   # { 10 20 }
```

`FormulaParser(path="./", rows=None, plugins=None)`:

- `path` is the directory where `constants.csv` is looked for. The file is
  read only if it exists.
- `rows` maps row names to lists of floats. Assignments change these lists in
  place.
- `plugins` maps function names to `Plugin` instances. When it is given, only
  these functions are known. Without it, functions come from `load_plugin`.

`evaluate(expression)` takes a parsed tree or expression text and returns a
list of floats. `parse(text)` removes all whitespace and requires exactly one
`=` that is not the first character. It parses both sides, calls
`assign(target, source)`, and returns the assigned values.

Assignment targets:

- `name = expression` stores a constant. The right side must give exactly one
  value.
- `row[i] = expression` writes one element. The right side must give one
  value.
- `row[a:b] = expression` writes the elements `a` through `b` inclusive. The
  right side must give exactly `b - a + 1` values.

Numbers, unary operations, binary operations and function calls cannot be
assigned to. Unknown constants or rows, indexes out of range, ranges with
`a > b` and wrong numbers of indexes all raise `FormulaError`, a subclass of
`ValueError`. Reading a range needs a row with at least two values. Errors
from the vector operations, `SizeMismatchError` and `ZeroDivisionError`, pass
through unchanged.

`format_vector(values)` renders values as `{ 1 2.5 3 }`.

## Constants file

`load_constants(path)` reads `constants.csv` from `path`. The file holds
whitespace-separated `name value` pairs:

```
pi 3.14159
e  2.71828
```

A missing file, an odd number of words or a value that is not a number
raises `FormulaError`.

## Command line

```
echo "x = 2 * pi" | vecformula --constants-dir ./
```

The command reads one formula from standard input and applies it. It prints
`FormulaParser::parse(exp) : { ... }` with the assigned values and exits with
status 0. On failure it writes `error: <message>` to standard error and exits
with status 1. `--constants-dir` defaults to `./`.

## Limits

- The command has no rows. Formulas on the command line can only use numbers,
  constants and functions, and can only assign to constants.
- Nothing is saved. Assigned constants and changed rows live only in the
  `FormulaParser` object, and `constants.csv` is never written.
- Functions are not loaded from files. Only the built-in plugins, or those
  passed as `plugins`, can be called.

## Tests

```
pip install -e ".[test]"
pytest
```