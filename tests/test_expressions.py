import math

import pytest

from vecformula.expressions import (
    BinaryExpression,
    BinaryOp,
    FunctionCall,
    IndexExpression,
    ParseError,
    UnaryExpression,
    UnaryOp,
    VariableExpression,
    parse_expression,
)


def test_number():
    assert parse_expression("2.5") == 2.5


def test_signed_number_is_a_number():
    assert parse_expression("-3") == -3.0


@pytest.mark.parametrize("text, expected", [("1e3", 1e3), (".5", 0.5), ("5.", 5.0)])
def test_number_forms(text, expected):
    assert parse_expression(text) == expected


def test_infinity_and_nan_are_numbers():
    assert parse_expression("inf") == math.inf
    assert str(parse_expression("NaN")) == "nan"


def test_variable():
    assert parse_expression("alpha") == VariableExpression("alpha")


def test_index_single():
    assert parse_expression("x[1]") == IndexExpression("x", (1,))


def test_index_range():
    assert parse_expression("row[0:2]") == IndexExpression("row", (0, 2))


def test_unary_minus_on_variable():
    assert parse_expression("-a") == UnaryExpression(UnaryOp.MINUS, VariableExpression("a"))


def test_unary_plus_on_parenthesised():
    assert parse_expression("+(1)") == UnaryExpression(UnaryOp.PLUS, 1.0)


def test_parentheses_collapse():
    assert parse_expression("((a))") == VariableExpression("a")


def test_simple_binary():
    assert parse_expression("1+2") == BinaryExpression(1.0, ((BinaryOp.PLUS, 2.0),))


def test_precedence_mul_over_add():
    expected = BinaryExpression(
        1.0, ((BinaryOp.PLUS, BinaryExpression(2.0, ((BinaryOp.MUL, 3.0),))),)
    )
    assert parse_expression("1+2*3") == expected


def test_power_binds_tightest():
    expected = BinaryExpression(
        2.0, ((BinaryOp.MUL, BinaryExpression(3.0, ((BinaryOp.POW, 2.0),))),)
    )
    assert parse_expression("2*3**2") == expected


def test_power_chain_is_flat_and_left_to_right():
    expected = BinaryExpression(2.0, ((BinaryOp.POW, 3.0), (BinaryOp.POW, 2.0)))
    assert parse_expression("2**3**2") == expected


def test_mod_operator():
    assert parse_expression("a mod b") == BinaryExpression(
        VariableExpression("a"), ((BinaryOp.MOD, VariableExpression("b")),)
    )


def test_minus_before_number_after_operator():
    assert parse_expression("2--3") == BinaryExpression(2.0, ((BinaryOp.MINUS, -3.0),))


def test_function_call_with_arguments():
    expected = FunctionCall(
        "sum", (1.0, IndexExpression("a", (0, 2)))
    )
    assert parse_expression("sum(1, a[0:2])") == expected


def test_function_name_may_contain_underscore():
    expected = FunctionCall("arithmetic_average", (VariableExpression("x"),))
    assert parse_expression("arithmetic_average(x)") == expected


def test_whitespace_is_ignored():
    assert parse_expression("  1 +  2 ") == parse_expression("1+2")


@pytest.mark.parametrize(
    "text",
    ["", "1+", "a[1", "f()", "_x", "a[1.5]", "(1", "1 2", "sum(1,)", "2**"],
)
def test_invalid_text_raises(text):
    with pytest.raises(ParseError):
        parse_expression(text)


def test_parse_error_reports_position():
    with pytest.raises(ParseError) as excinfo:
        parse_expression("1+")
    assert excinfo.value.position == 1
    assert excinfo.value.text == "1+"


def test_parse_error_is_value_error():
    with pytest.raises(ValueError, match="Failed at"):
        parse_expression("a[")