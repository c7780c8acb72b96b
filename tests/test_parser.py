import math

import pytest

from arithtree.core.expressions import ConstantExpression, OpExpression
from arithtree.core.parser import (
    ExpressionParser,
    InvalidExpression,
    InvalidSyntax,
    ParserException,
    parse,
)


def test_parser_precedence() -> None:
    expression = ExpressionParser().parse("1+2*3-4")
    assert expression.compute() == 3
    assert expression.pretty_print_inline() == "(((1)+((2)*(3)))-(4))"


def test_parser_to_string() -> None:
    parser = ExpressionParser()
    expects = [
        {"input": "5", "output": "(5)"},
        {"input": "12^2", "output": "((12)^(2))"},
        {"input": "1+2", "output": "((1)+(2))"},
        {"input": "8-2-1", "output": "(((8)-(2))-(1))"},
        {"input": "8/2*2", "output": "(((8)/(2))*(2))"},
        {"input": "2^3^2", "output": "(((2)^(3))^(2))"},
        {"input": "2*3^2", "output": "((2)*((3)^(2)))"},
        {"input": "1-2^3*4+5", "output": "(((1)-(((2)^(3))*(4)))+(5))"},
    ]
    # The rightmost operator of the lowest precedence group becomes the root
    for expect in expects:
        expression = parser.parse(expect["input"])
        assert expression.pretty_print_inline() == expect["output"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5", 5),
        ("007", 7),
        ("12^2", 144),
        ("8-2-1", 5),
        ("8/2/2", 2),
        ("2^3^2", 64),
        ("2*3^2", 18),
        ("10-4/2*3", 4),
        ("1-2^3*4+5", -26),
        ("7/2", 3.5),
    ],
)
def test_parser_compute(text: str, expected: float) -> None:
    assert parse(text).compute() == expected


def test_parser_constant_leaf() -> None:
    expression = parse("42")
    assert isinstance(expression, ConstantExpression)
    assert expression.is_leaf()
    assert expression.value == 42.0


def test_parser_ends_with_digit_operand() -> None:
    """The last character is always scanned, and is an operand here"""
    expression = parse("3*45")
    assert isinstance(expression, OpExpression)
    assert expression.operator == "*"
    assert expression.right.value == 45


def test_parser_division_by_zero() -> None:
    assert parse("1/0").compute() == math.inf
    assert math.isnan(parse("0/0").compute())
    assert parse("1-2/0").compute() == -math.inf


def test_parser_exceptions() -> None:
    parser = ExpressionParser()
    expectations = [
        ("", InvalidExpression),
        ("+1", InvalidExpression),
        ("1+", InvalidExpression),
        ("1++2", InvalidExpression),
        ("*", InvalidExpression),
        ("-4", InvalidExpression),
        ("1+x", InvalidSyntax),
        ("1.5", InvalidSyntax),
        ("1 + 2", InvalidSyntax),
        ("(1+2)", InvalidSyntax),
        ("１", InvalidSyntax),
        ("9" * 400, InvalidSyntax),
    ]
    for in_str, out_err in expectations:
        with pytest.raises(out_err):
            parser.parse(in_str)


def test_parser_exception_messages() -> None:
    with pytest.raises(ParserException) as error:
        parse("1+abc")
    assert "abc" in str(error.value)
    assert str(error.value) == error.value.message


def test_parser_builds_a_new_tree_each_time() -> None:
    parser = ExpressionParser()
    one = parser.parse("1+2")
    two = parser.parse("1+2")
    assert two is not one
    assert two.left is not one.left
    assert two.structurally_equal(one)
    # Trees from the same text can be combined without sharing children
    both = OpExpression("*", one, parser.parse("1+2"))
    assert both.compute() == 9
    assert both.left.left is not both.right.left


def test_parser_long_flat_expressions() -> None:
    """Long chains are as deep as they are long, and still parse and compute"""
    parser = ExpressionParser()
    expression = parser.parse("+".join(["1"] * 1500))
    assert expression.depth() == 1500
    assert expression.compute() == 1500
    assert expression.pretty_print_inline().startswith("(" * 1499 + "(1)+(1))")
    assert len(expression.pretty_print_lines()) == 2999
    assert parser.parse("*".join(["2"] * 1500)).compute() == math.inf
    assert parser.parse("^".join(["1"] * 1500)).compute() == 1
    assert parser.parse("-".join(["2*3"] * 1500)).compute() == 6 - 6 * 1499


def test_parser_split_terms() -> None:
    parser = ExpressionParser()
    assert parser.split_terms("1+2*3-4", "+-") == (["1", "2*3", "4"], ["+", "-"])
    assert parser.split_terms("2^3", "+-") == (["2^3"], [])
    assert parser.split_terms("+", "+-") == (["", ""], ["+"])
