import io

import pytest

from arithtree import DemoConfig, InvalidSyntax, UnknownTag, run_demo


def test_demo_defaults():
    sink = io.StringIO()
    result = run_demo(file=sink)
    assert result.expression == "1+2*3-4"
    assert result.value == 3
    assert result.inline == "(((1)+((2)*(3)))-(4))"
    assert result.serialized == (
        "Op - Op + Constant 1 Op * Constant 2 Constant 3 Constant 4 "
    )
    assert result.reloaded_inline == result.inline
    assert result.reloaded_value == result.value
    assert result.direct_inline == "((3)+(4))"
    assert result.direct_value == 7
    assert result.tree == []
    lines = sink.getvalue().splitlines()
    assert lines == [
        "3",
        "(((1)+((2)*(3)))-(4))",
        "Op - Op + Constant 1 Op * Constant 2 Constant 3 Constant 4 ",
        "(((1)+((2)*(3)))-(4))",
        "((3)+(4))",
    ]


def test_demo_show_tree():
    sink = io.StringIO()
    config = DemoConfig(expression="2^3", serialized="Constant 1", show_tree=True)
    result = run_demo(config, file=sink)
    assert result.tree == ["^", " 2", " 3"]
    assert " 2\n 3\n" in sink.getvalue()
    assert result.value == 8
    assert result.direct_inline == "(1)"


def test_demo_errors():
    with pytest.raises(InvalidSyntax):
        run_demo(DemoConfig(expression="1+a"), file=io.StringIO())
    with pytest.raises(UnknownTag):
        run_demo(DemoConfig(serialized="Bogus 1 2"), file=io.StringIO())
