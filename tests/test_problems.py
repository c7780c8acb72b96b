import random
import re

import pytest

from arithtree.core.parser import ExpressionParser
from arithtree.problems import gen_flat_expression, rand_bool, rand_number, rand_op


def test_problems_flat_expressions_parse() -> None:
    random.seed(1337)
    parser = ExpressionParser()
    for terms in range(1, 10):
        text = gen_flat_expression(terms)
        numbers = re.findall(r"[0-9]+", text)
        assert len(numbers) == terms
        assert re.fullmatch(r"[0-9]+([-+*/^][0-9]+)*", text)
        assert parser.parse(text) is not None


def test_problems_single_term() -> None:
    random.seed(1337)
    assert gen_flat_expression(1).isdigit()


def test_problems_restricted_operators() -> None:
    random.seed(1337)
    for _ in range(32):
        text = gen_flat_expression(6, ops="+")
        assert set(re.sub(r"[0-9]", "", text)) == {"+"}
        text = gen_flat_expression(3, ops="^")
        assert set(re.sub(r"[0-9]", "", text)) == {"^"}


def test_problems_errors() -> None:
    with pytest.raises(ValueError):
        gen_flat_expression(0)
    with pytest.raises(ValueError):
        gen_flat_expression(3, ops="%")
    with pytest.raises(ValueError):
        gen_flat_expression(3, ops="")


def test_problems_number_generation() -> None:
    random.seed(1337)
    numbers = [rand_number() for _ in range(256)]
    assert min(numbers) >= 0 and max(numbers) <= 12
    assert all(isinstance(n, int) for n in numbers)
    assert rand_op(["*"]) == "*"
    assert rand_bool(100) is True
    assert rand_bool(0) is False
