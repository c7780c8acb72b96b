"""Problem Generation
---

Utility functions for generating random flat infix expressions.
"""
import random
from typing import List, Optional

operators = list("+-*/^")
max_const = 12


def rand_bool(percent_chance=None):
    if percent_chance is None:
        percent_chance = 50
    return bool(random.randrange(100) < percent_chance)


def rand_number(max_value: int = max_const) -> int:
    return random.randint(0, max_value)


def rand_op(choices: Optional[List[str]] = None) -> str:
    choices = choices if choices is not None else operators
    return choices[random.randint(0, len(choices) - 1)]


def gen_flat_expression(
    num_terms: int = 4,
    *,
    ops: str = "+-*/^",
    max_value: int = max_const,
    power_probability: float = 0.25,
) -> str:
    """Generate a flat run of constants joined by binary operators.

    # Example

    ```
    3*7-2^2+10
    ```

    Exponents are kept to a single digit so that the values stay in a
    printable range.
    """
    if num_terms < 1:
        raise ValueError(f"num_terms must be at least 1, got: {num_terms}")
    choices = list(ops)
    if len(choices) == 0 or any(op not in operators for op in choices):
        raise ValueError(f"ops must be drawn from {''.join(operators)}, got: {ops}")
    without_power = [op for op in choices if op != "^"]

    pieces = [str(rand_number(max_value))]
    for _ in range(num_terms - 1):
        if "^" in choices and (
            len(without_power) == 0 or rand_bool(power_probability * 100)
        ):
            pieces.append("^")
            pieces.append(str(rand_number(3)))
        else:
            pieces.append(rand_op(without_power))
            pieces.append(str(rand_number(max_value)))
    return "".join(pieces)
