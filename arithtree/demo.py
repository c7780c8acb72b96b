"""Round trip driver
---

Parse an expression, compute it, print it, save it to text, load it back and
print it again. Then load a hand written serialized expression directly.
"""
import io
from typing import List, TextIO

from pydantic import BaseModel

from .config import DemoConfig
from .core.expressions import format_number
from .core.loader import TokenStream, dumps, load
from .core.parser import ExpressionParser


class DemoResult(BaseModel):
    expression: str
    value: float
    inline: str
    tree: List[str] = []
    serialized: str
    reloaded_inline: str
    reloaded_value: float
    direct_inline: str
    direct_value: float


def run_demo(config: DemoConfig = None, file: TextIO = None) -> DemoResult:
    config = config if config is not None else DemoConfig()
    expression = ExpressionParser().parse(config.expression)
    value = expression.compute()
    print(format_number(value), file=file)
    inline = expression.pretty_print_inline()
    print(inline, file=file)
    tree: List[str] = []
    if config.show_tree:
        tree = expression.pretty_print_lines()
        for line in tree:
            print(line, file=file)

    serialized = dumps(expression)
    print(serialized, file=file)
    reloaded = load(TokenStream(io.StringIO(serialized)))
    print(reloaded.pretty_print_inline(), file=file)

    direct = load(config.serialized)
    print(direct.pretty_print_inline(), file=file)
    return DemoResult(
        expression=config.expression,
        value=value,
        inline=inline,
        tree=tree,
        serialized=serialized,
        reloaded_inline=reloaded.pretty_print_inline(),
        reloaded_value=reloaded.compute(),
        direct_inline=direct.pretty_print_inline(),
        direct_value=direct.compute(),
    )
