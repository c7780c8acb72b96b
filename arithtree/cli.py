"""arithtree CLI
---

Command line application for parsing, computing, printing, and serializing
arithmetic expression trees.
"""
import logging
import random
from typing import Optional

import click
from wasabi import msg

from .about import __version__
from .config import DemoConfig
from .core.expressions import InvalidOperator, MathExpression, format_number
from .core.loader import LoaderException, TokenStream, dumps, load
from .core.parser import ExpressionParser, ParserException


def _parse_or_exit(text: str) -> MathExpression:
    try:
        return ExpressionParser().parse(text)
    except ParserException as error:
        msg.fail(f"parse failed for '{text}'", str(error), exits=1)
        raise  # pragma: nocover


@click.group()
@click.version_option(__version__)
def cli():
    """
    arithtree

    Command line app for parsing flat arithmetic expressions like "1+2*3-4"
    into trees, and saving/loading them as tagged text.
    """


@cli.command("eval")
@click.argument("text", type=str)
def cli_eval(text: str):
    """Parse and compute an expression."""
    print(format_number(_parse_or_exit(text).compute()))


@cli.command("tree")
@click.argument("text", type=str)
@click.option("indent", "--indent", default=0, help="Spaces before the root node")
def cli_tree(text: str, indent: int):
    """Print an expression as an indented tree."""
    _parse_or_exit(text).pretty_print(indent)


@cli.command("inline")
@click.argument("text", type=str)
def cli_inline(text: str):
    """Print an expression with every node wrapped in parentheses."""
    print(_parse_or_exit(text).pretty_print_inline())


@cli.command("save")
@click.argument("text", type=str)
def cli_save(text: str):
    """Print the serialized form of an expression."""
    print(dumps(_parse_or_exit(text)).rstrip())


@cli.command("load")
@click.argument("serialized", type=str, required=False)
def cli_load(serialized: Optional[str]):
    """Load serialized expressions and print them with their values.

    Reads SERIALIZED if given, otherwise stdin. Every expression in the
    input is loaded in order."""
    source = serialized
    if source is None:
        source = click.get_text_stream("stdin").read()
    stream = TokenStream(source)
    count = 0
    try:
        while not stream.at_end():
            expression = load(stream)
            value = format_number(expression.compute())
            print(f"{expression.pretty_print_inline()} = {value}")
            count += 1
    except (LoaderException, InvalidOperator) as error:
        msg.fail(f"load failed after {count} expression(s)", str(error), exits=1)
    if count == 0:
        msg.warn("No expressions found in the input")


@cli.command("problems")
@click.option("number", "--number", default=10, help="The number of problems to print")
@click.option(
    "terms", "--terms", default=4, help="The number of constants in each problem"
)
@click.option("seed", "--seed", default=None, type=int, help="Random seed")
def cli_print_problems(number: int, terms: int, seed: Optional[int]):
    """Print a set of randomly generated expressions with their values and
    serialized forms."""
    from .problems import gen_flat_expression

    if seed is not None:
        random.seed(seed)
    parser = ExpressionParser()
    msg.divider(f"{number} problems with {terms} terms")
    header = ("Text", "Value", "Serialized")
    widths = (24, 12, 60)
    aligns = ("l", "r", "l")
    data = []
    for i in range(number):
        text = gen_flat_expression(terms)
        expression = parser.parse(text)
        data.append(
            (text, format_number(expression.compute()), dumps(expression).rstrip())
        )
    msg.good(f"\nGenerated {number} problems!")

    print(msg.table(data, header=header, divider=True, widths=widths, aligns=aligns))


@cli.command("demo")
@click.option("expression", "--expression", default=DemoConfig().expression)
@click.option("serialized", "--serialized", default=DemoConfig().serialized)
@click.option("show_tree", "--tree", is_flag=True, help="Also print the indented tree")
@click.option("verbose", "--verbose", is_flag=True, help="Print debug logging")
def cli_demo(expression: str, serialized: str, show_tree: bool, verbose: bool):
    """Run the parse, compute, save, and load round trip."""
    from .demo import run_demo

    config = DemoConfig(
        expression=expression,
        serialized=serialized,
        show_tree=show_tree,
        verbose=verbose,
    )
    if config.verbose:
        logging.basicConfig(level=logging.DEBUG)
    msg.divider(config.expression)
    try:
        result = run_demo(config)
    except (ParserException, LoaderException, InvalidOperator) as error:
        msg.fail("demo failed", str(error), exits=1)
        raise  # pragma: nocover
    if result.reloaded_inline == result.inline:
        msg.good("loaded expression matches the original")
    else:
        msg.fail("loaded expression differs from the original", exits=1)


if __name__ == "__main__":
    cli()
