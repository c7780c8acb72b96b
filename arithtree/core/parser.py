from typing import List, Tuple

from .expressions import ConstantExpression, MathExpression, OpExpression


class ParserException(Exception):
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class InvalidExpression(ParserException):
    pass


class InvalidSyntax(ParserException):
    pass


# Operator groups from lowest to highest precedence
_PRECEDENCE = ("+-", "*/", "^")


class ExpressionParser:
    """Parser for converting flat infix text into binary trees.

    The input is a run of whole-number constants joined by the binary
    operators `+ - * / ^`, with no whitespace or parentheses.

    ### Splitting Rules

    For each operator group from lowest to highest precedence, the text is
    split at every operator in the group. The pieces are parsed with the
    next group and joined left to right, which is the same tree as
    repeatedly splitting at the rightmost operator:

    ```
    (Expr)     = (Expr) [ "+" | "-" ] (Expr)
               | (Expr) [ "*" | "/" ] (Expr)
               | (Expr) "^" (Expr)
               | (Constant)
    (Constant) = [0-9]+
    ```

    All operators are left associative, including `^`, so `2^3^2` is
    `(2^3)^2`.
    """

    def parse(self, input_text: str) -> MathExpression:
        """Parse a string representation of an expression into a tree
        that can be later computed. Each call builds a new tree.

        Returns : The expression tree.
        """
        return self._parse(input_text, 0)

    def _parse(self, text: str, level: int) -> MathExpression:
        if text == "":
            raise InvalidExpression("Cannot parse an empty expression")
        if level == len(_PRECEDENCE):
            return self.parse_constant(text)

        terms, operators = self.split_terms(text, _PRECEDENCE[level])
        expression = self._parse(terms[0], level + 1)
        for operator, term in zip(operators, terms[1:]):
            expression = OpExpression(
                operator, expression, self._parse(term, level + 1)
            )
        return expression

    def split_terms(self, text: str, operators: str) -> Tuple[List[str], List[str]]:
        """Split text at each of the given operators.

        Returns the pieces between operators, and the operators in order."""
        terms: List[str] = []
        found: List[str] = []
        start = 0
        for i, ch in enumerate(text):
            if ch in operators:
                terms.append(text[start:i])
                found.append(ch)
                start = i + 1
        terms.append(text[start:])
        return terms, found

    def parse_constant(self, text: str) -> ConstantExpression:
        """Parse a whole-number literal into a constant node"""
        if not (text.isascii() and text.isdigit()):
            raise InvalidSyntax(f"Expected a whole number, got: {text}")
        try:
            return ConstantExpression(int(text))
        except (OverflowError, ValueError):
            raise InvalidSyntax(f"Number out of range: {text}")


def parse(input_text: str) -> MathExpression:
    """Parse text with a fresh `ExpressionParser`"""
    return ExpressionParser().parse(input_text)
