from typing import Any, Callable, Dict, Generator, List, Optional, TextIO

import numpy as np

from .loader import LOADERS, LoaderRegistry, TokenStream
from .tree import BinaryTreeNode

# Binary operators by their text symbol. All math is done on float64 values so
# that division by zero and fractional powers of negative numbers produce
# inf/nan rather than raising.
OPERATORS: Dict[str, Callable[[np.float64, np.float64], np.float64]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    "^": np.power,
}


class InvalidOperator(ValueError):
    pass


def format_number(value: float) -> str:
    """Render a number the way it is printed and serialized.

    Whole numbers drop their fractional part, other values use the shortest
    positional text that reads back as the identical float."""
    if not np.isfinite(value):
        return str(float(value))
    if value == 0 and np.signbit(value):
        return "-0"
    if value % 1 == 0:
        return f"{int(value)}"
    return np.format_float_positional(value, trim="-")


class MathExpression(BinaryTreeNode):
    """Math tree node that can be computed, printed, and serialized.

    `((1)+(2))`
    """

    left: Optional["MathExpression"]
    right: Optional["MathExpression"]

    # The leading token that identifies this node type in serialized text
    tag: str = ""

    def operate(self, one: Optional[float], two: Optional[float]) -> float:
        """The value of this node given the values of its left and right
        children (None for a missing child)"""
        raise NotImplementedError("must be implemented in subclass")

    def inline_text(self, left: Optional[str], right: Optional[str]) -> str:
        """The inline text of this node given the inline text of its children"""
        raise NotImplementedError("must be implemented in subclass")

    def _fold(self, node_fn: Callable) -> Any:
        """Combine results bottom-up: `node_fn(node, left, right)` is called
        with the results already computed for the node's children."""
        results: List[Any] = []

        def visit_fn(node, depth, data):
            right = results.pop() if node.right is not None else None
            left = results.pop() if node.left is not None else None
            results.append(node_fn(node, left, right))

        self.visit_postorder(visit_fn)
        return results[-1]

    def compute(self) -> float:
        """Evaluate the expression to a float value, left children first"""
        return self._fold(lambda node, one, two: node.operate(one, two))

    def pretty_print_inline(self) -> str:
        """Fully parenthesized single-line text for the expression"""
        return self._fold(lambda node, left, right: node.inline_text(left, right))

    def save_fields(self, sink: TextIO) -> None:
        """Write this node's tag and fields (but not its children) to `sink`"""
        raise NotImplementedError("must be implemented in subclass")

    def __str__(self) -> str:
        return self.pretty_print_inline()

    def pretty_print_lines(self, indent: int = 0) -> List[str]:
        """One line per node in preorder, each indented by its depth in the
        tree plus `indent` spaces."""
        lines: List[str] = []

        def visit_fn(node, depth, data):
            lines.append(" " * (indent + depth) + node.name)

        self.visit_preorder(visit_fn)
        return lines

    def pretty_print(self, indent: int = 0, file: TextIO = None) -> None:
        """Print the tree with one node per line, children indented beneath
        their parents.

        ```
        -
         +
          1
          *
           2
           3
         4
        ```
        """
        for line in self.pretty_print_lines(indent):
            print(line, file=file)

    def serialize(self, sink: TextIO) -> None:
        """Write the tagged text form of this tree to `sink`, parents before
        children and left before right."""

        def visit_fn(node, depth, data):
            node.save_fields(sink)

        self.visit_preorder(visit_fn)

    def to_list(self, visit: str = "preorder") -> List["MathExpression"]:
        """Convert this node hierarchy into a list."""
        results = []

        def visit_fn(node, depth, data):
            return results.append(node)

        if visit == "inorder":
            self.visit_inorder(visit_fn)
        elif visit == "preorder":
            self.visit_preorder(visit_fn)
        elif visit == "postorder":
            self.visit_postorder(visit_fn)
        else:
            raise ValueError(f"invalid visit order: {visit}")
        return results

    def structurally_equal(self, other: "MathExpression") -> bool:
        """True if `other` has the same shape, operators, and values."""
        mine = self.to_list()
        theirs = other.to_list()
        if len(mine) != len(theirs):
            return False
        for one, two in zip(mine, theirs):
            if one.tag != two.tag or one.name != two.name:
                return False
        return True


class ConstantExpression(MathExpression):
    """A Constant value node, where the value is accessible as `node.value`"""

    tag = "Constant"
    value: float

    def __init__(self, value: float = 0.0):
        super().__init__()
        self.value = float(value)

    @property
    def name(self) -> str:
        return format_number(self.value)

    def copy_node(self, left, right) -> "ConstantExpression":
        return ConstantExpression(self.value)

    def operate(self, one: Optional[float], two: Optional[float]) -> float:
        return self.value

    def inline_text(self, left: Optional[str], right: Optional[str]) -> str:
        return f"({self.name})"

    def save_fields(self, sink: TextIO) -> None:
        sink.write(f"{self.tag} {self.name} ")

    @staticmethod
    def load(stream: TokenStream, registry: LoaderRegistry) -> "ConstantExpression":
        return ConstantExpression(stream.next_number())


class OpExpression(MathExpression):
    """A binary operation applied to the values of its left and right children"""

    tag = "Op"
    operator: str
    left: MathExpression
    right: MathExpression

    def __init__(self, operator: str, left: MathExpression, right: MathExpression):
        if operator not in OPERATORS:
            raise InvalidOperator(f"unknown operator: {operator}")
        if left is None or right is None:
            raise ValueError(
                "{}: left/right children must both be valid".format(
                    self.__class__.__name__
                )
            )
        super().__init__(left, right)
        self.operator = operator

    @property
    def name(self) -> str:
        return self.operator

    def copy_node(self, left, right) -> "OpExpression":
        return OpExpression(self.operator, left, right)

    def operate(self, one: Optional[float], two: Optional[float]) -> float:
        operate = OPERATORS.get(self.operator, None)
        if operate is None:
            raise InvalidOperator(f"cannot compute unknown operator: {self.operator}")
        with np.errstate(all="ignore"):
            return float(operate(np.float64(one), np.float64(two)))

    def inline_text(self, left: Optional[str], right: Optional[str]) -> str:
        return f"({left}{self.operator}{right})"

    def save_fields(self, sink: TextIO) -> None:
        sink.write(f"{self.tag} {self.operator} ")

    @staticmethod
    def load(
        stream: TokenStream, registry: LoaderRegistry
    ) -> Generator[None, MathExpression, "OpExpression"]:
        operator = stream.next_char()
        left = yield
        right = yield
        return OpExpression(operator, left, right)


LOADERS.register(ConstantExpression.tag, ConstantExpression.load)
LOADERS.register(OpExpression.tag, OpExpression.load)
