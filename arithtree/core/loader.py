"""Tagged text deserialization
---

Expressions are written as whitespace separated tokens, pre-order, with each
node starting with a tag that names its type:

```
Expr ::= "Constant" Number | "Op" OpChar Expr Expr
```

A `LoaderRegistry` maps each tag to a loader function that reads the rest of
the node from a `TokenStream`.
"""
import io
import logging
import threading
from types import GeneratorType
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    Generator,
    List,
    Optional,
    TextIO,
    Union,
)

if TYPE_CHECKING:  # pragma: nocover
    from .expressions import MathExpression


class LoaderException(Exception):
    def __init__(self, message):
        self.message = message

    def __str__(self):
        return self.message


class UnknownTag(LoaderException):
    pass


class OutOfTokens(LoaderException):
    pass


class InvalidNumber(LoaderException):
    pass


class TokenStream:
    """Read whitespace delimited tokens from a text stream.

    Only the characters that make up the requested tokens are consumed, so
    multiple expressions can be read back to back from the same stream."""

    source: TextIO

    def __init__(self, source: Union[str, TextIO]):
        if isinstance(source, str):
            source = io.StringIO(source)
        self.source = source
        self._peeked: Optional[str] = None

    def _read(self) -> str:
        if self._peeked is not None:
            ch, self._peeked = self._peeked, None
            return ch
        return self.source.read(1)

    def _skip_whitespace(self) -> str:
        """Return the first non-whitespace character, or "" at the end"""
        ch = self._read()
        while ch != "" and ch.isspace():
            ch = self._read()
        return ch

    def at_end(self) -> bool:
        """True if only whitespace remains in the stream."""
        ch = self._skip_whitespace()
        if ch == "":
            return True
        self._peeked = ch
        return False

    def next_token(self) -> str:
        """Read the next whitespace delimited token."""
        ch = self._skip_whitespace()
        if ch == "":
            raise OutOfTokens("Read beyond the end of the serialized expression")
        token = ""
        while ch != "" and not ch.isspace():
            token += ch
            ch = self._read()
        return token

    def next_char(self) -> str:
        """Read the next single non-whitespace character."""
        ch = self._skip_whitespace()
        if ch == "":
            raise OutOfTokens("Expected a character, found the end of the stream")
        return ch

    def next_number(self) -> float:
        """Read the next token as a float."""
        token = self.next_token()
        try:
            return float(token)
        except ValueError:
            raise InvalidNumber(f"Expected a number, got: {token}")


# A loader returns the loaded node, or, for nodes with children, a generator
# that yields once per child and is sent each child as it is loaded. The
# registry drives these generators itself so that nesting depth is not limited
# by the call stack.
Loader = Callable[
    [TokenStream, "LoaderRegistry"],
    Union["MathExpression", Generator[None, "MathExpression", "MathExpression"]],
]


class LoaderRegistry:
    """Map serialized type tags to the functions that load them.

    Loaders receive the token stream positioned after their tag and the
    registry that dispatched them. Children are loaded through the same
    registry."""

    _log = logging.getLogger("LoaderRegistry")
    _loaders: Dict[str, Loader]

    def __init__(self):
        self._loaders = {}
        self._lock = threading.Lock()

    def register(self, tag: str, loader: Loader) -> None:
        """Store (or replace) the loader for the given tag."""
        with self._lock:
            self._loaders[tag] = loader
        self._log.debug("registered loader for tag: %s", tag)

    def get(self, tag: str) -> Optional[Loader]:
        with self._lock:
            return self._loaders.get(tag, None)

    @property
    def tags(self):
        with self._lock:
            return sorted(self._loaders.keys())

    def __contains__(self, tag: str) -> bool:
        return self.get(tag) is not None

    def load(self, source: Union[str, TextIO, TokenStream]) -> "MathExpression":
        """Load one expression from the front of `source`.

        Raises `UnknownTag` if the stream holds a tag with no registered loader."""
        stream = source if isinstance(source, TokenStream) else TokenStream(source)
        # Loaders that are still waiting for children, innermost last
        waiting: List[Generator] = []
        while True:
            node = self._load_node(stream, waiting)
            while node is not None:
                if not waiting:
                    return node
                try:
                    waiting[-1].send(node)
                    node = None
                except StopIteration as done:
                    waiting.pop()
                    node = done.value

    def _load_node(
        self, stream: TokenStream, waiting: List[Generator]
    ) -> Optional["MathExpression"]:
        """Read one tag and run its loader. Returns the node, or None if the
        loader is now waiting for children."""
        tag = stream.next_token()
        loader = self.get(tag)
        if loader is None:
            self._log.error("found unexpected token %s", tag)
            raise UnknownTag(f"found unexpected token {tag}")
        loaded = loader(stream, self)
        if not isinstance(loaded, GeneratorType):
            return loaded
        try:
            next(loaded)
        except StopIteration as done:
            return done.value
        waiting.append(loaded)
        return None


# The process-wide registry. Built-in expression types add themselves to it
# when `arithtree.core.expressions` is imported.
LOADERS = LoaderRegistry()


def register_loader(tag: str, loader: Loader) -> None:
    LOADERS.register(tag, loader)


def load(source: Union[str, TextIO, TokenStream]) -> "MathExpression":
    """Load one expression using the process-wide registry"""
    return LOADERS.load(source)


def loads(text: str) -> "MathExpression":
    """Load one expression from a string of serialized text"""
    return LOADERS.load(TokenStream(text))


def dumps(expression: "MathExpression") -> str:
    """Serialize an expression to a string"""
    sink = io.StringIO()
    expression.serialize(sink)
    return sink.getvalue()
