from .about import __version__
from .config import DemoConfig
from .core.expressions import (
    OPERATORS,
    ConstantExpression,
    InvalidOperator,
    MathExpression,
    OpExpression,
    format_number,
)
from .core.loader import (
    LOADERS,
    InvalidNumber,
    LoaderException,
    LoaderRegistry,
    OutOfTokens,
    TokenStream,
    UnknownTag,
    dumps,
    load,
    loads,
    register_loader,
)
from .core.parser import (
    ExpressionParser,
    InvalidExpression,
    InvalidSyntax,
    ParserException,
    parse,
)
from .core.tree import STOP, BinaryTreeNode
from .demo import DemoResult, run_demo
