"""Typed AST over libclang cursors."""

from .api import dump_ast, parse_file, parse_source  # noqa: F401
from .errors import (  # noqa: F401
    CursorAstError,
    InvalidArgumentUse,
    SessionClosed,
    UnhandledKind,
    UnresolvableExpression,
)
from .nodes import (  # noqa: F401
    AstNode,
    FloatingLiteral,
    IntegerLiteral,
    Literal,
    TranslationUnit,
    VarDecl,
)
from .session import ParserSession  # noqa: F401
from .session_types import SessionConfig  # noqa: F401
