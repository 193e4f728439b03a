"""Kind Dispatch Table — native cursor kind → typed node constructor."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from clang.cindex import CursorKind

from .errors import UnhandledKind
from .nodes import AstNode, FloatingLiteral, IntegerLiteral, TranslationUnit, VarDecl

if TYPE_CHECKING:
    from .session import ParserSession

logger = logging.getLogger(__name__)

NodeConstructor = Callable[["ParserSession", Any], AstNode]


class KindRegistry:
    """Open registry of node constructors keyed by native cursor kind.

    Lookups never fall back to a default: an unregistered kind raises
    ``UnhandledKind`` so unsupported cursors stay visible to callers.
    """

    def __init__(self):
        self._constructors: dict[Any, NodeConstructor] = {}

    def register(
        self, kind: Any, constructor: NodeConstructor, *, replace: bool = False
    ) -> None:
        if kind in self._constructors and not replace:
            raise ValueError(f"Cursor kind already registered: {kind!r}")
        self._constructors[kind] = constructor
        logger.debug("Registered constructor for %r", kind)

    def lookup(self, kind: Any) -> NodeConstructor:
        constructor = self._constructors.get(kind)
        if constructor is None:
            raise UnhandledKind(kind)
        return constructor

    def kinds(self) -> list[Any]:
        return list(self._constructors)

    def __contains__(self, kind: Any) -> bool:
        return kind in self._constructors

    def __len__(self) -> int:
        return len(self._constructors)


def build_default_registry() -> KindRegistry:
    """Registry with the node variants shipped by this package."""
    registry = KindRegistry()
    registry.register(CursorKind.TRANSLATION_UNIT, TranslationUnit.from_cursor)
    registry.register(CursorKind.INTEGER_LITERAL, IntegerLiteral.from_cursor)
    registry.register(CursorKind.FLOATING_LITERAL, FloatingLiteral.from_cursor)
    registry.register(CursorKind.VAR_DECL, VarDecl.from_cursor)
    return registry
