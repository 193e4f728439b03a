"""Builder — native cursor → typed AST node, unwrapping synthetic wrappers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from clang.cindex import CursorKind

from .errors import UnresolvableExpression
from .native import ChildVisit, NativeEngine
from .nodes import AstNode
from .registry import KindRegistry

if TYPE_CHECKING:
    from .session import ParserSession

logger = logging.getLogger(__name__)

WRAPPER_KINDS: frozenset = frozenset({CursorKind.UNEXPOSED_EXPR})


def unwrap(engine: NativeEngine, cursor, wrapper_kinds: frozenset = WRAPPER_KINDS):
    """Return the first descendant of *cursor* whose kind is not a wrapper.

    Descendants are searched depth first in native order, descending through
    nested wrappers only. Raises ``UnresolvableExpression`` when the wrapper
    hides no concrete cursor.
    """
    found: list = []

    def visit(child) -> ChildVisit:
        if engine.cursor_kind(child) in wrapper_kinds:
            return ChildVisit.RECURSE
        found.append(child)
        return ChildVisit.BREAK

    engine.visit_children(cursor, visit)
    if not found:
        raise UnresolvableExpression(
            f"Unknown expression: no concrete cursor under {engine.cursor_kind(cursor)!r}"
        )
    return found[0]


class Builder:
    """Turns native cursors into nodes through a session's kind registry."""

    def __init__(
        self,
        session: ParserSession,
        registry: KindRegistry,
        wrapper_kinds: frozenset = WRAPPER_KINDS,
    ):
        self._session = session
        self._registry = registry
        self._wrapper_kinds = wrapper_kinds

    def build(self, cursor: Any) -> AstNode:
        engine = self._session.engine
        kind = engine.cursor_kind(cursor)
        if kind in self._wrapper_kinds:
            logger.debug("Unwrapping %r", kind)
            return self.build(unwrap(engine, cursor, self._wrapper_kinds))
        constructor = self._registry.lookup(kind)
        logger.debug("Building %r", kind)
        return constructor(self._session, cursor)
