"""Errors raised while building the typed AST."""

from __future__ import annotations

from typing import Any


class CursorAstError(Exception):
    """Base class for all construction-layer errors."""

    pass


class UnhandledKind(CursorAstError):
    """Raised when a cursor kind has no registered constructor."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Cursor kind not implemented: {_kind_name(kind)}")


class UnresolvableExpression(CursorAstError):
    """Raised when an unexposed expression wraps no concrete cursor."""

    pass


class InvalidArgumentUse(CursorAstError, TypeError):
    """Raised when a handle accessor is used on a cursor that cannot answer it."""

    pass


class SessionClosed(CursorAstError):
    """Raised when a closed parser session is asked to parse."""

    pass


def _kind_name(kind: Any) -> str:
    return getattr(kind, "name", None) or repr(kind)
