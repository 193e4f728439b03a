"""Convenience query handles over native cursors and types."""

from __future__ import annotations

from typing import Optional

from clang.cindex import CursorKind

from .errors import InvalidArgumentUse
from .native import LanguageKind
from . import constants


class TypeHandle:
    """Non-owning view of a native type."""

    def __init__(self, engine, native_type):
        self._engine = engine
        self._type = native_type

    @property
    def kind(self):
        return self._engine.type_kind(self._type)

    @property
    def spelling(self) -> str:
        return self._engine.type_spelling(self._type) or ""


class CursorHandle:
    """Non-owning view of a native cursor for follow-on engine queries.

    Handles do not own the cursor; they are valid only while the parser
    session that produced the cursor is open.
    """

    def __init__(self, engine, cursor):
        self._engine = engine
        self._cursor = cursor

    @property
    def spelling(self) -> str:
        return self._engine.cursor_spelling(self._cursor) or ""

    @property
    def display_name(self) -> str:
        """Spelling plus identifying detail, such as a function's parameters."""
        return self._engine.cursor_display_name(self._cursor) or ""

    @property
    def language(self) -> LanguageKind:
        return self._engine.cursor_language(self._cursor)

    @property
    def availability(self):
        return self._engine.cursor_availability(self._cursor)

    def is_null(self) -> bool:
        return self._engine.cursor_is_null(self._cursor)

    def is_function_decl(self) -> bool:
        return self._engine.cursor_kind(self._cursor) == CursorKind.FUNCTION_DECL

    def is_method_decl(self) -> bool:
        return self._engine.cursor_kind(self._cursor) == CursorKind.CXX_METHOD

    def definition(self) -> CursorHandle:
        """Handle on the defining declaration; a null handle when there is none."""
        return CursorHandle(self._engine, self._engine.cursor_definition(self._cursor))

    def referenced(self) -> CursorHandle:
        return CursorHandle(self._engine, self._engine.cursor_referenced(self._cursor))

    def num_arguments(self) -> int:
        """Number of non-variadic arguments of a call or function declaration."""
        result = self._engine.cursor_num_arguments(self._cursor)
        if result == constants.NO_ARGUMENTS:
            raise InvalidArgumentUse(
                "Cursor must be a function or method declaration to retrieve "
                "the number of arguments"
            )
        return result

    def argument(self, index: int) -> CursorHandle:
        if self.is_null() or not self.is_function_decl():
            raise InvalidArgumentUse(
                "Cursor must be a function declaration to retrieve arguments"
            )
        return CursorHandle(self._engine, self._engine.cursor_argument(self._cursor, index))

    def type(self) -> TypeHandle:
        return TypeHandle(self._engine, self._engine.cursor_type(self._cursor))

    def __repr__(self) -> str:
        if self.is_null():
            return "CursorHandle(<null>)"
        return f"CursorHandle({self.spelling!r})"
