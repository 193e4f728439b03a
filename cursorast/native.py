"""Native Parse Engine Layer — libclang cursors through clang.cindex."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from ctypes import POINTER, c_int, c_uint
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from clang import cindex

logger = logging.getLogger(__name__)


class ChildVisit(Enum):
    """Visitation control returned by a visit_children callback."""

    BREAK = 0
    CONTINUE = 1
    RECURSE = 2


class LanguageKind(Enum):
    """Source language of the entity a cursor refers to."""

    INVALID = 0
    C = 1
    OBJ_C = 2
    C_PLUS_PLUS = 3


class NativeEngine(ABC):
    """Contract of the external parse engine consumed by the AST builder.

    Handles (index, translation unit, cursor, extent, location, token, type)
    are opaque to the caller; only the engine that produced them interprets
    them.
    """

    # ── index / translation unit lifecycle ───────────────────────

    @abstractmethod
    def create_index(self, exclude_decls_from_pch: bool, display_diagnostics: bool): ...

    @abstractmethod
    def dispose_index(self, index) -> None: ...

    @abstractmethod
    def parse_translation_unit(
        self,
        index,
        source_path: str,
        args: Sequence[str],
        unsaved_files: Optional[Sequence[tuple[str, str]]],
        options: int,
    ): ...

    @abstractmethod
    def translation_unit_cursor(self, translation_unit): ...

    @abstractmethod
    def terminate_threads(self) -> None: ...

    # ── traversal ────────────────────────────────────────────────

    @abstractmethod
    def visit_children(self, cursor, callback: Callable[[Any], ChildVisit]) -> None:
        """Invoke *callback* once per direct child, in source order.

        The callback's return value selects whether the visit continues with
        the next sibling, descends into the child, or stops.
        """

    # ── cursor accessors ─────────────────────────────────────────

    @abstractmethod
    def cursor_kind(self, cursor): ...

    @abstractmethod
    def cursor_spelling(self, cursor) -> Optional[str]: ...

    @abstractmethod
    def cursor_type(self, cursor): ...

    @abstractmethod
    def type_spelling(self, native_type) -> Optional[str]: ...

    @abstractmethod
    def type_kind(self, native_type): ...

    @abstractmethod
    def cursor_extent(self, cursor): ...

    @abstractmethod
    def range_is_null(self, extent) -> bool: ...

    @abstractmethod
    def cursor_location(self, cursor): ...

    @abstractmethod
    def get_token(self, translation_unit, location): ...

    @abstractmethod
    def token_spelling(self, translation_unit, token) -> Optional[str]: ...

    @abstractmethod
    def cursor_is_null(self, cursor) -> bool: ...

    @abstractmethod
    def var_decl_initializer(self, cursor): ...

    # ── convenience accessors ────────────────────────────────────

    @abstractmethod
    def cursor_display_name(self, cursor) -> Optional[str]: ...

    @abstractmethod
    def cursor_language(self, cursor) -> LanguageKind: ...

    @abstractmethod
    def cursor_availability(self, cursor): ...

    @abstractmethod
    def cursor_definition(self, cursor): ...

    @abstractmethod
    def cursor_referenced(self, cursor): ...

    @abstractmethod
    def cursor_num_arguments(self, cursor) -> int: ...

    @abstractmethod
    def cursor_argument(self, cursor, index: int): ...


def _native_function(name: str, argtypes: list, restype):
    """Look up a libclang export that clang.cindex does not register itself."""
    fn = getattr(cindex.conf.lib, name)
    fn.argtypes = argtypes
    fn.restype = restype
    return fn


class ClangNativeEngine(NativeEngine):
    """Concrete engine that delegates to libclang via clang.cindex."""

    def __init__(self, library_file: Optional[str] = None):
        if library_file and not cindex.Config.loaded:
            cindex.Config.set_library_file(library_file)

    def create_index(self, exclude_decls_from_pch: bool, display_diagnostics: bool):
        logger.debug(
            "Creating index (exclude_decls_from_pch=%s, display_diagnostics=%s)",
            exclude_decls_from_pch,
            display_diagnostics,
        )
        return cindex.Index(
            cindex.conf.lib.clang_createIndex(
                int(exclude_decls_from_pch), int(display_diagnostics)
            )
        )

    def dispose_index(self, index) -> None:
        # cindex.Index calls clang_disposeIndex from its finalizer; disposing
        # here as well would free the native index twice.
        logger.debug("Releasing index %r", index)

    def parse_translation_unit(
        self,
        index,
        source_path: str,
        args: Sequence[str],
        unsaved_files: Optional[Sequence[tuple[str, str]]],
        options: int,
    ):
        return index.parse(
            source_path,
            args=list(args),
            unsaved_files=list(unsaved_files) if unsaved_files else None,
            options=options,
        )

    def translation_unit_cursor(self, translation_unit):
        return translation_unit.cursor

    def terminate_threads(self) -> None:
        # libclang owns no worker pool when driven through clang.cindex
        logger.debug("No native worker threads to terminate")

    def visit_children(self, cursor, callback: Callable[[Any], ChildVisit]) -> None:
        def visitor(child, _parent, _data):
            child._tu = cursor._tu
            return callback(child).value

        cindex.conf.lib.clang_visitChildren(
            cursor, cindex.callbacks["cursor_visit"](visitor), None
        )

    def cursor_kind(self, cursor):
        try:
            return cursor.kind
        except ValueError:
            # kinds newer than the installed bindings know about
            return cursor._kind_id

    def cursor_spelling(self, cursor) -> Optional[str]:
        return cursor.spelling

    def cursor_type(self, cursor):
        return cursor.type

    def type_spelling(self, native_type) -> Optional[str]:
        return native_type.spelling

    def type_kind(self, native_type):
        return native_type.kind

    def cursor_extent(self, cursor):
        return cursor.extent

    def range_is_null(self, extent) -> bool:
        fn = _native_function("clang_Range_isNull", [cindex.SourceRange], c_int)
        return bool(fn(extent))

    def cursor_location(self, cursor):
        return cursor.location

    def get_token(self, translation_unit, location):
        try:
            fn = _native_function(
                "clang_getToken",
                [cindex.TranslationUnit, cindex.SourceLocation],
                POINTER(cindex.Token),
            )
        except AttributeError:
            # a zero-width extent still lexes the token starting at location
            extent = cindex.SourceRange.from_locations(location, location)
            return next(iter(translation_unit.get_tokens(extent=extent)), None)
        result = fn(translation_unit, location)
        if not result:
            return None
        token = cindex.Token.from_buffer_copy(result.contents)
        token._tu = translation_unit
        dispose = _native_function(
            "clang_disposeTokens",
            [cindex.TranslationUnit, POINTER(cindex.Token), c_uint],
            None,
        )
        dispose(translation_unit, result, 1)
        return token

    def token_spelling(self, translation_unit, token) -> Optional[str]:
        if token is None:
            return None
        return token.spelling

    def cursor_is_null(self, cursor) -> bool:
        if cursor is None:
            return True
        fn = _native_function("clang_Cursor_isNull", [cindex.Cursor], c_int)
        return bool(fn(cursor))

    def var_decl_initializer(self, cursor):
        try:
            fn = _native_function(
                "clang_Cursor_getVarDeclInitializer", [cindex.Cursor], cindex.Cursor
            )
        except AttributeError:
            logger.debug("libclang lacks clang_Cursor_getVarDeclInitializer")
            return self._initializer_from_children(cursor)
        initializer = fn(cursor)
        if initializer is not None:
            initializer._tu = cursor._tu
        return initializer

    def _initializer_from_children(self, cursor):
        """Pre-17 libclang: the initializer is the last expression after '='."""
        if "=" not in (token.spelling for token in cursor.get_tokens()):
            return None
        expressions = [
            child for child in cursor.get_children() if child.kind.is_expression()
        ]
        return expressions[-1] if expressions else None

    def cursor_display_name(self, cursor) -> Optional[str]:
        return cursor.displayname

    def cursor_language(self, cursor) -> LanguageKind:
        fn = _native_function("clang_getCursorLanguage", [cindex.Cursor], c_int)
        return LanguageKind(fn(cursor))

    def cursor_availability(self, cursor):
        return cursor.availability

    def cursor_definition(self, cursor):
        return cursor.get_definition()

    def cursor_referenced(self, cursor):
        return cursor.referenced

    def cursor_num_arguments(self, cursor) -> int:
        return cindex.conf.lib.clang_Cursor_getNumArguments(cursor)

    def cursor_argument(self, cursor, index: int):
        return cindex.conf.lib.clang_Cursor_getArgument(cursor, index)
