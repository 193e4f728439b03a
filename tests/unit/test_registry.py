"""Tests for KindRegistry — cursor kind → node constructor dispatch."""

from __future__ import annotations

import pytest
from clang.cindex import CursorKind

from cursorast.errors import UnhandledKind
from cursorast.nodes import AstNode, FloatingLiteral, IntegerLiteral, TranslationUnit, VarDecl
from cursorast.registry import KindRegistry, build_default_registry
from cursorast.session import ParserSession
from tests.unit.fake_engine import FakeCursor, FakeEngine, translation_unit


class StringLiteral(AstNode):
    kind: str = "StringLiteral"
    text: str = ""

    @classmethod
    def from_cursor(cls, session, cursor) -> "StringLiteral":
        return cls(text=cursor.token)._bind(session, cursor)


class TestDefaultRegistry:
    def test_registers_the_four_variants(self):
        registry = build_default_registry()
        assert set(registry.kinds()) == {
            CursorKind.TRANSLATION_UNIT,
            CursorKind.INTEGER_LITERAL,
            CursorKind.FLOATING_LITERAL,
            CursorKind.VAR_DECL,
        }

    def test_constructors_belong_to_matching_variants(self):
        registry = build_default_registry()
        assert registry.lookup(CursorKind.TRANSLATION_UNIT) == TranslationUnit.from_cursor
        assert registry.lookup(CursorKind.INTEGER_LITERAL) == IntegerLiteral.from_cursor
        assert registry.lookup(CursorKind.FLOATING_LITERAL) == FloatingLiteral.from_cursor
        assert registry.lookup(CursorKind.VAR_DECL) == VarDecl.from_cursor

    def test_unexposed_expr_is_not_registered(self):
        assert CursorKind.UNEXPOSED_EXPR not in build_default_registry()


class TestLookup:
    def test_unknown_kind_raises_unhandled_kind(self):
        registry = KindRegistry()
        with pytest.raises(UnhandledKind, match="FUNCTION_DECL") as excinfo:
            registry.lookup(CursorKind.FUNCTION_DECL)
        assert excinfo.value.kind is CursorKind.FUNCTION_DECL

    def test_raw_kind_ids_are_reported(self):
        with pytest.raises(UnhandledKind, match="9999"):
            KindRegistry().lookup(9999)


class TestRegister:
    def test_duplicate_registration_raises(self):
        registry = build_default_registry()
        with pytest.raises(ValueError, match="already registered"):
            registry.register(CursorKind.VAR_DECL, VarDecl.from_cursor)

    def test_replace_overrides_existing_constructor(self):
        registry = build_default_registry()
        registry.register(CursorKind.VAR_DECL, StringLiteral.from_cursor, replace=True)
        assert registry.lookup(CursorKind.VAR_DECL) == StringLiteral.from_cursor
        assert len(registry) == 4

    def test_new_variant_is_built_without_touching_the_builder(self):
        root = translation_unit(FakeCursor(CursorKind.STRING_LITERAL, token='"hi"'))
        registry = build_default_registry()
        registry.register(CursorKind.STRING_LITERAL, StringLiteral.from_cursor)
        with ParserSession(engine=FakeEngine(root), registry=registry) as session:
            tu = session.parse("input.c")
        assert isinstance(tu.body[0], StringLiteral)
        assert tu.body[0].text == '"hi"'
