"""End-to-end tests against libclang through the composable API."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from clang import cindex

from cursorast.api import dump_ast, parse_file, parse_source
from cursorast.errors import UnhandledKind
from cursorast import native
from cursorast.native import LanguageKind
from cursorast.nodes import FloatingLiteral, IntegerLiteral, TranslationUnit, VarDecl
from cursorast.session import ParserSession
from cursorast.session_types import SessionConfig

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def _libclang_available() -> bool:
    try:
        cindex.conf.lib
    except cindex.LibclangError:
        return False
    return True


pytestmark = pytest.mark.skipif(
    not _libclang_available(), reason="libclang shared library not available"
)


def _single_decl(source: str) -> VarDecl:
    tu = parse_source(source)
    assert len(tu.body) == 1
    decl = tu.body[0]
    assert isinstance(decl, VarDecl)
    return decl


class TestParseSource:
    def test_integer_initializer(self):
        decl = _single_decl("int x = 42;")
        assert decl.name == "x"
        assert decl.type_name == "int"
        assert isinstance(decl.value, IntegerLiteral)
        assert decl.value.value == 42

    def test_floating_initializer(self):
        decl = _single_decl("double y = 3.5;")
        assert isinstance(decl.value, FloatingLiteral)
        assert decl.value.value == 3.5

    def test_no_initializer(self):
        decl = _single_decl("int z;")
        assert decl.name == "z"
        assert decl.value is None

    def test_implicit_conversion_is_unwrapped(self):
        converted = _single_decl("double d = 1;")
        plain = _single_decl("int d = 1;")
        assert isinstance(converted.value, IntegerLiteral)
        assert converted.value.model_dump() == plain.value.model_dump()

    def test_suffixed_literal_keeps_decimal_prefix(self):
        decl = _single_decl("unsigned long n = 42ul;")
        assert decl.value.value == 42

    def test_declaration_order(self):
        tu = parse_source("int a = 1;\ndouble b = 2.5;\nint c;\n")
        assert [decl.name for decl in tu.body] == ["a", "b", "c"]

    def test_function_declaration_is_unhandled(self):
        with pytest.raises(UnhandledKind) as excinfo:
            parse_source("int x = 1;\nint f(void);\n")
        assert excinfo.value.kind == cindex.CursorKind.FUNCTION_DECL

    def test_unary_initializer_is_unhandled(self):
        with pytest.raises(UnhandledKind):
            parse_source("int n = -5;")

    def test_repeated_builds_are_identical(self):
        source = "int x = 42;\ndouble y = 3.5;\nfloat f = 1;\nint z;\n"
        assert dump_ast(parse_source(source)) == dump_ast(parse_source(source))


class TestParseFile:
    def test_fixture_file(self):
        tu = parse_file("globals.c", config=SessionConfig(working_dir=str(FIXTURES)))
        assert isinstance(tu, TranslationUnit)
        data = json.loads(dump_ast(tu))
        assert [node["name"] for node in data["body"]] == ["x", "y", "z"]
        assert data["body"][0]["value"] == {"kind": "IntegerLiteral", "value": 42}
        assert data["body"][1]["value"] == {"kind": "FloatingLiteral", "value": 3.5}
        assert data["body"][2]["value"] is None


class TestSessionHandles:
    def test_handle_queries_while_session_open(self):
        path = str(FIXTURES / "globals.c")
        with ParserSession() as session:
            tu = session.parse(path)
            handle = tu.body[1].handle
            assert handle.spelling == "y"
            assert handle.type().spelling == "double"
            assert not handle.is_function_decl()
            assert handle.language is LanguageKind.C

    def test_nodes_stay_queryable_after_session_close(self):
        path = str(FIXTURES / "globals.c")
        with ParserSession() as session:
            tu = session.parse(path)
        assert session.closed
        assert tu.body[0].handle.spelling == "x"


_LEGACY_MISSING_EXPORTS = frozenset(
    {"clang_Cursor_getVarDeclInitializer", "clang_getToken"}
)


@pytest.fixture
def legacy_libclang(monkeypatch):
    """Hide the exports that libclang releases before 17 lack."""
    original = native._native_function

    def without_newer_exports(name, argtypes, restype):
        if name in _LEGACY_MISSING_EXPORTS:
            raise AttributeError(name)
        return original(name, argtypes, restype)

    monkeypatch.setattr(native, "_native_function", without_newer_exports)


@pytest.mark.usefixtures("legacy_libclang")
class TestLegacyLibclangFallbacks:
    def test_integer_initializer(self):
        decl = _single_decl("int x = 42;")
        assert isinstance(decl.value, IntegerLiteral)
        assert decl.value.value == 42

    def test_floating_initializer(self):
        decl = _single_decl("double y = 3.5;")
        assert decl.value.value == 3.5

    def test_no_initializer(self):
        assert _single_decl("int z;").value is None

    def test_array_size_is_not_an_initializer(self):
        assert _single_decl("int a[3];").value is None

    def test_implicit_conversion_is_unwrapped(self):
        decl = _single_decl("double d = 1;")
        assert isinstance(decl.value, IntegerLiteral)
        assert decl.value.value == 1

    def test_token_lookup_matches_native_lookup(self, monkeypatch):
        source = "int x = 42;\nunsigned long n = 7ul;\ndouble y = 3.5;\n"
        legacy = dump_ast(parse_source(source))
        monkeypatch.undo()
        assert legacy == dump_ast(parse_source(source))
