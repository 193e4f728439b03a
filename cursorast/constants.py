"""Named constants — eliminates magic strings across the codebase."""

from __future__ import annotations

NODE_KIND_TRANSLATION_UNIT = "TranslationUnit"
NODE_KIND_INTEGER_LITERAL = "IntegerLiteral"
NODE_KIND_FLOATING_LITERAL = "FloatingLiteral"
NODE_KIND_VAR_DECL = "VarDecl"

LITERAL_INTEGER = "integer"
LITERAL_FLOATING = "floating"

DEFAULT_SOURCE_FILENAME = "input.c"
DEFAULT_WORKING_DIR = "."

# libclang reports -1 arguments for cursors that are not calls or functions
NO_ARGUMENTS = -1

JSON_INDENT = 2
