#!/usr/bin/env python3
"""Dump the typed AST of a C/C++ source file as JSON.

Usage:
    python scripts/dump_ast.py tests/fixtures/globals.c
    python scripts/dump_ast.py main.c --working-dir src -- -std=c11
    python scripts/dump_ast.py main.c --verbose
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure repo root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from cursorast import constants
from cursorast.api import dump_ast, parse_file
from cursorast.errors import CursorAstError
from cursorast.session_types import SessionConfig


def main():
    parser = argparse.ArgumentParser(description="Dump a typed clang AST as JSON")
    parser.add_argument("file", help="Source file to parse")
    parser.add_argument(
        "--working-dir",
        "-C",
        default=constants.DEFAULT_WORKING_DIR,
        help="Directory the source path is resolved against (default: .)",
    )
    parser.add_argument(
        "--show-diagnostics",
        action="store_true",
        help="Let libclang print its diagnostics to stderr",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "clang_args",
        nargs=argparse.REMAINDER,
        help="Compiler arguments after '--'",
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = SessionConfig(
        display_diagnostics=args.show_diagnostics,
        working_dir=args.working_dir,
    )
    clang_args = [a for a in args.clang_args if a != "--"]
    try:
        tu = parse_file(args.file, args=clang_args, config=config)
    except CursorAstError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)
    print(dump_ast(tu))


if __name__ == "__main__":
    main()
