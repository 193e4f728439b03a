"""Composable API functions for building typed ASTs.

Each function opens a parser session, releases it on every exit path, and
returns plain node snapshots that stay readable after the session closes.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .native import NativeEngine
from .nodes import AstNode, TranslationUnit
from .session import ParserSession
from .session_types import SessionConfig
from . import constants

logger = logging.getLogger(__name__)


def parse_file(
    path: str,
    args: Optional[Sequence[str]] = None,
    config: Optional[SessionConfig] = None,
    engine: Optional[NativeEngine] = None,
) -> TranslationUnit:
    """Parse a C/C++ file and build its typed translation unit.

    Args:
        path: Source path, resolved under ``config.working_dir``.
        args: Extra compiler arguments passed to libclang.
        config: Session configuration; defaults to ``SessionConfig()``.
        engine: Native engine; defaults to libclang.

    Returns:
        The root TranslationUnit node.
    """
    with ParserSession(engine=engine, config=config) as session:
        return session.parse(path, args=args)


def parse_source(
    source: str,
    filename: str = constants.DEFAULT_SOURCE_FILENAME,
    args: Optional[Sequence[str]] = None,
    config: Optional[SessionConfig] = None,
    engine: Optional[NativeEngine] = None,
) -> TranslationUnit:
    """Parse in-memory *source* as if it were stored at *filename*."""
    logger.debug("Parsing %d bytes of in-memory source as %s", len(source), filename)
    with ParserSession(engine=engine, config=config) as session:
        path = session.resolve_path(filename)
        return session.parse(filename, args=args, unsaved_files=[(path, source)])


def dump_ast(node: AstNode, indent: int = constants.JSON_INDENT) -> str:
    """Return a JSON dump of *node* and its subtree."""
    return node.model_dump_json(indent=indent)
