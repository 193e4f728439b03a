"""Parser session — owns the native engine, index and kind registry."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

from .builder import Builder
from .errors import SessionClosed
from .native import ClangNativeEngine, NativeEngine
from .nodes import AstNode, TranslationUnit
from .registry import KindRegistry, build_default_registry
from .session_types import SessionConfig

logger = logging.getLogger(__name__)


class ParserSession:
    """Single owning handle over one native index.

    The index is created with the session and released exactly once by
    ``close()``; use the session as a context manager so release also happens
    when a build fails. At most one translation unit is active at a time:
    token lookups made while building read from the most recent ``parse``.
    Not safe for concurrent use.
    """

    def __init__(
        self,
        engine: Optional[NativeEngine] = None,
        config: Optional[SessionConfig] = None,
        registry: Optional[KindRegistry] = None,
    ):
        self.engine = engine if engine is not None else ClangNativeEngine()
        self.config = config if config is not None else SessionConfig()
        self.registry = registry if registry is not None else build_default_registry()
        self.index = self.engine.create_index(
            self.config.exclude_decls_from_pch, self.config.display_diagnostics
        )
        self.translation_unit: Any = None
        self._builder = Builder(self, self.registry)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve_path(self, source_path: str) -> str:
        return os.path.join(self.config.working_dir, source_path)

    def parse(
        self,
        source_path: str,
        args: Optional[Sequence[str]] = None,
        unsaved_files: Optional[Sequence[tuple[str, str]]] = None,
    ) -> TranslationUnit:
        """Parse *source_path* and build its typed translation unit."""
        if self._closed:
            raise SessionClosed("Cannot parse with a closed parser session")
        path = self.resolve_path(source_path)
        all_args = [*self.config.default_args, *(args or [])]
        logger.info("Parsing %s (args=%s)", path, all_args)
        self.translation_unit = self.engine.parse_translation_unit(
            self.index, path, all_args, unsaved_files, self.config.parse_options
        )
        root = self.engine.translation_unit_cursor(self.translation_unit)
        return self.build_cursor(root)

    def build_cursor(self, cursor: Any) -> AstNode:
        return self._builder.build(cursor)

    def close(self) -> None:
        """Release the index and engine threads; later calls do nothing.

        Native memory is not freed while built nodes are still referenced:
        each node keeps its cursor, the cursor keeps its translation unit and
        the translation unit keeps the index alive. libclang frees them once
        the last node is garbage collected.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self.engine.dispose_index(self.index)
        finally:
            self.engine.terminate_threads()
            self.index = None
            self.translation_unit = None
        logger.debug("Parser session closed")

    def __enter__(self) -> ParserSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
