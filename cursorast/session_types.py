"""Parser session data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class SessionConfig:
    """Groups index and parse configuration for a ParserSession."""

    exclude_decls_from_pch: bool = True
    display_diagnostics: bool = False
    parse_options: int = 0
    default_args: tuple[str, ...] = ()
    working_dir: str = constants.DEFAULT_WORKING_DIR
