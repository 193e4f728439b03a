"""AST Node Model — typed variants wrapping native cursors."""

from __future__ import annotations

import logging
import math
import re
from typing import TYPE_CHECKING, Callable, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, PrivateAttr, SerializeAsAny

from .handles import CursorHandle
from .native import ChildVisit
from . import constants

if TYPE_CHECKING:
    from .session import ParserSession

logger = logging.getLogger(__name__)


# ── literal parsing strategies ───────────────────────────────────

_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOATING_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_integer_token(text: str) -> Union[int, float]:
    """Parse the leading base-10 integer of *text*.

    Suffixes, hex and octal prefixes are not interpreted: ``"42u"`` is 42 and
    ``"0x1F"`` is 0. Text with no leading digits yields NaN.
    """
    match = _INTEGER_PREFIX.match(text)
    if match is None:
        return math.nan
    return int(match.group(1))


def parse_floating_token(text: str) -> float:
    """Parse the leading floating-point number of *text* (``"3.5f"`` is 3.5)."""
    match = _FLOATING_PREFIX.match(text)
    if match is None:
        return math.nan
    return float(match.group(1))


LITERAL_PARSERS: dict[str, Callable[[str], Union[int, float]]] = {
    constants.LITERAL_INTEGER: parse_integer_token,
    constants.LITERAL_FLOATING: parse_floating_token,
}


def parse_literal(literal_type: str, text: str) -> Union[int, float]:
    value = LITERAL_PARSERS[literal_type](text)
    if isinstance(value, float) and math.isnan(value):
        logger.warning("Degenerate %s literal token %r parsed as NaN", literal_type, text)
    return value


def literal_token_text(session: ParserSession, cursor) -> str:
    """Spelling of the token at the start of *cursor*, or "" without an extent."""
    engine = session.engine
    if engine.range_is_null(engine.cursor_extent(cursor)):
        return ""
    token = engine.get_token(session.translation_unit, engine.cursor_location(cursor))
    spelling = engine.token_spelling(session.translation_unit, token)
    return spelling if spelling else ""


# ── nodes ────────────────────────────────────────────────────────


class AstNode(BaseModel):
    """Base of every typed node; wraps exactly one native cursor."""

    model_config = ConfigDict(frozen=True)

    kind: str

    _session: object = PrivateAttr(default=None)
    _cursor: object = PrivateAttr(default=None)

    def _bind(self, session: ParserSession, cursor) -> AstNode:
        self._session = session
        self._cursor = cursor
        return self

    @property
    def cursor(self):
        return self._cursor

    @property
    def handle(self) -> CursorHandle:
        """Convenience query wrapper; valid while the session is open."""
        return CursorHandle(self._session.engine, self._cursor)


class TranslationUnit(AstNode):
    kind: str = constants.NODE_KIND_TRANSLATION_UNIT
    body: tuple[SerializeAsAny[AstNode], ...] = ()

    @classmethod
    def from_cursor(cls, session: ParserSession, cursor) -> TranslationUnit:
        children: list = []

        def collect(child) -> ChildVisit:
            children.append(child)
            return ChildVisit.CONTINUE

        # build outside the native callback so errors propagate to the caller
        session.engine.visit_children(cursor, collect)
        body = tuple(session.build_cursor(child) for child in children)
        return cls(body=body)._bind(session, cursor)


class Literal(AstNode):
    """A numeric literal whose value is parsed from its source token."""

    LITERAL_TYPE: ClassVar[str] = ""

    value: Union[int, float]

    @classmethod
    def from_cursor(cls, session: ParserSession, cursor) -> Literal:
        text = literal_token_text(session, cursor)
        return cls(value=parse_literal(cls.LITERAL_TYPE, text))._bind(session, cursor)


class IntegerLiteral(Literal):
    LITERAL_TYPE: ClassVar[str] = constants.LITERAL_INTEGER

    kind: str = constants.NODE_KIND_INTEGER_LITERAL


class FloatingLiteral(Literal):
    LITERAL_TYPE: ClassVar[str] = constants.LITERAL_FLOATING

    kind: str = constants.NODE_KIND_FLOATING_LITERAL
    value: float


class VarDecl(AstNode):
    kind: str = constants.NODE_KIND_VAR_DECL
    name: str = ""
    type_name: str = ""
    value: Optional[SerializeAsAny[AstNode]] = None

    @classmethod
    def from_cursor(cls, session: ParserSession, cursor) -> VarDecl:
        engine = session.engine
        spelling = engine.cursor_spelling(cursor)
        type_spelling = engine.type_spelling(engine.cursor_type(cursor))
        initializer = engine.var_decl_initializer(cursor)
        value = (
            None
            if engine.cursor_is_null(initializer)
            else session.build_cursor(initializer)
        )
        return cls(
            name=spelling if spelling is not None else "",
            type_name=type_spelling or "",
            value=value,
        )._bind(session, cursor)

