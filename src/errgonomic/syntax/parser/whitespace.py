"""Whitespace parsers.

Byte mode classifies ASCII whitespace only (space, \\t, \\n, \\v, \\f, \\r);
Codepoint mode uses the Unicode White_Space property via str.isspace(),
which excludes zero-width spaces and joiners.

All three recognizers require at least one atom; wrap them in optional()
(or use the *_wrapped helpers) where whitespace may be absent.
"""

from __future__ import annotations

from typing import Any

from errgonomic.diagnostics import ErrorTemplate, Span
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

from .combinators import between, optional
from .core import Parser

__all__ = [
    "newlines",
    "whitespace",
    "whitespace_not_newline",
    "whitespace_not_newline_wrapped",
    "whitespace_wrapped",
]


def _is_line_break(source: bytes | str, pos: int) -> int:
    """Length of the line break at pos: 1 for LF, 2 for CRLF, else 0."""
    lf, cr = (b"\n", b"\r") if isinstance(source, bytes) else ("\n", "\r")
    atom = source[pos : pos + 1]
    if atom == lf:
        return 1
    if atom == cr and source[pos + 1 : pos + 2] == lf:
        return 2
    return 0


def _recognized(cursor: Cursor, end: int, expected: str) -> Outcome[bytes | str]:
    if end == cursor.pos:
        return Failure(
            ErrorTemplate.expected_class(
                Span(cursor.pos, min(cursor.pos + 1, len(cursor.source))), expected
            )
        )
    return Success(cursor.source[cursor.pos : end], cursor.advance(end - cursor.pos))


def _whitespace(cursor: Cursor) -> Outcome[bytes | str]:
    source = cursor.source
    end = cursor.pos
    while end < len(source) and source[end : end + 1].isspace():
        end += 1
    return _recognized(cursor, end, "whitespace")


def _whitespace_not_newline(cursor: Cursor) -> Outcome[bytes | str]:
    source = cursor.source
    end = cursor.pos
    while (
        end < len(source)
        and source[end : end + 1].isspace()
        and not _is_line_break(source, end)
    ):
        end += 1
    return _recognized(cursor, end, "whitespace (no newlines)")


def _newlines(cursor: Cursor) -> Outcome[bytes | str]:
    source = cursor.source
    end = cursor.pos
    while end < len(source) and (step := _is_line_break(source, end)):
        end += step
    return _recognized(cursor, end, "newline")


whitespace: Parser[bytes | str] = Parser(_whitespace, "whitespace")
"""One or more whitespace atoms, newlines included."""

whitespace_not_newline: Parser[bytes | str] = Parser(
    _whitespace_not_newline, "whitespace_not_newline"
)
"""One or more whitespace atoms, stopping before LF or CRLF."""

newlines: Parser[bytes | str] = Parser(_newlines, "newlines")
"""One or more line breaks (LF or CRLF)."""


def whitespace_wrapped[T](parser: Parser[T]) -> Parser[T]:
    """parser with optional surrounding whitespace (newlines included).

    Example:
        >>> from errgonomic import tag
        >>> whitespace_wrapped(tag("+")).parse(b"  +\\n 1").cursor.pos
        5
    """
    padding: Parser[Any] = optional(whitespace)
    return between(padding, parser, padding).named(f"ws({parser.name})")


def whitespace_not_newline_wrapped[T](parser: Parser[T]) -> Parser[T]:
    """parser with optional surrounding same-line whitespace."""
    padding: Parser[Any] = optional(whitespace_not_newline)
    return between(padding, parser, padding).named(f"ws_inline({parser.name})")
