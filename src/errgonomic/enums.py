"""Enumerations for errgonomic type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class InputMode(StrEnum):
    """Atom unit of a cursor.

    StrEnum provides automatic string conversion: str(InputMode.BYTE) == "byte"
    """

    BYTE = "byte"
    """Atoms are bytes; offsets are byte indices."""

    CODEPOINT = "codepoint"
    """Atoms are decoded code points; offsets are code point indices."""


class ErrorKind(StrEnum):
    """Failure taxonomy of the error model.

    StrEnum provides automatic string conversion: str(ErrorKind.MISMATCH) == "mismatch"
    """

    OUT_OF_INPUT = "out_of_input"
    """Input ended before the parser could read what it needed."""

    MISMATCH = "mismatch"
    """Literal, class or predicate did not match at the blame span."""

    NO_PROGRESS = "no_progress"
    """Repetition over a zero-width parser stopped to avoid looping."""

    CUSTOM_FAILURE = "custom_failure"
    """User-raised failure; carries a custom payload."""

    AGGREGATE = "aggregate"
    """Several equally deep branch failures merged by alternation."""

    INVALID_ENCODING = "invalid_encoding"
    """Input bytes could not be decoded for a Codepoint-mode parse."""


class Associativity(StrEnum):
    """Associativity of a Pratt infix operator.

    StrEnum provides automatic string conversion: str(Associativity.LEFT) == "left"
    """

    LEFT = "left"
    """a + b + c parses as (a + b) + c"""

    RIGHT = "right"
    """a . b . c parses as a . (b . c)"""


__all__ = [
    "Associativity",
    "ErrorKind",
    "InputMode",
]
