"""errgonomic exception hierarchy.

Parse failures are values (Failure outcomes), never exceptions. The
exceptions below report usage errors, resource limits and decoder failures,
plus ParseFailedError for callers that opt into raising via
``parse_or_raise()``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import ParseError

__all__ = [
    "DecodeError",
    "DepthLimitExceededError",
    "ErrgonomicError",
    "InputModeError",
    "OutOfInputError",
    "ParseFailedError",
]


class ErrgonomicError(Exception):
    """Base exception for all errgonomic errors."""


class OutOfInputError(ErrgonomicError, EOFError):
    """Cursor read past the end of its buffer.

    Raised by Cursor.peek() and Cursor.current. Primitive parsers check
    remaining() first and report OUT_OF_INPUT failures instead, so this only
    surfaces from hand-written parser functions.

    Attributes:
        pos: Cursor position of the read
        requested: Number of atoms requested
        available: Number of atoms that were left
    """

    def __init__(self, message: str, *, pos: int, requested: int, available: int) -> None:
        super().__init__(message)
        self.pos = pos
        self.requested = requested
        self.available = available


class InputModeError(ErrgonomicError, TypeError):
    """Parser used with a cursor mode it does not support.

    Examples:
    - Numeric literal primitives invoked on a Codepoint-mode cursor
    - A bytes literal that is not valid UTF-8 matched against text
    - A str buffer given to a Byte-mode cursor
    """


class DecodeError(ErrgonomicError, ValueError):
    """Decoder rejected the input bytes.

    Attributes:
        offset: Byte offset of the first invalid encoding unit
        reason: Decoder-supplied description
    """

    def __init__(self, message: str, *, offset: int, reason: str = "") -> None:
        super().__init__(message)
        self.offset = offset
        self.reason = reason


class DepthLimitExceededError(ErrgonomicError, RecursionError):
    """Maximum grammar recursion depth exceeded.

    This error indicates either:
    - Adversarial input designed to cause stack overflow
    - A left-recursive grammar (forward reference re-entered at one offset)
    - Legitimately deep nesting beyond the configured max_depth
    """


class ParseFailedError(ErrgonomicError):
    """Parse failed and the caller asked for an exception.

    Attributes:
        error: The terminal ParseError of the invocation
    """

    def __init__(self, message: str, error: ParseError) -> None:
        super().__init__(message)
        self.error = error
