"""Parse outcomes.

Every parser returns exactly one Outcome: Success (value plus the cursor
after the match) or Failure (the terminal ParseError). A Failure carries no
cursor, so callers cannot continue from a failed position; backtracking is
resuming from the cursor they already hold.

Pattern:
    Outcomes are plain frozen dataclasses and work with structural pattern
    matching:

        match parser(cursor):
            case Success(value, next_cursor):
                ...
            case Failure(error):
                ...

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import NoReturn

from errgonomic.diagnostics import ErrorTemplate, ParseError, ParseFailedError

from .cursor import Cursor

__all__ = ["Failure", "Outcome", "Success"]


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Successful parse.

    Type Parameters:
        T: The type of the parsed value

    Example:
        >>> cursor = Cursor.from_bytes(b"hello")
        >>> outcome = Success(b"h", cursor.advance())
        >>> outcome.value
        b'h'
        >>> outcome.cursor.pos
        1
    """

    value: T
    cursor: Cursor

    @property
    def is_success(self) -> bool:
        return True

    def map[U](self, fn: Callable[[T], U]) -> Success[U]:
        """Apply fn to the value, keeping the cursor."""
        return Success(fn(self.value), self.cursor)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed parse carrying its terminal error."""

    error: ParseError

    @property
    def is_success(self) -> bool:
        return False

    def map(self, fn: Callable[[object], object]) -> Failure:  # noqa: ARG002 - mirrors Success.map
        """Failures are unchanged by map."""
        return self

    def unwrap(self) -> NoReturn:
        """Raise ParseFailedError carrying the error.

        The message carries offsets only; use ParseError.format_error(source)
        for line:column output.
        """
        raise ParseFailedError(ErrorTemplate.parse_failed(self.error, ""), self.error)


type Outcome[T] = Success[T] | Failure
