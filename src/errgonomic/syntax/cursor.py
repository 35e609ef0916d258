"""Immutable cursor infrastructure for combinator parsing.

Implements the immutable cursor pattern shared by every parser.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor; backtracking is reusing an old one
    - One cursor, one mode: atoms are bytes (Byte mode) or code points
      (Codepoint mode) for a whole parse
    - Line:column computed on-demand (O(n) only for errors)

Atoms:
    An atom is a length-1 ``bytes`` in Byte mode and a length-1 ``str`` in
    Codepoint mode. Character classification (isdigit, isalpha, isspace)
    therefore works on both: ASCII-only for bytes, Unicode-aware for text.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - F# FParsec
"""

from __future__ import annotations

from dataclasses import dataclass

from errgonomic.core.decoding import Decoder, utf8_decoder
from errgonomic.diagnostics import (
    ErrorTemplate,
    InputModeError,
    OutOfInputError,
    Span,
    line_col,
)
from errgonomic.enums import InputMode

__all__ = ["Cursor"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (many cursors live during backtracking)
        3. Shared buffer - advance() reuses the same source reference
        4. EOF is a property - Not a return value
        5. current raises - No None handling needed!

    Attributes:
        source: Whole input buffer (bytes in Byte mode, str in Codepoint mode)
        pos: Current offset, 0 <= pos <= len(source)
        mode: Atom unit of this cursor

    Example:
        >>> cursor = Cursor.from_bytes(b"hello")
        >>> cursor.current
        b'h'
        >>> new_cursor = cursor.advance()
        >>> new_cursor.current
        b'e'
        >>> cursor.current  # Original unchanged (immutability)
        b'h'
        >>> Cursor.from_text("héllo").advance(2).pos
        2
    """

    source: bytes | str
    pos: int = 0
    mode: InputMode = InputMode.BYTE

    def __post_init__(self) -> None:
        """Validate Cursor invariants.

        Raises:
            InputModeError: If the buffer type does not match the mode
            ValueError: If pos lies outside the buffer
        """
        wanted = bytes if self.mode is InputMode.BYTE else str
        if not isinstance(self.source, wanted):
            raise InputModeError(
                ErrorTemplate.buffer_mode_mismatch(self.mode, type(self.source).__name__)
            )
        if not 0 <= self.pos <= len(self.source):
            raise ValueError(ErrorTemplate.position_out_of_bounds(self.pos, len(self.source)))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Cursor:
        """Byte-mode cursor at offset 0.

        A ``bytes`` argument is referenced, not copied; mutable buffers are
        snapshotted so the parse cannot observe later mutation.
        """
        source = data if isinstance(data, bytes) else bytes(data)
        return cls(source, 0, InputMode.BYTE)

    @classmethod
    def from_text(cls, text: str) -> Cursor:
        """Codepoint-mode cursor over already decoded text."""
        return cls(text, 0, InputMode.CODEPOINT)

    @classmethod
    def decode(cls, data: bytes, decoder: Decoder = utf8_decoder) -> Cursor:
        """Codepoint-mode cursor over decoded bytes.

        Raises:
            DecodeError: From the decoder, at the first invalid byte
        """
        return cls(decoder(data), 0, InputMode.CODEPOINT)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def is_eof(self) -> bool:
        """Check if at end of input.

        Note: This is the preferred way to check for EOF.
              Use this in while loops: `while not cursor.is_eof:`
        """
        return self.pos >= len(self.source)

    def remaining(self) -> int:
        """Number of atoms left before the end of the buffer."""
        return len(self.source) - self.pos

    @property
    def current(self) -> bytes | str:
        """Get the atom at the current position.

        Raises:
            OutOfInputError: If at end of input
        """
        if self.is_eof:
            raise OutOfInputError(
                ErrorTemplate.unexpected_eof(self.pos), pos=self.pos, requested=1, available=0
            )
        return self.source[self.pos : self.pos + 1]

    def peek(self, n: int = 1) -> bytes | str:
        """Next n atoms without advancing.

        Args:
            n: Number of atoms to read

        Returns:
            Copy of the next n atoms (use slice() for a zero-copy view)

        Raises:
            OutOfInputError: If fewer than n atoms remain
        """
        available = self.remaining()
        if n > available:
            raise OutOfInputError(
                ErrorTemplate.unexpected_eof(self.pos, n, available),
                pos=self.pos,
                requested=n,
                available=available,
            )
        return self.source[self.pos : self.pos + n]

    def peek_nth(self, k: int = 0) -> bytes | str | None:
        """Atom k positions ahead (0 = current), or None beyond EOF.

        Use for lookahead: `if cursor.peek_nth(1) == b"=":`
        """
        target = self.pos + k
        if target >= len(self.source):
            return None
        return self.source[target : target + 1]

    def startswith(self, literal: bytes | str) -> bool:
        """Check whether the input continues with literal.

        The literal must already be in the cursor's atom unit.
        """
        return self.source.startswith(literal, self.pos)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def advance(self, count: int = 1) -> Cursor:
        """Return new cursor advanced by count atoms.

        Args:
            count: Number of atoms to advance (default: 1)

        Returns:
            New Cursor sharing this cursor's buffer (original unchanged)

        Raises:
            ValueError: If count is negative or moves past the end. Callers
                check remaining() first; this is a precondition, not a
                parse failure.

        Example:
            >>> cursor = Cursor.from_bytes(b"hello")
            >>> cursor.advance(2).pos
            2
            >>> cursor.pos  # Original unchanged
            0
        """
        new_pos = self.pos + count
        if count < 0 or new_pos > len(self.source):
            raise ValueError(ErrorTemplate.advance_past_end(self.pos, count, len(self.source)))
        return Cursor(self.source, new_pos, self.mode)

    # ------------------------------------------------------------------
    # Slicing
    # ------------------------------------------------------------------

    def slice(self, span: Span) -> memoryview | str:
        """Sub-view of the buffer named by span.

        Returns:
            memoryview in Byte mode (zero-copy), str slice in Codepoint mode

        Raises:
            ValueError: If span lies outside the buffer
        """
        if span.end > len(self.source):
            raise ValueError(
                ErrorTemplate.span_out_of_bounds(span.start, span.end, len(self.source))
            )
        if self.mode is InputMode.BYTE:
            return memoryview(self.source)[span.start : span.end]  # type: ignore[arg-type]
        return self.source[span.start : span.end]

    def slice_to(self, end_pos: int) -> bytes | str:
        """Copy of the source from the current position to end_pos.

        Example:
            >>> start = Cursor.from_bytes(b"hello world")
            >>> end = start.advance(5)
            >>> start.slice_to(end.pos)
            b'hello'
        """
        return self.source[self.pos : end_pos]

    def span_to(self, other: Cursor) -> Span:
        """Span from this cursor to a later cursor over the same buffer."""
        self._check_same_buffer(other)
        return Span(self.pos, other.pos)

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def _check_same_buffer(self, other: Cursor) -> None:
        if self.source is not other.source:
            raise ValueError(ErrorTemplate.mixed_cursors())

    def __lt__(self, other: Cursor) -> bool:
        self._check_same_buffer(other)
        return self.pos < other.pos

    def __le__(self, other: Cursor) -> bool:
        self._check_same_buffer(other)
        return self.pos <= other.pos

    def __gt__(self, other: Cursor) -> bool:
        self._check_same_buffer(other)
        return self.pos > other.pos

    def __ge__(self, other: Cursor) -> bool:
        self._check_same_buffer(other)
        return self.pos >= other.pos

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, columns in atoms)

        Performance:
            O(n) where n = current position
            Only call for error reporting, not during normal parsing!

        Example:
            >>> Cursor.from_text("line1\\nline2").advance(8).compute_line_col()
            (2, 3)
        """
        return line_col(self.source, self.pos)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, len={len(self.source)}, mode={self.mode})"
