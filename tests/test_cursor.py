"""Tests for cursor infrastructure.

Validates the immutable cursor pattern over Byte and Codepoint buffers.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest
from hypothesis import given
from hypothesis import strategies as st

from errgonomic import DecodeError, InputMode, InputModeError, OutOfInputError, Span
from errgonomic.syntax.cursor import Cursor
from tests.strategies import byte_buffers, unicode_text

# ============================================================================
# CONSTRUCTION
# ============================================================================


class TestCursorConstruction:
    """Test cursor constructors and invariants."""

    def test_from_bytes(self) -> None:
        """from_bytes() builds a Byte-mode cursor at offset 0."""
        cursor = Cursor.from_bytes(b"hello")

        assert cursor.pos == 0
        assert cursor.mode == InputMode.BYTE
        assert cursor.source == b"hello"

    def test_from_bytes_snapshots_mutable_buffers(self) -> None:
        """bytearray input is copied, so later mutation is not observed."""
        data = bytearray(b"abc")
        cursor = Cursor.from_bytes(data)
        data[0] = ord("z")

        assert cursor.current == b"a"

    def test_from_bytes_accepts_memoryview(self) -> None:
        """memoryview input is accepted."""
        assert Cursor.from_bytes(memoryview(b"xyz")).peek(3) == b"xyz"

    def test_from_text(self) -> None:
        """from_text() builds a Codepoint-mode cursor."""
        cursor = Cursor.from_text("héllo")

        assert cursor.mode == InputMode.CODEPOINT
        assert cursor.advance(2).current == "l"

    def test_decode(self) -> None:
        """decode() offsets count code points, not bytes."""
        cursor = Cursor.decode("日本語".encode())

        assert cursor.remaining() == 3
        assert cursor.advance(1).current == "本"

    def test_decode_invalid_raises(self) -> None:
        """Invalid UTF-8 raises DecodeError at the first bad byte."""
        with pytest.raises(DecodeError) as exc_info:
            Cursor.decode(b"ok\xff")

        assert exc_info.value.offset == 2

    def test_buffer_type_must_match_mode(self) -> None:
        """A str buffer in Byte mode is rejected."""
        with pytest.raises(InputModeError, match="requires a bytes buffer"):
            Cursor("abc", 0, InputMode.BYTE)  # type: ignore[arg-type]

    def test_mode_error_is_type_error(self) -> None:
        """InputModeError is also a TypeError."""
        with pytest.raises(TypeError):
            Cursor(b"abc", 0, InputMode.CODEPOINT)

    def test_position_out_of_bounds(self) -> None:
        """pos must lie inside the buffer (end included)."""
        Cursor(b"abc", 3)

        with pytest.raises(ValueError, match="outside buffer"):
            Cursor(b"abc", 4)
        with pytest.raises(ValueError, match="outside buffer"):
            Cursor(b"abc", -1)

    def test_cursor_immutability(self) -> None:
        """Cursor is immutable (frozen dataclass)."""
        cursor = Cursor.from_bytes(b"hello")

        with pytest.raises(FrozenInstanceError):
            cursor.pos = 5  # type: ignore[misc]


# ============================================================================
# READING
# ============================================================================


class TestCursorReading:
    """Test current, peek and lookahead."""

    def test_current(self) -> None:
        """current is a length-1 atom."""
        assert Cursor(b"hello", 1).current == b"e"
        assert Cursor("hello", 1, InputMode.CODEPOINT).current == "e"

    def test_current_at_eof_raises(self) -> None:
        """Accessing current at EOF raises OutOfInputError (an EOFError)."""
        cursor = Cursor(b"hi", 2)

        with pytest.raises(EOFError, match="Unexpected EOF"):
            _ = cursor.current

    def test_is_eof(self) -> None:
        """is_eof is True only at the end."""
        assert not Cursor(b"ab", 1).is_eof
        assert Cursor(b"ab", 2).is_eof
        assert Cursor(b"").is_eof

    def test_peek(self) -> None:
        """peek() returns the next atoms without moving."""
        cursor = Cursor(b"hello", 1)

        assert cursor.peek(3) == b"ell"
        assert cursor.pos == 1

    def test_peek_past_end_reports_counts(self) -> None:
        """peek() beyond EOF reports what was requested and available."""
        with pytest.raises(OutOfInputError) as exc_info:
            Cursor(b"hello", 3).peek(5)

        assert exc_info.value.pos == 3
        assert exc_info.value.requested == 5
        assert exc_info.value.available == 2

    def test_peek_nth(self) -> None:
        """peek_nth() returns None beyond EOF."""
        cursor = Cursor(b"ab")

        assert cursor.peek_nth(0) == b"a"
        assert cursor.peek_nth(1) == b"b"
        assert cursor.peek_nth(2) is None

    def test_startswith(self) -> None:
        """startswith() checks from the current position."""
        cursor = Cursor(b"key=value", 4)

        assert cursor.startswith(b"val")
        assert not cursor.startswith(b"key")


# ============================================================================
# MOVEMENT & SLICING
# ============================================================================


class TestCursorMovement:
    """Test advance() and slicing."""

    def test_advance_returns_new_cursor(self) -> None:
        """advance() leaves the original untouched and shares the buffer."""
        cursor = Cursor.from_bytes(b"hello")
        moved = cursor.advance(2)

        assert moved.pos == 2
        assert cursor.pos == 0
        assert moved.source is cursor.source

    def test_advance_zero(self) -> None:
        """advance(0) is a zero-width move."""
        assert Cursor(b"ab", 1).advance(0).pos == 1

    def test_advance_past_end_raises(self) -> None:
        """Advancing beyond the buffer is a precondition violation."""
        with pytest.raises(ValueError, match="Cannot advance"):
            Cursor(b"ab", 1).advance(2)

    def test_advance_negative_raises(self) -> None:
        """Cursors never move backwards."""
        with pytest.raises(ValueError, match="Cannot advance"):
            Cursor(b"ab", 1).advance(-1)

    def test_slice_bytes_is_memoryview(self) -> None:
        """Byte-mode slices are zero-copy views."""
        view = Cursor.from_bytes(b"hello").slice(Span(1, 4))

        assert isinstance(view, memoryview)
        assert bytes(view) == b"ell"

    def test_slice_text(self) -> None:
        """Codepoint-mode slices are str."""
        assert Cursor.from_text("héllo").slice(Span(1, 3)) == "él"

    def test_slice_out_of_bounds(self) -> None:
        """Spans past the buffer are rejected."""
        with pytest.raises(ValueError, match="outside buffer"):
            Cursor.from_bytes(b"ab").slice(Span(1, 5))

    def test_slice_to_and_span_to(self) -> None:
        """slice_to() copies and span_to() measures the consumed region."""
        start = Cursor.from_bytes(b"hello world")
        end = start.advance(5)

        assert start.slice_to(end.pos) == b"hello"
        assert start.span_to(end) == Span(0, 5)


# ============================================================================
# ORDERING & DIAGNOSTICS
# ============================================================================


class TestCursorOrdering:
    """Test ordering and location helpers."""

    def test_cursors_order_by_offset(self) -> None:
        """Cursors over one buffer compare by position."""
        start = Cursor.from_bytes(b"abc")
        later = start.advance(2)

        assert start < later
        assert later > start
        assert start <= start.advance(0)
        assert later >= start

    def test_mixed_buffers_rejected(self) -> None:
        """Cursors over different buffers cannot be compared."""
        with pytest.raises(ValueError, match="different buffers"):
            _ = Cursor.from_bytes(b"abc") < Cursor.from_bytes(b"xyz")

    def test_compute_line_col(self) -> None:
        """Line and column are 1-indexed, columns in atoms."""
        assert Cursor.from_text("line1\nline2").advance(8).compute_line_col() == (2, 3)

    def test_repr(self) -> None:
        """repr() summarizes position, length and mode."""
        assert repr(Cursor(b"abc", 1)) == "Cursor(pos=1, len=3, mode=byte)"


# ============================================================================
# PROPERTIES
# ============================================================================


class TestCursorProperties:
    """Property-based tests for cursor immutability."""

    @given(byte_buffers, st.data())
    def test_advance_never_mutates(self, data: bytes, draw: st.DataObject) -> None:
        """advance() returns a new cursor and leaves the original intact."""
        cursor = Cursor.from_bytes(data)
        count = draw.draw(st.integers(min_value=0, max_value=len(data)))

        moved = cursor.advance(count)

        assert cursor.pos == 0
        assert moved.pos == count
        assert moved.remaining() == len(data) - count

    @given(unicode_text())
    def test_codepoint_offsets_count_characters(self, text: str) -> None:
        """Codepoint cursors step one character at a time."""
        cursor = Cursor.decode(text.encode())
        atoms = []
        while not cursor.is_eof:
            atoms.append(cursor.current)
            cursor = cursor.advance()

        assert "".join(atoms) == text
        assert cursor.pos == len(text)
