"""Tests for syntax/parser/primitives.py: literals, predicates, takes,
character classes and constant parsers.

Python 3.13+.
"""

from __future__ import annotations

import pytest
from hypothesis import event, given

from errgonomic import (
    ErrorKind,
    Failure,
    InputMode,
    InputModeError,
    Span,
    Success,
    alpha,
    alphabetic,
    alphanumeric,
    any_atom,
    digit,
    eoi,
    fail,
    fail_with,
    hex_digit,
    hexadecimal,
    none_of,
    one_of,
    rest,
    satisfy,
    succeed,
    tag,
    take,
    take_until,
    take_while,
    take_while1,
)
from tests.strategies import ascii_words, byte_buffers, unicode_text

CODEPOINT = InputMode.CODEPOINT

# ============================================================================
# TAG
# ============================================================================


class TestTag:
    """Test literal matching."""

    def test_match_consumes_literal(self) -> None:
        """A matching literal advances by its length."""
        outcome = tag("hello").parse(b"hello world")

        assert outcome.value == b"hello"
        assert outcome.cursor.pos == 5

    def test_mismatch_spans_compared_atoms(self) -> None:
        """A mismatch blames the atoms the literal was compared against."""
        outcome = tag("hello").parse(b"help me")

        assert isinstance(outcome, Failure)
        assert outcome.error.kind == ErrorKind.MISMATCH
        assert outcome.error.span == Span(0, 5)
        assert outcome.error.message == "Expected b'hello'"

    def test_mismatch_with_long_tail_blames_literal_width(self) -> None:
        """Plenty of remaining input still blames only len(literal) atoms."""
        outcome = tag("abc").parse(b"xyz" + b"a" * 1000)

        assert outcome.error.kind == ErrorKind.MISMATCH
        assert outcome.error.span == Span(0, 3)

    def test_truncated_prefix_is_out_of_input(self) -> None:
        """Input ending inside a matching prefix is OUT_OF_INPUT to the end."""
        outcome = tag("test").parse(b"te")

        assert outcome.error.kind == ErrorKind.OUT_OF_INPUT
        assert outcome.error.span == Span(0, 2)

    def test_short_mismatch_is_mismatch(self) -> None:
        """Short input that already differs is a MISMATCH."""
        outcome = tag("test").parse(b"tx")

        assert outcome.error.kind == ErrorKind.MISMATCH
        assert outcome.error.span == Span(0, 2)

    def test_at_end_of_input(self) -> None:
        """At end of input the blame span is zero-width."""
        outcome = tag("a").parse(b"")

        assert outcome.error.kind == ErrorKind.OUT_OF_INPUT
        assert outcome.error.span == Span(0, 0)

    def test_bytes_literal(self) -> None:
        """Bytes literals match raw bytes."""
        assert tag(b"\x00\x01").parse(b"\x00\x01\x02").value == b"\x00\x01"

    def test_codepoint_mode(self) -> None:
        """In Codepoint mode the literal is matched as text."""
        outcome = tag(b"caf\xc3\xa9").parse("café!", mode=CODEPOINT)

        assert outcome.value == "café"
        assert outcome.cursor.pos == 4

    def test_codepoint_message_uses_text_repr(self) -> None:
        """Codepoint-mode messages show the literal as text."""
        assert tag("x").parse("y", mode=CODEPOINT).error.message == "Expected 'x'"

    def test_undecodable_literal_in_codepoint_mode(self) -> None:
        """A non-UTF-8 bytes literal cannot match text."""
        with pytest.raises(InputModeError, match="not valid UTF-8"):
            tag(b"\xff").parse("x", mode=CODEPOINT)

    @given(byte_buffers, byte_buffers)
    def test_prefix_always_matches(self, prefix: bytes, tail: bytes) -> None:
        """tag(p) matches any input that starts with p."""
        event(f"empty_literal={not prefix}")
        outcome = tag(prefix).parse(prefix + tail)

        assert isinstance(outcome, Success)
        assert outcome.cursor.pos == len(prefix)


# ============================================================================
# PREDICATES AND CLASSES
# ============================================================================


class TestAtomClasses:
    """Test satisfy, one_of, none_of and the character classes."""

    def test_satisfy(self) -> None:
        """satisfy() tests a single atom."""
        vowel = satisfy(lambda atom: atom in b"aeiou", "vowel")

        assert vowel.parse(b"ex").value == b"e"
        error = vowel.parse(b"xe").error
        assert error.message == "Expected vowel"
        assert error.span == Span(0, 1)

    def test_satisfy_at_end(self) -> None:
        """Predicates fail with a zero-width span at end of input."""
        assert satisfy(bool).parse(b"").error.span == Span(0, 0)

    def test_one_of_and_none_of(self) -> None:
        """one_of() and none_of() match a set of atoms."""
        assert one_of("+-").parse(b"-1").value == b"-"
        assert isinstance(one_of("+-").parse(b"1"), Failure)
        assert none_of('"').parse(b"a").value == b"a"
        assert isinstance(none_of('"').parse(b'"'), Failure)

    def test_none_of_fails_at_end(self) -> None:
        """none_of() needs an atom to inspect."""
        assert isinstance(none_of("x").parse(b""), Failure)

    def test_one_of_codepoint(self) -> None:
        """In Codepoint mode one_of() compares whole characters."""
        assert one_of("αβγ").parse("βx", mode=CODEPOINT).value == "β"

    def test_digit_is_ascii_only(self) -> None:
        """Unicode digits are not decimal digits."""
        assert isinstance(digit.parse("²", mode=CODEPOINT), Failure)
        assert digit.parse("7", mode=CODEPOINT).value == "7"

    def test_hex_digits(self) -> None:
        """hex_digit and hexadecimal accept both cases."""
        assert hex_digit.parse(b"F").value == b"F"
        assert hexadecimal.parse(b"00ffAAg").value == b"00ffAA"

    def test_alpha_codepoint(self) -> None:
        """Alphabetic classes are Unicode-aware in Codepoint mode."""
        assert alpha.parse("ñ", mode=CODEPOINT).value == "ñ"
        assert alphabetic.parse("straße1", mode=CODEPOINT).value == "straße"

    def test_alphanumeric(self) -> None:
        """alphanumeric runs mix letters and digits."""
        assert alphanumeric.parse(b"abc123 x").value == b"abc123"

    def test_class_failure_message(self) -> None:
        """Class failures name the class."""
        error = alphabetic.parse(b"123").error

        assert error.message == "Expected alphabetic character"
        assert error.expected == ("alphabetic character",)


# ============================================================================
# TAKES
# ============================================================================


class TestTakes:
    """Test counted and conditional takes."""

    def test_take(self) -> None:
        """take(n) produces exactly n atoms."""
        outcome = take(5).parse(b"hello world")

        assert outcome.value == b"hello"
        assert outcome.cursor.pos == 5

    def test_take_short_input(self) -> None:
        """take(n) with fewer atoms is OUT_OF_INPUT over the remainder."""
        outcome = take(2).then(take(4)).parse(b"abcde")

        assert outcome.error.kind == ErrorKind.OUT_OF_INPUT
        assert outcome.error.span == Span(2, 5)

    def test_take_zero(self) -> None:
        """take(0) always succeeds without consuming."""
        assert take(0).parse(b"").value == b""

    def test_take_negative(self) -> None:
        """Negative counts are rejected at construction."""
        with pytest.raises(ValueError, match="n >= 0"):
            take(-1)

    def test_take_counts_codepoints(self) -> None:
        """In Codepoint mode take() counts characters, not bytes."""
        assert take(2).parse("日本語", mode=CODEPOINT).value == "日本"

    def test_any_atom(self) -> None:
        """any_atom takes one atom of either unit."""
        assert any_atom.parse(b"\xffz").value == b"\xff"
        assert any_atom.parse("😀z", mode=CODEPOINT).value == "😀"
        assert any_atom.parse(b"").error.kind == ErrorKind.OUT_OF_INPUT

    def test_take_while_never_fails(self) -> None:
        """take_while() may take nothing."""
        outcome = take_while(lambda atom: atom == b"x").parse(b"abc")

        assert outcome.value == b""
        assert outcome.cursor.pos == 0

    def test_take_while1(self) -> None:
        """take_while1() needs at least one atom."""
        spaces = take_while1(lambda atom: atom == b" ", "space")

        assert spaces.parse(b"   x").value == b"   "
        assert spaces.parse(b"x").error.message == "Expected space"

    def test_take_until(self) -> None:
        """take_until() produces the skipped input and the terminator value."""
        outcome = take_until(tag("world")).parse(b"hello world!")

        assert outcome.value == (b"hello ", b"world")
        assert outcome.cursor.pos == 11

    def test_take_until_long_scan(self) -> None:
        """A terminator far into large input is found after every offset fails."""
        outcome = take_until(tag("END")).parse(b"a" * 100_000 + b"END")

        assert len(outcome.value[0]) == 100_000
        assert outcome.value[1] == b"END"
        assert outcome.cursor.pos == 100_003

    def test_take_until_eoi(self) -> None:
        """The terminator is tried at end of input too."""
        assert take_until(eoi).parse(b"abc").value == (b"abc", None)

    def test_take_until_never_matches(self) -> None:
        """The terminator's last failure, at end of input, is returned."""
        outcome = take_until(tag(";")).parse(b"abc")

        assert isinstance(outcome, Failure)
        assert outcome.error.offset == 3

    def test_rest(self) -> None:
        """rest consumes everything left."""
        outcome = take(2).then(rest).parse(b"abcdef")

        assert outcome.value == (b"ab", b"cdef")
        assert outcome.cursor.is_eof

    @given(ascii_words)
    def test_take_while_alpha_consumes_word(self, word: str) -> None:
        """A letter scan stops exactly at the end of the word."""
        outcome = take_while(str.isalpha).parse(word + " tail", mode=CODEPOINT)

        assert outcome.value == word
        assert outcome.cursor.pos == len(word)


# ============================================================================
# END OF INPUT AND CONSTANTS
# ============================================================================


class TestEoiAndConstants:
    """Test eoi, succeed, fail and fail_with."""

    def test_eoi(self) -> None:
        """eoi succeeds only at the end."""
        assert eoi.parse(b"").value is None
        error = eoi.parse(b"xy").error
        assert error.message == "Expected end of input"
        assert error.span == Span(0, 1)

    def test_succeed(self) -> None:
        """succeed() never consumes."""
        outcome = succeed(42).parse(b"abc")

        assert outcome.value == 42
        assert outcome.cursor.pos == 0

    def test_fail(self) -> None:
        """fail() reports a MISMATCH with the given message."""
        error = fail("nope").parse(b"abc").error

        assert error.kind == ErrorKind.MISMATCH
        assert error.message == "nope"
        assert error.span == Span(0, 1)

    def test_fail_with_payload(self) -> None:
        """fail_with() carries an arbitrary payload, zero-width."""
        error = fail_with({"code": 7}, "bad header").parse(b"x").error

        assert error.kind == ErrorKind.CUSTOM_FAILURE
        assert error.payload == {"code": 7}
        assert error.span == Span(0, 0)
        assert error.message == "bad header"

    def test_fail_with_default_message(self) -> None:
        """Without a message the payload is described."""
        assert fail_with(404).parse(b"").error.message == "Custom failure: 404"


# ============================================================================
# PROPERTIES
# ============================================================================


class TestPrimitiveProperties:
    """Properties that hold for every primitive."""

    @given(unicode_text())
    def test_codepoint_offsets_count_characters(self, text: str) -> None:
        """rest in Codepoint mode ends at len(text)."""
        outcome = rest.parse(text, mode=CODEPOINT)

        assert outcome.value == text
        assert outcome.cursor.pos == len(text)

    @given(unicode_text())
    def test_byte_offsets_count_bytes(self, text: str) -> None:
        """rest in Byte mode ends at the UTF-8 length."""
        outcome = rest.parse(text)

        assert outcome.cursor.pos == len(text.encode("utf-8"))

    @given(byte_buffers)
    def test_failure_is_anchored_at_start(self, data: bytes) -> None:
        """Primitive failures at offset 0 never blame a later position."""
        for parser in (digit, alphabetic, hex_digit, tag("zz"), take(3), eoi):
            outcome = parser.parse(data)
            if isinstance(outcome, Failure):
                event(f"failed={parser.name}")
                assert outcome.error.offset == 0
