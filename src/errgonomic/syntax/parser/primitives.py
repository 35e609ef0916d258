"""Primitive parsers.

Atom-level building blocks: literals, predicates, character classes,
counted and conditional takes, numeric literals, and the constant parsers
succeed / fail / fail_with.

Blame point:
    Every primitive anchors its failure at the cursor it was given, never
    at the place it stopped trying. At end of input the blame span is
    zero-width.

Produced values:
    Matched input is produced as ``bytes`` in Byte mode and ``str`` in
    Codepoint mode (a copy of the matched atoms). Use Cursor.slice() for a
    zero-copy view of larger regions.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable

from errgonomic.diagnostics import ErrorTemplate, InputModeError, Span
from errgonomic.enums import InputMode
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

from .core import Parser

__all__ = [
    "alpha",
    "alphabetic",
    "alphanumeric",
    "alphanumeric_char",
    "any_atom",
    "decimal",
    "digit",
    "eoi",
    "fail",
    "fail_with",
    "float_literal",
    "hex_digit",
    "hexadecimal",
    "integer_literal",
    "none_of",
    "one_of",
    "rest",
    "satisfy",
    "succeed",
    "tag",
    "take",
    "take_until",
    "take_while",
    "take_while1",
]

type Atom = bytes | str
type AtomPredicate = Callable[[Atom], bool]

# ASCII digit sets keyed by atom type (not Unicode digits like '²')
_ASCII_DIGITS: dict[type, frozenset[Atom]] = {
    bytes: frozenset(bytes([c]) for c in b"0123456789"),
    str: frozenset("0123456789"),
}
_HEX_DIGITS: dict[type, frozenset[Atom]] = {
    bytes: frozenset(bytes([c]) for c in b"0123456789abcdefABCDEF"),
    str: frozenset("0123456789abcdefABCDEF"),
}


def _blame(cursor: Cursor) -> Span:
    """One-atom span at the cursor, zero-width at end of input."""
    return Span(cursor.pos, cursor.pos if cursor.is_eof else cursor.pos + 1)


def _scan(cursor: Cursor, predicate: AtomPredicate) -> Cursor:
    """Advance while predicate holds."""
    source = cursor.source
    end = cursor.pos
    length = len(source)
    while end < length and predicate(source[end : end + 1]):
        end += 1
    return cursor.advance(end - cursor.pos)


def _both_units(literal: bytes | str) -> tuple[bytes, str | None]:
    """A literal as bytes and as text (None when not valid UTF-8)."""
    if isinstance(literal, str):
        return literal.encode("utf-8"), literal
    data = bytes(literal)
    try:
        return data, data.decode("utf-8")
    except UnicodeDecodeError:
        return data, None


def _unit_for[B, S](cursor: Cursor, as_bytes: B, as_text: S | None, literal: bytes) -> B | S:
    """Pick the form matching the cursor's mode.

    Raises:
        InputModeError: For undecodable bytes on a Codepoint-mode cursor
    """
    if cursor.mode is InputMode.BYTE:
        return as_bytes
    if as_text is None:
        raise InputModeError(ErrorTemplate.literal_not_text(literal))
    return as_text


def _require_byte_mode(cursor: Cursor, primitive: str) -> None:
    if cursor.mode is not InputMode.BYTE:
        raise InputModeError(ErrorTemplate.byte_mode_only(primitive))


# ============================================================================
# LITERALS
# ============================================================================


def tag(literal: bytes | str) -> Parser[bytes | str]:
    """Match a literal exactly.

    A str literal is UTF-8 encoded for Byte-mode cursors; a bytes literal
    is decoded for Codepoint-mode cursors. The produced value is the
    literal in the cursor's unit.

    Failures:
        OUT_OF_INPUT when the input ends while the available prefix still
        matches, MISMATCH otherwise.

    Raises:
        InputModeError: A bytes literal that is not valid UTF-8 run on a
            Codepoint-mode cursor

    Example:
        >>> tag("te").parse(b"test").value
        b'te'
        >>> tag("test").parse(b"te").error.kind
        <ErrorKind.OUT_OF_INPUT: 'out_of_input'>
    """
    as_bytes, as_text = _both_units(literal)

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        wanted = _unit_for(cursor, as_bytes, as_text, as_bytes)
        if cursor.startswith(wanted):
            return Success(wanted, cursor.advance(len(wanted)))

        available = cursor.remaining()
        if available < len(wanted):
            # tail is shorter than the literal
            tail = cursor.source[cursor.pos :]
            if wanted.startswith(tail):  # type: ignore[arg-type]
                return Failure(
                    ErrorTemplate.literal_truncated(Span(cursor.pos, len(cursor.source)), wanted)
                )
        end = cursor.pos + min(len(wanted), available)
        return Failure(ErrorTemplate.expected_literal(Span(cursor.pos, end), wanted))

    return Parser(run, f"tag({literal!r})")


def satisfy(predicate: AtomPredicate, expected: str = "matching atom") -> Parser[bytes | str]:
    """Match one atom for which predicate is true.

    Args:
        predicate: Test applied to a length-1 bytes or str
        expected: Description used in the failure message

    Example:
        >>> satisfy(lambda a: a in b"xyz", "x, y or z").parse(b"y").value
        b'y'
    """

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        if not cursor.is_eof:
            atom = cursor.source[cursor.pos : cursor.pos + 1]
            if predicate(atom):
                return Success(atom, cursor.advance())
        return Failure(ErrorTemplate.expected_class(_blame(cursor), expected))

    return Parser(run, f"satisfy({expected})")


def _atom_class(atoms: bytes | str, expected: str, *, negate: bool) -> Parser[bytes | str]:
    as_bytes, as_text = _both_units(atoms)
    byte_set = frozenset(as_bytes[i : i + 1] for i in range(len(as_bytes)))
    text_set = frozenset(as_text) if as_text is not None else None

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        members = _unit_for(cursor, byte_set, text_set, as_bytes)
        if not cursor.is_eof:
            atom = cursor.source[cursor.pos : cursor.pos + 1]
            if (atom in members) != negate:
                return Success(atom, cursor.advance())
        return Failure(ErrorTemplate.expected_class(_blame(cursor), expected))

    return Parser(run, expected)


def one_of(atoms: bytes | str) -> Parser[bytes | str]:
    """Match one atom contained in atoms.

    In Byte mode a str is split into its UTF-8 bytes, so multi-byte
    characters contribute each of their bytes.
    """
    return _atom_class(atoms, f"one of {atoms!r}", negate=False)


def none_of(atoms: bytes | str) -> Parser[bytes | str]:
    """Match one atom not contained in atoms (fails at end of input)."""
    return _atom_class(atoms, f"none of {atoms!r}", negate=True)


# ============================================================================
# TAKES
# ============================================================================


def take(n: int) -> Parser[bytes | str]:
    """Take exactly n atoms.

    Fails with OUT_OF_INPUT when fewer than n remain.

    Example:
        >>> take(5).parse(b"hello world").value
        b'hello'
    """
    if n < 0:
        msg = f"take() requires n >= 0, got {n}"
        raise ValueError(msg)

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        available = cursor.remaining()
        if available < n:
            return Failure(
                ErrorTemplate.out_of_input(Span(cursor.pos, len(cursor.source)), n, available)
            )
        end = cursor.advance(n)
        return Success(cursor.slice_to(end.pos), end)

    return Parser(run, f"take({n})")


any_atom: Parser[bytes | str] = take(1).named("any_atom")


def take_while(predicate: AtomPredicate) -> Parser[bytes | str]:
    """Take zero or more atoms while predicate holds. Never fails."""

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        end = _scan(cursor, predicate)
        return Success(cursor.slice_to(end.pos), end)

    return Parser(run, "take_while")


def take_while1(predicate: AtomPredicate, expected: str = "matching atom") -> Parser[bytes | str]:
    """Take one or more atoms while predicate holds."""

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        end = _scan(cursor, predicate)
        if end.pos == cursor.pos:
            return Failure(ErrorTemplate.expected_class(_blame(cursor), expected))
        return Success(cursor.slice_to(end.pos), end)

    return Parser(run, f"take_while1({expected})")


def take_until[U](until: Parser[U]) -> Parser[tuple[bytes | str, U]]:
    """Take atoms until ``until`` matches; produce (taken, until_value).

    ``until`` is tried at every offset including end of input, so
    ``take_until(eoi)`` takes the rest. If it never matches, the failure
    of its last attempt (at end of input) is returned.

    Example:
        >>> from errgonomic import tag
        >>> take_until(tag("world")).parse(b"hello world!").value
        (b'hello ', b'world')
    """

    def run(cursor: Cursor) -> Outcome[tuple[bytes | str, U]]:
        scan = cursor
        while True:
            outcome = until(scan)
            if isinstance(outcome, Success):
                return Success((cursor.slice_to(scan.pos), outcome.value), outcome.cursor)
            if scan.is_eof:
                return outcome
            scan = scan.advance()

    return Parser(run, f"take_until({until.name})")


def _rest(cursor: Cursor) -> Outcome[bytes | str]:
    end = cursor.advance(cursor.remaining())
    return Success(cursor.slice_to(end.pos), end)


rest: Parser[bytes | str] = Parser(_rest, "rest")


def _eoi(cursor: Cursor) -> Outcome[None]:
    if cursor.is_eof:
        return Success(None, cursor)
    return Failure(ErrorTemplate.expected_end(_blame(cursor)))


eoi: Parser[None] = Parser(_eoi, "eoi")


# ============================================================================
# CHARACTER CLASSES
# ============================================================================


def _is_digit(atom: Atom) -> bool:
    return atom in _ASCII_DIGITS[type(atom)]


def _is_hex_digit(atom: Atom) -> bool:
    return atom in _HEX_DIGITS[type(atom)]


def _is_alpha(atom: Atom) -> bool:
    return atom.isalpha()


def _is_alphanumeric(atom: Atom) -> bool:
    return atom.isalnum()


# Single atoms
digit = satisfy(_is_digit, "decimal digit").named("digit")
hex_digit = satisfy(_is_hex_digit, "hexadecimal digit").named("hex_digit")
alpha = satisfy(_is_alpha, "alphabetic character").named("alpha")
alphanumeric_char = satisfy(_is_alphanumeric, "alphanumeric character").named(
    "alphanumeric_char"
)

# Runs of one or more atoms
decimal = take_while1(_is_digit, "decimal digit").named("decimal")
hexadecimal = take_while1(_is_hex_digit, "hexadecimal digit").named("hexadecimal")
alphabetic = take_while1(_is_alpha, "alphabetic character").named("alphabetic")
alphanumeric = take_while1(_is_alphanumeric, "alphanumeric character").named("alphanumeric")


# ============================================================================
# NUMERIC LITERALS (Byte mode only)
# ============================================================================


def _digits_end(source: bytes, pos: int) -> int:
    length = len(source)
    while pos < length and 0x30 <= source[pos] <= 0x39:  # 0-9
        pos += 1
    return pos


def _integer_end(source: bytes, start: int) -> int | None:
    """End of ``-?[0-9]+`` at start, or None."""
    pos = start
    if pos < len(source) and source[pos] == 0x2D:  # '-'
        pos += 1
    end = _digits_end(source, pos)
    return end if end > pos else None


def _integer_literal(cursor: Cursor) -> Outcome[int]:
    _require_byte_mode(cursor, "integer_literal")
    source: bytes = cursor.source  # type: ignore[assignment]
    end = _integer_end(source, cursor.pos)
    if end is None:
        return Failure(ErrorTemplate.expected_class(_blame(cursor), "integer literal"))
    try:
        value = int(source[cursor.pos : end])
    except ValueError:
        # sys.get_int_max_str_digits() exceeded
        span = Span(cursor.pos, end)
        return Failure(ErrorTemplate.integer_too_long(span, end - cursor.pos))
    return Success(value, cursor.advance(end - cursor.pos))


def _float_literal(cursor: Cursor) -> Outcome[float]:
    _require_byte_mode(cursor, "float_literal")
    source: bytes = cursor.source  # type: ignore[assignment]
    end = _integer_end(source, cursor.pos)
    if end is None:
        return Failure(ErrorTemplate.expected_class(_blame(cursor), "float literal"))

    # Optional fraction: only when a digit follows the point
    if end < len(source) and source[end] == 0x2E:  # '.'
        fraction_end = _digits_end(source, end + 1)
        if fraction_end > end + 1:
            end = fraction_end

    # Optional exponent: only when digits follow the (signed) marker
    if end < len(source) and source[end] in b"eE":
        pos = end + 1
        if pos < len(source) and source[pos] in b"+-":
            pos += 1
        exponent_end = _digits_end(source, pos)
        if exponent_end > pos:
            end = exponent_end

    return Success(float(source[cursor.pos : end]), cursor.advance(end - cursor.pos))


integer_literal: Parser[int] = Parser(_integer_literal, "integer_literal")
"""``-?[0-9]+`` as int. Byte mode only (InputModeError otherwise)."""

float_literal: Parser[float] = Parser(_float_literal, "float_literal")
"""``-?[0-9]+(\\.[0-9]+)?([eE][+-]?[0-9]+)?`` as float. Byte mode only."""


# ============================================================================
# CONSTANTS
# ============================================================================


def succeed[T](value: T) -> Parser[T]:
    """Always succeed with value, consuming nothing."""
    return Parser(lambda cursor: Success(value, cursor), f"succeed({value!r})")


def fail(message: str) -> Parser[None]:
    """Always fail with MISMATCH at the cursor."""
    return Parser(
        lambda cursor: Failure(ErrorTemplate.failure(_blame(cursor), message)),
        f"fail({message!r})",
    )


def fail_with(payload: object, message: str | None = None) -> Parser[None]:
    """Always fail with a zero-width CUSTOM_FAILURE carrying payload.

    The payload rides alongside the message and kind, so generic reporting
    keeps working for fully custom errors.

    Example:
        >>> error = fail_with({"code": 7}, "bad header").parse(b"x").error
        >>> error.kind, error.payload
        (<ErrorKind.CUSTOM_FAILURE: 'custom_failure'>, {'code': 7})
    """
    return Parser(
        lambda cursor: Failure(ErrorTemplate.custom(Span.at(cursor.pos), payload, message)),
        "fail_with",
    )
