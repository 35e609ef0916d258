"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from errgonomic.enums import ErrorKind, InputMode

from .codes import Span
from .model import ParseError

__all__ = ["ErrorTemplate"]


def _show(literal: bytes | str) -> str:
    """Render a literal for messages: 'abc' for text, b'abc' for bytes."""
    return repr(literal)


class ErrorTemplate:
    """Centralized error message templates.

    All failure values and exception messages are created here. NO f-strings
    in parser bodies! This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases

    Methods returning ParseError build the failure values primitives and
    combinators report; methods returning str build exception messages.
    """

    # ------------------------------------------------------------------
    # Failure values
    # ------------------------------------------------------------------

    @staticmethod
    def expected_literal(span: Span, literal: bytes | str) -> ParseError:
        """Literal did not match at span.

        Args:
            span: Blame span (cursor position and the atoms compared)
            literal: The literal that was expected

        Returns:
            ParseError of kind MISMATCH
        """
        shown = _show(literal)
        return ParseError.single(
            span, f"Expected {shown}", ErrorKind.MISMATCH, expected=(shown,)
        )

    @staticmethod
    def literal_truncated(span: Span, literal: bytes | str) -> ParseError:
        """Input ended part-way through an otherwise matching literal.

        Returns:
            ParseError of kind OUT_OF_INPUT
        """
        shown = _show(literal)
        return ParseError.single(
            span,
            f"Unexpected end of input while matching {shown}",
            ErrorKind.OUT_OF_INPUT,
            expected=(shown,),
        )

    @staticmethod
    def expected_class(span: Span, description: str) -> ParseError:
        """Atom did not satisfy a character class or predicate.

        Args:
            span: Blame span (zero-width at end of input)
            description: Human-readable class, e.g. "decimal digit"

        Returns:
            ParseError of kind MISMATCH
        """
        return ParseError.single(
            span, f"Expected {description}", ErrorKind.MISMATCH, expected=(description,)
        )

    @staticmethod
    def integer_too_long(span: Span, digits: int) -> ParseError:
        """Integer literal exceeds the interpreter's int conversion limit.

        Args:
            span: The whole literal, sign included
            digits: Length of the literal in bytes

        Returns:
            ParseError of kind MISMATCH
        """
        return ParseError.single(
            span,
            f"Integer literal too long ({digits} digits)",
            ErrorKind.MISMATCH,
            expected=("integer literal",),
        )

    @staticmethod
    def out_of_input(span: Span, requested: int, available: int) -> ParseError:
        """Fewer atoms remain than a parser needs.

        Returns:
            ParseError of kind OUT_OF_INPUT
        """
        return ParseError.single(
            span,
            f"Unexpected end of input: needed {requested} more, {available} left",
            ErrorKind.OUT_OF_INPUT,
            expected=("more input",),
        )

    @staticmethod
    def expected_end(span: Span) -> ParseError:
        """Trailing input where end of input was required.

        Returns:
            ParseError of kind MISMATCH
        """
        return ParseError.single(
            span, "Expected end of input", ErrorKind.MISMATCH, expected=("end of input",)
        )

    @staticmethod
    def unexpected_match(span: Span) -> ParseError:
        """Negative lookahead matched.

        Returns:
            ParseError of kind MISMATCH
        """
        return ParseError.single(span, "Unexpected input", ErrorKind.MISMATCH)

    @staticmethod
    def no_progress(span: Span) -> ParseError:
        """Repetition stuck on a zero-width parser.

        Returns:
            ParseError of kind NO_PROGRESS
        """
        return ParseError.single(
            span,
            "Repetition made no progress (parser matched nothing twice in a row)",
            ErrorKind.NO_PROGRESS,
        )

    @staticmethod
    def failure(span: Span, message: str) -> ParseError:
        """Explicit fail() primitive.

        Returns:
            ParseError of kind MISMATCH
        """
        return ParseError.single(span, message, ErrorKind.MISMATCH)

    @staticmethod
    def custom(span: Span, payload: object, message: str | None = None) -> ParseError:
        """User-raised failure carrying a payload.

        Args:
            span: Blame span chosen by the raising combinator
            payload: Custom error value (any type)
            message: Optional description; defaults to the payload's str()

        Returns:
            ParseError of kind CUSTOM_FAILURE
        """
        text = message if message is not None else f"Custom failure: {payload}"
        return ParseError.single(span, text, ErrorKind.CUSTOM_FAILURE, payload=payload)

    @staticmethod
    def invalid_encoding(offset: int, reason: str) -> ParseError:
        """Decoder rejected the input before parsing started.

        Args:
            offset: Byte offset reported by the decoder
            reason: Decoder-supplied description

        Returns:
            ParseError of kind INVALID_ENCODING (span in bytes)
        """
        detail = f": {reason}" if reason else ""
        return ParseError.single(
            Span(offset, offset + 1),
            f"Invalid encoding at byte {offset}{detail}",
            ErrorKind.INVALID_ENCODING,
        )

    # ------------------------------------------------------------------
    # Exception messages
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(pos: int, requested: int = 1, available: int = 0) -> str:
        """Message for OutOfInputError."""
        return (
            f"Unexpected EOF at position {pos}: "
            f"requested {requested} atom(s), {available} available"
        )

    @staticmethod
    def advance_past_end(pos: int, count: int, length: int) -> str:
        """Message for advancing a cursor beyond its buffer."""
        return f"Cannot advance cursor at {pos} by {count}: buffer length is {length}"

    @staticmethod
    def position_out_of_bounds(pos: int, length: int) -> str:
        """Message for constructing a cursor outside its buffer."""
        return f"Cursor position {pos} outside buffer of length {length}"

    @staticmethod
    def span_out_of_bounds(start: int, end: int, length: int) -> str:
        """Message for slicing outside the buffer."""
        return f"Span ({start}, {end}) outside buffer of length {length}"

    @staticmethod
    def buffer_mode_mismatch(mode: InputMode, buffer_type: str) -> str:
        """Message for a buffer type that does not fit the cursor mode."""
        wanted = "bytes" if mode is InputMode.BYTE else "str"
        return f"{mode} mode cursor requires a {wanted} buffer, got {buffer_type}"

    @staticmethod
    def byte_mode_only(primitive: str) -> str:
        """Message for a Byte-mode-only primitive used on decoded text."""
        return (
            f"{primitive} is defined over Byte mode only; "
            "parse the input with mode=InputMode.BYTE"
        )

    @staticmethod
    def literal_not_text(literal: bytes) -> str:
        """Message for a bytes literal that cannot be matched against text."""
        return f"Literal {literal!r} is not valid UTF-8 and cannot match Codepoint input"

    @staticmethod
    def mixed_cursors() -> str:
        """Message for ordering cursors from different buffers."""
        return "Cannot compare cursors over different buffers"

    @staticmethod
    def source_too_large(size: int, limit: int) -> str:
        """Message for inputs above max_source_size."""
        return (
            f"Source size ({size:,} atoms) exceeds maximum ({limit:,} atoms). "
            "Pass max_source_size to parse() to increase the limit."
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> str:
        """Message for DepthLimitExceededError."""
        return (
            f"Maximum grammar nesting depth ({max_depth}) exceeded; "
            "input is too deeply nested or the grammar is left-recursive"
        )

    @staticmethod
    def decode_failed(offset: int, reason: str) -> str:
        """Message for DecodeError."""
        return f"Cannot decode input at byte {offset}: {reason}"

    @staticmethod
    def too_many_branches(count: int, limit: int) -> str:
        """Message for any_() called with more branches than it accepts."""
        return (
            f"any_() accepts at most {limit} parsers, got {count}; "
            "use any_seq() for larger or dynamically built branch lists"
        )

    @staticmethod
    def forward_undefined(name: str) -> str:
        """Message for invoking a forward reference before define()."""
        return f"Forward parser {name!r} invoked before define() was called"

    @staticmethod
    def forward_redefined(name: str) -> str:
        """Message for calling define() twice."""
        return f"Forward parser {name!r} is already defined"

    @staticmethod
    def parse_failed(error: ParseError, location: str) -> str:
        """Message for ParseFailedError."""
        return f"{location}: {error.message}" if location else error.message
