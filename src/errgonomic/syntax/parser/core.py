"""Parser capability and top-level invocation.

This module provides the Parser class that every primitive and combinator
produces, the late-binding ForwardParser used for recursive grammars, and
the parse() entry point that turns caller input into a cursor.

Architecture:
    A Parser wraps a pure function ``Cursor -> Outcome[T]``. Composition is
    static: combinators close over the parsers they combine and return new
    Parser values. At run time the composed graph threads immutable cursors
    (:class:`~errgonomic.syntax.cursor.Cursor`) through those functions;
    backtracking is simply reusing a cursor already held.

    Method forms and operators on Parser delegate to the function forms in
    :mod:`~errgonomic.syntax.parser.combinators` and
    :mod:`~errgonomic.syntax.parser.any`:

    - ``p >> f``  map
    - ``p + q``   sequence into a pair
    - ``p | q``   ordered choice (flattened)

Security:
    parse() enforces a configurable input size limit and installs a
    per-invocation DepthGuard bounding forward-reference and Pratt recursion,
    so adversarial nesting fails with DepthLimitExceededError instead of
    exhausting the interpreter stack.

See Also:
    - :mod:`errgonomic.syntax.parser.combinators` - Combinator algebra
    - :mod:`errgonomic.syntax.parser.primitives` - Atom-level parsers
    - :mod:`errgonomic.syntax.outcome` - Success / Failure
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from errgonomic.constants import MAX_DEPTH, MAX_SOURCE_SIZE
from errgonomic.core.decoding import Decoder, utf8_decoder
from errgonomic.core.depth_guard import guarded, nesting
from errgonomic.diagnostics import (
    DecodeError,
    ErrgonomicError,
    ErrorTemplate,
    LineOffsetCache,
    ParseFailedError,
)
from errgonomic.enums import InputMode
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

__all__ = ["ForwardParser", "Parser", "Reject", "forward", "parse"]

logger = logging.getLogger(__name__)

type ParseFn[T] = Callable[[Cursor], Outcome[T]]


class Reject(ErrgonomicError):
    """Raised by mapping functions to turn a value into a custom failure.

    try_map() and Pratt node constructors catch Reject and report a
    CUSTOM_FAILURE carrying ``payload`` over the span the parser consumed.

    Attributes:
        payload: Custom error value (any type)
        message: Optional human-readable description

    Example:
        >>> def byte_value(n: int) -> int:
        ...     if n > 255:
        ...         raise Reject(n, f"{n} does not fit in a byte")
        ...     return n
    """

    def __init__(self, payload: object, message: str | None = None) -> None:
        super().__init__(message if message is not None else str(payload))
        self.payload = payload
        self.message = message


class Parser[T]:
    """Composable parser: a pure function from Cursor to Outcome[T].

    Immutable after construction and free of per-invocation state, so one
    Parser may be invoked repeatedly and from several threads at once.

    Type Parameters:
        T: The type of the produced value

    Example:
        >>> from errgonomic import tag, digit
        >>> pair = tag("a") + digit
        >>> pair.parse(b"a7").value
        (b'a', b'7')
    """

    __slots__ = ("_fn", "_name")

    def __init__(self, fn: ParseFn[T], name: str | None = None) -> None:
        object.__setattr__(self, "_fn", fn)
        object.__setattr__(self, "_name", name or getattr(fn, "__name__", "parser"))

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @property
    def name(self) -> str:
        """Short description used in repr() and diagnostics."""
        return self._name

    def __call__(self, cursor: Cursor) -> Outcome[T]:
        return self._fn(cursor)

    def __repr__(self) -> str:
        return f"<Parser {self._name}>"

    def named(self, name: str) -> Parser[T]:
        """Same parser under a new name."""
        return Parser(self._fn, name)

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def parse(
        self,
        data: bytes | bytearray | memoryview | str,
        *,
        mode: InputMode = InputMode.BYTE,
        decoder: Decoder = utf8_decoder,
        max_source_size: int | None = MAX_SOURCE_SIZE,
        max_depth: int = MAX_DEPTH,
    ) -> Outcome[T]:
        """Run this parser over data from offset 0. See parse()."""
        return parse(
            self,
            data,
            mode=mode,
            decoder=decoder,
            max_source_size=max_source_size,
            max_depth=max_depth,
        )

    def parse_or_raise(
        self,
        data: bytes | bytearray | memoryview | str,
        *,
        mode: InputMode = InputMode.BYTE,
        decoder: Decoder = utf8_decoder,
        max_source_size: int | None = MAX_SOURCE_SIZE,
        max_depth: int = MAX_DEPTH,
    ) -> T:
        """Run this parser and return its value.

        Raises:
            ParseFailedError: If the parse fails; the message carries
                line:column and the error is attached as ``.error``
        """
        prepared = _prepare(data, mode, decoder, max_source_size)
        if isinstance(prepared, Failure):
            error = prepared.error
            raise ParseFailedError(
                ErrorTemplate.parse_failed(error, f"byte {error.offset}"), error
            )
        outcome = _run(self, prepared, max_depth)
        if isinstance(outcome, Failure):
            error = outcome.error
            line, col = LineOffsetCache(prepared.source).get_line_col(error.offset)
            raise ParseFailedError(ErrorTemplate.parse_failed(error, f"{line}:{col}"), error)
        return outcome.value

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map[U](self, fn: Callable[[T], U]) -> Parser[U]:
        """Apply a total function to the produced value."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.map_(self, fn)

    def __rshift__[U](self, fn: Callable[[T], U]) -> Parser[U]:
        return self.map(fn)

    def try_map[U](
        self,
        fn: Callable[[T], U],
        errors: tuple[type[Exception], ...] = (ValueError,),
    ) -> Parser[U]:
        """Apply a fallible function; Reject or ``errors`` become failures."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.try_map(self, fn, errors)

    # ------------------------------------------------------------------
    # Sequencing
    # ------------------------------------------------------------------

    def then[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        """Run self then other; produce both values as a pair."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.sequence(self, other)

    def __add__[U](self, other: Parser[U]) -> Parser[tuple[T, U]]:
        return self.then(other)

    def before(self, other: Parser[Any]) -> Parser[T]:
        """Run self then other; keep self's value."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.terminated(self, other)

    def after(self, other: Parser[Any]) -> Parser[T]:
        """Run other then self; keep self's value."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.preceded(other, self)

    def chain[U](self, fn: Callable[[T], Parser[U]]) -> Parser[tuple[T, U]]:
        """Dependent sequencing: fn(value) picks the next parser."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.chain(self, fn)

    # ------------------------------------------------------------------
    # Choice
    # ------------------------------------------------------------------

    def or_else[U](self, other: Parser[U]) -> Parser[T | U]:
        """Try other from the same cursor if self fails."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.alternative(self, other)

    def __or__[U](self, other: Parser[U]) -> Parser[T | U]:
        from .any import Choice, any_seq  # noqa: PLC0415 - circular

        left = self.branches if isinstance(self, Choice) else (self,)
        right = other.branches if isinstance(other, Choice) else (other,)
        return any_seq((*left, *right))

    def optional[D](self, default: D = None) -> Parser[T | D]:  # type: ignore[assignment]
        """Never fails; produce default without consuming when self fails."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.optional(self, default)

    # ------------------------------------------------------------------
    # Repetition and diagnostics
    # ------------------------------------------------------------------

    def many(self) -> Parser[list[T]]:
        """Zero or more repetitions."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.many(self)

    def many1(self) -> Parser[list[T]]:
        """One or more repetitions."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.many1(self)

    def label(self, message: str) -> Parser[T]:
        """On failure, wrap the error under a higher-level message."""
        from . import combinators  # noqa: PLC0415 - circular

        return combinators.label(self, message)


class ForwardParser[T](Parser[T]):
    """Placeholder for a parser defined later (recursive grammars).

    Every entry goes through the DepthGuard of the running parse, so deep
    nesting and left recursion end in DepthLimitExceededError.

    Example:
        >>> from errgonomic import between, tag, digit
        >>> expr = forward("expr")
        >>> expr.define(digit | between(tag("("), expr, tag(")")))
        >>> expr.parse(b"((7))").value
        b'7'
    """

    __slots__ = ("_target",)

    def __init__(self, name: str = "forward") -> None:
        super().__init__(self._invoke, name)
        object.__setattr__(self, "_target", None)

    @property
    def is_defined(self) -> bool:
        return self._target is not None

    def define(self, parser: Parser[T]) -> None:
        """Bind the placeholder to its implementation.

        Raises:
            ValueError: If already defined
        """
        if self._target is not None:
            raise ValueError(ErrorTemplate.forward_redefined(self._name))
        object.__setattr__(self, "_target", parser)
        logger.debug("Forward parser %r defined as %r", self._name, parser)

    def _invoke(self, cursor: Cursor) -> Outcome[T]:
        target = self._target
        if target is None:
            raise RuntimeError(ErrorTemplate.forward_undefined(self._name))
        with nesting():
            return target(cursor)

    def __repr__(self) -> str:
        state = "defined" if self._target is not None else "undefined"
        return f"<ForwardParser {self._name} ({state})>"


def forward[T](name: str = "forward") -> ForwardParser[T]:
    """Create a ForwardParser for a recursive rule."""
    return ForwardParser(name)


# ----------------------------------------------------------------------
# Top-level invocation
# ----------------------------------------------------------------------


def _prepare(
    data: bytes | bytearray | memoryview | str,
    mode: InputMode,
    decoder: Decoder,
    max_source_size: int | None,
) -> Cursor | Failure:
    """Build the starting cursor for mode and validate its size in atoms.

    Size is measured after encoding or decoding, so it counts bytes in
    Byte mode and code points in Codepoint mode.

    Returns Failure only for decoder errors; everything else raises.
    """
    if mode is InputMode.BYTE:
        raw = data.encode("utf-8") if isinstance(data, str) else data
        cursor = Cursor.from_bytes(raw)
        _check_size(len(cursor.source), max_source_size)
        return cursor

    if isinstance(data, str):
        _check_size(len(data), max_source_size)
        return Cursor.from_text(data)
    try:
        cursor = Cursor.decode(bytes(data), decoder)
    except DecodeError as e:
        logger.debug("Input rejected by decoder at byte %d", e.offset)
        return Failure(ErrorTemplate.invalid_encoding(e.offset, e.reason))
    _check_size(len(cursor.source), max_source_size)
    return cursor


def _check_size(size: int, max_source_size: int | None) -> None:
    if max_source_size and size > max_source_size:
        raise ValueError(ErrorTemplate.source_too_large(size, max_source_size))


def _run[T](parser: Parser[T], cursor: Cursor, max_depth: int) -> Outcome[T]:
    logger.debug(
        "Parsing %d atoms in %s mode with %r", len(cursor.source), cursor.mode, parser
    )
    with guarded(max_depth):
        outcome = parser(cursor)
    match outcome:
        case Success(cursor=end):
            logger.debug("Parse succeeded at offset %d", end.pos)
        case Failure(error):
            logger.debug(
                "Parse failed at offset %d (%s): %s", error.offset, error.kind, error.message
            )
    return outcome


def parse[T](
    parser: Parser[T],
    data: bytes | bytearray | memoryview | str,
    *,
    mode: InputMode = InputMode.BYTE,
    decoder: Decoder = utf8_decoder,
    max_source_size: int | None = MAX_SOURCE_SIZE,
    max_depth: int = MAX_DEPTH,
) -> Outcome[T]:
    """Run parser over a whole input buffer from offset 0.

    Partial matches succeed; compose with ``eoi`` to require that the whole
    input is consumed.

    Args:
        parser: Parser to run
        data: Input. In Byte mode str is UTF-8 encoded; in Codepoint mode
            bytes are decoded with decoder.
        mode: Atom unit for the whole parse
        decoder: Decoding capability for Codepoint mode over bytes
        max_source_size: Maximum input length (0 or None disables)
        max_depth: Maximum forward-reference / Pratt nesting

    Returns:
        Success with the value and end cursor, or Failure. A decoder error
        is a Failure of kind INVALID_ENCODING anchored at the byte offset
        the decoder reported; no parser runs in that case.

    Raises:
        ValueError: If data exceeds max_source_size
        DepthLimitExceededError: If nesting exceeds max_depth

    Example:
        >>> from errgonomic import integer_literal
        >>> parse(integer_literal, b"-42").value
        -42
    """
    prepared = _prepare(data, mode, decoder, max_source_size)
    if isinstance(prepared, Failure):
        return prepared
    return _run(parser, prepared, max_depth)


def parsers_of(items: Iterable[Parser[Any]]) -> tuple[Parser[Any], ...]:
    """Materialize and type-check an iterable of parsers.

    Raises:
        TypeError: If an item is not a Parser
    """
    parsers = tuple(items)
    for item in parsers:
        if not isinstance(item, Parser):
            msg = f"Expected a Parser, got {type(item).__name__}"
            raise TypeError(msg)
    return parsers
