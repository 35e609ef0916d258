"""Combinator algebra over Parser values.

Every function here takes parsers and returns a new Parser; nothing runs
until the result is invoked with a cursor.

Propagation rules:
    - Sequencing and mapping propagate the first failure verbatim
    - Alternation merges branch errors (furthest blame point wins)
    - Repetition stops at the first failure and keeps what it collected
    - Lookahead never consumes input, whatever the outcome

Repetition guard:
    A sub-parser that succeeds without consuming input would make a
    repetition loop forever. The first zero-width success is accepted; a
    second consecutive one ends the repetition with a NO_PROGRESS failure
    anchored at the stuck cursor.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from errgonomic.diagnostics import ErrorTemplate, ParseError, Span
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

from .core import Parser, Reject, parsers_of

__all__ = [
    "alternative",
    "between",
    "chain",
    "consumed",
    "label",
    "lookahead",
    "many",
    "many1",
    "many_m_n",
    "many_n",
    "many_until",
    "map_",
    "not_",
    "optional",
    "preceded",
    "separated",
    "sequence",
    "spanned",
    "terminated",
    "try_map",
]


# ============================================================================
# MAPPING
# ============================================================================


def map_[T, U](parser: Parser[T], fn: Callable[[T], U]) -> Parser[U]:
    """Apply a total function to the value; failures pass through.

    Example:
        >>> from errgonomic import decimal
        >>> map_(decimal, int).parse(b"42").value
        42
    """

    def run(cursor: Cursor) -> Outcome[U]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        return Success(fn(outcome.value), outcome.cursor)

    return Parser(run, f"map({parser.name})")


def try_map[T, U](
    parser: Parser[T],
    fn: Callable[[T], U],
    errors: tuple[type[Exception], ...] = (ValueError,),
) -> Parser[U]:
    """Apply a fallible function to the value.

    fn signals failure by raising Reject(payload, message) or one of
    ``errors``. Either becomes a CUSTOM_FAILURE over the span consumed by
    parser; the payload is the Reject payload or the caught exception.
    Exceptions outside ``errors`` propagate.

    Example:
        >>> from errgonomic import decimal
        >>> outcome = try_map(decimal, lambda b: int(b) // 0, (ZeroDivisionError,)).parse(b"7")
        >>> outcome.error.kind
        <ErrorKind.CUSTOM_FAILURE: 'custom_failure'>
    """

    def run(cursor: Cursor) -> Outcome[U]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        try:
            value = fn(outcome.value)
        except Reject as rejected:
            return Failure(
                ErrorTemplate.custom(
                    cursor.span_to(outcome.cursor), rejected.payload, rejected.message
                )
            )
        except errors as e:
            return Failure(ErrorTemplate.custom(cursor.span_to(outcome.cursor), e, str(e) or None))
        return Success(value, outcome.cursor)

    return Parser(run, f"try_map({parser.name})")


# ============================================================================
# SEQUENCING
# ============================================================================


def sequence(
    first: Parser[Any], second: Parser[Any], *rest: Parser[Any]
) -> Parser[tuple[Any, ...]]:
    """Run parsers left to right; produce a tuple of all their values.

    The first failure is returned unchanged: a sequence commits to its
    order, so nothing is merged.

    Example:
        >>> from errgonomic import integer_literal, alphabetic
        >>> outcome = sequence(integer_literal, alphabetic).parse(b"123abc")
        >>> outcome.value, outcome.cursor.pos
        ((123, b'abc'), 6)
    """
    parsers = parsers_of((first, second, *rest))

    def run(cursor: Cursor) -> Outcome[tuple[Any, ...]]:
        values = []
        for parser in parsers:
            outcome = parser(cursor)
            if isinstance(outcome, Failure):
                return outcome
            values.append(outcome.value)
            cursor = outcome.cursor
        return Success(tuple(values), cursor)

    return Parser(run, "sequence(" + ", ".join(p.name for p in parsers) + ")")


def preceded[T](prefix: Parser[Any], parser: Parser[T]) -> Parser[T]:
    """Run prefix then parser; keep parser's value."""

    def run(cursor: Cursor) -> Outcome[T]:
        skipped = prefix(cursor)
        if isinstance(skipped, Failure):
            return skipped
        return parser(skipped.cursor)

    return Parser(run, f"preceded({prefix.name}, {parser.name})")


def terminated[T](parser: Parser[T], suffix: Parser[Any]) -> Parser[T]:
    """Run parser then suffix; keep parser's value."""

    def run(cursor: Cursor) -> Outcome[T]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        skipped = suffix(outcome.cursor)
        if isinstance(skipped, Failure):
            return skipped
        return Success(outcome.value, skipped.cursor)

    return Parser(run, f"terminated({parser.name}, {suffix.name})")


def between[T](open_: Parser[Any], parser: Parser[T], close: Parser[Any]) -> Parser[T]:
    """Run open_, parser, close; keep the middle value.

    Example:
        >>> from errgonomic import tag, decimal
        >>> between(tag("["), decimal, tag("]")).parse(b"[42]").value
        b'42'
    """
    return preceded(open_, terminated(parser, close)).named(
        f"between({open_.name}, {parser.name}, {close.name})"
    )


def chain[T, U](parser: Parser[T], fn: Callable[[T], Parser[U]]) -> Parser[tuple[T, U]]:
    """Dependent sequencing: the next parser is chosen from the first value.

    Example:
        >>> from errgonomic import integer_literal, tag, take
        >>> counted = chain(integer_literal.before(tag(":")), take)
        >>> counted.parse(b"3:abcdef").value
        (3, b'abc')
    """

    def run(cursor: Cursor) -> Outcome[tuple[T, U]]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        following = fn(outcome.value)(outcome.cursor)
        if isinstance(following, Failure):
            return following
        return Success((outcome.value, following.value), following.cursor)

    return Parser(run, f"chain({parser.name})")


# ============================================================================
# CHOICE
# ============================================================================


def alternative[T, U](first: Parser[T], second: Parser[U]) -> Parser[T | U]:
    """Ordered choice between two parsers.

    second runs from the original cursor only if first fails. When both
    fail, their errors are merged (furthest blame point wins, ties keep
    both in declaration order).
    """

    def run(cursor: Cursor) -> Outcome[T | U]:
        outcome = first(cursor)
        if isinstance(outcome, Success):
            return outcome
        fallback = second(cursor)
        if isinstance(fallback, Success):
            return fallback
        return Failure(ParseError.merge(outcome.error, fallback.error))

    return Parser(run, f"alternative({first.name}, {second.name})")


def optional[T, D](
    parser: Parser[T], default: D = None  # type: ignore[assignment]
) -> Parser[T | D]:
    """Never fails: parser's value, or default at the original cursor."""

    def run(cursor: Cursor) -> Outcome[T | D]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return Success(default, cursor)
        return outcome

    return Parser(run, f"optional({parser.name})")


# ============================================================================
# LOOKAHEAD
# ============================================================================


def lookahead[T](parser: Parser[T]) -> Parser[T]:
    """Run parser without consuming; failures propagate."""

    def run(cursor: Cursor) -> Outcome[T]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        return Success(outcome.value, cursor)

    return Parser(run, f"lookahead({parser.name})")


def not_(parser: Parser[Any]) -> Parser[None]:
    """Negative lookahead: succeed with None where parser fails.

    When parser matches, fails with MISMATCH over the span parser would
    have consumed. Never consumes input.

    Example:
        >>> from errgonomic import tag
        >>> not_(tag("st")).parse(b"test").cursor.pos
        0
    """

    def run(cursor: Cursor) -> Outcome[None]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return Success(None, cursor)
        return Failure(ErrorTemplate.unexpected_match(cursor.span_to(outcome.cursor)))

    return Parser(run, f"not({parser.name})")


# ============================================================================
# REPETITION
# ============================================================================


def _repeat[T](
    parser: Parser[T], cursor: Cursor, minimum: int, maximum: int | None
) -> Outcome[list[T]]:
    """Shared repetition loop with the zero-width progress guard."""
    values: list[T] = []
    stalled = False
    while maximum is None or len(values) < maximum:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            if len(values) < minimum:
                return outcome
            break
        if outcome.cursor.pos == cursor.pos:
            if stalled:
                return Failure(ErrorTemplate.no_progress(Span.at(cursor.pos)))
            stalled = True
        else:
            stalled = False
        values.append(outcome.value)
        cursor = outcome.cursor
    return Success(values, cursor)


def many[T](parser: Parser[T]) -> Parser[list[T]]:
    """Zero or more repetitions, collected into a list.

    Example:
        >>> from errgonomic import tag
        >>> many(tag("ab")).parse(b"ababx").value
        [b'ab', b'ab']
    """
    return Parser(lambda cursor: _repeat(parser, cursor, 0, None), f"many({parser.name})")


def many1[T](parser: Parser[T]) -> Parser[list[T]]:
    """One or more repetitions.

    With zero matches the error of the first failed attempt is returned.
    """
    return Parser(lambda cursor: _repeat(parser, cursor, 1, None), f"many1({parser.name})")


def many_n[T](n: int, parser: Parser[T]) -> Parser[list[T]]:
    """Exactly n repetitions; fails with the error of the short attempt."""
    return many_m_n(n, n, parser).named(f"many_n({n}, {parser.name})")


def many_m_n[T](m: int, n: int, parser: Parser[T]) -> Parser[list[T]]:
    """At least m, at most n repetitions.

    Raises:
        ValueError: If the bounds are negative or m > n
    """
    if m < 0 or n < m:
        msg = f"many_m_n requires 0 <= m <= n, got m={m}, n={n}"
        raise ValueError(msg)
    return Parser(
        lambda cursor: _repeat(parser, cursor, m, n), f"many_m_n({m}, {n}, {parser.name})"
    )


def many_until[T, U](parser: Parser[T], until: Parser[U]) -> Parser[tuple[list[T], U]]:
    """Repeat parser until ``until`` matches.

    ``until`` is tried first at every step. Produces (values, until_value)
    with the cursor after ``until``. If neither matches, both errors are
    merged.

    Example:
        >>> from errgonomic import any_atom, tag
        >>> many_until(any_atom, tag(";")).parse(b"ab;").value
        ([b'a', b'b'], b';')
    """

    def run(cursor: Cursor) -> Outcome[tuple[list[T], U]]:
        values: list[T] = []
        stalled = False
        while True:
            stop = until(cursor)
            if isinstance(stop, Success):
                return Success((values, stop.value), stop.cursor)
            outcome = parser(cursor)
            if isinstance(outcome, Failure):
                return Failure(ParseError.merge(stop.error, outcome.error))
            if outcome.cursor.pos == cursor.pos:
                if stalled:
                    return Failure(ErrorTemplate.no_progress(Span.at(cursor.pos)))
                stalled = True
            else:
                stalled = False
            values.append(outcome.value)
            cursor = outcome.cursor

    return Parser(run, f"many_until({parser.name}, {until.name})")


def separated[T](
    parser: Parser[T], separator: Parser[Any], allow_trailing: bool = False
) -> Parser[list[T]]:
    """One or more parser values separated by separator.

    Separator values are dropped. After a separator another item is
    required, unless allow_trailing is set: then a dangling separator is
    consumed and ends the list.

    Example:
        >>> from errgonomic import tag
        >>> items = separated(tag("hello"), tag(","), allow_trailing=True)
        >>> items.parse(b"hello,hello, world").value
        [b'hello', b'hello']
    """

    def run(cursor: Cursor) -> Outcome[list[T]]:
        first = parser(cursor)
        if isinstance(first, Failure):
            return first
        values = [first.value]
        cursor = first.cursor
        while True:
            skipped = separator(cursor)
            if isinstance(skipped, Failure):
                break
            item = parser(skipped.cursor)
            if isinstance(item, Failure):
                if allow_trailing:
                    cursor = skipped.cursor
                    break
                return item
            if item.cursor.pos == cursor.pos:
                return Failure(ErrorTemplate.no_progress(Span.at(cursor.pos)))
            values.append(item.value)
            cursor = item.cursor
        return Success(values, cursor)

    return Parser(run, f"separated({parser.name}, {separator.name})")


# ============================================================================
# RECOGNITION & DIAGNOSTICS
# ============================================================================


def consumed(parser: Parser[Any]) -> Parser[bytes | str]:
    """Produce the input parser consumed instead of its value.

    Example:
        >>> from errgonomic import integer_literal
        >>> consumed(integer_literal).parse(b"-12;").value
        b'-12'
    """

    def run(cursor: Cursor) -> Outcome[bytes | str]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        return Success(cursor.slice_to(outcome.cursor.pos), outcome.cursor)

    return Parser(run, f"consumed({parser.name})")


def spanned[T](parser: Parser[T]) -> Parser[tuple[T, Span]]:
    """Produce (value, span consumed) for building located nodes."""

    def run(cursor: Cursor) -> Outcome[tuple[T, Span]]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return outcome
        return Success((outcome.value, cursor.span_to(outcome.cursor)), outcome.cursor)

    return Parser(run, f"spanned({parser.name})")


def label[T](parser: Parser[T], message: str) -> Parser[T]:
    """Replace a failure's message, keeping the original as its cause.

    The labelled error keeps the original span and kind, so alternation
    merging is unaffected.

    Example:
        >>> from errgonomic import decimal
        >>> error = label(decimal, "Expected a port number").parse(b"x").error
        >>> error.message, error.cause.message
        ('Expected a port number', 'Expected decimal digit')
    """

    def run(cursor: Cursor) -> Outcome[T]:
        outcome = parser(cursor)
        if isinstance(outcome, Failure):
            return Failure(outcome.error.with_context(message, expected=(message,)))
        return outcome

    return Parser(run, f"label({parser.name})")
