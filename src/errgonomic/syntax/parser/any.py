"""Variadic "first of N" dispatch.

any_() tries up to MAX_ANY_ARITY branches strictly left to right from the
same cursor and returns the first success. any_seq() is the canonical
unbounded path over any iterable of parsers (for generated or very long
branch lists). Both merge every branch error with the furthest-blame-point
rule when all branches fail.

``p | q | r`` builds one flat Choice, so chained operators do not nest.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from errgonomic.constants import MAX_ANY_ARITY
from errgonomic.diagnostics import ErrorTemplate, ParseError
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

from .core import Parser, parsers_of

__all__ = ["Choice", "any_", "any_seq"]


class Choice(Parser[Any]):
    """Ordered choice over a fixed tuple of branches."""

    __slots__ = ("_branches",)

    def __init__(self, branches: tuple[Parser[Any], ...]) -> None:
        if not branches:
            msg = "Choice requires at least one branch"
            raise ValueError(msg)
        super().__init__(self._dispatch, "any(" + ", ".join(p.name for p in branches) + ")")
        object.__setattr__(self, "_branches", branches)

    @property
    def branches(self) -> tuple[Parser[Any], ...]:
        return self._branches

    def _dispatch(self, cursor: Cursor) -> Outcome[Any]:
        errors: list[ParseError] = []
        for branch in self._branches:
            outcome = branch(cursor)
            if isinstance(outcome, Success):
                return outcome
            errors.append(outcome.error)
        # Single merge over all branches, not a pairwise fold
        return Failure(ParseError.merge_all(errors))


def any_(*parsers: Parser[Any]) -> Parser[Any]:
    """First successful parser among 1 to MAX_ANY_ARITY branches.

    Args:
        parsers: Branches in priority order

    Returns:
        Parser producing the first successful branch's value

    Raises:
        TypeError: With no branches, more than MAX_ANY_ARITY, or a
            non-Parser argument

    Example:
        >>> from errgonomic import InputMode, tag
        >>> outcome = any_(tag("x"), tag("y"), tag("a")).parse("abc", mode=InputMode.CODEPOINT)
        >>> outcome.value, outcome.cursor.pos
        ('a', 1)
    """
    if not parsers:
        msg = "any_() requires at least one parser"
        raise TypeError(msg)
    if len(parsers) > MAX_ANY_ARITY:
        raise TypeError(ErrorTemplate.too_many_branches(len(parsers), MAX_ANY_ARITY))
    return Choice(parsers_of(parsers))


def any_seq(parsers: Iterable[Parser[Any]]) -> Parser[Any]:
    """First successful parser of any non-empty iterable of parsers.

    The iterable is materialized once, at construction.

    Raises:
        ValueError: If parsers is empty
        TypeError: If an item is not a Parser
    """
    return Choice(parsers_of(parsers))
