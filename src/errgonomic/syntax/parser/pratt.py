"""Pratt (operator-precedence) expression parser.

Binding power algorithm after matklad's "Simple but Powerful Pratt
Parsing". Operators are registered on an immutable builder; each
registration creates a new precedence level and the operators registered
EARLIER bind TIGHTER:

    Pratt(atom)
        .with_prefix_op(tag("-"))                          # tightest
        .with_infix_op(tag("*"), Associativity.LEFT)
        .with_infix_op(tag("+"), Associativity.LEFT)       # loosest

Operators that share a level (``+`` and ``-``) are registered together as
one parser, e.g. ``any_(tag("+"), tag("-"))``.

Node constructors build the expression values. They may raise Reject to
turn an ill-formed node into a CUSTOM_FAILURE spanning the whole node.

Every recursive operand parse enters one level of the running parse's
DepthGuard, so long prefix chains and right-associative towers end in
DepthLimitExceededError rather than exhausting the stack.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from errgonomic.core.depth_guard import nesting
from errgonomic.diagnostics import ErrorTemplate, ParseError, Span
from errgonomic.enums import Associativity
from errgonomic.syntax.cursor import Cursor
from errgonomic.syntax.outcome import Failure, Outcome, Success

from .core import Parser, Reject

__all__ = ["Pratt"]


def _prefix_node(op: Any, rhs: Any) -> Any:
    return (op, rhs)


def _infix_node(lhs: Any, op: Any, rhs: Any) -> Any:
    return (lhs, op, rhs)


def _postfix_node(lhs: Any, op: Any) -> Any:
    return (lhs, op)


@dataclass(frozen=True, slots=True)
class _Operator:
    """Registered operator with its binding powers.

    Attributes:
        parser: Recognizes the operator and produces its value
        lbp: Left binding power (infix and postfix)
        rbp: Right binding power (infix and prefix)
    """

    parser: Parser[Any]
    lbp: int
    rbp: int

    def raised(self, amount: int) -> _Operator:
        return replace(self, lbp=self.lbp + amount, rbp=self.rbp + amount)


def _first_match(
    operators: tuple[_Operator, ...],
    cursor: Cursor,
    failures: list[ParseError] | None = None,
) -> tuple[_Operator, Any, Cursor] | None:
    """First operator that matches at cursor (failures are not errors here).

    Failures of the operators tried are appended to ``failures`` when given.
    """
    for operator in operators:
        outcome = operator.parser(cursor)
        if isinstance(outcome, Success):
            return operator, outcome.value, outcome.cursor
        if failures is not None:
            failures.append(outcome.error)
    return None


class Pratt(Parser[Any]):
    """Operator-precedence parser over an atom parser.

    Args:
        atom: Parser for operands (literals, identifiers, parenthesized
            sub-expressions via a forward reference)
        prefix: Node constructor ``(op, rhs) -> expr``
        infix: Node constructor ``(lhs, op, rhs) -> expr``
        postfix: Node constructor ``(lhs, op) -> expr``

    Default constructors produce tuples: ``(op, rhs)``, ``(lhs, op, rhs)``
    and ``(lhs, op)``.

    Example:
        >>> from errgonomic import any_, integer_literal, tag, whitespace_wrapped as ww
        >>> calc = (
        ...     Pratt(ww(integer_literal))
        ...     .with_infix_op(ww(tag("*")), Associativity.LEFT)
        ...     .with_infix_op(ww(tag("+")), Associativity.LEFT)
        ... )
        >>> calc.parse(b"1 + 2 * 3").value
        (1, b'+', (2, b'*', 3))
    """

    __slots__ = (
        "_atom",
        "_infix",
        "_infix_ops",
        "_postfix",
        "_postfix_ops",
        "_prefix",
        "_prefix_ops",
    )

    def __init__(
        self,
        atom: Parser[Any],
        *,
        prefix: Callable[[Any, Any], Any] = _prefix_node,
        infix: Callable[[Any, Any, Any], Any] = _infix_node,
        postfix: Callable[[Any, Any], Any] = _postfix_node,
    ) -> None:
        super().__init__(self._parse_expression, f"pratt({atom.name})")
        for name, value in (
            ("_atom", atom),
            ("_prefix", prefix),
            ("_infix", infix),
            ("_postfix", postfix),
            ("_prefix_ops", ()),
            ("_infix_ops", ()),
            ("_postfix_ops", ()),
        ):
            object.__setattr__(self, name, value)

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def _with(
        self,
        levels: int,
        *,
        prefix_op: _Operator | None = None,
        infix_op: _Operator | None = None,
        postfix_op: _Operator | None = None,
    ) -> Pratt:
        """Copy with every existing operator raised by levels, plus one new operator."""
        built = Pratt(self._atom, prefix=self._prefix, infix=self._infix, postfix=self._postfix)
        for name, ops, new in (
            ("_prefix_ops", self._prefix_ops, prefix_op),
            ("_infix_ops", self._infix_ops, infix_op),
            ("_postfix_ops", self._postfix_ops, postfix_op),
        ):
            raised = tuple(op.raised(levels) for op in ops)
            object.__setattr__(built, name, (*raised, new) if new is not None else raised)
        return built

    def with_prefix_op(self, parser: Parser[Any]) -> Pratt:
        """New Pratt with a prefix operator one level looser than all existing."""
        return self._with(1, prefix_op=_Operator(parser, lbp=0, rbp=1))

    def with_postfix_op(self, parser: Parser[Any]) -> Pratt:
        """New Pratt with a postfix operator one level looser than all existing."""
        return self._with(1, postfix_op=_Operator(parser, lbp=1, rbp=0))

    def with_infix_op(self, parser: Parser[Any], associativity: Associativity) -> Pratt:
        """New Pratt with an infix operator one level looser than all existing.

        Infix levels take two binding-power steps so left and right
        associativity never overlap with a neighbouring level.
        """
        lbp, rbp = (1, 2) if associativity is Associativity.LEFT else (2, 1)
        return self._with(2, infix_op=_Operator(parser, lbp=lbp, rbp=rbp))

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _parse_expression(self, cursor: Cursor) -> Outcome[Any]:
        return self._expression(cursor, 0)

    def _build(
        self, start: Cursor, end: Cursor, constructor: Callable[..., Any], *parts: Any
    ) -> Outcome[Any]:
        try:
            node = constructor(*parts)
        except Reject as rejected:
            return Failure(
                ErrorTemplate.custom(Span(start.pos, end.pos), rejected.payload, rejected.message)
            )
        return Success(node, end)

    def _expression(self, cursor: Cursor, min_bp: int) -> Outcome[Any]:
        with nesting():
            start = cursor
            prefix_failures: list[ParseError] = []
            prefix = _first_match(self._prefix_ops, cursor, prefix_failures)
            if prefix is not None:
                operator, op_value, after = prefix
                operand = self._expression(after, operator.rbp)
                if isinstance(operand, Failure):
                    return operand
                lhs_outcome = self._build(
                    start, operand.cursor, self._prefix, op_value, operand.value
                )
            else:
                lhs_outcome = self._atom(cursor)
                if isinstance(lhs_outcome, Failure) and prefix_failures:
                    # an operand could also have started with a prefix operator
                    merged = ParseError.merge(lhs_outcome.error, *prefix_failures)
                    lhs_outcome = Failure(merged)
            if isinstance(lhs_outcome, Failure):
                return lhs_outcome
            lhs, cursor = lhs_outcome.value, lhs_outcome.cursor

            while True:
                postfix = _first_match(self._postfix_ops, cursor)
                if postfix is not None:
                    operator, op_value, after = postfix
                    if operator.lbp < min_bp:
                        break
                    built = self._build(start, after, self._postfix, lhs, op_value)
                    if isinstance(built, Failure):
                        return built
                    lhs, cursor = built.value, built.cursor
                    continue

                infix = _first_match(self._infix_ops, cursor)
                if infix is None:
                    break
                operator, op_value, after = infix
                if operator.lbp < min_bp:
                    break
                operand = self._expression(after, operator.rbp)
                if isinstance(operand, Failure):
                    return operand
                built = self._build(
                    start, operand.cursor, self._infix, lhs, op_value, operand.value
                )
                if isinstance(built, Failure):
                    return built
                lhs, cursor = built.value, built.cursor

            return Success(lhs, cursor)

    def __repr__(self) -> str:
        return (
            f"<Pratt {self._atom.name}: {len(self._prefix_ops)} prefix, "
            f"{len(self._infix_ops)} infix, {len(self._postfix_ops)} postfix>"
        )
