"""Minilang Example - A Tiny Prefix-Notation Language.

Parses and evaluates expressions such as ``(+ 1 (* 2 3))``:

    value     := number | operation
    number    := decimal
    operation := "(" operator value value ")"
    operator  := "+" | "-" | "*" | "/"

Whitespace is allowed around every token.

Demonstrates:

1. forward() for the recursive ``value`` rule
2. any_() dispatch over operator literals
3. whitespace_wrapped() around tokens
4. Codepoint mode (values are str)
5. Evaluating the parsed tree

Usage:
    python examples/minilang.py "(+ 1 (* 2 3))"

Python 3.13+.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import StrEnum

from errgonomic import (
    ForwardParser,
    InputMode,
    ParseFailedError,
    Parser,
    any_,
    between,
    decimal,
    eoi,
    forward,
    optional,
    sequence,
    tag,
    whitespace,
)
from errgonomic import whitespace_wrapped as ww


class Operator(StrEnum):
    """Binary operators of the language."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    def apply(self, left: int, right: int) -> int:
        """Apply to two integers (division floors)."""
        match self:
            case Operator.ADD:
                return left + right
            case Operator.SUB:
                return left - right
            case Operator.MUL:
                return left * right
            case Operator.DIV:
                return left // right


@dataclass(frozen=True, slots=True)
class Number:
    value: int

    def evaluate(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Operation:
    operator: Operator
    left: Expression
    right: Expression

    def evaluate(self) -> int:
        return self.operator.apply(self.left.evaluate(), self.right.evaluate())

    def __str__(self) -> str:
        return f"({self.operator} {self.left} {self.right})"


type Expression = Number | Operation


# ============================================================================
# GRAMMAR
# ============================================================================

value: ForwardParser[Expression] = forward("value")

number: Parser[Number] = ww(decimal).map(lambda digits: Number(int(digits)))

operator: Parser[Operator] = ww(any_(tag("+"), tag("-"), tag("*"), tag("/"))).map(Operator)

operation: Parser[Operation] = between(
    ww(tag("(")),
    sequence(operator, ww(value), optional(whitespace), value),
    ww(tag(")")),
).map(lambda parts: Operation(parts[0], parts[1], parts[3]))

value.define(number | operation)

program: Parser[Expression] = ww(value).before(eoi)


def evaluate(source: str) -> int:
    """Parse and evaluate one program.

    Raises:
        ParseFailedError: If source is not a valid program
        ZeroDivisionError: If the program divides by zero
    """
    return program.parse_or_raise(source, mode=InputMode.CODEPOINT).evaluate()


def main() -> None:
    """Evaluate the programs given on the command line (or a demo set)."""
    inputs = sys.argv[1:] or ["42", "(+ 1 (* 2 3))", "( - 10 ( / 9 2 ) )", "(+ 1)", "(% 1 2)"]

    for source in inputs:
        try:
            tree = program.parse_or_raise(source, mode=InputMode.CODEPOINT)
        except ParseFailedError as e:
            print(f"{source!r}: error: {e}")
            continue
        try:
            print(f"{source!r}: {tree} = {tree.evaluate()}")
        except ZeroDivisionError:
            print(f"{source!r}: {tree} divides by zero")


if __name__ == "__main__":
    main()
