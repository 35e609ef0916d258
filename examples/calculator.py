"""Calculator Example - Infix Arithmetic With the Pratt Parser.

Demonstrates:

1. Pratt with prefix, infix (left and right associative) and postfix operators
2. Node constructors that evaluate while parsing
3. Reject from a constructor (division by zero) as a CUSTOM_FAILURE
4. Parenthesized sub-expressions through a forward reference
5. DiagnosticFormatter in RUST and JSON output formats

Operators, tightest first:

    n!          factorial (postfix)
    -x          negation (prefix)
    a ^ b       power (right associative)
    a * b, a / b
    a + b, a - b

Usage:
    python examples/calculator.py "2 ^ 3 ^ 2" "(1 + 2) * -3!"

Python 3.13+.
"""

from __future__ import annotations

import math
import sys

from errgonomic import (
    Associativity,
    DiagnosticFormatter,
    Failure,
    ForwardParser,
    OutputFormat,
    Parser,
    Pratt,
    Reject,
    any_,
    between,
    eoi,
    forward,
    integer_literal,
    tag,
)
from errgonomic import whitespace_wrapped as ww


def _prefix(_op: bytes, operand: int) -> int:
    return -operand


def _infix(lhs: int, op: bytes, rhs: int) -> int:
    match op:
        case b"+":
            return lhs + rhs
        case b"-":
            return lhs - rhs
        case b"*":
            return lhs * rhs
        case b"/":
            if rhs == 0:
                raise Reject({"dividend": lhs}, "Division by zero")
            return lhs // rhs
        case b"^":
            if rhs < 0:
                raise Reject({"exponent": rhs}, "Negative exponents are not supported")
            return lhs**rhs
    msg = f"Unknown operator {op!r}"
    raise ValueError(msg)


def _postfix(operand: int, _op: bytes) -> int:
    if operand < 0:
        raise Reject({"operand": operand}, "Factorial of a negative number")
    return math.factorial(operand)


def _calculator() -> Parser[int]:
    expr: ForwardParser[int] = forward("expr")
    # "-" is tried as a prefix operator before any atom
    atom = ww(integer_literal) | between(ww(tag("(")), expr, ww(tag(")")))
    expr.define(
        Pratt(atom, prefix=_prefix, infix=_infix, postfix=_postfix)
        .with_postfix_op(ww(tag("!")))
        .with_prefix_op(ww(tag("-")))
        .with_infix_op(ww(tag("^")), Associativity.RIGHT)
        .with_infix_op(ww(any_(tag("*"), tag("/"))), Associativity.LEFT)
        .with_infix_op(ww(any_(tag("+"), tag("-"))), Associativity.LEFT)
    )
    return expr.before(eoi)


calculator: Parser[int] = _calculator()


def main() -> None:
    """Evaluate the expressions given on the command line (or a demo set)."""
    inputs = sys.argv[1:] or ["1 + 2 * 3", "2 ^ 3 ^ 2", "(1 + 2) * -3!", "8 / (4 - 4)", "1 +"]
    rust = DiagnosticFormatter()
    as_json = DiagnosticFormatter(output_format=OutputFormat.JSON)

    for source in inputs:
        outcome = calculator.parse(source)
        if isinstance(outcome, Failure):
            print(rust.format(outcome.error, source))
            print(as_json.format(outcome.error, source))
        else:
            print(f"{source} = {outcome.value}")
        print()


if __name__ == "__main__":
    main()
