"""Hex Color Example - Parsing "#RRGGBB" Into a Value.

Demonstrates:

1. optional() for an optional "#" prefix
2. many_m_n() for fixed-width fields
3. consumed() + map() to convert the matched digits
4. label() for a domain-level error message
5. eoi to require the whole input
6. Rust-style diagnostics for rejected input

Usage:
    python examples/hex_color.py "#2F14DF" ffffff "#12345"

Python 3.13+.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

from errgonomic import (
    Failure,
    Parser,
    consumed,
    eoi,
    hex_digit,
    many_m_n,
    optional,
    sequence,
    tag,
)


@dataclass(frozen=True, slots=True)
class Color:
    """24-bit RGB color."""

    red: int
    green: int
    blue: int

    def __str__(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"


channel: Parser[int] = (
    consumed(many_m_n(2, 2, hex_digit))
    .map(lambda digits: int(digits, 16))
    .label("Expected two hexadecimal digits")
)

hex_color: Parser[Color] = sequence(optional(tag("#")), channel, channel, channel, eoi).map(
    lambda parts: Color(parts[1], parts[2], parts[3])
)


def parse_color(text: str) -> Color:
    """Parse "#RRGGBB" or "RRGGBB".

    Raises:
        ParseFailedError: If text is not a color
    """
    return hex_color.parse_or_raise(text)


def main() -> None:
    """Parse the colors given on the command line (or a demo set)."""
    inputs = sys.argv[1:] or ["#2F14DF", "2f14df", "#2F14D", "#GG0000", "#2F14DF00"]

    for text in inputs:
        outcome = hex_color.parse(text)
        if isinstance(outcome, Failure):
            print(outcome.error.format_with_context(text))
        else:
            print(f"{text!r} -> {outcome.value!r} ({outcome.value})")
        print()


if __name__ == "__main__":
    main()
