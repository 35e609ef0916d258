"""Hypothesis strategies for errgonomic property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- diagnostics: Spans, error entries and parse errors
- inputs: Byte/text buffers, literals, expressions and bracket nesting

Usage:
    from tests.strategies import parse_errors, unicode_text
    from tests.strategies.inputs import arithmetic_expressions
"""

from .diagnostics import ENTRY_KINDS, error_entries, parse_errors, spans
from .inputs import (
    ARITHMETIC_OPERATORS,
    ASCII_DIGITS,
    ASCII_LETTERS,
    arithmetic_expressions,
    ascii_words,
    byte_buffers,
    integer_literals,
    nested_brackets,
    unicode_text,
)

__all__ = [
    "ARITHMETIC_OPERATORS",
    "ASCII_DIGITS",
    "ASCII_LETTERS",
    "ENTRY_KINDS",
    "arithmetic_expressions",
    "ascii_words",
    "byte_buffers",
    "error_entries",
    "integer_literals",
    "nested_brackets",
    "parse_errors",
    "spans",
    "unicode_text",
]
