"""Diagnostic system for parse failures.

Provides the error model (spans, entries, merge rule), the exception
hierarchy, message templates and a formatter that renders errors with
source snippets. Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Span
from .errors import (
    DecodeError,
    DepthLimitExceededError,
    ErrgonomicError,
    InputModeError,
    OutOfInputError,
    ParseFailedError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .model import ErrorEntry, ParseError
from .position import LineOffsetCache, line_col
from .templates import ErrorTemplate

__all__ = [
    "DecodeError",
    "DepthLimitExceededError",
    "DiagnosticFormatter",
    "ErrgonomicError",
    "ErrorEntry",
    "ErrorTemplate",
    "InputModeError",
    "LineOffsetCache",
    "OutOfInputError",
    "OutputFormat",
    "ParseError",
    "ParseFailedError",
    "Span",
    "line_col",
]
