"""Diagnostic formatting service.

Renders ParseError values for humans and tools. This is the reference
consumer of the error model's {span, message, kind, expected, cause chain,
payload} contract; richer front ends can build on the same fields.

Python 3.13+. Zero external dependencies.
"""

import json
from dataclasses import dataclass
from enum import StrEnum

from errgonomic.constants import DEFAULT_CONTEXT_LINES, MAX_EXPECTED_SHOWN

from .model import ErrorEntry, ParseError
from .position import LineOffsetCache

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Rust compiler-style output with source snippet (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


def _display(text: bytes | str) -> str:
    """Printable form of a source line."""
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8", errors="backslashreplace")
    return text


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Attributes:
        output_format: Output style (rust, simple, json)
        context_lines: Source lines shown around the error line (rust)
        color: Enable ANSI color codes (for terminal output)
        max_expected: Expected descriptions listed before eliding the rest

    Example:
        >>> error = ParseError.single(Span(6, 7), "Expected ']'", ErrorKind.MISMATCH)
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(error, "hello\\nworld"))
        2:1: mismatch: Expected ']'
    """

    output_format: OutputFormat = OutputFormat.RUST
    context_lines: int = DEFAULT_CONTEXT_LINES
    color: bool = False
    max_expected: int = MAX_EXPECTED_SHOWN

    def format(self, error: ParseError, source: bytes | str | None = None) -> str:
        """Format a parse error.

        Args:
            error: Error to format
            source: Buffer the error's spans refer to; enables line:column
                and snippets. Omit for offset-only output.

        Returns:
            Formatted diagnostic string
        """
        cache = LineOffsetCache(source) if source is not None else None
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(error, cache)
            case OutputFormat.SIMPLE:
                return self._format_simple(error, cache)
            case OutputFormat.JSON:
                return self._format_json(error, cache)

    def _location(self, offset: int, cache: LineOffsetCache | None) -> str:
        if cache is None:
            return f"offset {offset}"
        line, col = cache.get_line_col(offset)
        return f"{line}:{col}"

    def _expected(self, error: ParseError) -> str:
        shown = list(error.expected[: self.max_expected])
        hidden = len(error.expected) - len(shown)
        if hidden > 0:
            shown.append(f"... ({hidden} more)")
        return ", ".join(shown)

    def _format_simple(self, error: ParseError, cache: LineOffsetCache | None) -> str:
        """Format in single-line format.

        Example output:
            2:1: mismatch: Expected ']'
        """
        return f"{self._location(error.offset, cache)}: {error.kind}: {error.message}"

    def _format_rust(self, error: ParseError, cache: LineOffsetCache | None) -> str:
        """Format in Rust compiler style.

        Example output:
            error[mismatch]: Expected 'x'
              --> 1:3
               |
             1 | abc
               |   ^
              = expected: 'x'
        """
        label = "error"
        if self.color:
            label = f"\033[1;31m{label}\033[0m"  # Bold red
        parts = [f"{label}[{error.kind}]: {error.message}"]
        parts.append(f"  --> {self._location(error.offset, cache)}")

        if cache is not None:
            parts.extend(self._snippet(error, cache))

        if error.expected:
            parts.append(f"  = expected: {self._expected(error)}")
        if error.payload is not None:
            parts.append(f"  = payload: {error.payload!r}")
        for cause in error.cause_chain():
            parts.append(
                f"  = caused by [{cause.kind}] at {self._location(cause.offset, cache)}: "
                f"{cause.message}"
            )
        return "\n".join(parts)

    def _snippet(self, error: ParseError, cache: LineOffsetCache) -> list[str]:
        line, col = cache.get_line_col(error.offset)
        first = max(1, line - self.context_lines)
        last = min(cache.line_count, line + self.context_lines)
        width = len(str(last))
        gutter = " " * (width + 1)

        lines = [f"{gutter} |"]
        for number in range(first, last + 1):
            text = cache.line_text(number)
            lines.append(f"{number:>{width}} | {_display(text)}".rstrip())
            if number == line:
                # Caret column in display characters, not source atoms
                prefix = _display(text[: col - 1])
                lines.append(f"{gutter} | {' ' * len(prefix)}^")
        return lines

    def _format_json(self, error: ParseError, cache: LineOffsetCache | None) -> str:
        """Format as JSON.

        Example output:
            {"kind": "mismatch", "message": "...", "start": 6, "end": 7, ...}
        """
        return json.dumps(self._error_data(error, cache), ensure_ascii=False)

    def _error_data(self, error: ParseError, cache: LineOffsetCache | None) -> dict[str, object]:
        data: dict[str, object] = {
            "kind": str(error.kind),
            "message": error.message,
            "start": error.span.start,
            "end": error.span.end,
            "offset": error.offset,
        }
        if cache is not None:
            line, col = cache.get_line_col(error.offset)
            data["line"] = line
            data["column"] = col
        if error.expected:
            data["expected"] = list(error.expected)
        if len(error) > 1:
            data["entries"] = [self._entry_data(entry, cache) for entry in error]
        if error.payload is not None:
            data["payload"] = repr(error.payload)
        if error.cause is not None:
            data["cause"] = self._error_data(error.cause, cache)
        return data

    def _entry_data(self, entry: ErrorEntry, cache: LineOffsetCache | None) -> dict[str, object]:
        data: dict[str, object] = {
            "kind": str(entry.kind),
            "message": entry.message,
            "start": entry.span.start,
            "end": entry.span.end,
        }
        if entry.payload is not None:
            data["payload"] = repr(entry.payload)
        if entry.cause is not None:
            data["cause"] = self._error_data(entry.cause, cache)
        return data
