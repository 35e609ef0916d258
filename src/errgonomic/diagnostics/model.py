"""Error model for parse failures.

A ParseError is an immutable, ordered, non-empty collection of ErrorEntry
values. Primitives build single-entry errors anchored at the cursor they were
given; alternation merges branch errors with the furthest-blame-point rule.

Merge rule:
    The blame point of an entry is its span.start. Merging keeps every entry
    whose blame point equals the furthest blame point across the inputs, in
    insertion order (first-declared alternative first). Causes attached to an
    entry do not count toward its depth.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from errgonomic.enums import ErrorKind

from .codes import Span

__all__ = ["ErrorEntry", "ParseError"]


@dataclass(frozen=True, slots=True)
class ErrorEntry:
    """One diagnosis inside a ParseError.

    Attributes:
        span: Blame span (start is the blame point)
        message: Human-readable description
        kind: Failure category
        expected: Descriptions of what would have matched
        cause: Underlying error this entry wraps (label/context chains)
        payload: User-defined custom error value (any type)
    """

    span: Span
    message: str
    kind: ErrorKind
    expected: tuple[str, ...] = field(default_factory=tuple)
    cause: ParseError | None = None
    payload: object | None = None

    @property
    def offset(self) -> int:
        """Blame point of this entry."""
        return self.span.start


@dataclass(frozen=True, slots=True)
class ParseError:
    """Terminal diagnosis of a failed parse.

    Design:
        - Non-empty tuple of entries, immutable
        - Single-entry errors keep their specific kind
        - Multi-entry errors report ErrorKind.AGGREGATE
        - Custom payload rides alongside message and kind, never instead

    Example:
        >>> a = ParseError.single(Span(3, 4), "Expected 'x'", ErrorKind.MISMATCH)
        >>> b = ParseError.single(Span(1, 2), "Expected 'y'", ErrorKind.MISMATCH)
        >>> ParseError.merge(a, b) is a
        True
    """

    entries: tuple[ErrorEntry, ...]

    def __post_init__(self) -> None:
        """Validate ParseError invariants.

        Raises:
            ValueError: If entries is empty
        """
        if not self.entries:
            msg = "ParseError requires at least one entry"
            raise ValueError(msg)

    @classmethod
    def single(
        cls,
        span: Span,
        message: str,
        kind: ErrorKind,
        *,
        expected: tuple[str, ...] = (),
        cause: ParseError | None = None,
        payload: object | None = None,
    ) -> ParseError:
        """Build a one-entry error."""
        return cls((ErrorEntry(span, message, kind, expected, cause, payload),))

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def kind(self) -> ErrorKind:
        """Entry kind, or AGGREGATE when several diagnoses are merged."""
        if len(self.entries) == 1:
            return self.entries[0].kind
        return ErrorKind.AGGREGATE

    @property
    def span(self) -> Span:
        """Union of all entry spans."""
        span = self.entries[0].span
        for entry in self.entries[1:]:
            span = span.union(entry.span)
        return span

    @property
    def offset(self) -> int:
        """Furthest blame point among the entries."""
        return max(entry.offset for entry in self.entries)

    @property
    def message(self) -> str:
        """Entry messages joined in insertion order, duplicates dropped."""
        return "; ".join(dict.fromkeys(entry.message for entry in self.entries))

    @property
    def expected(self) -> tuple[str, ...]:
        """Union of expected descriptions in insertion order."""
        return tuple(dict.fromkeys(item for entry in self.entries for item in entry.expected))

    @property
    def cause(self) -> ParseError | None:
        """Cause of the first entry."""
        return self.entries[0].cause

    @property
    def payload(self) -> object | None:
        """First custom payload attached to any entry."""
        for entry in self.entries:
            if entry.payload is not None:
                return entry.payload
        return None

    def cause_chain(self) -> Iterator[ParseError]:
        """Yield this error's causes, outermost first."""
        cause = self.cause
        while cause is not None:
            yield cause
            cause = cause.cause

    @staticmethod
    def merge(*errors: ParseError) -> ParseError:
        """Combine branch errors, keeping only the deepest diagnoses.

        Args:
            errors: Branch errors in declaration order (at least one)

        Returns:
            The surviving input error unchanged when it alone holds the
            furthest entries, otherwise a new multi-entry error.

        Raises:
            ValueError: If no errors are given
        """
        return ParseError.merge_all(errors)

    @staticmethod
    def merge_all(errors: Iterable[ParseError]) -> ParseError:
        """Iterable form of merge()."""
        candidates = tuple(errors)
        if not candidates:
            msg = "merge requires at least one ParseError"
            raise ValueError(msg)

        furthest = max(error.offset for error in candidates)
        survivors: list[ErrorEntry] = []
        owners: list[ParseError] = []
        for error in candidates:
            kept = [entry for entry in error.entries if entry.offset == furthest]
            if kept:
                survivors.extend(kept)
                owners.append(error)

        if len(owners) == 1 and len(survivors) == len(owners[0].entries):
            return owners[0]
        return ParseError(tuple(survivors))

    def with_context(self, message: str, *, expected: tuple[str, ...] = ()) -> ParseError:
        """Wrap this error as the cause of a new, higher-level diagnosis.

        The new entry keeps this error's span and kind so depth comparison
        and kind-based handling are unaffected by labelling.
        """
        return ParseError.single(
            self.span,
            message,
            self.kind,
            expected=expected or self.expected,
            cause=self,
        )

    def format_error(self, source: bytes | str | None = None) -> str:
        """Format as a single line, with line:column when source is given."""
        from .formatter import DiagnosticFormatter, OutputFormat  # noqa: PLC0415 - circular

        return DiagnosticFormatter(output_format=OutputFormat.SIMPLE).format(self, source)

    def format_with_context(self, source: bytes | str, context_lines: int | None = None) -> str:
        """Format with a source snippet and caret under the blame point."""
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        formatter = DiagnosticFormatter()
        if context_lines is not None:
            formatter = DiagnosticFormatter(context_lines=context_lines)
        return formatter.format(self, source)
