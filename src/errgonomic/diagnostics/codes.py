"""Source spans for error reporting.

Defines the Span value type shared by cursors, outcomes and the error model.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Span"]


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """Half-open offset range ``[start, end)`` over one input buffer.

    Note:
        Offsets are in the unit of the cursor that produced them: bytes for
        Byte-mode parses, code points for Codepoint-mode parses. Spans from
        different buffers must never be compared.

    Attributes:
        start: Starting offset (0-indexed, inclusive)
        end: Ending offset (exclusive)

    Example:
        >>> span = Span(2, 5)
        >>> span.length
        3
        >>> span.union(Span(7, 9))
        Span(start=2, end=9)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate Span invariants.

        Raises:
            ValueError: If start is negative or end precedes start.
        """
        if self.start < 0:
            msg = f"Span.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)

    @classmethod
    def at(cls, offset: int) -> "Span":
        """Zero-width span at offset."""
        return cls(offset, offset)

    @property
    def length(self) -> int:
        """Number of atoms covered."""
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        """True for zero-width spans."""
        return self.start == self.end

    def contains(self, offset: int) -> bool:
        """Check whether offset falls inside the span."""
        return self.start <= offset < self.end

    def is_overlapping(self, other: "Span") -> bool:
        """Check whether the spans overlap or touch."""
        return self.start <= other.end and other.start <= self.end

    def union(self, other: "Span") -> "Span":
        """Smallest span covering both spans (gaps included)."""
        return Span(min(self.start, other.start), max(self.end, other.end))

    def intersect(self, other: "Span") -> "Span":
        """Overlapping part of both spans.

        Raises:
            ValueError: If the spans do not overlap
        """
        if not self.is_overlapping(other):
            msg = f"Spans {self} and {other} do not overlap"
            raise ValueError(msg)
        return Span(max(self.start, other.start), min(self.end, other.end))

    def to_range(self) -> range:
        """Offsets covered, as a range."""
        return range(self.start, self.end)
