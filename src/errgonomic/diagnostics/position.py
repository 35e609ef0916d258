"""Position utilities for error reporting.

Converts offsets into 1-indexed line/column pairs. Works over both
buffer types: bytes (offsets are byte indices) and str (offsets are code
point indices). Columns are counted in the same unit as the offset.

Line Ending Support:
    - LF (\\n) and CRLF (\\r\\n): supported (\\n is the line delimiter)
    - CR-only (\\r): NOT supported, such input reports a single line
"""

__all__ = ["LineOffsetCache", "line_col"]


def _newline(source: bytes | str) -> bytes | str:
    return b"\n" if isinstance(source, (bytes, bytearray)) else "\n"


def line_col(source: bytes | str, pos: int) -> tuple[int, int]:
    """Compute line and column for a single position.

    Args:
        source: Complete input buffer
        pos: Offset in source (clamped to the buffer)

    Returns:
        (line, column) tuple (1-indexed, like text editors)

    Performance:
        O(n) where n = pos. Use LineOffsetCache for many lookups.

    Example:
        >>> line_col("line1\\nline2", 8)
        (2, 3)
        >>> line_col(b"ab\\ncd", 3)
        (2, 1)
    """
    pos = max(0, min(pos, len(source)))
    newline = _newline(source)
    line = source.count(newline, 0, pos) + 1
    last_newline = source.rfind(newline, 0, pos)
    col = pos - last_newline if last_newline >= 0 else pos + 1
    return (line, col)


class LineOffsetCache:
    """Cached line offset computation for efficient position lookups.

    Precomputes line start offsets in O(n) single pass, then provides
    O(log n) lookups using binary search. Use this when you need to
    compute line:column for multiple positions in the same source.

    Example:
        >>> cache = LineOffsetCache("line1\\nline2\\nline3")
        >>> cache.get_line_col(0)
        (1, 1)
        >>> cache.get_line_col(8)
        (2, 3)
        >>> cache.line_text(2)
        'line2'

    Thread Safety:
        Thread-safe. Internal state is only set during __init__.
    """

    __slots__ = ("_offsets", "_source", "_source_len")

    def __init__(self, source: bytes | str) -> None:
        """Build line offset cache from source.

        Args:
            source: Input buffer to index

        Complexity:
            O(n) where n = len(source)
        """
        newline = _newline(source)
        offsets = [0]
        index = source.find(newline)
        while index >= 0:
            offsets.append(index + 1)
            index = source.find(newline, index + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source = source
        self._source_len = len(source)

    @property
    def line_count(self) -> int:
        """Number of lines (a trailing newline opens an empty last line)."""
        return len(self._offsets)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """Get line and column for position using binary search.

        Args:
            pos: Offset in source (0-indexed, clamped to the buffer)

        Returns:
            (line, column) tuple (1-indexed)

        Complexity:
            O(log n) where n = number of lines
        """
        if pos < 0:
            pos = 0
        elif pos > self._source_len:
            pos = self._source_len

        # Line index = index of largest offset <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def line_text(self, line: int) -> bytes | str:
        """Contents of a 1-indexed line without its line ending."""
        start = self._offsets[line - 1]
        end = self._offsets[line] - 1 if line < len(self._offsets) else self._source_len
        text = self._source[start:end]
        carriage_return = b"\r" if isinstance(text, (bytes, bytearray)) else "\r"
        if text.endswith(carriage_return):
            text = text[:-1]
        return text
