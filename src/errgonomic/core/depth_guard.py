"""Unified depth limiting for recursive grammars.

Provides depth tracking to prevent stack overflow from:
- Deeply nested input fed to recursive grammars (parentheses, brackets)
- Long prefix-operator or right-associative chains in Pratt parsers
- Left-recursive grammars that re-enter a forward reference forever

Each top-level parse() installs its own DepthGuard in thread-local
storage for the duration of the invocation. Composed parser graphs stay
stateless; concurrent invocations on other threads see their own guard.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import local as thread_local

from errgonomic.constants import MAX_DEPTH
from errgonomic.diagnostics import DepthLimitExceededError, ErrorTemplate

__all__ = ["DepthGuard", "active_guard", "depth_clamp", "guarded", "nesting"]

logger = logging.getLogger(__name__)

# Thread-local storage for the guard of the running top-level parse
_guard_thread_local = thread_local()


@dataclass(slots=True)
class DepthGuard:
    """Context manager for tracking and limiting recursion depth.

    Usage in a recursive parser:
        guard = active_guard()
        with guard:
            outcome = inner(cursor)

    Mutability Note:
        Intentionally mutable (not frozen=True) to enable stateful depth
        tracking via context manager protocol. The current_depth field is
        incremented/decremented on __enter__/__exit__.

    Thread Safety:
        Uses explicit instance state. One guard per top-level invocation,
        never shared between threads.

    Attributes:
        max_depth: Maximum allowed depth (default: MAX_DEPTH)
        current_depth: Current recursion depth
    """

    max_depth: int = MAX_DEPTH
    current_depth: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Clamp max_depth against Python recursion limit."""
        self.max_depth = depth_clamp(self.max_depth)

    def __enter__(self) -> DepthGuard:
        """Enter guarded section, increment depth.

        Validates depth limit BEFORE incrementing so a raised
        DepthLimitExceededError leaves current_depth unchanged (__exit__
        is not called when __enter__ raises).
        """
        if self.current_depth >= self.max_depth:
            raise DepthLimitExceededError(ErrorTemplate.depth_exceeded(self.max_depth))
        self.current_depth += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, decrement depth."""
        self.current_depth -= 1

    @property
    def depth(self) -> int:
        """Current depth (alias for current_depth)."""
        return self.current_depth

    def is_exceeded(self) -> bool:
        """Check if depth limit has been reached."""
        return self.current_depth >= self.max_depth


def depth_clamp(requested_depth: int, reserve_frames: int = 50, frames_per_level: int = 12) -> int:
    """Clamp requested depth against Python recursion limit.

    Each grammar level costs several interpreter frames, so the usable
    depth is the recursion limit (minus a reserve) divided by the frames a
    level typically needs. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum depth
        reserve_frames: Stack frames reserved for call overhead (default: 50)
        frames_per_level: Interpreter frames one grammar level costs (default: 12)

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(64)
        64
        >>> depth_clamp(500)  # Exceeds limit, clamped to (1000 - 50) // 12
        79
    """
    max_safe_depth = max(1, (sys.getrecursionlimit() - reserve_frames) // frames_per_level)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested depth %d exceeds Python recursion limit (%d). "
            "Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth


def active_guard() -> DepthGuard | None:
    """Guard of the top-level parse running on this thread, if any."""
    return getattr(_guard_thread_local, "guard", None)


@contextmanager
def guarded(max_depth: int = MAX_DEPTH) -> Iterator[DepthGuard]:
    """Install a fresh DepthGuard for one top-level invocation.

    Nested invocations (a parser calling parse() on a sub-buffer) get their
    own guard; the outer guard is restored on exit.
    """
    previous = active_guard()
    guard = DepthGuard(max_depth=max_depth)
    _guard_thread_local.guard = guard
    try:
        yield guard
    finally:
        _guard_thread_local.guard = previous


@contextmanager
def nesting() -> Iterator[DepthGuard]:
    """Enter one nesting level of the running parse.

    Outside a top-level parse (a parser invoked directly on a cursor) a
    fresh guard with the default limit covers the call tree.

    Raises:
        DepthLimitExceededError: If the level would exceed max_depth
    """
    guard = active_guard()
    if guard is None:
        with guarded() as fresh, fresh:
            yield fresh
        return
    with guard:
        yield guard
