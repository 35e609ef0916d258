"""Shared constants for errgonomic.

This module provides centralized configuration constants used across
the cursor, combinator and diagnostics packages. Placing constants here
avoids circular imports and provides a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for recursive grammars
- Input limits: DoS prevention via size constraints
- Dispatch limits: Arity of the variadic any_() dispatcher
- Diagnostics: Rendering defaults

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Dispatch limits
    "MAX_ANY_ARITY",
    # Diagnostics
    "DEFAULT_CONTEXT_LINES",
    "MAX_EXPECTED_SHOWN",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================
#
# Depth counts entries into forward-declared parsers and Pratt operand
# recursion, not Python frames. One level of a typical recursive grammar
# costs somewhere between 8 and 15 interpreter frames (the combinators the
# forward reference wraps), so 64 levels stays inside the default
# recursion limit of 1000. depth_clamp() lowers the value further when the
# interpreter limit has been reduced.
#
# ============================================================================

# Maximum nesting of forward references during one top-level parse.
MAX_DEPTH: int = 64

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum source size in atoms (bytes or code points, 10 Mi).
# The whole input is resident for the parse; this bounds that residency.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# DISPATCH LIMITS
# ============================================================================

# Largest number of positional branches accepted by any_().
# Larger (or dynamically built) branch lists go through any_seq().
MAX_ANY_ARITY: int = 16

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Lines of source shown before and after the error line in snippets.
DEFAULT_CONTEXT_LINES: int = 2

# Expected-token descriptions listed before the rest is elided.
MAX_EXPECTED_SHOWN: int = 8
