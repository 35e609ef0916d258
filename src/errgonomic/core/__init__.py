"""Core utilities shared by the cursor and combinator layers.

This package provides foundational utilities that the syntax layer
(cursor, outcomes, combinators) depends on. By isolating these utilities
here, we maintain a clean dependency graph:

    diagnostics <- core <- syntax

Exports:
    DepthGuard: Context manager for recursion depth limiting
    depth_clamp: Clamp a depth against the interpreter recursion limit
    active_guard: Guard of the top-level parse running on this thread
    guarded: Install a guard for one top-level parse
    nesting: Enter one nesting level of the running parse
    Decoder: Protocol of the pluggable decoding capability
    utf8_decoder: Default strict UTF-8 decoder

Python 3.13+.
"""

from .decoding import Decoder, utf8_decoder
from .depth_guard import DepthGuard, active_guard, depth_clamp, guarded, nesting

__all__ = [
    "Decoder",
    "DepthGuard",
    "active_guard",
    "depth_clamp",
    "guarded",
    "nesting",
    "utf8_decoder",
]
