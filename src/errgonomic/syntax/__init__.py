"""Syntax layer: cursor, parse outcomes and the combinator library.

The combinators themselves live in errgonomic.syntax.parser; this package
exports the types every parser function touches.

Python 3.13+.
"""

from .cursor import Cursor
from .outcome import Failure, Outcome, Success
from .parser import ForwardParser, Parser, Reject, forward, parse

__all__ = [
    "Cursor",
    "Failure",
    "ForwardParser",
    "Outcome",
    "Parser",
    "Reject",
    "Success",
    "forward",
    "parse",
]
