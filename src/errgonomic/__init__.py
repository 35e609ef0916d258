"""errgonomic - Parser combinators with structured, mergeable diagnostics.

Parsers are plain values wrapping a function from an immutable Cursor to
an Outcome. Failures carry a ParseError with a span, a kind, the expected
descriptions, an optional payload and an optional cause chain; choice and
repetition merge errors so the furthest failure is reported.

Public API:
    Parser - Combinator wrapper (map, then, |, optional, many, label, ...)
    parse - Run a parser on bytes or text
    forward - Late-bound parser for recursive grammars
    Pratt - Operator-precedence expression parser
    Cursor - Immutable input position
    Success, Failure, Outcome - Parse results
    ParseError, Span, ErrorKind - Error model
    DiagnosticFormatter - Rust-style, single-line and JSON rendering

Exceptions:
    ErrgonomicError - Base exception class
    ParseFailedError - Raised by parse_or_raise() and Failure.unwrap()
    DepthLimitExceededError - Nesting limit reached
    DecodeError - Invalid input encoding
    InputModeError - Parser used in the wrong input mode
    OutOfInputError - Read past the end of a cursor
    Reject - Raised by mapping functions to report a custom failure

Submodules:
    errgonomic.syntax.parser - Combinators, primitives, whitespace, Pratt
    errgonomic.diagnostics - Error model, templates and formatting
    errgonomic.core - Depth guards and decoding
"""

from .core import Decoder, DepthGuard, utf8_decoder
from .diagnostics import (
    DecodeError,
    DepthLimitExceededError,
    DiagnosticFormatter,
    ErrgonomicError,
    ErrorEntry,
    InputModeError,
    OutOfInputError,
    OutputFormat,
    ParseError,
    ParseFailedError,
    Span,
)
from .enums import Associativity, ErrorKind, InputMode
from .syntax import Cursor, Failure, Outcome, Success
from .syntax.parser import (
    Choice,
    ForwardParser,
    Parser,
    Pratt,
    Reject,
    alpha,
    alphabetic,
    alphanumeric,
    alphanumeric_char,
    alternative,
    any_,
    any_atom,
    any_seq,
    between,
    chain,
    consumed,
    decimal,
    digit,
    eoi,
    fail,
    fail_with,
    float_literal,
    forward,
    hex_digit,
    hexadecimal,
    integer_literal,
    label,
    lookahead,
    many,
    many1,
    many_m_n,
    many_n,
    many_until,
    map_,
    newlines,
    none_of,
    not_,
    one_of,
    optional,
    parse,
    preceded,
    rest,
    satisfy,
    separated,
    sequence,
    spanned,
    succeed,
    tag,
    take,
    take_until,
    take_while,
    take_while1,
    terminated,
    try_map,
    whitespace,
    whitespace_not_newline,
    whitespace_not_newline_wrapped,
    whitespace_wrapped,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("errgonomic")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Associativity",
    "Choice",
    "Cursor",
    "DecodeError",
    "Decoder",
    "DepthGuard",
    "DepthLimitExceededError",
    "DiagnosticFormatter",
    "ErrgonomicError",
    "ErrorEntry",
    "ErrorKind",
    "Failure",
    "ForwardParser",
    "InputMode",
    "InputModeError",
    "OutOfInputError",
    "Outcome",
    "OutputFormat",
    "ParseError",
    "ParseFailedError",
    "Parser",
    "Pratt",
    "Reject",
    "Span",
    "Success",
    "__version__",
    "alpha",
    "alphabetic",
    "alphanumeric",
    "alphanumeric_char",
    "alternative",
    "any_",
    "any_atom",
    "any_seq",
    "between",
    "chain",
    "consumed",
    "decimal",
    "digit",
    "eoi",
    "fail",
    "fail_with",
    "float_literal",
    "forward",
    "hex_digit",
    "hexadecimal",
    "integer_literal",
    "label",
    "lookahead",
    "many",
    "many1",
    "many_m_n",
    "many_n",
    "many_until",
    "map_",
    "newlines",
    "none_of",
    "not_",
    "one_of",
    "optional",
    "parse",
    "preceded",
    "rest",
    "satisfy",
    "separated",
    "sequence",
    "spanned",
    "succeed",
    "tag",
    "take",
    "take_until",
    "take_while",
    "take_while1",
    "terminated",
    "try_map",
    "utf8_decoder",
    "whitespace",
    "whitespace_not_newline",
    "whitespace_not_newline_wrapped",
    "whitespace_wrapped",
]
