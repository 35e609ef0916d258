"""Parser combinator modules.

Module Organization:
- core.py: Parser wrapper, forward references, parse() entry point
- combinators.py: Sequencing, choice, lookahead, repetition, diagnostics
- any.py: Ordered choice over many branches
- primitives.py: Atom matchers, character classes, numeric literals
- whitespace.py: Whitespace recognizers and wrappers
- pratt.py: Operator-precedence expression parser

Dependencies flow core <- combinators <- (any, primitives, whitespace, pratt).
Parser methods import combinators lazily to avoid the reverse edge.
"""

from .any import Choice, any_, any_seq
from .combinators import (
    alternative,
    between,
    chain,
    consumed,
    label,
    lookahead,
    many,
    many1,
    many_m_n,
    many_n,
    many_until,
    map_,
    not_,
    optional,
    preceded,
    separated,
    sequence,
    spanned,
    terminated,
    try_map,
)
from .core import ForwardParser, Parser, Reject, forward, parse
from .pratt import Pratt
from .primitives import (
    alpha,
    alphabetic,
    alphanumeric,
    alphanumeric_char,
    any_atom,
    decimal,
    digit,
    eoi,
    fail,
    fail_with,
    float_literal,
    hex_digit,
    hexadecimal,
    integer_literal,
    none_of,
    one_of,
    rest,
    satisfy,
    succeed,
    tag,
    take,
    take_until,
    take_while,
    take_while1,
)
from .whitespace import (
    newlines,
    whitespace,
    whitespace_not_newline,
    whitespace_not_newline_wrapped,
    whitespace_wrapped,
)

__all__ = [
    "Choice",
    "ForwardParser",
    "Parser",
    "Pratt",
    "Reject",
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
    "whitespace",
    "whitespace_not_newline",
    "whitespace_not_newline_wrapped",
    "whitespace_wrapped",
]
