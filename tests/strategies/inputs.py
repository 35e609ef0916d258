"""Hypothesis strategies for parser inputs.

Generates byte and text buffers in the shapes the combinator tests need:
arbitrary buffers, ASCII words, integer literals, arithmetic expressions
and bracket nesting.

Event-Emitting Strategies (HypoFuzz-Optimized):
    - input_text_script: Character range of generated text (ascii|latin|cjk|emoji)
    - input_nesting_depth: Bracket nesting classification (shallow|deep)
    - input_expr_ops: Operator count of an arithmetic expression (none|few|many)
"""

from __future__ import annotations

from hypothesis import event
from hypothesis import strategies as st

ASCII_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ASCII_DIGITS = "0123456789"
ARITHMETIC_OPERATORS = ("+", "-", "*", "/")

byte_buffers = st.binary(max_size=64)
"""Arbitrary byte buffers, empty included."""

ascii_words = st.text(alphabet=ASCII_LETTERS, min_size=1, max_size=12)
"""Non-empty ASCII alphabetic words."""

integer_literals = st.integers(min_value=-(10**12), max_value=10**12)
"""Integers whose decimal form integer_literal accepts."""


@st.composite
def unicode_text(draw: st.DrawFn) -> str:
    """Text drawn from one character range, to exercise multi-byte code points.

    Events emitted:
    - input_text_script={ascii|latin|cjk|emoji}
    """
    script = draw(st.sampled_from(["ascii", "latin", "cjk", "emoji"]))
    ranges = {
        "ascii": (0x20, 0x7E),
        "latin": (0xC0, 0x17F),
        "cjk": (0x4E00, 0x4FFF),
        "emoji": (0x1F600, 0x1F64F),
    }
    low, high = ranges[script]
    event(f"input_text_script={script}")
    return draw(
        st.text(
            alphabet=st.characters(min_codepoint=low, max_codepoint=high),
            max_size=20,
        )
    )


@st.composite
def nested_brackets(draw: st.DrawFn, max_depth: int = 20) -> tuple[int, str]:
    """Generate ``((...(7)...))`` and its nesting depth.

    Events emitted:
    - input_nesting_depth={shallow|deep}
    """
    depth = draw(st.integers(min_value=0, max_value=max_depth))
    event(f"input_nesting_depth={'shallow' if depth < 5 else 'deep'}")
    return depth, "(" * depth + "7" + ")" * depth


@st.composite
def arithmetic_expressions(draw: st.DrawFn, max_terms: int = 8) -> str:
    """Space-separated expressions over small non-negative integers.

    Events emitted:
    - input_expr_ops={none|few|many}
    """
    terms = draw(st.lists(st.integers(min_value=0, max_value=999), min_size=1, max_size=max_terms))
    ops = draw(
        st.lists(
            st.sampled_from(ARITHMETIC_OPERATORS),
            min_size=len(terms) - 1,
            max_size=len(terms) - 1,
        )
    )
    count = len(ops)
    event(f"input_expr_ops={'none' if count == 0 else 'few' if count < 4 else 'many'}")
    parts = [str(terms[0])]
    for op, term in zip(ops, terms[1:], strict=True):
        parts.extend((op, str(term)))
    return " ".join(parts)
