"""Fuzz tests for errgonomic.

This package contains:
- test_depth_exhaustion: Boundary testing for MAX_DEPTH limits
- test_grammar_fuzzing: Random inputs against composed grammars

Python 3.13+.
"""
