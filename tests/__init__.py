"""errgonomic test suite."""
