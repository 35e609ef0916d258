"""Pytest configuration for the errgonomic test suite.

Hypothesis profiles, chosen once at import time:
- dev (default): 500 examples per property
- ci: 50 examples, derandomized, picked when CI=true
- verbose: 100 examples with per-example output

HYPOTHESIS_PROFILE names a profile directly and wins over CI.

Tests marked fuzz are skipped unless the run selects them, either with
``-m fuzz`` or by naming a path under tests/fuzz.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
_PROFILES = ("dev", "ci", "verbose")

settings.register_profile("dev", max_examples=500, phases=_PHASES, derandomize=False)

# Same examples on every CI run; failing ones print a reproduction blob
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_PHASES,
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Profile from HYPOTHESIS_PROFILE, else "ci" under CI=true, else "dev"."""
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark fuzz tests as skipped when the run did not ask for them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("fuzz" in str(arg) for arg in config.invocation_params.args):
        return

    skip_fuzz = pytest.mark.skip(reason="fuzz test: select with pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
