# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/

Hypothesis tests the engine from the outside; the engine's own generators
are exercised directly in the unit tests.
"""

import os
from collections.abc import Callable

import pytest
from hypothesis import Phase, Verbosity, settings

from falsifier import generators as gen
from falsifier.generators import Generator

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Runs of the engine under test vary in duration
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Systems under test used by several modules
# =============================================================================


def dedup_sort(values: list[int]) -> list[int]:
    """Deliberately buggy sort that drops duplicate values."""
    return sorted(set(values))


@pytest.fixture
def small_int_lists() -> Generator[list[int]]:
    """Lists of up to 10 integers in [0, 5]."""
    return gen.lists(gen.integers(0, 5), min_size=0, max_size=10)


@pytest.fixture
def length_preserved() -> Callable[[list[int]], bool]:
    """Property: the buggy sort keeps every element."""

    def _prop(values: list[int]) -> bool:
        return len(dedup_sort(values)) == len(values)

    return _prop
