# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Seeds and sizes accepted by the engine
- Generator trees built from the public factories

Usage:
    from tests.property.conftest import engine_generators, seeds

    @given(g=engine_generators, seed=seeds)
    def test_shrink_is_simpler(g, seed) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from falsifier import generators as gen

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, RUN_SETTINGS
# =============================================================================

seeds = st.integers(min_value=0, max_value=2**32 - 1)

sizes = st.integers(min_value=0, max_value=100)


@st.composite
def integer_bounds(draw: st.DrawFn) -> tuple[int | None, int | None]:
    """Bounds for gen.integers(); either side may be open."""
    low = draw(st.none() | st.integers(-1000, 1000))
    high = draw(st.none() | st.integers(-1000, 1000))
    if low is not None and high is not None and low > high:
        low, high = high, low
    return low, high


_leaf_generators = st.one_of(
    integer_bounds().map(lambda bounds: gen.integers(*bounds)),
    st.just(gen.booleans()),
    st.lists(st.integers(), min_size=1, max_size=8).map(gen.sampled_from),
    st.integers().map(gen.just),
    st.integers(0, 3).map(lambda min_size: gen.text(alphabet="abc", min_size=min_size, max_size=8)),
)


def _extend(children: st.SearchStrategy[gen.Generator[object]]) -> st.SearchStrategy[gen.Generator[object]]:
    return st.one_of(
        st.builds(lambda element, min_size: gen.lists(element, min_size=min_size, max_size=6), children, st.integers(0, 2)),
        st.lists(children, max_size=3).map(lambda parts: gen.tuples(*parts)),
        st.lists(children, min_size=1, max_size=3).map(lambda alternatives: gen.one_of(*alternatives)),
        children.map(lambda inner: inner.map(repr)),
    )


# Arbitrary generator trees, shallow enough that one draw stays cheap to shrink
engine_generators = st.recursive(_leaf_generators, _extend, max_leaves=6)
