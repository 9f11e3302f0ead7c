# tests/property/engine/test_runner_properties.py
"""Property-based tests for whole runs.

Hypothesis drives the engine: for arbitrary seeds and thresholds a run must
be reproducible, shrinking must terminate within budget, and whatever it
reports as minimal must still falsify the property.
"""

from __future__ import annotations

from typing import Any

from hypothesis import given
from hypothesis import strategies as st

from falsifier import generators as gen
from falsifier.contracts import Falsified, Passed
from falsifier.core.random_stream import RandomStream
from falsifier.engine.evaluation import evaluate
from falsifier.engine.runner import run_property
from falsifier.engine.shrinker import shrink
from falsifier.generators import Generator
from falsifier.reporting import replay_failure, to_json
from tests.property.conftest import engine_generators, seeds, sizes
from tests.property.settings import DETERMINISM_SETTINGS, RUN_SETTINGS

thresholds = st.integers(min_value=1, max_value=5000)


def _sum_below(threshold: int) -> Any:
    def prop(values: list[int]) -> bool:
        return sum(values) < threshold

    return prop


# =============================================================================
# Reproducibility
# =============================================================================


class TestRunDeterminism:
    @given(seed=seeds, threshold=thresholds)
    @DETERMINISM_SETTINGS
    def test_same_seed_same_bytes(self, seed: int, threshold: int) -> None:
        g = gen.lists(gen.integers(0, 500), max_size=20)
        first = run_property(g, _sum_below(threshold), seed=seed, trial_count=20, max_size=30)
        second = run_property(g, _sum_below(threshold), seed=seed, trial_count=20, max_size=30)
        assert to_json(first) == to_json(second)

    @given(seed=seeds, threshold=thresholds)
    @RUN_SETTINGS
    def test_replay_regenerates_original(self, seed: int, threshold: int) -> None:
        g = gen.lists(gen.integers(0, 500), max_size=20)
        result = run_property(g, _sum_below(threshold), seed=seed, trial_count=30)
        if isinstance(result, Falsified):
            assert replay_failure(g, result) == result.original

    @given(seed=seeds, trial_count=st.integers(1, 60))
    @RUN_SETTINGS
    def test_holding_property_passes_every_trial(self, seed: int, trial_count: int) -> None:
        calls: list[object] = []
        result = run_property(gen.lists(gen.integers()), calls.append, seed=seed, trial_count=trial_count)
        assert result == Passed(seed=seed, trials_run=trial_count)
        assert len(calls) == trial_count


# =============================================================================
# Shrinking
# =============================================================================


class TestShrinkGuarantees:
    @given(seed=seeds, threshold=st.integers(0, 10_000))
    @RUN_SETTINGS
    def test_integer_threshold_shrinks_to_boundary(self, seed: int, threshold: int) -> None:
        result = run_property(gen.integers(0, 20_000), lambda x: x < threshold, seed=seed)
        if isinstance(result, Falsified):
            assert result.minimal == threshold

    @given(seed=seeds, threshold=thresholds, max_steps=st.integers(1, 300))
    @RUN_SETTINGS
    def test_minimal_still_falsifies_within_budget(self, seed: int, threshold: int, max_steps: int) -> None:
        prop = _sum_below(threshold)
        result = run_property(
            gen.lists(gen.integers(0, 1000), max_size=30),
            prop,
            seed=seed,
            max_shrink_steps=max_steps,
        )
        if isinstance(result, Falsified):
            assert not prop(result.minimal)
            assert result.shrink_steps <= max_steps
            assert len(result.shrink_path) <= result.shrink_steps
            if result.shrink_path:
                assert result.shrink_path[-1] == result.minimal
            else:
                assert result.minimal == result.original

    @given(g=engine_generators, seed=seeds, size=sizes)
    @RUN_SETTINGS
    def test_accepted_path_strictly_simpler(self, g: Generator[Any], seed: int, size: int) -> None:
        """Against a property that always fails, each accepted draw is simpler than the last."""
        initial = g.generate(RandomStream(seed), size)
        outcome = shrink(g, lambda value: False, initial, max_steps=500)
        complexities = [g.complexity(draw) for draw in (initial, *outcome.path)]
        assert all(later < earlier for earlier, later in zip(complexities, complexities[1:]))
        assert not evaluate(g, lambda value: False, outcome.draw).holds

    @given(g=engine_generators, seed=seeds, size=sizes)
    @RUN_SETTINGS
    def test_always_failing_property_shrinks_to_fixpoint(self, g: Generator[Any], seed: int, size: int) -> None:
        """Greedy shrinking stops only when no candidate is left."""
        initial = g.generate(RandomStream(seed), size)
        outcome = shrink(g, lambda value: False, initial, max_steps=100_000)
        assert outcome.steps < 100_000
        assert list(g.shrink(outcome.draw)) == []
