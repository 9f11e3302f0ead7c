# src/falsifier/engine/runner.py
"""Property runner: trials, falsification detection and shrink hand-off.

States:
    IDLE -> RUNNING -> PASSED     after trial_count trials all hold
                    -> FALSIFIED  on the first falsifying trial (by index)
                    -> ABORTED    when a harness fault escapes; it is re-raised

Each trial is independent: trial i draws from RandomStream(seed).derive(i)
at size size_for_trial(i, ...). Nothing else carries over between trials,
so a reported (seed, trial index, size) regenerates the failing input
exactly.

With workers > 1, trials run in ordered batches on a thread pool. Results
are inspected in trial-index order, so the falsification handed to the
shrinker is the lowest-index one regardless of completion order. Shrinking
never overlaps with trials.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import nullcontext
from dataclasses import dataclass
from functools import partial
from typing import Any

from falsifier.contracts.config import RunConfig, coerce_run_config
from falsifier.contracts.enums import RunState
from falsifier.contracts.results import Falsified, Passed, TestResult
from falsifier.core.logging import carry_context, get_logger, run_context
from falsifier.core.random_stream import RandomStream, fresh_seed
from falsifier.engine.evaluation import Evaluation, Property, evaluate
from falsifier.engine.schedule import size_for_trial
from falsifier.engine.shrinker import Shrinker
from falsifier.generators.base import Generator

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TrialOutcome:
    """What a single trial generated and what the property made of it."""

    index: int
    size: int
    draw: Any
    evaluation: Evaluation


def trial_stream(seed: int, index: int) -> RandomStream:
    """Stream for trial `index` of a run seeded with `seed`."""
    return RandomStream(seed).derive(index)


class PropertyRunner:
    """Drives one run of a property against a generator.

    A runner runs once; calling run() again returns the same result. An
    aborted run has no result and runs again from the start.
    """

    def __init__(self, generator: Generator[Any], prop: Property, config: RunConfig | None = None) -> None:
        self._generator = generator
        self._prop = prop
        self._config = config if config is not None else RunConfig()
        self._state = RunState.IDLE
        self._result: TestResult | None = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def config(self) -> RunConfig:
        return self._config

    @property
    def result(self) -> TestResult | None:
        """Terminal result, or None before run() completes."""
        return self._result

    def _size(self, index: int) -> int:
        return size_for_trial(index, self._config.trial_count, self._config.max_size, self._config.size_schedule)

    def _trial(self, root: RandomStream, index: int) -> TrialOutcome:
        size = self._size(index)
        draw = self._generator.generate(root.derive(index), size)
        evaluation = evaluate(self._generator, self._prop, draw)
        logger.debug("trial_completed", trial=index, size=size, held=evaluation.holds)
        return TrialOutcome(index=index, size=size, draw=draw, evaluation=evaluation)

    def _trials(self, root: RandomStream, executor: Executor | None) -> Iterator[TrialOutcome]:
        """Trial outcomes in index order."""
        trial_count = self._config.trial_count
        if executor is None:
            for index in range(trial_count):
                yield self._trial(root, index)
            return

        batch_size = self._config.workers
        run_trial = carry_context(partial(self._trial, root))
        for start in range(0, trial_count, batch_size):
            indexes = range(start, min(start + batch_size, trial_count))
            yield from executor.map(run_trial, indexes)

    def run(self) -> TestResult:
        """Run every trial, shrinking the first falsification.

        Raises:
            ConfigurationError: If the configured seed is invalid.
            GenerationExhaustion: If a filtered generator cannot produce a value.
        """
        if self._result is not None:
            return self._result

        seed = self._config.seed if self._config.seed is not None else fresh_seed()
        self._state = RunState.RUNNING
        with run_context(seed=seed):
            try:
                self._result = self._execute(seed)
            except Exception as exc:
                self._state = RunState.ABORTED
                logger.warning("property_run_aborted", seed=seed, error=f"{type(exc).__name__}: {exc}")
                raise

        self._state = RunState.PASSED if isinstance(self._result, Passed) else RunState.FALSIFIED
        return self._result

    def _execute(self, seed: int) -> TestResult:
        root = RandomStream(seed)
        logger.info(
            "property_run_started",
            seed=seed,
            trial_count=self._config.trial_count,
            max_size=self._config.max_size,
            generator=repr(self._generator),
        )

        workers = self._config.workers
        pool = ThreadPoolExecutor(max_workers=workers) if workers > 1 else None
        with pool if pool is not None else nullcontext():
            for outcome in self._trials(root, pool):
                if not outcome.evaluation.holds:
                    return self._shrink(seed, outcome, pool)

        logger.info("property_passed", seed=seed, trials=self._config.trial_count)
        return Passed(seed=seed, trials_run=self._config.trial_count)

    def _shrink(self, seed: int, trial: TrialOutcome, executor: Executor | None) -> Falsified:
        failure = trial.evaluation.failure
        assert failure is not None
        original = trial.evaluation.value
        logger.info(
            "property_falsified",
            seed=seed,
            trial=trial.index,
            size=trial.size,
            original=repr(original),
            failure=failure.describe(),
        )

        shrinker = Shrinker(
            self._generator,
            self._prop,
            max_steps=self._config.max_shrink_steps,
            executor=executor,
            workers=self._config.workers,
        )
        outcome = shrinker.shrink(trial.draw, trial.evaluation)
        logger.info(
            "shrink_completed",
            seed=seed,
            steps=outcome.steps,
            accepted=len(outcome.path),
            minimal=repr(outcome.value),
        )

        return Falsified(
            seed=seed,
            trials_run=trial.index + 1,
            trial_index=trial.index,
            size=trial.size,
            original=original,
            minimal=outcome.value,
            shrink_steps=outcome.steps,
            shrink_path=outcome.values,
            failure=outcome.failure,
        )


def run_property(
    generator: Generator[Any],
    prop: Property,
    config: RunConfig | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> TestResult:
    """Run a property against values from a generator.

    Args:
        generator: Source of inputs.
        prop: Predicate to test. Returning a falsy value other than None, or
            raising, falsifies it.
        config: RunConfig, a mapping of RunConfig fields, or None for defaults.
        **overrides: RunConfig fields taking precedence over config.

    Returns:
        Passed or Falsified.

    Raises:
        ConfigurationError: If the configuration is invalid.
        GenerationExhaustion: If a filtered generator cannot produce a value.
    """
    run_config = coerce_run_config(config, **overrides)
    return PropertyRunner(generator, prop, run_config).run()
