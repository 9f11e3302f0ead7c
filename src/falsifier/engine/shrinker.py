# src/falsifier/engine/shrinker.py
"""Greedy shrinking of a falsifying draw.

Algorithm:
    1. Ask the generator for the ordered shrink candidates of the current
       best draw.
    2. Evaluate them in order. The first candidate that still falsifies
       becomes the new current best, and the search restarts from it.
    3. Stop when a full pass finds no falsifying candidate, or when
       max_steps property evaluations have been spent.

Every candidate is a fresh property call with no caching, so the property
must be pure for shrinking to converge. The shrinker does not detect
impure properties.

With an executor, the candidates of one round are evaluated in batches of
`workers`. The lowest-index falsifying candidate of a batch wins, so the
accepted path is the same as sequential evaluation; only the number of
evaluations can differ.
"""

from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import Executor
from dataclasses import dataclass
from itertools import islice
from typing import Any

from falsifier.contracts.errors import ConfigurationError, PropertyFailure
from falsifier.core.logging import carry_context, get_logger
from falsifier.engine.evaluation import Evaluation, Property, evaluate
from falsifier.generators.base import Generator

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ShrinkOutcome:
    """Result of a shrink session.

    Attributes:
        draw: Simplest falsifying draw found.
        value: What the property saw for draw.
        steps: Property evaluations spent (<= max_steps).
        path: Accepted draws in order, ending at draw. Empty if nothing shrank.
        values: What the property saw for each draw in path.
        failure: How draw falsified the property.
    """

    draw: Any
    value: Any
    steps: int
    path: tuple[Any, ...]
    values: tuple[Any, ...]
    failure: PropertyFailure


class Shrinker:
    """Short-lived greedy search session over one generator and property."""

    def __init__(
        self,
        generator: Generator[Any],
        prop: Property,
        *,
        max_steps: int,
        executor: Executor | None = None,
        workers: int = 1,
    ) -> None:
        if max_steps <= 0:
            raise ConfigurationError(f"max_steps must be positive, got {max_steps}")
        if workers <= 0:
            raise ConfigurationError(f"workers must be positive, got {workers}")
        self._generator = generator
        self._prop = prop
        self._max_steps = max_steps
        self._executor = executor
        self._workers = workers if executor is not None else 1

    def _evaluate(self, draw: Any) -> Evaluation:
        return evaluate(self._generator, self._prop, draw)

    def _first_falsifying(self, candidates: Iterator[Any], budget: int) -> tuple[tuple[Any, Evaluation] | None, int]:
        """Evaluate candidates in order within budget.

        Returns:
            ((candidate, evaluation) or None, evaluations spent)
        """
        spent = 0
        while spent < budget:
            batch = list(islice(candidates, min(self._workers, budget - spent)))
            if not batch:
                break
            spent += len(batch)
            if self._executor is None or len(batch) == 1:
                verdicts: Iterator[Evaluation] = map(self._evaluate, batch)
            else:
                verdicts = self._executor.map(carry_context(self._evaluate), batch)
            for candidate, evaluation in zip(batch, verdicts, strict=True):
                if not evaluation.holds:
                    return (candidate, evaluation), spent
        return None, spent

    def shrink(self, initial: Any, evaluation: Evaluation | None = None) -> ShrinkOutcome:
        """Shrink a falsifying draw.

        Args:
            initial: Draw known to falsify the property.
            evaluation: Its falsifying evaluation. Evaluated (not counted as a
                step) when omitted.

        Raises:
            ValueError: If initial does not falsify the property.
        """
        if evaluation is None:
            evaluation = self._evaluate(initial)
        if evaluation.failure is None:
            raise ValueError("Initial draw does not falsify the property")

        current, current_evaluation = initial, evaluation
        path: list[Any] = []
        values: list[Any] = []
        steps = 0
        while steps < self._max_steps:
            found, spent = self._first_falsifying(self._generator.shrink(current), self._max_steps - steps)
            steps += spent
            if found is None:
                break
            current, current_evaluation = found
            path.append(current)
            values.append(current_evaluation.value)
            logger.debug(
                "shrink_accepted",
                step=steps,
                complexity=self._generator.complexity(current),
            )

        assert current_evaluation.failure is not None
        return ShrinkOutcome(
            draw=current,
            value=current_evaluation.value,
            steps=steps,
            path=tuple(path),
            values=tuple(values),
            failure=current_evaluation.failure,
        )


def shrink(
    generator: Generator[Any],
    prop: Property,
    initial: Any,
    max_steps: int,
    *,
    evaluation: Evaluation | None = None,
    executor: Executor | None = None,
    workers: int = 1,
) -> ShrinkOutcome:
    """Shrink a falsifying draw to a simpler one that still falsifies."""
    return Shrinker(generator, prop, max_steps=max_steps, executor=executor, workers=workers).shrink(initial, evaluation)
