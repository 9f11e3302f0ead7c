# src/falsifier/reporting.py
"""Rendering and replay of run results.

A failing run must always surface a replayable seed. format_report()
renders it for humans, to_json() produces canonical bytes for storage or
comparison, and replay() regenerates the original counterexample from the
reported seed, trial index and size.
"""

from __future__ import annotations

from typing import Any

import rfc8785

from falsifier.contracts.results import Falsified, Passed, TestResult
from falsifier.engine.runner import trial_stream
from falsifier.generators.base import Generator

_MAX_PATH_LINES = 20


def to_json(result: TestResult) -> bytes:
    """Serialize per RFC 8785 (JCS). Equal results give identical bytes."""
    data: bytes = rfc8785.dumps(result.to_dict())
    return data


def format_report(result: TestResult) -> str:
    """Human-readable summary of a run.

    Passing runs report only the trial count and seed. Failing runs add the
    original and minimal counterexamples, the failure, the shrink effort and
    the path the shrinker took.
    """
    if isinstance(result, Passed):
        return f"✓ Passed {result.trials_run:,} trials (seed={result.seed})"

    lines = [
        f"✗ Falsified after {result.trials_run:,} trials (seed={result.seed})",
        f"  Failing trial:  #{result.trial_index} at size {result.size}",
        f"  Original:       {result.original!r}",
        f"  Minimal:        {result.minimal!r}",
        f"  Failure:        {result.failure.describe()}",
        f"  Shrink steps:   {result.shrink_steps:,} ({len(result.shrink_path)} accepted)",
    ]
    if result.shrink_path:
        lines.append("  Shrink path:")
        shown = result.shrink_path[-_MAX_PATH_LINES:]
        skipped = len(result.shrink_path) - len(shown)
        if skipped:
            lines.append(f"    ... {skipped} earlier steps")
        lines.extend(f"    → {value!r}" for value in shown)
    lines.append(f"  Replay with seed={result.seed}")
    return "\n".join(lines)


def replay[T](generator: Generator[T], seed: int, trial_index: int, size: int) -> T:
    """Regenerate the input of one trial of a run.

    Realization is not guarded here: when the reported original was an
    unrealizable draw, the same exception is raised again.
    """
    return generator.realize(generator.generate(trial_stream(seed, trial_index), size))


def replay_failure(generator: Generator[Any], result: Falsified) -> Any:
    """Regenerate the original (unshrunk) counterexample of a failed run."""
    return replay(generator, result.seed, result.trial_index, result.size)
