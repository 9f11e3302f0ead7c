"""Run outcomes.

These types answer: "What did a run find?"

A run ends in exactly one of Passed or Falsified. Both are frozen; a result
is the terminal output of a run and is never updated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from falsifier.contracts.enums import RunStatus
from falsifier.contracts.errors import PropertyFailure


@dataclass(frozen=True, slots=True)
class Passed:
    """Every trial held.

    Attributes:
        seed: Seed the run used (configured or generated).
        trials_run: Number of trials executed, always the configured count.
    """

    seed: int
    trials_run: int

    @property
    def status(self) -> RunStatus:
        return RunStatus.PASSED

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "seed": self.seed,
            "trials": self.trials_run,
        }


@dataclass(frozen=True, slots=True)
class Falsified:
    """A trial falsified the property and the counterexample was shrunk.

    Attributes:
        seed: Seed the run used. Replaying trial_index at size with this seed
            regenerates original exactly.
        trials_run: Trials executed up to and including the failing one.
        trial_index: Zero-based index of the failing trial.
        size: Size parameter of the failing trial.
        original: Counterexample as first generated.
        minimal: Simplest counterexample found that still falsifies.
        shrink_steps: Property evaluations spent shrinking.
        shrink_path: Accepted counterexamples in order, ending at minimal.
        failure: How minimal falsified the property.
    """

    seed: int
    trials_run: int
    trial_index: int
    size: int
    original: Any
    minimal: Any
    shrink_steps: int
    shrink_path: tuple[Any, ...]
    failure: PropertyFailure

    @property
    def status(self) -> RunStatus:
        return RunStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Serializable record; counterexamples use their repr() form."""
        return {
            "status": self.status.value,
            "seed": self.seed,
            "trials": self.trials_run,
            "trial_index": self.trial_index,
            "size": self.size,
            "original": repr(self.original),
            "minimal": repr(self.minimal),
            "shrink_steps": self.shrink_steps,
            "shrink_path": [repr(value) for value in self.shrink_path],
            "failure": self.failure.to_dict(),
        }


type TestResult = Passed | Falsified
