"""Status values shared by the runner, results and reporting."""

from enum import StrEnum


class RunState(StrEnum):
    """Lifecycle of a PropertyRunner.

    IDLE -> RUNNING -> PASSED | FALSIFIED | ABORTED

    ABORTED means a harness fault (or an error inside a generator) ended the
    run without a result. The exception is re-raised to the caller.
    """

    IDLE = "idle"
    RUNNING = "running"
    PASSED = "passed"
    FALSIFIED = "falsified"
    ABORTED = "aborted"


class RunStatus(StrEnum):
    """Terminal status recorded in a serialized result."""

    PASSED = "pass"
    FAILED = "fail"


class SizeSchedule(StrEnum):
    """How the size parameter grows across the trials of a run."""

    LINEAR = "linear"
    LOG = "log"
