"""Shared contracts for types that cross module boundaries.

This package is a LEAF MODULE: it does not import from core, engine or
generators.
"""

from falsifier.contracts.config import RunConfig, coerce_run_config
from falsifier.contracts.enums import RunState, RunStatus, SizeSchedule
from falsifier.contracts.errors import (
    ConfigurationError,
    FalsifierError,
    GenerationExhaustion,
    PropertyFailure,
)
from falsifier.contracts.results import Falsified, Passed, TestResult

__all__ = [
    "ConfigurationError",
    "Falsified",
    "FalsifierError",
    "GenerationExhaustion",
    "Passed",
    "PropertyFailure",
    "RunConfig",
    "RunState",
    "RunStatus",
    "SizeSchedule",
    "TestResult",
    "coerce_run_config",
]
