"""
Falsifier: seeded property-based test generation and shrinking.

Generates random inputs for a property, and when one falsifies it, shrinks
that input to a minimal counterexample that can be replayed from its seed.
"""

from falsifier.contracts import (
    ConfigurationError,
    Falsified,
    FalsifierError,
    GenerationExhaustion,
    Passed,
    PropertyFailure,
    RunConfig,
    TestResult,
)
from falsifier.engine.runner import PropertyRunner, run_property

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "Falsified",
    "FalsifierError",
    "GenerationExhaustion",
    "Passed",
    "PropertyFailure",
    "PropertyRunner",
    "RunConfig",
    "TestResult",
    "__version__",
    "run_property",
]
