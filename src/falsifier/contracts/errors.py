# src/falsifier/contracts/errors.py
"""Error types and failure records.

Only ConfigurationError and GenerationExhaustion are harness faults: they
abort a run and reach the caller. A property that returns False or raises
is the expected outcome of a run and is captured as a PropertyFailure
record inside the result, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


class FalsifierError(Exception):
    """Base class for harness-level faults."""


class ConfigurationError(FalsifierError, ValueError):
    """Invalid generator parameters or run configuration.

    Raised at construction time, before any trial runs. Never retried.
    """


class GenerationExhaustion(FalsifierError):
    """A filtered generator could not produce an acceptable value.

    Kept distinct from a falsified property so that a weak generator is not
    mistaken for a defect in the code under test.

    Attributes:
        attempts: Number of draws rejected before giving up.
        generator: Description of the generator that was exhausted.
    """

    def __init__(self, attempts: int, generator: str) -> None:
        self.attempts = attempts
        self.generator = generator
        super().__init__(f"{generator} rejected {attempts} consecutive draws")


@dataclass(frozen=True, slots=True)
class PropertyFailure:
    """How a property was falsified.

    Attributes:
        kind: "returned_false" when the property returned a falsy verdict,
            "raised" when it raised an exception.
        exception_type: Exception class name (only for "raised").
        message: Exception message (only for "raised").
    """

    kind: Literal["returned_false", "raised"]
    exception_type: str | None = None
    message: str | None = None

    @classmethod
    def from_exception(cls, exc: Exception) -> PropertyFailure:
        return cls(kind="raised", exception_type=type(exc).__name__, message=str(exc))

    def describe(self) -> str:
        if self.kind == "returned_false":
            return "property returned False"
        if self.message:
            return f"{self.exception_type}: {self.message}"
        return f"{self.exception_type} raised"

    def to_dict(self) -> dict[str, str | None]:
        return {
            "kind": self.kind,
            "exception_type": self.exception_type,
            "message": self.message,
        }
