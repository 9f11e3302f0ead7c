# src/falsifier/engine/evaluation.py
"""Single invocation of a property against a draw.

A property falsifies by returning a falsy value other than None, or by
raising any Exception. None counts as holding, so assert-style properties
work. Harness faults (ConfigurationError, GenerationExhaustion) are not
verdicts and propagate to the caller.

A draw is realized exactly once, here. The runner and the shrinker report
the value carried in the Evaluation instead of realizing the draw again, so
a mapped function that raises is reported as a falsification and never
escapes the run.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from falsifier.contracts.errors import FalsifierError, PropertyFailure
from falsifier.generators.base import Generator

type Property = Callable[[Any], object]


@dataclass(frozen=True, slots=True)
class Evaluation:
    """What the property was called with and how it failed, if it did.

    Attributes:
        value: Realized value passed to the property. When realization itself
            raised, a display stand-in describing the draw and the error.
        failure: None if the property held.
    """

    value: Any
    failure: PropertyFailure | None

    @property
    def holds(self) -> bool:
        return self.failure is None


def unrealizable(draw: Any, failure: PropertyFailure) -> str:
    """Stand-in reported for a draw whose realization raised."""
    return f"<unrealizable draw {draw!r}: {failure.describe()}>"


def evaluate(generator: Generator[Any], prop: Property, draw: Any) -> Evaluation:
    """Realize a draw and call the property on it.

    An exception from realization (for example inside a mapped function)
    falsifies the input just like one from the property.
    """
    try:
        value = generator.realize(draw)
    except FalsifierError:
        raise
    except Exception as exc:
        failure = PropertyFailure.from_exception(exc)
        return Evaluation(value=unrealizable(draw, failure), failure=failure)

    try:
        outcome = prop(value)
    except FalsifierError:
        raise
    except Exception as exc:
        return Evaluation(value=value, failure=PropertyFailure.from_exception(exc))
    if outcome is None or outcome:
        return Evaluation(value=value, failure=None)
    return Evaluation(value=value, failure=PropertyFailure(kind="returned_false"))
