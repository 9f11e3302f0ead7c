# src/falsifier/generators/base.py
"""Generator capability set and the derived-generator combinators.

A generator works in its own *shrink space*. generate() produces a draw,
shrink() proposes simpler draws, and realize() turns a draw into the value
handed to the property. For most generators a draw is the value itself;
mapped, one-of and element generators keep extra structure in the draw so
they can shrink the underlying choice and rebuild the value.

Generators hold no mutable state. All randomness comes from the stream
passed to generate().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Any

from falsifier.contracts.errors import ConfigurationError, GenerationExhaustion
from falsifier.core.random_stream import RandomStream

DEFAULT_EXAMPLE_SIZE = 10
DEFAULT_FILTER_ATTEMPTS = 100


class Generator[T](ABC):
    """Composable producer of arbitrary values with a shrink strategy.

    Contract:
    - generate(stream, size) is deterministic in (stream state, size).
    - shrink(draw) yields a finite, ordered sequence of draws, never the draw
      itself, each with complexity() <= complexity(draw).
    - simplest() is the canonical minimal draw (zero, empty, first element).
    """

    @abstractmethod
    def generate(self, stream: RandomStream, size: int) -> Any:
        """Produce a draw. `size` bounds the magnitude or length."""

    @abstractmethod
    def shrink(self, draw: Any) -> Iterator[Any]:
        """Yield simpler draws, most aggressive first."""

    @abstractmethod
    def simplest(self) -> Any:
        """Canonical minimal draw."""

    def realize(self, draw: Any) -> T:
        """Turn a draw into the value passed to a property."""
        result: T = draw
        return result

    def complexity(self, draw: Any) -> float:
        """Size of a draw by this generator's own ordering."""
        return 0

    def example(self, seed: int = 0, size: int = DEFAULT_EXAMPLE_SIZE) -> T:
        """Realized value from a fresh stream. For exploration, not for runs."""
        return self.realize(self.generate(RandomStream(seed), size))

    def map[U](self, fn: Callable[[T], U]) -> Mapped[T, U]:
        return Mapped(self, fn)

    def filter(self, predicate: Callable[[T], bool], max_attempts: int = DEFAULT_FILTER_ATTEMPTS) -> Filtered[T]:
        return Filtered(self, predicate, max_attempts=max_attempts)


class Mapped[T, U](Generator[U]):
    """Transforms another generator's values with a pure function.

    Shrinking works on the underlying draw; the function is reapplied when
    the draw is realized, so shrinking survives the transformation.
    """

    def __init__(self, inner: Generator[T], fn: Callable[[T], U]) -> None:
        self._inner = inner
        self._fn = fn

    def __repr__(self) -> str:
        name = getattr(self._fn, "__name__", repr(self._fn))
        return f"{self._inner!r}.map({name})"

    def generate(self, stream: RandomStream, size: int) -> Any:
        return self._inner.generate(stream, size)

    def shrink(self, draw: Any) -> Iterator[Any]:
        return self._inner.shrink(draw)

    def simplest(self) -> Any:
        return self._inner.simplest()

    def realize(self, draw: Any) -> U:
        return self._fn(self._inner.realize(draw))

    def complexity(self, draw: Any) -> float:
        return self._inner.complexity(draw)


class Filtered[T](Generator[T]):
    """Keeps only values satisfying a predicate.

    Generation retries from fresh sub-streams up to max_attempts times and
    then raises GenerationExhaustion. Shrink candidates that no longer
    satisfy the predicate are skipped.
    """

    def __init__(
        self,
        inner: Generator[T],
        predicate: Callable[[T], bool],
        *,
        max_attempts: int = DEFAULT_FILTER_ATTEMPTS,
    ) -> None:
        if max_attempts <= 0:
            raise ConfigurationError(f"max_attempts must be positive, got {max_attempts}")
        self._inner = inner
        self._predicate = predicate
        self._max_attempts = max_attempts

    def __repr__(self) -> str:
        name = getattr(self._predicate, "__name__", repr(self._predicate))
        return f"{self._inner!r}.filter({name})"

    def _accepts(self, draw: Any) -> bool:
        return bool(self._predicate(self._inner.realize(draw)))

    def generate(self, stream: RandomStream, size: int) -> Any:
        for attempt in range(self._max_attempts):
            draw = self._inner.generate(stream.derive(attempt), size)
            if self._accepts(draw):
                return draw
        raise GenerationExhaustion(self._max_attempts, repr(self))

    def shrink(self, draw: Any) -> Iterator[Any]:
        for candidate in self._inner.shrink(draw):
            if self._accepts(candidate):
                yield candidate

    def simplest(self) -> Any:
        draw = self._inner.simplest()
        if not self._accepts(draw):
            raise GenerationExhaustion(1, f"simplest value of {self!r}")
        return draw

    def realize(self, draw: Any) -> T:
        return self._inner.realize(draw)

    def complexity(self, draw: Any) -> float:
        return self._inner.complexity(draw)
