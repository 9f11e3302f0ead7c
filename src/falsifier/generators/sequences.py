# src/falsifier/generators/sequences.py
"""Sequence and composite generators.

Both derive one sub-stream per element or component, keyed by position, so
the value at one position never depends on how many bits another
position consumed.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from falsifier.contracts.errors import ConfigurationError
from falsifier.core.random_stream import RandomStream
from falsifier.generators.base import Generator


class SequenceOf[T](Generator[list[T]]):
    """Lists of elements from another generator.

    Length is drawn from [min_size, min(max_size, min_size + size)].
    Draws are lists of element draws.
    """

    def __init__(self, element: Generator[T], min_size: int = 0, max_size: int | None = None) -> None:
        if min_size < 0:
            raise ConfigurationError(f"min_size must be non-negative, got {min_size}")
        if max_size is not None and max_size < min_size:
            raise ConfigurationError(f"max_size ({max_size}) must be >= min_size ({min_size})")
        self._element = element
        self._min_size = min_size
        self._max_size = max_size

    def __repr__(self) -> str:
        return f"lists({self._element!r}, min_size={self._min_size}, max_size={self._max_size})"

    def generate(self, stream: RandomStream, size: int) -> list[Any]:
        upper = self._min_size + size
        if self._max_size is not None:
            upper = min(upper, self._max_size)
        length = stream.between(self._min_size, upper)
        return [self._element.generate(stream.derive(index), size) for index in range(length)]

    def realize(self, draw: Any) -> list[T]:
        return [self._element.realize(item) for item in draw]

    def complexity(self, draw: Any) -> float:
        return len(draw) + sum(self._element.complexity(item) for item in draw)

    def simplest(self) -> list[Any]:
        return [self._element.simplest() for _ in range(self._min_size)]

    def shrink(self, draw: Any) -> Iterator[list[Any]]:
        """Shortest allowed prefix, then single deletions, then per-element shrinks."""
        length = len(draw)
        if length > self._min_size:
            yield list(draw[: self._min_size])
            # Deleting the last element of a list one over the minimum is the prefix again.
            last = length - 1 if length - 1 > self._min_size else length - 2
            for index in range(last + 1):
                yield [*draw[:index], *draw[index + 1 :]]
        for index, item in enumerate(draw):
            for candidate in self._element.shrink(item):
                yield [*draw[:index], candidate, *draw[index + 1 :]]


class Composite(Generator[tuple[Any, ...]]):
    """Fixed-length tuples, one component per generator.

    Shrinking changes exactly one component at a time and exhausts a
    component's candidates before moving to the next, so a round costs the
    sum of the per-component candidate counts, not their product.
    """

    def __init__(self, components: Sequence[Generator[Any]]) -> None:
        self._components = tuple(components)

    def __repr__(self) -> str:
        return f"tuples({', '.join(repr(c) for c in self._components)})"

    def generate(self, stream: RandomStream, size: int) -> tuple[Any, ...]:
        return tuple(component.generate(stream.derive(index), size) for index, component in enumerate(self._components))

    def realize(self, draw: Any) -> tuple[Any, ...]:
        return tuple(component.realize(part) for component, part in zip(self._components, draw, strict=True))

    def complexity(self, draw: Any) -> float:
        return sum(component.complexity(part) for component, part in zip(self._components, draw, strict=True))

    def simplest(self) -> tuple[Any, ...]:
        return tuple(component.simplest() for component in self._components)

    def shrink(self, draw: Any) -> Iterator[tuple[Any, ...]]:
        for index, component in enumerate(self._components):
            for candidate in component.shrink(draw[index]):
                yield (*draw[:index], candidate, *draw[index + 1 :])
