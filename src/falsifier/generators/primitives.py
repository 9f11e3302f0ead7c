# src/falsifier/generators/primitives.py
"""Scalar generators: constants, integers, floats, booleans and enumerations.

Integers and floats shrink toward an *origin*: zero when the range contains
it, otherwise the range bound closest to zero. Their size ordering is a
zig-zag distance from the origin, so a positive value counts as simpler
than its negative mirror.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from falsifier.contracts.errors import ConfigurationError
from falsifier.core.random_stream import RandomStream
from falsifier.generators.base import Generator


def _window(size: int) -> int:
    """Half-width of the value window at a given size."""
    return size * size


def _check_integer_bound(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an int or None, got {type(value).__name__}")


def _check_float_bound(name: str, value: float | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{name} must be a number or None, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value}")


class Constant[T](Generator[T]):
    """Always produces the same value. Nothing to shrink."""

    def __init__(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"just({self._value!r})"

    def generate(self, stream: RandomStream, size: int) -> T:
        return self._value

    def shrink(self, draw: T) -> Iterator[T]:
        return iter(())

    def simplest(self) -> T:
        return self._value


class IntegerRange(Generator[int]):
    """Integers in [min_value, max_value]; either bound may be open (None)."""

    def __init__(self, min_value: int | None = None, max_value: int | None = None) -> None:
        _check_integer_bound("min_value", min_value)
        _check_integer_bound("max_value", max_value)
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ConfigurationError(f"min_value ({min_value}) must be <= max_value ({max_value})")
        self._min = min_value
        self._max = max_value
        self._origin = self._clamp(0)

    def __repr__(self) -> str:
        return f"integers(min_value={self._min}, max_value={self._max})"

    def _clamp(self, value: int) -> int:
        if self._min is not None and value < self._min:
            return self._min
        if self._max is not None and value > self._max:
            return self._max
        return value

    def _in_range(self, value: int) -> bool:
        return self._clamp(value) == value

    def generate(self, stream: RandomStream, size: int) -> int:
        half = _window(size)
        low = self._clamp(self._origin - half)
        high = self._clamp(self._origin + half)
        return stream.between(low, high)

    def complexity(self, draw: int) -> int:
        distance = draw - self._origin
        return 2 * abs(distance) + (1 if distance < 0 else 0)

    def simplest(self) -> int:
        return self._origin

    def shrink(self, draw: int) -> Iterator[int]:
        distance = draw - self._origin
        if distance == 0:
            return
        sign = 1 if distance > 0 else -1
        candidates = [self._origin]
        if distance < 0:
            candidates.append(self._origin - distance)
        # Approach the origin by halving steps: value/2, 3/4 of the way, ... value-1.
        step = abs(distance) // 2
        while step > 0:
            candidates.append(draw - sign * step)
            step //= 2
        candidates.append(draw - sign)

        current = self.complexity(draw)
        seen: set[int] = set()
        for candidate in candidates:
            if candidate in seen or not self._in_range(candidate):
                continue
            seen.add(candidate)
            if self.complexity(candidate) < current:
                yield candidate


class FloatRange(Generator[float]):
    """Finite floats in [min_value, max_value]; either bound may be open (None)."""

    def __init__(self, min_value: float | None = None, max_value: float | None = None) -> None:
        _check_float_bound("min_value", min_value)
        _check_float_bound("max_value", max_value)
        if min_value is not None and max_value is not None and min_value > max_value:
            raise ConfigurationError(f"min_value ({min_value}) must be <= max_value ({max_value})")
        self._min = None if min_value is None else float(min_value)
        self._max = None if max_value is None else float(max_value)
        self._origin = self._clamp(0.0)

    def __repr__(self) -> str:
        return f"floats(min_value={self._min}, max_value={self._max})"

    def _clamp(self, value: float) -> float:
        if self._min is not None and value < self._min:
            return self._min
        if self._max is not None and value > self._max:
            return self._max
        return value

    def _in_range(self, value: float) -> bool:
        return math.isfinite(value) and self._clamp(value) == value

    def generate(self, stream: RandomStream, size: int) -> float:
        half = float(_window(size))
        low = self._clamp(self._origin - half)
        high = self._clamp(self._origin + half)
        if low == high:
            return low
        return self._clamp(low + stream.fraction() * (high - low))

    def complexity(self, draw: float) -> float:
        distance = draw - self._origin
        return 2 * abs(distance) + (1 if distance < 0 else 0) + (0 if distance.is_integer() else 1)

    def simplest(self) -> float:
        return self._origin

    def shrink(self, draw: float) -> Iterator[float]:
        distance = draw - self._origin
        if distance == 0:
            return
        candidates = [self._origin]
        if distance < 0:
            candidates.append(self._origin - distance)
        candidates.append(self._origin + float(math.trunc(distance)))
        candidates.append(self._origin + float(math.trunc(distance / 2)))
        if abs(distance) >= 1:
            candidates.append(draw - math.copysign(1.0, distance))

        current = self.complexity(draw)
        seen: set[float] = set()
        for candidate in candidates:
            if candidate in seen or not self._in_range(candidate):
                continue
            seen.add(candidate)
            if self.complexity(candidate) < current:
                yield candidate


class Booleans(Generator[bool]):
    """True or False with equal probability. True shrinks to False."""

    def __repr__(self) -> str:
        return "booleans()"

    def generate(self, stream: RandomStream, size: int) -> bool:
        return stream.next(1) == 1

    def shrink(self, draw: bool) -> Iterator[bool]:
        if draw:
            yield False

    def simplest(self) -> bool:
        return False

    def complexity(self, draw: bool) -> int:
        return int(draw)


class ElementOf[T](Generator[T]):
    """Uniform choice from a fixed, non-empty sequence of elements.

    Draws are indexes into the sequence, so shrinking moves toward earlier
    elements regardless of whether the elements themselves are comparable.
    """

    def __init__(self, elements: Iterable[T]) -> None:
        self._elements: Sequence[T] = tuple(elements)
        if not self._elements:
            raise ConfigurationError("sampled_from requires at least one element")

    def __repr__(self) -> str:
        return f"sampled_from({list(self._elements)!r})"

    def generate(self, stream: RandomStream, size: int) -> int:
        return stream.below(len(self._elements))

    def shrink(self, draw: int) -> Iterator[int]:
        return iter(range(draw))

    def simplest(self) -> int:
        return 0

    def realize(self, draw: Any) -> T:
        return self._elements[draw]

    def complexity(self, draw: int) -> int:
        return draw
