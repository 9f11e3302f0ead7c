"""Composable generators and their factory functions.

Usage:
    from falsifier import generators as gen

    pairs = gen.tuples(gen.integers(0, 10), gen.booleans())
    words = gen.text(min_size=1, max_size=8)
    shapes = gen.one_of(gen.just("circle"), gen.sampled_from(["square", "hexagon"]), weights=[3, 1])
"""

from __future__ import annotations

import string
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from falsifier.generators.base import Filtered, Generator, Mapped
from falsifier.generators.choice import OneOf
from falsifier.generators.primitives import Booleans, Constant, ElementOf, FloatRange, IntegerRange
from falsifier.generators.sequences import Composite, SequenceOf

DEFAULT_ALPHABET = string.ascii_letters + string.digits + " "


def just[T](value: T) -> Constant[T]:
    return Constant(value)


constant = just


def integers(min_value: int | None = None, max_value: int | None = None) -> IntegerRange:
    return IntegerRange(min_value, max_value)


def floats(min_value: float | None = None, max_value: float | None = None) -> FloatRange:
    return FloatRange(min_value, max_value)


def booleans() -> Booleans:
    return Booleans()


def sampled_from[T](elements: Iterable[T]) -> ElementOf[T]:
    return ElementOf(elements)


def lists[T](element: Generator[T], min_size: int = 0, max_size: int | None = None) -> SequenceOf[T]:
    return SequenceOf(element, min_size=min_size, max_size=max_size)


def tuples(*components: Generator[Any]) -> Composite:
    return Composite(components)


def one_of(*alternatives: Generator[Any], weights: Sequence[float] | None = None) -> OneOf:
    return OneOf(alternatives, weights=weights)


def _join(chars: list[str]) -> str:
    return "".join(chars)


def text(alphabet: str = DEFAULT_ALPHABET, min_size: int = 0, max_size: int | None = None) -> Mapped[list[str], str]:
    """Strings over an alphabet. Shrinks toward shorter strings of earlier characters."""
    return SequenceOf(ElementOf(alphabet), min_size=min_size, max_size=max_size).map(_join)


def builds[R](fn: Callable[..., R], *components: Generator[Any]) -> Mapped[tuple[Any, ...], R]:
    """Values of fn(*parts) where each part comes from the matching generator."""

    def _build(parts: tuple[Any, ...]) -> R:
        return fn(*parts)

    _build.__name__ = getattr(fn, "__name__", "build")
    return Composite(components).map(_build)


__all__ = [
    "Booleans",
    "Composite",
    "Constant",
    "ElementOf",
    "Filtered",
    "FloatRange",
    "Generator",
    "IntegerRange",
    "Mapped",
    "OneOf",
    "SequenceOf",
    "booleans",
    "builds",
    "constant",
    "floats",
    "integers",
    "just",
    "lists",
    "one_of",
    "sampled_from",
    "text",
    "tuples",
]
