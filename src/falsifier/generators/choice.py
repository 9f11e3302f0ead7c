# src/falsifier/generators/choice.py
"""Weighted choice among alternative generators."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from typing import Any

from falsifier.contracts.errors import ConfigurationError, GenerationExhaustion
from falsifier.core.random_stream import RandomStream
from falsifier.generators.base import Generator


class OneOf(Generator[Any]):
    """Picks one alternative per draw, proportionally to its weight.

    Draws are (alternative index, alternative draw). Shrinking first offers
    the simplest draw of each earlier alternative, when that is simpler than
    the current draw, and then shrinks within the current alternative. A
    switch is only kept by the shrinker if it still falsifies the property.
    """

    def __init__(self, alternatives: Sequence[Generator[Any]], weights: Sequence[float] | None = None) -> None:
        self._alternatives = tuple(alternatives)
        if not self._alternatives:
            raise ConfigurationError("one_of requires at least one alternative")

        if weights is None:
            weights = [1.0] * len(self._alternatives)
        if len(weights) != len(self._alternatives):
            raise ConfigurationError(f"one_of got {len(weights)} weights for {len(self._alternatives)} alternatives")
        for weight in weights:
            if not math.isfinite(weight) or weight < 0:
                raise ConfigurationError(f"one_of weights must be finite and non-negative, got {weight}")
        self._weights = tuple(float(w) for w in weights)
        self._total = sum(self._weights)
        if self._total <= 0:
            raise ConfigurationError("one_of requires at least one positive weight")

    def __repr__(self) -> str:
        return f"one_of({', '.join(repr(a) for a in self._alternatives)})"

    def _pick(self, stream: RandomStream) -> int:
        roll = stream.fraction() * self._total
        threshold = 0.0
        chosen = 0
        for index, weight in enumerate(self._weights):
            if weight <= 0:
                continue
            chosen = index
            threshold += weight
            if roll < threshold:
                break
        return chosen

    def generate(self, stream: RandomStream, size: int) -> tuple[int, Any]:
        index = self._pick(stream)
        return index, self._alternatives[index].generate(stream.derive(index), size)

    def realize(self, draw: Any) -> Any:
        index, inner = draw
        return self._alternatives[index].realize(inner)

    def complexity(self, draw: Any) -> float:
        index, inner = draw
        return index + self._alternatives[index].complexity(inner)

    def simplest(self) -> tuple[int, Any]:
        for index, alternative in enumerate(self._alternatives):
            if self._weights[index] <= 0:
                continue
            try:
                return index, alternative.simplest()
            except GenerationExhaustion:
                continue
        raise GenerationExhaustion(len(self._alternatives), f"simplest value of {self!r}")

    def shrink(self, draw: Any) -> Iterator[tuple[int, Any]]:
        index, inner = draw
        current = self.complexity(draw)
        for earlier in range(index):
            if self._weights[earlier] <= 0:
                continue
            try:
                candidate = (earlier, self._alternatives[earlier].simplest())
            except GenerationExhaustion:
                # Filtered alternative whose simplest value is rejected; nothing to switch to.
                continue
            if self.complexity(candidate) < current:
                yield candidate
        for inner_candidate in self._alternatives[index].shrink(inner):
            yield index, inner_candidate
