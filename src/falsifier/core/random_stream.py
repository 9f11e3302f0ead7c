# src/falsifier/core/random_stream.py
"""Deterministic, seedable bit source.

Every value a run generates is derived from a RandomStream, so a seed fixes
the entire run. Bits come from SHA-256 in counter mode over the stream's
identity (seed plus derivation path) and a block index. That construction
uses only integer and byte operations, so an identical (seed, call
sequence) pair yields identical output on every platform and Python build.

Usage:
    root = RandomStream(42)
    trial = root.derive(7)            # independent stream for trial 7
    length = trial.below(10)
    first = trial.derive(0)           # element 0, unaffected by siblings
"""

from __future__ import annotations

import hashlib
import secrets

from falsifier.contracts.errors import ConfigurationError

_BLOCK_BITS = 256
_FLOAT_BITS = 53


def fresh_seed() -> int:
    """Return a new 32-bit seed from the OS entropy source."""
    return secrets.randbits(32)


def _identity(seed: int, path: tuple[str, ...]) -> bytes:
    """Length-prefixed encoding of seed and path, so no two lineages share bytes."""
    parts = [str(seed).encode("ascii"), *(segment.encode("utf-8") for segment in path)]
    return b"".join(len(part).to_bytes(4, "big") + part for part in parts)


class RandomStream:
    """Stateful cursor over a deterministic bit sequence.

    Advancing the cursor (and the derivation counter used by derive() with no
    key) is the only mutation. A stream must not be shared between
    concurrent generation paths; give each path its own derived stream.
    """

    __slots__ = ("_block_index", "_buffer", "_buffered", "_consumed", "_derived", "_key", "_path", "_seed")

    def __init__(self, seed: int, *, path: tuple[str, ...] = ()) -> None:
        """Create a stream.

        Args:
            seed: Non-negative integer seed.
            path: Derivation path from the root stream (empty for a root).

        Raises:
            ConfigurationError: If seed is not a non-negative int.
        """
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise ConfigurationError(f"Seed must be an int, got {type(seed).__name__}")
        if seed < 0:
            raise ConfigurationError(f"Seed must be non-negative, got {seed}")

        self._seed = seed
        self._path = path
        self._key = hashlib.sha256(_identity(seed, path)).digest()
        self._block_index = 0
        self._buffer = 0
        self._buffered = 0
        self._consumed = 0
        self._derived = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def path(self) -> tuple[str, ...]:
        return self._path

    @property
    def bits_consumed(self) -> int:
        """Total bits drawn from this stream so far."""
        return self._consumed

    def __repr__(self) -> str:
        return f"RandomStream(seed={self._seed}, path={self._path!r}, bits_consumed={self._consumed})"

    def _refill(self) -> None:
        block = hashlib.sha256(self._key + self._block_index.to_bytes(8, "big")).digest()
        self._block_index += 1
        self._buffer = (self._buffer << _BLOCK_BITS) | int.from_bytes(block, "big")
        self._buffered += _BLOCK_BITS

    def next(self, bits: int) -> int:
        """Consume exactly `bits` bits and return them as an unsigned integer.

        Args:
            bits: Number of bits to draw (0 returns 0 and consumes nothing).

        Returns:
            Integer in [0, 2**bits).
        """
        if bits < 0:
            raise ValueError(f"bits must be non-negative, got {bits}")
        while self._buffered < bits:
            self._refill()
        self._buffered -= bits
        value = self._buffer >> self._buffered
        self._buffer &= (1 << self._buffered) - 1
        self._consumed += bits
        return value

    def derive(self, key: int | str | None = None) -> RandomStream:
        """Create an independent child stream.

        With a key, the child depends only on this stream's identity and the
        key, never on how much of this stream has been consumed. Without a
        key, the next value of an internal derivation counter is used.

        Integer and string keys never collide: derive(1) and derive("1") are
        different streams.

        Raises:
            TypeError: If key is not an int, a str or None.
        """
        if key is None:
            segment = f"#{self._derived}"
            self._derived += 1
        elif isinstance(key, bool) or not isinstance(key, int | str):
            raise TypeError(f"derive key must be an int or str, got {type(key).__name__}")
        elif isinstance(key, int):
            segment = f"i{key}"
        else:
            segment = f"s{key}"
        return RandomStream(self._seed, path=(*self._path, segment))

    def below(self, bound: int) -> int:
        """Uniform integer in [0, bound) by rejection sampling."""
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        bits = (bound - 1).bit_length()
        while True:
            value = self.next(bits)
            if value < bound:
                return value

    def between(self, low: int, high: int) -> int:
        """Uniform integer in [low, high] inclusive."""
        if low > high:
            raise ValueError(f"low ({low}) must be <= high ({high})")
        return low + self.below(high - low + 1)

    def fraction(self) -> float:
        """Uniform float in [0.0, 1.0) with 53 bits of precision."""
        return self.next(_FLOAT_BITS) / (1 << _FLOAT_BITS)

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        if probability <= 0:
            return False
        if probability >= 1:
            return True
        return self.fraction() < probability
