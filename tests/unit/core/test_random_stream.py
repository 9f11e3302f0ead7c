# tests/unit/core/test_random_stream.py
"""Unit tests for RandomStream.

Tests seed validation, exact bit consumption, derivation independence and
the convenience draws built on next().
"""

from __future__ import annotations

import pytest

from falsifier.contracts.errors import ConfigurationError
from falsifier.core.random_stream import RandomStream, fresh_seed

# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Seed validation happens at construction and nowhere else."""

    def test_accepts_zero_seed(self) -> None:
        stream = RandomStream(0)
        assert stream.seed == 0
        assert stream.path == ()

    def test_accepts_large_seed(self) -> None:
        """Seeds are not limited to machine word size."""
        stream = RandomStream(2**100 + 7)
        assert stream.next(64) >= 0

    def test_rejects_negative_seed(self) -> None:
        with pytest.raises(ConfigurationError, match="non-negative"):
            RandomStream(-1)

    @pytest.mark.parametrize("seed", ["42", 4.2, None, True])
    def test_rejects_non_integer_seed(self, seed: object) -> None:
        """Strings, floats, None and bools are invalid seed formats."""
        with pytest.raises(ConfigurationError):
            RandomStream(seed)  # type: ignore[arg-type]

    def test_fresh_seed_is_32_bit(self) -> None:
        for _ in range(20):
            assert 0 <= fresh_seed() < 2**32


# =============================================================================
# next()
# =============================================================================


class TestNext:
    """next(bits) consumes exactly `bits` bits."""

    def test_zero_bits_returns_zero(self) -> None:
        stream = RandomStream(1)
        assert stream.next(0) == 0
        assert stream.bits_consumed == 0

    @pytest.mark.parametrize("bits", [1, 7, 8, 53, 256, 300, 1000])
    def test_value_fits_in_bits(self, bits: int) -> None:
        stream = RandomStream(5)
        for _ in range(10):
            assert 0 <= stream.next(bits) < 2**bits
        assert stream.bits_consumed == 10 * bits

    def test_same_seed_same_sequence(self) -> None:
        a = RandomStream(42)
        b = RandomStream(42)
        assert [a.next(13) for _ in range(50)] == [b.next(13) for _ in range(50)]

    def test_different_seeds_differ(self) -> None:
        a = RandomStream(1)
        b = RandomStream(2)
        assert [a.next(32) for _ in range(8)] != [b.next(32) for _ in range(8)]

    def test_split_reads_concatenate(self) -> None:
        """Reading 8 bits then 8 bits equals reading 16 bits at once."""
        a = RandomStream(9)
        b = RandomStream(9)
        high = a.next(8)
        low = a.next(8)
        assert (high << 8) | low == b.next(16)

    def test_known_value_is_stable(self) -> None:
        """Output is pinned to SHA-256 of the seed identity, not to the platform."""
        import hashlib

        key = hashlib.sha256(b"\x00\x00\x00\x017").digest()
        block = hashlib.sha256(key + (0).to_bytes(8, "big")).digest()
        assert RandomStream(7).next(32) == int.from_bytes(block[:4], "big")

    def test_negative_bits_rejected(self) -> None:
        with pytest.raises(ValueError):
            RandomStream(0).next(-1)


# =============================================================================
# derive()
# =============================================================================


class TestDerive:
    """Derived streams are independent of the parent's consumption."""

    def test_keyed_derive_ignores_parent_position(self) -> None:
        fresh = RandomStream(3)
        used = RandomStream(3)
        used.next(500)
        assert fresh.derive(4).next(64) == used.derive(4).next(64)

    def test_keyed_derive_does_not_advance_parent(self) -> None:
        parent = RandomStream(3)
        reference = RandomStream(3)
        parent.derive(0)
        parent.derive("other")
        assert parent.next(32) == reference.next(32)

    def test_sibling_keys_differ(self) -> None:
        parent = RandomStream(11)
        assert parent.derive(0).next(64) != parent.derive(1).next(64)

    def test_child_differs_from_parent(self) -> None:
        parent = RandomStream(11)
        child = RandomStream(11).derive(0)
        assert parent.next(64) != child.next(64)

    def test_unkeyed_derive_advances_counter(self) -> None:
        parent = RandomStream(8)
        first = parent.derive()
        second = parent.derive()
        assert first.path != second.path
        assert first.next(64) != second.next(64)

    def test_unkeyed_derive_is_reproducible(self) -> None:
        a = RandomStream(8)
        b = RandomStream(8)
        assert [a.derive().next(16) for _ in range(5)] == [b.derive().next(16) for _ in range(5)]

    def test_path_records_lineage(self) -> None:
        grandchild = RandomStream(1).derive(2).derive("x")
        assert grandchild.path == ("i2", "sx")
        assert grandchild.seed == 1

    def test_int_and_str_keys_differ(self) -> None:
        parent = RandomStream(5)
        assert parent.derive(1).next(64) != parent.derive("1").next(64)

    def test_separator_in_key_does_not_alias_deeper_path(self) -> None:
        """A key containing a separator is not the same stream as two nested keys."""
        flat = RandomStream(5).derive("a/sb")
        nested = RandomStream(5).derive("a").derive("b")
        assert flat.next(64) != nested.next(64)

    def test_seed_digits_do_not_alias_path(self) -> None:
        assert RandomStream(12).next(64) != RandomStream(1).derive("2").next(64)

    @pytest.mark.parametrize("key", [1.5, True, b"x", (1,)])
    def test_rejects_unsupported_key(self, key: object) -> None:
        with pytest.raises(TypeError):
            RandomStream(5).derive(key)  # type: ignore[arg-type]


# =============================================================================
# Convenience draws
# =============================================================================


class TestDraws:
    """below/between/fraction/chance stay within their ranges."""

    def test_below_one_is_always_zero(self) -> None:
        stream = RandomStream(0)
        assert all(stream.below(1) == 0 for _ in range(20))
        assert stream.bits_consumed == 0

    def test_below_stays_in_range(self) -> None:
        stream = RandomStream(21)
        values = {stream.below(6) for _ in range(600)}
        assert values == set(range(6))

    def test_below_rejects_non_positive(self) -> None:
        with pytest.raises(ValueError):
            RandomStream(0).below(0)

    def test_between_inclusive(self) -> None:
        stream = RandomStream(4)
        values = {stream.between(-2, 2) for _ in range(500)}
        assert values == {-2, -1, 0, 1, 2}

    def test_between_single_value(self) -> None:
        assert RandomStream(4).between(9, 9) == 9

    def test_between_rejects_inverted(self) -> None:
        with pytest.raises(ValueError):
            RandomStream(4).between(3, 2)

    def test_fraction_in_unit_interval(self) -> None:
        stream = RandomStream(77)
        for _ in range(200):
            value = stream.fraction()
            assert 0.0 <= value < 1.0

    def test_chance_extremes(self) -> None:
        stream = RandomStream(0)
        assert not any(stream.chance(0.0) for _ in range(50))
        assert all(stream.chance(1.0) for _ in range(50))
