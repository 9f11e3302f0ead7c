# tests/property/__init__.py
"""Property-based tests for falsifier.

These tests use Hypothesis to check invariants of the engine that must hold
for every seed, size and generator shape, not just the ones we think of.

Test categories:
- core/: RandomStream ranges and derivation independence
- generators/: Shrink candidates are strictly simpler, generation is deterministic
- engine/: Run determinism, shrink termination and validity
"""
