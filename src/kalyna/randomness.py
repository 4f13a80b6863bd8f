"""Random source for test-vector generation and avalanche analysis."""

from __future__ import annotations

import secrets
from typing import Any


class RandomSource:
    """Random source with usage tracking.

    Provides deterministic randomness (from seed) for reproducibility,
    otherwise cryptographic randomness from ``secrets``.
    """

    CATEGORIES = ("keys", "blocks", "bit_positions", "other")

    def __init__(self, seed: int | None = None):
        """Initialize random source.

        Args:
            seed: Optional seed for deterministic randomness
        """
        self._seed = seed
        self._rng = self._create_rng(seed)
        self._bytes_used: dict[str, int] = {}
        self.reset()

    def _create_rng(self, seed: int | None) -> Any:
        if seed is None:
            return None  # Use secrets
        else:
            return _SeededRNG(seed)

    def reset(self) -> None:
        """Reset usage counters (and the seeded stream)."""
        self._bytes_used = {k: 0 for k in self.CATEGORIES}
        if self._seed is not None:
            self._rng = self._create_rng(self._seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def total_bytes(self) -> int:
        """Total random bytes used."""
        return sum(self._bytes_used.values())

    @property
    def bytes_breakdown(self) -> dict[str, int]:
        """Get bytes breakdown by category."""
        return self._bytes_used.copy()

    def get_bytes(self, count: int, category: str = "other") -> bytes:
        """Get random bytes and track usage.

        Args:
            count: Number of bytes to generate
            category: Category for tracking

        Returns:
            Random bytes
        """
        if category not in self._bytes_used:
            category = "other"
        self._bytes_used[category] += count

        if self._rng is None:
            return secrets.token_bytes(count)
        else:
            return self._rng.get_bytes(count)

    def randbelow(self, upper: int, category: str = "other") -> int:
        """Random integer in [0, upper)."""
        if upper <= 0:
            raise ValueError(f"upper must be positive, got {upper}")
        if category not in self._bytes_used:
            category = "other"
        self._bytes_used[category] += 8

        if self._rng is None:
            return secrets.randbelow(upper)
        else:
            return self._rng.next_word() % upper


class _SeededRNG:
    """Simple seeded PRNG for reproducibility.

    64-bit linear congruential generator; output bytes are taken from the
    high half of each state, the low bits of an LCG being weak.
    NOT cryptographically secure - for testing/reproducibility only.
    """

    def __init__(self, seed: int):
        self._state = seed & 0xFFFFFFFFFFFFFFFF
        self._a = 6364136223846793005
        self._c = 1442695040888963407
        self._m = 2**64

    def next_word(self) -> int:
        """Advance and return the 32 high bits of the state."""
        self._state = (self._a * self._state + self._c) % self._m
        return self._state >> 32

    def get_bytes(self, count: int) -> bytes:
        """Generate random bytes."""
        result = bytearray(count)
        for i in range(count):
            result[i] = (self.next_word() >> 24) & 0xFF
        return bytes(result)
