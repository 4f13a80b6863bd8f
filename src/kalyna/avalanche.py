"""Avalanche measurement for DSTU 7624.

Flip one plaintext bit, encrypt both blocks under the same key and count
how many ciphertext bits change. A well-diffusing cipher changes about
half of them on average.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .engine import Dstu7624Engine
from .geometry import Geometry
from .randomness import RandomSource
from .utils import flip_bit, hamming_distance


@dataclass
class AvalancheResult:
    """Outcome of an avalanche run."""

    geometry_name: str
    block_bits: int
    trials: int

    # Per-trial fraction of ciphertext bits that flipped
    fractions: list[float] = field(default_factory=list)

    total_flipped_bits: int = 0

    @property
    def mean(self) -> float:
        return self.total_flipped_bits / (self.trials * self.block_bits) if self.trials else 0.0

    @property
    def min_fraction(self) -> float:
        return min(self.fractions) if self.fractions else 0.0

    @property
    def max_fraction(self) -> float:
        return max(self.fractions) if self.fractions else 0.0

    @property
    def passes(self) -> bool:
        """Heuristic: mean flip fraction within [0.4, 0.6]."""
        return 0.4 <= self.mean <= 0.6

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "geometry": self.geometry_name,
            "block_bits": self.block_bits,
            "trials": self.trials,
            "total_flipped_bits": self.total_flipped_bits,
            "mean": self.mean,
            "min": self.min_fraction,
            "max": self.max_fraction,
            "passes": self.passes,
        }

    def summary(self) -> str:
        status = "PASS" if self.passes else "FAIL"
        return (
            f"[{status}] {self.geometry_name} avalanche over {self.trials} trials: "
            f"mean={self.mean:.4f}, min={self.min_fraction:.4f}, "
            f"max={self.max_fraction:.4f}"
        )


def measure_avalanche(
    block_bits: int = 128,
    key_bits: int = 128,
    trials: int = 100,
    seed: int | None = None,
) -> AvalancheResult:
    """
    Measure the plaintext avalanche effect.

    Args:
        block_bits: Block size (128, 256, 512)
        key_bits: Key size, must pair legally with block_bits
        trials: Number of random (key, plaintext, bit) samples
        seed: Optional seed for a reproducible run

    Returns:
        AvalancheResult
    """
    if trials <= 0:
        raise ValueError(f"trials must be positive, got {trials}")

    geometry = Geometry(block_bits, key_bits)
    rng = RandomSource(seed=seed)
    engine = Dstu7624Engine(block_bits)
    result = AvalancheResult(
        geometry_name=geometry.name,
        block_bits=block_bits,
        trials=trials,
    )

    out_a = bytearray(geometry.block_bytes)
    out_b = bytearray(geometry.block_bytes)

    for _ in range(trials):
        key = rng.get_bytes(geometry.key_bytes, "keys")
        plaintext = rng.get_bytes(geometry.block_bytes, "blocks")
        bit = rng.randbelow(block_bits, "bit_positions")

        engine.init(True, key)
        engine.process_block(plaintext, 0, out_a, 0)
        engine.process_block(flip_bit(plaintext, bit), 0, out_b, 0)

        flipped = hamming_distance(bytes(out_a), bytes(out_b))
        result.total_flipped_bits += flipped
        result.fractions.append(flipped / block_bits)

    return result
