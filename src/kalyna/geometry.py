"""Block/key geometry for DSTU 7624."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import UnsupportedBlockSizeError, UnsupportedKeySizeError

BITS_IN_WORD = 64
BITS_IN_BYTE = 8

BLOCK_SIZES = (128, 256, 512)
KEY_SIZES = (128, 256, 512)

# Rounds depend only on the key length
ROUNDS_BY_KEY_BITS = {
    128: 10,
    256: 14,
    512: 18,
}

# Table 6.1 of the standard: legal (block_bits, key_bits) pairs
ALLOWED_GEOMETRIES = (
    (128, 128),
    (128, 256),
    (256, 256),
    (256, 512),
    (512, 512),
)


def check_block_bits(block_bits: int) -> None:
    """Reject block sizes other than 128, 256 or 512 bits."""
    if block_bits not in BLOCK_SIZES:
        raise UnsupportedBlockSizeError(
            f"Unsupported block length {block_bits}: only 128/256/512 are allowed"
        )


@dataclass(frozen=True)
class Geometry:
    """Resolved block/key geometry.

    Immutable once built. Validation happens in __post_init__ so an
    invalid pairing can never be observed.
    """

    block_bits: int
    key_bits: int

    def __post_init__(self) -> None:
        """Validate the (block, key) pairing."""
        check_block_bits(self.block_bits)
        if self.key_bits not in KEY_SIZES:
            raise UnsupportedKeySizeError(
                f"Unsupported key length {self.key_bits}: only 128/256/512 are allowed"
            )
        if (self.block_bits, self.key_bits) not in ALLOWED_GEOMETRIES:
            raise UnsupportedKeySizeError(
                f"Unsupported key length {self.key_bits} "
                f"for {self.block_bits}-bit block"
            )

    @classmethod
    def from_key_length(cls, block_bits: int, key_len_bytes: int) -> "Geometry":
        """Resolve the geometry for a key of ``key_len_bytes`` bytes."""
        return cls(block_bits=block_bits, key_bits=key_len_bytes * BITS_IN_BYTE)

    @property
    def words_in_block(self) -> int:
        """Number of 64-bit words (state columns) in a block."""
        return self.block_bits // BITS_IN_WORD

    @property
    def words_in_key(self) -> int:
        """Number of 64-bit words in the master key."""
        return self.key_bits // BITS_IN_WORD

    @property
    def rounds(self) -> int:
        return ROUNDS_BY_KEY_BITS[self.key_bits]

    @property
    def block_bytes(self) -> int:
        return self.block_bits // BITS_IN_BYTE

    @property
    def key_bytes(self) -> int:
        return self.key_bits // BITS_IN_BYTE

    @property
    def name(self) -> str:
        """Standard label, e.g. ``Kalyna-128/256``."""
        return f"Kalyna-{self.block_bits}/{self.key_bits}"

    def to_dict(self) -> dict[str, int | str]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "block_bits": self.block_bits,
            "key_bits": self.key_bits,
            "words_in_block": self.words_in_block,
            "words_in_key": self.words_in_key,
            "rounds": self.rounds,
        }


def list_geometries() -> list[Geometry]:
    """List every legal geometry in table order."""
    return [Geometry(block_bits, key_bits) for block_bits, key_bits in ALLOWED_GEOMETRIES]
