"""Block cipher calling convention shared by engines."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlockCipher(ABC):
    """Abstract single-block cipher.

    An engine is constructed for a block size, keyed with init() and then
    processes one block per process_block() call in the direction chosen
    at init time. No chaining, no padding.
    """

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Fixed identifier of the algorithm."""
        raise NotImplementedError

    @property
    def is_partial_block_okay(self) -> bool:
        """Whether process_block() accepts less than a full block."""
        return False

    @abstractmethod
    def init(self, for_encryption: bool, key: bytes) -> None:
        """Key the engine.

        Args:
            for_encryption: True to encrypt, False to decrypt
            key: raw key bytes
        """
        raise NotImplementedError

    @abstractmethod
    def process_block(
        self,
        inp: bytes | bytearray | memoryview,
        in_off: int,
        out: bytearray | memoryview,
        out_off: int,
    ) -> int:
        """Transform one block from ``inp[in_off:]`` into ``out[out_off:]``.

        Returns:
            Number of bytes written (always block_size())
        """
        raise NotImplementedError

    @abstractmethod
    def block_size(self) -> int:
        """Block size in bytes."""
        raise NotImplementedError

    def reset(self) -> None:
        """Drop any chaining state (single-block engines have none)."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(algorithm={self.algorithm_name!r}, block_size={self.block_size()})"
