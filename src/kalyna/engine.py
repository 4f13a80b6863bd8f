"""
DSTU 7624 (Kalyna) block cipher engine.

Processing schedule (R = rounds):

  Encrypt: AddRoundKey(0)
           rounds 1..R-1: SubBytes, ShiftRows, MixColumns, XorRoundKey(r)
           round R:       SubBytes, ShiftRows, MixColumns, AddRoundKey(R)

  Decrypt: SubRoundKey(R)
           rounds R-1..1: InvMixColumns, InvShiftRows, InvSubBytes, XorRoundKey(r)
           round 0:       InvMixColumns, InvShiftRows, InvSubBytes, SubRoundKey(0)
"""

from __future__ import annotations

import logging

from .errors import EngineNotInitialisedError, InvalidKeyError
from .geometry import Geometry, check_block_bits
from .interfaces import BlockCipher
from .key_schedule import expand_key
from .round_transform import (
    FORWARD_STAGES,
    INVERSE_STAGES,
    STAGE_FUNCTIONS,
    add_round_key,
    sub_round_key,
    xor_round_key,
)
from .trace import TraceRecorder
from .utils import (
    bytes_to_words,
    words_to_bytes,
    check_data_length,
    check_output_length,
)

logger = logging.getLogger(__name__)

ALGORITHM_NAME = "DSTU7624"


class Dstu7624Engine(BlockCipher):
    """
    DSTU 7624 engine for one block size.

    The block size is fixed at construction; the key (and with it the
    round count) is chosen by init(). Round keys are computed once per
    init() and reused for every block until the next init().
    """

    def __init__(self, block_bits: int = 128, tracer: TraceRecorder | None = None):
        """
        Initialize the engine.

        Args:
            block_bits: 128, 256 or 512
            tracer: Optional trace recorder for per-stage state output

        Raises:
            UnsupportedBlockSizeError: For any other block size
        """
        check_block_bits(block_bits)
        self._block_bits = block_bits
        self.tracer = tracer

        # Set by init()
        self._geometry: Geometry | None = None
        self._round_keys: list[list[int]] | None = None
        self._for_encryption = True

        logger.debug("Created %s engine, %d-bit block", ALGORITHM_NAME, block_bits)

    @property
    def algorithm_name(self) -> str:
        return ALGORITHM_NAME

    def block_size(self) -> int:
        return self._block_bits // 8

    @property
    def geometry(self) -> Geometry | None:
        """Geometry resolved by the last successful init(), if any."""
        return self._geometry

    @property
    def for_encryption(self) -> bool:
        return self._for_encryption

    @property
    def round_keys(self) -> tuple[tuple[int, ...], ...] | None:
        """Read-only copy of the round key table, or None before init()."""
        if self._round_keys is None:
            return None
        return tuple(tuple(rk) for rk in self._round_keys)

    def init(self, for_encryption: bool, key: bytes) -> None:
        """
        Key the engine and choose the direction.

        All validation happens before anything is stored, so a failed
        call leaves the previous key (if any) in force.

        Raises:
            InvalidKeyError: If key is not bytes-like
            UnsupportedKeySizeError: For key sizes not allowed with this block size
        """
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise InvalidKeyError(
                f"Key must be bytes-like, got {type(key).__name__}"
            )
        key = bytes(key)

        geometry = Geometry.from_key_length(self._block_bits, len(key))
        round_keys = expand_key(key, geometry)

        self._geometry = geometry
        self._round_keys = round_keys
        self._for_encryption = bool(for_encryption)

        logger.debug(
            "Initialised %s for %s",
            geometry.name,
            "encryption" if self._for_encryption else "decryption",
        )

    def process_block(
        self,
        inp: bytes | bytearray | memoryview,
        in_off: int,
        out: bytearray | memoryview,
        out_off: int,
    ) -> int:
        """
        Encrypt or decrypt one block.

        Args:
            inp: Source buffer
            in_off: Offset of the block in inp
            out: Writable destination buffer
            out_off: Offset to write the block at

        Returns:
            block_size()

        Raises:
            EngineNotInitialisedError: If init() was never called
            DataLengthError: If inp holds less than one block from in_off
            OutputLengthError: If out has less than one block of room from out_off
        """
        if self._round_keys is None:
            raise EngineNotInitialisedError(f"{ALGORITHM_NAME} engine not initialised")

        size = self.block_size()
        check_data_length(inp, in_off, size, "input buffer too short")
        check_output_length(out, out_off, size, "output buffer too short")

        block = bytes(inp[in_off:in_off + size])
        if self._for_encryption:
            result = self._encrypt(block)
        else:
            result = self._decrypt(block)

        out[out_off:out_off + size] = result
        return size

    def _trace(self, round_num: int, operation: str, state: list[int]) -> None:
        if self.tracer:
            self.tracer.record(round=round_num, operation=operation, state=list(state))

    def _run_round(self, state: list[int], round_num: int, stages: tuple[str, ...]) -> list[int]:
        for stage in stages:
            state = STAGE_FUNCTIONS[stage](state)
            self._trace(round_num, stage, state)
        return state

    def _encrypt(self, block: bytes) -> bytes:
        keys = self._round_keys
        rounds = len(keys) - 1

        state = bytes_to_words(block)
        self._trace(0, "Input", state)

        state = add_round_key(state, keys[0])
        self._trace(0, "AddRoundKey", state)

        for round_num in range(1, rounds):
            state = self._run_round(state, round_num, FORWARD_STAGES)
            state = xor_round_key(state, keys[round_num])
            self._trace(round_num, "XorRoundKey", state)

        state = self._run_round(state, rounds, FORWARD_STAGES)
        state = add_round_key(state, keys[rounds])
        self._trace(rounds, "AddRoundKey", state)

        return words_to_bytes(state)

    def _decrypt(self, block: bytes) -> bytes:
        keys = self._round_keys
        rounds = len(keys) - 1

        state = bytes_to_words(block)
        self._trace(rounds, "Input", state)

        state = sub_round_key(state, keys[rounds])
        self._trace(rounds, "SubRoundKey", state)

        for round_num in range(rounds - 1, 0, -1):
            state = self._run_round(state, round_num, INVERSE_STAGES)
            state = xor_round_key(state, keys[round_num])
            self._trace(round_num, "XorRoundKey", state)

        state = self._run_round(state, 0, INVERSE_STAGES)
        state = sub_round_key(state, keys[0])
        self._trace(0, "SubRoundKey", state)

        return words_to_bytes(state)


def _process(for_encryption: bool, key: bytes, block: bytes, tracer: TraceRecorder | None) -> bytes:
    engine = Dstu7624Engine(len(block) * 8, tracer=tracer)
    engine.init(for_encryption, key)
    out = bytearray(engine.block_size())
    engine.process_block(block, 0, out, 0)
    return bytes(out)


def encrypt_block(key: bytes, plaintext: bytes, tracer: TraceRecorder | None = None) -> bytes:
    """
    Convenience function: encrypt one block, block size taken from len(plaintext).

    Args:
        key: 16, 32 or 64-byte key
        plaintext: 16, 32 or 64-byte block
        tracer: Optional trace recorder

    Returns:
        Ciphertext block
    """
    return _process(True, key, plaintext, tracer)


def decrypt_block(key: bytes, ciphertext: bytes, tracer: TraceRecorder | None = None) -> bytes:
    """
    Convenience function: decrypt one block, block size taken from len(ciphertext).
    """
    return _process(False, key, ciphertext, tracer)
