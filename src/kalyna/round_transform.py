"""
DSTU 7624 round transform.

Forward round:  SubBytes -> ShiftRows -> MixColumns
Inverse round:  InvMixColumns -> InvShiftRows -> InvSubBytes

Every stage takes the state as a list of 64-bit words and returns a new
list; byte-wise stages convert to the little-endian byte image and back
at their boundary. Key injection comes in three flavours: modular
addition (first and last key), XOR (every intermediate key) and
modular subtraction (inverse of addition, used for decryption).
"""

from .gf import matrix_multiply_column
from .tables import SBOXES, INV_SBOXES, MDS_MATRIX, MDS_INV_MATRIX
from .utils import (
    BYTES_IN_WORD,
    bytes_to_words,
    words_to_bytes,
    add_words,
    sub_words,
    xor_words,
)

FORWARD_STAGES = ("SubBytes", "ShiftRows", "MixColumns")
INVERSE_STAGES = ("InvMixColumns", "InvShiftRows", "InvSubBytes")


def _substitute(state: list[int], tables) -> list[int]:
    data = words_to_bytes(state)
    # byte position within a word is i % 8, table index is that mod 4
    return bytes_to_words(bytes(tables[i % 4][b] for i, b in enumerate(data)))


def sub_bytes(state: list[int]) -> list[int]:
    """Apply S-box j mod 4 to byte j of every word."""
    return _substitute(state, SBOXES)


def inv_sub_bytes(state: list[int]) -> list[int]:
    """Apply the inverse S-boxes."""
    return _substitute(state, INV_SBOXES)


def _row_shift_step(columns: int) -> int:
    """Rows sharing one shift amount; only 2, 4 and 8 columns are defined."""
    if columns not in (2, 4, 8):
        raise ValueError(f"ShiftRows is defined for 2, 4 or 8 columns, got {columns}")
    return BYTES_IN_WORD // columns


def shift_rows(state: list[int]) -> list[int]:
    """
    Cyclically shift row r right by r // (8 // columns) columns.

    Byte (row, col) moves to (row, (col + shift) mod columns).
    """
    columns = len(state)
    step = _row_shift_step(columns)
    data = words_to_bytes(state)
    out = bytearray(len(data))

    for row in range(BYTES_IN_WORD):
        shift = row // step
        for col in range(columns):
            dest = (col + shift) % columns
            out[row + dest * BYTES_IN_WORD] = data[row + col * BYTES_IN_WORD]

    return bytes_to_words(bytes(out))


def inv_shift_rows(state: list[int]) -> list[int]:
    """Undo shift_rows: gather byte (row, col) from (row, (col + shift) mod columns)."""
    columns = len(state)
    step = _row_shift_step(columns)
    data = words_to_bytes(state)
    out = bytearray(len(data))

    for row in range(BYTES_IN_WORD):
        shift = row // step
        for col in range(columns):
            src = (col + shift) % columns
            out[row + col * BYTES_IN_WORD] = data[row + src * BYTES_IN_WORD]

    return bytes_to_words(bytes(out))


def _mix(state: list[int], matrix) -> list[int]:
    data = words_to_bytes(state)
    mixed = b"".join(
        matrix_multiply_column(matrix, data[col * BYTES_IN_WORD:(col + 1) * BYTES_IN_WORD])
        for col in range(len(state))
    )
    return bytes_to_words(mixed)


def mix_columns(state: list[int]) -> list[int]:
    """Multiply every column (word) by the MDS matrix."""
    return _mix(state, MDS_MATRIX)


def inv_mix_columns(state: list[int]) -> list[int]:
    """Multiply every column (word) by the inverse MDS matrix."""
    return _mix(state, MDS_INV_MATRIX)


def add_round_key(state: list[int], round_key: list[int]) -> list[int]:
    """Add round key word-wise modulo 2^64."""
    return add_words(state, round_key)


def sub_round_key(state: list[int], round_key: list[int]) -> list[int]:
    """Subtract round key word-wise modulo 2^64."""
    return sub_words(state, round_key)


def xor_round_key(state: list[int], round_key: list[int]) -> list[int]:
    """XOR round key into the state."""
    return xor_words(state, round_key)


def forward_round(state: list[int]) -> list[int]:
    """One encryption round without key injection."""
    return mix_columns(shift_rows(sub_bytes(state)))


def inverse_round(state: list[int]) -> list[int]:
    """One decryption round without key injection."""
    return inv_sub_bytes(inv_shift_rows(inv_mix_columns(state)))


STAGE_FUNCTIONS = {
    "SubBytes": sub_bytes,
    "ShiftRows": shift_rows,
    "MixColumns": mix_columns,
    "InvMixColumns": inv_mix_columns,
    "InvShiftRows": inv_shift_rows,
    "InvSubBytes": inv_sub_bytes,
}
