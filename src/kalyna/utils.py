"""
Utility functions for word/byte conversions and hex formatting.

The DSTU 7624 state is an array of 64-bit words. Every byte-wise stage
views it as a matrix with 8 rows and one column per word, filled from
the little-endian byte image of the words:

  byte[0]  -> state[0][0]   (low byte of word 0)
  byte[1]  -> state[1][0]
  ...
  byte[7]  -> state[7][0]   (high byte of word 0)
  byte[8]  -> state[0][1]
  ...

Word <-> byte conversion is always little-endian, independent of the
host byte order.
"""

from .errors import DataLengthError, OutputLengthError

WORD_MASK = 0xFFFFFFFFFFFFFFFF
BYTES_IN_WORD = 8


def bytes_to_words(data: bytes) -> list[int]:
    """
    Unpack bytes into little-endian 64-bit words.

    Args:
        data: byte string whose length is a multiple of 8

    Returns:
        list of unsigned 64-bit integers
    """
    if len(data) % BYTES_IN_WORD:
        raise ValueError(f"Expected a multiple of 8 bytes, got {len(data)}")

    return [
        int.from_bytes(data[i:i + BYTES_IN_WORD], "little")
        for i in range(0, len(data), BYTES_IN_WORD)
    ]


def words_to_bytes(words: list[int]) -> bytes:
    """
    Pack 64-bit words into bytes, little-endian.

    Args:
        words: list of unsigned 64-bit integers

    Returns:
        8 * len(words) bytes
    """
    return b"".join(w.to_bytes(BYTES_IN_WORD, "little") for w in words)


def add_words(a: list[int], b: list[int]) -> list[int]:
    """Word-wise addition modulo 2^64."""
    return [(x + y) & WORD_MASK for x, y in zip(a, b)]


def sub_words(a: list[int], b: list[int]) -> list[int]:
    """Word-wise subtraction modulo 2^64."""
    return [(x - y) & WORD_MASK for x, y in zip(a, b)]


def xor_words(a: list[int], b: list[int]) -> list[int]:
    """Word-wise XOR."""
    return [x ^ y for x, y in zip(a, b)]


def rotate_bytes_left(words: list[int], count: int) -> list[int]:
    """
    Rotate the little-endian byte image of ``words`` left by ``count`` bytes.

    Byte ``count`` becomes byte 0 and the first ``count`` bytes wrap
    around to the end.
    """
    data = words_to_bytes(words)
    count %= len(data)
    return bytes_to_words(data[count:] + data[:count])


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Args:
        hex_str: Hex string (whitespace is ignored)

    Returns:
        bytes
    """
    return bytes.fromhex("".join(hex_str.split()))


def bytes_to_hex(data: bytes) -> str:
    """
    Convert bytes to hex string.

    Args:
        data: bytes

    Returns:
        Lowercase hex string
    """
    return bytes(data).hex()


def words_to_hex(words: list[int]) -> str:
    """
    Convert state words to hex string (via little-endian bytes).
    """
    return bytes_to_hex(words_to_bytes(words))


def format_state_grid(words: list[int]) -> str:
    """
    Format state as a readable 8-row grid, one column per word.

    Returns multi-line string like (128-bit block):
      10 18
      11 19
      ...
      17 1f
    """
    data = words_to_bytes(words)
    lines = []
    for row in range(BYTES_IN_WORD):
        row_hex = [
            f"{data[col * BYTES_IN_WORD + row]:02x}" for col in range(len(words))
        ]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_state_line(words: list[int]) -> str:
    """
    Format state as space-separated 64-bit words (big-endian digits).
    """
    return " ".join(f"{w:016x}" for w in words)


def hamming_distance(a: bytes, b: bytes) -> int:
    """
    Count differing bits between two byte sequences of equal length.
    """
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")
    return sum(bin(x ^ y).count("1") for x, y in zip(a, b))


def flip_bit(data: bytes, bit_index: int) -> bytes:
    """
    Return a copy of ``data`` with bit ``bit_index`` inverted (bit 0 = LSB of byte 0).
    """
    out = bytearray(data)
    out[bit_index // 8] ^= 1 << (bit_index % 8)
    return bytes(out)


def check_data_length(buf, offset: int, length: int, message: str) -> None:
    """Raise DataLengthError unless ``buf`` holds ``length`` bytes from ``offset``."""
    if offset < 0 or offset > len(buf) - length:
        raise DataLengthError(message)


def check_output_length(buf, offset: int, length: int, message: str) -> None:
    """Raise OutputLengthError unless ``buf`` has room for ``length`` bytes at ``offset``."""
    if offset < 0 or offset > len(buf) - length:
        raise OutputLengthError(message)
