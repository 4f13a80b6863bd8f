"""
DSTU 7624 key schedule.

Expands a master key into rounds + 1 round keys in three phases:

1. KT: a per-key tweak obtained by running three cipher rounds over a
   constant block, keyed with the two halves of the master key.
2. Even round keys: the (rotating) key words are enciphered with KT
   plus a shifting mask, two rounds per key.
3. Odd round keys: each is the previous even key rotated left by
   2 * words_in_block + 3 bytes.

The cipher's own round function is the mixing primitive throughout.
"""

from __future__ import annotations

import logging

from .geometry import Geometry
from .round_transform import (
    add_round_key,
    xor_round_key,
    forward_round,
)
from .utils import WORD_MASK, bytes_to_words, rotate_bytes_left

logger = logging.getLogger(__name__)

# 16-bit pattern 0x0001 repeated across a word
MASK_SEED = 0x0001000100010001


def expand_kt(key_words: list[int], geometry: Geometry) -> list[int]:
    """
    Derive the tweak constant KT.

    Args:
        key_words: master key as little-endian 64-bit words
        geometry: resolved block/key geometry

    Returns:
        KT as words_in_block words
    """
    nb = geometry.words_in_block
    nk = geometry.words_in_key

    state = [0] * nb
    state[0] = nb + nk + 1

    if nb == nk:
        k0 = list(key_words)
        k1 = list(key_words)
    else:
        k0 = key_words[:nb]
        k1 = key_words[nb:2 * nb]

    state = add_round_key(state, k0)
    state = forward_round(state)
    state = xor_round_key(state, k1)
    state = forward_round(state)
    state = add_round_key(state, k0)
    state = forward_round(state)
    return state


def shift_mask(tmv: list[int]) -> list[int]:
    """Shift every mask word left by one bit, then reverse word order."""
    return [(w << 1) & WORD_MASK for w in tmv][::-1]


def rotate_words_left(words: list[int]) -> list[int]:
    """Move word 0 to the end."""
    return words[1:] + words[:1]


def _even_round_key(kt: list[int], tmv: list[int], data: list[int]) -> list[int]:
    kt_round = add_round_key(kt, tmv)
    state = add_round_key(data, kt_round)
    state = forward_round(state)
    state = xor_round_key(state, kt_round)
    state = forward_round(state)
    return add_round_key(state, kt_round)


def expand_even(
    key_words: list[int], kt: list[int], geometry: Geometry
) -> dict[int, list[int]]:
    """
    Compute the even-indexed round keys 0, 2, ..., rounds.

    Returns:
        Mapping of round index -> round key words
    """
    nb = geometry.words_in_block
    nk = geometry.words_in_key
    rounds = geometry.rounds

    keys: dict[int, list[int]] = {}
    initial_data = list(key_words)
    tmv = [MASK_SEED] * nb
    round_num = 0

    while True:
        keys[round_num] = _even_round_key(kt, tmv, initial_data[:nb])
        if round_num == rounds:
            break

        if nk != nb:
            # Double-width key: the upper half feeds the next even key
            round_num += 2
            tmv = shift_mask(tmv)
            keys[round_num] = _even_round_key(kt, tmv, initial_data[nb:2 * nb])
            if round_num == rounds:
                break

        round_num += 2
        tmv = shift_mask(tmv)
        initial_data = rotate_words_left(initial_data)

    return keys


def odd_rotation(geometry: Geometry) -> int:
    """Byte rotation applied to derive odd round keys."""
    return 2 * geometry.words_in_block + 3


def expand_key(key: bytes, geometry: Geometry) -> list[list[int]]:
    """
    Expand a master key into rounds + 1 round keys.

    Args:
        key: master key bytes, exactly geometry.key_bytes long
        geometry: resolved block/key geometry

    Returns:
        List indexed 0..rounds of round keys (words_in_block words each)

    Raises:
        ValueError: If the key length does not match the geometry
    """
    if len(key) != geometry.key_bytes:
        raise ValueError(
            f"Key must be {geometry.key_bytes} bytes for {geometry.name}, got {len(key)}"
        )

    logger.debug(
        "Expanding key: %s, %d rounds", geometry.name, geometry.rounds
    )

    key_words = bytes_to_words(key)
    kt = expand_kt(key_words, geometry)
    even = expand_even(key_words, kt, geometry)

    round_keys: list[list[int]] = []
    rotation = odd_rotation(geometry)
    for i in range(geometry.rounds + 1):
        if i % 2 == 0:
            round_keys.append(even[i])
        else:
            round_keys.append(rotate_bytes_left(even[i - 1], rotation))

    return round_keys
