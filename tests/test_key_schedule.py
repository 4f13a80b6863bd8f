"""Tests for the DSTU 7624 key schedule."""

import pytest

from kalyna.geometry import Geometry, ALLOWED_GEOMETRIES
from kalyna.key_schedule import (
    MASK_SEED,
    expand_key,
    expand_kt,
    expand_even,
    odd_rotation,
    rotate_words_left,
    shift_mask,
)
from kalyna.utils import bytes_to_words, rotate_bytes_left


class TestHelpers:
    """Mask and rotation helpers."""

    def test_shift_mask(self):
        assert shift_mask([MASK_SEED, MASK_SEED]) == [0x0002000200020002] * 2

    def test_shift_mask_reverses(self):
        assert shift_mask([1, 2, 3, 4]) == [8, 6, 4, 2]

    def test_shift_mask_drops_top_bit(self):
        assert shift_mask([0x8000000000000001]) == [0x0000000000000002]

    def test_rotate_words_left(self):
        assert rotate_words_left([1, 2, 3, 4]) == [2, 3, 4, 1]

    @pytest.mark.parametrize("block_bits,expected", [(128, 7), (256, 11), (512, 19)])
    def test_odd_rotation(self, block_bits, expected):
        key_bits = 512 if block_bits == 512 else block_bits
        assert odd_rotation(Geometry(block_bits, key_bits)) == expected


class TestExpandKey:
    """Round key table construction."""

    @pytest.mark.parametrize("block_bits,key_bits", ALLOWED_GEOMETRIES)
    def test_table_size(self, block_bits, key_bits):
        geometry = Geometry(block_bits, key_bits)
        keys = expand_key(bytes(range(key_bits // 8)), geometry)
        assert len(keys) == geometry.rounds + 1
        for rk in keys:
            assert len(rk) == geometry.words_in_block
            assert all(0 <= w < 2**64 for w in rk)

    @pytest.mark.parametrize("block_bits,key_bits", ALLOWED_GEOMETRIES)
    def test_odd_keys_are_rotated_even_keys(self, block_bits, key_bits):
        geometry = Geometry(block_bits, key_bits)
        keys = expand_key(bytes(range(key_bits // 8)), geometry)
        rotation = 2 * geometry.words_in_block + 3
        for i in range(1, geometry.rounds, 2):
            assert keys[i] == rotate_bytes_left(keys[i - 1], rotation)

    @pytest.mark.parametrize("block_bits,key_bits", ALLOWED_GEOMETRIES)
    def test_even_keys_match_expand_even(self, block_bits, key_bits):
        geometry = Geometry(block_bits, key_bits)
        key = bytes(range(key_bits // 8))
        words = bytes_to_words(key)
        even = expand_even(words, expand_kt(words, geometry), geometry)
        assert sorted(even) == list(range(0, geometry.rounds + 1, 2))

        keys = expand_key(key, geometry)
        for i, rk in even.items():
            assert keys[i] == rk

    def test_round_keys_distinct(self):
        geometry = Geometry(256, 512)
        keys = expand_key(bytes(range(64)), geometry)
        as_tuples = {tuple(rk) for rk in keys}
        assert len(as_tuples) == len(keys)

    def test_deterministic(self):
        geometry = Geometry(128, 256)
        key = bytes(range(32))
        assert expand_key(key, geometry) == expand_key(key, geometry)

    def test_key_does_not_change(self):
        geometry = Geometry(128, 128)
        words = bytes_to_words(bytes(range(16)))
        original = list(words)
        expand_kt(words, geometry)
        expand_even(words, [0, 0], geometry)
        assert words == original

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="Key must be 16 bytes"):
            expand_key(bytes(32), Geometry(128, 128))


class TestKT:
    """Tweak constant derivation."""

    def test_depends_on_key(self):
        geometry = Geometry(128, 128)
        a = expand_kt(bytes_to_words(bytes(16)), geometry)
        b = expand_kt(bytes_to_words(bytes([1]) + bytes(15)), geometry)
        assert a != b

    def test_depends_on_geometry(self):
        """Same leading key words, different key width: different constant."""
        words = bytes_to_words(bytes(32))
        narrow = expand_kt(words[:2], Geometry(128, 128))
        wide = expand_kt(words, Geometry(128, 256))
        assert narrow != wide

    def test_uses_both_halves_of_wide_key(self):
        geometry = Geometry(128, 256)
        base = bytes_to_words(bytes(32))
        upper = list(base)
        upper[3] = 1
        assert expand_kt(base, geometry) != expand_kt(upper, geometry)

    def test_width(self):
        geometry = Geometry(512, 512)
        kt = expand_kt(bytes_to_words(bytes(64)), geometry)
        assert len(kt) == 8
