"""
Tests for the round transform stages and GF(2^8) arithmetic.

Verifies:
- S-box tables are permutations and the decryption tables invert them
- GF(2^8) multiply uses the 0x11D polynomial
- MDS and inverse MDS matrices are mutual inverses
- ShiftRows byte movement for every column count
- Every stage is undone by its inverse
"""

import random

import pytest

from kalyna.gf import REDUCTION_POLYNOMIAL, gf_mult, xtime, matrix_multiply_column
from kalyna.round_transform import (
    sub_bytes,
    inv_sub_bytes,
    shift_rows,
    inv_shift_rows,
    mix_columns,
    inv_mix_columns,
    add_round_key,
    sub_round_key,
    xor_round_key,
    forward_round,
    inverse_round,
)
from kalyna.tables import SBOXES, INV_SBOXES, MDS_MATRIX, MDS_INV_MATRIX
from kalyna.utils import WORD_MASK, bytes_to_words, words_to_bytes


def _random_state(rnd: random.Random, columns: int) -> list[int]:
    return [rnd.getrandbits(64) for _ in range(columns)]


COLUMNS = [2, 4, 8]


class TestTables:
    """S-box and MDS constants."""

    @pytest.mark.parametrize("index", range(4))
    def test_sbox_is_permutation(self, index):
        assert sorted(SBOXES[index]) == list(range(256))

    @pytest.mark.parametrize("index", range(4))
    def test_inverse_sbox(self, index):
        sbox = SBOXES[index]
        inv = INV_SBOXES[index]
        for x in range(256):
            assert inv[sbox[x]] == x, f"S-box {index} mismatch at 0x{x:02x}"

    def test_sbox_first_entries(self):
        assert SBOXES[0][0] == 0xA8
        assert SBOXES[1][0] == 0xCE

    def test_mds_shape(self):
        assert len(MDS_MATRIX) == 8
        assert all(len(row) == 8 for row in MDS_MATRIX)
        assert len(MDS_INV_MATRIX) == 8
        assert all(len(row) == 8 for row in MDS_INV_MATRIX)

    def test_mds_circulant(self):
        for i in range(1, 8):
            prev = MDS_MATRIX[i - 1]
            assert MDS_MATRIX[i] == prev[-1:] + prev[:-1]


class TestGaloisField:
    """GF(2^8) mod x^8 + x^4 + x^3 + x^2 + 1."""

    def test_polynomial(self):
        assert REDUCTION_POLYNOMIAL == 0x11D

    def test_xtime_reduction(self):
        assert xtime(0x80) == 0x1D
        assert xtime(0x01) == 0x02
        assert xtime(0xFF) == ((0xFF << 1) ^ 0x11D) & 0xFF

    def test_identity_and_zero(self):
        for x in range(256):
            assert gf_mult(x, 1) == x
            assert gf_mult(1, x) == x
            assert gf_mult(x, 0) == 0

    def test_commutative(self):
        rnd = random.Random(1)
        for _ in range(200):
            a, b = rnd.randrange(256), rnd.randrange(256)
            assert gf_mult(a, b) == gf_mult(b, a)

    def test_distributive(self):
        rnd = random.Random(2)
        for _ in range(200):
            a, b, c = rnd.randrange(256), rnd.randrange(256), rnd.randrange(256)
            assert gf_mult(a, b ^ c) == gf_mult(a, b) ^ gf_mult(a, c)

    def test_small_products(self):
        assert gf_mult(0x02, 0x80) == 0x1D
        assert gf_mult(0x03, 0x03) == 0x05

    def test_mds_inverse_is_inverse(self):
        rnd = random.Random(3)
        for _ in range(50):
            column = bytes(rnd.randrange(256) for _ in range(8))
            mixed = matrix_multiply_column(MDS_MATRIX, column)
            assert matrix_multiply_column(MDS_INV_MATRIX, mixed) == column

    def test_unit_column(self):
        """Column e_0 picks out the first matrix column."""
        column = bytes([1, 0, 0, 0, 0, 0, 0, 0])
        out = matrix_multiply_column(MDS_MATRIX, column)
        assert out == bytes(MDS_MATRIX[row][0] for row in range(8))


class TestShiftRows:
    """ShiftRows byte movement."""

    def test_two_columns(self):
        state = bytes_to_words(bytes(range(16)))
        out = words_to_bytes(shift_rows(state))
        assert list(out) == [0, 1, 2, 3, 12, 13, 14, 15, 8, 9, 10, 11, 4, 5, 6, 7]

    def test_four_columns(self):
        state = bytes_to_words(bytes(range(32)))
        out = words_to_bytes(shift_rows(state))
        for row in range(8):
            shift = row // 2
            for col in range(4):
                assert out[row + ((col + shift) % 4) * 8] == row + col * 8

    def test_eight_columns(self):
        state = bytes_to_words(bytes(range(64)))
        out = words_to_bytes(shift_rows(state))
        for row in range(8):
            for col in range(8):
                assert out[row + ((col + row) % 8) * 8] == row + col * 8

    def test_row_zero_fixed(self):
        rnd = random.Random(4)
        for columns in COLUMNS:
            state = _random_state(rnd, columns)
            before = words_to_bytes(state)
            after = words_to_bytes(shift_rows(state))
            assert after[0::8] == before[0::8]

    def test_unsupported_column_count(self):
        with pytest.raises(ValueError, match="2, 4 or 8 columns"):
            shift_rows([0, 0, 0])


class TestStageInverses:
    """Each stage followed by its inverse is the identity."""

    @pytest.mark.parametrize("columns", COLUMNS)
    def test_sub_bytes(self, columns):
        state = _random_state(random.Random(columns), columns)
        assert inv_sub_bytes(sub_bytes(state)) == state

    @pytest.mark.parametrize("columns", COLUMNS)
    def test_shift_rows(self, columns):
        state = _random_state(random.Random(columns + 1), columns)
        assert inv_shift_rows(shift_rows(state)) == state
        assert shift_rows(inv_shift_rows(state)) == state

    @pytest.mark.parametrize("columns", COLUMNS)
    def test_mix_columns(self, columns):
        state = _random_state(random.Random(columns + 2), columns)
        assert inv_mix_columns(mix_columns(state)) == state

    @pytest.mark.parametrize("columns", COLUMNS)
    def test_round(self, columns):
        state = _random_state(random.Random(columns + 3), columns)
        assert inverse_round(forward_round(state)) == state

    @pytest.mark.parametrize("columns", COLUMNS)
    def test_key_injection(self, columns):
        rnd = random.Random(columns + 4)
        state = _random_state(rnd, columns)
        key = _random_state(rnd, columns)
        assert sub_round_key(add_round_key(state, key), key) == state
        assert xor_round_key(xor_round_key(state, key), key) == state


class TestStages:
    """Stage-level behaviour."""

    def test_sub_bytes_position_dependent(self):
        state = [0, 0]
        out = words_to_bytes(sub_bytes(state))
        expected = bytes(SBOXES[i % 4][0] for i in range(16))
        assert out == expected

    def test_add_wraps_modulo(self):
        assert add_round_key([WORD_MASK, 1], [1, 2]) == [0, 3]

    def test_sub_wraps_modulo(self):
        assert sub_round_key([0, 5], [1, 2]) == [WORD_MASK, 3]

    def test_add_differs_from_xor(self):
        state = [0x0101010101010101, 0]
        key = [0x0101010101010101, 0]
        assert add_round_key(state, key) != xor_round_key(state, key)

    def test_stages_return_new_lists(self):
        state = [1, 2]
        sub_bytes(state)
        shift_rows(state)
        mix_columns(state)
        assert state == [1, 2]
