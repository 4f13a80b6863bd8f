"""Tests for block/key geometry."""

import dataclasses

import pytest

from kalyna.errors import UnsupportedBlockSizeError, UnsupportedKeySizeError
from kalyna.geometry import Geometry, ALLOWED_GEOMETRIES, list_geometries


class TestGeometry:
    """Geometry validation and derived values."""

    @pytest.mark.parametrize("block_bits,key_bits,nb,nk,rounds", [
        (128, 128, 2, 2, 10),
        (128, 256, 2, 4, 14),
        (256, 256, 4, 4, 14),
        (256, 512, 4, 8, 18),
        (512, 512, 8, 8, 18),
    ])
    def test_derived_values(self, block_bits, key_bits, nb, nk, rounds):
        g = Geometry(block_bits, key_bits)
        assert g.words_in_block == nb
        assert g.words_in_key == nk
        assert g.rounds == rounds
        assert g.block_bytes == block_bits // 8
        assert g.key_bytes == key_bits // 8

    @pytest.mark.parametrize("block_bits,key_bits", [
        (128, 512),
        (256, 128),
        (512, 128),
        (512, 256),
    ])
    def test_disallowed_pairs(self, block_bits, key_bits):
        with pytest.raises(UnsupportedKeySizeError):
            Geometry(block_bits, key_bits)

    def test_bad_block(self):
        with pytest.raises(UnsupportedBlockSizeError):
            Geometry(64, 128)

    def test_bad_key(self):
        with pytest.raises(UnsupportedKeySizeError, match="only 128/256/512"):
            Geometry(128, 192)

    def test_from_key_length(self):
        g = Geometry.from_key_length(256, 64)
        assert g == Geometry(256, 512)

    def test_frozen(self):
        g = Geometry(128, 128)
        with pytest.raises(dataclasses.FrozenInstanceError):
            g.block_bits = 256

    def test_name_and_dict(self):
        g = Geometry(128, 256)
        assert g.name == "Kalyna-128/256"
        d = g.to_dict()
        assert d["rounds"] == 14
        assert d["words_in_key"] == 4

    def test_list_geometries(self):
        geoms = list_geometries()
        assert [(g.block_bits, g.key_bits) for g in geoms] == list(ALLOWED_GEOMETRIES)
