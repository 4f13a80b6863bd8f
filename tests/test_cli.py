"""Tests for the kalyna command-line interface."""

import json

from click.testing import CliRunner

from kalyna.cli import main

KEY_128 = "000102030405060708090a0b0c0d0e0f"
PT_128 = "101112131415161718191a1b1c1d1e1f"
CT_128 = "81bf1c7d779bac20e1c9ea39b4d2ad06"


class TestCli:
    """Command behaviour via click's CliRunner."""

    def test_list(self):
        result = CliRunner().invoke(main, ["list"])
        assert result.exit_code == 0
        assert "Kalyna-128/128" in result.output
        assert "Kalyna-512/512" in result.output
        assert "rounds=18" in result.output

    def test_encrypt(self):
        result = CliRunner().invoke(main, ["encrypt", "--key", KEY_128, "--pt", PT_128])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == CT_128

    def test_decrypt(self):
        result = CliRunner().invoke(main, ["decrypt", "--key", KEY_128, "--ct", CT_128])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == PT_128

    def test_encrypt_verbose(self):
        result = CliRunner().invoke(
            main, ["encrypt", "--key", KEY_128, "--pt", PT_128, "--verbose"]
        )
        assert result.exit_code == 0, result.output
        assert "Kalyna-128/128 encryption" in result.output
        assert "SubBytes" in result.output
        assert f"Ciphertext: {CT_128}" in result.output

    def test_encrypt_trace_file(self, tmp_path):
        trace_path = tmp_path / "trace.jsonl"
        result = CliRunner().invoke(
            main,
            ["encrypt", "--key", KEY_128, "--pt", PT_128, "--trace", str(trace_path)],
        )
        assert result.exit_code == 0, result.output
        lines = trace_path.read_text().strip().split("\n")
        assert len(lines) == 42
        assert json.loads(lines[0])["operation"] == "Input"

    def test_disallowed_key(self):
        result = CliRunner().invoke(
            main, ["encrypt", "--key", "00" * 64, "--pt", PT_128]
        )
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_block_length_mismatch(self):
        result = CliRunner().invoke(
            main, ["encrypt", "--block-bits", "256", "--key", "00" * 32, "--pt", PT_128]
        )
        assert result.exit_code == 1
        assert "Block must be 64 hex chars" in result.output

    def test_bad_block_size(self):
        result = CliRunner().invoke(
            main, ["encrypt", "--block-bits", "64", "--key", KEY_128, "--pt", PT_128]
        )
        assert result.exit_code == 1
        assert "Unsupported block length" in result.output

    def test_bad_hex(self):
        result = CliRunner().invoke(main, ["encrypt", "--key", "xyz", "--pt", PT_128])
        assert result.exit_code != 0
        assert "Invalid key hex" in result.output

    def test_selftest(self):
        result = CliRunner().invoke(main, ["selftest", "--verbose"])
        assert result.exit_code == 0, result.output
        assert "SELFTEST PASSED" in result.output
        assert "Kalyna-512/512 encrypt: PASS" in result.output

    def test_keyschedule_table(self):
        result = CliRunner().invoke(main, ["keyschedule", "--block-bits", "128", "--key", KEY_128])
        assert result.exit_code == 0, result.output
        assert "10 rounds, 11 round keys" in result.output
        assert "K10" in result.output

    def test_keyschedule_json(self):
        result = CliRunner().invoke(
            main, ["keyschedule", "--block-bits", "256", "--key", "00" * 64, "--json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["geometry"]["rounds"] == 18
        assert len(payload["round_keys"]) == 19
        assert all(len(rk) == 64 for rk in payload["round_keys"])

    def test_keyschedule_bad_pair(self):
        result = CliRunner().invoke(main, ["keyschedule", "--block-bits", "512", "--key", KEY_128])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_avalanche_json(self):
        result = CliRunner().invoke(
            main, ["avalanche", "--n", "10", "--seed", "3", "--json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["trials"] == 10
        assert payload["geometry"] == "Kalyna-128/128"

    def test_avalanche_summary(self):
        result = CliRunner().invoke(main, ["avalanche", "--n", "5", "--seed", "1"])
        assert result.exit_code == 0, result.output
        assert "avalanche over 5 trials" in result.output

    def test_debug_flag(self):
        result = CliRunner().invoke(
            main, ["--debug", "encrypt", "--key", KEY_128, "--pt", PT_128]
        )
        assert result.exit_code == 0, result.output
        assert CT_128 in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
