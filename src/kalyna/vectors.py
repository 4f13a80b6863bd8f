"""Published DSTU 7624 known-answer vectors and validation helpers."""

from __future__ import annotations

from .engine import encrypt_block, decrypt_block


def _seq(start: int, length: int) -> bytes:
    """Ascending byte run start, start+1, ... as used by the standard's examples."""
    return bytes(range(start, start + length))


def _rev(start: int, length: int) -> bytes:
    """Descending byte run ending at ``start``."""
    return bytes(reversed(range(start, start + length)))


# DSTU 7624:2014 examples, encryption direction
ENCRYPTION_TEST_VECTORS = [
    {
        "name": "Kalyna-128/128",
        "block_bits": 128,
        "key": _seq(0x00, 16),
        "plaintext": _seq(0x10, 16),
        "ciphertext": bytes.fromhex("81bf1c7d779bac20e1c9ea39b4d2ad06"),
    },
    {
        "name": "Kalyna-128/256",
        "block_bits": 128,
        "key": _seq(0x00, 32),
        "plaintext": _seq(0x20, 16),
        "ciphertext": bytes.fromhex("58ec3e091000158a1148f7166f334f14"),
    },
    {
        "name": "Kalyna-256/256",
        "block_bits": 256,
        "key": _seq(0x00, 32),
        "plaintext": _seq(0x20, 32),
        "ciphertext": bytes.fromhex(
            "f66e3d570ec92135aedae323dcbd2a8c"
            "a03963ec206a0d5a88385c24617fd92c"
        ),
    },
    {
        "name": "Kalyna-256/512",
        "block_bits": 256,
        "key": _seq(0x00, 64),
        "plaintext": _seq(0x40, 32),
        "ciphertext": bytes.fromhex(
            "606990e9e6b7b67a4bd6d893d72268b7"
            "8e02c83c3cd7e102fd2e74a8fdfe5dd9"
        ),
    },
    {
        "name": "Kalyna-512/512",
        "block_bits": 512,
        "key": _seq(0x00, 64),
        "plaintext": _seq(0x40, 64),
        "ciphertext": bytes.fromhex(
            "4a26e31b811c356aa61dd6ca0596231a"
            "67ba8354aa47f3a13e1deec320eb56b8"
            "95d0f417175bab662fd6f134bb15c86c"
            "cb906a26856efeb7c5bc6472940dd9d9"
        ),
    },
]

# DSTU 7624:2014 examples, decryption direction
DECRYPTION_TEST_VECTORS = [
    {
        "name": "Kalyna-128/128",
        "block_bits": 128,
        "key": _rev(0x00, 16),
        "ciphertext": _rev(0x10, 16),
        "plaintext": bytes.fromhex("7291ef2b470cc7846f09c2303973dad7"),
    },
    {
        "name": "Kalyna-256/256",
        "block_bits": 256,
        "key": _rev(0x00, 32),
        "ciphertext": _rev(0x20, 32),
        "plaintext": bytes.fromhex(
            "7fc5237896674e8603c1e9b03f8b4ba3"
            "ab5b7c592c3fc3d361edd12586b20fe3"
        ),
    },
]


def validate_against_vectors(vec: dict, direction: str = "encrypt") -> tuple[bool, str]:
    """
    Run one known-answer vector.

    Args:
        vec: entry of ENCRYPTION_TEST_VECTORS or DECRYPTION_TEST_VECTORS
        direction: "encrypt" or "decrypt"

    Returns:
        Tuple of (is_correct, error_detail)
    """
    if direction == "encrypt":
        expected = vec["ciphertext"]
        got = encrypt_block(vec["key"], vec["plaintext"])
    elif direction == "decrypt":
        expected = vec["plaintext"]
        got = decrypt_block(vec["key"], vec["ciphertext"])
    else:
        raise ValueError(f"Unknown direction: {direction}")

    if got == expected:
        return True, ""
    else:
        return False, (
            f"{vec['name']} {direction} mismatch: expected {expected.hex()}, "
            f"got {got.hex()}"
        )


def run_known_answer_tests() -> list[tuple[str, str, bool, str]]:
    """
    Run every published vector in both directions.

    Returns:
        List of (name, direction, passed, error_detail)
    """
    results = []
    for vec in ENCRYPTION_TEST_VECTORS:
        passed, detail = validate_against_vectors(vec, "encrypt")
        results.append((vec["name"], "encrypt", passed, detail))
    for vec in DECRYPTION_TEST_VECTORS:
        passed, detail = validate_against_vectors(vec, "decrypt")
        results.append((vec["name"], "decrypt", passed, detail))
    return results
