"""
GF(2^8) arithmetic for the DSTU 7624 diffusion layer.

Field: GF(2)[x] / (x^8 + x^4 + x^3 + x^2 + 1), i.e. reduction
polynomial 0x11D (not the AES polynomial 0x11B).
"""

REDUCTION_POLYNOMIAL = 0x11D


def xtime(a: int) -> int:
    """Multiply by x in GF(2^8)."""
    a <<= 1
    if a & 0x100:
        a ^= REDUCTION_POLYNOMIAL
    return a & 0xFF


def gf_mult(a: int, b: int) -> int:
    """Multiply two field elements (shift-and-add with reduction)."""
    a &= 0xFF
    b &= 0xFF
    result = 0
    for _ in range(8):
        if b & 1:
            result ^= a
        a = xtime(a)
        b >>= 1
    return result


def _build_mult_table(coefficient: int) -> bytes:
    return bytes(gf_mult(x, coefficient) for x in range(256))


# Lazily filled multiplication rows, one per distinct matrix coefficient
_MULT_TABLES: dict[int, bytes] = {}


def mult_table(coefficient: int) -> bytes:
    """Return the 256-entry table of x * coefficient."""
    table = _MULT_TABLES.get(coefficient)
    if table is None:
        table = _build_mult_table(coefficient)
        _MULT_TABLES[coefficient] = table
    return table


def matrix_multiply_column(matrix, column: bytes) -> bytes:
    """
    Left-multiply an 8-byte column by an 8x8 matrix over GF(2^8).

    out[row] = XOR over b of matrix[row][b] * column[b]

    Args:
        matrix: 8 rows of 8 coefficients
        column: 8 bytes (one state word, little-endian)

    Returns:
        8 bytes
    """
    out = bytearray(8)
    for row in range(8):
        coeffs = matrix[row]
        product = 0
        for b in range(8):
            product ^= mult_table(coeffs[b])[column[b]]
        out[row] = product
    return bytes(out)
