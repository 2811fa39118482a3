# -*- coding: utf-8 -*-
"""
Reed-Solomon Error Correction Module

Arithmetic over GF(2^8) with modulus x^8 + x^4 + x^3 + x^2 + 1 (0x11D)
and generator element 0x02, as used by QR Code error correction.

Functions:
    multiply: Carry-less product of two field elements
    compute_divisor: Generator polynomial of a given degree
    compute_remainder: ECC codewords of a data block
"""

from functools import lru_cache
from typing import Sequence, Tuple


GF_MODULUS = 0x11D


def multiply(x: int, y: int) -> int:
    """
    Multiply two GF(2^8) elements (Russian peasant multiplication).

    Raises:
        ValueError: If either operand is not a byte
    """
    if x >> 8 != 0 or y >> 8 != 0:
        raise ValueError("Byte out of range")
    z = 0
    for i in reversed(range(8)):
        z = (z << 1) ^ ((z >> 7) * GF_MODULUS)
        z ^= ((y >> i) & 1) * x
    assert z >> 8 == 0
    return z


@lru_cache(maxsize=None)
def compute_divisor(degree: int) -> Tuple[int, ...]:
    """
    Return the generator polynomial (x - 2^0)(x - 2^1)...(x - 2^(degree-1)).

    Coefficients are ordered from highest to lowest power and the leading
    term, always 1, is dropped, so the result has ``degree`` entries.

    Example:
        >>> compute_divisor(2)
        (3, 2)
    """
    if not 1 <= degree <= 255:
        raise ValueError(f"Degree out of range: {degree}")
    # Start with the monomial x^0
    result = [0] * (degree - 1) + [1]
    root = 1
    for _ in range(degree):
        # Multiply the current product by (x - root)
        for j in range(degree):
            result[j] = multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = multiply(root, 0x02)
    return tuple(result)


def compute_remainder(data: Sequence[int], divisor: Sequence[int]) -> bytes:
    """
    Divide the data polynomial by the divisor and return the remainder.

    Args:
        data: Data codewords, highest degree coefficient first
        divisor: Generator polynomial as returned by compute_divisor

    Returns:
        bytes: ``len(divisor)`` error correction codewords
    """
    result = [0] * len(divisor)
    for b in data:
        factor = b ^ result.pop(0)
        result.append(0)
        for i, coef in enumerate(divisor):
            result[i] ^= multiply(coef, factor)
    return bytes(result)
