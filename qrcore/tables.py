# -*- coding: utf-8 -*-
"""
QR Code Capacity Tables Module

Per-version error correction block tables (ISO/IEC 18004:2015 table 9) and
the codeword accounting derived from them.

Functions:
    get_num_raw_data_modules: Modules left for data and ECC after function patterns
    get_num_data_codewords: Data codewords available at a version and ECC level
    get_ecc_block_layout: Block count and ECC codewords per block
"""

from typing import Tuple

from .constants import MIN_VERSION, MAX_VERSION, ErrorCorrectionLevel


# Rows follow ErrorCorrectionLevel order (L, M, Q, H); index 0 is unused.
ECC_CODEWORDS_PER_BLOCK = (
    # Version: 0, 1,  2,  3,  4,  5,  6,  7,  8,  9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1,  7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # L
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),  # M
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Q
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # H
)

NUM_ERROR_CORRECTION_BLOCKS = (
    # Version: 0, 1, 2, 3, 4, 5, 6, 7, 8, 9,10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4, 4, 4, 4, 4, 6, 6, 6, 6, 7, 8, 8, 9, 9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),  # L
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5, 5, 8, 9, 9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),  # M
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8, 8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),  # Q
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),  # H
)


def _check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version out of range: {version}")


def get_ecc_block_layout(version: int, ecc_level: ErrorCorrectionLevel) -> Tuple[int, int]:
    """Return ``(num_blocks, ecc_codewords_per_block)``."""
    _check_version(version)
    row = ecc_level.ordinal
    return NUM_ERROR_CORRECTION_BLOCKS[row][version], ECC_CODEWORDS_PER_BLOCK[row][version]


def get_num_raw_data_modules(version: int) -> int:
    """
    Count the modules available for data and ECC bits at ``version``.

    Everything but finders with separators, format information, the dark
    module, timing patterns, alignment patterns and version information.
    Includes remainder bits, so the result may not be a multiple of 8.

    Example:
        >>> get_num_raw_data_modules(1)
        208
    """
    _check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    assert 208 <= result <= 29648
    return result


def get_num_data_codewords(version: int, ecc_level: ErrorCorrectionLevel) -> int:
    """Number of 8-bit data codewords (excluding ECC) the symbol can hold."""
    num_blocks, ecc_per_block = get_ecc_block_layout(version, ecc_level)
    return get_num_raw_data_modules(version) // 8 - ecc_per_block * num_blocks
