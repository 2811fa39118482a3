# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Draws the function patterns of a QR Code symbol (ISO/IEC 18004:2015
section 6.3) into a Layer, marking every module it touches as protected:
timing patterns, finder patterns with separators, alignment patterns,
format information and version information.

Functions:
    compute_alignment_centers: Alignment pattern center coordinates
    compute_format_bits: 15-bit format information word
    compute_version_bits: 18-bit version information word
    draw_function_patterns: Draw every function pattern into a layer
    draw_format_bits: (Re)draw both format information copies
    build_function_mask: Protection mask of a version's function modules
"""

from typing import List

import numpy as np

from .constants import MIN_VERSION, MAX_VERSION, ErrorCorrectionLevel
from .layer import Layer


FORMAT_GENERATOR = 0x537
FORMAT_XOR_MASK = 0x5412
VERSION_GENERATOR = 0x1F25


def symbol_size(version: int) -> int:
    return version * 4 + 17


def compute_alignment_centers(version: int) -> List[int]:
    """
    Calculate the center positions of alignment patterns for a QR version.

    The same list applies to both axes. Version 1 has none; otherwise there
    are ``version // 7 + 2`` positions, the first at 6, the last at
    ``size - 7`` and the rest evenly spaced backwards from the last one.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Ascending center coordinates

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
        >>> compute_alignment_centers(32)
        [6, 34, 60, 86, 112, 138]
    """
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Version out of range: {version}")
    if version == 1:
        return []

    num = version // 7 + 2
    if version == 32:
        step = 26
    else:
        # ceil((size - 13) / (num * 2 - 2)) * 2
        step = (version * 4 + num * 2 + 1) // (num * 2 - 2) * 2

    centers = [6]
    pos = symbol_size(version) - 7
    tail = []
    for _ in range(num - 1):
        tail.append(pos)
        pos -= step
    return centers + tail[::-1]


def compute_format_bits(ecc_level: ErrorCorrectionLevel, mask: int) -> int:
    """
    Return the 15-bit format word: 2-bit ECC code and 3-bit mask, a 10-bit
    BCH remainder, XORed with 0x5412.
    """
    data = ecc_level.format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_GENERATOR)
    bits = (data << 10 | rem) ^ FORMAT_XOR_MASK
    assert bits >> 15 == 0
    return bits


def compute_version_bits(version: int) -> int:
    """Return the 18-bit version word: 6-bit version and a 12-bit BCH remainder."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_GENERATOR)
    bits = version << 12 | rem
    assert bits >> 18 == 0
    return bits


def _bit(value: int, i: int) -> bool:
    return (value >> i) & 1 != 0


def draw_timing_patterns(layer: Layer) -> None:
    # Row 6 and column 6, dark on even indices
    for i in range(layer.size):
        layer.set_and_protect(6, i, i % 2 == 0)
        layer.set_and_protect(i, 6, i % 2 == 0)


def _draw_finder(layer: Layer, cx: int, cy: int) -> None:
    # 9x9 including the separator, parts may fall outside the grid
    for dy in range(-4, 5):
        for dx in range(-4, 5):
            dist = max(abs(dx), abs(dy))
            layer.set_and_protect_safe(cx + dx, cy + dy, dist not in (2, 4))


def draw_finder_patterns(layer: Layer) -> None:
    size = layer.size
    _draw_finder(layer, 3, 3)
    _draw_finder(layer, size - 4, 3)
    _draw_finder(layer, 3, size - 4)


def _draw_alignment(layer: Layer, cx: int, cy: int) -> None:
    for dy in range(-2, 3):
        for dx in range(-2, 3):
            layer.set_and_protect(cx + dx, cy + dy, max(abs(dx), abs(dy)) != 1)


def draw_alignment_patterns(layer: Layer, version: int) -> None:
    centers = compute_alignment_centers(version)
    last = len(centers) - 1
    for i, cx in enumerate(centers):
        for j, cy in enumerate(centers):
            # The three finder corners
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue
            _draw_alignment(layer, cx, cy)


def draw_format_bits(layer: Layer, ecc_level: ErrorCorrectionLevel, mask: int) -> None:
    """
    Draw both copies of the format information for ``mask``.

    Called with a placeholder mask while drawing the function patterns and
    again once the final mask is known.
    """
    size = layer.size
    bits = compute_format_bits(ecc_level, mask)

    # First copy, around the top-left finder
    for i in range(6):
        layer.set_and_protect(8, i, _bit(bits, i))
    layer.set_and_protect(8, 7, _bit(bits, 6))
    layer.set_and_protect(8, 8, _bit(bits, 7))
    layer.set_and_protect(7, 8, _bit(bits, 8))
    for i in range(9, 15):
        layer.set_and_protect(14 - i, 8, _bit(bits, i))

    # Second copy, split between the top-right and bottom-left finders
    for i in range(8):
        layer.set_and_protect(size - 1 - i, 8, _bit(bits, i))
    for i in range(8, 15):
        layer.set_and_protect(8, size - 15 + i, _bit(bits, i))
    layer.set_and_protect(8, size - 8, True)  # dark module


def draw_version_bits(layer: Layer, version: int) -> None:
    """Draw both 3x6 version information blocks (versions 7 and up only)."""
    if version < 7:
        return
    size = layer.size
    bits = compute_version_bits(version)
    for i in range(18):
        bit = _bit(bits, i)
        a = size - 11 + i % 3
        b = i // 3
        layer.set_and_protect(a, b, bit)
        layer.set_and_protect(b, a, bit)


def draw_function_patterns(layer: Layer, version: int, ecc_level: ErrorCorrectionLevel) -> None:
    """
    Draw and protect every function pattern of ``version``.

    Finder patterns overwrite parts of the timing patterns, so the drawing
    order matters. Format bits use mask 0 until the real mask is chosen.
    """
    draw_timing_patterns(layer)
    draw_finder_patterns(layer)
    draw_alignment_patterns(layer, version)
    draw_format_bits(layer, ecc_level, 0)
    draw_version_bits(layer, version)


def build_function_mask(version: int) -> np.ndarray:
    """
    Return the protection mask (True = function module) for ``version``.

    Example:
        >>> int(build_function_mask(1).sum())
        233
    """
    layer = Layer.blank(symbol_size(version))
    draw_function_patterns(layer, version, ErrorCorrectionLevel.LOW)
    return layer.protection
