# -*- coding: utf-8 -*-
"""
QR Code Codeword Placement Module

Splits data codewords into error correction blocks, appends Reed-Solomon
ECC to each block, interleaves the blocks and places the resulting bit
stream into the data area of a layer.

Functions:
    add_ecc_and_interleave: Final codeword sequence for a version and ECC level
    data_module_coords: Unprotected modules in placement order
    draw_codewords: Write codeword bits into the unprotected modules
"""

from typing import List, Sequence, Tuple

from .constants import ErrorCorrectionLevel
from .layer import Layer
from .reed_solomon import compute_divisor, compute_remainder
from .tables import get_ecc_block_layout, get_num_data_codewords, get_num_raw_data_modules


def add_ecc_and_interleave(data: Sequence[int], version: int, ecc_level: ErrorCorrectionLevel) -> bytes:
    """
    Append error correction codewords to the data and interleave the blocks.

    Blocks are either short or one data codeword longer; short blocks come
    first. The interleaved output takes byte i of every block in turn,
    skipping the missing data byte of short blocks.

    Args:
        data: Exactly ``get_num_data_codewords(version, ecc_level)`` bytes
        version (int): QR code version (1-40)
        ecc_level (ErrorCorrectionLevel): Error correction level

    Returns:
        bytes: ``get_num_raw_data_modules(version) // 8`` codewords

    Raises:
        ValueError: If the data length does not match the capacity
    """
    expected = get_num_data_codewords(version, ecc_level)
    if len(data) != expected:
        raise ValueError(f"Expected {expected} data codewords, got {len(data)}")

    num_blocks, block_ecc_len = get_ecc_block_layout(version, ecc_level)
    raw_codewords = get_num_raw_data_modules(version) // 8
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_len = raw_codewords // num_blocks

    divisor = compute_divisor(block_ecc_len)
    blocks: List[bytes] = []
    k = 0
    for i in range(num_blocks):
        length = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
        dat = bytes(data[k:k + length])
        k += length
        ecc = compute_remainder(dat, divisor)
        if i < num_short_blocks:
            # Placeholder keeps every block the same length
            dat += b'\x00'
        blocks.append(dat + ecc)
    assert k == len(data)

    result = bytearray()
    for i in range(len(blocks[0])):
        for j, block in enumerate(blocks):
            if i != short_block_len - block_ecc_len or j >= num_short_blocks:
                result.append(block[i])
    assert len(result) == raw_codewords
    return bytes(result)


def data_module_coords(layer: Layer) -> List[Tuple[int, int]]:
    """
    Return the ``(x, y)`` of every unprotected module in placement order.

    Column pairs are scanned from the right edge leftwards, skipping the
    vertical timing column, alternating upward and downward.
    """
    size = layer.size
    protection = layer.protection
    coords = []
    right = size - 1
    while right >= 1:
        if right == 6:
            right = 5
        upward = ((right + 1) & 2) == 0
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            for x in (right, right - 1):
                if not protection[y, x]:
                    coords.append((x, y))
        right -= 2
    return coords


def draw_codewords(layer: Layer, data: Sequence[int], version: int) -> None:
    """
    Write codeword bits, most significant bit first, into the data area.

    Remainder modules left over after the last codeword keep their initial
    light color.

    Raises:
        ValueError: If the codeword count does not fill the version's data area
    """
    expected = get_num_raw_data_modules(version) // 8
    if len(data) != expected:
        raise ValueError(f"Expected {expected} codewords, got {len(data)}")

    total_bits = len(data) * 8
    i = 0
    for x, y in data_module_coords(layer):
        if i >= total_bits:
            break
        layer.canvas[y, x] = (data[i >> 3] >> (7 - (i & 7))) & 1 != 0
        i += 1
    assert i == total_bits
