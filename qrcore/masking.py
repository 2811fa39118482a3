# -*- coding: utf-8 -*-
"""
QR Code Masking Module

The eight data mask patterns of ISO/IEC 18004:2015 section 7.8.2 and the
automatic mask selection by lowest penalty score.

Functions:
    mask_pattern: Boolean grid of modules a mask inverts
    apply_mask: XOR a mask into the unprotected modules of a layer
    evaluate_all_masks: Penalty score of every mask on disposable copies
    choose_and_apply_mask: Apply the requested or best mask to a layer
"""

import logging
from functools import lru_cache
from typing import Dict, Optional, Tuple

import numpy as np

from .constants import ErrorCorrectionLevel
from .functional_areas import draw_format_bits
from .layer import Layer
from .penalties import calculate_penalty_score


logger = logging.getLogger(__name__)

# Condition on (x, y) = (column, row) under which a module is inverted
MASK_FUNCTIONS = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)

AUTO_MASK = -1


def _check_mask(mask: int) -> None:
    if not 0 <= mask <= 7:
        raise ValueError(f"Mask value out of range: {mask}")


@lru_cache(maxsize=None)
def mask_pattern(mask: int, size: int) -> np.ndarray:
    """
    Return a read-only ``size x size`` grid, True where ``mask`` inverts.

    Indexed as ``[y, x]`` like the layer arrays.
    """
    _check_mask(mask)
    y, x = np.indices((size, size))
    pattern = np.asarray(MASK_FUNCTIONS[mask](x, y), dtype=bool)
    pattern.setflags(write=False)
    return pattern


def apply_mask(layer: Layer, mask: int) -> None:
    """
    XOR the mask pattern into every unprotected module of the layer.

    Applying the same mask twice restores the original canvas.

    Raises:
        ValueError: If mask is not in 0..7
    """
    _check_mask(mask)
    layer.canvas ^= mask_pattern(mask, layer.size) & ~layer.protection


def evaluate_all_masks(layer: Layer, ecc_level: ErrorCorrectionLevel) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) on copies of an unmasked layer.

    Each candidate gets its own copy with the mask applied and matching
    format bits drawn; the layer passed in is left untouched.

    Args:
        layer (Layer): Layer with function patterns and codewords, unmasked
        ecc_level (ErrorCorrectionLevel): Level written into the format bits

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores),
            ties resolved in favour of the lowest mask number

    Example:
        >>> best_mask, best_score, scores = evaluate_all_masks(layer, ErrorCorrectionLevel.LOW)
        >>> scores[best_mask] == min(scores.values())
        True
    """
    scores = {}
    best_mask = None
    best_score = None

    for mask in range(8):
        trial = layer.copy()
        apply_mask(trial, mask)
        draw_format_bits(trial, ecc_level, mask)
        score = calculate_penalty_score(trial.canvas)
        scores[mask] = score

        if best_score is None or score < best_score:
            best_score = score
            best_mask = mask

    return best_mask, best_score, scores


def choose_and_apply_mask(layer: Layer, ecc_level: ErrorCorrectionLevel,
                          mask: Optional[int] = AUTO_MASK) -> int:
    """
    Apply the requested mask, or the lowest-penalty one when mask is -1 or
    None, to an unmasked layer and redraw its format bits.

    Returns:
        int: The mask actually applied (0-7)
    """
    if mask is None or mask == AUTO_MASK:
        mask, score, scores = evaluate_all_masks(layer, ecc_level)
        logger.debug(f"Mask scores {scores}, selected mask {mask} (score: {score})")
    else:
        _check_mask(mask)

    assert 0 <= mask <= 7
    apply_mask(layer, mask)
    draw_format_bits(layer, ecc_level, mask)
    return mask
