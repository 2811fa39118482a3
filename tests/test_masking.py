# -*- coding: utf-8 -*-
import numpy as np
import pytest

from qrcore.constants import ErrorCorrectionLevel as ECL
from qrcore.functional_areas import compute_format_bits, draw_format_bits
from qrcore.layer import Layer
from qrcore.masking import (
    MASK_FUNCTIONS, apply_mask, choose_and_apply_mask, evaluate_all_masks, mask_pattern,
)
from qrcore.penalties import calculate_penalty_score


def test_mask_pattern_matches_condition():
    for mask, condition in enumerate(MASK_FUNCTIONS):
        pattern = mask_pattern(mask, 9)
        for y in range(9):
            for x in range(9):
                assert pattern[y, x] == bool(condition(x, y))


def test_mask_pattern_orientation():
    # Mask 1 inverts whole rows, mask 2 whole columns
    assert mask_pattern(1, 5)[0].all()
    assert not mask_pattern(1, 5)[1].any()
    assert mask_pattern(2, 5)[:, 0].all()
    assert not mask_pattern(2, 5)[:, 1].any()


def test_mask_pattern_is_read_only():
    with pytest.raises(ValueError):
        mask_pattern(0, 5)[0, 0] = False


@pytest.mark.parametrize("mask", [-1, 8])
def test_mask_out_of_range(mask):
    with pytest.raises(ValueError):
        mask_pattern(mask, 5)
    with pytest.raises(ValueError):
        apply_mask(Layer.blank(5), mask)


@pytest.mark.parametrize("mask", range(8))
def test_apply_mask_twice_restores(mask):
    rng = np.random.default_rng(mask)
    canvas = rng.random((25, 25)) < 0.5
    protection = rng.random((25, 25)) < 0.3
    layer = Layer(canvas.copy(), protection)
    apply_mask(layer, mask)
    assert np.array_equal(layer.canvas[protection], canvas[protection])
    apply_mask(layer, mask)
    assert np.array_equal(layer.canvas, canvas)


def test_evaluate_all_masks_leaves_layer_untouched(unmasked_layer):
    before = unmasked_layer.copy()
    best_mask, best_score, scores = evaluate_all_masks(unmasked_layer, ECL.MEDIUM)
    assert np.array_equal(unmasked_layer.canvas, before.canvas)
    assert np.array_equal(unmasked_layer.protection, before.protection)
    assert sorted(scores) == list(range(8))
    assert best_score == min(scores.values())
    assert best_mask == min(m for m, s in scores.items() if s == best_score)


def test_evaluate_all_masks_scores_final_grids(unmasked_layer):
    _, _, scores = evaluate_all_masks(unmasked_layer, ECL.MEDIUM)
    for mask in range(8):
        trial = unmasked_layer.copy()
        apply_mask(trial, mask)
        draw_format_bits(trial, ECL.MEDIUM, mask)
        assert scores[mask] == calculate_penalty_score(trial.canvas)


def test_choose_auto_mask(unmasked_layer):
    best_mask, _, _ = evaluate_all_masks(unmasked_layer, ECL.MEDIUM)
    assert choose_and_apply_mask(unmasked_layer, ECL.MEDIUM) == best_mask


def test_choose_forced_mask_redraws_format(unmasked_layer):
    assert choose_and_apply_mask(unmasked_layer, ECL.MEDIUM, 5) == 5
    bits = compute_format_bits(ECL.MEDIUM, 5)
    for i in range(6):
        assert unmasked_layer.canvas[i, 8] == bool((bits >> i) & 1)


def test_choose_rejects_bad_mask(unmasked_layer):
    with pytest.raises(ValueError):
        choose_and_apply_mask(unmasked_layer, ECL.MEDIUM, 9)
