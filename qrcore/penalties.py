# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

Scores a module grid with the four penalty rules of ISO/IEC 18004:2015
section 7.8.3.1. The mask with the lowest total penalty is selected.

Functions:
    penalty_N1: Runs of five or more same-colored modules
    penalty_N2: 2x2 blocks of one color
    penalty_N3: Finder-like 1:1:3:1:1 patterns with light surroundings
    penalty_N4: Dark/light balance
    calculate_penalty_score: Total penalty score
"""

from typing import List, Sequence

import numpy as np

from .constants import PENALTY_N1, PENALTY_N2, PENALTY_N3, PENALTY_N4


def _lines(grid: np.ndarray) -> List[List[bool]]:
    """All rows followed by all columns, as plain lists."""
    return grid.tolist() + grid.T.tolist()


def penalty_N1(grid: np.ndarray) -> int:
    """
    Calculate penalty for adjacent modules in runs (Rule N1).

    A run of exactly five same-colored modules in a row or column scores 3,
    and every further module of the same run adds 1.

    Args:
        grid (np.ndarray): Square boolean module grid (True=dark)

    Returns:
        int: Penalty score for rule N1
    """
    score = 0
    for line in _lines(grid):
        run_color = None
        run = 0
        for color in line:
            if color == run_color:
                run += 1
                if run == 5:
                    score += PENALTY_N1
                elif run > 5:
                    score += 1
            else:
                run_color = color
                run = 1
    return score


def penalty_N2(grid: np.ndarray) -> int:
    """Add 3 for every 2x2 block (overlapping anchors) whose modules share one color."""
    top_left = grid[:-1, :-1]
    same = (top_left == grid[:-1, 1:]) & (top_left == grid[1:, :-1]) & (top_left == grid[1:, 1:])
    return int(same.sum()) * PENALTY_N2


def _add_history(history: List[int], run_length: int) -> None:
    history.pop()
    history.insert(0, run_length)


def _count_finder_patterns(history: Sequence[int], size: int) -> int:
    # history[0] is the light run just closed; 0, 1 or 2 matches
    n = history[1]
    assert n <= size * 3
    core = n > 0 and history[2] == n and history[3] == n * 3 and history[4] == n and history[5] == n
    return (int(core and history[0] >= n * 4 and history[6] >= n)
            + int(core and history[6] >= n * 4 and history[0] >= n))


def _finder_penalty_line(line: Sequence[bool], size: int) -> int:
    history = [0] * 7
    count = 0
    run_color = False
    run = 0
    pad = size  # light border before the line
    for color in line:
        if color == run_color:
            run += 1
        else:
            _add_history(history, run + pad)
            pad = 0
            if not run_color:
                count += _count_finder_patterns(history, size)
            run_color = color
            run = 1

    # Close the last run, then add the light border after the line
    run += pad
    if run_color:
        _add_history(history, run)
        run = 0
    _add_history(history, run + size)
    return count + _count_finder_patterns(history, size)


def penalty_N3(grid: np.ndarray) -> int:
    """
    Calculate penalty for finder-like patterns (Rule N3).

    Tracks the last seven run lengths of each row and column, with a virtual
    light border of ``size`` modules at both ends, and adds 40 for every
    dark:light:dark:light:dark run ratio of 1:1:3:1:1 that has at least four
    modules worth of light on one side.
    """
    size = grid.shape[0]
    return sum(_finder_penalty_line(line, size) for line in _lines(grid)) * PENALTY_N3


def penalty_N4(grid: np.ndarray) -> int:
    """
    Calculate penalty for dark/light module ratio (Rule N4).

    Finds the smallest k >= 0 with (45-5k)% <= dark/total <= (55+5k)% and
    scores 10 * k. The symbol side is odd, so the ratio is never exactly 1/2.
    """
    total = grid.size
    dark = int(grid.sum())
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    return k * PENALTY_N4


def calculate_penalty_score(grid: np.ndarray) -> int:
    """
    Calculate the total mask penalty score for a module grid.

    Args:
        grid (np.ndarray): Square boolean module grid (True=dark)

    Returns:
        int: Total penalty score (lower is better)
    """
    return penalty_N1(grid) + penalty_N2(grid) + penalty_N3(grid) + penalty_N4(grid)
