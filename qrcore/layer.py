# -*- coding: utf-8 -*-
"""
Symbol construction grid.

A Layer pairs the module colors (canvas, True = dark) with a protection mask
flagging function modules, which masking and codeword placement never touch.
Both are square numpy boolean arrays indexed as ``[y, x]``.
"""

import numpy as np


class Layer:
    """Canvas plus protection mask for a symbol under construction."""

    def __init__(self, canvas: np.ndarray, protection: np.ndarray):
        if canvas.shape != protection.shape or canvas.ndim != 2 or canvas.shape[0] != canvas.shape[1]:
            raise ValueError("Canvas and protection mask must be equal-size squares")
        self.canvas = canvas
        self.protection = protection

    @classmethod
    def blank(cls, size: int) -> "Layer":
        """All-white layer with nothing protected."""
        return cls(np.zeros((size, size), dtype=bool), np.zeros((size, size), dtype=bool))

    @property
    def size(self) -> int:
        return self.canvas.shape[0]

    def copy(self) -> "Layer":
        return Layer(self.canvas.copy(), self.protection.copy())

    def set(self, x: int, y: int, dark: bool) -> None:
        self.canvas[y, x] = dark

    def set_and_protect(self, x: int, y: int, dark: bool) -> None:
        self.canvas[y, x] = dark
        self.protection[y, x] = True

    def set_and_protect_safe(self, x: int, y: int, dark: bool) -> None:
        """Like set_and_protect, but ignores coordinates outside the grid."""
        if 0 <= x < self.size and 0 <= y < self.size:
            self.set_and_protect(x, y, dark)
