"""
Grid Layout Builder

Computes the cell grid for a surface and assigns every cell a stable
bias and a color class. Accents are kept sparse by refusing an accent
next to an already-placed accent (checked against the cells visited
before it in raster order only).
"""

import math
import random

import numpy as np

from .params import pitch_of

BASE = 0
ACCENT_A = 1
ACCENT_B = 2

# Seed is constant across rebuilds so the layout is reproducible per shape
LAYOUT_SEED = "grid-layout-fixed"

NEIGHBOR_RADIUS = 1


def _read_only(arr):
    view = arr.view()
    view.flags.writeable = False
    return view


class Grid:
    """Cell layout plus the retained activation state.

    bias and color_class never change after build. activation is the
    only mutable array; it is handed out read-only, and the smoother
    writes through activation_for_update().
    """

    def __init__(self, cols, rows, pitch, cell_size, color_class, bias):
        self.cols = cols
        self.rows = rows
        self.pitch = pitch
        self.cell_size = cell_size
        self._color_class = color_class
        self._bias = bias
        self._activation = np.zeros(cols * rows, dtype=np.float32)
        color_class.flags.writeable = False
        bias.flags.writeable = False

    @property
    def cell_count(self):
        return self.cols * self.rows

    @property
    def color_class(self):
        return self._color_class

    @property
    def bias(self):
        return self._bias

    @property
    def activation(self):
        return _read_only(self._activation)

    def activation_for_update(self):
        """Writable (rows, cols) view for the temporal smoother."""
        return self._activation.reshape(self.rows, self.cols)

    def as_rows(self, arr):
        """Reshape a flat per-cell array to (rows, cols)."""
        return arr.reshape(self.rows, self.cols)

    @property
    def stats(self):
        n = self.cell_count
        accent_a = int((self._color_class == ACCENT_A).sum())
        accent_b = int((self._color_class == ACCENT_B).sum())
        return {
            "cols": self.cols,
            "rows": self.rows,
            "cells": n,
            "accent_a": accent_a,
            "accent_b": accent_b,
            "accent_pct": (accent_a + accent_b) / n * 100 if n else 0.0,
            "mean_activation": float(self._activation.mean()) if n else 0.0,
        }


def grid_shape(width, height, pitch):
    """(cols, rows) covering the surface; zero for degenerate dimensions."""
    if width <= 0 or height <= 0 or pitch <= 0:
        return 0, 0
    return math.ceil(width / pitch), math.ceil(height / pitch)


def half_neighborhood_has_accent(color_class, cols, x, y):
    """True if any already-visited neighbor of (x, y) is not BASE.

    Visited neighbors are the cell to the left and the three cells in
    the row above (up-left, up, up-right).
    """
    for dy in range(-NEIGHBOR_RADIUS, 1):
        # Current row: only columns strictly to the left
        max_dx = -1 if dy == 0 else NEIGHBOR_RADIUS
        ny = y + dy
        if ny < 0:
            continue
        for dx in range(-NEIGHBOR_RADIUS, max_dx + 1):
            nx = x + dx
            if 0 <= nx < cols and color_class[ny * cols + nx] != BASE:
                return True
    return False


def build_grid(width, height, params):
    """Build the grid for a surface of the given size.

    Args:
        width: Surface width in pixels
        height: Surface height in pixels
        params: Parameter dict (cell_size, gap, accent probabilities)

    Returns:
        Grid with activation reset to 0
    """
    cell_size = params["cell_size"]
    pitch = pitch_of(params)
    prob_a = params["accent_a_prob"]
    prob_b = params["accent_b_prob"]

    cols, rows = grid_shape(width, height, pitch)
    n = cols * rows

    color_class = np.zeros(n, dtype=np.uint8)
    bias = np.zeros(n, dtype=np.float32)

    rng = random.Random(LAYOUT_SEED)

    for i in range(n):
        bias[i] = rng.random() * 2 - 1

        x = i % cols
        y = i // cols
        if half_neighborhood_has_accent(color_class, cols, x, y):
            continue

        r = rng.random()
        if r < prob_a:
            color_class[i] = ACCENT_A
        elif r < prob_a + prob_b:
            color_class[i] = ACCENT_B

    return Grid(cols, rows, pitch, cell_size, color_class, bias)
