"""
PixelGridEngine — procedural animation core

Owns the noise fields, the palette and the grid. Each render_frame call
runs compositor -> smoother -> resolver over every visible row and
returns a Frame for the host to draw. The engine never touches a
drawing surface.

Usage:
    from pixel_haze.engine import PixelGridEngine
    from pixel_haze.params import make_params
    params = make_params()
    engine = PixelGridEngine()
    engine.build(800, 600, params)
    frame = engine.render_frame(16.7, params)
"""

import numpy as np

from .compositor import compose_targets
from .grid_layout import build_grid
from .noise_field import make_fields
from .palette import Palette
from .resolver import resolve_cells, row_mask
from .smoothing import ActivationSmoother

# Host time is in milliseconds; the noise animates in seconds
TIME_SCALE = 0.001


class Frame:
    """Draw list for one rendered frame.

    Parallel arrays hold one entry per visible cell: pixel position,
    RGB fill and alpha. Masked-out rows contribute nothing.
    """

    def __init__(self, background, pitch, cell_size, xs, ys, colors, alphas, t=0.0):
        self.background = background
        self.pitch = pitch
        self.cell_size = cell_size
        self.xs = xs            # (N,) int32 pixel x
        self.ys = ys            # (N,) int32 pixel y
        self.colors = colors    # (N, 3) uint8
        self.alphas = alphas    # (N,) float32
        self.t = t

    def __len__(self):
        return len(self.xs)

    def rects(self):
        """Yield ((x, y, w, h), (r, g, b), alpha) per visible cell."""
        s = self.cell_size
        for i in range(len(self.xs)):
            c = self.colors[i]
            yield ((int(self.xs[i]), int(self.ys[i]), s, s),
                   (int(c[0]), int(c[1]), int(c[2])),
                   float(self.alphas[i]))


def _empty_frame(background, pitch, cell_size, t):
    return Frame(background, pitch, cell_size,
                 np.zeros(0, dtype=np.int32), np.zeros(0, dtype=np.int32),
                 np.zeros((0, 3), dtype=np.uint8), np.zeros(0, dtype=np.float32),
                 t=t)


class PixelGridEngine:
    """Animated pixel grid: stateless noise plus retained activation."""

    def __init__(self):
        self.macro, self.micro = make_fields()
        self.palette = Palette()
        self.grid = None
        self.smoother = ActivationSmoother()
        self.width = 0
        self.height = 0
        self.frame_count = 0

    def build(self, width, height, params):
        """(Re)build the grid for a surface size. Discards activation."""
        p = dict(params)
        self.width = width
        self.height = height
        self.palette.refresh(p)
        self.grid = build_grid(width, height, p)
        self.frame_count = 0
        return self.grid

    def refresh_palette(self, params):
        """Re-parse palette colors without touching the grid."""
        self.palette.refresh(dict(params))

    def render_frame(self, time_value, params, motion_enabled=True):
        """Advance the animation by one frame.

        Args:
            time_value: Monotonic host time in milliseconds
            params: Caller-owned parameter dict (snapshotted here)
            motion_enabled: False freezes time at 0 (reduced motion)

        Returns:
            Frame with one entry per visible cell
        """
        p = dict(params)
        t = time_value * TIME_SCALE if motion_enabled else 0.0
        grid = self.grid
        background = self.palette.bg

        if grid is None or grid.cell_count == 0:
            return _empty_frame(background, p["cell_size"] + p["gap"],
                                p["cell_size"], t)

        mask = row_mask(grid.rows, p)
        visible = np.nonzero(mask > 0)[0]
        if visible.size == 0:
            self.frame_count += 1
            return _empty_frame(background, grid.pitch, grid.cell_size, t)

        # Mask rises monotonically with row index, so visible rows are a suffix
        rows = slice(int(visible[0]), grid.rows)
        ys = np.arange(grid.rows)[rows]
        xs = np.arange(grid.cols)

        bias = grid.as_rows(grid.bias)[rows]
        target = compose_targets(xs, ys, t, bias, p, self.macro, self.micro,
                                 (p["advect_vx"], p["advect_vy"]))

        self.smoother.factor = p["smoothing"]
        current = self.smoother.step(grid, target, rows)

        color_class = grid.as_rows(grid.color_class)[rows]
        cell_mask = np.repeat(mask[rows], grid.cols)
        colors, alphas = resolve_cells(color_class.ravel(), current.ravel(),
                                       cell_mask, self.palette, p)

        gx, gy = np.meshgrid(xs, ys)
        self.frame_count += 1
        return Frame(background, grid.pitch, grid.cell_size,
                     (gx.ravel() * grid.pitch).astype(np.int32),
                     (gy.ravel() * grid.pitch).astype(np.int32),
                     colors, alphas, t=t)

    @property
    def stats(self):
        s = self.grid.stats if self.grid is not None else {
            "cols": 0, "rows": 0, "cells": 0, "accent_a": 0, "accent_b": 0,
            "accent_pct": 0.0, "mean_activation": 0.0,
        }
        s["frames"] = self.frame_count
        return s
