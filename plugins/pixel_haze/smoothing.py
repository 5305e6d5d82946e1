"""
Temporal Smoother

Exponential moving average that turns the discontinuous per-frame target
into continuous motion. The factor is a fixed per-frame weight, so the
effective time constant depends on the frame rate.
"""

import numpy as np


def ema(current, target, factor):
    """One EMA step: current + (target - current) * factor.

    Works for scalars and numpy arrays alike.
    """
    return current + (target - current) * factor


class ActivationSmoother:
    """Sole writer of a grid's activation array.

    Apply step() exactly once per cell per rendered frame, with the
    target computed from the current frame's time.
    """

    def __init__(self, factor=0.15):
        """
        Args:
            factor: Interpolation weight in (0, 1]. 1 tracks the target
                with no lag.
        """
        self.factor = factor

    def step(self, grid, target, rows=None):
        """Blend the stored activation toward target, in place.

        Args:
            grid: Grid whose activation is updated
            target: Array shaped like the selected rows of (rows, cols)
            rows: Optional row slice or index array; others stay frozen

        Returns:
            Read-only view of the updated rows
        """
        activation = grid.activation_for_update()
        if rows is None:
            rows = slice(None)
        current = activation[rows]
        updated = ema(current, np.asarray(target, dtype=np.float32), self.factor)
        activation[rows] = updated
        view = activation[rows].view()
        view.flags.writeable = False
        return view
