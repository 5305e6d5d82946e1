"""
Seeded 3D coherent noise fields.

Thin wrapper around OpenSimplex so each field is seeded from a readable
string ("macro", "micro") rather than a magic integer. Sampling never
advances any state: the same (x, y, t) always returns the same value.
"""

import hashlib

import numpy as np
from opensimplex import OpenSimplex

MACRO_SEED = "macro"
MICRO_SEED = "micro"


def seed_from_string(name):
    """Stable 63-bit integer seed derived from a string."""
    digest = hashlib.sha256(name.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big") & ((1 << 63) - 1)


class NoiseField:
    """Repeatable scalar field over (x, y, t) with values in [-1, 1]."""

    def __init__(self, seed_name):
        self.seed_name = seed_name
        self.seed = seed_from_string(seed_name)
        self._gen = OpenSimplex(seed=self.seed)

    def sample(self, x, y, t):
        """Noise value at a single point."""
        v = self._gen.noise3(float(x), float(y), float(t))
        return max(-1.0, min(1.0, v))

    def sample_grid(self, xs, ys, t):
        """Sample the outer product of 1D x and y coordinates at one time.

        Args:
            xs: 1D array of x coordinates (columns)
            ys: 1D array of y coordinates (rows)
            t: Scalar time coordinate

        Returns:
            (len(ys), len(xs)) float64 array in [-1, 1]
        """
        xs = np.asarray(xs, dtype=np.float64).ravel()
        ys = np.asarray(ys, dtype=np.float64).ravel()
        if xs.size == 0 or ys.size == 0:
            return np.zeros((ys.size, xs.size), dtype=np.float64)
        zs = np.array([t], dtype=np.float64)
        # noise3array returns shape (len(z), len(y), len(x))
        field = self._gen.noise3array(xs, ys, zs)[0]
        return np.clip(field, -1.0, 1.0)


def make_fields():
    """Return the (macro, micro) pair of uncorrelated fields."""
    return NoiseField(MACRO_SEED), NoiseField(MICRO_SEED)
