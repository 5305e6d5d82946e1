"""
Palette for the pixel grid

Four RGB colors (background, base, two accents) parsed from color
strings once and cached until refresh() is called.
"""

import re

import numpy as np

_HEX6 = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)
_HEX3 = re.compile(r"^#?([0-9a-f])([0-9a-f])([0-9a-f])$", re.IGNORECASE)
_RGB_FN = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$",
                     re.IGNORECASE)


def parse_color(value):
    """Parse '#rrggbb', '#rgb' or 'rgb(r, g, b)' into an (r, g, b) tuple.

    Raises:
        ValueError: if the string is not a recognised color
    """
    s = str(value).strip()
    m = _HEX6.match(s)
    if m:
        return tuple(int(c, 16) for c in m.groups())
    m = _HEX3.match(s)
    if m:
        return tuple(int(c * 2, 16) for c in m.groups())
    m = _RGB_FN.match(s)
    if m:
        rgb = tuple(int(c) for c in m.groups())
        if all(0 <= c <= 255 for c in rgb):
            return rgb
    raise ValueError(f"Invalid color: {value!r}")


class Palette:
    """Cached background/base/accent colors."""

    def __init__(self, params=None):
        self.bg = (0, 0, 0)
        self.base = (0, 0, 0)
        self.accent_a = (0, 0, 0)
        self.accent_b = (0, 0, 0)
        if params is not None:
            self.refresh(params)

    def refresh(self, params):
        """Re-parse all four colors from the parameter dict."""
        self.bg = parse_color(params["bg_color"])
        self.base = parse_color(params["base_color"])
        self.accent_a = parse_color(params["accent_a_color"])
        self.accent_b = parse_color(params["accent_b_color"])

    def as_array(self):
        """(4, 3) uint8 lookup: rows are bg, base, accent A, accent B."""
        return np.array([self.bg, self.base, self.accent_a, self.accent_b],
                        dtype=np.uint8)

    def accent_for(self, color_class):
        """(N, 3) float accent color per cell (base color for BASE cells)."""
        # color_class 0/1/2 maps to rows 1/2/3 of the lookup
        lut = self.as_array().astype(np.float64)
        return lut[np.asarray(color_class, dtype=np.intp) + 1]
