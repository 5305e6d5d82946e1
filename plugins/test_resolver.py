#!/usr/bin/env python3
"""
Test script for the color & alpha resolver and palette parsing.

Verifies:
1. Vertical mask edge cases
2. Base / accent color endpoints and strict in-between blends
3. Alpha formula and debug view
"""

import numpy as np
from pixel_haze.grid_layout import ACCENT_A, ACCENT_B, BASE
from pixel_haze.palette import Palette, parse_color
from pixel_haze.params import make_params
from pixel_haze.resolver import (
    debug_gray, resolve_alpha, resolve_cells, resolve_colors, row_mask, vertical_mask,
)


def _palette():
    return Palette(make_params(
        bg_color="#000000", base_color="rgb(10, 200, 40)",
        accent_a_color="#FA148C", accent_b_color="#3366ff",
    ))


def test_parse_color():
    print("Testing color parsing...")
    assert parse_color("#F6F2EF") == (246, 242, 239)
    assert parse_color("f6f2ef") == (246, 242, 239)
    assert parse_color("#abc") == (170, 187, 204)
    assert parse_color("rgb(1, 2, 3)") == (1, 2, 3)
    for bad in ("#12345", "blue", "rgb(300, 0, 0)", ""):
        try:
            parse_color(bad)
        except ValueError:
            continue
        raise AssertionError(f"Should reject {bad!r}")
    print("  ✓ Colors parsed")


def test_palette_is_cached_until_refresh():
    print("Testing palette cache...")
    params = make_params()
    pal = Palette(params)
    assert pal.base == (217, 215, 210)
    params["base_color"] = "#000000"
    assert pal.base == (217, 215, 210), "Palette should not re-read params by itself"
    pal.refresh(params)
    assert pal.base == (0, 0, 0)
    print("  ✓ Palette cached until refresh")


def test_vertical_mask():
    print("Testing vertical mask...")
    rows = 40
    ny = np.arange(rows) / rows
    full = vertical_mask(ny, 1.0, 0.2)
    assert np.all(full == 1.0), "mask_height 1.0 shows every row fully"

    band = vertical_mask(ny, 0.3, 0.2)
    assert np.all(band[ny < 0.5] == 0.0), "Rows above the band are hidden"
    assert band.min() >= 0.0 and band.max() <= 1.0
    assert np.all(np.diff(band) >= 0)
    assert abs(float(vertical_mask(0.8, 0.3, 0.2)) - 0.5) < 1e-9
    assert float(vertical_mask(0.95, 0.3, 0.2)) == 1.0
    near_full = vertical_mask(np.array([0.0, 0.1, 0.2]), 0.999, 0.2)
    assert np.allclose(near_full, [0.0, 0.495, 0.995]), "Top edge still fades below 1.0"

    params = make_params(mask_height=0.3, mask_feather_y=0.2)
    assert np.array_equal(row_mask(rows, params), band)
    assert row_mask(0, params).shape == (0,)
    print("  ✓ Vertical mask")


def test_base_cells_ignore_activation():
    print("Testing base cells...")
    pal = _palette()
    cc = np.full(5, BASE, dtype=np.uint8)
    act = np.array([0.0, 0.3, 0.6, 0.9, 1.0])
    colors = resolve_colors(cc, act, pal, 2.0)
    assert np.all(colors == np.array(pal.base, dtype=np.uint8))
    print("  ✓ Base cells stay base")


def test_accent_endpoints():
    print("Testing accent endpoints...")
    pal = _palette()
    cc = np.array([ACCENT_A, ACCENT_B, ACCENT_A, ACCENT_B], dtype=np.uint8)

    zero = resolve_colors(cc, np.zeros(4), pal, 1.0)
    assert np.all(zero == np.array(pal.base, dtype=np.uint8)), "mix=0 is base"

    tiny = resolve_colors(cc, np.full(4, 0.005), pal, 1.0)
    assert np.all(tiny == np.array(pal.base, dtype=np.uint8)), "mix<0.01 snaps to base"

    full = resolve_colors(cc, np.array([1.0, 1.0, 0.6, 0.5]), pal, 2.0)
    assert tuple(full[0]) == pal.accent_a and tuple(full[1]) == pal.accent_b
    assert tuple(full[2]) == pal.accent_a, "mix clamps at 1"
    assert tuple(full[3]) == pal.accent_b
    print("  ✓ mix 0 -> base, mix 1 -> accent")


def test_accent_blend_is_strictly_between():
    print("Testing intermediate blend...")
    pal = _palette()
    base = np.array(pal.base)
    for accent_class, accent in ((ACCENT_A, pal.accent_a), (ACCENT_B, pal.accent_b)):
        accent = np.array(accent)
        lo, hi = np.minimum(base, accent), np.maximum(base, accent)
        for act in (0.05, 0.25, 0.5, 0.75, 0.95):
            c = resolve_colors(np.array([accent_class], dtype=np.uint8),
                               np.array([act]), pal, 1.0)[0].astype(int)
            assert np.all(c > lo) and np.all(c < hi), f"{c} not strictly inside {lo}..{hi}"
    mid = resolve_colors(np.array([ACCENT_A], dtype=np.uint8), np.array([0.5]), pal, 1.0)[0]
    # (10,200,40) -> (250,20,140) halfway, rounded half up
    assert tuple(int(v) for v in mid) == (130, 110, 90)
    print("  ✓ Blend strictly between base and accent")


def test_alpha():
    print("Testing alpha...")
    act = np.array([0.0, 0.5, 1.0])
    alpha = resolve_alpha(act, 1.0, 0.25, 0.35)
    assert np.allclose(alpha, [0.25, 0.425, 0.6])
    masked = resolve_alpha(act, np.array([0.5, 0.5, 0.0]), 0.25, 0.35)
    assert np.allclose(masked, [0.125, 0.2125, 0.0])
    print("  ✓ Alpha = (base + activation * boost) * mask")


def test_debug_view():
    print("Testing debug view...")
    gray = debug_gray(np.array([0.0, 0.5, 1.0]), np.array([1.0, 1.0, 0.5]))
    assert gray.tolist() == [[0, 0, 0], [127, 127, 127], [127, 127, 127]]

    params = make_params(debug_view=True)
    cc = np.array([BASE, ACCENT_A], dtype=np.uint8)
    colors, alphas = resolve_cells(cc, np.array([1.0, 0.2]), 1.0, _palette(), params)
    assert colors.tolist() == [[255, 255, 255], [51, 51, 51]]
    assert np.all(alphas == 1.0)
    print("  ✓ Debug view shows raw activation")


if __name__ == "__main__":
    print("\n=== Testing Color & Alpha Resolver ===\n")

    test_parse_color()
    test_palette_is_cached_until_refresh()
    test_vertical_mask()
    test_base_cells_ignore_activation()
    test_accent_endpoints()
    test_accent_blend_is_strictly_between()
    test_alpha()
    test_debug_view()

    print("\n✓ All tests passed!\n")
