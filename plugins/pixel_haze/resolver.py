"""
Color & Alpha Resolver

Maps (color class, smoothed activation, vertical position) to a final
RGB fill and opacity. Base cells stay base-colored; accent cells blend
from base toward their accent as they activate. Every cell's alpha rises
with activation, so the wave stays visible even over base cells.
"""

import numpy as np

from .grid_layout import BASE

# Below / above these the mix snaps to the end colors
MIX_SNAP_LOW = 0.01
MIX_SNAP_HIGH = 0.99


def vertical_mask(ny, mask_height, mask_feather_y):
    """Feathered visibility for normalised row position ny (0 top, 1 bottom).

    The visible band sits at the bottom: mask_height 1.0 shows every row,
    0.3 shows the bottom 30% fading in over mask_feather_y.

    Note for tuning: just below 1.0 the top rows still fade in over
    mask_feather_y, so the slider steps from a faded top edge at 0.999
    to no fade at all at 1.0.
    """
    ny = np.asarray(ny, dtype=np.float64)
    if mask_height >= 1.0:
        # Full screen: no fade at the top edge
        return np.ones_like(ny)
    threshold = 1.0 - mask_height
    return np.clip((ny - threshold) / mask_feather_y, 0.0, 1.0)


def row_mask(rows, params):
    """Vertical mask value for every row index 0..rows-1."""
    if rows == 0:
        return np.zeros(0, dtype=np.float64)
    ny = np.arange(rows, dtype=np.float64) / rows
    return vertical_mask(ny, params["mask_height"], params["mask_feather_y"])


def resolve_colors(color_class, activation, palette, color_mix_strength):
    """Fill color per cell.

    Args:
        color_class: (N,) uint8 color classes
        activation: (N,) smoothed activation in [0, 1]
        palette: Palette with base and accent colors
        color_mix_strength: Gain from activation to accent mix

    Returns:
        (N, 3) uint8 RGB
    """
    color_class = np.asarray(color_class).ravel()
    activation = np.asarray(activation, dtype=np.float64).ravel()

    base = np.array(palette.base, dtype=np.float64)
    accent = palette.accent_for(color_class)
    mix = np.clip(activation * color_mix_strength, 0.0, 1.0)[:, None]

    # Round half up, per channel
    blended = np.floor(base + (accent - base) * mix + 0.5)
    out = np.where(mix > MIX_SNAP_HIGH, accent, blended)
    out = np.where(mix < MIX_SNAP_LOW, base, out)
    out = np.where((color_class == BASE)[:, None], base, out)
    return np.clip(out, 0, 255).astype(np.uint8)


def resolve_alpha(activation, mask_val, base_alpha, active_alpha_boost):
    """Opacity: (base_alpha + activation * boost) * mask_val.

    Not re-clamped; callers keep base_alpha + boost <= 1.
    """
    activation = np.asarray(activation, dtype=np.float64)
    return (base_alpha + activation * active_alpha_boost) * mask_val


def debug_gray(activation, mask_val):
    """Grayscale view of the raw activation field, masked."""
    v = np.floor(np.asarray(activation, dtype=np.float64) * 255.0 * mask_val)
    v = np.clip(v, 0, 255).astype(np.uint8).ravel()
    return np.stack([v, v, v], axis=1)


def resolve_cells(color_class, activation, mask_val, palette, params):
    """Colors and alphas for a block of cells.

    Args:
        color_class: (N,) color classes
        activation: (N,) smoothed activation
        mask_val: (N,) or scalar vertical mask
        palette: Palette
        params: Parameter snapshot

    Returns:
        Tuple of ((N, 3) uint8 colors, (N,) float32 alphas)
    """
    activation = np.asarray(activation, dtype=np.float64).ravel()
    mask_val = np.broadcast_to(np.asarray(mask_val, dtype=np.float64),
                               activation.shape)

    if params["debug_view"]:
        colors = debug_gray(activation, mask_val)
        alphas = np.ones(activation.shape, dtype=np.float32)
        return colors, alphas

    colors = resolve_colors(color_class, activation, palette,
                            params["color_mix_strength"])
    alphas = resolve_alpha(activation, mask_val, params["base_alpha"],
                           params["active_alpha_boost"]).astype(np.float32)
    return colors, alphas
