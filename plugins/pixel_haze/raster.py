"""
Host-side compositing of a Frame into an RGB image.

Paints the background, then source-over blends every cell rectangle,
the way a 2D canvas with globalAlpha would. Used by the viewer and the
headless snapshot mode.
"""

import os
import time

import numpy as np
from PIL import Image


def screenshots_dir():
    """screenshots/ next to the plugins directory (created on demand)."""
    path = os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
        "screenshots"
    )
    os.makedirs(path, exist_ok=True)
    return path


def save_png(rgb, name, directory=None):
    """Save an (H, W, 3) uint8 image as <name>_<timestamp>.png and latest.png.

    Returns:
        Path of the timestamped file
    """
    directory = directory or screenshots_dir()
    os.makedirs(directory, exist_ok=True)
    timestamp = time.strftime("%Y%m%d_%H%M%S")
    img = Image.fromarray(rgb)
    path = os.path.join(directory, f"{name}_{timestamp}.png")
    img.save(path)
    img.save(os.path.join(directory, "latest.png"))
    return path


def composite(frame, width, height, out=None):
    """Rasterize a frame.

    Args:
        frame: Frame from PixelGridEngine.render_frame
        width: Image width in pixels
        height: Image height in pixels
        out: Optional (height, width, 3) float32 scratch buffer

    Returns:
        (height, width, 3) uint8 RGB image
    """
    if out is None or out.shape != (height, width, 3):
        out = np.empty((height, width, 3), dtype=np.float32)
    out[:] = np.array(frame.background, dtype=np.float32)

    if len(frame) and width > 0 and height > 0:
        colors = frame.colors.astype(np.float32)
        # Canvas clamps globalAlpha to [0, 1]
        alphas = np.clip(frame.alphas, 0.0, 1.0).astype(np.float32)[:, None]
        src = colors * alphas
        keep = 1.0 - alphas

        # Cells never overlap, so each pixel offset inside a cell is one gather
        for dy in range(frame.cell_size):
            py = frame.ys + dy
            for dx in range(frame.cell_size):
                px = frame.xs + dx
                ok = (px < width) & (py < height)
                if not ok.any():
                    continue
                yy, xx = py[ok], px[ok]
                out[yy, xx] = out[yy, xx] * keep[ok] + src[ok]

    np.clip(out, 0, 255, out=out)
    return (out + 0.5).astype(np.uint8)
