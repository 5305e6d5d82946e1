"""
Pixel Haze Viewer - Entry Point

Usage:
    python -m pixel_haze [preset] [--window WxH] [--reduced-motion]
    python -m pixel_haze [preset] --snap MS [--window WxH]

Examples:
    python -m pixel_haze
    python -m pixel_haze low_band
    python -m pixel_haze drift --window 1280x720
    python -m pixel_haze haze --snap 30000

--snap renders the frame at time MS (milliseconds) without opening a
window and saves it to screenshots/. Use --list to see all presets.
"""

import sys

from .presets import PRESET_ORDER, list_presets, preset_params

SNAP_FPS = 60
# Frames rendered before the snapshot so the smoother has settled
SNAP_WARMUP_FRAMES = 120


def snap(preset, width, height, time_ms, reduced_motion=False):
    """Headless mode: render one frame at time_ms and save it as PNG."""
    from .engine import PixelGridEngine
    from .params import validate_params
    from .raster import composite, save_png

    params = validate_params(preset_params(preset))
    engine = PixelGridEngine()
    engine.build(width, height, params)

    step = 1000.0 / SNAP_FPS
    start = max(0.0, time_ms - step * SNAP_WARMUP_FRAMES)
    print(f"  {preset}: warming up...", end="", flush=True)
    t = start
    while t < time_ms:
        engine.render_frame(t, params, not reduced_motion)
        t += step
    frame = engine.render_frame(time_ms, params, not reduced_motion)

    rgb = composite(frame, width, height)
    path = save_png(rgb, f"pg_{preset}")
    print(f" saved: {path}")
    return path


def _parse_window(value):
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Window size must look like 900x700, got {value!r}")
    w, h = int(parts[0]), int(parts[1])
    if w <= 0 or h <= 0:
        raise ValueError(f"Window size must be positive, got {value!r}")
    return w, h


def main(argv=None):
    preset = "haze"
    win_w, win_h = 900, 700
    snap_ms = None
    reduced_motion = False

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    try:
        while i < len(args):
            arg = args[i]
            if arg == "--window" and i + 1 < len(args):
                win_w, win_h = _parse_window(args[i + 1])
                i += 2
            elif arg == "--snap" and i + 1 < len(args):
                snap_ms = float(args[i + 1])
                i += 2
            elif arg == "--reduced-motion":
                reduced_motion = True
                i += 1
            elif arg == "--list":
                print("\nAvailable presets:")
                for key, name, desc in list_presets():
                    print(f"    {key:12s} {name:12s} {desc}")
                print()
                return 0
            elif arg in ("--help", "-h"):
                print(__doc__)
                return 0
            elif arg in PRESET_ORDER:
                preset = arg
                i += 1
            else:
                print(f"Unknown argument: {arg}")
                print("Use --list to see available presets")
                return 2
    except ValueError as e:
        print(f"Invalid argument: {e}")
        return 2

    if snap_ms is not None:
        print(f"Headless snap mode: {preset} @ {win_w}x{win_h}, t={snap_ms:.0f}ms")
        snap(preset, win_w, win_h, snap_ms, reduced_motion)
        return 0

    from .viewer import Viewer

    print("Starting Pixel Haze Viewer")
    print(f"  Preset: {preset}")
    print(f"  Window: {win_w}x{win_h}")
    if reduced_motion:
        print("  Reduced motion: pattern is static")
    print()

    viewer = Viewer(width=win_w, height=win_h, preset=preset,
                    reduced_motion=reduced_motion)
    viewer.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
