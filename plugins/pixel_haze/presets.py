"""
Pixel Grid Parameter Presets

Each preset is a set of overrides on DEFAULT_PARAMS known to produce a
pleasant look. The "name" and "description" fields are for display only.
"""

from .params import make_params

PRESETS = {
    "haze": {
        "name": "Haze",
        "description": "Wafting smoke over the full surface (default tuning)",
    },
    "low_band": {
        "name": "Low Band",
        "description": "Only the bottom third animates, fading in from above",
        "mask_height": 0.33, "mask_feather_y": 0.2,
    },
    "drift": {
        "name": "Drift",
        "description": "Faster wind, larger and softer clouds",
        "advect_vx": 4.5, "advect_vy": -2.0,
        "macro_scale": 0.008, "macro_feather": 0.25,
        "smoothing": 0.08,
    },
    "still": {
        "name": "Still",
        "description": "No bias, linear response, no smoothing lag",
        "bias_strength": 0.0, "mix_gamma": 1.0, "smoothing": 1.0,
    },
    "dense": {
        "name": "Dense",
        "description": "More accents, stronger color mix",
        "accent_a_prob": 0.4, "accent_b_prob": 0.2,
        "color_mix_strength": 1.6,
    },
    "debug": {
        "name": "Debug",
        "description": "Grayscale view of the raw activation field",
        "debug_view": True,
    },
}

PRESET_ORDER = ["haze", "low_band", "drift", "still", "dense", "debug"]

_META_KEYS = ("name", "description")


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]


def preset_params(name):
    """Full parameter dict for a preset (defaults + overrides).

    Raises:
        ValueError: if the preset is unknown
    """
    preset = get_preset(name)
    if preset is None:
        raise ValueError(f"Unknown preset: {name!r}. "
                         f"Available: {', '.join(PRESET_ORDER)}")
    overrides = {k: v for k, v in preset.items() if k not in _META_KEYS}
    return make_params(**overrides)
