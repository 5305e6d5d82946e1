"""
Pixel Grid Parameters

Flat dict of named values controlling geometry, noise fields, mixing,
smoothing and alpha. The caller owns the dict; the engine reads a
snapshot of it at the start of every build and frame.
"""


DEFAULT_PARAMS = {
    # Geometry
    "cell_size": 3,
    "gap": 5,

    # Palette
    "bg_color": "#F6F2EF",
    "base_color": "#D9D7D2",
    "accent_a_color": "#F5F7D9",
    "accent_b_color": "#FFEAEA",

    # Accent probabilities
    "accent_a_prob": 0.25,
    "accent_b_prob": 0.10,

    # Vertical fade (1.0 = full screen, 0.33 = bottom third)
    "mask_height": 1.0,
    "mask_feather_y": 0.2,

    # Advection shared by both fields, in cells per second
    "advect_vx": 2.5,
    "advect_vy": -1.0,

    # Macro wave (the moving cloud)
    "macro_scale": 0.012,
    "macro_time_scale": 0.003,
    "macro_threshold": 0.35,
    "macro_feather": 0.15,

    # Micro gate (the patchy texture)
    "micro_scale": 0.08,
    "micro_time_scale": 0.01,
    "micro_threshold": 0.2,
    "micro_feather": 0.2,

    # Cell personality
    "bias_strength": 0.5,

    # Mixing & smoothing
    "color_mix_strength": 1.0,
    "mix_gamma": 1.8,
    "smoothing": 0.15,

    # Alpha
    "base_alpha": 0.25,
    "active_alpha_boost": 0.35,

    # Toggles
    "enable_animation": True,
    "debug_view": False,
}

# Changing any of these invalidates cell identity, so the grid is rebuilt
GEOMETRY_KEYS = ("cell_size", "gap", "accent_a_prob", "accent_b_prob")

COLOR_KEYS = ("bg_color", "base_color", "accent_a_color", "accent_b_color")


def make_params(**overrides):
    """Return a fresh parameter dict: defaults updated with overrides."""
    params = dict(DEFAULT_PARAMS)
    params.update(overrides)
    return params


def needs_rebuild(old, new):
    """True if any geometry key differs between two parameter dicts."""
    return any(old.get(k) != new.get(k) for k in GEOMETRY_KEYS)


def pitch_of(params):
    return params["cell_size"] + params["gap"]


def validate_params(params):
    """Check a parameter dict before handing it to the engine.

    The engine itself only clamps the values its algorithm clamps, so
    callers run this once when a preset is loaded or a value is edited.

    Raises:
        ValueError: naming the first offending key
    """
    unknown = sorted(set(params) - set(DEFAULT_PARAMS))
    if unknown:
        raise ValueError(f"Unknown parameter(s): {', '.join(unknown)}")

    p = make_params(**params)

    if p["cell_size"] <= 0:
        raise ValueError(f"cell_size must be positive, got {p['cell_size']!r}")
    if p["gap"] < 0:
        raise ValueError(f"gap must be >= 0, got {p['gap']!r}")

    for key in ("accent_a_prob", "accent_b_prob"):
        if not 0.0 <= p[key] <= 1.0:
            raise ValueError(f"{key} must be in [0, 1], got {p[key]!r}")
    if p["accent_a_prob"] + p["accent_b_prob"] > 1.0:
        raise ValueError("accent_a_prob + accent_b_prob must not exceed 1")

    if not 0.0 <= p["mask_height"] <= 1.0:
        raise ValueError(f"mask_height must be in [0, 1], got {p['mask_height']!r}")
    if p["mask_feather_y"] <= 0:
        raise ValueError(f"mask_feather_y must be positive, got {p['mask_feather_y']!r}")

    for key in ("macro_feather", "micro_feather", "macro_scale", "micro_scale",
                "bias_strength", "color_mix_strength", "base_alpha",
                "active_alpha_boost"):
        if p[key] < 0:
            raise ValueError(f"{key} must be >= 0, got {p[key]!r}")

    if p["mix_gamma"] <= 0:
        raise ValueError(f"mix_gamma must be positive, got {p['mix_gamma']!r}")
    if not 0.0 < p["smoothing"] <= 1.0:
        raise ValueError(f"smoothing must be in (0, 1], got {p['smoothing']!r}")
    if p["base_alpha"] + p["active_alpha_boost"] > 1.0:
        raise ValueError("base_alpha + active_alpha_boost must not exceed 1")

    return p


def get_slider_defs():
    """Return slider definitions for the tuning panel.

    Each entry is a dict:
        {"key": "gap", "label": "Gap", "section": "GEOMETRY",
         "min": 0, "max": 20, "default": 5, "fmt": ".0f", "step": 1}
    """
    d = DEFAULT_PARAMS
    return [
        {"key": "cell_size", "label": "Pixel size", "section": "GEOMETRY",
         "min": 1, "max": 10, "default": d["cell_size"], "fmt": ".0f", "step": 1},
        {"key": "gap", "label": "Gap", "section": "GEOMETRY",
         "min": 0, "max": 20, "default": d["gap"], "fmt": ".0f", "step": 1},

        {"key": "accent_a_prob", "label": "Accent A prob", "section": "COLORS",
         "min": 0.0, "max": 0.5, "default": d["accent_a_prob"], "fmt": ".2f"},
        {"key": "accent_b_prob", "label": "Accent B prob", "section": "COLORS",
         "min": 0.0, "max": 0.2, "default": d["accent_b_prob"], "fmt": ".2f"},

        {"key": "mask_height", "label": "Active height", "section": "MASKING",
         "min": 0.0, "max": 1.0, "default": d["mask_height"], "fmt": ".2f"},
        {"key": "mask_feather_y", "label": "Feather", "section": "MASKING",
         "min": 0.01, "max": 0.5, "default": d["mask_feather_y"], "fmt": ".2f"},

        {"key": "macro_scale", "label": "Scale", "section": "MACRO WAVE",
         "min": 0.001, "max": 0.05, "default": d["macro_scale"], "fmt": ".3f"},
        {"key": "advect_vx", "label": "Vel X", "section": "MACRO WAVE",
         "min": -5.0, "max": 5.0, "default": d["advect_vx"], "fmt": ".2f"},
        {"key": "advect_vy", "label": "Vel Y", "section": "MACRO WAVE",
         "min": -5.0, "max": 5.0, "default": d["advect_vy"], "fmt": ".2f"},
        {"key": "macro_threshold", "label": "Threshold", "section": "MACRO WAVE",
         "min": 0.0, "max": 1.0, "default": d["macro_threshold"], "fmt": ".2f"},
        {"key": "macro_feather", "label": "Feather", "section": "MACRO WAVE",
         "min": 0.0, "max": 0.5, "default": d["macro_feather"], "fmt": ".2f"},

        {"key": "micro_scale", "label": "Scale", "section": "MICRO GATE",
         "min": 0.01, "max": 0.5, "default": d["micro_scale"], "fmt": ".3f"},
        {"key": "micro_threshold", "label": "Threshold", "section": "MICRO GATE",
         "min": 0.0, "max": 1.0, "default": d["micro_threshold"], "fmt": ".2f"},
        {"key": "bias_strength", "label": "Bias strength", "section": "MICRO GATE",
         "min": 0.0, "max": 1.0, "default": d["bias_strength"], "fmt": ".2f"},

        {"key": "color_mix_strength", "label": "Color mix", "section": "LOOK & FEEL",
         "min": 0.0, "max": 2.0, "default": d["color_mix_strength"], "fmt": ".2f"},
        {"key": "mix_gamma", "label": "Gamma", "section": "LOOK & FEEL",
         "min": 0.5, "max": 3.0, "default": d["mix_gamma"], "fmt": ".2f"},
        {"key": "smoothing", "label": "Smoothing", "section": "LOOK & FEEL",
         "min": 0.01, "max": 0.5, "default": d["smoothing"], "fmt": ".2f"},
        {"key": "base_alpha", "label": "Base alpha", "section": "LOOK & FEEL",
         "min": 0.0, "max": 1.0, "default": d["base_alpha"], "fmt": ".2f"},
        {"key": "active_alpha_boost", "label": "Active boost", "section": "LOOK & FEEL",
         "min": 0.0, "max": 1.0, "default": d["active_alpha_boost"], "fmt": ".2f"},
    ]
