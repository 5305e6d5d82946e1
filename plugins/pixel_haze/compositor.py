"""
Signal Compositor

Combines the macro wave (the moving cloud) and the micro gate (the
patchy texture) with each cell's bias into a target activation in
[0, 1]. Both fields are sampled at the same advected position so the
fine texture travels with the coarse cloud.
"""

import numpy as np


def smoothstep_band(val, threshold, feather):
    """Soft threshold: 0 below threshold-feather, 1 above threshold+feather.

    Hermite ease band^2 * (3 - 2*band) over the clamped band. A zero
    feather collapses to a hard step at the threshold.
    """
    val = np.asarray(val, dtype=np.float64)
    if feather <= 0:
        return (val >= threshold).astype(np.float64)
    band = np.clip((val - (threshold - feather)) / (2.0 * feather), 0.0, 1.0)
    return band * band * (3.0 - 2.0 * band)


def field_mask(field, xs_adv, ys_adv, t, scale, time_scale, threshold, feather):
    """Sample a noise field at advected positions and threshold it.

    Returns:
        (len(ys_adv), len(xs_adv)) mask in [0, 1]
    """
    raw = field.sample_grid(xs_adv * scale, ys_adv * scale, t * time_scale)
    val = (raw + 1.0) * 0.5
    return smoothstep_band(val, threshold, feather)


def compose_targets(xs, ys, t, bias, params, macro, micro, advection):
    """Target activation for a block of cells.

    Args:
        xs: 1D array of column indices
        ys: 1D array of row indices
        t: Time in seconds
        bias: (len(ys), len(xs)) read-only bias values in [-1, 1]
        params: Parameter snapshot
        macro: NoiseField for the moving cloud
        micro: NoiseField for the patchy texture
        advection: (vx, vy) applied to both fields

    Returns:
        (len(ys), len(xs)) float64 targets in [0, 1]
    """
    vx, vy = advection
    xs_adv = np.asarray(xs, dtype=np.float64) + t * vx
    ys_adv = np.asarray(ys, dtype=np.float64) + t * vy

    macro_mask = field_mask(
        macro, xs_adv, ys_adv, t,
        params["macro_scale"], params["macro_time_scale"],
        params["macro_threshold"], params["macro_feather"],
    )
    micro_mask = field_mask(
        micro, xs_adv, ys_adv, t,
        params["micro_scale"], params["micro_time_scale"],
        params["micro_threshold"], params["micro_feather"],
    )

    # Both fields must agree; bias is each cell's fixed personality
    signal = macro_mask * micro_mask + bias * params["bias_strength"]
    target = np.clip(signal, 0.0, 1.0)

    gamma = params["mix_gamma"]
    if gamma != 1:
        target = np.power(target, gamma)
    return target
