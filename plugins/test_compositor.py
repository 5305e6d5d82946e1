#!/usr/bin/env python3
"""
Test script for the signal compositor.

Verifies:
1. smoothstep_band is bounded and monotone
2. Targets stay in [0, 1] and respond to bias and gamma
3. Both fields travel with the shared advection vector
"""

import numpy as np
from pixel_haze.compositor import compose_targets, smoothstep_band
from pixel_haze.noise_field import make_fields
from pixel_haze.params import make_params


def test_smoothstep_bounded_and_monotone():
    print("Testing smoothstep_band...")
    vals = np.linspace(-50.0, 50.0, 20001)
    for threshold, feather in ((0.35, 0.15), (0.2, 0.2), (0.9, 0.01), (0.0, 1.0)):
        out = smoothstep_band(vals, threshold, feather)
        assert out.min() >= 0.0 and out.max() <= 1.0, "Mask must stay in [0, 1]"
        assert np.all(np.diff(out) >= 0), "Mask must be non-decreasing"
        assert out[0] == 0.0 and out[-1] == 1.0
    assert abs(float(smoothstep_band(0.35, 0.35, 0.15)) - 0.5) < 1e-12
    assert float(smoothstep_band(0.2, 0.35, 0.15)) == 0.0
    assert float(smoothstep_band(0.5, 0.35, 0.15)) == 1.0
    print("  ✓ smoothstep_band bounded and monotone")


def test_zero_feather_is_hard_step():
    print("Testing zero feather...")
    out = smoothstep_band(np.array([0.1, 0.49, 0.5, 0.9]), 0.5, 0.0)
    assert np.array_equal(out, [0.0, 0.0, 1.0, 1.0])
    print("  ✓ Zero feather is a hard step")


def _targets(params, t=1.0, bias=None, xs=None, ys=None):
    macro, micro = make_fields()
    xs = np.arange(24) if xs is None else xs
    ys = np.arange(16) if ys is None else ys
    if bias is None:
        bias = np.zeros((len(ys), len(xs)), dtype=np.float32)
    return compose_targets(xs, ys, t, bias, params, macro, micro,
                           (params["advect_vx"], params["advect_vy"]))


def test_targets_in_unit_range():
    print("Testing target range...")
    rng = np.random.default_rng(3)
    bias = rng.uniform(-1, 1, (16, 24)).astype(np.float32)
    for t in (0.0, 2.5, 60.0):
        target = _targets(make_params(), t=t, bias=bias)
        assert target.shape == (16, 24)
        assert target.min() >= 0.0 and target.max() <= 1.0
    print("  ✓ Targets in [0, 1]")


def test_bias_only_signal():
    """Thresholds out of reach: noise masks are 0, target is the clamped bias."""
    print("Testing bias contribution...")
    params = make_params(macro_threshold=5.0, micro_threshold=5.0,
                         bias_strength=0.5, mix_gamma=1.0)
    bias = np.linspace(-1, 1, 16 * 24, dtype=np.float32).reshape(16, 24)
    target = _targets(params, bias=bias)
    assert np.allclose(target, np.clip(bias * 0.5, 0.0, 1.0))

    params = make_params(macro_threshold=-5.0, micro_threshold=-5.0,
                         bias_strength=0.5, mix_gamma=1.0)
    target = _targets(params, bias=bias)
    assert np.allclose(target, np.clip(1.0 + bias * 0.5, 0.0, 1.0)), \
        "Both masks fully open: signal is 1 + bias"
    print("  ✓ Bias offsets the signal")


def test_gamma():
    print("Testing gamma...")
    linear = _targets(make_params(mix_gamma=1.0, bias_strength=0.0), t=3.0)
    curved = _targets(make_params(mix_gamma=2.0, bias_strength=0.0), t=3.0)
    assert np.allclose(curved, linear ** 2)
    print("  ✓ Gamma applied to clamped signal")


def test_shared_advection():
    """With frozen evolution, time only shifts the sampling position."""
    print("Testing shared advection...")
    params = make_params(macro_time_scale=0.0, micro_time_scale=0.0,
                         advect_vx=1.5, advect_vy=-0.5, bias_strength=0.0,
                         macro_threshold=-5.0, micro_threshold=0.5,
                         mix_gamma=1.0)
    xs = np.arange(20)
    ys = np.arange(10, 22)
    moved = _targets(params, t=4.0, xs=xs, ys=ys)
    # t * (vx, vy) = (6, -2) cells
    shifted = _targets(params, t=0.0, xs=xs + 6, ys=ys - 2)
    assert np.allclose(moved, shifted), "Both fields should move with one vector"
    assert moved.std() > 0, "Pattern should not be flat"
    print("  ✓ Texture travels with the cloud")


if __name__ == "__main__":
    print("\n=== Testing Signal Compositor ===\n")

    test_smoothstep_bounded_and_monotone()
    test_zero_feather_is_hard_step()
    test_targets_in_unit_range()
    test_bias_only_signal()
    test_gamma()
    test_shared_advection()

    print("\n✓ All tests passed!\n")
