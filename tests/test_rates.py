"""Tests for the futures and convexity kernels."""
import numpy as np

from forward_curve_lmm.core.rates import (
    convexity_adjustment,
    forward_rates,
    futures_rates,
)

TENORS = np.array([0.0, 1.0, 2.0])
PHI = np.array([0.02, 0.03, 0.04])
SIGMA = np.array([0.0, 0.2, 0.25])
B = np.array([0.0, 0.1, 0.05])


def test_futures_lognormal():
    futures = futures_rates(0.5, PHI, SIGMA, B, 1)
    expected = PHI[1:] * np.exp(SIGMA[1:] * B[1:] - SIGMA[1:] ** 2 * 0.5 / 2)
    np.testing.assert_allclose(futures, expected)


def test_convexity_uses_previous_reset():
    adjustment = convexity_adjustment(0.5, TENORS, SIGMA, 1)
    np.testing.assert_allclose(
        adjustment, [0.2 ** 2 * 0.5 ** 2 / 2, 0.25 ** 2 * 0.5 ** 2 / 2]
    )


def test_convexity_zero_for_cash_rate():
    adjustment = convexity_adjustment(-0.5, TENORS, np.array([0.0, 0.2, 0.25]), 0)
    assert adjustment[0] == 0.0
    assert np.all(adjustment >= 0)


def test_forward_rates_leaves_fixed_entries():
    out = np.full(3, -1.0)
    forward_rates(0.5, TENORS, PHI, SIGMA, B, 1, out)
    assert out[0] == -1.0
    futures = futures_rates(0.5, PHI, SIGMA, B, 1)
    np.testing.assert_allclose(out[1:], futures - convexity_adjustment(0.5, TENORS, SIGMA, 1))
    assert np.all(out[1:] <= futures)
