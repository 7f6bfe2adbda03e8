"""Tests for the correlated Brownian driver."""
import numpy as np
import pytest

from forward_curve_lmm.simulation.brownian import Correlation, CorrelatedBrownianMotion


# ── Correlation tests ──

def test_identity_cholesky():
    corr = Correlation.identity(3)
    assert corr.dimension == 3
    np.testing.assert_allclose(corr.cholesky, np.eye(3))


def test_exponential_structure():
    corr = Correlation.exponential([0.0, 1.0, 3.0], beta=0.5)
    np.testing.assert_allclose(np.diag(corr.matrix), 1.0)
    assert corr.matrix[0, 1] == pytest.approx(np.exp(-0.5))
    assert corr.matrix[0, 2] == pytest.approx(np.exp(-1.5))
    np.testing.assert_allclose(corr.cholesky @ corr.cholesky.T, corr.matrix, atol=1e-12)


def test_perfect_correlation_is_accepted():
    corr = Correlation(np.ones((2, 2)))
    np.testing.assert_allclose(corr.cholesky @ corr.cholesky.T, np.ones((2, 2)), atol=1e-6)


@pytest.mark.parametrize("matrix, message", [
    (np.ones((2, 3)), "square"),
    ([[1.0, 0.5], [0.4, 1.0]], "symmetric"),
    ([[2.0, 0.0], [0.0, 1.0]], "unit diagonal"),
    ([[1.0, 1.5], [1.5, 1.0]], "\\[-1, 1\\]"),
    ([[1.0, 0.9, -0.9], [0.9, 1.0, 0.9], [-0.9, 0.9, 1.0]], "semi-definite"),
])
def test_invalid_correlation(matrix, message):
    with pytest.raises(ValueError, match=message):
        Correlation(matrix)


def test_negative_beta():
    with pytest.raises(ValueError, match="non-negative"):
        Correlation.exponential([0.0, 1.0], beta=-1.0)


# ── Driver tests ──

def test_starts_at_zero():
    bm = CorrelatedBrownianMotion(Correlation.identity(2))
    assert bm.time == 0.0
    np.testing.assert_array_equal(bm.values(), [0.0, 0.0])


def test_values_is_a_snapshot():
    bm = CorrelatedBrownianMotion(Correlation.identity(2))
    bm.advance(1.0, np.random.default_rng(0))
    snapshot = bm.values()
    snapshot[:] = 99.0
    assert not np.allclose(bm.values(), 99.0)


def test_keeps_reference_to_correlation():
    corr = Correlation.identity(2)
    assert CorrelatedBrownianMotion(corr).correlation is corr


def test_advance_resumes_from_current_time():
    bm = CorrelatedBrownianMotion(Correlation.identity(2))
    bm.advance(1.0, np.random.default_rng(1))
    first = bm.values()
    bm.advance(1.0, np.random.default_rng(2))
    np.testing.assert_array_equal(bm.values(), first)
    bm.advance(2.0, np.random.default_rng(3))
    assert bm.time == 2.0
    assert not np.allclose(bm.values(), first)


def test_backwards_rejected_without_mutation():
    bm = CorrelatedBrownianMotion(Correlation.identity(2))
    bm.advance(1.0, np.random.default_rng(0))
    before = bm.values()
    with pytest.raises(ValueError, match="backwards"):
        bm.advance(0.5, np.random.default_rng(0))
    assert bm.time == 1.0
    np.testing.assert_array_equal(bm.values(), before)


def test_reset():
    bm = CorrelatedBrownianMotion(Correlation.identity(2))
    bm.advance(1.0, np.random.default_rng(0))
    bm.reset()
    assert bm.time == 0.0
    np.testing.assert_array_equal(bm.values(), [0.0, 0.0])


def test_moments_and_correlation():
    corr = Correlation([[1.0, 0.6], [0.6, 1.0]])
    bm = CorrelatedBrownianMotion(corr)
    rng = np.random.default_rng(42)
    samples = np.empty((20000, 2))
    for i in range(len(samples)):
        bm.reset()
        bm.advance(0.5, rng)
        bm.advance(2.0, rng)
        samples[i] = bm.values()
    np.testing.assert_allclose(samples.mean(axis=0), 0.0, atol=0.05)
    np.testing.assert_allclose(samples.var(axis=0), 2.0, rtol=0.05)
    assert np.corrcoef(samples.T)[0, 1] == pytest.approx(0.6, abs=0.03)
