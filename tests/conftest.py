import numpy as np
import pytest

from forward_curve_lmm.simulation.brownian import Correlation
from forward_curve_lmm.simulation.lmm import ForwardCurveModel

TENORS = np.array([0.25, 0.5, 0.75, 1.0, 1.25])
PHI = np.array([0.045, 0.046, 0.047, 0.048, 0.049])
SIGMA = np.array([0.0, 0.18, 0.2, 0.0, 0.22])


class FixedBrownian:
    """Driver returning the same realized values at every time."""

    def __init__(self, values):
        self._values = np.asarray(values, dtype=float)
        self.times = []

    def reset(self):
        self.times = []

    def advance(self, time, rng=None):
        self.times.append(time)

    def values(self):
        return self._values.copy()


@pytest.fixture
def market_data():
    return TENORS.copy(), PHI.copy(), SIGMA.copy()


@pytest.fixture
def model(market_data):
    tenors, phi, sigma = market_data
    return ForwardCurveModel(tenors, phi, sigma, Correlation.exponential(tenors, 0.5))


@pytest.fixture
def rng():
    return np.random.default_rng(42)
