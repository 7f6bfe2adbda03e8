"""
Piecewise flat forward curves.

A piecewise flat curve is given by breakpoints t[0] < ... < t[n-1] and rates f[j] that
apply on (t[j-1], t[j]] with t[-1] = 0. Past the last breakpoint the last rate is
extrapolated flat.

Mathematical background:
The discount factor is D(u) = exp(-int_0^u f(s) ds). For a curve sampled at time t the
same formulas apply with maturities measured from t, D_t(u) = exp(-int_t^u f_t(s) ds).
"""

import numpy as np
from numba import njit


@njit
def forward(s: float, tenors: np.ndarray, rates: np.ndarray) -> float:
    """
    Evaluate the instantaneous forward rate at time s.

    Args:
        s (float): Time measured in years, s >= 0
        tenors (np.ndarray): Breakpoints of the curve
        rates (np.ndarray): Rate on each interval (t[j-1], t[j]]

    Returns:
        float: f(s)
    """
    if s < 0:
        raise ValueError("time must be non-negative")
    above = np.where(tenors >= s)[0]
    if above.size == 0:
        return rates[-1]
    return rates[above[0]]


@njit
def integral(s: float, tenors: np.ndarray, rates: np.ndarray) -> float:
    """
    Integrate the forward curve from 0 to s.

    Args:
        s (float): Time measured in years, s >= 0
        tenors (np.ndarray): Breakpoints of the curve
        rates (np.ndarray): Rate on each interval (t[j-1], t[j]]

    Returns:
        float: int_0^s f(r) dr
    """
    if s < 0:
        raise ValueError("time must be non-negative")
    total = 0.0
    previous = 0.0
    for j in range(len(tenors)):
        if s <= tenors[j]:
            return total + rates[j] * (s - previous)
        total += rates[j] * (tenors[j] - previous)
        previous = tenors[j]
    return total + rates[-1] * (s - previous)


@njit
def discount(s: float, tenors: np.ndarray, rates: np.ndarray) -> float:
    """
    Calculate the discount factor D(s) = exp(-int_0^s f(r) dr).

    Args:
        s (float): Time measured in years, s >= 0
        tenors (np.ndarray): Breakpoints of the curve
        rates (np.ndarray): Rate on each interval (t[j-1], t[j]]

    Returns:
        float: The discount factor to time s
    """
    return np.exp(-integral(s, tenors, rates))


class PiecewiseFlatCurve:
    """
    Piecewise flat forward curve observed at a given time.

    Breakpoints are absolute times. Maturities passed to the query methods are absolute
    as well and must not precede the observation time, which plays the role of t[-1].
    """

    def __init__(self, tenors, rates, observed_at: float = 0.0):
        self.tenors = np.array(tenors, dtype=np.float64)
        self.rates = np.array(rates, dtype=np.float64)
        self.observed_at = float(observed_at)
        if self.tenors.ndim != 1 or self.tenors.shape != self.rates.shape:
            raise ValueError(
                f"tenors and rates must be 1-D of equal length, got {self.tenors.shape} and {self.rates.shape}"
            )
        if len(self.tenors) == 0:
            raise ValueError("a curve needs at least one breakpoint")
        if np.any(np.diff(self.tenors) <= 0) or self.tenors[0] <= self.observed_at:
            raise ValueError(
                f"breakpoints must be strictly increasing and after {self.observed_at}"
            )

    def __len__(self):
        return len(self.tenors)

    def _offset(self, u: float) -> float:
        if u < self.observed_at:
            raise ValueError(f"maturity {u} precedes observation time {self.observed_at}")
        return u - self.observed_at

    def forward(self, u: float) -> float:
        return forward(self._offset(u), self.tenors - self.observed_at, self.rates)

    def integral(self, u: float) -> float:
        return integral(self._offset(u), self.tenors - self.observed_at, self.rates)

    def discount(self, u: float) -> float:
        """Discount factor from the observation time to u."""
        return discount(self._offset(u), self.tenors - self.observed_at, self.rates)
