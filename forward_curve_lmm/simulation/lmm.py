"""
Forward curve model for the Libor market model.

The model is parameterized by increasing reset times t_j, futures quotes phi_j,
at-the-money caplet volatilities sigma_j and a correlation matrix between the tenors.
The j-th future covers the interval from t[j-1] to t[j] with t[-1] = 0, so phi_0 is the
cash rate and sigma_0 = 0.

Given a time u, the model samples the correlated Brownian driver at u and returns the
forward curve observed at u for every interval that has not fixed yet.
"""

import logging
import time

import numpy as np

from forward_curve_lmm.core.pwflat import PiecewiseFlatCurve
from forward_curve_lmm.core.rates import forward_rates
from forward_curve_lmm.core.term_structure import (
    OutOfRange,
    first_random_index,
    validate_term_structure,
)
from forward_curve_lmm.simulation.brownian import Correlation, CorrelatedBrownianMotion


class ForwardCurveModel:
    """
    Sample forward curves of a Libor market model.

    A model owns its Brownian driver, so a single instance must be walked along one path
    at a time. Use one instance per worker to simulate paths concurrently.

    Example:
        >>> model = ForwardCurveModel(
        ...     [0.25, 0.5, 0.75], [0.02, 0.03, 0.04], [0.0, 0.2, 0.25], Correlation.identity(3))
        >>> curve = np.empty(3)
        >>> model.reset()
        >>> j = model.advance(0.3, curve, np.random.default_rng(42))  # j == 1
    """

    def __init__(self, tenors, phi, sigma, correlation: Correlation):
        self.t, self.phi, self.sigma = validate_term_structure(
            tenors, phi, sigma, correlation.dimension
        )
        self.brownian = CorrelatedBrownianMotion(correlation)
        logging.debug(
            f"ForwardCurveModel with {self.size()} tenors up to t={self.t[-1]} "
            f"driven by {correlation.dimension} Brownian components"
        )

    @property
    def correlation(self) -> Correlation:
        return self.brownian.correlation

    def size(self) -> int:
        """Number of tenor points."""
        return len(self.t)

    def __len__(self):
        return self.size()

    def reset(self) -> None:
        """Start a fresh path at time 0."""
        self.brownian.reset()

    def advance(self, u: float, out: np.ndarray, rng=None) -> int:
        """
        Populate out with the forward curve sampled at time u.

        Only out[j:] is written, where j is the index of the first reset time after u;
        entries before j belong to rates that have already fixed and are left untouched.

        Args:
            u (float): Observation time, not before the time of the previous call
            out (np.ndarray): float64 buffer of length n receiving the forwards
            rng: numpy Generator used to draw the Brownian increment, or a seed
                accepted by np.random.default_rng

        Returns:
            int: Index j of the first reset time strictly greater than u

        Raises:
            OutOfRange: If u is at or beyond the last reset time
            ValueError: If out is not a writeable float64 array of length n, or u precedes the
                current time of the path
        """
        j = first_random_index(self.t, u)
        if j == self.size():
            raise OutOfRange(
                f"no tenor left to simulate at u={u}, last reset time is {self.t[-1]}"
            )
        if (
            not isinstance(out, np.ndarray)
            or out.dtype != np.float64
            or out.shape != (self.size(),)
            or not out.flags.writeable
        ):
            raise ValueError(
                f"out must be a writeable float64 numpy array of shape ({self.size()},)"
            )

        self.brownian.advance(u, rng)
        forward_rates(u, self.t, self.phi, self.sigma, self.brownian.values(), j, out)
        return int(j)

    def sample_curve(self, u: float, rng=None) -> PiecewiseFlatCurve:
        """
        Sample the forward curve s -> f_u(s) at time u.

        Args:
            u (float): Observation time
            rng: numpy Generator or seed, as for advance

        Returns:
            PiecewiseFlatCurve: Curve observed at u with breakpoints t[j:]
        """
        out = self.phi.copy()
        j = self.advance(u, out, rng)
        return PiecewiseFlatCurve(self.t[j:], out[j:], observed_at=u)

    def simulate_path(self, times, rng=None) -> np.ndarray:
        """
        Walk one fresh path through the given observation times.

        Args:
            times: Non-decreasing observation times, all before the last reset time
            rng: numpy Generator or seed, as for advance

        Returns:
            np.ndarray: Array of shape (len(times), n); row i holds the curve at times[i]
                and NaN for the rates fixed by then
        """
        start_time = time.perf_counter()
        rng = np.random.default_rng(rng)
        times = np.asarray(times, dtype=np.float64)
        if np.any(np.diff(times) < 0):
            raise ValueError("observation times must be non-decreasing")

        self.reset()
        curves = np.full((len(times), self.size()), np.nan)
        for i, u in enumerate(times):
            self.advance(u, curves[i], rng)

        logging.debug(
            f"Elapsed time for simulate_path over {len(times)} dates: "
            f"{time.perf_counter() - start_time:.4f} seconds"
        )
        return curves
