"""
Correlated Brownian motion for the Libor market model.

This module provides the d-dimensional Brownian driver used by the forward curve model.
Components are correlated through the Cholesky factor of a correlation matrix, and the
path is advanced with exact Gaussian increments, so any sequence of non-decreasing
observation times gives a consistent sample path.

Mathematical background:
If L L^T = rho and z ~ N(0, I), then B(u) = B(s) + sqrt(u - s) L z has the law of a
Brownian motion with instantaneous correlation rho between components.
"""

import logging

import numpy as np

CHOLESKY_JITTER = 1e-12


class Correlation:
    """Validated correlation matrix together with its Cholesky factor."""

    def __init__(self, matrix):
        matrix = np.array(matrix, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1] or matrix.shape[0] == 0:
            raise ValueError(f"correlation must be a non-empty square matrix, got shape {matrix.shape}")
        if not np.all(np.isfinite(matrix)):
            raise ValueError("correlation must contain only finite values")
        if not np.allclose(matrix, matrix.T):
            raise ValueError("correlation must be symmetric")
        if not np.allclose(np.diag(matrix), 1.0):
            raise ValueError("correlation must have a unit diagonal")
        if np.any(np.abs(matrix) > 1.0 + 1e-12):
            raise ValueError("correlation entries must lie in [-1, 1]")

        try:
            cholesky = np.linalg.cholesky(matrix)
        except np.linalg.LinAlgError:
            # positive semi-definite matrices only factor with a small diagonal shift
            try:
                cholesky = np.linalg.cholesky(
                    matrix + CHOLESKY_JITTER * np.eye(len(matrix))
                )
            except np.linalg.LinAlgError:
                raise ValueError("correlation must be positive semi-definite") from None
            logging.debug(f"Correlation of dimension {len(matrix)} factored with jitter")

        matrix.flags.writeable = False
        cholesky.flags.writeable = False
        self.matrix = matrix
        self.cholesky = cholesky

    @property
    def dimension(self) -> int:
        return self.matrix.shape[0]

    def __len__(self):
        return self.dimension

    @classmethod
    def identity(cls, dimension: int) -> "Correlation":
        """Independent components."""
        return cls(np.eye(dimension))

    @classmethod
    def exponential(cls, times, beta: float) -> "Correlation":
        """
        Build the decaying correlation rho[i, k] = exp(-beta |t_i - t_k|).

        Args:
            times: Reset times of the tenors, one per Brownian component
            beta (float): Decay rate, beta >= 0

        Returns:
            Correlation: The correlation between the tenors
        """
        if beta < 0:
            raise ValueError(f"beta must be non-negative, got {beta}")
        times = np.asarray(times, dtype=np.float64)
        return cls(np.exp(-beta * np.abs(times[:, np.newaxis] - times[np.newaxis, :])))


class CorrelatedBrownianMotion:
    """
    Sample path of a correlated d-dimensional Brownian motion.

    The driver keeps a reference to its correlation, not a copy. Its state is the current
    time and the realized values at that time; values() returns a snapshot.
    """

    def __init__(self, correlation: Correlation):
        self.correlation = correlation
        self._time = 0.0
        self._values = np.zeros(correlation.dimension)

    @property
    def dimension(self) -> int:
        return self.correlation.dimension

    @property
    def time(self) -> float:
        return self._time

    def reset(self) -> None:
        """Return to time 0 with every component at 0."""
        self._time = 0.0
        self._values = np.zeros(self.dimension)

    def advance(self, time: float, rng=None) -> None:
        """
        Move the path forward to the given time.

        Args:
            time (float): Target time, not before the current time
            rng: numpy Generator, or a seed accepted by np.random.default_rng

        Raises:
            ValueError: If time precedes the current time of the path
        """
        if time < self._time:
            raise ValueError(
                f"cannot advance Brownian motion backwards from {self._time} to {time}"
            )
        dt = time - self._time
        if dt > 0:
            rng = np.random.default_rng(rng)
            z = rng.standard_normal(self.dimension)
            self._values = self._values + np.sqrt(dt) * (self.correlation.cholesky @ z)
        self._time = float(time)

    def values(self) -> np.ndarray:
        """Realized values of every component at the current time."""
        return self._values.copy()
