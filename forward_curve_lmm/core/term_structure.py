"""
Term structure validation and lookup for the Libor market model.

This module holds the error types raised by the forward curve model and the helpers
that check and search the tenor structure. Index j of a term structure refers to the
interval (t[j-1], t[j]] with the convention t[-1] = 0, so index 0 is the cash rate that
has already fixed.
"""

import numpy as np
from numba import njit


class InvalidTermStructure(ValueError):
    """Raised when reset times, quotes, volatilities or correlation do not line up."""


class OutOfRange(IndexError):
    """Raised when a curve is requested at or beyond the last reset time."""


@njit
def first_random_index(tenors: np.ndarray, u: float) -> int:
    """
    Find the index of the first reset time strictly greater than u.

    Args:
        tenors (np.ndarray): Strictly increasing reset times
        u (float): Observation time

    Returns:
        int: The smallest j with tenors[j] > u, or len(tenors) if there is none

    Example:
        >>> first_random_index(np.array([0.0, 1.0, 2.0]), 1.0)
        2  # t[1] = 1.0 has fixed at u = 1.0
    """
    above = np.where(tenors > u)[0]
    if above.size == 0:
        return len(tenors)
    return above[0]


def validate_term_structure(tenors, phi, sigma, dimension=None) -> tuple:
    """
    Check the market data of a forward curve model and return float64 copies.

    Args:
        tenors: Reset times t[0] < t[1] < ... < t[n-1]
        phi: Futures quotes, one per reset time
        sigma: At-the-money caplet volatilities, one per reset time
        dimension (int, optional): Number of Brownian components available to drive the
            rates. Must be at least n when given.

    Returns:
        tuple: (tenors, phi, sigma) as read-only float64 arrays

    Raises:
        InvalidTermStructure: If any of the checks fails
    """
    arrays = []
    for name, values in (("t", tenors), ("phi", phi), ("sigma", sigma)):
        array = np.array(values, dtype=np.float64)
        if array.ndim != 1:
            raise InvalidTermStructure(
                f"{name} must be one-dimensional, got shape {array.shape}"
            )
        if not np.all(np.isfinite(array)):
            raise InvalidTermStructure(f"{name} must contain only finite values")
        array.flags.writeable = False
        arrays.append(array)
    tenors, phi, sigma = arrays

    n = len(tenors)
    if n < 1:
        raise InvalidTermStructure("term structure needs at least one reset time")
    if len(phi) != n or len(sigma) != n:
        raise InvalidTermStructure(
            f"t, phi and sigma must have the same length, got {n}, {len(phi)}, {len(sigma)}"
        )
    steps = np.diff(tenors)
    if np.any(steps <= 0):
        k = int(np.argmax(steps <= 0)) + 1
        raise InvalidTermStructure(
            f"t must be strictly increasing, t[{k - 1}]={tenors[k - 1]} >= t[{k}]={tenors[k]}"
        )
    if sigma[0] != 0:
        raise InvalidTermStructure(
            f"sigma[0] must be 0 for the fixed cash rate, got {sigma[0]}"
        )
    if dimension is not None and dimension < n:
        raise InvalidTermStructure(
            f"correlation dimension {dimension} is smaller than the {n} tenors it drives"
        )
    return tenors, phi, sigma
