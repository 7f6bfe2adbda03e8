"""
Forward rate calculations for the Libor market model.

This module provides the kernels that turn a realized Brownian sample into futures
quotes and forward rates for the tenors that have not fixed yet.

Mathematical background:
The futures quote of the k-th interval follows a driftless geometric Brownian motion
Phi_k(u) = phi_k exp(sigma_k B_k(u) - sigma_k^2 u / 2).
The k-th future settles at t[k-1], and the forward over (t[k-1], t[k]] is obtained by
removing the convexity bias F_k(u) = Phi_k(u) - sigma_k^2 (t[k-1] - u)^2 / 2.
"""

import numpy as np
from numba import njit


@njit
def futures_rates(
    u: float, phi: np.ndarray, sigma: np.ndarray, brownian: np.ndarray, start: int
) -> np.ndarray:
    """
    Calculate the futures quotes at time u for the tenors start..n-1.

    Args:
        u (float): Observation time
        phi (np.ndarray): Futures quotes at time 0
        sigma (np.ndarray): At-the-money caplet volatilities
        brownian (np.ndarray): Realized correlated Brownian values at time u
        start (int): Index of the first tenor to evaluate

    Returns:
        np.ndarray: Futures quotes Phi_k(u) for k = start..n-1
    """
    n = len(phi)
    futures = np.empty(n - start)
    for k in range(start, n):
        futures[k - start] = phi[k] * np.exp(
            sigma[k] * brownian[k] - sigma[k] * sigma[k] * u / 2
        )
    return futures


@njit
def convexity_adjustment(
    u: float, tenors: np.ndarray, sigma: np.ndarray, start: int
) -> np.ndarray:
    """
    Calculate the futures to forward convexity correction for the tenors start..n-1.

    The correction for the cash rate (index 0) is zero.

    Args:
        u (float): Observation time
        tenors (np.ndarray): Reset times
        sigma (np.ndarray): At-the-money caplet volatilities
        start (int): Index of the first tenor to evaluate

    Returns:
        np.ndarray: Non-negative corrections sigma_k^2 (t[k-1] - u)^2 / 2
    """
    n = len(tenors)
    adjustment = np.zeros(n - start)
    for k in range(max(start, 1), n):
        dt = tenors[k - 1] - u  # k-th future settles at t[k-1]
        adjustment[k - start] = sigma[k] * sigma[k] * dt * dt / 2
    return adjustment


@njit
def forward_rates(
    u: float,
    tenors: np.ndarray,
    phi: np.ndarray,
    sigma: np.ndarray,
    brownian: np.ndarray,
    start: int,
    out: np.ndarray,
) -> None:
    """
    Write the forward curve sampled at time u into out[start:].

    Entries before start are left as they are.

    Args:
        u (float): Observation time
        tenors (np.ndarray): Reset times
        phi (np.ndarray): Futures quotes at time 0
        sigma (np.ndarray): At-the-money caplet volatilities
        brownian (np.ndarray): Realized correlated Brownian values at time u
        start (int): Index of the first tenor that has not fixed
        out (np.ndarray): Buffer of length n receiving the forward rates
    """
    out[start:] = futures_rates(u, phi, sigma, brownian, start) - convexity_adjustment(
        u, tenors, sigma, start
    )
