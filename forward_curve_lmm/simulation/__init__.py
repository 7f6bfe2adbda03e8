"""
Simulation module for the Libor market model.

This module provides the correlated Brownian driver and the forward curve model that
samples the curve of futures-implied forward rates at a future time.

Available classes:
- Correlation: Validated correlation matrix with its Cholesky factor
- CorrelatedBrownianMotion: Exact sample path of correlated Brownian motion
- ForwardCurveModel: Forward curve sampler with futures/forward convexity adjustment
"""

from .brownian import CorrelatedBrownianMotion, Correlation
from .lmm import ForwardCurveModel

__all__ = [
    "Correlation",
    "CorrelatedBrownianMotion",
    "ForwardCurveModel",
]
