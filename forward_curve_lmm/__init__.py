"""
Libor market model forward curve sampling.

This package samples the forward curve of a Libor market model at an arbitrary future
time. Futures quotes follow correlated geometric Brownian motions and a convexity
adjustment turns each futures quote into a forward rate.

Key components:
- Term structure validation and the errors raised by the model
- Numba-compiled kernels for futures quotes and convexity adjustments
- Piecewise flat forward curves and their discount factors
- Correlated Brownian driver and the forward curve model itself

"""

# Import core functions
from .core.pwflat import PiecewiseFlatCurve, discount, forward, integral
from .core.rates import convexity_adjustment, forward_rates, futures_rates
from .core.term_structure import (
    InvalidTermStructure,
    OutOfRange,
    first_random_index,
    validate_term_structure,
)

# Import simulation classes
from .simulation.brownian import CorrelatedBrownianMotion, Correlation
from .simulation.lmm import ForwardCurveModel

__all__ = [
    # Core functions
    "first_random_index",
    "validate_term_structure",
    "futures_rates",
    "convexity_adjustment",
    "forward_rates",
    "forward",
    "integral",
    "discount",
    "PiecewiseFlatCurve",
    # Errors
    "InvalidTermStructure",
    "OutOfRange",
    # Simulation classes
    "Correlation",
    "CorrelatedBrownianMotion",
    "ForwardCurveModel",
]
