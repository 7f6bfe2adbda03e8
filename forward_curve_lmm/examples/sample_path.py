"""
Sample path of the forward curve for the Libor market model.
Walks one path of quarterly futures through a grid of observation dates and logs
the sampled forwards and discount factors at each date.

Usage:
    python -m forward_curve_lmm.examples.sample_path --log-level DEBUG --seed 7
"""

import argparse
import logging

import numpy as np

from forward_curve_lmm.core.pwflat import PiecewiseFlatCurve
from forward_curve_lmm.simulation.brownian import Correlation
from forward_curve_lmm.simulation.lmm import ForwardCurveModel

# Quarterly futures strip: reset time, futures quote, ATM caplet vol
INPUTS = [
    (0.25, 0.0450, 0.00),
    (0.50, 0.0460, 0.18),
    (0.75, 0.0470, 0.19),
    (1.00, 0.0478, 0.20),
    (1.25, 0.0485, 0.20),
    (1.50, 0.0490, 0.21),
    (1.75, 0.0494, 0.21),
    (2.00, 0.0497, 0.22),
]

# Constants for the sample path
SEED = 42
BETA = 0.1  # correlation decay per year
STEP = 0.25  # spacing of observation dates


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Sample one forward curve path with configurable logging."
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    parser.add_argument("--seed", type=int, default=SEED, help="Random seed")
    parser.add_argument(
        "--beta", type=float, default=BETA, help="Exponential correlation decay"
    )
    parser.add_argument(
        "--step", type=float, default=STEP, help="Years between observation dates"
    )
    return parser.parse_args(argv)


def build_model(beta: float = BETA) -> ForwardCurveModel:
    """Build the model for the quarterly strip in INPUTS."""
    tenors, phi, sigma = (np.array(column) for column in zip(*INPUTS))
    return ForwardCurveModel(tenors, phi, sigma, Correlation.exponential(tenors, beta))


def sample_path(model: ForwardCurveModel, step: float = STEP, seed=SEED) -> list:
    """
    Walk one path and collect the curve observed at each date.

    Args:
        model (ForwardCurveModel): The model to walk
        step (float, optional): Years between observation dates. Defaults to STEP.
        seed (optional): Seed of the random generator. Defaults to SEED.

    Returns:
        list: PiecewiseFlatCurve observed at each date before the last reset time

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    rng = np.random.default_rng(seed)
    dates = np.arange(0.0, model.t[-1], step)
    curve = model.phi.copy()
    curves = []

    model.reset()
    for u in dates:
        j = model.advance(u, curve, rng)
        sampled = PiecewiseFlatCurve(model.t[j:], curve[j:], observed_at=u)
        curves.append(sampled)
        logging.info(
            f"u={u:.2f} first random tenor j={j} "
            f"forwards={np.round(curve[j:] * 100, 4).tolist()} (%) "
            f"D(u, t[-1])={sampled.discount(model.t[-1]):.6f}"
        )
    return curves


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("application.log", mode="w"),
        ],
    )
    model = build_model(args.beta)
    return sample_path(model, args.step, args.seed)


if __name__ == "__main__":
    main()
