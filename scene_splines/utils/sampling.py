"""
Sampling Utilities

Evaluate a spline over many parameters at once, e.g. to tabulate an
animation track or to plot a curve.
"""

import logging
from typing import Tuple

import numpy as np

from ..api import evaluate
from ..core import GenericSpline

logger = logging.getLogger(__name__)

def evaluate_range(spline: GenericSpline, parameters) -> np.ndarray:
    """Evaluate at every parameter

    Args:
        spline: Spline to evaluate (finalized lazily when the config allows)
        parameters: 1-D array-like of parameters

    Returns:
        Array of shape (len(parameters), terms)
    """
    parameters = np.atleast_1d(np.asarray(parameters, dtype=float))
    if parameters.ndim != 1:
        raise ValueError(f"parameters must be one-dimensional, got shape {parameters.shape}")

    if parameters.size == 0:
        return np.empty((0, spline.terms))

    rows = [evaluate(spline, parameter)[0] for parameter in parameters]
    return np.vstack(rows)

def sample_uniform(spline: GenericSpline, samples: int = 100,
                   margin: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
    """Sample evenly across the control-point range

    Args:
        spline: Spline to sample
        samples: Number of samples (at least 2)
        margin: Fraction of the range added on both sides, to show the
            out-of-range behaviour

    Returns:
        (parameters, values) with shapes (samples,) and (samples, terms)
    """
    if samples < 2:
        raise ValueError(f"samples must be at least 2, got {samples}")

    first, last = spline.domain
    extra = (last - first) * margin
    parameters = np.linspace(first - extra, last + extra, samples)

    logger.debug(f"Sampling {spline.kind.value} at {samples} parameters")
    return parameters, evaluate_range(spline, parameters)
