"""
Polynomial splines: linear, quadratic and natural cubic.

Linear and quadratic splines need no cache beyond the finalized snapshot
and extrapolate with the boundary segment's own polynomial (unless the
configuration turns extrapolation off). The natural cubic spline solves
its tridiagonal system once at finalize time and clamps outside the
control range.
"""

import logging
from typing import Optional

import numpy as np
from scipy.linalg import solve_banded

from .entries import SplineKind
from .spline import GenericSpline, register_spline

logger = logging.getLogger(__name__)


@register_spline(SplineKind.LINEAR)
class LinearSpline(GenericSpline):
    """Piecewise linear interpolation between neighbouring control points"""

    min_points = 2

    def _interpolate(self, parameter: float) -> np.ndarray:
        if not self.config.extrapolate:
            end_value = self._clamp(parameter)
            if end_value is not None:
                return end_value

        i = self._segment(parameter)
        p0, p1 = self._parameters[i], self._parameters[i + 1]
        v0, v1 = self._values[i], self._values[i + 1]

        t = (parameter - p0) / (p1 - p0)
        return v0 + t * (v1 - v0)


@register_spline(SplineKind.QUADRATIC)
class QuadraticSpline(GenericSpline):
    """Piecewise quadratic Lagrange interpolation

    Segment [p_i, p_i+1] is evaluated on the parabola through points
    i-1, i and i+1; the first segment uses points 0, 1 and 2.
    """

    min_points = 3

    def _interpolate(self, parameter: float) -> np.ndarray:
        if not self.config.extrapolate:
            end_value = self._clamp(parameter)
            if end_value is not None:
                return end_value

        first = max(self._segment(parameter) - 1, 0)
        x0, x1, x2 = self._parameters[first:first + 3]
        v0, v1, v2 = self._values[first:first + 3]

        l0 = (parameter - x1) * (parameter - x2) / ((x0 - x1) * (x0 - x2))
        l1 = (parameter - x0) * (parameter - x2) / ((x1 - x0) * (x1 - x2))
        l2 = (parameter - x0) * (parameter - x1) / ((x2 - x0) * (x2 - x1))

        return l0 * v0 + l1 * v1 + l2 * v2


@register_spline(SplineKind.NATURAL)
class NaturalSpline(GenericSpline):
    """Natural cubic spline (zero second derivative at both ends)

    The cache holds the second derivative of every component at every
    control point.
    """

    min_points = 2

    def __init__(self, config=None):
        super().__init__(config)
        self._second_derivatives: Optional[np.ndarray] = None

    def _precompute(self):
        x, y = self._parameters, self._values
        n = len(x)
        h = np.diff(x)

        second = np.zeros_like(y)
        if n > 2:
            slopes = np.diff(y, axis=0) / h[:, np.newaxis]
            rhs = 6.0 * np.diff(slopes, axis=0)

            # Symmetric tridiagonal system for the interior second derivatives
            bands = np.zeros((3, n - 2))
            bands[0, 1:] = h[1:-1]
            bands[1, :] = 2.0 * (h[:-1] + h[1:])
            bands[2, :-1] = h[1:-1]

            second[1:-1] = solve_banded((1, 1), bands, rhs)
            logger.debug(f"Solved natural spline system for {n - 2} interior points")

        self._second_derivatives = second

    def _clear_cache(self):
        self._second_derivatives = None

    def _interpolate(self, parameter: float) -> np.ndarray:
        end_value = self._clamp(parameter)
        if end_value is not None:
            return end_value

        i = self._segment(parameter)
        x0, x1 = self._parameters[i], self._parameters[i + 1]
        m0, m1 = self._second_derivatives[i], self._second_derivatives[i + 1]
        h = x1 - x0

        a = (x1 - parameter) / h
        b = (parameter - x0) / h
        return (a * self._values[i] + b * self._values[i + 1]
                + ((a ** 3 - a) * m0 + (b ** 3 - b) * m1) * (h * h) / 6.0)
