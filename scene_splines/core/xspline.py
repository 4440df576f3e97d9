"""
X-splines (Blanc & Schlick blending splines)

Each segment [p_i, p_i+1] blends the four control points i-1 .. i+2 with
weights controlled by the shape values of its two end points:

- shape 0 passes through the control point,
- a positive shape (up to 1) pulls the curve smoothly past it, like a
  B-spline,
- a negative shape (extended X-splines only, down to -1) keeps the curve
  on the point but sharpens it towards a corner.

The first and last control points always act with shape 0 so the curve
starts and ends on them. Weighted sums are normalised by the weight total.
"""

import logging
from abc import abstractmethod
from typing import List, Tuple

import numpy as np

from .entries import ExtensionTag, ShapeParam, SplineKind
from .spline import GenericSpline, register_spline
from ..exceptions import ExtensionMismatch, InvalidNumeric

logger = logging.getLogger(__name__)

Weights = Tuple[float, float, float, float]

def f_blend(numerator: float, denominator: float, p: float) -> float:
    """Quintic blending used by approximating (positive) shapes"""
    u = numerator / denominator
    u2 = u * u
    return u * u2 * (10.0 - p + (2.0 * p - 15.0) * u + (6.0 - p) * u2)

def g_blend(u: float, q: float) -> float:
    """Blending of the two inner points around a negative shape"""
    return u * (q + u * (2.0 * q + u * (8.0 - 12.0 * q + u * (14.0 * q - 11.0 + u * (4.0 - 5.0 * q)))))

def h_blend(u: float, q: float) -> float:
    """Blending of the outer points around a negative shape"""
    u2 = u * u
    return u * (q + u * (2.0 * q + u2 * (-2.0 * q - u * q)))


class XSplineBase(GenericSpline):
    """Shared segment evaluation for the three X-spline variants"""

    min_points = 2
    shape_range = (0.0, 1.0)

    @abstractmethod
    def _shape(self, i: int) -> float:
        """Shape value of control point i"""

    @abstractmethod
    def _weights(self, t: float, s1: float, s2: float) -> Weights:
        """Blending weights of points i-1, i, i+1, i+2 at local t"""

    def _check_shape(self, extension) -> ShapeParam:
        if not isinstance(extension, ShapeParam):
            raise ExtensionMismatch(
                f"{self.kind.value} needs a ShapeParam",
                expected="ShapeParam",
                received=type(extension).__name__
            )

        value = float(extension.value)
        if not np.isfinite(value):
            raise InvalidNumeric("shape must be finite", name="shape", value=value)

        low, high = self.shape_range
        if low <= value <= high:
            return extension
        if not self.config.clamp_shapes:
            raise InvalidNumeric(f"shape must lie in [{low}, {high}] for {self.kind.value}",
                                 name="shape", value=value)

        clamped = min(max(value, low), high)
        logger.warning(f"{self.kind.value}: shape {value} clamped to {clamped}")
        return ShapeParam(clamped)

    def _interpolate(self, parameter: float) -> np.ndarray:
        end_value = self._clamp(parameter)
        if end_value is not None:
            return end_value

        n = len(self._parameters)
        i = self._segment(parameter)
        t = (parameter - self._parameters[i]) / (self._parameters[i + 1] - self._parameters[i])

        # End points always behave as interpolating nodes
        s1 = 0.0 if i == 0 else self._shape(i)
        s2 = 0.0 if i + 1 == n - 1 else self._shape(i + 1)

        weights = np.array(self._weights(t, s1, s2))
        points = self._values[[max(i - 1, 0), i, i + 1, min(i + 2, n - 1)]]
        return weights @ points / weights.sum()


class PerPointXSpline(XSplineBase):
    """X-spline with one shape value per control point"""

    extension_tag = ExtensionTag.PER_POINT_SHAPE

    def __init__(self, config=None):
        super().__init__(config)
        self.shapes: List[ShapeParam] = []

    def _shape(self, i: int) -> float:
        return self.shapes[i].value

    def _prepare_extension(self, extension):
        return self._check_shape(extension)

    def _insert_extension(self, index: int, extension):
        self.shapes.insert(index, extension)

    def _copy_extensions(self, other: "PerPointXSpline"):
        other.shapes = list(self.shapes)

    def _clear_extensions(self):
        self.shapes.clear()


@register_spline(SplineKind.BASIC_XSPLINE)
class BasicXSpline(XSplineBase):
    """X-spline sharing one global shape between all control points

    Every insertion carries a shape; the most recent one becomes the
    global shape. Blending uses the constant exponent p = 2.
    """

    extension_tag = ExtensionTag.GLOBAL_SHAPE

    def __init__(self, config=None):
        super().__init__(config)
        self.shape = ShapeParam()

    def _shape(self, i: int) -> float:
        return self.shape.value

    def _prepare_extension(self, extension):
        return self._check_shape(extension)

    def _insert_extension(self, index: int, extension):
        self.shape = extension

    def _copy_extensions(self, other: "BasicXSpline"):
        other.shape = self.shape

    def _clear_extensions(self):
        self.shape = ShapeParam()

    def _weights(self, t: float, s1: float, s2: float) -> Weights:
        a0 = f_blend(t - s1, -1.0 - s1, 2.0) if t < s1 else 0.0
        a2 = f_blend(t + s1, 1.0 + s1, 2.0)
        a1 = f_blend(t - 1.0 - s2, -1.0 - s2, 2.0)
        a3 = f_blend(t - 1.0 + s2, 1.0 + s2, 2.0) if t > 1.0 - s2 else 0.0
        return a0, a1, a2, a3


def _general_s1(t: float, s1: float) -> Tuple[float, float]:
    """Weights of points i-1 and i+1 from a non-negative shape at point i"""
    den = -1.0 - s1
    a0 = f_blend(t - s1, den, 2.0 * den * den) if t < s1 else 0.0
    den = 1.0 + s1
    a2 = f_blend(t + s1, den, 2.0 * den * den)
    return a0, a2

def _general_s2(t: float, s2: float) -> Tuple[float, float]:
    """Weights of points i and i+2 from a non-negative shape at point i+1"""
    den = -1.0 - s2
    a1 = f_blend(t - 1.0 - s2, den, 2.0 * den * den)
    den = 1.0 + s2
    a3 = f_blend(t - 1.0 + s2, den, 2.0 * den * den) if t > 1.0 - s2 else 0.0
    return a1, a3


@register_spline(SplineKind.GENERAL_XSPLINE)
class GeneralXSpline(PerPointXSpline):
    """Per-point shapes in [0, 1], exponent p = 2 (1 + s)^2"""

    def _weights(self, t: float, s1: float, s2: float) -> Weights:
        a0, a2 = _general_s1(t, s1)
        a1, a3 = _general_s2(t, s2)
        return a0, a1, a2, a3


@register_spline(SplineKind.EXTENDED_XSPLINE)
class ExtendedXSpline(PerPointXSpline):
    """Per-point shapes in [-1, 1]; negative shapes produce corners"""

    shape_range = (-1.0, 1.0)

    def _weights(self, t: float, s1: float, s2: float) -> Weights:
        if s1 < 0.0:
            q = -s1 / 2.0
            a0, a2 = h_blend(-t, q), g_blend(t, q)
        else:
            a0, a2 = _general_s1(t, s1)

        if s2 < 0.0:
            q = -s2 / 2.0
            a1, a3 = g_blend(1.0 - t, q), h_blend(t - 1.0, q)
        else:
            a1, a3 = _general_s2(t, s2)

        return a0, a1, a2, a3
