"""
Hermite-family cubic splines

Catmull-Rom and Kochanek-Bartels (TCB) splines interpolate every control
point with cubic Hermite segments; the end points are duplicated to supply
the missing neighbour. With all tension, bias and continuity values at zero
the TCB tangents reduce exactly to the Catmull-Rom ones.

The SOR and Akima splines share a four-coefficient cache: every segment
stores the cubic a + b*u + c*u^2 + d*u^3 (u = parameter - segment start)
for each component. They differ only in how the slopes at the control
points are derived.
"""

import logging
from abc import abstractmethod
from typing import List, Optional, Tuple

import numpy as np

from .entries import ExtensionTag, SplineKind, TcbParam
from .spline import GenericSpline, register_spline
from ..exceptions import ExtensionMismatch, InvalidNumeric

logger = logging.getLogger(__name__)

def hermite(t: float, v0: np.ndarray, v1: np.ndarray,
            m0: np.ndarray, m1: np.ndarray) -> np.ndarray:
    """Cubic Hermite blend on t in [0, 1]; tangents are per unit of t"""
    t2 = t * t
    t3 = t2 * t
    return ((2.0 * t3 - 3.0 * t2 + 1.0) * v0
            + (t3 - 2.0 * t2 + t) * m0
            + (-2.0 * t3 + 3.0 * t2) * v1
            + (t3 - t2) * m1)

def kochanek_bartels_tangents(parameters: np.ndarray, values: np.ndarray,
                              incoming: np.ndarray,
                              outgoing: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Incoming and outgoing tangents at every control point

    Args:
        parameters: Control-point parameters, shape (n,)
        values: Control-point values, shape (n, terms)
        incoming: (tension, bias, continuity) rows for the incoming tangents
        outgoing: (tension, bias, continuity) rows for the outgoing tangents

    Returns:
        (incoming, outgoing) tangents, each (n, terms). The incoming tangent
        at i is scaled to segment i-1, the outgoing one to segment i.
    """
    steps = np.diff(values, axis=0)
    spacing = np.diff(parameters)
    edge = np.zeros((1, values.shape[1]))

    # End points are duplicated, so their missing difference is zero
    backward = np.vstack([edge, steps])
    forward = np.vstack([steps, edge])
    h_back = np.concatenate([[0.0], spacing])
    h_fwd = np.concatenate([spacing, [0.0]])
    span = h_back + h_fwd

    tension, bias, continuity = incoming.T
    in_back = (1.0 - tension) * (1.0 - continuity) * (1.0 + bias) / 2.0
    in_fwd = (1.0 - tension) * (1.0 + continuity) * (1.0 - bias) / 2.0

    tension, bias, continuity = outgoing.T
    out_back = (1.0 - tension) * (1.0 + continuity) * (1.0 + bias) / 2.0
    out_fwd = (1.0 - tension) * (1.0 - continuity) * (1.0 - bias) / 2.0

    tangents_in = in_back[:, None] * backward + in_fwd[:, None] * forward
    tangents_out = out_back[:, None] * backward + out_fwd[:, None] * forward

    # Adjust for uneven parameter spacing
    tangents_in *= (2.0 * h_back / span)[:, None]
    tangents_out *= (2.0 * h_fwd / span)[:, None]

    return tangents_in, tangents_out


@register_spline(SplineKind.CATMULL_ROM)
class CatmullRomSpline(GenericSpline):
    """Catmull-Rom spline with chord tangents computed per query"""

    min_points = 4

    def _tangent(self, i: int, length: float) -> np.ndarray:
        """Tangent at point i scaled to a segment of the given length"""
        before = max(i - 1, 0)
        after = min(i + 1, len(self._parameters) - 1)
        chord = self._values[after] - self._values[before]
        return chord * (length / (self._parameters[after] - self._parameters[before]))

    def _interpolate(self, parameter: float) -> np.ndarray:
        end_value = self._clamp(parameter)
        if end_value is not None:
            return end_value

        i = self._segment(parameter)
        p0, p1 = self._parameters[i], self._parameters[i + 1]
        length = p1 - p0

        return hermite((parameter - p0) / length,
                       self._values[i], self._values[i + 1],
                       self._tangent(i, length), self._tangent(i + 1, length))


class FourCoefficientSpline(GenericSpline):
    """Cubic segments cached as four polynomial coefficients per component"""

    min_points = 4

    def __init__(self, config=None):
        super().__init__(config)
        self._coefficients: Optional[np.ndarray] = None

    @abstractmethod
    def _slopes(self, parameters: np.ndarray, values: np.ndarray) -> np.ndarray:
        """Derivative with respect to the parameter at every control point"""

    def _precompute(self):
        x, y = self._parameters, self._values
        h = np.diff(x)[:, np.newaxis]
        secant = np.diff(y, axis=0) / h
        slopes = self._slopes(x, y)
        m0, m1 = slopes[:-1], slopes[1:]

        coefficients = np.empty((len(x) - 1, y.shape[1], 4))
        coefficients[..., 0] = y[:-1]
        coefficients[..., 1] = m0
        coefficients[..., 2] = (3.0 * secant - 2.0 * m0 - m1) / h
        coefficients[..., 3] = (m0 + m1 - 2.0 * secant) / (h * h)
        self._coefficients = coefficients

    def _clear_cache(self):
        self._coefficients = None

    def interpolate(self, i: int, k: int, offset: float) -> float:
        """Component k of segment i at the given distance past its start"""
        a, b, c, d = self._coefficients[i, k]
        return a + offset * (b + offset * (c + offset * d))

    def _evaluate_segment(self, i: int, parameter: float) -> np.ndarray:
        offset = parameter - self._parameters[i]
        return np.array([self.interpolate(i, k, offset) for k in range(self.terms)])


@register_spline(SplineKind.SOR)
class SorSpline(FourCoefficientSpline):
    """Surface-of-revolution style spline

    Slopes are centered finite differences. The first and last control
    points only steer the end slopes: the curve runs from the second to the
    second-to-last point and holds their values outside that range.
    """

    def _slopes(self, parameters: np.ndarray, values: np.ndarray) -> np.ndarray:
        slopes = np.empty_like(values)
        slopes[1:-1] = ((values[2:] - values[:-2])
                        / (parameters[2:] - parameters[:-2])[:, np.newaxis])
        # Only reached by the guide segments, which are never evaluated
        slopes[0] = (values[1] - values[0]) / (parameters[1] - parameters[0])
        slopes[-1] = (values[-1] - values[-2]) / (parameters[-1] - parameters[-2])
        return slopes

    def _interpolate(self, parameter: float) -> np.ndarray:
        if parameter <= self._parameters[1]:
            return self._values[1].copy()
        if parameter >= self._parameters[-2]:
            return self._values[-2].copy()
        return self._evaluate_segment(self._segment(parameter), parameter)


@register_spline(SplineKind.AKIMA)
class AkimaSpline(FourCoefficientSpline):
    """Akima spline: slope selection that damps overshoot near outliers

    Segment slopes are extended by two quadratic extrapolations past each
    end so every control point sees four neighbouring secants.
    """

    def _slopes(self, parameters: np.ndarray, values: np.ndarray) -> np.ndarray:
        n = len(parameters)
        secants = np.diff(values, axis=0) / np.diff(parameters)[:, np.newaxis]

        padded = np.empty((n + 3, values.shape[1]))
        padded[2:n + 1] = secants
        padded[1] = 2.0 * secants[0] - secants[1]
        padded[0] = 2.0 * padded[1] - secants[0]
        padded[n + 1] = 2.0 * secants[-1] - secants[-2]
        padded[n + 2] = 2.0 * padded[n + 1] - secants[-1]

        before, after = padded[1:n + 1], padded[2:n + 2]
        w_before = np.abs(padded[3:] - padded[2:-1])
        w_after = np.abs(padded[1:-2] - padded[:-3])
        total = w_before + w_after

        flat = total == 0.0
        weighted = (w_before * before + w_after * after) / np.where(flat, 1.0, total)
        return np.where(flat, 0.5 * (before + after), weighted)

    def _interpolate(self, parameter: float) -> np.ndarray:
        end_value = self._clamp(parameter)
        if end_value is not None:
            return end_value
        return self._evaluate_segment(self._segment(parameter), parameter)


@register_spline(SplineKind.TCB)
class TcbSpline(GenericSpline):
    """Kochanek-Bartels spline

    Every control point carries an incoming and an outgoing
    tension/bias/continuity triple. The cache holds both tangent sets.
    """

    extension_tag = ExtensionTag.TCB
    min_points = 2

    def __init__(self, config=None):
        super().__init__(config)
        self.incoming: List[TcbParam] = []
        self.outgoing: List[TcbParam] = []
        self._tangents_in: Optional[np.ndarray] = None
        self._tangents_out: Optional[np.ndarray] = None

    def _prepare_extension(self, extension):
        if (not isinstance(extension, (tuple, list)) or len(extension) != 2
                or not all(isinstance(item, TcbParam) for item in extension)):
            raise ExtensionMismatch(
                "tcb_spline needs an (incoming, outgoing) pair of TcbParam",
                expected="(TcbParam, TcbParam)",
                received=type(extension).__name__
            )
        for side, params in zip(("incoming", "outgoing"), extension):
            if not np.all(np.isfinite(params.as_tuple())):
                raise InvalidNumeric("tension/bias/continuity must be finite",
                                     name=side, value=params.as_tuple())
        return tuple(extension)

    def _insert_extension(self, index: int, extension):
        incoming, outgoing = extension
        self.incoming.insert(index, incoming)
        self.outgoing.insert(index, outgoing)

    def _copy_extensions(self, other: "TcbSpline"):
        other.incoming = list(self.incoming)
        other.outgoing = list(self.outgoing)

    def _clear_extensions(self):
        self.incoming.clear()
        self.outgoing.clear()

    def _precompute(self):
        incoming = np.array([params.as_tuple() for params in self.incoming], dtype=float)
        outgoing = np.array([params.as_tuple() for params in self.outgoing], dtype=float)
        self._tangents_in, self._tangents_out = kochanek_bartels_tangents(
            self._parameters, self._values, incoming, outgoing
        )
        logger.debug(f"Computed TCB tangents for {len(self._parameters)} points")

    def _clear_cache(self):
        self._tangents_in = None
        self._tangents_out = None

    def _interpolate(self, parameter: float) -> np.ndarray:
        end_value = self._clamp(parameter)
        if end_value is not None:
            return end_value

        i = self._segment(parameter)
        p0, p1 = self._parameters[i], self._parameters[i + 1]

        return hermite((parameter - p0) / (p1 - p0),
                       self._values[i], self._values[i + 1],
                       self._tangents_out[i], self._tangents_in[i + 1])
