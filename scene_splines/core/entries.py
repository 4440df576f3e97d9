"""
Control-point data model

The ordered (parameter, value) store shared by every spline variant, plus
the auxiliary per-point records some variants need.
"""

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

import numpy as np


class ExtensionTag(Enum):
    """Which extension data an insertion has to carry"""
    NONE = "none"
    TCB = "tcb"
    GLOBAL_SHAPE = "global_shape"
    PER_POINT_SHAPE = "per_point_shape"


class SplineKind(Enum):
    """The closed set of spline variants"""
    LINEAR = "linear_spline"
    QUADRATIC = "quadratic_spline"
    NATURAL = "natural_spline"
    CATMULL_ROM = "catmull_rom_spline"
    SOR = "sor_spline"
    AKIMA = "akima_spline"
    TCB = "tcb_spline"
    BASIC_XSPLINE = "basic_x_spline"
    EXTENDED_XSPLINE = "extended_x_spline"
    GENERAL_XSPLINE = "general_x_spline"

    @classmethod
    def from_keyword(cls, keyword: str) -> "SplineKind":
        """Map a scene-language keyword (or enum name) to a kind"""
        key = keyword.strip().lower()
        if key in _KEYWORD_ALIASES:
            return _KEYWORD_ALIASES[key]
        for kind in cls:
            if key in (kind.value, kind.name.lower()):
                return kind
        raise ValueError(f"Unknown spline kind: {keyword}. "
                         f"Available: {[kind.value for kind in cls]}")


_KEYWORD_ALIASES = {
    'cubic_spline': SplineKind.CATMULL_ROM,
}


@dataclass(frozen=True)
class TcbParam:
    """Kochanek-Bartels tension/bias/continuity triple"""
    tension: float = 0.0
    bias: float = 0.0
    continuity: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.tension, self.bias, self.continuity)


@dataclass(frozen=True)
class ShapeParam:
    """X-spline shape ("freedom") value"""
    value: float = 0.0


@dataclass(frozen=True)
class ControlPoint:
    parameter: float
    value: Tuple[float, ...]


class ControlPointStore:
    """Control points kept in ascending parameter order

    Points with equal parameters keep their insertion order. The store only
    grows; there is no removal.
    """

    def __init__(self):
        self._parameters: List[float] = []
        self._values: List[np.ndarray] = []

    def insert(self, parameter: float, value: np.ndarray) -> int:
        """Insert a point and return the index it landed at"""
        index = bisect_right(self._parameters, parameter)
        self._parameters.insert(index, parameter)
        self._values.insert(index, np.array(value, dtype=float))
        return index

    def __len__(self) -> int:
        return len(self._parameters)

    def __iter__(self) -> Iterator[ControlPoint]:
        for parameter, value in zip(self._parameters, self._values):
            yield ControlPoint(parameter, tuple(value.tolist()))

    def __getitem__(self, index: int) -> ControlPoint:
        return ControlPoint(self._parameters[index], tuple(self._values[index].tolist()))

    @property
    def parameters(self) -> Tuple[float, ...]:
        return tuple(self._parameters)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Snapshot as (parameters with shape (n,), values with shape (n, terms))"""
        parameters = np.array(self._parameters, dtype=float)
        values = np.vstack(self._values) if self._values else np.empty((0, 0))
        return parameters, values

    def copy(self) -> "ControlPointStore":
        clone = ControlPointStore()
        clone._parameters = list(self._parameters)
        clone._values = [value.copy() for value in self._values]
        return clone

    def clear(self):
        self._parameters.clear()
        self._values.clear()
