"""
Scene Splines Base Spline

The abstract interface every spline variant implements, and the factory
that maps a SplineKind to its variant class. Evaluation is split into two
phases: finalize() rebuilds the coefficient cache and is the only mutating
step; get() is a pure read that requires a finalized spline, so many
renderer threads can share one instance once it has been finalized.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type, Union

import numpy as np

from .entries import ControlPointStore, ExtensionTag, SplineKind
from ..config import SplineConfig, get_default_config
from ..exceptions import (
    DimensionMismatch,
    EmptySpline,
    ExtensionMismatch,
    InsufficientControlPoints,
    InvalidNumeric,
    SplineNotFinalized,
    SplineReleasedError,
    handle_numeric_error,
    validate_parameter,
    validate_value,
)

logger = logging.getLogger(__name__)

_REGISTRY: Dict[SplineKind, Type["GenericSpline"]] = {}

def register_spline(kind: SplineKind):
    """Class decorator binding a variant class to its kind"""
    def decorator(cls):
        cls.kind = kind
        _REGISTRY[kind] = cls
        return cls
    return decorator

def create(kind: Union[SplineKind, str], config: Optional[SplineConfig] = None) -> "GenericSpline":
    """Construct an empty spline of the given kind (reference count 0)"""
    if isinstance(kind, str):
        kind = SplineKind.from_keyword(kind)
    try:
        spline_class = _REGISTRY[kind]
    except KeyError:
        raise ValueError(f"No spline registered for {kind}") from None
    return spline_class(config)


class GenericSpline(ABC):
    """
    Base class for all spline variants

    Owns the control-point store, the extension stores of its variant, the
    coefficient cache and the reference count. Subclasses provide the
    precompute and interpolate steps and declare their extension tag and
    minimum number of control points.
    """

    kind: SplineKind = None
    extension_tag = ExtensionTag.NONE
    min_points = 2

    def __init__(self, config: Optional[SplineConfig] = None):
        self.config = (config or get_default_config()).validate()
        self.entries = ControlPointStore()
        self.terms = 0
        self.ref_count = 0

        self._stale = True
        self._destroyed = False

        # Snapshot of the store taken by finalize()
        self._parameters: Optional[np.ndarray] = None
        self._values: Optional[np.ndarray] = None

        logger.debug(f"Created {self.kind.value if self.kind else type(self).__name__}")

    def __repr__(self):
        return (f"{type(self).__name__}(points={len(self.entries)}, terms={self.terms}, "
                f"refs={self.ref_count}, finalized={not self._stale})")

    def __len__(self):
        return len(self.entries)

    @property
    def finalized(self) -> bool:
        return not self._stale

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ---- build phase -------------------------------------------------------

    def insert(self, parameter, value, extension=None) -> int:
        """Insert a control point, returning its index in parameter order

        Args:
            parameter: Curve parameter of the point
            value: Value vector (1 to max_terms components, or a scalar)
            extension: Extension data required by the variant's tag

        Returns:
            Index at which the point was stored
        """
        self._check_alive()
        self._check_extension_present(extension)

        parameter = validate_parameter(parameter)
        value = validate_value(value, self.config.max_terms)

        if self.terms and value.size != self.terms:
            raise DimensionMismatch(
                "all control points of a spline must have the same width",
                expected_terms=self.terms,
                received_terms=value.size
            )

        # Validated before touching the store so a failed insert leaves no trace
        extension = self._prepare_extension(extension)

        index = self.entries.insert(parameter, value)
        self._insert_extension(index, extension)
        self.terms = value.size
        self.invalidate()
        return index

    def invalidate(self):
        """Mark the coefficient cache stale"""
        self._stale = True
        self._parameters = None
        self._values = None
        self._clear_cache()

    @handle_numeric_error
    def finalize(self) -> "GenericSpline":
        """Rebuild the coefficient cache from the current stores

        Must run single-threaded, before the spline is shared with
        concurrent readers.
        """
        self._check_alive()
        self._check_point_count()

        parameters, values = self.entries.as_arrays()
        gaps = np.diff(parameters)
        if np.any(gaps <= 0.0):
            duplicate = float(parameters[1:][gaps <= 0.0][0])
            raise InvalidNumeric("coincident control-point parameters give a zero-length segment",
                                 name="parameter", value=duplicate)

        self._parameters = parameters
        self._values = values
        self._precompute()
        self._stale = False

        logger.debug(f"Finalized {self.kind.value} with {len(parameters)} points, {self.terms} terms")
        return self

    def clone(self) -> "GenericSpline":
        """Independent deep copy with a stale cache and a single owner"""
        self._check_alive()
        other = create(self.kind, dataclasses.replace(self.config))
        other.entries = self.entries.copy()
        other.terms = self.terms
        self._copy_extensions(other)
        other.ref_count = 1
        return other

    # ---- evaluation phase --------------------------------------------------

    def get(self, parameter) -> np.ndarray:
        """Evaluate the curve; pure, requires finalize() after the last insert

        Returns:
            Array of `terms` components
        """
        self._check_alive()
        self._check_point_count()
        parameter = validate_parameter(parameter)

        if self._stale:
            raise SplineNotFinalized(spline_kind=self.kind.value)

        return self._interpolate(parameter)

    __call__ = get

    @property
    def domain(self):
        """(first, last) control-point parameter"""
        parameters = self.entries.parameters
        if not parameters:
            raise EmptySpline(spline_kind=self.kind.value)
        return parameters[0], parameters[-1]

    # ---- variant hooks -----------------------------------------------------

    def _precompute(self):
        """Fill the coefficient cache from self._parameters/self._values"""

    def _clear_cache(self):
        """Drop the coefficient cache"""

    @abstractmethod
    def _interpolate(self, parameter: float) -> np.ndarray:
        """Evaluate a finalized spline at a validated parameter"""

    def _prepare_extension(self, extension):
        return extension

    def _insert_extension(self, index: int, extension):
        pass

    def _copy_extensions(self, other: "GenericSpline"):
        pass

    def _clear_extensions(self):
        pass

    # ---- shared helpers ----------------------------------------------------

    def _segment(self, parameter: float) -> int:
        """Index i of the segment [p_i, p_i+1] holding the parameter

        Parameters outside the control range map to the boundary segments.
        """
        index = int(np.searchsorted(self._parameters, parameter, side='right')) - 1
        return min(max(index, 0), len(self._parameters) - 2)

    def _clamp(self, parameter: float) -> Optional[np.ndarray]:
        """End-point value for parameters outside the control range, else None"""
        if parameter <= self._parameters[0]:
            return self._values[0].copy()
        if parameter >= self._parameters[-1]:
            return self._values[-1].copy()
        return None

    def _check_alive(self):
        if self._destroyed:
            raise SplineReleasedError(spline_kind=self.kind.value)

    def _check_point_count(self):
        count = len(self.entries)
        if count == 0:
            raise EmptySpline(spline_kind=self.kind.value)
        if count < self.min_points:
            raise InsufficientControlPoints(
                f"{self.kind.value} needs at least {self.min_points} control points",
                spline_kind=self.kind.value,
                required=self.min_points,
                available=count
            )

    def _check_extension_present(self, extension):
        if self.extension_tag is ExtensionTag.NONE and extension is not None:
            raise ExtensionMismatch(
                f"{self.kind.value} takes no extension data",
                expected=ExtensionTag.NONE.value,
                received=type(extension).__name__
            )
        if self.extension_tag is not ExtensionTag.NONE and extension is None:
            raise ExtensionMismatch(
                f"{self.kind.value} requires extension data on every control point",
                expected=self.extension_tag.value,
                received="nothing"
            )

    def _teardown(self):
        """Free all stores and the cache; the instance is unusable afterwards"""
        self.entries.clear()
        self._clear_extensions()
        self.invalidate()
        self.terms = 0
        self.ref_count = 0
        self._destroyed = True
        logger.debug(f"Destroyed {self.kind.value}")
