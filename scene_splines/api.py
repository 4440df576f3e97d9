"""
Scene Splines High-Level API

The free functions a scene-description front-end uses to build, evaluate
and dispose of splines without knowing the concrete variant. A "handle" is
the spline instance itself.

Typical flow:

    >>> spline = create_spline("natural_spline")
    >>> get_extension_tag(spline)
    <ExtensionTag.NONE: 'none'>
    >>> insert_entry(spline, 0.0, [0.0, 1.0])
    >>> insert_entry(spline, 1.0, [2.0, 3.0])
    >>> _ = finalize(spline)        # once, before concurrent evaluation
    >>> value, terms = evaluate(spline, 0.5)
    >>> destroyed = release_reference(spline)   # last owner gone
"""

import logging
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .config import SplineConfig
from .core import (
    ExtensionTag,
    GenericSpline,
    ShapeParam,
    SplineKind,
    TcbParam,
    acquire_reference,
    copy_spline,
    create,
    destroy_spline,
    release_reference,
)
from .exceptions import ExtensionMismatch

logger = logging.getLogger(__name__)

TcbLike = Union[TcbParam, Sequence[float]]
ShapeLike = Union[ShapeParam, float]

# Main API Functions

def create_spline(kind: Union[SplineKind, str],
                  config: Optional[SplineConfig] = None) -> GenericSpline:
    """
    Create an empty spline owned by the caller

    Args:
        kind: Variant, as a SplineKind or a scene-language keyword
            ("linear_spline", "cubic_spline", "tcb_spline", ...)
        config: Optional configuration (defaults to the process-wide one)

    Returns:
        The new spline with a reference count of 1
    """
    spline = create(kind, config)
    acquire_reference(spline)
    logger.debug(f"create_spline: {spline.kind.value}")
    return spline

def get_extension_tag(spline: GenericSpline) -> ExtensionTag:
    """Which insertion function the spline expects"""
    return spline.extension_tag

def insert_entry(spline: GenericSpline, parameter: float, value) -> None:
    """Insert a control point into a spline without extension data"""
    spline.insert(parameter, value)

def insert_entry_with_tcb(spline: GenericSpline, parameter: float, value,
                          incoming: TcbLike, outgoing: TcbLike) -> None:
    """
    Insert a control point into a TCB spline

    Args:
        spline: Spline whose tag is ExtensionTag.TCB
        parameter: Curve parameter of the point
        value: Value vector
        incoming: (tension, bias, continuity) of the incoming tangent
        outgoing: (tension, bias, continuity) of the outgoing tangent
    """
    spline.insert(parameter, value, (as_tcb_param(incoming), as_tcb_param(outgoing)))

def insert_entry_with_shape(spline: GenericSpline, parameter: float, value,
                            shape: ShapeLike) -> None:
    """Insert a control point into an X-spline (global or per-point shape)"""
    spline.insert(parameter, value, as_shape_param(shape))

def finalize(spline: GenericSpline) -> GenericSpline:
    """Rebuild the coefficient cache; required before concurrent evaluation"""
    return spline.finalize()

def evaluate(spline: GenericSpline, parameter: float) -> Tuple[np.ndarray, int]:
    """
    Evaluate a spline

    With `lazy_finalize` enabled (the default) a stale cache is rebuilt
    first. That rebuild mutates the spline, so concurrent callers must
    finalize() beforehand.

    Returns:
        (value vector, number of terms)
    """
    if not spline.finalized and spline.config.lazy_finalize:
        spline.finalize()
    return spline.get(parameter), spline.terms

def destroy(spline: Optional[GenericSpline]) -> None:
    """Unconditional teardown, bypassing the reference count"""
    destroy_spline(spline)

# Helper Functions

def as_tcb_param(params: TcbLike) -> TcbParam:
    """Coerce a (tension, bias, continuity) sequence into a TcbParam"""
    if isinstance(params, TcbParam):
        return params
    try:
        tension, bias, continuity = (float(item) for item in params)
    except (TypeError, ValueError) as e:
        raise ExtensionMismatch(
            "TCB data must be three numbers (tension, bias, continuity)",
            expected="TcbParam",
            received=repr(params)
        ) from e
    return TcbParam(tension=tension, bias=bias, continuity=continuity)

def as_shape_param(shape: ShapeLike) -> ShapeParam:
    """Coerce a number into a ShapeParam"""
    if isinstance(shape, ShapeParam):
        return shape
    try:
        return ShapeParam(float(shape))
    except (TypeError, ValueError) as e:
        raise ExtensionMismatch(
            "shape data must be a single number",
            expected="ShapeParam",
            received=repr(shape)
        ) from e


__all__ = [
    'create_spline',
    'get_extension_tag',
    'insert_entry',
    'insert_entry_with_tcb',
    'insert_entry_with_shape',
    'finalize',
    'evaluate',
    'copy_spline',
    'acquire_reference',
    'release_reference',
    'destroy',
    'as_tcb_param',
    'as_shape_param',
]
