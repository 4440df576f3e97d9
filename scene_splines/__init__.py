"""Parametric control-point splines for scene-description interpreters."""
__version__ = "1.0.0"

from .config import SplineConfig, get_default_config, set_default_config
from .core import (
    ControlPoint,
    ExtensionTag,
    GenericSpline,
    ShapeParam,
    SplineKind,
    SplineRef,
    TcbParam,
)
from .api import (
    create_spline,
    get_extension_tag,
    insert_entry,
    insert_entry_with_tcb,
    insert_entry_with_shape,
    finalize,
    evaluate,
    copy_spline,
    acquire_reference,
    release_reference,
    destroy,
)
from .exceptions import (
    SceneSplinesError,
    ExtensionMismatch,
    DimensionMismatch,
    InsufficientControlPoints,
    EmptySpline,
    InvalidNumeric,
    SplineNotFinalized,
    SplineReleasedError,
)
from .utils.sampling import evaluate_range, sample_uniform
