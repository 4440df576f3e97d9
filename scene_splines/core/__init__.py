"""
Scene Splines Core Module

Control-point data model, the spline variants and their shared-ownership
bookkeeping. Importing this package registers every variant with the
factory.
"""

from .entries import ControlPoint, ControlPointStore, ExtensionTag, ShapeParam, SplineKind, TcbParam
from .spline import GenericSpline, create, register_spline
from .polynomial import LinearSpline, QuadraticSpline, NaturalSpline
from .cubic import CatmullRomSpline, FourCoefficientSpline, SorSpline, AkimaSpline, TcbSpline
from .xspline import BasicXSpline, ExtendedXSpline, GeneralXSpline
from .ownership import SplineRef, acquire_reference, release_reference, destroy_spline, copy_spline

__all__ = [
    'ControlPoint',
    'ControlPointStore',
    'ExtensionTag',
    'ShapeParam',
    'SplineKind',
    'TcbParam',
    'GenericSpline',
    'create',
    'register_spline',
    'LinearSpline',
    'QuadraticSpline',
    'NaturalSpline',
    'CatmullRomSpline',
    'FourCoefficientSpline',
    'SorSpline',
    'AkimaSpline',
    'TcbSpline',
    'BasicXSpline',
    'ExtendedXSpline',
    'GeneralXSpline',
    'SplineRef',
    'acquire_reference',
    'release_reference',
    'destroy_spline',
    'copy_spline',
]
