"""
Scene Splines Custom Exceptions

Provides specific exception classes for the errors that can occur while
building, finalizing and evaluating splines. All of them are caller-input
errors: they are raised synchronously at the offending operation and are
never recovered internally.
"""

import math
from functools import wraps

import numpy as np


class SceneSplinesError(Exception):
    """Base exception class for all Scene Splines errors"""

    def __init__(self, message: str, error_code: str = "SS_GENERAL"):
        super().__init__(message)
        self.error_code = error_code
        self.message = message

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class ExtensionMismatch(SceneSplinesError):
    """Raised when insertion data does not match the spline's extension tag"""

    def __init__(self, message: str, expected=None, received=None):
        self.expected = expected
        self.received = received

        full_message = f"Extension mismatch: {message}"
        if expected is not None:
            full_message += f" (expected: {expected}"
            if received is not None:
                full_message += f", received: {received}"
            full_message += ")"

        super().__init__(full_message, "SS_EXTENSION")


class DimensionMismatch(SceneSplinesError):
    """Raised when a value's width differs from the spline's established width"""

    def __init__(self, message: str, expected_terms: int = None,
                 received_terms: int = None):
        self.expected_terms = expected_terms
        self.received_terms = received_terms

        full_message = f"Dimension mismatch: {message}"
        if expected_terms is not None and received_terms is not None:
            full_message += f" (expected {expected_terms} terms, got {received_terms})"
        elif received_terms is not None:
            full_message += f" (got {received_terms} terms)"

        super().__init__(full_message, "SS_DIMENSION")


class InsufficientControlPoints(SceneSplinesError):
    """Raised when a spline has fewer control points than its variant needs"""

    def __init__(self, message: str, spline_kind: str = None,
                 required: int = None, available: int = None):
        self.spline_kind = spline_kind
        self.required = required
        self.available = available

        full_message = f"Insufficient control points: {message}"

        details = []
        if spline_kind is not None:
            details.append(f"kind={spline_kind}")
        if required is not None:
            details.append(f"required={required}")
        if available is not None:
            details.append(f"available={available}")

        if details:
            full_message += f" ({', '.join(details)})"

        super().__init__(full_message, "SS_INSUFFICIENT")


class EmptySpline(SceneSplinesError):
    """Raised when a spline without any control point is evaluated"""

    def __init__(self, message: str = "spline has no control points",
                 spline_kind: str = None):
        self.spline_kind = spline_kind

        if spline_kind:
            full_message = f"Empty spline ({spline_kind}): {message}"
        else:
            full_message = f"Empty spline: {message}"

        super().__init__(full_message, "SS_EMPTY")


class InvalidNumeric(SceneSplinesError):
    """Raised for non-finite inputs and degenerate numerical setups"""

    def __init__(self, message: str, name: str = None, value=None,
                 original_error: Exception = None):
        self.name = name
        self.value = value
        self.original_error = original_error

        full_message = f"Invalid numeric input: {message}"
        if name is not None:
            full_message += f" ({name}={value!r})"
        if original_error is not None:
            full_message += f" (caused by: {type(original_error).__name__}: {original_error})"

        super().__init__(full_message, "SS_NUMERIC")


class SplineNotFinalized(SceneSplinesError):
    """Raised when a pure evaluation hits a stale coefficient cache"""

    def __init__(self, message: str = "call finalize() before evaluating",
                 spline_kind: str = None):
        self.spline_kind = spline_kind

        full_message = f"Spline not finalized: {message}"
        if spline_kind:
            full_message += f" (kind={spline_kind})"

        super().__init__(full_message, "SS_STALE")


class SplineReleasedError(SceneSplinesError):
    """Raised when a spline is used after its last reference was released"""

    def __init__(self, message: str = "spline has been destroyed",
                 spline_kind: str = None):
        self.spline_kind = spline_kind

        if spline_kind:
            full_message = f"Released spline ({spline_kind}): {message}"
        else:
            full_message = f"Released spline: {message}"

        super().__init__(full_message, "SS_RELEASED")


class VisualizationError(SceneSplinesError):
    """Raised when plotting a spline fails"""

    def __init__(self, message: str, plot_type: str = None):
        self.plot_type = plot_type

        if plot_type:
            full_message = f"Visualization failed ({plot_type}): {message}"
        else:
            full_message = f"Visualization failed: {message}"

        super().__init__(full_message, "SS_VISUALIZATION")


class ConfigurationError(SceneSplinesError):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, config_key: str = None,
                 config_value: str = None):
        self.config_key = config_key
        self.config_value = config_value

        full_message = f"Configuration error: {message}"

        if config_key:
            full_message += f" (key: {config_key}"
            if config_value:
                full_message += f", value: {config_value}"
            full_message += ")"

        super().__init__(full_message, "SS_CONFIG")


# Helper functions for error handling

def handle_numeric_error(func):
    """Decorator that turns numerical library failures into InvalidNumeric"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SceneSplinesError:
            raise  # Re-raise our own errors as-is
        except (ArithmeticError, ValueError, np.linalg.LinAlgError) as e:
            raise InvalidNumeric(
                f"numerical failure in {func.__name__}",
                original_error=e
            ) from e
    return wrapper


def validate_parameter(parameter, name: str = "parameter") -> float:
    """Validate a scalar curve parameter and return it as float"""
    try:
        value = float(parameter)
    except (TypeError, ValueError) as e:
        raise InvalidNumeric("not a real number", name=name, value=parameter,
                             original_error=e) from e

    if not math.isfinite(value):
        raise InvalidNumeric("must be finite", name=name, value=value)

    return value


def validate_value(value, max_terms: int = 5) -> np.ndarray:
    """Validate a control-point value vector and return it as a float array

    Scalars are accepted as one-component vectors.
    """
    try:
        array = np.atleast_1d(np.asarray(value, dtype=float))
    except (TypeError, ValueError) as e:
        raise InvalidNumeric("value is not numeric", name="value", value=value,
                             original_error=e) from e

    if array.ndim != 1:
        raise DimensionMismatch(f"value must be a flat vector, got shape {array.shape}")

    if not 1 <= array.size <= max_terms:
        raise DimensionMismatch(
            f"value width must be between 1 and {max_terms}",
            received_terms=array.size
        )

    if not np.all(np.isfinite(array)):
        raise InvalidNumeric("value components must be finite", name="value",
                             value=array.tolist())

    return array


__all__ = [
    'SceneSplinesError',
    'ExtensionMismatch',
    'DimensionMismatch',
    'InsufficientControlPoints',
    'EmptySpline',
    'InvalidNumeric',
    'SplineNotFinalized',
    'SplineReleasedError',
    'ConfigurationError',
    'VisualizationError',
    'handle_numeric_error',
    'validate_parameter',
    'validate_value',
]
