"""
Scene Splines Configuration

Runtime switches shared by every spline instance. A spline keeps a
reference to the configuration it was created with; clones inherit it.
"""

import logging
from dataclasses import dataclass, fields, asdict
from typing import Dict, Any, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MAX_TERMS = 5

@dataclass
class SplineConfig:
    """Configuration for spline construction and evaluation"""
    max_terms: int = MAX_TERMS  # Widest accepted value vector
    lazy_finalize: bool = True  # Facade evaluate() rebuilds stale caches
    clamp_shapes: bool = True  # Clamp out-of-range X-spline shapes instead of rejecting
    extrapolate: bool = True  # Linear/quadratic extrapolate past the end points

    def validate(self) -> "SplineConfig":
        """Check value ranges, returning self for chaining"""
        if not isinstance(self.max_terms, int) or isinstance(self.max_terms, bool):
            raise ConfigurationError(
                f"max_terms must be an integer, got {type(self.max_terms).__name__}",
                config_key="max_terms"
            )

        if not 1 <= self.max_terms <= MAX_TERMS:
            raise ConfigurationError(
                f"max_terms must be between 1 and {MAX_TERMS}, got {self.max_terms}",
                config_key="max_terms",
                config_value=str(self.max_terms)
            )

        for name in ('lazy_finalize', 'clamp_shapes', 'extrapolate'):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(
                    f"{name} must be a boolean",
                    config_key=name,
                    config_value=str(getattr(self, name))
                )

        return self

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "SplineConfig":
        """Build a validated configuration from a plain mapping"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(
                f"unknown configuration keys: {', '.join(unknown)}",
                config_key=unknown[0]
            )
        return cls(**values).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_default_config = SplineConfig()

def get_default_config() -> SplineConfig:
    """Return the process-wide default configuration"""
    return _default_config

def set_default_config(config: Optional[SplineConfig] = None) -> SplineConfig:
    """Replace the process-wide default (None restores the built-in defaults)

    Only splines created afterwards pick up the new default.
    """
    global _default_config
    _default_config = (config or SplineConfig()).validate()
    logger.debug(f"Default spline configuration set to {_default_config}")
    return _default_config
