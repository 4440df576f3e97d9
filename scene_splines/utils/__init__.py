"""
Scene Splines Utilities Module

Logging setup and vectorised sampling helpers.
"""

from .logging import setup_logging
from .sampling import evaluate_range, sample_uniform

__all__ = [
    'setup_logging',
    'evaluate_range',
    'sample_uniform',
]
