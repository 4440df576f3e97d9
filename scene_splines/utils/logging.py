"""
Logging setup for Scene Splines

Modules log through `logging.getLogger(__name__)`; this helper attaches a
single formatted handler to the package logger.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the package logger

    Calling it again replaces the handler instead of stacking another one.

    Args:
        level: Logging level for the package
        stream: Output stream (stderr by default)

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger("scene_splines")

    for handler in list(package_logger.handlers):
        if getattr(handler, "_scene_splines_handler", False):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._scene_splines_handler = True

    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return package_logger
