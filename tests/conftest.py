"""Shared fixtures for the Scene Splines test-suite."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from scene_splines import (
    create_spline,
    insert_entry,
    insert_entry_with_shape,
    insert_entry_with_tcb,
    set_default_config,
)
from scene_splines.core import ExtensionTag


@pytest.fixture(autouse=True)
def restore_default_config():
    """Every test starts and ends with the built-in defaults."""
    set_default_config(None)
    yield
    set_default_config(None)


def build_spline(kind, points, extensions=None, config=None):
    """Create a spline and insert (parameter, value) points in the given order.

    `extensions` is a list aligned with `points`: (incoming, outgoing) pairs
    for TCB splines, shape numbers for X-splines.
    """
    spline = create_spline(kind, config)
    tag = spline.extension_tag
    for index, (parameter, value) in enumerate(points):
        if tag is ExtensionTag.NONE:
            insert_entry(spline, parameter, value)
        elif tag is ExtensionTag.TCB:
            incoming, outgoing = extensions[index] if extensions else ((0, 0, 0), (0, 0, 0))
            insert_entry_with_tcb(spline, parameter, value, incoming, outgoing)
        else:
            shape = extensions[index] if extensions else 0.0
            insert_entry_with_shape(spline, parameter, value, shape)
    return spline


@pytest.fixture
def quadratic_points():
    """y = x^2 sampled at x = 0..4."""
    return [(float(x), [float(x * x)]) for x in range(5)]


@pytest.fixture
def uneven_points():
    """Two-component data on unevenly spaced parameters."""
    parameters = [0.0, 0.7, 1.5, 3.0, 3.4, 5.0]
    return [(p, [np.sin(p), np.cos(2.0 * p)]) for p in parameters]


@pytest.fixture
def build():
    """The build_spline helper, for tests that construct their own splines."""
    return build_spline
