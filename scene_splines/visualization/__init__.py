"""
Scene Splines Visualization Module
"""

from .spline_plots import SplineVisualizer, create_spline_visualization, compare_splines

__all__ = [
    'SplineVisualizer',
    'create_spline_visualization',
    'compare_splines',
]
