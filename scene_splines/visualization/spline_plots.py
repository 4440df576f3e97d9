"""
Scene Splines Visualization

Plots sampled curves component by component, with their control points,
and side-by-side comparisons of several variants built from the same
points.
"""

import logging
from typing import Dict, Optional

import matplotlib.pyplot as plt
import numpy as np

from ..core import GenericSpline
from ..exceptions import SceneSplinesError, VisualizationError
from ..utils.sampling import sample_uniform

logger = logging.getLogger(__name__)

COMPONENT_LABELS = ('x', 'y', 'z', 't', 'u')

class SplineVisualizer:
    """
    Matplotlib views of one or more splines

    Each value component gets its own axis; the horizontal axis is the
    curve parameter.
    """

    def __init__(self, samples: int = 200, margin: float = 0.1):
        """Initialize the visualizer

        Args:
            samples: Samples per curve
            margin: Fraction of the control range plotted past each end
        """
        self.samples = samples
        self.margin = margin

        # Visualization settings
        self.figsize = (10, 6)
        self.dpi = 150
        self.colormap = 'viridis'

    def plot_components(self, spline: GenericSpline, title: Optional[str] = None,
                        save_path: Optional[str] = None) -> plt.Figure:
        """Plot every component of a spline with its control points

        Args:
            spline: Spline to plot
            title: Figure title (defaults to the spline kind)
            save_path: Optional path to save the figure

        Returns:
            Matplotlib figure object
        """
        try:
            parameters, values = sample_uniform(spline, self.samples, self.margin)
        except SceneSplinesError as e:
            raise VisualizationError(str(e), plot_type="components") from e

        control = list(spline.entries)
        control_parameters = np.array([point.parameter for point in control])
        control_values = np.array([point.value for point in control])

        fig, axes = plt.subplots(spline.terms, 1, figsize=self.figsize, sharex=True, squeeze=False)
        fig.suptitle(title or spline.kind.value, fontsize=14, fontweight='bold')

        for k, ax in enumerate(axes[:, 0]):
            ax.plot(parameters, values[:, k], linewidth=2, label='curve')
            ax.scatter(control_parameters, control_values[:, k], color='black', zorder=3,
                       label='control points')
            ax.set_ylabel(COMPONENT_LABELS[k])
            ax.grid(True, alpha=0.3)

        axes[-1, 0].set_xlabel('parameter')
        axes[0, 0].legend(loc='best')
        fig.tight_layout()

        self._save(fig, save_path)
        return fig

    def plot_comparison(self, splines: Dict[str, GenericSpline], component: int = 0,
                        save_path: Optional[str] = None) -> plt.Figure:
        """Overlay one component of several splines

        Args:
            splines: Label -> spline
            component: Component index to compare
            save_path: Optional path to save the figure

        Returns:
            Matplotlib figure object
        """
        if not splines:
            raise VisualizationError("nothing to compare", plot_type="comparison")

        fig, ax = plt.subplots(figsize=self.figsize)
        colors = plt.get_cmap(self.colormap)(np.linspace(0.0, 0.9, len(splines)))

        for color, (label, spline) in zip(colors, splines.items()):
            if not 0 <= component < spline.terms:
                plt.close(fig)
                raise VisualizationError(f"{label} has no component {component}",
                                         plot_type="comparison")
            try:
                parameters, values = sample_uniform(spline, self.samples, self.margin)
            except SceneSplinesError as e:
                plt.close(fig)
                raise VisualizationError(f"{label}: {e}", plot_type="comparison") from e
            ax.plot(parameters, values[:, component], color=color, linewidth=2, label=label)

        reference = next(iter(splines.values()))
        ax.scatter(reference.entries.parameters,
                   [point.value[component] for point in reference.entries],
                   color='black', zorder=3, label='control points')

        ax.set_xlabel('parameter')
        ax.set_ylabel(COMPONENT_LABELS[component])
        ax.grid(True, alpha=0.3)
        ax.legend(loc='best')
        fig.tight_layout()

        self._save(fig, save_path)
        return fig

    def _save(self, fig: plt.Figure, save_path: Optional[str]):
        if save_path:
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            logger.info(f"Spline plot saved to {save_path}")

# Convenience functions

def create_spline_visualization(spline: GenericSpline, save_path: Optional[str] = None,
                                **kwargs) -> plt.Figure:
    """Plot the components of a spline

    Args:
        spline: Spline to plot
        save_path: Optional path to save the figure
        **kwargs: SplineVisualizer settings (samples, margin)
    """
    return SplineVisualizer(**kwargs).plot_components(spline, save_path=save_path)

def compare_splines(splines: Dict[str, GenericSpline], component: int = 0,
                    save_path: Optional[str] = None, **kwargs) -> plt.Figure:
    """Overlay one component of several splines"""
    return SplineVisualizer(**kwargs).plot_comparison(splines, component, save_path)
