"""Visualization tools for the gravity sandbox."""

from gravitykit.visualization.renderer import PygameRenderer, RenderConfig
from gravitykit.visualization.plotter import EnergyPlotter, PopulationPlotter, TrajectoryPlotter

__all__ = [
    "PygameRenderer",
    "RenderConfig",
    "EnergyPlotter",
    "PopulationPlotter",
    "TrajectoryPlotter",
]
