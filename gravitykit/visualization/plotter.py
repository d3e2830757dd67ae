"""Matplotlib-based plotting for energy, population and trajectories.

Provides static plots for:
- Kinetic, potential and total energy over time
- Orbiter/anchor counts and anchor mass over time
- Orbiter paths in the XY plane
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

import numpy as np

try:
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

if TYPE_CHECKING:
    from gravitykit.analysis.census import PopulationTracker
    from gravitykit.analysis.energy import EnergyTracker


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not MATPLOTLIB_AVAILABLE:
        raise ImportError(
            "Matplotlib is required for plotting. "
            "Install it with: pip install matplotlib"
        )


class EnergyPlotter:
    """Plot energy bookkeeping."""

    @staticmethod
    def plot_energy(
        tracker: EnergyTracker,
        ax: Optional[plt.Axes] = None
    ) -> plt.Figure:
        """Plot kinetic, potential and total energy vs time.

        Ticks with a collision are marked with vertical lines, since energy
        is not expected to be conserved across them.

        Args:
            tracker: Energy tracker with recorded samples
            ax: Optional axes to plot on

        Returns:
            Matplotlib figure
        """
        _check_matplotlib()

        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 6))
        else:
            fig = ax.figure

        if not tracker.samples:
            return fig

        t = tracker.times()
        ax.plot(t, [s.kinetic for s in tracker.samples], 'r-', label='Kinetic', alpha=0.7)
        ax.plot(t, [s.potential for s in tracker.samples], 'b-', label='Potential', alpha=0.7)
        ax.plot(t, tracker.totals(), 'k-', linewidth=1.5, label='Total')

        for sample in tracker.samples:
            if sample.collisions:
                ax.axvline(x=sample.time, color='orange', linewidth=0.5, alpha=0.5)

        ax.set_xlabel('Time')
        ax.set_ylabel('Energy')
        ax.set_title(f'Energy (relative drift {tracker.relative_drift():.2e})')
        ax.legend()
        ax.grid(True, alpha=0.3)
        ax.axhline(y=0, color='k', linewidth=0.5)

        return fig


class PopulationPlotter:
    """Plot how collisions reshape the population."""

    @staticmethod
    def plot_population(
        tracker: PopulationTracker,
        figsize: Tuple[float, float] = (12, 6)
    ) -> plt.Figure:
        """Plot body counts and total anchor mass over time.

        Args:
            tracker: Population tracker with recorded samples
            figsize: Figure size

        Returns:
            Matplotlib figure
        """
        _check_matplotlib()

        fig, (ax1, ax2) = plt.subplots(2, 1, figsize=figsize, sharex=True)

        t = [s.time for s in tracker.samples]

        ax1.plot(t, [s.orbiters for s in tracker.samples], 'r-', label='Orbiters')
        ax1.plot(t, [s.anchors for s in tracker.samples], 'g-', label='Anchors')
        ax1.set_ylabel('Count')
        ax1.legend()
        ax1.grid(True, alpha=0.3)

        ax2.plot(t, [s.total_anchor_mass for s in tracker.samples], 'g-')
        ax2.set_ylabel('Total Anchor Mass')
        ax2.set_xlabel('Time')
        ax2.grid(True, alpha=0.3)

        summary = tracker.summary()
        fig.suptitle(
            f"Population ({summary['gains']} gains, {summary['losses']} losses, "
            f"{summary['bounces']} bounces)"
        )
        fig.tight_layout()

        return fig


class TrajectoryPlotter:
    """Plot orbiter paths."""

    @staticmethod
    def plot_trajectories(
        paths: Dict[int, List[Tuple[float, float, float]]],
        anchors: Sequence[Tuple[float, float, float]] = (),
        ax: Optional[plt.Axes] = None,
        collision_radius: Optional[float] = None
    ) -> plt.Figure:
        """Plot orbiter paths in the XY plane.

        Args:
            paths: Orbiter id -> list of (x, y, z) positions
            anchors: Anchor positions
            ax: Optional axes to plot on
            collision_radius: Draw the contact circle around anchors if given

        Returns:
            Matplotlib figure
        """
        _check_matplotlib()

        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 10))
        else:
            fig = ax.figure

        for body_id, positions in paths.items():
            if not positions:
                continue
            xyz = np.asarray(positions)
            ax.plot(xyz[:, 0], xyz[:, 1], '-', linewidth=1.0, alpha=0.7)
            ax.plot(xyz[-1, 0], xyz[-1, 1], 'o', markersize=3)

        for position in anchors:
            ax.plot(position[0], position[1], 'go', markersize=10)
            if collision_radius is not None:
                ax.add_patch(plt.Circle(
                    (position[0], position[1]), collision_radius,
                    fill=False, color='green', linestyle='--', linewidth=0.8
                ))

        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_title('Orbiter Trajectories')
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal')

        return fig
