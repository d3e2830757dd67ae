"""Energy bookkeeping for the orbiter-anchor system.

Anchors are stationary, so the conserved quantity (absent collisions) is
the orbiters' kinetic energy plus their potential energy in the anchors'
field. Orbiter-orbiter and anchor-anchor terms are not part of the model.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from gravitykit.core.body import BodyKind
from gravitykit.core.snapshot import Snapshot


def kinetic_energy(snapshot: Snapshot) -> float:
    """Sum of 1/2 m v^2 over orbiters."""
    masses = snapshot.masses(BodyKind.ORBITER)
    if masses.size == 0:
        return 0.0
    speeds_sq = np.sum(snapshot.velocities(BodyKind.ORBITER) ** 2, axis=1)
    return float(0.5 * np.sum(masses * speeds_sq))


def potential_energy(snapshot: Snapshot, G: float, min_distance: float = 1e-3) -> float:
    """Sum of -G M m / r over every orbiter-anchor pair.

    Distances are floored at min_distance, as in the force law.
    """
    orbiter_pos = snapshot.positions(BodyKind.ORBITER)
    anchor_pos = snapshot.positions(BodyKind.ANCHOR)
    if len(orbiter_pos) == 0 or len(anchor_pos) == 0:
        return 0.0

    # (n_orbiters, n_anchors) distance matrix
    separation = orbiter_pos[:, np.newaxis, :] - anchor_pos[np.newaxis, :, :]
    distance = np.maximum(np.linalg.norm(separation, axis=2), min_distance)
    mass_products = np.outer(snapshot.masses(BodyKind.ORBITER), snapshot.masses(BodyKind.ANCHOR))
    return float(-G * np.sum(mass_products / distance))


def total_energy(snapshot: Snapshot, G: float, min_distance: float = 1e-3) -> float:
    """Kinetic plus potential energy."""
    return kinetic_energy(snapshot) + potential_energy(snapshot, G, min_distance)


@dataclass
class EnergySample:
    """Energy at one tick."""
    time: float
    kinetic: float
    potential: float
    collisions: int = 0

    @property
    def total(self) -> float:
        return self.kinetic + self.potential


class EnergyTracker:
    """Record energy over time and summarize drift.

    Drift is only meaningful over stretches without collisions, since a
    collision removes or creates orbiters. ``relative_drift`` therefore
    restarts its reference after every tick that had a collision.
    """

    def __init__(self, G: float, min_distance: float = 1e-3):
        self.G = G
        self.min_distance = min_distance
        self.samples: List[EnergySample] = []
        self._max_velocity_jump: float = 0.0
        self._prev_velocities: Optional[dict] = None

    def update(self, snapshot: Snapshot, G: Optional[float] = None) -> EnergySample:
        """Record one snapshot.

        Args:
            snapshot: Snapshot to record
            G: Gravitational constant in effect (keeps the last one if None)
        """
        if G is not None:
            self.G = G

        sample = EnergySample(
            time=snapshot.time,
            kinetic=kinetic_energy(snapshot),
            potential=potential_energy(snapshot, self.G, self.min_distance),
            collisions=len(snapshot.events),
        )
        self.samples.append(sample)

        velocities = {b.id: np.asarray(b.velocity) for b in snapshot.orbiters()}
        if self._prev_velocities is not None and not snapshot.events:
            for body_id, velocity in velocities.items():
                previous = self._prev_velocities.get(body_id)
                if previous is not None:
                    jump = float(np.linalg.norm(velocity - previous))
                    self._max_velocity_jump = max(self._max_velocity_jump, jump)
        self._prev_velocities = velocities

        return sample

    def relative_drift(self) -> float:
        """Largest |E - E0| / |E0| within the current collision-free stretch."""
        stretch: List[EnergySample] = []
        for sample in self.samples:
            if sample.collisions:
                stretch = []
                continue
            stretch.append(sample)

        if len(stretch) < 2:
            return 0.0
        reference = stretch[0].total
        if abs(reference) < 1e-12:
            return 0.0
        totals = np.array([s.total for s in stretch])
        return float(np.max(np.abs(totals - reference)) / abs(reference))

    @property
    def max_velocity_jump(self) -> float:
        """Largest per-tick velocity change seen on a collision-free tick."""
        return self._max_velocity_jump

    def times(self) -> np.ndarray:
        return np.array([s.time for s in self.samples])

    def totals(self) -> np.ndarray:
        return np.array([s.total for s in self.samples])

    def reset(self) -> None:
        self.samples.clear()
        self._max_velocity_jump = 0.0
        self._prev_velocities = None
