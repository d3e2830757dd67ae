"""Population and collision-outcome statistics over time."""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List

from gravitykit.core.collision import CollisionOutcome
from gravitykit.core.snapshot import Snapshot


@dataclass
class PopulationSample:
    """Body counts at one tick."""
    time: float
    anchors: int
    orbiters: int
    total_anchor_mass: float


class PopulationTracker:
    """Track how collisions reshape the population."""

    def __init__(self):
        self.samples: List[PopulationSample] = []
        self.outcomes: Counter = Counter()

    def update(self, snapshot: Snapshot) -> PopulationSample:
        anchors = snapshot.anchors()
        sample = PopulationSample(
            time=snapshot.time,
            anchors=len(anchors),
            orbiters=len(snapshot) - len(anchors),
            total_anchor_mass=sum(a.mass for a in anchors),
        )
        self.samples.append(sample)
        for event in snapshot.events:
            self.outcomes[event.outcome] += 1
        return sample

    @property
    def collisions(self) -> int:
        return sum(self.outcomes.values())

    def summary(self) -> Dict[str, float]:
        """Totals for printing."""
        last = self.samples[-1] if self.samples else PopulationSample(0.0, 0, 0, 0.0)
        return {
            "time": last.time,
            "anchors": last.anchors,
            "orbiters": last.orbiters,
            "total_anchor_mass": last.total_anchor_mass,
            "collisions": self.collisions,
            "gains": self.outcomes[CollisionOutcome.GAIN],
            "losses": self.outcomes[CollisionOutcome.LOSS],
            "bounces": self.outcomes[CollisionOutcome.BOUNCE],
        }

    def reset(self) -> None:
        self.samples.clear()
        self.outcomes.clear()
