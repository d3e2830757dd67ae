"""Declarative starting states for a World."""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional

from gravitykit.core.body import BodyKind
from gravitykit.core.parameters import PopulationTargets, SimulationParameters
from gravitykit.core.vector import Vector3


@dataclass
class BodySpec:
    """One body to create when a scenario loads."""
    kind: BodyKind
    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)
    mass: Optional[float] = None    # Kind default if None


@dataclass
class ScenarioConfig:
    """Parameters plus an initial body list."""
    parameters: SimulationParameters = field(default_factory=SimulationParameters)
    bodies: List[BodySpec] = field(default_factory=list)
    seed: Optional[int] = None      # Seed for collisions and random population

    @classmethod
    def sandbox(cls) -> ScenarioConfig:
        """Empty space; bodies are added by clicking."""
        return cls(parameters=SimulationParameters(G=1000.0, dt=0.001))

    @classmethod
    def cloud(cls) -> ScenarioConfig:
        """Random cloud of anchors and fast orbiters."""
        return cls(parameters=SimulationParameters(
            G=500.0,
            dt=0.001,
            population_targets=PopulationTargets(anchors=5, orbiters=200),
        ))

    @classmethod
    def infall(cls) -> ScenarioConfig:
        """One orbiter falling from rest onto one anchor."""
        return cls(
            parameters=SimulationParameters(G=1000.0, dt=0.001),
            bodies=[
                BodySpec(BodyKind.ANCHOR, Vector3(0.0, 0.0, 0.0), mass=10.0),
                BodySpec(BodyKind.ORBITER, Vector3(5.0, 0.0, 0.0)),
            ],
        )

    @classmethod
    def orbit(cls, radius: float = 5.0) -> ScenarioConfig:
        """One orbiter on a circular orbit around one anchor."""
        params = SimulationParameters(G=1000.0, dt=0.001)
        speed = circular_speed(params.G, params.anchor_mass, radius)
        return cls(
            parameters=params,
            bodies=[
                BodySpec(BodyKind.ANCHOR, Vector3(0.0, 0.0, 0.0)),
                BodySpec(BodyKind.ORBITER, Vector3(radius, 0.0, 0.0), Vector3(0.0, speed, 0.0)),
            ],
        )


def circular_speed(G: float, anchor_mass: float, radius: float) -> float:
    """Speed of a circular orbit of the given radius around a single anchor."""
    return math.sqrt(G * anchor_mass / radius)
