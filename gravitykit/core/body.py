"""Point-mass bodies for the gravity sandbox."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import NewType, Tuple

from gravitykit.core.vector import Vector3


BodyId = NewType("BodyId", int)


class BodyKind(Enum):
    """Role of a body in the simulation."""
    ANCHOR = "anchor"      # Heavy, stationary, exerts gravity ("planet")
    ORBITER = "orbiter"    # Light, mobile, feels gravity ("satellite")


@dataclass
class Body:
    """A single body.

    Anchors exert gravity and are never integrated; orbiters are integrated
    every tick and never attract anything. The kind is fixed at creation,
    everything else is mutable state owned by the registry.
    """

    id: BodyId
    kind: BodyKind

    # State
    position: Vector3 = field(default_factory=Vector3)
    velocity: Vector3 = field(default_factory=Vector3)
    mass: float = 1.0
    spawn_mass: float = 1.0         # Mass at creation, reference for scale

    # Derived appearance (written by the engine, never read by physics)
    base_scale: float = 0.1
    visual_scale: float = 0.1
    color: Tuple[int, int, int] = (255, 0, 0)

    # Anchors only
    collision_count: int = 0

    def __setattr__(self, name, value):
        if name == "kind" and "kind" in self.__dict__:
            raise AttributeError("Body kind is immutable after creation")
        super().__setattr__(name, value)

    @property
    def is_anchor(self) -> bool:
        return self.kind is BodyKind.ANCHOR

    @property
    def is_orbiter(self) -> bool:
        return self.kind is BodyKind.ORBITER

    def get_speed(self) -> float:
        """Get speed (magnitude of velocity)."""
        return self.velocity.magnitude()
