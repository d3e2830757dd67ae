"""Read-only per-tick output handed to renderers and analysis."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from gravitykit.core.body import Body, BodyId, BodyKind
from gravitykit.core.collision import CollisionEvent

Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class BodyState:
    """Immutable copy of one body."""
    id: BodyId
    kind: BodyKind
    position: Triple
    velocity: Triple
    mass: float
    color: Tuple[int, int, int]
    visual_scale: float
    collision_count: int = 0

    @classmethod
    def from_body(cls, body: Body) -> BodyState:
        return cls(
            id=body.id,
            kind=body.kind,
            position=body.position.as_tuple(),
            velocity=body.velocity.as_tuple(),
            mass=body.mass,
            color=body.color,
            visual_scale=body.visual_scale,
            collision_count=body.collision_count,
        )

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs to draw one frame."""
    bodies: Tuple[BodyState, ...] = ()
    time: float = 0.0
    tick_count: int = 0
    events: Tuple[CollisionEvent, ...] = ()
    drag_preview: Optional[Tuple[Triple, Triple]] = None
    camera_navigation_enabled: bool = True

    def anchors(self) -> Tuple[BodyState, ...]:
        return tuple(b for b in self.bodies if b.kind is BodyKind.ANCHOR)

    def orbiters(self) -> Tuple[BodyState, ...]:
        return tuple(b for b in self.bodies if b.kind is BodyKind.ORBITER)

    def get(self, body_id: BodyId) -> Optional[BodyState]:
        for body in self.bodies:
            if body.id == body_id:
                return body
        return None

    def positions(self, kind: Optional[BodyKind] = None) -> np.ndarray:
        """(N, 3) array of positions, optionally filtered by kind."""
        selected = [b.position for b in self.bodies if kind is None or b.kind is kind]
        return np.array(selected, dtype=float).reshape(-1, 3)

    def velocities(self, kind: Optional[BodyKind] = None) -> np.ndarray:
        selected = [b.velocity for b in self.bodies if kind is None or b.kind is kind]
        return np.array(selected, dtype=float).reshape(-1, 3)

    def masses(self, kind: Optional[BodyKind] = None) -> np.ndarray:
        return np.array([b.mass for b in self.bodies if kind is None or b.kind is kind], dtype=float)

    def __len__(self) -> int:
        return len(self.bodies)
