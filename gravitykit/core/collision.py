"""Anchor-orbiter contact and stochastic mass transfer.

On contact an anchor either absorbs the orbiter (gain) or sheds one unit
of mass, bouncing the orbiter back and spawning a damped fragment (loss).
Anchors heavier than the reference mass tend to keep gaining, lighter ones
tend to keep losing; the odds follow a logistic curve.

Outcomes:
    GAIN   - anchor mass += orbiter_mass, orbiter removed
    LOSS   - anchor mass -= orbiter_mass, orbiter reflected and displaced
             one step, fragment spawned with damped reflected velocity
    BOUNCE - a loss that would take the anchor below min_anchor_mass:
             reflection and displacement only, no mass change, no fragment
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Union

import numpy as np

from gravitykit.core.appearance import apply_visual_state
from gravitykit.core.body import Body, BodyId, BodyKind
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.vector import logistic

logger = logging.getLogger(__name__)


class UniformSource(Protocol):
    """Anything with a ``random()`` returning a float in [0, 1)."""

    def random(self) -> float:
        ...


class CollisionOutcome(Enum):
    """Result of a contact check."""
    PASS = "pass"
    GAIN = "gain"
    LOSS = "loss"
    BOUNCE = "bounce"

    @property
    def resolved(self) -> bool:
        return self is not CollisionOutcome.PASS


@dataclass(frozen=True)
class CollisionEvent:
    """Record of one contact check."""
    outcome: CollisionOutcome
    anchor_id: BodyId
    orbiter_id: BodyId
    probability_to_gain: float = 0.0
    anchor_mass_before: float = 0.0
    anchor_mass_after: float = 0.0
    fragment_id: Optional[BodyId] = None

    @property
    def resolved(self) -> bool:
        return self.outcome.resolved


def gain_probability(anchor_mass: float, params: SimulationParameters) -> float:
    """Probability that an anchor absorbs a colliding orbiter.

    0.5 at the reference mass, tending to 1 for much heavier anchors and
    to 0 for much lighter ones.
    """
    return logistic((anchor_mass - params.reference_mass) / params.gain_softness)


def in_contact(anchor: Body, orbiter: Body, collision_radius: float) -> bool:
    """True if the pair is within the collision radius.

    The radius is fixed and independent of either body's visual scale.
    """
    return anchor.position.distance_squared_to(orbiter.position) <= collision_radius * collision_radius


class CollisionResolver:
    """Detect anchor-orbiter contact and apply mass transfer."""

    def __init__(self, registry: BodyRegistry, rng: Optional[UniformSource] = None,
                 seed: Optional[Union[int, np.random.SeedSequence]] = None):
        """Initialize resolver.

        Args:
            registry: Registry that owns the bodies (mutated on contact)
            rng: Source of uniform samples. A seeded numpy Generator if None.
            seed: Seed or SeedSequence for the default generator
        """
        self.registry = registry
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def check_and_resolve(
        self,
        anchor: Body,
        orbiter: Body,
        params: SimulationParameters,
        dt: float,
    ) -> CollisionEvent:
        """Check one pair and resolve a contact if there is one.

        Args:
            anchor: Anchor body
            orbiter: Orbiter body
            params: Current parameters
            dt: Step used for the bounce displacement

        Returns:
            CollisionEvent; outcome PASS if the pair is not in contact
        """
        if not in_contact(anchor, orbiter, params.collision_radius):
            return CollisionEvent(CollisionOutcome.PASS, anchor.id, orbiter.id)

        anchor.collision_count += 1
        mass_before = anchor.mass
        p_gain = gain_probability(anchor.mass, params)
        sample = float(self.rng.random())

        fragment_id = None
        if sample < p_gain:
            outcome = CollisionOutcome.GAIN
            anchor.mass += params.orbiter_mass
            self.registry.remove(orbiter.id)
        else:
            self._bounce(orbiter, dt)
            if anchor.mass - params.orbiter_mass >= params.min_anchor_mass:
                outcome = CollisionOutcome.LOSS
                anchor.mass -= params.orbiter_mass
                fragment_id = self.registry.create(
                    BodyKind.ORBITER,
                    orbiter.position,
                    velocity=orbiter.velocity * params.fragment_damping,
                )
            else:
                outcome = CollisionOutcome.BOUNCE

        apply_visual_state(anchor, params)

        logger.debug(
            "collision anchor=%d orbiter=%d p_gain=%.3f -> %s (mass %.1f -> %.1f)",
            anchor.id, orbiter.id, p_gain, outcome.value, mass_before, anchor.mass,
        )
        return CollisionEvent(
            outcome=outcome,
            anchor_id=anchor.id,
            orbiter_id=orbiter.id,
            probability_to_gain=p_gain,
            anchor_mass_before=mass_before,
            anchor_mass_after=anchor.mass,
            fragment_id=fragment_id,
        )

    @staticmethod
    def _bounce(orbiter: Body, dt: float) -> None:
        """Reflect the velocity and move one step along it."""
        orbiter.velocity = -orbiter.velocity
        orbiter.position += orbiter.velocity * dt
