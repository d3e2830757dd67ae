"""Numerical integration of orbiters under anchor gravity."""

from __future__ import annotations
from typing import List

from gravitykit.core.body import Body
from gravitykit.core.collision import CollisionEvent, CollisionResolver
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.vector import Vector3


def gravitational_acceleration(
    orbiter_position: Vector3,
    anchor_position: Vector3,
    anchor_mass: float,
    G: float,
    min_distance: float,
) -> Vector3:
    """Newtonian acceleration of an orbiter towards one anchor.

    a = G * M / |r|^2 * r_hat, with r pointing from the orbiter to the
    anchor. |r| is floored at min_distance and a zero-length r gives a zero
    vector, so coincident bodies never produce NaN or Inf.
    """
    r = anchor_position - orbiter_position
    distance_squared = max(r.magnitude_squared(), min_distance * min_distance)
    return r.normalized() * (G * anchor_mass / distance_squared)


def semi_implicit_euler(body: Body, acceleration: Vector3, dt: float) -> None:
    """Semi-implicit (symplectic) Euler integration.

    Updates velocity before position, which keeps orbits bounded far
    better than explicit Euler.

    Algorithm:
        v(t+dt) = v(t) + a(t) * dt
        x(t+dt) = x(t) + v(t+dt) * dt  # Note: uses NEW velocity

    Args:
        body: Body to integrate
        acceleration: Net acceleration for this step
        dt: Time step
    """
    body.velocity += acceleration * dt
    body.position += body.velocity * dt


class Integrator:
    """Advance every orbiter by one step.

    For each orbiter the anchors are visited in order; each pair is checked
    for contact before its force is accumulated. A resolved contact ends that
    orbiter's step immediately, discarding the partial force sum (the bounce
    displacement, if any, is its motion for this tick).
    """

    def __init__(self, registry: BodyRegistry, resolver: CollisionResolver):
        self.registry = registry
        self.resolver = resolver

    def step(self, dt: float, params: SimulationParameters) -> List[CollisionEvent]:
        """Advance all orbiters alive at call time exactly once.

        Args:
            dt: Time step
            params: Parameters for this step (read only)

        Returns:
            The resolved collision events of this step, in order
        """
        events: List[CollisionEvent] = []
        anchors = self.registry.anchors()

        def advance(orbiter: Body) -> None:
            total = Vector3()
            for anchor in anchors:
                event = self.resolver.check_and_resolve(anchor, orbiter, params, dt)
                if event.resolved:
                    events.append(event)
                    return
                total += gravitational_acceleration(
                    orbiter.position, anchor.position, anchor.mass,
                    params.G, params.min_distance,
                )
            semi_implicit_euler(orbiter, total, dt)

        self.registry.for_each_orbiter(advance)
        return events
