"""Simulation world: the single entry point for input, configuration and ticks."""

from __future__ import annotations
import logging
import math
from typing import Any, Iterable, List, Optional, Tuple

import numpy as np

from gravitykit.core.appearance import apply_visual_state
from gravitykit.core.body import BodyId, BodyKind
from gravitykit.core.collision import CollisionEvent, CollisionResolver, UniformSource
from gravitykit.core.integrators import Integrator
from gravitykit.core.parameters import PopulationTargets, SimulationParameters
from gravitykit.core.perturbation import PerturbationController
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.scenario import ScenarioConfig
from gravitykit.core.snapshot import BodyState, Snapshot
from gravitykit.core.vector import Vector3

logger = logging.getLogger(__name__)


def _split_seed(seed: Optional[int]) -> Tuple[np.random.SeedSequence, np.random.SeedSequence]:
    """Independent (population, collision) streams derived from one seed."""
    population, collision = np.random.SeedSequence(seed).spawn(2)
    return population, collision


class World:
    """Gravity sandbox world.

    Owns the registry and wires the integrator, collision resolver and drag
    controller together. One ``tick`` per rendered frame; input events and
    parameter changes arrive between ticks.

    Tick order:
        1. drag housekeeping (drop drags on absorbed orbiters)
        2. integrate orbiters, resolving contacts before each anchor's force
        3. recompute appearance
        4. build the snapshot
    """

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        seed: Optional[int] = None,
        rng: Optional[UniformSource] = None,
    ):
        """Initialize world.

        Args:
            params: Simulation parameters. Uses defaults if None.
            seed: Seed for collision outcomes and random population
            rng: Explicit uniform source for collision outcomes (tests)
        """
        self.params = (params or SimulationParameters()).validate()
        self.time: float = 0.0
        self.tick_count: int = 0

        population_seed, collision_seed = _split_seed(seed)
        self._population_rng = np.random.default_rng(population_seed)
        self.registry = BodyRegistry(self.params)
        self.resolver = CollisionResolver(self.registry, rng=rng, seed=collision_seed)
        self.integrator = Integrator(self.registry, self.resolver)
        self.perturbation = PerturbationController(self.registry)

        self._last_events: List[CollisionEvent] = []
        self._accumulator: float = 0.0

        if self.params.population_targets != PopulationTargets():
            self.populate(self.params.population_targets)

    @classmethod
    def from_scenario(cls, config: ScenarioConfig, rng: Optional[UniformSource] = None) -> World:
        """Create a world and load a scenario into it."""
        world = cls(SimulationParameters(), seed=config.seed, rng=rng)
        world.load_scenario(config)
        return world

    # --- Bodies -----------------------------------------------------------

    def spawn_body(
        self,
        kind: BodyKind,
        position: Vector3,
        velocity: Optional[Vector3] = None,
        mass: Optional[float] = None,
    ) -> BodyId:
        """Create a body at an explicit position."""
        body_id = self.registry.create(kind, position, velocity=velocity, mass=mass)
        apply_visual_state(self.registry.get(body_id), self.params)
        return body_id

    def click(self, kind: BodyKind, position: Vector3) -> Optional[BodyId]:
        """Handle a plain (non-drag) click.

        The click that UIs deliver right after a drag release is swallowed.

        Returns:
            Id of the spawned body, or None if the click was suppressed
        """
        if self.perturbation.consume_click_suppression():
            logger.debug("click after drag release suppressed")
            return None
        return self.spawn_body(kind, position)

    def populate(self, targets: PopulationTargets,
                 kinds: Optional[Iterable[BodyKind]] = None) -> None:
        """Regenerate random bodies to match the population targets.

        Each selected kind is cleared and regenerated uniformly inside the
        spawn cube; generated orbiters get a random velocity with components
        in [0, orbiter_spawn_speed).

        Args:
            targets: Body counts per kind
            kinds: Kinds to regenerate. Kinds with a non-zero target if None.
        """
        extent = self.params.spawn_extent
        rng = self._population_rng
        counts = {BodyKind.ANCHOR: targets.anchors, BodyKind.ORBITER: targets.orbiters}
        if kinds is None:
            kinds = [kind for kind, count in counts.items() if count > 0]

        for kind in kinds:
            count = counts[kind]
            self.registry.clear(kind)
            for _ in range(count):
                position = Vector3.from_array(rng.uniform(-extent, extent, size=3))
                velocity = None
                if kind is BodyKind.ORBITER:
                    velocity = Vector3.from_array(rng.uniform(0.0, self.params.orbiter_spawn_speed, size=3))
                self.spawn_body(kind, position, velocity=velocity)

        self.perturbation.validate()
        logger.debug("population regenerated: %d anchors, %d orbiters", targets.anchors, targets.orbiters)

    def load_scenario(self, config: ScenarioConfig) -> None:
        """Replace parameters and bodies with a scenario's."""
        self.params = config.parameters.validate()
        self.registry.params = self.params
        if config.seed is not None:
            population_seed, collision_seed = _split_seed(config.seed)
            self._population_rng = np.random.default_rng(population_seed)
            self.resolver.rng = np.random.default_rng(collision_seed)
        self.reset()
        for spec in config.bodies:
            self.spawn_body(spec.kind, spec.position, velocity=spec.velocity, mass=spec.mass)

    def reset(self) -> None:
        """Remove all bodies and rewind time, then regenerate the population targets."""
        self.perturbation.cancel_drag()
        self.registry.clear()
        self.time = 0.0
        self.tick_count = 0
        self._accumulator = 0.0
        self._last_events = []
        if self.params.population_targets != PopulationTargets():
            self.populate(self.params.population_targets)

    # --- Drag input -------------------------------------------------------

    def begin_drag(self, body_id: BodyId, point: Vector3) -> bool:
        return self.perturbation.begin_drag(body_id, point)

    def update_drag(self, point: Vector3) -> Optional[Vector3]:
        return self.perturbation.update_drag(point)

    def end_drag(self, point: Vector3) -> Optional[Vector3]:
        return self.perturbation.end_drag(point, self.params.impulse_scale)

    def cancel_drag(self) -> None:
        self.perturbation.cancel_drag()

    # --- Configuration ----------------------------------------------------

    def set_parameters(self, **changes: Any) -> SimulationParameters:
        """Hot-swap parameters between ticks.

        The whole change-set is validated first; on error nothing changes.
        A change of ``population_targets`` regenerates the random bodies of
        each kind whose count changed.

        Raises:
            InvalidParameterError: naming every rejected field
        """
        try:
            new_params = self.params.updated(**changes)
        except ValueError as e:
            logger.warning("parameter update rejected: %s", e)
            raise

        old_targets = self.params.population_targets
        self.params = new_params
        self.registry.params = new_params
        logger.debug("parameters updated: %s", ", ".join(sorted(changes)))

        new_targets = new_params.population_targets
        changed = [kind for kind, before, after in (
            (BodyKind.ANCHOR, old_targets.anchors, new_targets.anchors),
            (BodyKind.ORBITER, old_targets.orbiters, new_targets.orbiters),
        ) if before != after]
        if changed:
            self.populate(new_targets, kinds=changed)
        return new_params

    # --- Stepping ---------------------------------------------------------

    def tick(self, dt: Optional[float] = None) -> Snapshot:
        """Advance the simulation by one step and return the new snapshot.

        Args:
            dt: Step size. The configured dt if None; a non-positive or
                non-finite value falls back to the configured dt.
        """
        params = self.params
        if dt is None:
            dt = params.dt
        elif not (math.isfinite(dt) and dt > 0):
            logger.warning("tick dt=%r rejected, using configured dt=%r", dt, params.dt)
            dt = params.dt

        self.perturbation.validate()
        self._last_events = self.integrator.step(dt, params)
        self.perturbation.validate()

        for body in self.registry.bodies():
            apply_visual_state(body, params)

        self.time += dt
        self.tick_count += 1
        return self.snapshot()

    def step_fixed(self, real_dt: float) -> int:
        """Fixed timestep update with accumulator.

        Call this once per frame with the real elapsed time.
        The simulation will step multiple times at fixed dt to
        catch up, ensuring consistent pacing.

        Args:
            real_dt: Real elapsed time since last call (seconds)

        Returns:
            Number of ticks taken
        """
        self._accumulator += max(real_dt, 0.0)
        steps = 0
        events: List[CollisionEvent] = []

        while self._accumulator >= self.params.dt and steps < self.params.max_steps_per_frame:
            self.tick()
            events.extend(self._last_events)
            self._accumulator -= self.params.dt
            steps += 1

        if steps == self.params.max_steps_per_frame:
            # Drop the backlog instead of spiralling
            self._accumulator = min(self._accumulator, self.params.dt)

        self._last_events = events
        return steps

    def get_interpolation_alpha(self) -> float:
        """Progress toward the next fixed step, in [0, 1]."""
        return min(self._accumulator / self.params.dt, 1.0)

    # --- Output -----------------------------------------------------------

    def snapshot(self) -> Snapshot:
        """Read-only view of the current state (always available)."""
        segment = self.perturbation.preview_segment
        preview = None
        if segment is not None:
            preview = (segment[0].as_tuple(), segment[1].as_tuple())

        return Snapshot(
            bodies=tuple(BodyState.from_body(b) for b in self.registry.bodies()),
            time=self.time,
            tick_count=self.tick_count,
            events=tuple(self._last_events),
            drag_preview=preview,
            camera_navigation_enabled=self.perturbation.camera_navigation_enabled,
        )

    @property
    def camera_navigation_enabled(self) -> bool:
        return self.perturbation.camera_navigation_enabled

    def anchor_count(self) -> int:
        return self.registry.count(BodyKind.ANCHOR)

    def orbiter_count(self) -> int:
        return self.registry.count(BodyKind.ORBITER)
