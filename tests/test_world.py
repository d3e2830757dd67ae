import logging
import math

import numpy as np
import pytest

from gravitykit.analysis.energy import EnergyTracker, total_energy
from gravitykit.core.body import BodyKind
from gravitykit.core.collision import CollisionOutcome
from gravitykit.core.errors import InvalidParameterError
from gravitykit.core.parameters import PopulationTargets, SimulationParameters
from gravitykit.core.scenario import ScenarioConfig
from gravitykit.core.vector import Vector3
from gravitykit.core.world import World


def _orbiter_distance(snapshot):
    orbiter = snapshot.orbiters()[0]
    return math.sqrt(sum(c * c for c in orbiter.position))


def test_infall_scenario(always_gain):
    world = World.from_scenario(ScenarioConfig.infall(), rng=always_gain)
    distance = _orbiter_distance(world.snapshot())
    events = []

    for _ in range(1000):
        snapshot = world.tick()
        events.extend(snapshot.events)
        if not snapshot.orbiters():
            continue
        new_distance = _orbiter_distance(snapshot)
        assert new_distance < distance
        distance = new_distance

    assert len(events) == 1
    assert events[0].outcome is CollisionOutcome.GAIN
    assert world.orbiter_count() == 0
    assert world.snapshot().anchors()[0].mass == 11.0


def test_circular_orbit_conserves_energy():
    world = World.from_scenario(ScenarioConfig.orbit(radius=5.0))
    params = world.params
    assert total_energy(world.snapshot(), params.G) == pytest.approx(-1000.0)

    tracker = EnergyTracker(params.G, params.min_distance)
    tracker.update(world.snapshot())
    for _ in range(2000):
        tracker.update(world.tick())

    assert world.tick_count == 2000
    assert tracker.relative_drift() < 0.05
    assert tracker.max_velocity_jump < 1.0
    assert sum(s.collisions for s in tracker.samples) == 0


def test_tick_rejects_bad_dt(caplog):
    world = World()
    world.spawn_body(BodyKind.ORBITER, Vector3(), velocity=Vector3(1.0, 0.0, 0.0))

    with caplog.at_level(logging.WARNING, logger="gravitykit.core.world"):
        world.tick(dt=-1.0)
        world.tick(dt=float("nan"))

    assert world.time == pytest.approx(2 * world.params.dt)
    assert world.snapshot().orbiters()[0].position[0] == pytest.approx(2 * world.params.dt)
    assert "rejected" in caplog.text


def test_tick_with_explicit_dt():
    world = World()
    world.spawn_body(BodyKind.ORBITER, Vector3(), velocity=Vector3(1.0, 0.0, 0.0))
    snapshot = world.tick(dt=0.5)
    assert snapshot.time == 0.5
    assert snapshot.tick_count == 1
    assert snapshot.orbiters()[0].position[0] == pytest.approx(0.5)


def test_g_hot_swap_takes_effect_next_tick():
    world = World()
    world.spawn_body(BodyKind.ANCHOR, Vector3())
    orbiter_id = world.spawn_body(BodyKind.ORBITER, Vector3(5.0, 0.0, 0.0))

    world.set_parameters(G=2000.0)
    snapshot = world.tick()

    # a = G M / r^2 = 2000 * 10 / 25
    assert snapshot.get(orbiter_id).velocity[0] == pytest.approx(-0.8)


def test_invalid_update_keeps_old_parameters(caplog):
    world = World()
    before = world.params

    with caplog.at_level(logging.WARNING, logger="gravitykit.core.world"):
        with pytest.raises(InvalidParameterError) as excinfo:
            world.set_parameters(dt=0.0, collision_radius=-1.0, G=5.0)

    assert set(excinfo.value.problems) == {"dt", "collision_radius"}
    assert world.params is before
    assert world.registry.params is before
    assert "rejected" in caplog.text


def test_population_targets_generate_bodies():
    params = SimulationParameters(population_targets=PopulationTargets(anchors=3, orbiters=20))
    world = World(params, seed=1)

    assert world.anchor_count() == 3
    assert world.orbiter_count() == 20
    positions = world.snapshot().positions()
    assert np.all(np.abs(positions) <= params.spawn_extent)
    speeds = world.snapshot().velocities(BodyKind.ORBITER)
    assert np.all((speeds >= 0.0) & (speeds < params.orbiter_spawn_speed))


def test_changing_one_target_keeps_other_kind():
    world = World(SimulationParameters(population_targets=PopulationTargets(2, 10)), seed=2)
    anchor_ids = [b.id for b in world.snapshot().anchors()]

    world.set_parameters(population_targets=(2, 4))

    assert world.orbiter_count() == 4
    assert [b.id for b in world.snapshot().anchors()] == anchor_ids


def test_click_spawns_bodies():
    world = World()
    anchor_id = world.click(BodyKind.ANCHOR, Vector3(1.0, 2.0, 0.0))
    orbiter_id = world.click(BodyKind.ORBITER, (3.0, 4.0))

    snapshot = world.snapshot()
    assert snapshot.get(anchor_id).kind is BodyKind.ANCHOR
    assert snapshot.get(orbiter_id).position == (3.0, 4.0, 0.0)


def test_drag_release_launches_orbiter_and_swallows_click():
    world = World(SimulationParameters(impulse_scale=1.0))
    orbiter_id = world.spawn_body(BodyKind.ORBITER, Vector3())

    assert world.begin_drag(orbiter_id, Vector3())
    assert not world.camera_navigation_enabled
    world.update_drag(Vector3(1.5, 2.0, 0.0))
    assert world.snapshot().drag_preview == ((0.0, 0.0, 0.0), (1.5, 2.0, 0.0))

    world.end_drag(Vector3(3.0, 4.0, 0.0))
    assert world.camera_navigation_enabled
    assert world.snapshot().get(orbiter_id).velocity == (3.0, 4.0, 0.0)

    # The click the UI sends after the release spawns nothing
    assert world.click(BodyKind.ANCHOR, Vector3(3.0, 4.0, 0.0)) is None
    assert world.anchor_count() == 0
    assert world.click(BodyKind.ORBITER, Vector3(-3.0, 0.0, 0.0)) is not None

    snapshot = world.tick()
    assert snapshot.get(orbiter_id).position[0] == pytest.approx(3.0 * world.params.dt)


def test_drag_on_absorbed_orbiter(always_gain):
    world = World(rng=always_gain)
    world.spawn_body(BodyKind.ANCHOR, Vector3())
    orbiter_id = world.spawn_body(BodyKind.ORBITER, Vector3(0.1, 0.0, 0.0))
    world.begin_drag(orbiter_id, Vector3(0.1, 0.0, 0.0))

    snapshot = world.tick()

    assert snapshot.get(orbiter_id) is None
    assert snapshot.drag_preview is None
    assert snapshot.camera_navigation_enabled
    assert world.end_drag(Vector3(1.0, 0.0, 0.0)) is None
    assert world.click(BodyKind.ORBITER, Vector3()) is None


def test_cancel_drag():
    world = World()
    orbiter_id = world.spawn_body(BodyKind.ORBITER, Vector3())
    world.begin_drag(orbiter_id, Vector3())
    world.cancel_drag()

    assert world.camera_navigation_enabled
    assert world.click(BodyKind.ORBITER, Vector3()) is not None


def test_step_fixed_paces_ticks():
    world = World()
    assert world.step_fixed(0.0055) == 5
    assert world.tick_count == 5
    assert 0.0 <= world.get_interpolation_alpha() <= 1.0


def test_step_fixed_caps_steps_per_frame():
    world = World()
    steps = world.step_fixed(1.0)
    assert steps == world.params.max_steps_per_frame
    assert world.get_interpolation_alpha() <= 1.0


def test_seeded_worlds_are_deterministic():
    params = SimulationParameters(G=500.0, population_targets=PopulationTargets(3, 40))
    a = World(params, seed=5)
    b = World(params, seed=5)

    for _ in range(200):
        snap_a = a.tick()
        snap_b = b.tick()

    np.testing.assert_array_equal(snap_a.positions(), snap_b.positions())
    assert [e.outcome for e in snap_a.events] == [e.outcome for e in snap_b.events]


def test_snapshot_is_detached_from_world():
    world = World()
    orbiter_id = world.spawn_body(BodyKind.ORBITER, Vector3(), velocity=Vector3(1.0, 0.0, 0.0))
    before = world.snapshot()
    world.tick(dt=1.0)

    assert before.get(orbiter_id).position == (0.0, 0.0, 0.0)
    assert world.snapshot().get(orbiter_id).position == (1.0, 0.0, 0.0)


def test_reset_clears_bodies_and_time():
    world = World()
    world.spawn_body(BodyKind.ANCHOR, Vector3())
    world.tick()
    world.reset()

    assert len(world.snapshot()) == 0
    assert world.time == 0.0
    assert world.tick_count == 0


def test_load_scenario_replaces_state():
    world = World()
    world.spawn_body(BodyKind.ANCHOR, Vector3(9.0, 9.0, 9.0))
    world.load_scenario(ScenarioConfig.infall())

    assert world.anchor_count() == 1
    assert world.orbiter_count() == 1
    assert world.snapshot().anchors()[0].position == (0.0, 0.0, 0.0)


def test_invalid_initial_parameters_rejected():
    with pytest.raises(InvalidParameterError):
        World(SimulationParameters(collision_radius=0.0))


def test_population_and_collision_streams_are_independent():
    world = World(seed=5)
    assert world._population_rng.random() != world.resolver.rng.random()

    config = ScenarioConfig.infall()
    config.seed = 5
    world.load_scenario(config)
    assert world._population_rng.random() != world.resolver.rng.random()
