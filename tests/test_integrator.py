import pytest

from gravitykit.core.body import Body, BodyId, BodyKind
from gravitykit.core.collision import CollisionResolver
from gravitykit.core.integrators import Integrator, gravitational_acceleration, semi_implicit_euler
from gravitykit.core.vector import Vector3


def test_inverse_square_acceleration():
    a = gravitational_acceleration(Vector3(5.0, 0.0, 0.0), Vector3(), 10.0, G=1000.0, min_distance=1e-3)
    assert a.x == pytest.approx(-400.0)
    assert a.y == 0.0 and a.z == 0.0


def test_acceleration_scales_with_distance():
    near = gravitational_acceleration(Vector3(1.0, 0.0, 0.0), Vector3(), 1.0, 1.0, 1e-3)
    far = gravitational_acceleration(Vector3(2.0, 0.0, 0.0), Vector3(), 1.0, 1.0, 1e-3)
    assert near.magnitude() == pytest.approx(4.0 * far.magnitude())


def test_coincident_bodies_give_zero_acceleration():
    a = gravitational_acceleration(Vector3(1.0, 1.0, 1.0), Vector3(1.0, 1.0, 1.0), 10.0, 1000.0, 1e-3)
    assert a.as_tuple() == (0.0, 0.0, 0.0)


def test_min_distance_bounds_acceleration():
    a = gravitational_acceleration(Vector3(1e-9, 0.0, 0.0), Vector3(), 10.0, 1000.0, 1e-3)
    assert a.is_finite()
    assert a.magnitude() == pytest.approx(1000.0 * 10.0 / 1e-6)


def test_semi_implicit_euler_uses_new_velocity():
    body = Body(BodyId(1), BodyKind.ORBITER, velocity=Vector3(1.0, 0.0, 0.0))
    semi_implicit_euler(body, Vector3(0.0, 2.0, 0.0), 0.5)
    assert body.velocity.as_tuple() == (1.0, 1.0, 0.0)
    assert body.position.as_tuple() == (0.5, 0.5, 0.0)


def test_free_drift_without_anchors(registry, gain_resolver, params):
    body_id = registry.create(BodyKind.ORBITER, Vector3(), velocity=Vector3(1.0, 2.0, 3.0))
    integrator = Integrator(registry, gain_resolver)

    for _ in range(10):
        integrator.step(0.1, params)

    body = registry.get(body_id)
    assert body.velocity.as_tuple() == (1.0, 2.0, 3.0)
    assert body.position.x == pytest.approx(1.0)
    assert body.position.y == pytest.approx(2.0)
    assert body.position.z == pytest.approx(3.0)


def test_anchors_never_move(registry, gain_resolver, params):
    anchor_id = registry.create(BodyKind.ANCHOR, Vector3(1.0, 2.0, 3.0))
    registry.create(BodyKind.ORBITER, Vector3(4.0, 2.0, 3.0))
    integrator = Integrator(registry, gain_resolver)

    for _ in range(5):
        integrator.step(params.dt, params)

    anchor = registry.get(anchor_id)
    assert anchor.position.as_tuple() == (1.0, 2.0, 3.0)
    assert anchor.velocity.as_tuple() == (0.0, 0.0, 0.0)


def test_forces_from_anchors_superpose(registry, gain_resolver, params):
    registry.create(BodyKind.ANCHOR, Vector3(-3.0, 0.0, 0.0))
    registry.create(BodyKind.ANCHOR, Vector3(3.0, 0.0, 0.0))
    orbiter_id = registry.create(BodyKind.ORBITER, Vector3())

    Integrator(registry, gain_resolver).step(params.dt, params)

    orbiter = registry.get(orbiter_id)
    assert orbiter.velocity.magnitude() == pytest.approx(0.0, abs=1e-9)


def test_fragment_is_not_integrated_in_its_birth_tick(registry, lose_resolver, params):
    registry.create(BodyKind.ANCHOR, Vector3())
    orbiter_id = registry.create(BodyKind.ORBITER, Vector3(0.2, 0.0, 0.0), velocity=Vector3(-1.0, 0.0, 0.0))

    events = Integrator(registry, lose_resolver).step(0.01, params)

    assert len(events) == 1
    fragment = registry.get(events[0].fragment_id)
    orbiter = registry.get(orbiter_id)
    # Reflected and displaced one step, then nothing else this tick
    assert orbiter.velocity.x == pytest.approx(1.0)
    assert orbiter.position.x == pytest.approx(0.21)
    assert fragment.position.x == pytest.approx(0.21)
    assert fragment.velocity.x == pytest.approx(0.9)


def test_resolved_contact_ends_orbiter_step(registry, lose_resolver, params):
    registry.create(BodyKind.ANCHOR, Vector3())
    registry.create(BodyKind.ANCHOR, Vector3(3.0, 0.0, 0.0), mass=1000.0)
    orbiter_id = registry.create(BodyKind.ORBITER, Vector3(0.1, 0.0, 0.0))

    Integrator(registry, lose_resolver).step(0.01, params)

    # The heavy second anchor's pull is never applied
    orbiter = registry.get(orbiter_id)
    assert orbiter.velocity.as_tuple() == (0.0, 0.0, 0.0)
    assert orbiter.position.x == pytest.approx(0.1)


def test_state_stays_finite_through_close_approach(registry, params, always_gain):
    # Radius too small for contact, so the orbiter passes through the anchor
    tight = params.updated(collision_radius=1e-9)
    registry.params = tight
    registry.create(BodyKind.ANCHOR, Vector3())
    orbiter_id = registry.create(BodyKind.ORBITER, Vector3(0.5, 0.0, 0.0))
    integrator = Integrator(registry, CollisionResolver(registry, rng=always_gain))

    for _ in range(500):
        integrator.step(tight.dt, tight)

    orbiter = registry.get(orbiter_id)
    assert orbiter.position.is_finite()
    assert orbiter.velocity.is_finite()


def test_survivors_advance_exactly_once_when_one_is_absorbed(registry, gain_resolver, params):
    registry.create(BodyKind.ANCHOR, Vector3())
    first = registry.create(BodyKind.ORBITER, Vector3(3.0, 0.0, 0.0), velocity=Vector3(0.0, 1.0, 0.0))
    absorbed = registry.create(BodyKind.ORBITER, Vector3(0.1, 0.0, 0.0))
    last = registry.create(BodyKind.ORBITER, Vector3(0.0, -4.0, 0.0), velocity=Vector3(1.0, 0.0, 0.0))

    def one_step(position, velocity, anchor_mass):
        a = gravitational_acceleration(position, Vector3(), anchor_mass, params.G, params.min_distance)
        new_velocity = velocity + a * params.dt
        return position + new_velocity * params.dt, new_velocity

    expected = {
        first: one_step(Vector3(3.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), 10.0),
        # Absorption happens before this orbiter's turn, so it feels the heavier anchor
        last: one_step(Vector3(0.0, -4.0, 0.0), Vector3(1.0, 0.0, 0.0), 11.0),
    }

    events = Integrator(registry, gain_resolver).step(params.dt, params)

    assert [e.orbiter_id for e in events] == [absorbed]
    assert absorbed not in registry
    for body_id, (position, velocity) in expected.items():
        body = registry.get(body_id)
        assert body.position.as_tuple() == pytest.approx(position.as_tuple())
        assert body.velocity.as_tuple() == pytest.approx(velocity.as_tuple())
