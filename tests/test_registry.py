import pytest

from gravitykit.core.body import BodyKind
from gravitykit.core.errors import UnknownBodyError
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.vector import Vector3


def test_create_uses_kind_defaults(registry, params):
    anchor_id = registry.create(BodyKind.ANCHOR, Vector3(1.0, 0.0, 0.0))
    orbiter_id = registry.create(BodyKind.ORBITER, Vector3(2.0, 0.0, 0.0))

    anchor = registry.get(anchor_id)
    orbiter = registry.get(orbiter_id)
    assert anchor.is_anchor and anchor.mass == params.anchor_mass
    assert anchor.spawn_mass == params.anchor_mass
    assert anchor.visual_scale == params.anchor_scale
    assert orbiter.is_orbiter and orbiter.mass == params.orbiter_mass
    assert orbiter.velocity.as_tuple() == (0.0, 0.0, 0.0)


def test_ids_are_monotonic_and_never_reused(registry):
    first = registry.create(BodyKind.ORBITER, Vector3())
    second = registry.create(BodyKind.ANCHOR, Vector3())
    registry.remove(second)
    third = registry.create(BodyKind.ANCHOR, Vector3())

    assert first < second < third
    assert second not in registry


def test_create_copies_vectors(registry):
    position = Vector3(1.0, 2.0, 3.0)
    body_id = registry.create(BodyKind.ORBITER, position)
    position.x = 100.0
    assert registry.get(body_id).position.x == 1.0


def test_create_rejects_non_positive_mass(registry):
    with pytest.raises(ValueError):
        registry.create(BodyKind.ANCHOR, Vector3(), mass=0.0)
    assert len(registry) == 0


def test_kind_is_immutable(registry):
    body = registry.get(registry.create(BodyKind.ORBITER, Vector3()))
    with pytest.raises(AttributeError):
        body.kind = BodyKind.ANCHOR


def test_remove_unknown_is_noop(registry):
    registry.create(BodyKind.ORBITER, Vector3())
    assert registry.remove(999) is False
    assert len(registry) == 1


def test_require_unknown_raises(registry):
    with pytest.raises(UnknownBodyError) as excinfo:
        registry.require(42)
    assert excinfo.value.body_id == 42
    assert isinstance(excinfo.value, KeyError)


def test_removal_during_iteration_skips_removed(registry):
    ids = [registry.create(BodyKind.ORBITER, Vector3(float(i), 0.0, 0.0)) for i in range(4)]
    visited = []

    def visit(body):
        visited.append(body.id)
        if body.id == ids[0]:
            registry.remove(ids[2])

    count = registry.for_each_orbiter(visit)
    assert visited == [ids[0], ids[1], ids[3]]
    assert count == 3


def test_creation_during_iteration_is_not_visited(registry):
    registry.create(BodyKind.ORBITER, Vector3())
    registry.create(BodyKind.ORBITER, Vector3())
    visited = []

    def visit(body):
        visited.append(body.id)
        registry.create(BodyKind.ORBITER, Vector3())

    registry.for_each_orbiter(visit)
    assert len(visited) == 2
    assert registry.count(BodyKind.ORBITER) == 4


def test_self_removal_during_iteration(registry):
    for _ in range(3):
        registry.create(BodyKind.ORBITER, Vector3())

    assert registry.for_each_orbiter(lambda body: registry.remove(body.id)) == 3
    assert registry.count(BodyKind.ORBITER) == 0


def test_bodies_lists_anchors_first(registry):
    orbiter = registry.create(BodyKind.ORBITER, Vector3())
    anchor = registry.create(BodyKind.ANCHOR, Vector3())
    assert [b.id for b in registry.bodies()] == [anchor, orbiter]
    assert [b.id for b in registry] == [anchor, orbiter]


def test_clear_by_kind(registry):
    registry.create(BodyKind.ANCHOR, Vector3())
    registry.create(BodyKind.ORBITER, Vector3())
    registry.create(BodyKind.ORBITER, Vector3())

    registry.clear(BodyKind.ORBITER)
    assert registry.count(BodyKind.ANCHOR) == 1
    assert registry.count(BodyKind.ORBITER) == 0

    registry.clear()
    assert len(registry) == 0


def test_default_parameters():
    registry = BodyRegistry()
    body_id = registry.create(BodyKind.ANCHOR, Vector3(), mass=3.0)
    assert registry.get(body_id).mass == 3.0
