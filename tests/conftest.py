"""Shared fixtures for the GravityKit test suite."""

import pytest

from gravitykit.core.collision import CollisionResolver
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.registry import BodyRegistry


class FixedSource:
    """Uniform source that always returns the same sample."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def params():
    return SimulationParameters()


@pytest.fixture
def registry(params):
    return BodyRegistry(params)


@pytest.fixture
def always_gain():
    """Any positive gain probability wins."""
    return FixedSource(0.0)


@pytest.fixture
def always_lose():
    """Any gain probability below one loses."""
    return FixedSource(0.999999)


@pytest.fixture
def gain_resolver(registry, always_gain):
    return CollisionResolver(registry, rng=always_gain)


@pytest.fixture
def lose_resolver(registry, always_lose):
    return CollisionResolver(registry, rng=always_lose)
