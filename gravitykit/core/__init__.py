"""Core gravity engine components."""

from gravitykit.core.vector import Vector3
from gravitykit.core.body import Body, BodyId, BodyKind
from gravitykit.core.errors import GravityKitError, InvalidParameterError, UnknownBodyError
from gravitykit.core.parameters import PopulationTargets, SimulationParameters
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.collision import CollisionEvent, CollisionOutcome, CollisionResolver
from gravitykit.core.integrators import Integrator, gravitational_acceleration, semi_implicit_euler
from gravitykit.core.perturbation import DragState, PerturbationController
from gravitykit.core.snapshot import BodyState, Snapshot
from gravitykit.core.scenario import BodySpec, ScenarioConfig
from gravitykit.core.world import World

__all__ = [
    "Vector3",
    "Body",
    "BodyId",
    "BodyKind",
    "GravityKitError",
    "InvalidParameterError",
    "UnknownBodyError",
    "PopulationTargets",
    "SimulationParameters",
    "BodyRegistry",
    "CollisionEvent",
    "CollisionOutcome",
    "CollisionResolver",
    "Integrator",
    "gravitational_acceleration",
    "semi_implicit_euler",
    "DragState",
    "PerturbationController",
    "BodyState",
    "Snapshot",
    "BodySpec",
    "ScenarioConfig",
    "World",
]
