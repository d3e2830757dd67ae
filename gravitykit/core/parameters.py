"""Simulation parameters.

All tunables live in one immutable struct. The engine swaps in a new
validated instance between ticks, so every value can change mid-run
without a restart and nothing changes inside a tick.

Constants are tuned for visual pacing, not SI units.
"""

from __future__ import annotations
import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Dict

from gravitykit.core.errors import InvalidParameterError


@dataclass(frozen=True)
class PopulationTargets:
    """Number of randomly generated bodies per kind."""
    anchors: int = 0
    orbiters: int = 0


@dataclass(frozen=True)
class SimulationParameters:
    """Complete engine configuration."""

    # Gravity and time stepping
    G: float = 1000.0
    dt: float = 0.001
    min_distance: float = 1e-3      # Floor for |r| in the force law

    # Collisions
    collision_radius: float = 0.5
    reference_mass: float = 10.0    # Anchor mass with 50/50 gain odds
    gain_softness: float = 1.0      # Width of the logistic gain curve
    fragment_damping: float = 0.9
    min_anchor_mass: float = 1.0

    # Default masses
    anchor_mass: float = 10.0
    orbiter_mass: float = 1.0       # Also the mass-transfer unit

    # Appearance
    anchor_scale: float = 0.5
    orbiter_scale: float = 0.1
    scale_increment: float = 0.2    # Scale factor change per transferred unit (0.1 world units on a 0.5 anchor)
    max_scale_factor: float = 10.0

    # Drag-to-launch
    impulse_scale: float = 100.0

    # Random scene generation
    population_targets: PopulationTargets = field(default_factory=PopulationTargets)
    spawn_extent: float = 5.0       # Half-width of the spawn cube
    orbiter_spawn_speed: float = 10.0

    # Frame pacing
    max_steps_per_frame: int = 20

    def problems(self) -> Dict[str, str]:
        """Return a mapping of invalid field names to reasons (empty if valid)."""
        found: Dict[str, str] = {}

        for f in dataclasses.fields(self):
            if f.name == "population_targets":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                found[f.name] = "must be a number"
            elif not math.isfinite(value):
                found[f.name] = "must be finite"

        positive = (
            "dt", "min_distance", "collision_radius", "gain_softness",
            "anchor_mass", "orbiter_mass", "min_anchor_mass",
            "anchor_scale", "orbiter_scale", "spawn_extent",
        )
        for name in positive:
            if name not in found and getattr(self, name) <= 0:
                found[name] = "must be positive"

        non_negative = ("G", "scale_increment", "impulse_scale", "orbiter_spawn_speed")
        for name in non_negative:
            if name not in found and getattr(self, name) < 0:
                found[name] = "must not be negative"

        if "fragment_damping" not in found and not 0.0 <= self.fragment_damping < 1.0:
            found["fragment_damping"] = "must be in [0, 1)"
        if "max_scale_factor" not in found and self.max_scale_factor < 1.0:
            found["max_scale_factor"] = "must be at least 1"
        if "max_steps_per_frame" not in found and (
                not isinstance(self.max_steps_per_frame, int) or self.max_steps_per_frame < 1):
            found["max_steps_per_frame"] = "must be a positive integer"

        targets = self.population_targets
        if not isinstance(targets, PopulationTargets):
            found["population_targets"] = "must be a PopulationTargets"
        elif not (isinstance(targets.anchors, int) and isinstance(targets.orbiters, int)
                  and targets.anchors >= 0 and targets.orbiters >= 0):
            found["population_targets"] = "counts must be non-negative integers"

        return found

    def validate(self) -> SimulationParameters:
        """Raise InvalidParameterError if any field is invalid, else return self."""
        found = self.problems()
        if found:
            raise InvalidParameterError(found)
        return self

    def updated(self, **changes: Any) -> SimulationParameters:
        """Return a validated copy with the given fields replaced.

        The whole change-set is rejected if any field is unknown or any
        resulting value is invalid.

        Raises:
            InvalidParameterError: naming every offending field
        """
        known = {f.name for f in dataclasses.fields(self)}
        unknown = {name: "unknown parameter" for name in changes if name not in known}
        if unknown:
            raise InvalidParameterError(unknown)

        if isinstance(changes.get("population_targets"), (tuple, list)):
            changes["population_targets"] = PopulationTargets(*changes["population_targets"])

        try:
            candidate = dataclasses.replace(self, **changes)
        except TypeError as e:
            raise InvalidParameterError({"parameters": str(e)}) from e

        found = {name: reason for name, reason in candidate.problems().items() if name in changes}
        if found:
            raise InvalidParameterError(found)
        return candidate
