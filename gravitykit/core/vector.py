"""Vector mathematics for 3D gravity simulation."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

import numpy as np


@dataclass
class Vector3:
    """Mutable 3D vector used for positions and velocities.

    Binary operators build new vectors; ``+=``, ``-=`` and ``*=`` update
    the left operand in place, so aliases of it see the change.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_array(cls, arr: np.ndarray) -> Vector3:
        """Build from the first two or three entries of an array."""
        z = float(arr[2]) if len(arr) > 2 else 0.0
        return cls(float(arr[0]), float(arr[1]), z)

    @classmethod
    def of(cls, value: Iterable[float]) -> Vector3:
        """Coerce a Vector3 or any 2/3-element sequence into a new Vector3."""
        if isinstance(value, Vector3):
            return value.copy()
        components = [float(c) for c in value]
        if len(components) == 2:
            components.append(0.0)
        if len(components) != 3:
            raise ValueError(f"Expected 2 or 3 components, got {len(components)}")
        return cls(*components)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array(self.as_tuple())

    def copy(self) -> Vector3:
        return Vector3(*self.as_tuple())

    def dot(self, other: Vector3) -> float:
        return sum(a * b for a, b in zip(self, other))

    def magnitude_squared(self) -> float:
        return self.dot(self)

    def magnitude(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def distance_squared_to(self, other: Vector3) -> float:
        return (other - self).magnitude_squared()

    def normalized(self) -> Vector3:
        """Unit vector along this one; near-zero vectors map to zero."""
        length = self.magnitude()
        if length < 1e-10:
            return Vector3()
        return self * (1.0 / length)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in self)

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return self * -1.0

    def __iadd__(self, other: Vector3) -> Vector3:
        self.x, self.y, self.z = self.x + other.x, self.y + other.y, self.z + other.z
        return self

    def __isub__(self, other: Vector3) -> Vector3:
        self.x, self.y, self.z = self.x - other.x, self.y - other.y, self.z - other.z
        return self

    def __imul__(self, scalar: float) -> Vector3:
        self.x, self.y, self.z = self.x * scalar, self.y * scalar, self.z * scalar
        return self

    def __repr__(self) -> str:
        return "Vector3({:.4f}, {:.4f}, {:.4f})".format(*self)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Limit value to [min_val, max_val]."""
    return min(max_val, max(min_val, value))


def logistic(x: float) -> float:
    """Numerically stable logistic function 1 / (1 + e^-x)."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)
