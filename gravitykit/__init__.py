"""
GravityKit - Interactive N-body gravity sandbox with collisions and mass transfer.

A MOSS Kit for playful orbital mechanics featuring:
- Stationary anchors attracting mobile orbiters (inverse-square law)
- Semi-implicit Euler integration with hot-swappable G and dt
- Stochastic absorb / bounce-and-fragment collisions
- Drag-to-launch input state machine
"""

__version__ = "0.1.0"

from gravitykit.core.vector import Vector3
from gravitykit.core.body import BodyKind
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.world import World

__all__ = [
    "Vector3",
    "BodyKind",
    "SimulationParameters",
    "World",
    "__version__",
]
