"""Derived appearance of bodies.

Pure functions of body state. Nothing here is read back by the physics.
"""

from __future__ import annotations
import colorsys
from dataclasses import dataclass
from typing import Tuple

from gravitykit.core.body import Body
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.vector import clamp

RGB = Tuple[int, int, int]

ANCHOR_HUE_MASS_PERIOD = 100.0   # Mass units per full trip around the hue wheel
ORBITER_FULL_BLUE_SPEED = 50.0   # Speed at which orbiters become fully magenta


@dataclass(frozen=True)
class VisualState:
    """Renderer-facing appearance of one body."""
    color: RGB
    visual_scale: float


def anchor_color(mass: float) -> RGB:
    """Hue proportional to mass, full saturation, half lightness."""
    hue = (mass / ANCHOR_HUE_MASS_PERIOD) % 1.0
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return (round(r * 255), round(g * 255), round(b * 255))


def orbiter_color(speed: float) -> RGB:
    """Red base with a blue channel proportional to speed (saturating)."""
    blue = clamp(speed / ORBITER_FULL_BLUE_SPEED, 0.0, 1.0)
    return (255, 0, round(blue * 255))


def anchor_scale(mass: float, spawn_mass: float, base_scale: float,
                 params: SimulationParameters) -> float:
    """Visual scale of an anchor.

    Each orbiter-mass unit gained or lost since spawn moves the scale factor
    by ``scale_increment``; the factor is clamped to [1, max_scale_factor].
    """
    units = (mass - spawn_mass) / params.orbiter_mass
    factor = clamp(1.0 + units * params.scale_increment, 1.0, params.max_scale_factor)
    return base_scale * factor


def map_body(body: Body, params: SimulationParameters) -> VisualState:
    """Compute the appearance of a body from its current state."""
    if body.is_anchor:
        return VisualState(
            color=anchor_color(body.mass),
            visual_scale=anchor_scale(body.mass, body.spawn_mass, body.base_scale, params),
        )
    return VisualState(color=orbiter_color(body.get_speed()), visual_scale=body.base_scale)


def apply_visual_state(body: Body, params: SimulationParameters) -> VisualState:
    """Write the mapped appearance onto the body and return it."""
    state = map_body(body, params)
    body.color = state.color
    body.visual_scale = state.visual_scale
    return state
