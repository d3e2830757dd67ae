"""Pygame-based real-time top-down renderer for the gravity sandbox.

Provides an XY view of the world with:
- Anchors and orbiters drawn with their mapped color and scale
- Drag-to-launch preview line
- Telemetry overlay
- Mouse and keyboard input forwarded to the World
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from gravitykit.core.body import BodyId, BodyKind
from gravitykit.core.parameters import PopulationTargets
from gravitykit.core.vector import Vector3

if TYPE_CHECKING:
    from gravitykit.core.snapshot import Snapshot
    from gravitykit.core.world import World


HELP_LINES = (
    "Controls:",
    "Click - Add body",
    "Drag orbiter - Launch",
    "Right drag - Pan",
    "A/O - Add anchors/orbiters",
    "G - Random scene",
    "Up/Down - G",
    "[ / ] - dt",
    "Space - Pause",
    "R - Reset",
    "T - Toggle telemetry",
    "Esc - Quit",
)


@dataclass
class RenderConfig:
    """Renderer configuration."""
    width: int = 1280
    height: int = 720
    scale: float = 50.0             # Pixels per world unit
    background_color: Tuple[int, int, int] = (10, 10, 20)
    grid_color: Tuple[int, int, int] = (30, 30, 45)
    drag_color: Tuple[int, int, int] = (255, 255, 0)
    text_color: Tuple[int, int, int] = (220, 220, 220)
    help_color: Tuple[int, int, int] = (150, 150, 160)

    show_telemetry: bool = True
    min_body_radius: int = 2        # Pixels
    pick_radius: int = 10           # Pixels around an orbiter that start a drag

    generate_targets: PopulationTargets = PopulationTargets(anchors=5, orbiters=100)
    g_step: float = 1.25            # Multiplier per G key press


class PygameRenderer:
    """Real-time 2D renderer using Pygame.

    Renders the XY plane (z is ignored) and translates mouse gestures into
    World input events: a press on an orbiter starts a drag, a release ends
    it, and every release is also delivered as a plain click, just as a
    browser would. The World swallows the click that follows a drag.
    """

    def __init__(self, config: Optional[RenderConfig] = None):
        """Initialize renderer.

        Args:
            config: Render configuration. Uses defaults if None.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError(
                "Pygame is required for visualization. "
                "Install it with: pip install pygame"
            )

        self.config = config or RenderConfig()
        self._initialized = False

        # Pygame surfaces
        self._screen = None
        self._clock = None
        self._font = None
        self._small_font = None

        # Camera state
        self._camera_x: float = 0.0
        self._camera_y: float = 0.0
        self._panning = False
        self._pan_last: Tuple[int, int] = (0, 0)

        # Input state
        self.spawn_kind = BodyKind.ANCHOR
        self._collisions_seen: int = 0
        self._keys = {
            'quit': False,
            'reset': False,
            'paused': False,
        }

    def init(self) -> None:
        """Initialize Pygame and create window."""
        pygame.init()
        pygame.display.set_caption("GravityKit - Gravity Sandbox")

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height)
        )
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 24)
        self._small_font = pygame.font.Font(None, 18)

        self._initialized = True

    def quit(self) -> None:
        """Clean up Pygame."""
        if self._initialized:
            pygame.quit()
            self._initialized = False

    def world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Convert world coordinates to screen coordinates."""
        screen_x = int((x - self._camera_x) * self.config.scale + self.config.width / 2)
        screen_y = int(self.config.height / 2 - (y - self._camera_y) * self.config.scale)
        return screen_x, screen_y

    def screen_to_world(self, sx: float, sy: float) -> Vector3:
        """Convert screen coordinates to a point on the z=0 plane."""
        x = (sx - self.config.width / 2) / self.config.scale + self._camera_x
        y = (self.config.height / 2 - sy) / self.config.scale + self._camera_y
        return Vector3(x, y, 0.0)

    def pick_orbiter(self, snapshot: Snapshot, sx: float, sy: float) -> Optional[BodyId]:
        """Return the orbiter drawn closest to a screen point, if within reach."""
        best_id = None
        best_d2 = float("inf")
        for body in snapshot.orbiters():
            bx, by = self.world_to_screen(body.position[0], body.position[1])
            reach = max(self.config.pick_radius, body.visual_scale * self.config.scale)
            d2 = (bx - sx) ** 2 + (by - sy) ** 2
            if d2 <= reach * reach and d2 < best_d2:
                best_id, best_d2 = body.id, d2
        return best_id

    def handle_input(self, world: World) -> Dict[str, bool]:
        """Process window events, forwarding gestures to the world.

        Returns:
            Dictionary with 'quit', 'reset' and 'paused' keys.
        """
        if not self._initialized:
            return self._keys

        self._keys['reset'] = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._keys['quit'] = True
            elif event.type == pygame.WINDOWFOCUSLOST:
                # The release may never arrive
                world.cancel_drag()
                self._panning = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key, world)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._handle_mouse_down(event.button, event.pos, world)
            elif event.type == pygame.MOUSEBUTTONUP:
                self._handle_mouse_up(event.button, event.pos, world)
            elif event.type == pygame.MOUSEMOTION:
                self._handle_mouse_motion(event.pos, world)

        return self._keys.copy()

    def _handle_key(self, key: int, world: World) -> None:
        params = world.params
        if key == pygame.K_ESCAPE:
            self._keys['quit'] = True
        elif key == pygame.K_r:
            self._keys['reset'] = True
        elif key == pygame.K_SPACE:
            self._keys['paused'] = not self._keys['paused']
        elif key == pygame.K_a:
            self.spawn_kind = BodyKind.ANCHOR
        elif key == pygame.K_o:
            self.spawn_kind = BodyKind.ORBITER
        elif key == pygame.K_g:
            world.populate(self.config.generate_targets, kinds=(BodyKind.ANCHOR, BodyKind.ORBITER))
        elif key == pygame.K_UP:
            world.set_parameters(G=params.G * self.config.g_step)
        elif key == pygame.K_DOWN:
            world.set_parameters(G=params.G / self.config.g_step)
        elif key == pygame.K_RIGHTBRACKET:
            world.set_parameters(dt=params.dt * 2.0)
        elif key == pygame.K_LEFTBRACKET:
            world.set_parameters(dt=params.dt / 2.0)
        elif key == pygame.K_t:
            self.config.show_telemetry = not self.config.show_telemetry

    def _handle_mouse_down(self, button: int, pos: Tuple[int, int], world: World) -> None:
        if button == 1:
            body_id = self.pick_orbiter(world.snapshot(), pos[0], pos[1])
            if body_id is not None:
                world.begin_drag(body_id, self.screen_to_world(*pos))
        elif button == 3 and world.camera_navigation_enabled:
            self._panning = True
            self._pan_last = pos

    def _handle_mouse_up(self, button: int, pos: Tuple[int, int], world: World) -> None:
        if button == 1:
            point = self.screen_to_world(*pos)
            # No-op while idle, but still arms suppression for a drag dropped mid-gesture
            world.end_drag(point)
            # Every release is also a click; the world drops the one after a drag
            world.click(self.spawn_kind, point)
        elif button == 3:
            self._panning = False

    def _handle_mouse_motion(self, pos: Tuple[int, int], world: World) -> None:
        if world.perturbation.is_dragging:
            world.update_drag(self.screen_to_world(*pos))
        elif self._panning and world.camera_navigation_enabled:
            dx = pos[0] - self._pan_last[0]
            dy = pos[1] - self._pan_last[1]
            self._camera_x -= dx / self.config.scale
            self._camera_y += dy / self.config.scale
            self._pan_last = pos

    def _draw_grid(self) -> None:
        """Draw one line per world unit across the visible area."""
        top_left = self.screen_to_world(0, 0)
        bottom_right = self.screen_to_world(self.config.width, self.config.height)

        for gx in range(math.floor(top_left.x), math.ceil(bottom_right.x) + 1):
            sx, _ = self.world_to_screen(gx, 0.0)
            pygame.draw.line(self._screen, self.config.grid_color, (sx, 0), (sx, self.config.height))

        for gy in range(math.floor(bottom_right.y), math.ceil(top_left.y) + 1):
            _, sy = self.world_to_screen(0.0, gy)
            pygame.draw.line(self._screen, self.config.grid_color, (0, sy), (self.config.width, sy))

    def _draw_bodies(self, snapshot: Snapshot) -> None:
        # Anchors first so orbiters stay visible on top
        for body in snapshot.anchors() + snapshot.orbiters():
            center = self.world_to_screen(body.position[0], body.position[1])
            radius = max(self.config.min_body_radius, int(body.visual_scale * self.config.scale))
            pygame.draw.circle(self._screen, body.color, center, radius)

    def _draw_drag_preview(self, snapshot: Snapshot) -> None:
        if snapshot.drag_preview is None:
            return
        start, end = snapshot.drag_preview
        pygame.draw.line(
            self._screen, self.config.drag_color,
            self.world_to_screen(start[0], start[1]),
            self.world_to_screen(end[0], end[1]),
            2,
        )

    def _blit_lines(self, font, lines, x: int, line_height: int, color) -> None:
        for row, line in enumerate(lines):
            if line:
                self._screen.blit(font.render(line, True, color), (x, 10 + row * line_height))

    def _draw_telemetry(self, snapshot: Snapshot, world: World) -> None:
        """Counts and parameters on the left, key help on the right."""
        if not self.config.show_telemetry:
            return

        params = world.params
        status = [
            f"FPS: {self.get_fps():.0f}",
            f"Time: {snapshot.time:.3f}",
            f"Anchors: {len(snapshot.anchors())}",
            f"Orbiters: {len(snapshot.orbiters())}",
            f"Collisions: {self._collisions_seen}",
            "",
            f"G: {params.G:.1f}",
            f"dt: {params.dt:.5f}",
            f"Click adds: {self.spawn_kind.value}",
            "PAUSED" if self._keys['paused'] else "",
        ]
        self._blit_lines(self._font, status, 10, 22, self.config.text_color)
        self._blit_lines(self._small_font, HELP_LINES, self.config.width - 170, 18, self.config.help_color)

    def render(self, snapshot: Snapshot, world: World, fps: int = 60) -> None:
        """Render current frame.

        Args:
            snapshot: State to draw
            world: World (for parameters shown in the overlay)
            fps: Target frame rate
        """
        if not self._initialized:
            self.init()

        self._collisions_seen += len(snapshot.events)

        self._screen.fill(self.config.background_color)
        self._draw_grid()
        self._draw_bodies(snapshot)
        self._draw_drag_preview(snapshot)
        self._draw_telemetry(snapshot, world)

        pygame.display.flip()

        # Limit frame rate
        self._clock.tick(fps)

    def reset_counters(self) -> None:
        self._collisions_seen = 0

    def get_fps(self) -> float:
        """Get current FPS."""
        return self._clock.get_fps() if self._clock else 0.0
