"""Drag-to-launch input handling.

An explicit two-state machine driven by discrete input events:

    IDLE --begin_drag--> DRAGGING --end_drag / cancel_drag--> IDLE

While dragging, camera navigation is disabled so panning does not compete
with the gesture. Releasing a drag launches the orbiter with velocity
``(release - start) * impulse_scale`` and arms a one-shot flag that
swallows the plain click UIs deliver right after a release.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Tuple

from gravitykit.core.body import BodyId
from gravitykit.core.registry import BodyRegistry
from gravitykit.core.vector import Vector3

logger = logging.getLogger(__name__)


class DragState(Enum):
    """Current gesture state."""
    IDLE = "idle"
    DRAGGING = "dragging"


class PerturbationController:
    """Convert drag gestures into launch impulses on orbiters."""

    def __init__(self, registry: BodyRegistry):
        self.registry = registry

        self._state = DragState.IDLE
        self._body_id: Optional[BodyId] = None
        self._start: Optional[Vector3] = None
        self._current: Optional[Vector3] = None

        self._suppress_next_click: bool = False
        self._awaiting_release: bool = False   # Drag dropped by validate(), release still pending
        self.camera_navigation_enabled: bool = True

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is DragState.DRAGGING

    @property
    def body_id(self) -> Optional[BodyId]:
        """Id of the orbiter being dragged, None while idle."""
        return self._body_id

    @property
    def preview_impulse(self) -> Optional[Vector3]:
        """Live pointer minus drag start, for display only."""
        if not self.is_dragging:
            return None
        return self._current - self._start

    @property
    def preview_segment(self) -> Optional[Tuple[Vector3, Vector3]]:
        """(start, live pointer) of the current drag, for display only."""
        if not self.is_dragging:
            return None
        return self._start.copy(), self._current.copy()

    def begin_drag(self, body_id: BodyId, point: Vector3) -> bool:
        """Start dragging an orbiter.

        A drag already in progress is replaced. Anchors and unknown ids
        are ignored.

        Returns:
            True if a drag started
        """
        body = self.registry.get(body_id)
        if body is None or not body.is_orbiter:
            logger.debug("drag start ignored for body %s", body_id)
            return False

        if self.is_dragging:
            logger.debug("drag on %s replaced by drag on %s", self._body_id, body_id)

        self._state = DragState.DRAGGING
        self._body_id = body_id
        self._start = Vector3.of(point)
        self._current = self._start.copy()
        self.camera_navigation_enabled = False
        logger.debug("drag start on orbiter %d at %r", body_id, self._start)
        return True

    def update_drag(self, point: Vector3) -> Optional[Vector3]:
        """Move the live pointer; returns the preview impulse (None if idle)."""
        if not self.is_dragging:
            return None
        self._current = Vector3.of(point)
        return self.preview_impulse

    def end_drag(self, point: Vector3, impulse_scale: float) -> Optional[Vector3]:
        """Release the drag and launch the orbiter.

        The click-suppression flag is raised even if the orbiter vanished
        mid-drag, since the UI still delivers the trailing click.

        Returns:
            The velocity given to the orbiter, or None if nothing was launched
        """
        if not self.is_dragging:
            if self._awaiting_release:
                self._awaiting_release = False
                self._suppress_next_click = True
            return None

        release = Vector3.of(point)
        launched = None
        body = self.registry.get(self._body_id)
        if body is not None:
            launched = (release - self._start) * impulse_scale
            body.velocity = launched.copy()
            logger.debug("orbiter %d launched with %r", body.id, launched)
        else:
            logger.debug("drag end ignored, body %s no longer exists", self._body_id)

        self._reset()
        self._suppress_next_click = True
        return launched

    def cancel_drag(self) -> None:
        """Abandon the drag without launching (e.g. window focus lost)."""
        if self.is_dragging:
            logger.debug("drag on %s cancelled", self._body_id)
        self._reset()

    def validate(self) -> None:
        """Per-tick housekeeping: drop a drag whose orbiter was absorbed."""
        if self.is_dragging and self._body_id not in self.registry:
            logger.debug("dragged body %s vanished, drag reset", self._body_id)
            self._reset()
            self._awaiting_release = True

    def consume_click_suppression(self) -> bool:
        """Return True (and clear the flag) if the next click must be ignored."""
        suppressed = self._suppress_next_click
        self._suppress_next_click = False
        return suppressed

    def _reset(self) -> None:
        self._awaiting_release = False
        self._state = DragState.IDLE
        self._body_id = None
        self._start = None
        self._current = None
        self.camera_navigation_enabled = True
