"""Ownership of all live bodies.

Anchors and orbiters live in two disjoint insertion-ordered maps keyed by
body id. Ids are handed out from a monotonic counter and never reused, so a
stale id held by an input collaborator can never alias a newer body.

Iteration is snapshot-then-mutate: ``for_each_*`` copies the id list before
the first callback and skips ids that were removed in the meantime. Bodies
created during an iteration are not visited by it.
"""

from __future__ import annotations
import itertools
import logging
from typing import Callable, Dict, Iterator, List, Optional

from gravitykit.core.body import Body, BodyId, BodyKind
from gravitykit.core.errors import UnknownBodyError
from gravitykit.core.parameters import SimulationParameters
from gravitykit.core.vector import Vector3

logger = logging.getLogger(__name__)


class BodyRegistry:
    """Creates, stores and removes bodies."""

    def __init__(self, params: Optional[SimulationParameters] = None):
        """Initialize an empty registry.

        Args:
            params: Source of default masses and scales. Uses defaults if None.
        """
        self.params = params or SimulationParameters()
        self._anchors: Dict[BodyId, Body] = {}
        self._orbiters: Dict[BodyId, Body] = {}
        self._ids = itertools.count(1)

    def _collection(self, kind: BodyKind) -> Dict[BodyId, Body]:
        return self._anchors if kind is BodyKind.ANCHOR else self._orbiters

    def create(
        self,
        kind: BodyKind,
        position: Vector3,
        velocity: Optional[Vector3] = None,
        mass: Optional[float] = None,
    ) -> BodyId:
        """Create a body and return its id.

        Args:
            kind: Anchor or orbiter
            position: World-space position (copied)
            velocity: Initial velocity (copied). Zero if None.
            mass: Mass override. Kind default from the parameters if None.

        Raises:
            ValueError: If mass is not positive
        """
        if kind is BodyKind.ANCHOR:
            default_mass, scale = self.params.anchor_mass, self.params.anchor_scale
        else:
            default_mass, scale = self.params.orbiter_mass, self.params.orbiter_scale

        if mass is None:
            mass = default_mass
        if not mass > 0:
            raise ValueError(f"Body mass must be positive, got {mass}")

        body_id = BodyId(next(self._ids))
        body = Body(
            id=body_id,
            kind=kind,
            position=Vector3.of(position),
            velocity=Vector3.of(velocity) if velocity is not None else Vector3(),
            mass=float(mass),
            spawn_mass=float(mass),
            base_scale=scale,
            visual_scale=scale,
        )
        self._collection(kind)[body_id] = body
        logger.debug("%s %d created at %r", kind.value, body_id, body.position)
        return body_id

    def remove(self, body_id: BodyId) -> bool:
        """Remove a body. Unknown ids are a no-op.

        Returns:
            True if a body was removed
        """
        for collection in (self._orbiters, self._anchors):
            body = collection.pop(body_id, None)
            if body is not None:
                logger.debug("%s %d removed", body.kind.value, body_id)
                return True
        logger.debug("remove ignored for unknown body %s", body_id)
        return False

    def get(self, body_id: BodyId) -> Optional[Body]:
        """Return the live body with this id, or None."""
        body = self._orbiters.get(body_id)
        if body is None:
            body = self._anchors.get(body_id)
        return body

    def require(self, body_id: BodyId) -> Body:
        """Return the live body with this id.

        Raises:
            UnknownBodyError: If the id is not live
        """
        body = self.get(body_id)
        if body is None:
            raise UnknownBodyError(body_id)
        return body

    def for_each_orbiter(self, fn: Callable[[Body], None]) -> int:
        """Call fn once for every orbiter alive at call time.

        Returns:
            Number of orbiters visited
        """
        return self._for_each(self._orbiters, fn)

    def for_each_anchor(self, fn: Callable[[Body], None]) -> int:
        """Call fn once for every anchor alive at call time."""
        return self._for_each(self._anchors, fn)

    @staticmethod
    def _for_each(collection: Dict[BodyId, Body], fn: Callable[[Body], None]) -> int:
        visited = 0
        for body_id in list(collection):
            body = collection.get(body_id)
            if body is None:
                continue
            fn(body)
            visited += 1
        return visited

    def anchors(self) -> List[Body]:
        """Snapshot list of live anchors."""
        return list(self._anchors.values())

    def orbiters(self) -> List[Body]:
        """Snapshot list of live orbiters."""
        return list(self._orbiters.values())

    def bodies(self) -> List[Body]:
        """Snapshot list of all live bodies, anchors first."""
        return self.anchors() + self.orbiters()

    def count(self, kind: BodyKind) -> int:
        return len(self._collection(kind))

    def clear(self, kind: Optional[BodyKind] = None) -> None:
        """Remove every body, or every body of one kind."""
        if kind is None or kind is BodyKind.ANCHOR:
            self._anchors.clear()
        if kind is None or kind is BodyKind.ORBITER:
            self._orbiters.clear()

    def __len__(self) -> int:
        return len(self._anchors) + len(self._orbiters)

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._orbiters or body_id in self._anchors

    def __iter__(self) -> Iterator[Body]:
        return iter(self.bodies())
