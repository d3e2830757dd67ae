"""Exception types raised by the simulation core."""

from __future__ import annotations
from typing import Dict


class GravityKitError(Exception):
    """Base class for all GravityKit errors."""


class InvalidParameterError(GravityKitError, ValueError):
    """A configuration update was rejected.

    Attributes:
        problems: Mapping of field name to a human readable reason.
    """

    def __init__(self, problems: Dict[str, str]):
        self.problems = dict(problems)
        details = "; ".join(f"{name}: {reason}" for name, reason in self.problems.items())
        super().__init__(f"Invalid simulation parameters ({details})")


class UnknownBodyError(GravityKitError, KeyError):
    """A body id does not refer to a live body."""

    def __init__(self, body_id: int):
        self.body_id = body_id
        super().__init__(body_id)

    def __str__(self) -> str:
        return f"No live body with id {self.body_id}"
