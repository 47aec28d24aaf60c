"""Exception types raised by the trajectory engine."""

from __future__ import annotations

from collections.abc import Sequence


class PathforgeError(Exception):
    """Base class for pathforge errors."""


class MalformedPathError(PathforgeError, ValueError):
    """Path cannot be turned into a trajectory (too few waypoints, bad angle anchor, bad JSON)."""


class InfeasibleProfileError(PathforgeError):
    """Angular motion profile cannot reach a target in the time available.

    Attributes:
        indices: Trajectory sample indices whose angle is NaN
    """

    def __init__(self, indices: Sequence[int], message: str | None = None):
        self.indices = list(indices)
        if message is None:
            message = (
                f"Angular profile infeasible for {len(self.indices)} samples "
                f"(first at index {self.indices[0] if self.indices else -1})"
            )
        super().__init__(message)
