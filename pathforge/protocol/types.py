"""
Type definitions for pathforge paths.

Paths are authored by the editing layer and read (never mutated) by the
engine. They are msgspec structs so JSON documents decode straight into them;
field constraints are checked on decode.
"""

from typing import Annotated, NamedTuple

import msgspec


class Vector2(NamedTuple):
    """Planar vector (in/s for velocities)."""

    x: float
    y: float


class Point(msgspec.Struct, frozen=True, rename="camel"):
    """Planar position in inches."""

    x: float
    y: float


class Waypoint(Point, frozen=True, rename="camel"):
    """Through-point on the path with a travel heading and two Bezier handles.

    ``heading`` is the direction of travel in degrees (0 = +x), not the way
    the robot faces. Handle lengths are in inches.
    """

    heading: float = 0.0
    handle_before_length: Annotated[float, msgspec.Meta(ge=0.0)] = 0.0
    handle_after_length: Annotated[float, msgspec.Meta(ge=0.0)] = 0.0


class AnglePoint(msgspec.Struct, frozen=True, rename="camel"):
    """Facing-angle target anchored at parameter ``t`` of segment ``after_waypoint``."""

    after_waypoint: Annotated[int, msgspec.Meta(ge=0)]
    t: Annotated[float, msgspec.Meta(ge=0.0, le=1.0)]
    angle: float  # radians


class Path(msgspec.Struct, frozen=True, rename="camel"):
    """Waypoints, facing-angle targets and an optional max velocity override."""

    waypoints: list[Waypoint]
    angles: list[AnglePoint] = msgspec.field(default_factory=list)
    # ft/s; None or 0 keeps the configured limit
    max_velocity: Annotated[float, msgspec.Meta(ge=0.0)] | None = None

    @property
    def segment_count(self) -> int:
        return max(0, len(self.waypoints) - 1)
