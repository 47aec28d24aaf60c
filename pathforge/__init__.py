"""
Pathforge Python Package

Trajectory generation for a mobile robot following a piecewise cubic Bezier
path: dense path sampling, curvature- and acceleration-limited speeds, time
stamps, and a trapezoidal facing-angle profile.

Key components:
- compute_trajectory: Build a Trajectory from a Path in one call
- TrajectoryBuilder: The same pipeline with access to the effective config
- Trajectory / TrajectoryPoint: Column-oriented result and per-sample view
- Path / Waypoint / AnglePoint: Input document structs (msgspec)
- TrajectoryConfig: Immutable engine limits
"""

from ._version import __version__
from .config import TrajectoryConfig
from .motion.trajectory import (
    Trajectory,
    TrajectoryBuilder,
    TrajectoryPoint,
    compute_trajectory,
)
from .protocol.types import AnglePoint, Path, Point, Waypoint
from .utils.errors import InfeasibleProfileError, MalformedPathError, PathforgeError

__all__ = [
    "__version__",
    "compute_trajectory",
    "TrajectoryBuilder",
    "Trajectory",
    "TrajectoryPoint",
    "TrajectoryConfig",
    "Path",
    "Point",
    "Waypoint",
    "AnglePoint",
    "PathforgeError",
    "MalformedPathError",
    "InfeasibleProfileError",
]
