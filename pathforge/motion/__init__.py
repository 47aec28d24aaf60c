"""
Motion pipeline for trajectory generation.

Stages, each a pure function over numpy arrays:
- interpolation: Bezier path sampling (position, heading, curvature)
- velocity: curvature speed cap and forward/reverse acceleration smoothing
- timing: per-sample timestamps
- heading: facing-angle targets mapped to time and profiled
- profile: trapezoidal motion profile (closed form, numba kernels)

TrajectoryBuilder wires the stages together and produces a Trajectory.
"""

from pathforge.motion.interpolation import InterpolatedPath, interpolate
from pathforge.motion.profile import ProfileResult, motion_profile, solve_cruise_velocity
from pathforge.motion.trajectory import (
    Trajectory,
    TrajectoryBuilder,
    TrajectoryPoint,
    compute_trajectory,
)

__all__ = [
    # Trajectory pipeline
    "Trajectory",
    "TrajectoryBuilder",
    "TrajectoryPoint",
    "compute_trajectory",
    # Stages
    "InterpolatedPath",
    "interpolate",
    # Motion profile
    "ProfileResult",
    "motion_profile",
    "solve_cruise_velocity",
]
