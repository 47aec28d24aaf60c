"""
Velocity profiling along an interpolated path.

Speed is first capped by curvature (tighter turns are slower), then smoothed
in two sequential passes:

  1. FORWARDS with max acceleration: the robot cannot yet be going faster
     than it could have accelerated to from the previous sample.
  2. REVERSE with max deceleration: the robot must already be slow enough to
     brake in time for every limit ahead of it.

Both passes use v² = v0² + 2·a·d and start from rest, so the first and last
samples of a trajectory always have zero speed.
"""

from __future__ import annotations

import logging
import math
from enum import Enum

import numpy as np
from numba import njit  # type: ignore[import-untyped]
from numpy.typing import NDArray

from pathforge.motion.geometry import clamp
from pathforge.motion.interpolation import InterpolatedPath

logger = logging.getLogger(__name__)


class SmoothDirection(Enum):
    """Walk order for a smoothing pass."""

    FORWARDS = "forwards"
    REVERSE = "reverse"


@njit(cache=True)
def _smooth_pass_jit(
    x: np.ndarray, y: np.ndarray, speeds: np.ndarray, accel: float, out: np.ndarray
) -> None:
    """Cap each speed to what is reachable from the previous sample under accel."""
    n = speeds.shape[0]
    last_speed = 0.0
    for i in range(n):
        if i == 0:
            reachable = 0.0
        else:
            dist = math.hypot(x[i] - x[i - 1], y[i] - y[i - 1])
            reachable = math.sqrt(last_speed * last_speed + 2.0 * accel * dist)
        speed = speeds[i]
        if reachable < speed:
            speed = reachable
        out[i] = speed
        last_speed = speed


def curvature_speeds(
    curvature: NDArray[np.float64], max_velocity: float, curvature_velocity: float
) -> NDArray[np.float64]:
    """
    Curvature-limited speed for each sample.

    Zero curvature (straight line) divides to inf and is clamped to
    max_velocity. Undefined curvature (a cusp where the path momentarily
    stops) gets speed 0.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        raw = curvature_velocity / curvature
    speeds = clamp(raw, -max_velocity, max_velocity)
    return np.where(np.isfinite(curvature), speeds, 0.0)


def smooth_speeds(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    speeds: NDArray[np.float64],
    accel: float,
    direction: SmoothDirection,
) -> NDArray[np.float64]:
    """
    One kinematic smoothing pass.

    REVERSE runs the same pass over reversed copies of the inputs and
    reverses the result back into path order.

    Args:
        x, y: Sample positions (inches)
        speeds: Speed limits to respect (in/s)
        accel: Acceleration (FORWARDS) or deceleration (REVERSE) limit, in/s²
        direction: Walk order

    Returns:
        New speed array in path order
    """
    if direction is SmoothDirection.REVERSE:
        x, y, speeds = x[::-1], y[::-1], speeds[::-1]
    x = np.ascontiguousarray(x, dtype=np.float64)
    y = np.ascontiguousarray(y, dtype=np.float64)
    speeds = np.ascontiguousarray(speeds, dtype=np.float64)

    out = np.empty_like(speeds)
    _smooth_pass_jit(x, y, speeds, float(accel), out)

    if direction is SmoothDirection.REVERSE:
        return out[::-1].copy()
    return out


def assign_speeds(
    samples: InterpolatedPath,
    max_velocity: float,
    curvature_velocity: float,
    max_accel: float,
    max_decel: float,
) -> NDArray[np.float64]:
    """Curvature cap followed by the forward then reverse smoothing passes."""
    if len(samples) == 0:
        return np.empty(0, dtype=np.float64)

    speeds = curvature_speeds(samples.curvature, max_velocity, curvature_velocity)
    speeds = smooth_speeds(
        samples.x, samples.y, speeds, max_accel, SmoothDirection.FORWARDS
    )
    speeds = smooth_speeds(
        samples.x, samples.y, speeds, max_decel, SmoothDirection.REVERSE
    )

    logger.debug(
        "assign_speeds: samples=%d peak=%.2f in/s mean=%.2f in/s",
        len(speeds),
        float(np.max(speeds)),
        float(np.mean(speeds)),
    )
    return speeds


def assign_velocity(
    samples: InterpolatedPath,
    max_velocity: float,
    curvature_velocity: float,
    max_accel: float,
    max_decel: float,
) -> NDArray[np.float64]:
    """
    Velocity vector for every sample.

    Args:
        samples: Interpolated path
        max_velocity: Speed cap (in/s)
        curvature_velocity: Speed per inch of turning radius
        max_accel: Forward-pass limit (in/s²)
        max_decel: Reverse-pass limit (in/s²)

    Returns:
        (N, 2) array of (vx, vy) in in/s, directed along each sample's heading
    """
    speeds = assign_speeds(
        samples, max_velocity, curvature_velocity, max_accel, max_decel
    )
    return np.column_stack(
        [speeds * np.cos(samples.heading), speeds * np.sin(samples.heading)]
    )
