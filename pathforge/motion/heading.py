"""
Facing-angle (heading) motion profiling.

The robot's facing angle is independent of its direction of travel. Angle
targets are anchored to path locations (segment index + Bezier parameter);
they are first mapped into the trajectory's time domain, then a trapezoidal
motion profile is run between each consecutive pair of targets.

Targets that map to the same time collapse to the later one, so the later
target's angle wins and no zero-length profile is evaluated.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[import-untyped]
from numpy.typing import NDArray

from pathforge.motion.geometry import lerp
from pathforge.motion.interpolation import InterpolatedPath
from pathforge.motion.profile import _motion_profile_jit
from pathforge.protocol.types import AnglePoint
from pathforge.utils.errors import MalformedPathError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TimedAnglePoint:
    """An angle target with its position in the trajectory's time domain."""

    after_waypoint: int
    t: float
    angle: float  # radians
    time: float  # seconds


def sort_angle_points(angle_points: Sequence[AnglePoint]) -> list[AnglePoint]:
    """Order angle points along the path, by (after_waypoint, t)."""
    return sorted(angle_points, key=lambda p: (p.after_waypoint, p.t))


def map_angle_point(
    angle_point: AnglePoint, samples: InterpolatedPath, times: NDArray[np.float64]
) -> TimedAnglePoint:
    """
    Locate an angle point in time.

    Time is interpolated linearly on the Bezier parameter between the two
    samples of the segment that bracket ``t``. A ``t`` outside the sampled
    range takes the boundary sample's time.

    Raises:
        MalformedPathError: The referenced segment has no samples
    """
    window = samples.segment_slice(angle_point.after_waypoint)
    seg_t = samples.t[window]
    seg_time = times[window]
    if len(seg_t) == 0:
        raise MalformedPathError(
            f"Angle point references segment {angle_point.after_waypoint}, "
            "which has no samples"
        )

    t = angle_point.t
    if t <= seg_t[0]:
        time = float(seg_time[0])
    elif t >= seg_t[-1]:
        time = float(seg_time[-1])
    else:
        hi = int(np.searchsorted(seg_t, t, side="left"))
        lo = hi - 1
        time = float(lerp(seg_t[lo], seg_t[hi], seg_time[lo], seg_time[hi])(t))

    return TimedAnglePoint(
        after_waypoint=angle_point.after_waypoint,
        t=t,
        angle=angle_point.angle,
        time=time,
    )


def map_angle_points(
    angle_points: Sequence[AnglePoint],
    samples: InterpolatedPath,
    times: NDArray[np.float64],
) -> list[TimedAnglePoint]:
    """Sort, time-map and de-duplicate angle points (later point wins on equal time)."""
    timed: list[TimedAnglePoint] = []
    for angle_point in sort_angle_points(angle_points):
        mapped = map_angle_point(angle_point, samples, times)
        if timed and timed[-1].time == mapped.time:
            logger.debug(
                "Angle points at segment %d t=%.3f and segment %d t=%.3f share "
                "time %.3fs, keeping the later one",
                timed[-1].after_waypoint,
                timed[-1].t,
                mapped.after_waypoint,
                mapped.t,
                mapped.time,
            )
            timed[-1] = mapped
        else:
            timed.append(mapped)
    return timed


@njit(cache=True)
def _profile_angles_jit(
    times: np.ndarray,
    anchor_times: np.ndarray,
    anchor_angles: np.ndarray,
    accel: float,
    decel: float,
    out_angle: np.ndarray,
    out_velocity: np.ndarray,
) -> None:
    """Fill angle/angular velocity for each sample time from sorted anchors."""
    first_time = anchor_times[0]
    last_time = anchor_times[anchor_times.shape[0] - 1]
    for i in range(times.shape[0]):
        time = times[i]
        if time <= first_time:
            out_angle[i] = anchor_angles[0]
            out_velocity[i] = 0.0
            continue
        if time >= last_time:
            out_angle[i] = anchor_angles[anchor_angles.shape[0] - 1]
            out_velocity[i] = 0.0
            continue

        after = np.searchsorted(anchor_times, time)
        before = after - 1
        position, velocity = _motion_profile_jit(
            time - anchor_times[before],
            accel,
            decel,
            anchor_angles[after] - anchor_angles[before],
            anchor_times[after] - anchor_times[before],
        )
        out_angle[i] = anchor_angles[before] + position
        out_velocity[i] = velocity


def profile_angles(
    times: NDArray[np.float64],
    timed_points: Sequence[TimedAnglePoint],
    angular_accel: float,
    angular_decel: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Angle and angular velocity at each sample time.

    Args:
        times: (N,) sample times
        timed_points: Time-mapped targets, strictly increasing in time
        angular_accel: rad/s²
        angular_decel: rad/s²

    Returns:
        (angle, angular_velocity) arrays. Samples between targets that
        cannot be reached under the limits are NaN.
    """
    n = len(times)
    angle = np.zeros(n, dtype=np.float64)
    angular_velocity = np.zeros(n, dtype=np.float64)
    if n == 0:
        return angle, angular_velocity
    if not timed_points:
        logger.warning("Path has no angle points; facing angle held at 0 rad")
        return angle, angular_velocity

    anchor_times = np.array([p.time for p in timed_points], dtype=np.float64)
    anchor_angles = np.array([p.angle for p in timed_points], dtype=np.float64)
    _profile_angles_jit(
        np.ascontiguousarray(times, dtype=np.float64),
        anchor_times,
        anchor_angles,
        float(angular_accel),
        float(angular_decel),
        angle,
        angular_velocity,
    )
    return angle, angular_velocity


def assign_angles(
    samples: InterpolatedPath,
    times: NDArray[np.float64],
    angle_points: Sequence[AnglePoint],
    angular_accel: float,
    angular_decel: float,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Map angle points into time and profile the facing angle between them."""
    timed = map_angle_points(angle_points, samples, times)
    return profile_angles(times, timed, angular_accel, angular_decel)
