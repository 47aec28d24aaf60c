"""
Trapezoidal motion profile covering a fixed distance in a fixed duration.

Given asymmetric accel/decel limits, the cruise velocity v is the root of

    accel_time = v / accel
    decel_time = v / decel
    cruise_time = duration - accel_time - decel_time
    0.5·v·accel_time + v·cruise_time + 0.5·v·decel_time = distance

which reduces to a·v² + b·v + c = 0 with
a = -(1/accel) - 1/decel, b = 2·duration, c = -2·distance.

When the cruise phase has zero length the profile is triangular. If the
distance cannot be covered in the duration under the given limits the
discriminant is negative and the profile is (NaN, NaN).
"""

import math
from typing import NamedTuple

import numpy as np
from numba import njit  # type: ignore[import-untyped]


class ProfileResult(NamedTuple):
    """Profile state at a query time, relative to the profile start."""

    position: float
    velocity: float


@njit(cache=True)
def _solve_cruise_velocity_jit(
    accel: float, decel: float, distance: float, duration: float
) -> float:
    """Smaller positive root of the cruise quadratic; NaN if infeasible."""
    a = -(1.0 / accel) - 1.0 / decel
    b = 2.0 * duration
    c = -2.0 * distance
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return np.nan
    return (-b + math.sqrt(discriminant)) / (2.0 * a)


@njit(cache=True)
def _motion_profile_jit(
    time: float, accel: float, decel: float, distance: float, duration: float
) -> tuple[float, float]:
    # Negative moves mirror positive ones
    sign = 1.0
    if distance < 0.0:
        sign = -1.0
        distance = -distance

    cruise_velocity = _solve_cruise_velocity_jit(accel, decel, distance, duration)
    if math.isnan(cruise_velocity):
        return np.nan, np.nan

    accel_time = cruise_velocity / accel
    decel_time = cruise_velocity / decel
    cruise_time = duration - accel_time - decel_time

    begin_cruise = accel_time
    begin_decel = accel_time + cruise_time

    if time < begin_cruise:
        return sign * 0.5 * accel * time * time, sign * accel * time

    accel_distance = cruise_velocity * cruise_velocity / (2.0 * accel)

    if time < begin_decel:
        return (
            sign * (accel_distance + cruise_velocity * (time - begin_cruise)),
            sign * cruise_velocity,
        )

    cruise_distance = cruise_time * cruise_velocity
    decel_distance = cruise_velocity * cruise_velocity / (2.0 * decel)

    time_along_decel = time - begin_decel
    # Base of the deceleration triangle still ahead of us
    remaining = decel_time - time_along_decel

    position = (
        accel_distance
        + cruise_distance
        + (decel_distance - remaining * remaining * decel / 2.0)
    )
    return sign * position, sign * (cruise_velocity - decel * time_along_decel)


def _check_limits(accel: float, decel: float) -> None:
    if not (accel > 0.0 and decel > 0.0):
        raise ValueError(
            f"accel and decel must be positive, got accel={accel} decel={decel}"
        )


def solve_cruise_velocity(
    accel: float, decel: float, distance: float, duration: float
) -> float:
    """
    Peak velocity of the profile (signed like distance).

    Returns:
        Cruise velocity, or NaN if the move is infeasible
    """
    _check_limits(accel, decel)
    v = _solve_cruise_velocity_jit(
        float(accel), float(decel), abs(float(distance)), float(duration)
    )
    return -v if distance < 0 else v


def motion_profile(
    time: float, accel: float, decel: float, distance: float, duration: float
) -> ProfileResult:
    """
    Evaluate the profile at ``time``.

    Args:
        time: Seconds since the start of the move, in [0, duration]
        accel: Acceleration limit (> 0)
        decel: Deceleration limit (> 0)
        distance: Signed distance to cover
        duration: Time available for the move

    Returns:
        ProfileResult(position, velocity). Position is 0 and velocity 0 at
        time 0; position is distance and velocity 0 at time == duration.
        Both are NaN when the move is infeasible.
    """
    _check_limits(accel, decel)
    position, velocity = _motion_profile_jit(
        float(time), float(accel), float(decel), float(distance), float(duration)
    )
    return ProfileResult(position=position, velocity=velocity)
