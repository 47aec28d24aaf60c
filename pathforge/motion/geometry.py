"""
Geometry primitives for cubic Bezier path segments.

A segment runs from ``start`` to ``end`` with control points ``control1``
(after-handle of the start waypoint) and ``control2`` (before-handle of the
end waypoint). Evaluation functions are vectorized: ``t`` may be a scalar or
a numpy array, and results have the same shape.

All functions are stateless.
"""

import math
from collections.abc import Callable
from typing import Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pathforge.protocol.types import Point, Waypoint

FloatOrArray = Union[float, NDArray[np.float64]]


def cubic_bezier_component(
    t: ArrayLike, start: float, end: float, control1: float, control2: float
) -> FloatOrArray:
    """Cubic Bernstein-basis evaluation of one coordinate."""
    t = np.asarray(t, dtype=np.float64)
    u = 1.0 - t
    return (
        u**3 * start
        + 3.0 * u**2 * t * control1
        + 3.0 * u * t**2 * control2
        + t**3 * end
    )


def bezier_first_derivative_component(
    t: ArrayLike, start: float, end: float, control1: float, control2: float
) -> FloatOrArray:
    """d/dt of the cubic Bernstein basis for one coordinate."""
    t = np.asarray(t, dtype=np.float64)
    u = 1.0 - t
    return 3.0 * (
        u**2 * (control1 - start)
        + 2.0 * t * u * (control2 - control1)
        + t**2 * (end - control2)
    )


def bezier_second_derivative_component(
    t: ArrayLike, start: float, end: float, control1: float, control2: float
) -> FloatOrArray:
    """d²/dt² of the cubic Bernstein basis for one coordinate."""
    t = np.asarray(t, dtype=np.float64)
    return 6.0 * (
        (1.0 - t) * (control2 - 2.0 * control1 + start)
        + t * (end - 2.0 * control2 + control1)
    )


def cubic_bezier(
    t: ArrayLike, start: Point, end: Point, control1: Point, control2: Point
) -> tuple[FloatOrArray, FloatOrArray]:
    """Position (x, y) on the segment. t=0 gives start and t=1 gives end exactly."""
    return (
        cubic_bezier_component(t, start.x, end.x, control1.x, control2.x),
        cubic_bezier_component(t, start.y, end.y, control1.y, control2.y),
    )


def _first_derivative(
    t: ArrayLike, start: Point, end: Point, control1: Point, control2: Point
) -> tuple[FloatOrArray, FloatOrArray]:
    return (
        bezier_first_derivative_component(t, start.x, end.x, control1.x, control2.x),
        bezier_first_derivative_component(t, start.y, end.y, control1.y, control2.y),
    )


def bezier_heading(
    t: ArrayLike, start: Point, end: Point, control1: Point, control2: Point
) -> FloatOrArray:
    """Direction of travel in radians, atan2(dY, dX)."""
    d_x, d_y = _first_derivative(t, start, end, control1, control2)
    return np.arctan2(d_y, d_x)


def bezier_curvature(
    t: ArrayLike, start: Point, end: Point, control1: Point, control2: Point
) -> FloatOrArray:
    """
    Unsigned curvature (1/in) of the segment.

    Undefined where the first derivative vanishes (e.g. a zero-length handle
    at an endpoint); those samples come back as NaN or inf and are left for
    the caller to handle.
    """
    d_x, d_y = _first_derivative(t, start, end, control1, control2)
    dd_x = bezier_second_derivative_component(
        t, start.x, end.x, control1.x, control2.x
    )
    dd_y = bezier_second_derivative_component(
        t, start.y, end.y, control1.y, control2.y
    )
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.abs(d_x * dd_y - d_y * dd_x) / (d_x**2 + d_y**2) ** 1.5


def after_handle(waypoint: Waypoint) -> Point:
    """Control point leaving the waypoint, along its heading."""
    theta = math.radians(waypoint.heading)
    return Point(
        x=waypoint.x + waypoint.handle_after_length * math.cos(theta),
        y=waypoint.y + waypoint.handle_after_length * math.sin(theta),
    )


def before_handle(waypoint: Waypoint) -> Point:
    """Control point entering the waypoint, opposite its heading."""
    theta = math.radians(waypoint.heading)
    return Point(
        x=waypoint.x - waypoint.handle_before_length * math.cos(theta),
        y=waypoint.y - waypoint.handle_before_length * math.sin(theta),
    )


def distance_between(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def lerp(
    min_in: float, max_in: float, min_out: float, max_out: float
) -> Callable[[float], float]:
    """Return a function mapping [min_in, max_in] linearly onto [min_out, max_out]."""
    in_range = max_in - min_in
    out_range = max_out - min_out

    def _map(value: float) -> float:
        return (value - min_in) / in_range * out_range + min_out

    return _map


def lerp_percent(percent: ArrayLike, min_out: ArrayLike, max_out: ArrayLike):
    """Interpolate between min_out and max_out by a fraction in [0, 1]."""
    return percent * np.subtract(max_out, min_out) + min_out


def clamp(value: ArrayLike, lo: float, hi: float) -> FloatOrArray:
    """Clip to [lo, hi]; NaN passes through unchanged."""
    return np.clip(value, lo, hi)
