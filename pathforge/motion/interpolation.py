"""
Curve interpolation: turns a Path into a dense, ordered sample of points.

Each waypoint-to-waypoint segment is sampled at ``divisions + 1`` uniformly
spaced values of its Bezier parameter ``t`` (both ends included), so adjacent
segments share a position at their common waypoint.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pathforge.motion.geometry import (
    after_handle,
    before_handle,
    bezier_curvature,
    bezier_heading,
    cubic_bezier,
)
from pathforge.protocol.types import Path, Waypoint
from pathforge.utils.errors import MalformedPathError

logger = logging.getLogger(__name__)


@dataclass
class InterpolatedPath:
    """
    Column-oriented path samples.

    Attributes:
        x, y: (N,) positions in inches
        heading: (N,) direction of travel in radians
        curvature: (N,) unsigned curvature in 1/in (NaN/inf where undefined)
        t: (N,) Bezier parameter within the sample's segment
        after_waypoint: (N,) index of the segment each sample belongs to
    """

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    heading: NDArray[np.float64]
    curvature: NDArray[np.float64]
    t: NDArray[np.float64]
    after_waypoint: NDArray[np.intp]

    def __len__(self) -> int:
        return len(self.x)

    @classmethod
    def empty(cls) -> InterpolatedPath:
        f = np.empty(0, dtype=np.float64)
        return cls(
            x=f,
            y=f.copy(),
            heading=f.copy(),
            curvature=f.copy(),
            t=f.copy(),
            after_waypoint=np.empty(0, dtype=np.intp),
        )

    def segment_slice(self, segment: int) -> slice:
        """Index range of the samples belonging to ``segment`` (may be empty)."""
        lo = int(np.searchsorted(self.after_waypoint, segment, side="left"))
        hi = int(np.searchsorted(self.after_waypoint, segment, side="right"))
        return slice(lo, hi)


def validate_path(path: Path) -> None:
    """
    Reject paths that cannot produce a meaningful trajectory.

    Raises:
        MalformedPathError: Fewer than two waypoints, or an angle point
            anchored to a segment that does not exist
    """
    n_waypoints = len(path.waypoints)
    if n_waypoints < 2:
        raise MalformedPathError(
            f"Path needs at least 2 waypoints, got {n_waypoints}"
        )
    n_segments = n_waypoints - 1
    for i, angle_point in enumerate(path.angles):
        if not 0 <= angle_point.after_waypoint < n_segments:
            raise MalformedPathError(
                f"Angle point {i} references segment {angle_point.after_waypoint}, "
                f"path has segments 0..{n_segments - 1}"
            )


def interpolate_segments(
    waypoints: Sequence[Waypoint], divisions: int
) -> InterpolatedPath:
    """
    Sample every segment between consecutive waypoints.

    Fewer than two waypoints means zero segments and an empty result.

    Args:
        waypoints: Ordered waypoints
        divisions: Subdivisions per segment (divisions + 1 samples each)

    Returns:
        InterpolatedPath in path order
    """
    n_segments = len(waypoints) - 1
    if n_segments < 1:
        return InterpolatedPath.empty()

    t = np.linspace(0.0, 1.0, divisions + 1)
    xs, ys, headings, curvatures = [], [], [], []

    for start, end in zip(waypoints[:-1], waypoints[1:]):
        control1 = after_handle(start)
        control2 = before_handle(end)
        x, y = cubic_bezier(t, start, end, control1, control2)
        xs.append(x)
        ys.append(y)
        headings.append(bezier_heading(t, start, end, control1, control2))
        curvatures.append(bezier_curvature(t, start, end, control1, control2))

    samples = InterpolatedPath(
        x=np.concatenate(xs),
        y=np.concatenate(ys),
        heading=np.concatenate(headings),
        curvature=np.concatenate(curvatures),
        t=np.tile(t, n_segments),
        after_waypoint=np.repeat(np.arange(n_segments, dtype=np.intp), len(t)),
    )

    n_degenerate = int(np.count_nonzero(~np.isfinite(samples.curvature)))
    if n_degenerate:
        logger.debug(
            "interpolate: %d/%d samples with undefined curvature",
            n_degenerate,
            len(samples),
        )
    return samples


def interpolate(path: Path, divisions: int) -> InterpolatedPath:
    """Validate ``path`` and sample it at ``divisions`` subdivisions per segment."""
    validate_path(path)
    return interpolate_segments(path.waypoints, divisions)
