"""
Trajectory generation pipeline.

Pipeline:
  1. interpolate: Path -> dense Bezier samples (position, heading, curvature)
  2. assign_velocity: curvature speed cap + forward/reverse accel smoothing
  3. assign_time: trapezoidal integration of distance over speed
  4. map_angle_points / profile_angles: facing-angle motion profile in time
  5. Trajectory: column-oriented result handed to followers and playback

Every stage is a pure function of its inputs; TrajectoryBuilder only wires
them together with an immutable TrajectoryConfig.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from pathforge.config import TRACE, TrajectoryConfig
from pathforge.motion.geometry import lerp_percent
from pathforge.motion.heading import TimedAnglePoint, map_angle_points, profile_angles
from pathforge.motion.interpolation import interpolate
from pathforge.motion.profile import solve_cruise_velocity
from pathforge.motion.timing import assign_time
from pathforge.motion.velocity import assign_velocity
from pathforge.protocol.types import Path, Vector2
from pathforge.utils.errors import InfeasibleProfileError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrajectoryPoint:
    """One time-stamped trajectory sample."""

    x: float  # in
    y: float  # in
    heading: float  # rad, direction of travel
    curvature: float  # 1/in
    t: float  # Bezier parameter within the segment
    after_waypoint: int
    velocity: Vector2  # in/s
    time: float  # s
    angle: float  # rad, facing angle
    angular_velocity: float  # rad/s

    @property
    def speed(self) -> float:
        return math.hypot(self.velocity.x, self.velocity.y)


@dataclass(eq=False)
class Trajectory:
    """
    Time-parameterized path, one row per sample.

    Attributes:
        x, y: (N,) positions in inches
        heading: (N,) direction of travel in radians
        curvature: (N,) unsigned curvature in 1/in
        t: (N,) Bezier parameter within each sample's segment
        after_waypoint: (N,) segment index of each sample
        velocity: (N, 2) velocity vectors in in/s
        time: (N,) non-decreasing timestamps in seconds, time[0] == 0
        angle: (N,) facing angle in radians (NaN where infeasible)
        angular_velocity: (N,) rad/s (NaN where infeasible)
    """

    x: NDArray[np.float64]
    y: NDArray[np.float64]
    heading: NDArray[np.float64]
    curvature: NDArray[np.float64]
    t: NDArray[np.float64]
    after_waypoint: NDArray[np.intp]
    velocity: NDArray[np.float64]
    time: NDArray[np.float64]
    angle: NDArray[np.float64]
    angular_velocity: NDArray[np.float64]
    angle_points: list[TimedAnglePoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.time)

    def __getitem__(self, idx: int) -> TrajectoryPoint:
        return TrajectoryPoint(
            x=float(self.x[idx]),
            y=float(self.y[idx]),
            heading=float(self.heading[idx]),
            curvature=float(self.curvature[idx]),
            t=float(self.t[idx]),
            after_waypoint=int(self.after_waypoint[idx]),
            velocity=Vector2(float(self.velocity[idx, 0]), float(self.velocity[idx, 1])),
            time=float(self.time[idx]),
            angle=float(self.angle[idx]),
            angular_velocity=float(self.angular_velocity[idx]),
        )

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        for i in range(len(self)):
            yield self[i]

    @property
    def duration(self) -> float:
        return float(self.time[-1]) if len(self) else 0.0

    @property
    def speed(self) -> NDArray[np.float64]:
        return np.hypot(self.velocity[:, 0], self.velocity[:, 1])

    @property
    def infeasible(self) -> NDArray[np.bool_]:
        """Mask of samples whose angular profile could not be solved."""
        return ~(np.isfinite(self.angle) & np.isfinite(self.angular_velocity))

    @property
    def is_feasible(self) -> bool:
        return not bool(np.any(self.infeasible))

    def raise_for_infeasible(self) -> None:
        """
        Raises:
            InfeasibleProfileError: Any sample has a NaN angle
        """
        indices = np.flatnonzero(self.infeasible)
        if len(indices):
            raise InfeasibleProfileError(indices.tolist())

    def sample(self, time: float) -> TrajectoryPoint | None:
        """
        Linearly interpolate the trajectory at elapsed ``time`` (playback).

        Returns:
            Interpolated point, the first point for time <= 0, or None once
            time is past the end of the trajectory
        """
        n = len(self)
        if n == 0 or time > self.time[-1]:
            return None
        if time <= self.time[0]:
            return self[0]

        # time[hi - 1] < time <= time[hi]
        hi = int(np.searchsorted(self.time, time, side="left"))
        lo = hi - 1
        frac = (time - self.time[lo]) / (self.time[hi] - self.time[lo])

        def _lerp(column: NDArray[np.float64]) -> float:
            return float(lerp_percent(frac, column[lo], column[hi]))

        return TrajectoryPoint(
            x=_lerp(self.x),
            y=_lerp(self.y),
            heading=_lerp(self.heading),
            curvature=_lerp(self.curvature),
            t=_lerp(self.t),
            after_waypoint=int(self.after_waypoint[hi]),
            velocity=Vector2(_lerp(self.velocity[:, 0]), _lerp(self.velocity[:, 1])),
            time=float(time),
            angle=_lerp(self.angle),
            angular_velocity=_lerp(self.angular_velocity),
        )


class TrajectoryBuilder:
    """
    Converts a Path into a Trajectory.

    The path's max velocity override (ft/s), if set, replaces the configured
    maximum for this build only.
    """

    def __init__(
        self,
        path: Path,
        config: TrajectoryConfig | None = None,
        strict: bool = False,
    ):
        """
        Initialize trajectory builder.

        Args:
            path: Path to follow
            config: Engine limits; defaults to TrajectoryConfig.from_defaults()
            strict: Raise InfeasibleProfileError instead of returning a
                trajectory with NaN angles
        """
        self.path = path
        base = config if config is not None else TrajectoryConfig.from_defaults()
        self.config = base.with_max_velocity(path.max_velocity)
        self.strict = strict

    def build(self) -> Trajectory:
        """
        Run the pipeline.

        Raises:
            MalformedPathError: Fewer than two waypoints or a bad angle anchor
            InfeasibleProfileError: strict mode and an angle target is unreachable
        """
        cfg = self.config
        samples = interpolate(self.path, cfg.bezier_divisions)
        velocity = assign_velocity(
            samples,
            cfg.max_velocity,
            cfg.curvature_velocity,
            cfg.max_accel,
            cfg.max_decel,
        )
        times = assign_time(samples, velocity)
        timed = map_angle_points(self.path.angles, samples, times)
        angle, angular_velocity = profile_angles(
            times, timed, cfg.angular_accel, cfg.angular_decel
        )
        logger.log(
            TRACE,
            "angle points mapped to times: %s",
            [round(p.time, 4) for p in timed],
        )

        trajectory = Trajectory(
            x=samples.x,
            y=samples.y,
            heading=samples.heading,
            curvature=samples.curvature,
            t=samples.t,
            after_waypoint=samples.after_waypoint,
            velocity=velocity,
            time=times,
            angle=angle,
            angular_velocity=angular_velocity,
            angle_points=timed,
        )

        logger.debug(
            "TrajectoryBuilder: waypoints=%d samples=%d duration=%.3fs",
            len(self.path.waypoints),
            len(trajectory),
            trajectory.duration,
        )

        if not trajectory.is_feasible:
            self._report_infeasible(timed)
            if self.strict:
                trajectory.raise_for_infeasible()
        return trajectory

    def _report_infeasible(self, timed: list[TimedAnglePoint]) -> None:
        """Log each pair of angle targets the angular limits cannot connect."""
        cfg = self.config
        for before, after in zip(timed[:-1], timed[1:]):
            distance = after.angle - before.angle
            duration = after.time - before.time
            v = solve_cruise_velocity(
                cfg.angular_accel, cfg.angular_decel, distance, duration
            )
            if math.isnan(v):
                logger.warning(
                    "Cannot rotate %.3f rad in %.3fs between angle points "
                    "(segment %d t=%.2f) and (segment %d t=%.2f)",
                    distance,
                    duration,
                    before.after_waypoint,
                    before.t,
                    after.after_waypoint,
                    after.t,
                )


def compute_trajectory(
    path: Path, config: TrajectoryConfig | None = None, strict: bool = False
) -> Trajectory:
    """
    Convenience function: build the trajectory for ``path``.

    Args:
        path: Path to follow
        config: Engine limits (module defaults if None)
        strict: Raise instead of returning NaN angles for unreachable targets

    Returns:
        Trajectory starting at time 0
    """
    return TrajectoryBuilder(path, config=config, strict=strict).build()
