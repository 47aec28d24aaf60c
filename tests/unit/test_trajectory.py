"""Unit tests for the end-to-end trajectory pipeline."""

import logging

import numpy as np
import pytest

from pathforge import (
    AnglePoint,
    InfeasibleProfileError,
    MalformedPathError,
    Path,
    Trajectory,
    TrajectoryBuilder,
    TrajectoryPoint,
    Waypoint,
    compute_trajectory,
)

COLUMNS = (
    "x",
    "y",
    "heading",
    "curvature",
    "t",
    "after_waypoint",
    "velocity",
    "time",
    "angle",
    "angular_velocity",
)


def _spinning_path(straight_path: Path, angle: float) -> Path:
    return Path(
        waypoints=straight_path.waypoints,
        angles=[
            AnglePoint(after_waypoint=0, t=0.0, angle=0.0),
            AnglePoint(after_waypoint=0, t=1.0, angle=angle),
        ],
    )


class TestStraightLine:
    """Two waypoints 100 in apart along +x, no angle targets."""

    def test_starts_and_ends_at_rest(self, straight_path, config):
        """Trajectory starts at the origin at rest and ends at rest on target."""
        traj = compute_trajectory(straight_path, config)

        assert len(traj) == config.bezier_divisions + 1
        first, last = traj[0], traj[len(traj) - 1]
        assert (first.x, first.y, first.time) == (0.0, 0.0, 0.0)
        assert last.x == pytest.approx(100.0)
        assert first.speed == 0.0
        assert last.speed == 0.0

    def test_speed_and_time_bounds(self, straight_path, config):
        """Speed stays under the cap and time never decreases."""
        traj = compute_trajectory(straight_path, config)

        assert np.all(traj.speed <= config.max_velocity + 1e-9)
        assert np.all(np.diff(traj.time) >= 0.0)
        assert traj.duration > 0.0
        assert np.allclose(traj.heading, 0.0)

    def test_without_angle_points_faces_zero(self, straight_path, config):
        """No angle targets means facing angle 0 throughout."""
        traj = compute_trajectory(straight_path, config)
        assert np.array_equal(traj.angle, np.zeros(len(traj)))
        assert np.array_equal(traj.angular_velocity, np.zeros(len(traj)))
        assert traj.is_feasible

    def test_path_max_velocity_override(self, config):
        """A path's maxVelocity (ft/s) replaces the configured cap."""
        path = Path(
            waypoints=[
                Waypoint(x=0.0, y=0.0, handle_after_length=50.0),
                Waypoint(x=600.0, y=0.0, handle_before_length=50.0),
            ],
            max_velocity=1.0,
        )
        builder = TrajectoryBuilder(path, config)
        assert builder.config.max_velocity == pytest.approx(12.0)

        traj = builder.build()
        assert traj.speed.max() == pytest.approx(12.0)


class TestHeldAngleStraightLine:
    """100 in along +x, 20 in handles, one facing-angle target of 0 rad."""

    @pytest.fixture
    def path(self) -> Path:
        return Path(
            waypoints=[
                Waypoint(
                    x=0.0,
                    y=0.0,
                    heading=0.0,
                    handle_before_length=20.0,
                    handle_after_length=20.0,
                ),
                Waypoint(
                    x=100.0,
                    y=0.0,
                    heading=0.0,
                    handle_before_length=20.0,
                    handle_after_length=20.0,
                ),
            ],
            angles=[AnglePoint(after_waypoint=0, t=0.0, angle=0.0)],
        )

    def test_moves_forward_to_end_waypoint(self, path, config):
        """x never decreases and the last sample sits on the end waypoint."""
        traj = compute_trajectory(path, config)

        assert np.all(np.diff(traj.x) >= 0.0)
        assert traj.x[-1] == pytest.approx(100.0)
        assert traj.y[-1] == pytest.approx(0.0)
        assert np.allclose(traj.y, 0.0)

    def test_single_target_holds_angle(self, path, config):
        """One angle target holds that angle with zero angular velocity."""
        traj = compute_trajectory(path, config)

        assert len(traj.angle_points) == 1
        assert traj.angle_points[0].time == 0.0
        assert np.array_equal(traj.angle, np.zeros(len(traj)))
        assert np.array_equal(traj.angular_velocity, np.zeros(len(traj)))
        assert traj.is_feasible


class TestPipeline:
    def test_deterministic(self, s_curve_path, config):
        """Same path and config give identical trajectories."""
        a = compute_trajectory(s_curve_path, config)
        b = compute_trajectory(s_curve_path, config)
        for name in COLUMNS:
            assert np.array_equal(getattr(a, name), getattr(b, name), equal_nan=True)

    def test_angle_targets_reached(self, s_curve_path, config):
        """Facing angle starts and ends on its targets, at rest."""
        traj = compute_trajectory(s_curve_path, config)

        assert traj.is_feasible
        assert traj.angle[0] == 0.0
        assert traj.angle[-1] == 1.0
        assert traj.angular_velocity[0] == 0.0
        assert traj.angular_velocity[-1] == 0.0
        assert [p.time for p in traj.angle_points] == [0.0, traj.duration]

    def test_segments_and_shared_waypoint(self, s_curve_path, config):
        """The shared waypoint appears twice at one place and time."""
        traj = compute_trajectory(s_curve_path, config)
        n = config.bezier_divisions + 1

        assert len(traj) == 2 * n
        assert traj.after_waypoint[n - 1] == 0
        assert traj.after_waypoint[n] == 1
        # Both copies of the middle waypoint sit at the same place and time
        assert traj.x[n - 1] == pytest.approx(traj.x[n])
        assert traj.time[n - 1] == traj.time[n]

    def test_single_waypoint_rejected(self, config):
        """One waypoint raises MalformedPathError."""
        with pytest.raises(MalformedPathError):
            compute_trajectory(Path(waypoints=[Waypoint(x=0.0, y=0.0)]), config)


class TestInfeasibleAngles:
    def test_nan_samples_flagged(self, straight_path, config, caplog):
        """Unreachable angle targets are flagged and logged."""
        with caplog.at_level(logging.WARNING, logger="pathforge.motion.trajectory"):
            traj = compute_trajectory(_spinning_path(straight_path, 100.0), config)

        assert not traj.is_feasible
        assert traj.infeasible[1:-1].all()
        assert not traj.infeasible[0]
        assert "Cannot rotate" in caplog.text

    def test_strict_raises(self, straight_path, config):
        """Strict mode raises with the infeasible sample indices."""
        with pytest.raises(InfeasibleProfileError) as exc_info:
            compute_trajectory(_spinning_path(straight_path, 100.0), config, strict=True)
        assert exc_info.value.indices[0] == 1

    def test_raise_for_infeasible_noop_when_feasible(self, straight_path, config):
        """raise_for_infeasible does nothing on a feasible trajectory."""
        traj = compute_trajectory(_spinning_path(straight_path, 0.5), config)
        assert traj.is_feasible
        traj.raise_for_infeasible()


class TestSampling:
    """Playback-time lookup."""

    def test_before_start_and_after_end(self, straight_path, config):
        """Before the start gives the first sample; past the end gives None."""
        traj = compute_trajectory(straight_path, config)
        assert traj.sample(-1.0) == traj[0]
        assert traj.sample(traj.duration + 0.1) is None

    def test_interpolates_between_samples(self, straight_path, config):
        """Mid-step times interpolate between the bracketing samples."""
        traj = compute_trajectory(straight_path, config)
        mid = 0.5 * (traj.time[10] + traj.time[11])
        point = traj.sample(mid)

        assert isinstance(point, TrajectoryPoint)
        assert point.time == mid
        assert traj.x[10] <= point.x <= traj.x[11]
        assert point.after_waypoint == 0

    def test_end_time_returns_last_position(self, straight_path, config):
        """Sampling at the duration returns the final position."""
        traj = compute_trajectory(straight_path, config)
        point = traj.sample(traj.duration)
        assert point is not None
        assert point.x == pytest.approx(100.0)

    def test_iteration_yields_points(self, straight_path, config):
        """Iteration yields one TrajectoryPoint per sample."""
        traj = compute_trajectory(straight_path, config)
        points = list(traj)
        assert len(points) == len(traj)
        assert all(isinstance(p, TrajectoryPoint) for p in points)
        assert isinstance(traj, Trajectory)
