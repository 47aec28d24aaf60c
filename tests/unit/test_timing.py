"""Unit tests for pathforge.motion.timing."""

import numpy as np

from pathforge.motion.interpolation import InterpolatedPath, interpolate
from pathforge.motion.timing import assign_time, step_durations
from pathforge.motion.velocity import assign_velocity


class TestStepDurations:
    def test_distance_over_average_speed(self):
        """Step time is distance over mean endpoint speed."""
        x = np.array([0.0, 1.0, 2.0])
        y = np.zeros(3)
        durations = step_durations(x, y, np.array([0.0, 2.0, 2.0]))
        assert np.allclose(durations, [1.0, 0.5])

    def test_stationary_step_takes_zero_time(self):
        """Zero mean speed gives a zero-duration step."""
        x = np.array([0.0, 1.0, 2.0])
        y = np.zeros(3)
        durations = step_durations(x, y, np.array([0.0, 0.0, 2.0]))
        assert np.allclose(durations, [0.0, 1.0])


class TestAssignTime:
    def test_starts_at_zero_and_non_decreasing(self, s_curve_path, config):
        """Timestamps start at 0 and never decrease."""
        samples = interpolate(s_curve_path, config.bezier_divisions)
        velocity = assign_velocity(
            samples,
            config.max_velocity,
            config.curvature_velocity,
            config.max_accel,
            config.max_decel,
        )
        times = assign_time(samples, velocity)
        assert times.shape == (len(samples),)
        assert times[0] == 0.0
        assert np.all(np.diff(times) >= 0.0)
        assert np.all(np.isfinite(times))
        assert times[-1] > 0.0

    def test_single_sample(self):
        """A single sample sits at time 0."""
        samples = InterpolatedPath(
            x=np.zeros(1),
            y=np.zeros(1),
            heading=np.zeros(1),
            curvature=np.zeros(1),
            t=np.zeros(1),
            after_waypoint=np.zeros(1, dtype=np.intp),
        )
        times = assign_time(samples, np.zeros((1, 2)))
        assert times.tolist() == [0.0]
