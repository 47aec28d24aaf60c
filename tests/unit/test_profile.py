"""Unit tests for the trapezoidal motion profile."""

import math

import numpy as np
import pytest

from pathforge.motion.profile import motion_profile, solve_cruise_velocity


class TestSolveCruiseVelocity:
    def test_symmetric_limits(self):
        """Cruise velocity is the smaller root of the quadratic."""
        v = solve_cruise_velocity(1.0, 1.0, 4.0, 6.0)
        assert v == pytest.approx((12.0 - math.sqrt(80.0)) / 4.0)

    def test_sign_follows_distance(self):
        """A negative distance gives a negative cruise velocity."""
        v = solve_cruise_velocity(1.0, 1.0, -4.0, 6.0)
        assert v == pytest.approx(-(12.0 - math.sqrt(80.0)) / 4.0)

    def test_infeasible_is_nan(self):
        """A move too long for the duration is NaN."""
        assert math.isnan(solve_cruise_velocity(1.0, 1.0, 10.0, 2.0))

    def test_zero_duration_nonzero_distance_is_nan(self):
        """Moving in zero time is infeasible."""
        assert math.isnan(solve_cruise_velocity(1.0, 1.0, 1.0, 0.0))

    def test_non_positive_limits_rejected(self):
        """accel and decel must be positive."""
        with pytest.raises(ValueError):
            solve_cruise_velocity(0.0, 1.0, 1.0, 1.0)


class TestMotionProfile:
    def test_reaches_distance_at_rest(self):
        """At time == duration the full distance is covered at rest."""
        position, velocity = motion_profile(6.0, 1.0, 1.0, 4.0, 6.0)
        assert position == pytest.approx(4.0, abs=1e-9)
        assert velocity == pytest.approx(0.0, abs=1e-9)

    def test_starts_at_rest(self):
        """At time 0 position and velocity are 0."""
        position, velocity = motion_profile(0.0, 1.0, 1.0, 4.0, 6.0)
        assert position == pytest.approx(0.0)
        assert velocity == pytest.approx(0.0)

    def test_cruise_phase_velocity(self):
        """Mid-move velocity equals the solved cruise velocity."""
        v = solve_cruise_velocity(1.0, 1.0, 4.0, 6.0)
        result = motion_profile(3.0, 1.0, 1.0, 4.0, 6.0)
        assert result.velocity == pytest.approx(v)

    def test_asymmetric_limits_end_on_target(self):
        """Different accel and decel still end on target at rest."""
        position, velocity = motion_profile(4.0, 2.0, 1.0, 3.0, 4.0)
        assert position == pytest.approx(3.0, abs=1e-9)
        assert velocity == pytest.approx(0.0, abs=1e-9)

    def test_position_monotone(self):
        """Position never decreases for a positive move."""
        positions = [motion_profile(t, 2.0, 1.0, 3.0, 4.0).position for t in np.linspace(0, 4, 41)]
        assert np.all(np.diff(positions) >= -1e-12)

    def test_negative_distance_mirrors(self):
        """Negative moves mirror positive ones."""
        for time in (0.5, 3.0, 5.5):
            pos = motion_profile(time, 1.0, 1.0, 4.0, 6.0)
            neg = motion_profile(time, 1.0, 1.0, -4.0, 6.0)
            assert neg.position == pytest.approx(-pos.position)
            assert neg.velocity == pytest.approx(-pos.velocity)

    def test_zero_distance_stays_put(self):
        """Zero distance keeps position and velocity at 0."""
        position, velocity = motion_profile(1.0, 1.0, 1.0, 0.0, 2.0)
        assert position == pytest.approx(0.0)
        assert velocity == pytest.approx(0.0)

    def test_infeasible_is_nan(self):
        """A move too long for the duration is NaN."""
        position, velocity = motion_profile(1.0, 1.0, 1.0, 10.0, 2.0)
        assert math.isnan(position)
        assert math.isnan(velocity)
