"""Unit test fixtures."""

import pytest

from pathforge import AnglePoint, Path, TrajectoryConfig, Waypoint


@pytest.fixture
def config() -> TrajectoryConfig:
    """Built-in defaults, independent of PATHFORGE_* environment overrides."""
    return TrajectoryConfig(
        bezier_divisions=100,
        max_velocity=13 * 12.0,
        max_accel=9 * 12.0,
        max_decel=15 * 12.0,
        curvature_velocity=5.0,
        angular_accel=6.0,
        angular_decel=6.0,
    )


@pytest.fixture
def straight_path() -> Path:
    """100 in along +x, handles pointing along the line."""
    return Path(
        waypoints=[
            Waypoint(x=0.0, y=0.0, heading=0.0, handle_after_length=10.0),
            Waypoint(x=100.0, y=0.0, heading=0.0, handle_before_length=10.0),
        ]
    )


@pytest.fixture
def s_curve_path() -> Path:
    """Three waypoints with bends and two facing-angle targets."""
    return Path(
        waypoints=[
            Waypoint(x=0.0, y=0.0, heading=0.0, handle_after_length=30.0),
            Waypoint(
                x=60.0,
                y=40.0,
                heading=90.0,
                handle_before_length=20.0,
                handle_after_length=20.0,
            ),
            Waypoint(x=120.0, y=80.0, heading=0.0, handle_before_length=30.0),
        ],
        angles=[
            AnglePoint(after_waypoint=0, t=0.0, angle=0.0),
            AnglePoint(after_waypoint=1, t=1.0, angle=1.0),
        ],
    )
