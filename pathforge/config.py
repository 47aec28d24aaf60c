"""
Central configuration for pathforge tunables and shared constants.

Linear limits are expressed in feet (the unit drivers tune in) and converted
to inches, the unit of path coordinates, when a TrajectoryConfig is built.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("PATHFORGE_TRACE", "0")).lower() in (
    "1",
    "true",
    "yes",
    "on",
)

logger = logging.getLogger(__name__)

INCHES_PER_FOOT: float = 12.0

# Bezier sampling resolution (samples per waypoint-to-waypoint segment)
BEZIER_DIVISIONS: int = int(os.getenv("PATHFORGE_BEZIER_DIVISIONS", "100"))

# Linear limits (ft/s, ft/s²)
MAX_VELOCITY_FT_S: float = float(os.getenv("PATHFORGE_MAX_VELOCITY", "13"))
MAX_ACCEL_FT_S2: float = float(os.getenv("PATHFORGE_MAX_ACCEL", "9"))
MAX_DECEL_FT_S2: float = float(os.getenv("PATHFORGE_MAX_DECEL", "15"))

# Speed (in/s) allowed per inch of turning radius. Curvature is exact, so curves
# plan 1.5x faster than with unscaled Bezier derivatives at the same value.
CURVATURE_VELOCITY: float = float(os.getenv("PATHFORGE_CURVATURE_VELOCITY", "5"))

# Facing-angle limits (rad/s²)
ANGULAR_ACCEL: float = float(os.getenv("PATHFORGE_ANGULAR_ACCEL", "6"))
ANGULAR_DECEL: float = float(os.getenv("PATHFORGE_ANGULAR_DECEL", "6"))


@dataclass(frozen=True, slots=True)
class TrajectoryConfig:
    """Immutable engine inputs shared by every trajectory computation.

    All linear values are in inches (in/s, in/s²); angular values in rad/s².
    """

    bezier_divisions: int
    max_velocity: float  # in/s
    max_accel: float  # in/s²
    max_decel: float  # in/s²
    curvature_velocity: float
    angular_accel: float  # rad/s²
    angular_decel: float  # rad/s²

    def __post_init__(self) -> None:
        if self.bezier_divisions < 1:
            raise ValueError(
                f"bezier_divisions must be >= 1, got {self.bezier_divisions}"
            )
        for name in (
            "max_velocity",
            "max_accel",
            "max_decel",
            "curvature_velocity",
            "angular_accel",
            "angular_decel",
        ):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_defaults(cls) -> TrajectoryConfig:
        """Build a config from the module-level (env-overridable) constants."""
        return cls(
            bezier_divisions=BEZIER_DIVISIONS,
            max_velocity=MAX_VELOCITY_FT_S * INCHES_PER_FOOT,
            max_accel=MAX_ACCEL_FT_S2 * INCHES_PER_FOOT,
            max_decel=MAX_DECEL_FT_S2 * INCHES_PER_FOOT,
            curvature_velocity=CURVATURE_VELOCITY,
            angular_accel=ANGULAR_ACCEL,
            angular_decel=ANGULAR_DECEL,
        )

    def with_max_velocity(self, max_velocity_ft_s: float | None) -> TrajectoryConfig:
        """Return a copy using a per-path max velocity override (ft/s).

        None or 0 keeps the configured maximum.
        """
        if not max_velocity_ft_s:
            return self
        return replace(self, max_velocity=max_velocity_ft_s * INCHES_PER_FOOT)
