"""
Time parameterization of a velocity-profiled path.

Each step's duration is distance over the mean of its two endpoint speeds
(trapezoidal integration of d = v·t). A step whose mean speed is zero takes
zero time.
"""

import logging

import numpy as np
from numpy.typing import NDArray

from pathforge.motion.interpolation import InterpolatedPath

logger = logging.getLogger(__name__)


def step_durations(
    x: NDArray[np.float64], y: NDArray[np.float64], speeds: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Duration of each of the N-1 steps between consecutive samples."""
    distances = np.hypot(np.diff(x), np.diff(y))
    avg_speeds = (speeds[:-1] + speeds[1:]) / 2.0
    durations = np.zeros_like(distances)
    moving = avg_speeds > 0.0
    durations[moving] = distances[moving] / avg_speeds[moving]
    return durations


def assign_time(
    samples: InterpolatedPath, velocity: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Timestamp every sample.

    Args:
        samples: Interpolated path
        velocity: (N, 2) velocity vectors from assign_velocity

    Returns:
        (N,) non-decreasing times in seconds, starting at 0
    """
    n = len(samples)
    times = np.zeros(n, dtype=np.float64)
    if n < 2:
        return times

    speeds = np.hypot(velocity[:, 0], velocity[:, 1])
    durations = step_durations(samples.x, samples.y, speeds)
    times[1:] = np.cumsum(durations)

    n_stalled = int(np.count_nonzero(durations == 0.0))
    logger.debug(
        "assign_time: duration=%.3fs steps=%d zero_duration_steps=%d",
        times[-1],
        n - 1,
        n_stalled,
    )
    return times
