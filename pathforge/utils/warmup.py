"""
JIT warmup utilities.

Call warmup_jit() on startup to pre-compile all numba functions before the
first trajectory is computed. With cache=True, this is fast if the cache
exists, slower (a few seconds) on first run.
"""

import logging
import time

import numpy as np

from pathforge.motion.heading import _profile_angles_jit
from pathforge.motion.profile import _motion_profile_jit, _solve_cruise_velocity_jit
from pathforge.motion.velocity import _smooth_pass_jit

logger = logging.getLogger(__name__)


def warmup_jit() -> float:
    """
    Pre-compile all numba JIT functions by calling them with dummy data.

    Returns the time taken in seconds.
    """
    logger.info("Warming JIT...")
    start = time.perf_counter()

    dummy_4f = np.zeros(4, dtype=np.float64)
    out_4f = np.zeros(4, dtype=np.float64)
    out_4f_b = np.zeros(4, dtype=np.float64)

    # pathforge/motion/velocity.py
    _smooth_pass_jit(dummy_4f, dummy_4f, dummy_4f, 1.0, out_4f)

    # pathforge/motion/profile.py
    _solve_cruise_velocity_jit(1.0, 1.0, 1.0, 2.0)
    _motion_profile_jit(0.5, 1.0, 1.0, 1.0, 2.0)

    # pathforge/motion/heading.py
    anchor_times = np.array([0.0, 2.0], dtype=np.float64)
    anchor_angles = np.array([0.0, 1.0], dtype=np.float64)
    _profile_angles_jit(
        np.linspace(0.0, 2.0, 4),
        anchor_times,
        anchor_angles,
        1.0,
        1.0,
        out_4f,
        out_4f_b,
    )

    elapsed = time.perf_counter() - start
    logger.info("JIT warmup complete in %.3fs", elapsed)
    return elapsed
