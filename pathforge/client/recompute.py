"""
Caller-side debouncing for trajectory recomputation.

Editors change a path many times per second while a handle is dragged. The
engine itself is a pure function with no scheduling policy; this helper
coalesces rapid submissions (cancel-and-resubmit) and computes only the most
recent path on a background timer thread.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pathforge.config import TrajectoryConfig
from pathforge.motion.trajectory import Trajectory, compute_trajectory
from pathforge.protocol.types import Path
from pathforge.utils.errors import PathforgeError

logger = logging.getLogger(__name__)


class RecomputeScheduler:
    """
    Single-flight, latest-wins trajectory recomputation.

    Each submit() cancels any pending computation and schedules the new path
    after ``delay_s``. A result whose path was superseded while computing is
    dropped instead of delivered.
    """

    def __init__(
        self,
        on_result: Callable[[Trajectory], None],
        on_error: Callable[[PathforgeError], None] | None = None,
        delay_s: float = 0.05,
        config: TrajectoryConfig | None = None,
    ):
        """
        Args:
            on_result: Called with each delivered trajectory (timer thread)
            on_error: Called when a path is malformed; logged if None
            delay_s: Quiet period before computing
            config: Engine limits passed to compute_trajectory
        """
        self.on_result = on_result
        self.on_error = on_error
        self.delay_s = delay_s
        self.config = config
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: Path | None = None
        self._generation = 0
        self._closed = False

    def submit(self, path: Path) -> None:
        """Schedule ``path``, replacing anything not yet computed."""
        with self._lock:
            if self._closed:
                raise RuntimeError("RecomputeScheduler is closed")
            if self._timer is not None:
                self._timer.cancel()
            self._pending = path
            self._generation += 1
            timer = threading.Timer(self.delay_s, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> bool:
        """
        Compute the pending path now, on the calling thread.

        Returns:
            True if a pending path was computed
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            path = self._pending
            self._pending = None
            generation = self._generation
        if path is None:
            return False
        self._run(path, generation)
        return True

    def cancel(self) -> None:
        """Drop the pending path and any result still being computed."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._pending = None
            self._generation += 1

    def close(self) -> None:
        self.cancel()
        with self._lock:
            self._closed = True

    def __enter__(self) -> RecomputeScheduler:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending is None:
                return
            path = self._pending
            self._pending = None
            self._timer = None
        self._run(path, generation)

    def _run(self, path: Path, generation: int) -> None:
        try:
            trajectory = compute_trajectory(path, config=self.config)
        except PathforgeError as e:
            if self.on_error is not None:
                self.on_error(e)
            else:
                logger.warning("Trajectory recompute failed: %s", e)
            return

        with self._lock:
            stale = generation != self._generation
        if stale:
            logger.debug("Dropping superseded trajectory (generation %d)", generation)
            return
        self.on_result(trajectory)
