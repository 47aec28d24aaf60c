"""Helpers for interactive callers (editors) of the trajectory engine."""

from pathforge.client.recompute import RecomputeScheduler

__all__ = ["RecomputeScheduler"]
