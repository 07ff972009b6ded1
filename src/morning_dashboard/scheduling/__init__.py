"""Scheduling helpers derived from calendar data."""

from morning_dashboard.scheduling.focus_time import FocusTimeCalculator, compute_focus_blocks

__all__ = ["FocusTimeCalculator", "compute_focus_blocks"]
