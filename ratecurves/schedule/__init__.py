"""Periods and schedules on the model time axis."""

from .core import Period, Schedule, regular_schedule

__all__ = ["Period", "Schedule", "regular_schedule"]
