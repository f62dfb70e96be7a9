"""
Base class for curve interpolation methods.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class Interpolator(ABC):
    """Base class for curve interpolation methods.

    A single pillar is allowed; curves under calibration start out with one
    point and grow one point per instrument.
    """

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Initialize interpolator.

        Args:
            pillars: Curve times (in years)
            values: Values at the pillars (discount factors, forwards, ...)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 1:
            raise ValueError("Need at least 1 point for interpolation")

        order = np.argsort(np.asarray(pillars, dtype=float), kind="stable")
        self.pillars = np.asarray(pillars, dtype=float)[order]
        self.values = np.asarray(values, dtype=float)[order]

        if len(np.unique(self.pillars)) != len(self.pillars):
            raise ValueError("Duplicate pillar times not allowed")

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""
        pass

    def interpolate_many(self, times: Sequence[float]) -> list[float]:
        """Interpolate values at multiple times."""
        return [self.interpolate(t) for t in times]

    def _extrapolate_flat(self, t: float) -> float | None:
        """Value for t outside the pillar range, None inside it."""
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])
        return None
