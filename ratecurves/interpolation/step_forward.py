"""
Step forward interpolation of discount factors.
"""
import math
from typing import Sequence

import numpy as np

from .base import Interpolator


class StepForwardContinuousInterpolator(Interpolator):
    """Step Forward (continuous) interpolation

    Continuously compounded forward rates are piecewise constant between
    pillars, i.e. log discount factors are linear. Before the first pillar the
    first pillar's zero rate applies; after the last pillar the last forward
    rate continues (the zero rate of a lone pillar when there is only one).
    """

    def __init__(self, pillars: Sequence[float], discount_factors: Sequence[float]):
        super().__init__(pillars, discount_factors)

        for i, df in enumerate(self.values):
            if df <= 0:
                raise ValueError(f"Discount factor at pillar {i} must be positive: {df}")

        # f = ln(DF1/DF2) / (t2-t1)
        self.forward_rates = [
            math.log(self.values[i] / self.values[i + 1])
            / (self.pillars[i + 1] - self.pillars[i])
            for i in range(len(self.pillars) - 1)
        ]

    def interpolate(self, t: float) -> float:
        """Interpolate discount factor at time t."""
        if t <= 0:
            return 1.0
        first_pillar = self.pillars[0]
        if t <= first_pillar:
            return math.exp(math.log(self.values[0]) * t / first_pillar)
        if t >= self.pillars[-1]:
            if self.forward_rates:
                rate = self.forward_rates[-1]
            elif first_pillar > 0:
                rate = -math.log(self.values[0]) / first_pillar
            else:
                rate = 0.0
            return float(self.values[-1] * math.exp(-rate * (t - self.pillars[-1])))

        i = np.searchsorted(self.pillars, t) - 1
        return float(self.values[i] * math.exp(-self.forward_rates[i] * (t - self.pillars[i])))

    def interpolate_zero_rate(self, t: float) -> float:
        """Interpolate zero rate at time t."""
        if t <= 0:
            return 0.0
        return -math.log(self.interpolate(t)) / t
