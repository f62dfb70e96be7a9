"""
Linear and step interpolation with flat extrapolation.
"""
import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation on the stored values.

    Used for forward curves and, on request, for discount factors.
    """

    def interpolate(self, t: float) -> float:
        outside = self._extrapolate_flat(t)
        if outside is not None:
            return outside

        i = np.searchsorted(self.pillars, t) - 1
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        v1, v2 = self.values[i], self.values[i + 1]

        weight = (t - t1) / (t2 - t1)
        return float(v1 + weight * (v2 - v1))


class PiecewiseConstantInterpolator(Interpolator):
    """Piecewise constant (step function) interpolation.

    The value of a pillar holds until the next pillar.
    """

    def interpolate(self, t: float) -> float:
        outside = self._extrapolate_flat(t)
        if outside is not None:
            return outside

        i = np.searchsorted(self.pillars, t, side="right") - 1
        return float(self.values[i])
