"""
Interpolated discount curve.
"""
import logging
import math
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from .base import CurvePoint, DiscountCurve, InterpolatedCurve

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel

logger = logging.getLogger(__name__)


class InterpolatedDiscountCurve(InterpolatedCurve, DiscountCurve):
    """Discount curve interpolating discount factors between its points.

    The default method is step-forward (log-linear discount factors). A curve
    under calibration usually carries a fixed point ``(0, 1)`` and one
    parameter point per calibration instrument.
    """

    default_interpolation_method = "STEP_FORWARD_CONTINUOUS"

    def get_discount_factor(self, model: Optional["AnalyticModel"], time: float) -> float:
        return self.get_value(model, time)

    @classmethod
    def from_discount_factors(
        cls,
        name: str,
        times: Sequence[float],
        discount_factors: Sequence[float],
        is_parameter: Optional[Sequence[bool]] = None,
        interpolation_method: Optional[str] = None,
    ) -> "InterpolatedDiscountCurve":
        """
        Create a discount curve from pillar discount factors.

        Args:
            name: Curve name
            times: Pillar times in years
            discount_factors: Discount factors at the pillars
            is_parameter: Calibration flags per pillar (default: all fixed)
            interpolation_method: Interpolation method name
        """
        if len(times) != len(discount_factors):
            raise ValueError("Times and discount factors must have same length")
        flags = is_parameter if is_parameter is not None else [False] * len(times)

        pairs = sorted(zip(times, discount_factors, strict=True))
        for i in range(1, len(pairs)):
            increase = pairs[i][1] - pairs[i - 1][1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing on %s at pillar %s (increase = %.8f)",
                    name,
                    i,
                    increase,
                )

        points = [
            CurvePoint(float(t), float(df), bool(flag))
            for t, df, flag in zip(times, discount_factors, flags, strict=True)
        ]
        return cls(name, points, interpolation_method)

    @classmethod
    def from_zero_rates(
        cls,
        name: str,
        times: Sequence[float],
        zero_rates: Sequence[float],
        is_parameter: Optional[Sequence[bool]] = None,
        interpolation_method: Optional[str] = None,
    ) -> "InterpolatedDiscountCurve":
        """Create a discount curve from continuously compounded zero rates."""
        discount_factors = [
            math.exp(-rate * t) for t, rate in zip(times, zero_rates, strict=True)
        ]
        return cls.from_discount_factors(
            name, times, discount_factors, is_parameter, interpolation_method
        )

    @classmethod
    def flat(
        cls, name: str, zero_rate: float, times: Iterable[float] = (1.0,)
    ) -> "InterpolatedDiscountCurve":
        """Flat continuously compounded zero rate curve."""
        times = list(times)
        return cls.from_zero_rates(name, times, [zero_rate] * len(times))
