"""
Forward rate agreement (also used for futures, neglecting convexity).
"""
from typing import TYPE_CHECKING

from ratecurves.conventions.types import EvaluationTimePolicy
from ratecurves.errors import MisspecifiedScheduleError
from ratecurves.schedule import Schedule

from .base import AnalyticProduct

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


class ForwardRateAgreement(AnalyticProduct):
    """Market FRA settled at fixing.

    Value is ``sign * (F - K) / (1 + F * dcf) * df(fixing) * dcf`` with the
    forward ``F`` of the single period; ``sign`` is +1 for the payer.
    """

    def __init__(
        self,
        schedule: Schedule,
        rate: float,
        forward_curve_name: str,
        discount_curve_name: str,
        is_payer: bool = True,
        time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
    ):
        if len(schedule) != 1:
            raise MisspecifiedScheduleError(
                f"A FRA has exactly one period, got {len(schedule)}"
            )
        self.schedule = schedule
        self.rate = rate
        self.forward_curve_name = forward_curve_name
        self.discount_curve_name = discount_curve_name
        self.is_payer = is_payer
        self.time_policy = time_policy

    def get_rate(self, model: "AnalyticModel") -> float:
        """Forward of the FRA period; the FRA has zero value at this rate."""
        period = self.schedule[0]
        forward_curve = model.get_forward_curve(self.forward_curve_name)
        return forward_curve.get_forward(model, period.fixing, period.length)

    def get_value(self, evaluation_time: float, model: "AnalyticModel") -> float:
        period = self.schedule[0]
        discount_curve = model.get_discount_curve(self.discount_curve_name)
        forward = self.get_rate(model)

        discount_factor_fixing = (
            discount_curve.get_discount_factor(model, period.fixing)
            if self.time_policy.counts(period.fixing, evaluation_time)
            else 0.0
        )
        sign = 1.0 if self.is_payer else -1.0
        period_length = period.day_count_fraction
        return (
            sign
            * (forward - self.rate)
            / (1.0 + forward * period_length)
            * discount_factor_fixing
            * period_length
        )
