"""
Money market deposit.
"""
from typing import TYPE_CHECKING

from ratecurves.conventions.types import EvaluationTimePolicy
from ratecurves.errors import MisspecifiedScheduleError
from ratecurves.schedule import Schedule

from .base import AnalyticProduct

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


class Deposit(AnalyticProduct):
    """Lend one unit at period start, receive ``1 + rate * dcf`` at payment."""

    def __init__(
        self,
        schedule: Schedule,
        rate: float,
        discount_curve_name: str,
        time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
    ):
        if len(schedule) != 1:
            raise MisspecifiedScheduleError(
                f"A deposit has exactly one period, got {len(schedule)}"
            )
        self.schedule = schedule
        self.rate = rate
        self.discount_curve_name = discount_curve_name
        self.time_policy = time_policy

    def get_value(self, evaluation_time: float, model: "AnalyticModel") -> float:
        discount_curve = model.get_discount_curve(self.discount_curve_name)
        period = self.schedule[0]

        value = 0.0
        if self.time_policy.counts(period.payment, evaluation_time):
            value += (1.0 + self.rate * period.day_count_fraction) * (
                discount_curve.get_discount_factor(model, period.payment)
            )
        if self.time_policy.counts(period.period_start, evaluation_time):
            value -= discount_curve.get_discount_factor(model, period.period_start)

        return value / discount_curve.get_discount_factor(model, evaluation_time)

    def get_rate(self, model: "AnalyticModel") -> float:
        """Deposit rate for which the deposit has zero value."""
        discount_curve = model.get_discount_curve(self.discount_curve_name)
        period = self.schedule[0]
        if period.day_count_fraction == 0:
            raise MisspecifiedScheduleError("Deposit period has a zero day count fraction")
        df_start = discount_curve.get_discount_factor(model, period.period_start)
        df_payment = discount_curve.get_discount_factor(model, period.payment)
        return (df_start / df_payment - 1.0) / period.day_count_fraction
