"""
Swaps: receiver leg minus payer leg, and the fix/float rate swap.
"""
import math
from typing import TYPE_CHECKING, Optional

from ratecurves.conventions.types import EvaluationTimePolicy
from ratecurves.curves.wrappers import DiscountCurveFromForwardCurve
from ratecurves.errors import MisspecifiedScheduleError
from ratecurves.model import AnalyticModel
from ratecurves.schedule import Schedule

from .base import AnalyticProduct
from .swap_leg import SwapLeg, swap_annuity

if TYPE_CHECKING:
    from ratecurves.curves.base import ForwardCurve


class Swap(AnalyticProduct):
    """Value of the receiver leg minus value of the payer leg."""

    def __init__(self, leg_receiver: AnalyticProduct, leg_payer: AnalyticProduct):
        self.leg_receiver = leg_receiver
        self.leg_payer = leg_payer

    @classmethod
    def from_schedules(
        cls,
        schedule_receiver: Schedule,
        forward_curve_receiver_name: Optional[str],
        spread_receiver: float,
        discount_curve_receiver_name: str,
        schedule_payer: Schedule,
        forward_curve_payer_name: Optional[str],
        spread_payer: float,
        discount_curve_payer_name: str,
        is_notional_exchanged: bool = True,
        time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
    ) -> "Swap":
        """Swap of two plain legs, exchanging notional on both by default."""
        return cls(
            SwapLeg(
                schedule_receiver,
                forward_curve_receiver_name,
                spread_receiver,
                discount_curve_receiver_name,
                is_notional_exchanged=is_notional_exchanged,
                time_policy=time_policy,
            ),
            SwapLeg(
                schedule_payer,
                forward_curve_payer_name,
                spread_payer,
                discount_curve_payer_name,
                is_notional_exchanged=is_notional_exchanged,
                time_policy=time_policy,
            ),
        )

    def get_value(self, evaluation_time: float, model: AnalyticModel) -> float:
        value_receiver = self.leg_receiver.get_value(evaluation_time, model)
        value_payer = self.leg_payer.get_value(evaluation_time, model)
        return value_receiver - value_payer

    @staticmethod
    def get_forward_swap_rate(
        fix_schedule: Schedule,
        float_schedule: Schedule,
        forward_curve_name: str,
        discount_curve_name: str,
        model: AnalyticModel,
    ) -> float:
        """
        Par rate of a fix/float swap seen from the first fixing of the fix schedule.

        Args:
            fix_schedule: Schedule of the fixed leg (defines the annuity)
            float_schedule: Schedule of the floating leg
            forward_curve_name: Forward curve of the floating leg
            discount_curve_name: Discount curve of both legs
            model: Model holding the curves

        Returns:
            Float leg value divided by the fixed leg annuity
        """
        forward_curve = model.get_forward_curve(forward_curve_name)
        discount_curve = model.get_discount_curve(discount_curve_name)

        evaluation_time = fix_schedule.get_fixing(0)
        annuity = swap_annuity(fix_schedule, discount_curve, model, evaluation_time)

        float_leg = math.fsum(
            forward_curve.get_forward(model, period.fixing, period.length)
            * period.day_count_fraction
            * discount_curve.get_discount_factor(model, period.payment)
            for period in float_schedule
        )
        float_leg_value = float_leg / discount_curve.get_discount_factor(model, evaluation_time)
        return float_leg_value / annuity

    @staticmethod
    def get_forward_swap_rate_single_curve(
        fix_schedule: Schedule, float_schedule: Schedule, forward_curve: "ForwardCurve"
    ) -> float:
        """Par rate when the forward curve also provides the discounting."""
        discount_curve = DiscountCurveFromForwardCurve(forward_curve.name)
        model = AnalyticModel([forward_curve, discount_curve])
        return Swap.get_forward_swap_rate(
            fix_schedule, float_schedule, forward_curve.name, discount_curve.name, model
        )


class RateSwap(Swap):
    """Payer swap: receive the floating leg, pay the fixed leg.

    The fixed leg carries no forward curve, the floating leg does, and both
    legs start and end at the same times.
    """

    def __init__(self, fix_leg: SwapLeg, float_leg: SwapLeg):
        if fix_leg.forward_curve_name is not None:
            raise MisspecifiedScheduleError(
                f"Fixed leg must not have a forward curve, got {fix_leg.forward_curve_name}"
            )
        if float_leg.forward_curve_name is None:
            raise MisspecifiedScheduleError("Floating leg needs a forward curve")
        fix_schedule, float_schedule = fix_leg.schedule, float_leg.schedule
        if len(fix_schedule) == 0 or len(float_schedule) == 0:
            raise MisspecifiedScheduleError("Swap leg schedule has no periods")
        if fix_schedule.get_period_start(0) != float_schedule.get_period_start(0):
            raise MisspecifiedScheduleError(
                f"Legs start at different times: {fix_schedule.get_period_start(0)} "
                f"vs {float_schedule.get_period_start(0)}"
            )
        if fix_schedule.get_period_end(len(fix_schedule) - 1) != float_schedule.get_period_end(
            len(float_schedule) - 1
        ):
            raise MisspecifiedScheduleError("Legs end at different times")

        super().__init__(float_leg, fix_leg)
        self.fix_leg = fix_leg
        self.float_leg = float_leg

    @property
    def swap_start(self) -> float:
        return self.fix_leg.schedule.get_period_start(0)

    @property
    def swap_maturity(self) -> float:
        schedule = self.fix_leg.schedule
        return schedule.get_period_end(len(schedule) - 1)

    def get_forward_swap_rate(self, model: AnalyticModel) -> float:
        """Fixed rate for which the swap has zero value, seen from time 0."""
        annuity = self.fix_leg.get_annuity(model)
        if annuity == 0:
            raise ValueError("Fixed leg annuity is zero; forward swap rate undefined")
        return self.float_leg.get_value(0.0, model) / annuity
