"""
Swap legs: fixed or floating coupons on a schedule, with optional notional
exchange and notional resetting.
"""
import logging
import math
from typing import TYPE_CHECKING, Optional

from ratecurves.conventions.types import EvaluationTimePolicy
from ratecurves.curves.base import DiscountCurve, ForwardCurve
from ratecurves.curves.wrappers import ForwardCurveFromDiscountCurve
from ratecurves.errors import MisspecifiedScheduleError, UnsupportedCombinationError
from ratecurves.schedule import Schedule

from .base import AnalyticProduct, LegCashflow

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel

logger = logging.getLogger(__name__)


def swap_annuity(
    schedule: Schedule,
    discount_curve: DiscountCurve,
    model: "AnalyticModel",
    evaluation_time: float = 0.0,
    time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
) -> float:
    """Sum of accrual fractions times payment discount factors.

    Payments that are no longer alive at the evaluation time do not count;
    the result is expressed in units of ``df(evaluation_time)``.
    """
    annuity = math.fsum(
        period.day_count_fraction * discount_curve.get_discount_factor(model, period.payment)
        for period in schedule
        if time_policy.counts(period.payment, evaluation_time)
    )
    return annuity / discount_curve.get_discount_factor(model, evaluation_time)


class SwapLeg(AnalyticProduct):
    """A leg paying ``(forward + spread) * dcf`` per period.

    Without a forward curve the leg is a fixed leg paying the spread. With a
    notional-reset discount curve the notional of period ``i`` is
    ``(df_reset(s_i) / df_reset(s_0)) / (df(s_i) / df(s_0))``. With notional
    exchange the (reset) notional is paid at each period start and received
    at each period end.

    When the forward curve is the discount curve itself, or is read off it,
    the leg is valued by the single-curve closed form
    ``df(s_0) * df(P_n) / df(E_n) - df(P_n)``; it supports neither a spread
    nor notional exchange.
    """

    def __init__(
        self,
        schedule: Schedule,
        forward_curve_name: Optional[str],
        spread: float,
        discount_curve_name: str,
        discount_curve_for_notional_reset_name: Optional[str] = None,
        is_notional_exchanged: bool = False,
        time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
        allow_single_curve_formula: bool = True,
    ):
        if len(schedule) == 0:
            raise MisspecifiedScheduleError("Swap leg schedule has no periods")
        self.schedule = schedule
        self.forward_curve_name = forward_curve_name or None
        self.spread = spread
        self.discount_curve_name = discount_curve_name
        self.discount_curve_for_notional_reset_name = (
            discount_curve_for_notional_reset_name or None
        )
        self.is_notional_exchanged = is_notional_exchanged
        self.time_policy = time_policy
        self.allow_single_curve_formula = allow_single_curve_formula

    def _effective_evaluation_time(self, evaluation_time: float) -> float:
        if self.time_policy is EvaluationTimePolicy.SUMMIT and self.is_notional_exchanged:
            return max(evaluation_time, self.schedule.get_period_start(0))
        return evaluation_time

    def _is_single_curve(self, model: "AnalyticModel") -> bool:
        if not self.allow_single_curve_formula or self.forward_curve_name is None:
            return False
        if self.forward_curve_name == self.discount_curve_name:
            return True
        forward_curve = model.get_curve(self.forward_curve_name)
        return (
            isinstance(forward_curve, ForwardCurve)
            and forward_curve.base_discount_curve_name == self.discount_curve_name
        )

    def get_value(self, evaluation_time: float, model: "AnalyticModel") -> float:
        evaluation_time = self._effective_evaluation_time(evaluation_time)
        discount_curve = model.get_discount_curve(self.discount_curve_name)

        if self._is_single_curve(model):
            if self.spread != 0.0 or self.is_notional_exchanged:
                raise UnsupportedCombinationError(
                    f"Single-curve leg on {self.discount_curve_name} supports neither a "
                    f"spread ({self.spread}) nor notional exchange"
                )
            last = len(self.schedule) - 1
            df_start = discount_curve.get_discount_factor(model, self.schedule.get_period_start(0))
            df_end = discount_curve.get_discount_factor(model, self.schedule.get_period_end(last))
            df_payment = discount_curve.get_discount_factor(model, self.schedule.get_payment(last))
            value = df_start * df_payment / df_end - df_payment
        else:
            value = math.fsum(
                cashflow.value
                for cashflow in self._cashflows(evaluation_time, model, discount_curve)
            )

        return value / discount_curve.get_discount_factor(model, evaluation_time)

    def get_cashflows(
        self, evaluation_time: float, model: "AnalyticModel"
    ) -> list[LegCashflow]:
        """Per-period breakdown of the leg (discounted to time 0)."""
        evaluation_time = self._effective_evaluation_time(evaluation_time)
        discount_curve = model.get_discount_curve(self.discount_curve_name)
        return self._cashflows(evaluation_time, model, discount_curve)

    def _forward_curve(self, model: "AnalyticModel") -> Optional[ForwardCurve]:
        if self.forward_curve_name is None:
            return None
        if self.forward_curve_name == self.discount_curve_name:
            # Single-curve leg valued period by period: forwards off the discount curve
            return ForwardCurveFromDiscountCurve(self.discount_curve_name)
        return model.get_forward_curve(self.forward_curve_name)

    def _cashflows(
        self,
        evaluation_time: float,
        model: "AnalyticModel",
        discount_curve: DiscountCurve,
    ) -> list[LegCashflow]:
        forward_curve = self._forward_curve(model)
        reset_curve = (
            model.get_discount_curve(self.discount_curve_for_notional_reset_name)
            if self.discount_curve_for_notional_reset_name is not None
            else None
        )
        policy = self.time_policy
        first_start = self.schedule.get_period_start(0)

        cashflows = []
        for index, period in enumerate(self.schedule):
            if period.day_count_fraction == 0:
                raise MisspecifiedScheduleError(
                    f"Period {index} of leg has a zero day count fraction"
                )

            rate = self.spread
            if forward_curve is not None:
                rate += forward_curve.get_forward(model, period.fixing, period.length)

            notional = 1.0
            if reset_curve is not None:
                reset_growth = reset_curve.get_discount_factor(
                    model, period.period_start
                ) / reset_curve.get_discount_factor(model, first_start)
                discount_growth = discount_curve.get_discount_factor(
                    model, period.period_start
                ) / discount_curve.get_discount_factor(model, first_start)
                notional = reset_growth / discount_growth

            discount_factor = (
                discount_curve.get_discount_factor(model, period.payment)
                if policy.counts(period.payment, evaluation_time)
                else 0.0
            )

            exchange_value = 0.0
            if self.is_notional_exchanged:
                if policy.counts(period.period_start, evaluation_time):
                    exchange_value -= notional * discount_curve.get_discount_factor(
                        model, period.period_start
                    )
                if policy.counts(period.period_end, evaluation_time):
                    exchange_value += notional * discount_curve.get_discount_factor(
                        model, period.period_end
                    )

            cashflows.append(
                LegCashflow(
                    index=index,
                    fixing=period.fixing,
                    period_start=period.period_start,
                    period_end=period.period_end,
                    payment=period.payment,
                    day_count_fraction=period.day_count_fraction,
                    rate=rate,
                    notional=notional,
                    discount_factor=discount_factor,
                    coupon_value=notional * rate * period.day_count_fraction * discount_factor,
                    exchange_value=exchange_value,
                )
            )
        return cashflows

    def get_annuity(self, model: "AnalyticModel") -> float:
        """Annuity of the leg's schedule on its discount curve, seen from time 0."""
        discount_curve = model.get_discount_curve(self.discount_curve_name)
        return swap_annuity(self.schedule, discount_curve, model, 0.0, self.time_policy)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(periods={len(self.schedule)}, "
            f"forward={self.forward_curve_name!r}, spread={self.spread}, "
            f"discount={self.discount_curve_name!r}, "
            f"reset={self.discount_curve_for_notional_reset_name!r}, "
            f"notional_exchange={self.is_notional_exchanged})"
        )


class SwapLegWithResetting(SwapLeg):
    """Swap leg whose notional resets off a second discount curve.

    This is the leg of a mark-to-market cross-currency swap: the reset curve
    must differ from the discount curve, notional is exchanged by default and
    the leg is always valued period by period.
    """

    def __init__(
        self,
        schedule: Schedule,
        forward_curve_name: Optional[str],
        spread: float,
        discount_curve_name: str,
        discount_curve_for_notional_reset_name: str,
        is_notional_exchanged: bool = True,
        time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE,
    ):
        if not discount_curve_for_notional_reset_name:
            raise ValueError("A resetting leg needs a notional reset discount curve")
        if discount_curve_for_notional_reset_name == discount_curve_name:
            raise ValueError(
                f"Notional reset curve must differ from discount curve {discount_curve_name}"
            )
        super().__init__(
            schedule,
            forward_curve_name,
            spread,
            discount_curve_name,
            discount_curve_for_notional_reset_name,
            is_notional_exchanged,
            time_policy,
            allow_single_curve_formula=False,
        )
