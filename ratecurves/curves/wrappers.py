"""
Curves synthesized from another curve of the other kind.

Both wrappers hold only the name of the curve they read from and resolve it
in the model they are evaluated against, so they follow the wrapped curve
through every recalibration step.
"""
from typing import TYPE_CHECKING, Optional

from ratecurves.errors import MissingPaymentOffsetError

from .base import DiscountCurve, ForwardCurve

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel

DISCOUNT_CURVE_SUFFIX = "_asDiscountCurve"
FORWARD_CURVE_SUFFIX = "_asForwardCurve"


def _require_model(model: Optional["AnalyticModel"], curve_name: str) -> "AnalyticModel":
    if model is None:
        raise ValueError(f"Curve {curve_name} needs a model to resolve its base curve")
    return model


class DiscountCurveFromForwardCurve(DiscountCurve):
    """Discount curve implied by rolling over the forwards of a forward curve.

    Starting at time 0 the discount factor is divided by
    ``1 + f(t) * min(offset, T - t) * scaling`` and ``t`` advances by the
    forward curve's payment offset until the maturity ``T`` is reached.
    """

    def __init__(self, forward_curve_name: str, time_scaling: float = 1.0):
        super().__init__(forward_curve_name + DISCOUNT_CURVE_SUFFIX)
        self.forward_curve_name = forward_curve_name
        self.time_scaling = time_scaling

    def get_value(self, model: Optional["AnalyticModel"], time: float) -> float:
        return self.get_discount_factor(model, time)

    def get_discount_factor(self, model: Optional["AnalyticModel"], maturity: float) -> float:
        model = _require_model(model, self.name)
        forward_curve = model.get_forward_curve(self.forward_curve_name)

        df = 1.0
        time = 0.0
        while time < maturity:
            offset = forward_curve.get_payment_offset(time)
            if offset <= 0:
                raise MissingPaymentOffsetError(
                    f"Forward curve {self.forward_curve_name} has non-positive "
                    f"payment offset {offset} at time {time}"
                )
            forward = forward_curve.get_forward(model, time)
            df /= 1.0 + forward * min(offset, maturity - time) * self.time_scaling
            time += offset
        return df


class ForwardCurveFromDiscountCurve(ForwardCurve):
    """Forward curve read off a discount curve.

    ``f(t, d) = (df(t + o) / df(t + o + d) - 1) / (d * scaling)`` with the
    period offset ``o``. The index tenor ``d`` is used when the caller does
    not pass a period length.
    """

    def __init__(
        self,
        discount_curve_name: str,
        payment_offset: Optional[float] = None,
        daycount_scaling: float = 1.0,
        period_offset: float = 0.0,
    ):
        super().__init__(discount_curve_name + FORWARD_CURVE_SUFFIX)
        self.discount_curve_name = discount_curve_name
        self.payment_offset = payment_offset
        self.daycount_scaling = daycount_scaling
        self.period_offset = period_offset

    @property
    def base_discount_curve_name(self) -> Optional[str]:
        return self.discount_curve_name

    def get_value(self, model: Optional["AnalyticModel"], time: float) -> float:
        return self.get_forward(model, time)

    def get_payment_offset(self, fixing_time: float) -> float:
        if self.payment_offset is None:
            raise MissingPaymentOffsetError(
                f"No index tenor registered for {self.discount_curve_name}; "
                f"{self.name} needs an explicit period length"
            )
        return self.payment_offset

    def get_forward(
        self,
        model: Optional["AnalyticModel"],
        fixing_time: float,
        payment_offset: Optional[float] = None,
    ) -> float:
        if payment_offset is None:
            payment_offset = self.get_payment_offset(fixing_time)
        if payment_offset <= 0:
            raise MissingPaymentOffsetError(
                f"Period length must be positive for {self.name}: {payment_offset}"
            )
        model = _require_model(model, self.name)
        discount_curve = model.get_discount_curve(self.discount_curve_name)

        start = fixing_time + self.period_offset
        df_start = discount_curve.get_discount_factor(model, start)
        df_end = discount_curve.get_discount_factor(model, start + payment_offset)
        return (df_start / df_end - 1.0) / (payment_offset * self.daycount_scaling)
