"""
European swaption priced with the Bachelier formula.
"""
from typing import TYPE_CHECKING

from ratecurves.errors import InvalidTimeError
from ratecurves.formulas import bachelier_option_value

from .base import AnalyticProduct
from .swap import RateSwap

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


class Swaption(AnalyticProduct):
    """Option to enter a rate swap at ``forward swap rate + strike offset``.

    The normal volatility comes from the model's swaption volatility surface
    at (option maturity, swap length, strike offset).
    """

    def __init__(
        self,
        volatility_surface_name: str,
        underlying_swap: RateSwap,
        option_maturity: float,
        strike_offset: float,
        discount_curve_name: str,
    ):
        self.volatility_surface_name = volatility_surface_name
        self.underlying_swap = underlying_swap
        self.option_maturity = option_maturity
        self.strike_offset = strike_offset
        self.discount_curve_name = discount_curve_name

    @property
    def swap_length(self) -> float:
        return self.underlying_swap.swap_maturity - self.underlying_swap.swap_start

    def get_value(self, evaluation_time: float, model: "AnalyticModel") -> float:
        if evaluation_time >= self.option_maturity:
            raise InvalidTimeError(
                f"Evaluation time {evaluation_time} is not before option maturity "
                f"{self.option_maturity}"
            )
        surface = model.get_volatility_surface(self.volatility_surface_name)
        discount_curve = model.get_discount_curve(self.discount_curve_name)

        discount_factor = discount_curve.get_discount_factor(model, self.option_maturity)
        forward = self.underlying_swap.get_forward_swap_rate(model)
        strike = forward + self.strike_offset

        normal_volatility = surface.get_normal_volatility(
            self.option_maturity, self.swap_length, self.strike_offset
        )
        return bachelier_option_value(
            forward, normal_volatility, self.option_maturity, strike, discount_factor
        )

    def clone_with_strike_offset(self, strike_offset: float) -> "Swaption":
        """Same swaption at another strike offset."""
        return Swaption(
            self.volatility_surface_name,
            self.underlying_swap,
            self.option_maturity,
            strike_offset,
            self.discount_curve_name,
        )
