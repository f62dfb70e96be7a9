"""
Swaption volatility surface contract and quote conversion.
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence

from ratecurves.formulas import (
    bachelier_implied_volatility,
    bachelier_option_value,
    black_implied_volatility,
    black_option_value,
)


class QuotingConvention(Enum):
    """How a swaption quote is expressed."""

    VOLATILITY_LOGNORMAL = "VOLATILITY_LOGNORMAL"
    VOLATILITY_NORMAL = "VOLATILITY_NORMAL"
    PRICE = "PRICE"


class InterpolationMethod(Enum):
    """Lookup of normal volatilities between grid nodes."""

    NONE = "NONE"
    TRILINEAR = "TRILINEAR"


def convert_volatility_quote(
    quote: float,
    input_shift: float,
    input_convention: QuotingConvention,
    output_shift: float,
    output_convention: QuotingConvention,
    forward: float,
    strike: float,
    option_maturity: float,
    option_discount_factor: float,
) -> float:
    """
    Convert a swaption quote between conventions through the option price.

    Shifts apply to forward and strike of the lognormal and normal models;
    a shift on a price quote is meaningless and rejected.

    Args:
        quote: Input quote
        input_shift: Shift of the input quote
        input_convention: Convention of the input quote
        output_shift: Shift of the output quote
        output_convention: Convention of the output quote
        forward: Forward swap rate
        strike: Option strike
        option_maturity: Option maturity in years
        option_discount_factor: Payoff unit used for prices

    Returns:
        Quote in the output convention
    """
    if input_convention is QuotingConvention.PRICE and input_shift != 0.0:
        raise ValueError(f"Price quotes cannot carry a shift ({input_shift})")
    if input_shift == output_shift and input_convention is output_convention:
        return quote

    if input_convention is QuotingConvention.PRICE:
        option_value = quote
    elif input_convention is QuotingConvention.VOLATILITY_LOGNORMAL:
        option_value = black_option_value(
            forward + input_shift, quote, option_maturity, strike + input_shift,
            option_discount_factor,
        )
    else:
        option_value = bachelier_option_value(
            forward + input_shift, quote, option_maturity, strike + input_shift,
            option_discount_factor,
        )

    if output_convention is QuotingConvention.PRICE:
        return option_value
    if output_convention is QuotingConvention.VOLATILITY_LOGNORMAL:
        return black_implied_volatility(
            forward + output_shift, option_maturity, strike + output_shift,
            option_discount_factor, option_value,
        )
    return bachelier_implied_volatility(
        forward + output_shift, option_maturity, strike + output_shift,
        option_discount_factor, option_value,
    )


class SwaptionVolatilitySurface(ABC):
    """Normal volatilities by option maturity, swap length and strike offset."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def get_option_maturities(self) -> Sequence[float]:
        pass

    @abstractmethod
    def get_swap_lengths(self) -> Sequence[float]:
        pass

    @abstractmethod
    def get_strike_offsets(self) -> Sequence[float]:
        pass

    @abstractmethod
    def get_normal_volatility(
        self, option_maturity: float, swap_length: float, strike_offset: float
    ) -> float:
        """Normal volatility for a strike at ``forward + strike_offset``."""
        pass

    @abstractmethod
    def get_forward_swap_rate(self, option_maturity: float, swap_length: float) -> float:
        pass

    @abstractmethod
    def get_option_discount_factor(self, option_maturity: float) -> float:
        pass

    def get_volatility(
        self,
        option_maturity: float,
        swap_length: float,
        strike_offset: float,
        output_shift: float = 0.0,
        output_convention: QuotingConvention = QuotingConvention.VOLATILITY_NORMAL,
    ) -> float:
        """Quote of a grid swaption in another convention."""
        forward = self.get_forward_swap_rate(option_maturity, swap_length)
        return convert_volatility_quote(
            self.get_normal_volatility(option_maturity, swap_length, strike_offset),
            0.0,
            QuotingConvention.VOLATILITY_NORMAL,
            output_shift,
            output_convention,
            forward,
            forward + strike_offset,
            option_maturity,
            self.get_option_discount_factor(option_maturity),
        )

    def get_smile(
        self,
        option_maturity: float,
        swap_length: float,
        output_shift: float = 0.0,
        output_convention: QuotingConvention = QuotingConvention.VOLATILITY_NORMAL,
    ) -> list[float]:
        """Quotes across all strike offsets of one grid swaption."""
        return [
            self.get_volatility(
                option_maturity, swap_length, offset, output_shift, output_convention
            )
            for offset in self.get_strike_offsets()
        ]
