"""Tests for swaption valuation against a volatility cube."""

import math

import pytest
from scipy.stats import norm

from ratecurves.errors import InvalidTimeError, MissingVolatilitySurfaceError
from ratecurves.formulas import bachelier_option_value
from ratecurves.products import RateSwap, SwapLeg, Swaption
from ratecurves.schedule import regular_schedule
from ratecurves.volatility import InterpolationMethod, SwaptionMarketData


def underlying_swap() -> RateSwap:
    schedule = regular_schedule(1.0, 2, 1.0)
    return RateSwap(
        SwapLeg(schedule, None, 0.0, "discount"),
        SwapLeg(schedule, "forward", 0.0, "discount"),
    )


def surface(interpolation_method=InterpolationMethod.NONE) -> SwaptionMarketData:
    return SwaptionMarketData(
        "vol",
        option_maturities=[1.0],
        swap_lengths=[2.0],
        strike_offsets=[-0.01, 0.0, 0.01],
        normal_volatilities=[[[0.012]], [[0.01]], [[0.011]]],
        forward_swap_rates=[[0.025]],
        option_discount_factors=[math.exp(-0.02)],
        interpolation_method=interpolation_method,
    )


def test_atm_swaption_value(model) -> None:
    model = model.add_volatility_surfaces(surface())
    swaption = Swaption("vol", underlying_swap(), 1.0, 0.0, "discount")

    assert swaption.swap_length == 2.0
    expected = math.exp(-0.02) * 0.01 * norm.pdf(0.0)
    assert swaption.get_value(0.0, model) == pytest.approx(expected, rel=1e-12)


def test_strike_offset_selects_volatility(model) -> None:
    model = model.add_volatility_surfaces(surface(InterpolationMethod.TRILINEAR))
    atm = Swaption("vol", underlying_swap(), 1.0, 0.0, "discount")
    out_of_the_money = atm.clone_with_strike_offset(0.005)

    forward = underlying_swap().get_forward_swap_rate(model)
    expected = bachelier_option_value(forward, 0.0105, 1.0, forward + 0.005, math.exp(-0.02))

    assert out_of_the_money.strike_offset == 0.005
    assert out_of_the_money.get_value(0.0, model) == pytest.approx(expected, rel=1e-12)
    assert out_of_the_money.get_value(0.0, model) < atm.get_value(0.0, model)


def test_expired_swaption_cannot_be_valued(model) -> None:
    model = model.add_volatility_surfaces(surface())
    swaption = Swaption("vol", underlying_swap(), 1.0, 0.0, "discount")
    with pytest.raises(InvalidTimeError):
        swaption.get_value(1.0, model)


def test_missing_surface(model) -> None:
    swaption = Swaption("vol", underlying_swap(), 1.0, 0.0, "discount")
    with pytest.raises(MissingVolatilitySurfaceError):
        swaption.get_value(0.0, model)


def test_surface_from_atm_swaptions(model) -> None:
    atm = Swaption("vol", underlying_swap(), 1.0, 0.0, "discount")
    cube = SwaptionMarketData.from_swaptions(
        "vol", [atm], model, "discount", [0.0], [[[0.01]]]
    )

    assert cube.get_option_maturities() == [1.0]
    assert cube.get_swap_lengths() == [2.0]
    assert cube.get_forward_swap_rate(1.0, 2.0) == pytest.approx(0.025, rel=1e-12)
    assert cube.get_option_discount_factor(1.0) == pytest.approx(math.exp(-0.02))


def test_surface_from_swaptions_needs_atm(model) -> None:
    otm = Swaption("vol", underlying_swap(), 1.0, 0.01, "discount")
    with pytest.raises(ValueError):
        SwaptionMarketData.from_swaptions("vol", [otm], model, "discount", [0.0], [[[0.01]]])
