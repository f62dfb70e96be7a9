"""Tests for synthesized wrapper curves and curve name resolution."""

import math

import pytest

from ratecurves.config import CalibrationConfig
from ratecurves.curves import (
    DiscountCurveFromForwardCurve,
    ForwardCurveFromDiscountCurve,
    InterpolatedForwardCurve,
    resolve_discount_curve,
    resolve_forward_curve,
)
from ratecurves.errors import CurveTypeMismatchError, MissingCurveError, MissingPaymentOffsetError
from ratecurves.model import AnalyticModel


def test_forward_from_discount_curve(model) -> None:
    wrapper = ForwardCurveFromDiscountCurve("discount")
    model = model.add_curves(wrapper)

    assert wrapper.name == "discount_asForwardCurve"
    assert wrapper.base_discount_curve_name == "discount"
    expected = (math.exp(0.02 * 0.5) - 1.0) / 0.5
    assert wrapper.get_forward(model, 2.0, 0.5) == pytest.approx(expected, rel=1e-12)


def test_forward_from_discount_curve_needs_a_period_length(model) -> None:
    wrapper = ForwardCurveFromDiscountCurve("discount")
    with pytest.raises(MissingPaymentOffsetError):
        wrapper.get_forward(model, 1.0)

    with_tenor = ForwardCurveFromDiscountCurve("discount", payment_offset=0.25)
    assert with_tenor.get_forward(model, 1.0) == pytest.approx(
        (math.exp(0.02 * 0.25) - 1.0) / 0.25
    )


def test_discount_from_forward_curve_rolls_over_forwards() -> None:
    forward = InterpolatedForwardCurve.flat("fwd", 0.03, payment_offset=0.5)
    wrapper = DiscountCurveFromForwardCurve("fwd")
    model = AnalyticModel([forward, wrapper])

    assert wrapper.name == "fwd_asDiscountCurve"
    assert wrapper.get_discount_factor(model, 0.0) == 1.0
    assert wrapper.get_discount_factor(model, 1.0) == pytest.approx(1.0 / 1.015**2)
    assert wrapper.get_discount_factor(model, 0.75) == pytest.approx(
        1.0 / (1.015 * (1.0 + 0.03 * 0.25))
    )


def test_discount_from_forward_curve_without_tenor_fails() -> None:
    forward = InterpolatedForwardCurve.flat("fwd", 0.03)
    wrapper = DiscountCurveFromForwardCurve("fwd")
    model = AnalyticModel([forward, wrapper])
    with pytest.raises(MissingPaymentOffsetError):
        wrapper.get_discount_factor(model, 1.0)


def test_resolution_keeps_matching_kinds(model) -> None:
    assert resolve_discount_curve(model, "discount") == (model, "discount")
    assert resolve_forward_curve(model, "forward") == (model, "forward")
    assert resolve_forward_curve(model, None) == (model, None)
    assert resolve_forward_curve(model, "") == (model, None)


def test_resolution_wraps_once(model) -> None:
    config = CalibrationConfig(index_tenors={"discount": "6M"})
    wrapped, name = resolve_forward_curve(model, "discount", config)

    assert name == "discount_asForwardCurve"
    assert name not in model
    assert wrapped.get_forward_curve(name).get_payment_offset(0.0) == pytest.approx(0.5)

    again, same_name = resolve_forward_curve(wrapped, "discount", config)
    assert same_name == name
    assert again is wrapped

    wrapped, name = resolve_discount_curve(model, "forward")
    assert name == "forward_asDiscountCurve"
    assert isinstance(wrapped.get_discount_curve(name), DiscountCurveFromForwardCurve)


def test_resolution_without_wrapping(model) -> None:
    config = CalibrationConfig(wrap_curves=False)
    with pytest.raises(CurveTypeMismatchError):
        resolve_forward_curve(model, "discount", config)
    with pytest.raises(CurveTypeMismatchError):
        resolve_discount_curve(model, "forward", config)


def test_resolution_of_missing_curve(model) -> None:
    with pytest.raises(MissingCurveError):
        resolve_discount_curve(model, "nope")
    with pytest.raises(MissingCurveError):
        resolve_forward_curve(model, "nope")


def test_wrap_switch_from_environment() -> None:
    assert CalibrationConfig.from_environ({}).wrap_curves is True
    assert CalibrationConfig.from_environ({"RATECURVES_WRAP_CURVES": "false"}).wrap_curves is False
    assert CalibrationConfig.from_environ({"RATECURVES_WRAP_CURVES": "1"}).wrap_curves is True
    assert (
        CalibrationConfig.from_environ({"RATECURVES_WRAP_CURVES": "off"}, wrap_curves=True)
        .wrap_curves
        is True
    )
