"""Tests for the copy-on-write model."""

import pytest

from ratecurves.curves import CurvePoint, InterpolatedDiscountCurve, InterpolatedForwardCurve
from ratecurves.errors import (
    CurveTypeMismatchError,
    MissingCurveError,
    MissingVolatilitySurfaceError,
)
from ratecurves.model import AnalyticModel


def test_add_curves_returns_new_model_sharing_untouched_curves(model, discount_curve) -> None:
    extra = InterpolatedForwardCurve.flat("forward-3M", 0.01, payment_offset="3M")
    extended = model.add_curves(extra)

    assert "forward-3M" in extended
    assert "forward-3M" not in model
    assert extended.get_curve("discount") is discount_curve


def test_replacing_a_curve_keeps_old_model_valid(model) -> None:
    replacement = InterpolatedDiscountCurve.flat("discount", 0.05)
    replaced = model.add_curves(replacement)

    assert replaced.get_discount_curve("discount") is replacement
    assert model.get_discount_curve("discount") is not replacement


def test_typed_lookups(model) -> None:
    assert model.get_curve("missing") is None
    with pytest.raises(MissingCurveError):
        model.get_discount_curve("missing")
    with pytest.raises(CurveTypeMismatchError):
        model.get_discount_curve("forward")
    with pytest.raises(CurveTypeMismatchError):
        model.get_forward_curve("discount")
    with pytest.raises(MissingVolatilitySurfaceError):
        model.get_volatility_surface("swaption-vol")


def test_clone_for_parameter_replaces_named_curves_only(model) -> None:
    curve = InterpolatedDiscountCurve(
        "calibrated", [CurvePoint(0.0, 1.0), CurvePoint(1.0, 1.0, is_parameter=True)]
    )
    base = model.add_curves(curve)
    clone = base.get_clone_for_parameter({"calibrated": [0.97]})

    assert clone.get_curve("calibrated").values == [1.0, 0.97]
    assert base.get_curve("calibrated").values == [1.0, 1.0]
    assert clone.get_curve("discount") is base.get_curve("discount")

    with pytest.raises(MissingCurveError):
        base.get_clone_for_parameter({"nope": [1.0]})


def test_empty_model() -> None:
    model = AnalyticModel()
    assert dict(model.curves) == {}
    assert dict(model.volatility_surfaces) == {}
