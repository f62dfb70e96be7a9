"""Tests for discount and forward curves."""

import math

import numpy as np
import pytest

from ratecurves.curves import CurvePoint, InterpolatedDiscountCurve, InterpolatedForwardCurve
from ratecurves.errors import MissingPaymentOffsetError


def test_flat_discount_curve_matches_exponential(discount_curve, model) -> None:
    for t in (0.0, 0.5, 1.0, 4.5, 12.0):
        assert discount_curve.get_discount_factor(model, t) == pytest.approx(
            math.exp(-0.02 * t), rel=1e-12
        )
    assert discount_curve.get_zero_rate(model, 3.0) == pytest.approx(0.02)


def test_clone_with_point_leaves_original_untouched() -> None:
    curve = InterpolatedDiscountCurve("d", [CurvePoint(0.0, 1.0)])
    clone = curve.clone_with_point(2.0, 0.95, is_parameter=True)

    assert len(curve.points) == 1
    assert clone.times == [0.0, 2.0]
    assert clone.name == curve.name
    assert clone.get_discount_factor(None, 2.0) == pytest.approx(0.95)


def test_points_are_kept_sorted_and_unique() -> None:
    curve = InterpolatedForwardCurve("f").clone_with_point(3.0, 0.1).clone_with_point(1.0, 0.2)
    assert curve.times == [1.0, 3.0]
    with pytest.raises(ValueError, match="Duplicate"):
        curve.clone_with_point(3.0, 0.3)


def test_parameters_only_cover_flagged_points() -> None:
    curve = InterpolatedDiscountCurve.from_discount_factors(
        "d", [0.0, 1.0, 2.0], [1.0, 0.99, 0.97], is_parameter=[False, True, True]
    )
    np.testing.assert_allclose(curve.get_parameter(), [0.99, 0.97])

    shifted = curve.clone_for_parameter([0.98, 0.96])
    assert shifted.values == [1.0, 0.98, 0.96]
    assert curve.values == [1.0, 0.99, 0.97]
    assert [p.is_parameter for p in shifted.points] == [False, True, True]

    with pytest.raises(ValueError):
        curve.clone_for_parameter([0.5])


def test_empty_curve_cannot_be_evaluated() -> None:
    with pytest.raises(ValueError, match="no points"):
        InterpolatedForwardCurve("f").get_forward(None, 1.0)


def test_forward_curve_returns_stored_forward_for_any_period(forward_curve, model) -> None:
    assert forward_curve.get_forward(model, 3.0) == pytest.approx(0.025)
    assert forward_curve.get_forward(model, 3.0, 0.25) == pytest.approx(0.025)
    assert forward_curve.get_payment_offset(3.0) == pytest.approx(1.0)
    assert forward_curve.base_discount_curve_name is None


def test_forward_curve_without_tenor_has_no_payment_offset() -> None:
    curve = InterpolatedForwardCurve.flat("f", 0.01)
    with pytest.raises(MissingPaymentOffsetError):
        curve.get_payment_offset(0.0)


def test_forward_curve_tenor_codes() -> None:
    assert InterpolatedForwardCurve("f", payment_offset="6M").payment_offset == pytest.approx(0.5)
    assert InterpolatedForwardCurve("f", payment_offset=0.25).payment_offset == 0.25


def test_curve_name_required() -> None:
    with pytest.raises(ValueError):
        InterpolatedDiscountCurve("")
