"""Discount, forward and synthesized wrapper curves."""

from .base import Curve, CurvePoint, DiscountCurve, ForwardCurve, InterpolatedCurve
from .discount import InterpolatedDiscountCurve
from .forward import InterpolatedForwardCurve
from .resolver import resolve_discount_curve, resolve_forward_curve
from .wrappers import (
    DISCOUNT_CURVE_SUFFIX,
    FORWARD_CURVE_SUFFIX,
    DiscountCurveFromForwardCurve,
    ForwardCurveFromDiscountCurve,
)

__all__ = [
    "Curve",
    "CurvePoint",
    "DISCOUNT_CURVE_SUFFIX",
    "DiscountCurve",
    "DiscountCurveFromForwardCurve",
    "FORWARD_CURVE_SUFFIX",
    "ForwardCurve",
    "ForwardCurveFromDiscountCurve",
    "InterpolatedCurve",
    "InterpolatedDiscountCurve",
    "InterpolatedForwardCurve",
    "resolve_discount_curve",
    "resolve_forward_curve",
]
