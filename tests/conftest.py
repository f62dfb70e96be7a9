"""Shared curves and models for the test suite."""

import math

import pytest

from ratecurves.curves import InterpolatedDiscountCurve, InterpolatedForwardCurve
from ratecurves.model import AnalyticModel

DISCOUNT_RATE = 0.02
FORWARD_RATE = 0.025


def flat_df(t: float, rate: float = DISCOUNT_RATE) -> float:
    return math.exp(-rate * t)


@pytest.fixture
def discount_curve() -> InterpolatedDiscountCurve:
    """Discount factors exp(-0.02 t) on yearly pillars."""
    return InterpolatedDiscountCurve.flat("discount", DISCOUNT_RATE, times=range(1, 11))


@pytest.fixture
def forward_curve() -> InterpolatedForwardCurve:
    return InterpolatedForwardCurve.flat("forward", FORWARD_RATE, payment_offset="1Y")


@pytest.fixture
def model(discount_curve, forward_curve) -> AnalyticModel:
    return AnalyticModel([discount_curve, forward_curve])
