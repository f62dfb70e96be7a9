"""Tests for curve interpolators."""

import math

import pytest

from ratecurves.interpolation import (
    LinearInterpolator,
    PiecewiseConstantInterpolator,
    StepForwardContinuousInterpolator,
    create_interpolator,
)


def test_linear_interpolates_and_extrapolates_flat() -> None:
    interpolator = LinearInterpolator([1.0, 2.0], [0.02, 0.04])
    assert interpolator.interpolate(1.5) == pytest.approx(0.03)
    assert interpolator.interpolate(0.0) == pytest.approx(0.02)
    assert interpolator.interpolate(5.0) == pytest.approx(0.04)


def test_single_point_is_constant() -> None:
    interpolator = LinearInterpolator([2.0], [0.1])
    assert interpolator.interpolate_many([0.0, 2.0, 7.0]) == [0.1, 0.1, 0.1]


def test_piecewise_constant_holds_left_value() -> None:
    interpolator = PiecewiseConstantInterpolator([0.0, 1.0, 2.0], [0.01, 0.02, 0.03])
    assert interpolator.interpolate(0.5) == 0.01
    assert interpolator.interpolate(1.0) == 0.02
    assert interpolator.interpolate(1.99) == 0.02


def test_step_forward_reproduces_exponential_discounting() -> None:
    times = [0.5, 1.0, 3.0]
    interpolator = StepForwardContinuousInterpolator(times, [math.exp(-0.03 * t) for t in times])
    for t in (0.0, 0.25, 0.75, 2.0, 3.0, 6.0):
        assert interpolator.interpolate(t) == pytest.approx(math.exp(-0.03 * t), rel=1e-12)
    assert interpolator.interpolate_zero_rate(2.0) == pytest.approx(0.03)


def test_step_forward_single_pillar_keeps_zero_rate() -> None:
    interpolator = StepForwardContinuousInterpolator([2.0], [math.exp(-0.04)])
    assert interpolator.interpolate(4.0) == pytest.approx(math.exp(-0.08))


def test_step_forward_rejects_non_positive_discount_factor() -> None:
    with pytest.raises(ValueError):
        StepForwardContinuousInterpolator([1.0, 2.0], [0.98, -0.1])


def test_duplicate_pillars_rejected() -> None:
    with pytest.raises(ValueError):
        LinearInterpolator([1.0, 1.0], [0.1, 0.2])


def test_factory_dispatch_is_case_insensitive() -> None:
    assert isinstance(create_interpolator("linear", [1.0], [1.0]), LinearInterpolator)
    assert isinstance(
        create_interpolator("step_forward", [1.0], [0.9]), StepForwardContinuousInterpolator
    )
    with pytest.raises(ValueError, match="Unknown interpolation method"):
        create_interpolator("CUBIC", [1.0], [1.0])
