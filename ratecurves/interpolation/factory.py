"""
Factory for creating interpolators by method name.
"""
from typing import Sequence

from .base import Interpolator
from .linear import LinearInterpolator, PiecewiseConstantInterpolator
from .step_forward import StepForwardContinuousInterpolator

INTERPOLATION_METHODS = {
    "LINEAR": LinearInterpolator,
    "PIECEWISE_CONSTANT": PiecewiseConstantInterpolator,
    "STEP_FORWARD": StepForwardContinuousInterpolator,
    "STEP_FORWARD_CONTINUOUS": StepForwardContinuousInterpolator,
}


def create_interpolator(method: str,
                        pillars: Sequence[float],
                        values: Sequence[float]) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: Interpolation method name (case-insensitive)
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()
    if method_upper not in INTERPOLATION_METHODS:
        raise ValueError(f"Unknown interpolation method: {method}. "
                         f"Available: {', '.join(INTERPOLATION_METHODS)}")
    return INTERPOLATION_METHODS[method_upper](pillars, values)
