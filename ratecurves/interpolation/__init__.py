"""Interpolation methods for curve values."""

from .base import Interpolator
from .factory import INTERPOLATION_METHODS, create_interpolator
from .linear import LinearInterpolator, PiecewiseConstantInterpolator
from .step_forward import StepForwardContinuousInterpolator

__all__ = [
    "INTERPOLATION_METHODS",
    "Interpolator",
    "LinearInterpolator",
    "PiecewiseConstantInterpolator",
    "StepForwardContinuousInterpolator",
    "create_interpolator",
]
