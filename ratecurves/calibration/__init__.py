"""Curve calibration: specs, product factory, solver and engine."""

from .engine import CalibratedCurves, CalibrationState
from .factory import build_calibration_product
from .solver import Solver, SolverResult
from .spec import CalibrationSpec, InstrumentType

__all__ = [
    "CalibratedCurves",
    "CalibrationSpec",
    "CalibrationState",
    "InstrumentType",
    "Solver",
    "SolverResult",
    "build_calibration_product",
]
