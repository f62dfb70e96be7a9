"""Configuration for curve wrapping, valuation policies and the solver."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from ratecurves.conventions.tenors import tenor_to_year_fraction
from ratecurves.conventions.types import EvaluationTimePolicy

WRAP_CURVES_ENV = "RATECURVES_WRAP_CURVES"

_FALSE_STRINGS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SolverConfig:
    """Configuration for the calibration solver.

    Attributes:
        max_iterations: Cap on objective evaluations
        max_workers: Worker threads for Jacobian columns (None or 1 runs serially)
        finite_difference_step: Relative bump used for the forward-difference Jacobian
        tolerance: Step, cost and gradient tolerance handed to the least-squares routine
    """

    max_iterations: int = 1000
    max_workers: Optional[int] = None
    finite_difference_step: float = 1e-8
    tolerance: float = 1e-14


@dataclass(frozen=True)
class CalibrationConfig:
    """Configuration for the calibration engine.

    Attributes:
        wrap_curves: Synthesize wrapper curves when a name refers to the other curve kind
        index_tenors: Tenor of the index each discount curve projects when read as a
            forward curve, keyed by discount curve name (tenor code or years)
        wrapped_forward_daycount_scaling: Accrual scaling of forwards read off a
            discount curve
        time_policy: Evaluation time policy for the products built from specs
        solver: Solver configuration
    """

    wrap_curves: bool = True
    index_tenors: Mapping[str, str | float] = field(default_factory=dict)
    wrapped_forward_daycount_scaling: float = 1.0
    time_policy: EvaluationTimePolicy = EvaluationTimePolicy.INCLUSIVE
    solver: SolverConfig = field(default_factory=SolverConfig)

    def get_index_tenor(self, curve_name: str) -> Optional[float]:
        """Tenor in years registered for a curve name, or None."""
        tenor = self.index_tenors.get(curve_name)
        if tenor is None:
            return None
        return tenor_to_year_fraction(tenor)

    @classmethod
    def from_environ(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "CalibrationConfig":
        """Build a config whose wrapping switch is read from the environment.

        ``RATECURVES_WRAP_CURVES`` set to 0/false/no/off disables wrapping;
        unset keeps the default. Keyword arguments override the remaining fields.
        """
        environ = os.environ if environ is None else environ
        raw = environ.get(WRAP_CURVES_ENV)
        if raw is not None and "wrap_curves" not in overrides:
            overrides["wrap_curves"] = raw.strip().lower() not in _FALSE_STRINGS
        return cls(**overrides)
