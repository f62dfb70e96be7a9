"""Least-squares solver driving calibration products to zero value.

The free variables are the parameter points of the curves under
calibration. Each objective evaluation rebuilds the model from a parameter
vector through copy-on-write clones, so Jacobian columns can be evaluated
concurrently against independent models.
"""

import logging
import math
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from scipy.optimize import least_squares

from ratecurves.config import SolverConfig
from ratecurves.curves.base import InterpolatedCurve
from ratecurves.errors import (
    CurveTypeMismatchError,
    InvalidTimeError,
    MissingCurveError,
    MissingPaymentOffsetError,
    MissingVolatilitySurfaceError,
    MisspecifiedScheduleError,
    SolverError,
    UnsupportedCombinationError,
)
from ratecurves.model import AnalyticModel
from ratecurves.products import AnalyticProduct

logger = logging.getLogger(__name__)

# Raised by a misconfigured model or product; never a property of a trial point
_CONFIGURATION_ERRORS = (
    MissingCurveError,
    CurveTypeMismatchError,
    MissingPaymentOffsetError,
    MisspecifiedScheduleError,
    UnsupportedCombinationError,
    MissingVolatilitySurfaceError,
    InvalidTimeError,
)

_PENALTY_FACTOR = 1e3

# Required accuracy 0 asks for convergence to machine precision
_MACHINE_PRECISION_ACCURACY = math.sqrt(np.finfo(float).eps)


@dataclass(frozen=True)
class SolverResult:
    """Outcome of a solver run.

    Attributes:
        model: Model with the solved parameters
        iterations: Number of objective evaluations used
        accuracy: Root mean square of the product values at the solution
    """

    model: AnalyticModel
    iterations: int
    accuracy: float


class Solver:
    """Find curve parameters for which all products have zero value."""

    def __init__(
        self,
        model: AnalyticModel,
        products: Sequence[AnalyticProduct],
        evaluation_time: float = 0.0,
        accuracy: float = 1e-9,
        config: Optional[SolverConfig] = None,
    ):
        self.model = model
        self.products = list(products)
        self.evaluation_time = evaluation_time
        self.accuracy = accuracy
        self.config = config or SolverConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def solve(self, curve_names: Sequence[str]) -> SolverResult:
        """
        Solve for the parameters of the named curves.

        Args:
            curve_names: Curves whose parameter points are free variables

        Returns:
            SolverResult with the calibrated model

        Raises:
            SolverError: If the accuracy is not reached within the iteration cap

        Trial points at which a curve cannot be built (a non-positive discount
        factor, say) count as rejected steps. Configuration errors propagate.
        """
        curve_names = list(curve_names)
        sizes = [self._parameter_curve(name).get_parameter().size for name in curve_names]
        x0 = np.concatenate(
            [self._parameter_curve(name).get_parameter() for name in curve_names]
        ) if curve_names else np.empty(0)

        # Configuration errors (missing curves, bad schedules) surface here unchanged
        f0 = self._residuals(x0, curve_names, sizes)
        if x0.size == 0:
            return SolverResult(self.model, 0, self._rms(f0))
        if not np.all(np.isfinite(f0)):
            raise SolverError(
                f"Product values at the initial point are not finite: {f0}", 0, math.inf
            )

        # Rejected trial points cost more than any point the solver has accepted
        penalty = _PENALTY_FACTOR * max(1.0, float(np.max(np.abs(f0))))
        cache = {"x": x0.copy(), "f": f0}

        def objective(x: np.ndarray) -> np.ndarray:
            f = self._trial_residuals(x, curve_names, sizes)
            if f is None:
                f = np.full(len(self.products), penalty)
            cache["x"], cache["f"] = x.copy(), f
            return f

        max_workers = self.config.max_workers
        executor: Optional[Executor] = (
            ThreadPoolExecutor(max_workers=max_workers)
            if max_workers is not None and max_workers > 1
            else None
        )

        def jacobian(x: np.ndarray) -> np.ndarray:
            f = cache["f"] if np.array_equal(x, cache["x"]) else objective(x)
            return self._jacobian(x, f, curve_names, sizes, executor)

        method = "lm" if len(self.products) >= x0.size else "trf"
        tolerance = self.config.tolerance
        try:
            result = least_squares(
                objective,
                x0,
                jac=jacobian,
                method=method,
                xtol=tolerance,
                ftol=tolerance,
                gtol=tolerance,
                max_nfev=self.config.max_iterations,
            )
        finally:
            if executor is not None:
                executor.shutdown()

        accuracy = self._rms(result.fun)
        logger.debug(
            "least_squares(%s) finished: status=%s nfev=%s accuracy=%.3e (%s)",
            method,
            result.status,
            result.nfev,
            accuracy,
            result.message,
        )
        if not self._is_accurate(accuracy, result.status):
            raise SolverError(
                f"Solver reached accuracy {accuracy:.3e} after {result.nfev} iterations, "
                f"required {self.accuracy:.3e}: {result.message}",
                int(result.nfev),
                accuracy,
            )
        return SolverResult(
            self._model_for(result.x, curve_names, sizes), int(result.nfev), accuracy
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _parameter_curve(self, name: str) -> InterpolatedCurve:
        curve = self.model.get_curve(name)
        if curve is None:
            raise MissingCurveError(f"Curve {name} not found in model")
        if not isinstance(curve, InterpolatedCurve):
            raise CurveTypeMismatchError(f"Curve {name} carries no parameters")
        return curve

    def _model_for(
        self, x: np.ndarray, curve_names: Sequence[str], sizes: Sequence[int]
    ) -> AnalyticModel:
        parameters = {}
        offset = 0
        for name, size in zip(curve_names, sizes, strict=True):
            parameters[name] = x[offset:offset + size]
            offset += size
        return self.model.get_clone_for_parameter(parameters)

    def _residuals(
        self, x: np.ndarray, curve_names: Sequence[str], sizes: Sequence[int]
    ) -> np.ndarray:
        model = self._model_for(x, curve_names, sizes) if curve_names else self.model
        return np.array(
            [product.get_value(self.evaluation_time, model) for product in self.products],
            dtype=float,
        )

    def _trial_residuals(
        self, x: np.ndarray, curve_names: Sequence[str], sizes: Sequence[int]
    ) -> Optional[np.ndarray]:
        """Product values at a trial point, or None if the point is infeasible."""
        try:
            f = self._residuals(x, curve_names, sizes)
        except _CONFIGURATION_ERRORS:
            raise
        except (ValueError, ZeroDivisionError, OverflowError) as err:
            logger.debug("Rejecting trial point: %s", err)
            return None
        if not np.all(np.isfinite(f)):
            logger.debug("Rejecting trial point with non-finite product values")
            return None
        return f

    def _is_accurate(self, accuracy: float, status: int) -> bool:
        if self.accuracy > 0:
            return accuracy <= self.accuracy
        return status > 0 and accuracy <= _MACHINE_PRECISION_ACCURACY

    def _jacobian(
        self,
        x: np.ndarray,
        f: np.ndarray,
        curve_names: Sequence[str],
        sizes: Sequence[int],
        executor: Optional[Executor],
    ) -> np.ndarray:
        step = self.config.finite_difference_step

        def column(j: int) -> np.ndarray:
            h = step * max(1.0, abs(x[j]))
            # Bump backwards when the forward bump leaves the feasible region
            for signed_step in (h, -h):
                bumped = x.copy()
                bumped[j] += signed_step
                f_bumped = self._trial_residuals(bumped, curve_names, sizes)
                if f_bumped is not None:
                    return (f_bumped - f) / signed_step
            raise SolverError(
                f"Cannot differentiate with respect to parameter {j} at {x[j]}",
                0,
                self._rms(f),
            )

        indices = range(x.size)
        columns = list(executor.map(column, indices)) if executor is not None else [
            column(j) for j in indices
        ]
        return np.column_stack(columns)

    @staticmethod
    def _rms(values: np.ndarray) -> float:
        if values.size == 0:
            return 0.0
        return float(np.sqrt(np.mean(np.square(values))))
