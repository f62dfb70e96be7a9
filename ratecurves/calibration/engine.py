"""
Calibration of curves to a list of calibration specs.
"""
import logging
import re
from enum import Enum
from typing import Iterable, Mapping, Optional, Pattern

import pandas as pd

from ratecurves.config import CalibrationConfig
from ratecurves.curves.base import Curve, DiscountCurve, InterpolatedCurve
from ratecurves.errors import (
    CalibrationFailedError,
    CalibrationStateError,
    InvalidCalibrationSpecError,
    MissingCalibrationCurveError,
    SolverError,
)
from ratecurves.model import AnalyticModel
from ratecurves.products import AnalyticProduct

from .factory import build_calibration_product
from .results import calibration_results_frame, curve_points_frame
from .solver import Solver
from .spec import CalibrationSpec, InstrumentType

logger = logging.getLogger(__name__)

DISCOUNT_CURVE_SEED = 1.0
FORWARD_CURVE_SEED = 0.1


class CalibrationState(Enum):
    BUILDING = "BUILDING"
    CALIBRATED = "CALIBRATED"


class CalibratedCurves:
    """
    Curves calibrated to a list of calibration specs.

    Every spec contributes one product and one parameter point on its
    calibration curve; the solver then moves all parameter points until
    every product has zero value. Curves already present in the starting
    model keep their points, calibrated curves gain the new ones.

    Examples:
        >>> curves = CalibratedCurves(specs, AnalyticModel([discount, forward]))
        >>> curves.get_curve("discount").get_discount_factor(curves.model, 5.0)
    """

    def __init__(
        self,
        calibration_specs: Iterable[CalibrationSpec],
        calibration_model: Optional[AnalyticModel] = None,
        evaluation_time: float = 0.0,
        calibration_accuracy: float = 1e-9,
        config: Optional[CalibrationConfig] = None,
        calibrate: bool = True,
    ):
        """
        Initialize and, unless ``calibrate`` is False, calibrate.

        Args:
            calibration_specs: Specs in calibration order
            calibration_model: Model holding the curves to extend (default: empty)
            evaluation_time: Time at which products must have zero value
            calibration_accuracy: Required root mean square of the product values;
                0 asks for convergence to machine precision
            config: Wrapping, valuation and solver configuration
            calibrate: Calibrate right away; otherwise add specs and call calibrate()
        """
        self.evaluation_time = evaluation_time
        self.calibration_accuracy = calibration_accuracy
        self.config = config or CalibrationConfig()

        self._seed_model = calibration_model or AnalyticModel()
        self._model = self._seed_model
        self._specs: list[CalibrationSpec] = []
        self._products: list[tuple[str, AnalyticProduct]] = []
        # Insertion ordered set of curve names
        self._curves_to_calibrate: dict[str, None] = {}
        self._state = CalibrationState.BUILDING

        self.last_number_of_iterations = 0
        self.last_accuracy = float("nan")

        for spec in calibration_specs:
            self.add(spec)
        if calibrate:
            self.calibrate()

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def add(self, spec: CalibrationSpec) -> InstrumentType:
        """Register a spec: build its product and add its calibration point."""
        if self._state is not CalibrationState.BUILDING:
            raise CalibrationStateError("Cannot add specs to calibrated curves")

        model, product = build_calibration_product(spec, self._model, self.config)

        name = spec.calibration_curve_name
        curve = model.get_curve(name)
        if curve is None:
            raise MissingCalibrationCurveError(
                f"Calibration curve {name} of spec {spec.symbol} not found in model"
            )
        if not isinstance(curve, InterpolatedCurve):
            raise InvalidCalibrationSpecError(
                f"Calibration curve {name} of spec {spec.symbol} is a "
                f"{type(curve).__name__} and carries no points"
            )
        seed = DISCOUNT_CURVE_SEED if isinstance(curve, DiscountCurve) else FORWARD_CURVE_SEED
        curve = curve.clone_with_point(spec.calibration_time, seed, is_parameter=True)

        self._model = model.add_curves(curve)
        self._specs.append(spec)
        self._products.append((spec.symbol, product))
        self._curves_to_calibrate.pop(name, None)
        self._curves_to_calibrate[name] = None

        logger.debug(
            "Added %s (%s): point %.6f on %s",
            spec.symbol,
            spec.instrument_type.value,
            spec.calibration_time,
            name,
        )
        return spec.instrument_type

    def calibrate(self, accuracy: Optional[float] = None) -> AnalyticModel:
        """
        Solve for the parameter points of all calibration curves.

        Returns:
            The calibrated model

        Raises:
            CalibrationFailedError: If the solver does not reach the accuracy
        """
        if self._state is not CalibrationState.BUILDING:
            raise CalibrationStateError("Curves are already calibrated")
        accuracy = self.calibration_accuracy if accuracy is None else accuracy

        solver = Solver(
            self._model,
            [product for _, product in self._products],
            self.evaluation_time,
            accuracy,
            self.config.solver,
        )
        try:
            result = solver.solve(list(self._curves_to_calibrate))
        except SolverError as err:
            self.last_number_of_iterations = err.iterations
            self.last_accuracy = err.accuracy
            raise CalibrationFailedError(err.iterations, err.accuracy, str(err)) from err

        self._model = result.model
        self.last_number_of_iterations = result.iterations
        self.last_accuracy = result.accuracy
        self._state = CalibrationState.CALIBRATED
        logger.info(
            "Calibrated %d curves to %d products in %d iterations (accuracy %.3e)",
            len(self._curves_to_calibrate),
            len(self._products),
            result.iterations,
            result.accuracy,
        )
        return self._model

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def state(self) -> CalibrationState:
        return self._state

    @property
    def model(self) -> AnalyticModel:
        return self._model

    @property
    def calibration_specs(self) -> tuple[CalibrationSpec, ...]:
        return tuple(self._specs)

    @property
    def calibration_products(self) -> tuple[tuple[str, AnalyticProduct], ...]:
        """(symbol, product) pairs in spec order."""
        return tuple(self._products)

    @property
    def calibration_curve_names(self) -> tuple[str, ...]:
        return tuple(self._curves_to_calibrate)

    def get_curve(self, name: str) -> Optional[Curve]:
        return self._model.get_curve(name)

    def get_calibration_product_for_symbol(self, symbol: str) -> Optional[AnalyticProduct]:
        """Product of the first spec with this symbol, or None."""
        for product_symbol, product in self._products:
            if product_symbol == symbol:
                return product
        return None

    def get_calibration_product_for_spec(
        self, spec: CalibrationSpec
    ) -> tuple[AnalyticModel, AnalyticProduct]:
        """Product a spec describes, with the model to value it in.

        The returned model is this engine's model plus any wrapper curves the
        product needs; the engine's own model is left as it is.
        """
        return build_calibration_product(spec, self._model, self.config)

    def get_results_frame(self) -> pd.DataFrame:
        """One row per calibration product with its value in the current model."""
        return calibration_results_frame(
            self._specs, self._products, self._model, self.evaluation_time
        )

    def get_curves_frame(self) -> pd.DataFrame:
        """Points of all calibration curves in the current model."""
        return curve_points_frame(self._model, self._curves_to_calibrate)

    # ------------------------------------------------------------------
    # Shifted clones
    # ------------------------------------------------------------------
    def get_clone_shifted(
        self, symbol: str | Pattern[str], shift: float
    ) -> "CalibratedCurves":
        """
        Independent calibration with the quotes of matching specs shifted.

        Args:
            symbol: Exact symbol, or a compiled pattern that must match the whole symbol
            shift: Amount added to the quote of each matching spec

        Returns:
            New calibrated curves started from the same initial model
        """
        if isinstance(symbol, re.Pattern):
            def matches(spec_symbol: str) -> bool:
                return symbol.fullmatch(spec_symbol) is not None
        else:
            def matches(spec_symbol: str) -> bool:
                return spec_symbol == symbol

        return self._clone_with_specs(
            spec.get_clone_shifted(shift) if matches(spec.symbol) else spec
            for spec in self._specs
        )

    def get_clone_shifted_for_regexp(self, pattern: str, shift: float) -> "CalibratedCurves":
        return self.get_clone_shifted(re.compile(pattern), shift)

    def get_clone_shifted_for_map(self, shifts: Mapping[str, float]) -> "CalibratedCurves":
        """Independent calibration with per-symbol shifts."""
        return self._clone_with_specs(
            spec.get_clone_shifted(shifts[spec.symbol]) if spec.symbol in shifts else spec
            for spec in self._specs
        )

    def _clone_with_specs(self, specs: Iterable[CalibrationSpec]) -> "CalibratedCurves":
        return CalibratedCurves(
            list(specs),
            self._seed_model,
            self.evaluation_time,
            self.calibration_accuracy,
            self.config,
        )

    def __repr__(self) -> str:
        return (
            f"CalibratedCurves(specs={len(self._specs)}, "
            f"curves={list(self._curves_to_calibrate)}, state={self._state.value})"
        )
