"""
Construction of calibration products from specs.
"""
import logging
from typing import Callable, Optional

from ratecurves.config import CalibrationConfig
from ratecurves.curves.resolver import resolve_discount_curve, resolve_forward_curve
from ratecurves.errors import InvalidCalibrationSpecError
from ratecurves.model import AnalyticModel
from ratecurves.products import (
    AnalyticProduct,
    Deposit,
    ForwardRateAgreement,
    Swap,
    SwapLeg,
    SwapLegWithResetting,
)

from .spec import CalibrationSpec, InstrumentType

logger = logging.getLogger(__name__)


class _ResolvedSpec:
    """Spec fields with curve names resolved against a model."""

    def __init__(self, spec: CalibrationSpec, model: AnalyticModel, config: CalibrationConfig):
        self.spec = spec
        self.config = config
        model, self.discount_receiver = resolve_discount_curve(
            model, spec.discount_curve_receiver_name, config
        )
        model, self.forward_receiver = resolve_forward_curve(
            model, spec.forward_curve_receiver_name, config
        )
        self.discount_payer: Optional[str] = None
        self.forward_payer: Optional[str] = None
        if not spec.instrument_type.is_single_leg:
            if spec.schedule_payer is None or spec.discount_curve_payer_name is None:
                raise InvalidCalibrationSpecError(
                    f"Spec {spec.symbol} of type {spec.instrument_type.value} needs a payer "
                    "schedule and a payer discount curve"
                )
            model, self.discount_payer = resolve_discount_curve(
                model, spec.discount_curve_payer_name, config
            )
            model, self.forward_payer = resolve_forward_curve(
                model, spec.forward_curve_payer_name, config
            )
        self.model = model

    def leg_receiver(self, reset_curve_name: Optional[str] = None) -> SwapLeg:
        if reset_curve_name is not None:
            return self._resetting_leg(
                self.spec.schedule_receiver,
                self.forward_receiver,
                self.spec.spread_receiver,
                self.discount_receiver,
                reset_curve_name,
            )
        return SwapLeg(
            self.spec.schedule_receiver,
            self.forward_receiver,
            self.spec.spread_receiver,
            self.discount_receiver,
            is_notional_exchanged=True,
            time_policy=self.config.time_policy,
        )

    def leg_payer(self, reset_curve_name: Optional[str] = None) -> SwapLeg:
        if reset_curve_name is not None:
            return self._resetting_leg(
                self.spec.schedule_payer,
                self.forward_payer,
                self.spec.spread_payer,
                self.discount_payer,
                reset_curve_name,
            )
        return SwapLeg(
            self.spec.schedule_payer,
            self.forward_payer,
            self.spec.spread_payer,
            self.discount_payer,
            is_notional_exchanged=True,
            time_policy=self.config.time_policy,
        )

    def _resetting_leg(self, schedule, forward, spread, discount, reset_curve_name) -> SwapLeg:
        if reset_curve_name == discount:
            raise InvalidCalibrationSpecError(
                f"Spec {self.spec.symbol} resets notional off its own discount curve {discount}"
            )
        return SwapLegWithResetting(
            schedule, forward, spread, discount, reset_curve_name,
            is_notional_exchanged=True, time_policy=self.config.time_policy,
        )

    def require_forward_receiver(self) -> str:
        if self.forward_receiver is None:
            raise InvalidCalibrationSpecError(
                f"Spec {self.spec.symbol} of type {self.spec.instrument_type.value} "
                "needs a receiver forward curve"
            )
        return self.forward_receiver


def _deposit(resolved: _ResolvedSpec) -> AnalyticProduct:
    spec = resolved.spec
    return Deposit(
        spec.schedule_receiver, spec.spread_receiver, resolved.discount_receiver,
        time_policy=resolved.config.time_policy,
    )


def _fra(resolved: _ResolvedSpec) -> AnalyticProduct:
    spec = resolved.spec
    return ForwardRateAgreement(
        spec.schedule_receiver, spec.spread_receiver, resolved.require_forward_receiver(),
        resolved.discount_receiver, time_policy=resolved.config.time_policy,
    )


def _future(resolved: _ResolvedSpec) -> AnalyticProduct:
    # Quote is a price; convexity is neglected
    spec = resolved.spec
    return ForwardRateAgreement(
        spec.schedule_receiver, 1.0 - spec.spread_receiver / 100.0,
        resolved.require_forward_receiver(), resolved.discount_receiver,
        time_policy=resolved.config.time_policy,
    )


def _swapleg(resolved: _ResolvedSpec) -> AnalyticProduct:
    return resolved.leg_receiver()


def _swap(resolved: _ResolvedSpec) -> AnalyticProduct:
    return Swap(resolved.leg_receiver(), resolved.leg_payer())


def _swap_with_reset_on_receiver(resolved: _ResolvedSpec) -> AnalyticProduct:
    return Swap(resolved.leg_receiver(reset_curve_name=resolved.discount_payer), resolved.leg_payer())


def _swap_with_reset_on_payer(resolved: _ResolvedSpec) -> AnalyticProduct:
    return Swap(resolved.leg_receiver(), resolved.leg_payer(reset_curve_name=resolved.discount_receiver))


PRODUCT_BUILDERS: dict[InstrumentType, Callable[[_ResolvedSpec], AnalyticProduct]] = {
    InstrumentType.DEPOSIT: _deposit,
    InstrumentType.FRA: _fra,
    InstrumentType.FUTURE: _future,
    InstrumentType.SWAPLEG: _swapleg,
    InstrumentType.SWAP: _swap,
    InstrumentType.SWAP_WITH_RESET_ON_RECEIVER: _swap_with_reset_on_receiver,
    InstrumentType.SWAP_WITH_RESET_ON_PAYER: _swap_with_reset_on_payer,
}


def build_calibration_product(
    spec: CalibrationSpec,
    model: AnalyticModel,
    config: Optional[CalibrationConfig] = None,
) -> tuple[AnalyticModel, AnalyticProduct]:
    """
    Build the product a spec describes.

    Curve names are resolved first; wrapper curves synthesized on the way are
    registered in the returned model.

    Args:
        spec: Calibration spec
        model: Model holding the referenced curves
        config: Wrapping and valuation configuration

    Returns:
        Tuple of (model, product)
    """
    config = config or CalibrationConfig()
    resolved = _ResolvedSpec(spec, model, config)
    product = PRODUCT_BUILDERS[spec.instrument_type](resolved)
    logger.debug("Built %s for %s (%s)", type(product).__name__, spec.symbol, spec.instrument_type.value)
    return resolved.model, product
