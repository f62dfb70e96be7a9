"""
Resolution of curve names to curves of the kind a product needs.

A name referring to a curve of the other kind is replaced by the name of a
synthesized wrapper curve, which is registered in the returned model. The
model passed in is never changed.
"""
import logging
from typing import TYPE_CHECKING, Optional

from ratecurves.config import CalibrationConfig
from ratecurves.errors import CurveTypeMismatchError, MissingCurveError

from .base import DiscountCurve, ForwardCurve
from .wrappers import DiscountCurveFromForwardCurve, ForwardCurveFromDiscountCurve

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel

logger = logging.getLogger(__name__)


def resolve_discount_curve(
    model: "AnalyticModel", name: str, config: Optional[CalibrationConfig] = None
) -> tuple["AnalyticModel", str]:
    """
    Resolve a name to a discount curve, wrapping a forward curve if needed.

    Args:
        model: Model holding the curves
        name: Curve name given by the caller
        config: Wrapping configuration (defaults to CalibrationConfig())

    Returns:
        Tuple of (model, name): the model, possibly extended by a wrapper curve,
        and the name of the discount curve to use

    Raises:
        MissingCurveError: If no curve of that name exists
        CurveTypeMismatchError: If the curve is a forward curve and wrapping is off
    """
    config = config or CalibrationConfig()
    curve = model.get_curve(name)
    if curve is None:
        raise MissingCurveError(f"Discount curve {name} not found in model")
    if isinstance(curve, DiscountCurve):
        return model, name
    if not isinstance(curve, ForwardCurve):
        raise CurveTypeMismatchError(f"Curve {name} is neither a discount nor a forward curve")
    if not config.wrap_curves:
        raise CurveTypeMismatchError(
            f"Curve {name} is a forward curve; a discount curve is required"
        )

    wrapper = DiscountCurveFromForwardCurve(name)
    if model.get_curve(wrapper.name) is None:
        logger.info("Creating discount curve %s from forward curve %s", wrapper.name, name)
        model = model.add_curves(wrapper)
    return model, wrapper.name


def resolve_forward_curve(
    model: "AnalyticModel", name: Optional[str], config: Optional[CalibrationConfig] = None
) -> tuple["AnalyticModel", Optional[str]]:
    """
    Resolve a name to a forward curve, wrapping a discount curve if needed.

    An empty name stands for a fixed leg and resolves to None. A wrapped
    discount curve gets the index tenor registered for it in
    ``config.index_tenors``.

    Raises:
        MissingCurveError: If no curve of that name exists
        CurveTypeMismatchError: If the curve is a discount curve and wrapping is off
    """
    if not name:
        return model, None
    config = config or CalibrationConfig()
    curve = model.get_curve(name)
    if curve is None:
        raise MissingCurveError(f"Forward curve {name} not found in model")
    if isinstance(curve, ForwardCurve):
        return model, name
    if not isinstance(curve, DiscountCurve):
        raise CurveTypeMismatchError(f"Curve {name} is neither a discount nor a forward curve")
    if not config.wrap_curves:
        raise CurveTypeMismatchError(
            f"Curve {name} is a discount curve; a forward curve is required"
        )

    wrapper = ForwardCurveFromDiscountCurve(
        name,
        payment_offset=config.get_index_tenor(name),
        daycount_scaling=config.wrapped_forward_daycount_scaling,
    )
    if model.get_curve(wrapper.name) is None:
        logger.info(
            "Creating forward curve %s from discount curve %s (index tenor %s)",
            wrapper.name,
            name,
            wrapper.payment_offset,
        )
        model = model.add_curves(wrapper)
    return model, wrapper.name
