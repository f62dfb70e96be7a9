"""
Interpolated forward curve.
"""
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from ratecurves.conventions.tenors import tenor_to_year_fraction
from ratecurves.errors import MissingPaymentOffsetError

from .base import CurvePoint, ForwardCurve, InterpolatedCurve

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


class InterpolatedForwardCurve(InterpolatedCurve, ForwardCurve):
    """Forward curve storing forwards of its index tenor against fixing times.

    The stored value at a fixing time is the forward of the curve's own
    index; a requested period length does not rescale it.
    """

    default_interpolation_method = "LINEAR"

    def __init__(
        self,
        name: str,
        points: Iterable[CurvePoint] = (),
        interpolation_method: Optional[str] = None,
        payment_offset: Optional[str | float] = None,
    ):
        super().__init__(name, points, interpolation_method)
        self.payment_offset = (
            tenor_to_year_fraction(payment_offset) if payment_offset is not None else None
        )

    def get_forward(
        self,
        model: Optional["AnalyticModel"],
        fixing_time: float,
        payment_offset: Optional[float] = None,
    ) -> float:
        return self.get_value(model, fixing_time)

    def get_payment_offset(self, fixing_time: float) -> float:
        if self.payment_offset is None:
            raise MissingPaymentOffsetError(f"Forward curve {self.name} has no index tenor")
        return self.payment_offset

    @classmethod
    def from_forwards(
        cls,
        name: str,
        fixing_times: Sequence[float],
        forwards: Sequence[float],
        payment_offset: Optional[str | float] = None,
        is_parameter: Optional[Sequence[bool]] = None,
        interpolation_method: Optional[str] = None,
    ) -> "InterpolatedForwardCurve":
        """Create a forward curve from forwards at fixing times."""
        if len(fixing_times) != len(forwards):
            raise ValueError("Fixing times and forwards must have same length")
        flags = is_parameter if is_parameter is not None else [False] * len(forwards)
        points = [
            CurvePoint(float(t), float(f), bool(flag))
            for t, f, flag in zip(fixing_times, forwards, flags, strict=True)
        ]
        return cls(name, points, interpolation_method, payment_offset)

    @classmethod
    def flat(
        cls, name: str, forward: float, payment_offset: Optional[str | float] = None
    ) -> "InterpolatedForwardCurve":
        """Flat forward curve."""
        return cls.from_forwards(name, [0.0], [forward], payment_offset)
