"""
Declarative description of calibration instruments.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence

from ratecurves.errors import UnknownInstrumentTypeError
from ratecurves.schedule import Schedule, regular_schedule


class InstrumentType(Enum):
    """Calibration instrument types (tags are matched case-insensitively)."""

    SWAP = "swap"
    SWAPLEG = "swapleg"
    SWAP_WITH_RESET_ON_RECEIVER = "swapwithresetonreceiver"
    SWAP_WITH_RESET_ON_PAYER = "swapwithresetonpayer"
    DEPOSIT = "deposit"
    FRA = "fra"
    FUTURE = "future"

    @classmethod
    def parse(cls, value: "InstrumentType | str") -> "InstrumentType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnknownInstrumentTypeError(
                f"Unknown instrument type: {value!r}. "
                f"Available: {', '.join(member.value for member in cls)}"
            ) from None

    @property
    def is_single_leg(self) -> bool:
        """Whether the product is built from the receiver fields alone."""
        return self in (
            InstrumentType.SWAPLEG,
            InstrumentType.DEPOSIT,
            InstrumentType.FRA,
            InstrumentType.FUTURE,
        )


@dataclass(frozen=True)
class CalibrationSpec:
    """One calibration instrument and the curve point it determines.

    The receiver spread is the instrument's quote for single-leg types
    (deposit rate, FRA rate, future price, fixed rate of a swap leg). For
    swaps both legs carry their own spread. ``calibration_time`` is the time
    at which a new parameter point is added to ``calibration_curve_name``.

    Attributes:
        symbol: Identifier of the instrument (need not be unique)
        instrument_type: Product type built from this spec
        schedule_receiver: Schedule of the receiver leg
        forward_curve_receiver_name: Forward curve of the receiver leg (None for fixed)
        spread_receiver: Spread or quote of the receiver leg
        discount_curve_receiver_name: Discount curve of the receiver leg
        calibration_curve_name: Curve receiving the new point
        calibration_time: Time of the new point
        schedule_payer: Schedule of the payer leg
        forward_curve_payer_name: Forward curve of the payer leg (None for fixed)
        spread_payer: Spread of the payer leg
        discount_curve_payer_name: Discount curve of the payer leg
    """

    symbol: str
    instrument_type: InstrumentType
    schedule_receiver: Schedule
    forward_curve_receiver_name: Optional[str]
    spread_receiver: float
    discount_curve_receiver_name: str
    calibration_curve_name: str
    calibration_time: float
    schedule_payer: Optional[Schedule] = None
    forward_curve_payer_name: Optional[str] = None
    spread_payer: float = 0.0
    discount_curve_payer_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "instrument_type", InstrumentType.parse(self.instrument_type))

    def get_clone_shifted(self, shift: float) -> "CalibrationSpec":
        """Copy with the quote moved by ``shift``.

        Single-leg instruments and specs without a payer discount curve shift
        the receiver spread, swaps shift the payer spread.
        """
        if self.discount_curve_payer_name is None or self.instrument_type.is_single_leg:
            return replace(self, spread_receiver=self.spread_receiver + shift)
        return replace(self, spread_payer=self.spread_payer + shift)

    @classmethod
    def from_regular_tenors(
        cls,
        symbol: str,
        instrument_type: InstrumentType | str,
        tenor_receiver: Sequence[float],
        forward_curve_receiver_name: Optional[str],
        spread_receiver: float,
        discount_curve_receiver_name: str,
        calibration_curve_name: str,
        calibration_time: float,
        tenor_payer: Optional[Sequence[float]] = None,
        forward_curve_payer_name: Optional[str] = None,
        spread_payer: float = 0.0,
        discount_curve_payer_name: Optional[str] = None,
    ) -> "CalibrationSpec":
        """Spec with regular schedules given as ``(initial, number_of_periods, period_length)``."""
        schedule_payer = None
        if tenor_payer is not None:
            schedule_payer = regular_schedule(
                tenor_payer[0], int(tenor_payer[1]), tenor_payer[2]
            )
        return cls(
            symbol=symbol,
            instrument_type=instrument_type,
            schedule_receiver=regular_schedule(
                tenor_receiver[0], int(tenor_receiver[1]), tenor_receiver[2]
            ),
            forward_curve_receiver_name=forward_curve_receiver_name,
            spread_receiver=spread_receiver,
            discount_curve_receiver_name=discount_curve_receiver_name,
            calibration_curve_name=calibration_curve_name,
            calibration_time=calibration_time,
            schedule_payer=schedule_payer,
            forward_curve_payer_name=forward_curve_payer_name,
            spread_payer=spread_payer,
            discount_curve_payer_name=discount_curve_payer_name,
        )
