"""Products valued analytically against a model."""

from .base import AnalyticProduct, LegCashflow
from .deposit import Deposit
from .fra import ForwardRateAgreement
from .swap import RateSwap, Swap
from .swap_leg import SwapLeg, SwapLegWithResetting, swap_annuity
from .swaption import Swaption

__all__ = [
    "AnalyticProduct",
    "Deposit",
    "ForwardRateAgreement",
    "LegCashflow",
    "RateSwap",
    "Swap",
    "SwapLeg",
    "SwapLegWithResetting",
    "Swaption",
    "swap_annuity",
]
