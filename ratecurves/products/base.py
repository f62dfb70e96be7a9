"""
Base class of products valued analytically against a model.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ratecurves.model import AnalyticModel


class AnalyticProduct(ABC):
    """A product whose value is a function of a model and an evaluation time."""

    @abstractmethod
    def get_value(self, evaluation_time: float, model: "AnalyticModel") -> float:
        """Value of the product at ``evaluation_time`` in units of ``df(evaluation_time)``."""
        pass


@dataclass(frozen=True)
class LegCashflow:
    """One period of a swap leg valued against a model.

    Attributes:
        index: Period index (0-based)
        fixing: Fixing time
        period_start: Accrual start time
        period_end: Accrual end time
        payment: Payment time
        day_count_fraction: Accrual fraction
        rate: Forward plus spread (the spread alone for fixed legs)
        notional: Notional of the period after resetting
        discount_factor: Discount factor at payment (0 once the flow has passed)
        coupon_value: Discounted coupon
        exchange_value: Discounted notional exchange flows of the period
    """

    index: int
    fixing: float
    period_start: float
    period_end: float
    payment: float
    day_count_fraction: float
    rate: float
    notional: float
    discount_factor: float
    coupon_value: float
    exchange_value: float = 0.0

    @property
    def value(self) -> float:
        return self.coupon_value + self.exchange_value
