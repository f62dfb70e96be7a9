"""Market conventions: day counts, tenor codes and valuation policies."""

from .daycount import (
    DAY_COUNT_CONVENTIONS,
    DayCountConvention,
    get_day_count_convention,
    time_from_reference,
)
from .tenors import tenor_to_year_fraction
from .types import EvaluationTimePolicy

__all__ = [
    "DAY_COUNT_CONVENTIONS",
    "DayCountConvention",
    "EvaluationTimePolicy",
    "get_day_count_convention",
    "tenor_to_year_fraction",
    "time_from_reference",
]
