"""
Core data structures for schedules.

Times are ACT/365F year offsets from the schedule's reference date; the
accrual fraction of each period is carried separately since it follows the
leg's own day count convention.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from ratecurves.conventions.daycount import (
    DayCountConvention,
    get_day_count_convention,
    time_from_reference,
)
from ratecurves.errors import MisspecifiedScheduleError


@dataclass(frozen=True)
class Period:
    """A single accrual period of a schedule."""

    fixing: float
    period_start: float
    period_end: float
    payment: float
    day_count_fraction: float

    def __post_init__(self):
        if not self.period_start < self.period_end:
            raise MisspecifiedScheduleError(
                f"Period start {self.period_start} must be before period end {self.period_end}"
            )

    @property
    def length(self) -> float:
        """Length of the period on the model time axis."""
        return self.period_end - self.period_start


@dataclass(frozen=True)
class Schedule:
    """Ordered, immutable sequence of periods.

    Attributes:
        periods: Periods in schedule order
        reference_date: Date corresponding to model time 0 (optional)
    """

    periods: Tuple[Period, ...]
    reference_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "periods", tuple(self.periods))

    def __len__(self) -> int:
        return len(self.periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self.periods)

    def __getitem__(self, index: int) -> Period:
        return self.periods[index]

    @property
    def number_of_periods(self) -> int:
        return len(self.periods)

    def get_fixing(self, index: int) -> float:
        return self.periods[index].fixing

    def get_period_start(self, index: int) -> float:
        return self.periods[index].period_start

    def get_period_end(self, index: int) -> float:
        return self.periods[index].period_end

    def get_payment(self, index: int) -> float:
        return self.periods[index].payment

    def get_period_length(self, index: int) -> float:
        """Day count fraction of a period."""
        return self.periods[index].day_count_fraction

    @classmethod
    def from_dates(
        cls,
        reference_date: date,
        date_periods: Iterable[Sequence[date]],
        day_count: str | DayCountConvention = "ACT/360",
    ) -> "Schedule":
        """Build a schedule from calendar dates.

        Args:
            reference_date: Date of model time 0
            date_periods: Per period either ``(start, end)``, ``(start, end, payment)``
                or ``(fixing, start, end, payment)``; fixing defaults to start and
                payment to end
            day_count: Day count convention for the accrual fractions

        Returns:
            Schedule with times measured ACT/365F from the reference date
        """
        convention = get_day_count_convention(day_count)
        periods = []
        for dates in date_periods:
            if len(dates) == 2:
                start, end = dates
                fixing, payment = start, end
            elif len(dates) == 3:
                start, end, payment = dates
                fixing = start
            elif len(dates) == 4:
                fixing, start, end, payment = dates
            else:
                raise MisspecifiedScheduleError(
                    f"Expected 2, 3 or 4 dates per period, got {len(dates)}"
                )
            periods.append(
                Period(
                    fixing=time_from_reference(reference_date, fixing),
                    period_start=time_from_reference(reference_date, start),
                    period_end=time_from_reference(reference_date, end),
                    payment=time_from_reference(reference_date, payment),
                    day_count_fraction=convention.year_fraction(start, end),
                )
            )
        return cls(tuple(periods), reference_date)


def regular_schedule(
    initial: float, number_of_periods: int, period_length: float
) -> Schedule:
    """Schedule on the time grid ``initial + i * period_length``.

    Fixing equals period start, payment equals period end and the accrual
    fraction equals the period length.
    """
    if number_of_periods < 1:
        raise MisspecifiedScheduleError("A regular schedule needs at least one period")
    if period_length <= 0:
        raise MisspecifiedScheduleError(f"Period length must be positive: {period_length}")

    periods = []
    for i in range(number_of_periods):
        start = initial + i * period_length
        end = initial + (i + 1) * period_length
        periods.append(Period(start, start, end, end, end - start))
    return Schedule(tuple(periods))
