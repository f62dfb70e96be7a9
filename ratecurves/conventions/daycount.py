"""
QuantLib-backed day count conventions.

Schedules carry their accrual fractions as plain floats; the conventions in
this module are used to compute those fractions, and the ACT/365F time axis,
from calendar dates.
"""

from datetime import date, datetime
from typing import Union

import QuantLib as ql

DateLike = Union[date, datetime]


def _to_ql_date(dt: DateLike) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    py_date = dt.date() if isinstance(dt, datetime) else dt
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """Named wrapper around a QuantLib day counter."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Accrual fraction between two dates."""
        return self._ql_daycount.yearFraction(_to_ql_date(start), _to_ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        """Number of days between two dates under this convention."""
        return self._ql_daycount.dayCount(_to_ql_date(start), _to_ql_date(end))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name!r})"


ACT_360 = DayCountConvention("ACT/360", ql.Actual360())
ACT_365F = DayCountConvention("ACT/365F", ql.Actual365Fixed())
THIRTY_360E = DayCountConvention("30E/360", ql.Thirty360(ql.Thirty360.European))
THIRTY_360U = DayCountConvention("30U/360", ql.Thirty360(ql.Thirty360.BondBasis))
ACT_ACT = DayCountConvention("ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA))

_ALIASES = {
    ACT_360: ("ACTUAL/360",),
    ACT_365F: ("ACT/365", "ACTUAL/365F"),
    THIRTY_360E: ("30/360 EUROPEAN",),
    THIRTY_360U: ("30/360",),
    ACT_ACT: ("ACTUAL/ACTUAL", "ACT/ACT ISDA"),
}

# Canonical names and aliases, upper case
DAY_COUNT_CONVENTIONS = {
    label: convention
    for convention, aliases in _ALIASES.items()
    for label in (convention.name, *aliases)
}


def get_day_count_convention(name: str | DayCountConvention) -> DayCountConvention:
    """Get a day count convention by name (instances are passed through)."""
    if isinstance(name, DayCountConvention):
        return name
    name_upper = name.upper()
    if name_upper not in DAY_COUNT_CONVENTIONS:
        raise ValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS.keys())}"
        )
    return DAY_COUNT_CONVENTIONS[name_upper]


def time_from_reference(reference_date: DateLike, dt: DateLike) -> float:
    """Model time of a date: ACT/365F year fraction from the reference date."""
    return ACT_365F.year_fraction(reference_date, dt)
