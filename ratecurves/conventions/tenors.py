"""Tenor codes such as ``"3M"`` or ``"1Y"`` expressed as year fractions."""

import re

_TENOR_PATTERN = re.compile(r"^\s*(\d+)\s*([DWMY])\s*$", re.IGNORECASE)

_UNIT_IN_YEARS = {
    "D": 1.0 / 365.0,
    "W": 7.0 / 365.0,
    "M": 1.0 / 12.0,
    "Y": 1.0,
}


def tenor_to_year_fraction(tenor: str | float) -> float:
    """Convert a tenor code or a number of years to a positive year fraction.

    Args:
        tenor: Tenor code (``"1D"``, ``"2W"``, ``"6M"``, ``"10Y"``) or a number

    Returns:
        Tenor length in years

    Raises:
        ValueError: If the code cannot be parsed or the length is not positive
    """
    if isinstance(tenor, (int, float)):
        years = float(tenor)
    else:
        match = _TENOR_PATTERN.match(tenor)
        if match is None:
            raise ValueError(f"Cannot parse tenor code: {tenor!r}")
        count, unit = match.groups()
        years = int(count) * _UNIT_IN_YEARS[unit.upper()]

    if years <= 0:
        raise ValueError(f"Tenor must be positive: {tenor!r}")
    return years
