"""Metric utilities shared by the analytics views.

This module provides low-level helpers for:
- Whole-number percentages with a zero-divisor guard
- Short English month labels used as trend bucket keys
- Summing logged hours

Month labels are fixed English abbreviations and do not depend on the
process locale.
"""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

from flowchain.models.timesheet import Timesheet

Number = Union[int, float, Decimal]

MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def calculate_percentage(part: Number, total: Number) -> int:
    """Calculate a whole-number percentage of part in total.

    Halves round up (12.5 becomes 13). A zero or negative total yields 0
    instead of raising.

    Args:
        part: Numerator
        total: Denominator

    Returns:
        Rounded percentage

    Example:
        >>> calculate_percentage(1, 8)
        13
        >>> calculate_percentage(5, 0)
        0
    """
    total_dec = Decimal(str(total))
    if total_dec <= 0:
        return 0

    ratio = Decimal(str(part)) / total_dec * Decimal("100")
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def month_label(value: Union[dt.date, dt.datetime]) -> str:
    """Return the short English month name of a date.

    Different years share the same label.

    Example:
        >>> month_label(dt.date(2024, 3, 15))
        'Mar'
    """
    return MONTHS[value.month - 1]


def sum_hours(timesheets: Iterable[Timesheet]) -> Decimal:
    """Sum logged hours of timesheets.

    Example:
        >>> sum_hours([])
        Decimal('0')
    """
    return sum((t.time_logged for t in timesheets), Decimal("0"))
