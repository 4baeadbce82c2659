"""
Calendar model for twice-monthly pay periods.

Every month is split into exactly two periods: the 1st through the 15th and
the 16th through the last day of the month.
"""
from typing import List
from datetime import date
import calendar

from .models import PayPeriod

FIRST_PERIOD_END_DAY = 15


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in a month."""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date in the given month, clamping the day to the month's last day."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def month_key(d: date) -> str:
    """Format a date's month as YYYY-MM."""
    return d.strftime("%Y-%m")


def parse_month_key(key: str) -> date:
    """Parse a YYYY-MM key into the first day of that month."""
    year, month = key.split("-")
    return date(int(year), int(month), 1)


def is_current_month(anchor: date, today: date) -> bool:
    return (anchor.year, anchor.month) == (today.year, today.month)


def shift_month(anchor: date, months: int) -> date:
    """Move forwards or backwards by whole months. Returns the first of the month."""
    index = anchor.year * 12 + (anchor.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def periods_for_month(anchor: date) -> List[PayPeriod]:
    """
    Build the two pay periods of the anchor date's month.

    Args:
        anchor: Any date inside the month

    Returns:
        [first half, second half], both with inclusive bounds
    """
    year, month = anchor.year, anchor.month
    return [
        PayPeriod(
            start_date=date(year, month, 1),
            end_date=date(year, month, FIRST_PERIOD_END_DAY),
        ),
        PayPeriod(
            start_date=date(year, month, FIRST_PERIOD_END_DAY + 1),
            end_date=date(year, month, last_day_of_month(year, month)),
        ),
    ]


def date_in_period(d: date, period: PayPeriod) -> bool:
    """Check if a date falls inside a period, bounds inclusive."""
    return period.start_date <= d <= period.end_date


def recurring_day_in_period(day_of_month: int, period: PayPeriod) -> bool:
    """
    Check if a recurring day-of-month belongs to a period.

    The day range of the period is tried first. When that fails, a period
    starting on the 1st takes any day up to the 15th and a period starting on
    the 16th takes any later day, so day 31 still lands in the second half of
    a 30-day month.
    """
    start_day = period.start_date.day
    end_day = period.end_date.day

    if start_day <= day_of_month <= end_day:
        return True

    if start_day == 1 and day_of_month <= FIRST_PERIOD_END_DAY:
        return True
    if start_day == FIRST_PERIOD_END_DAY + 1 and day_of_month > FIRST_PERIOD_END_DAY:
        return True
    return False
