"""
Tests for the pay period calendar model.
"""
import pytest
from datetime import date, timedelta
from budget.periods import (
    periods_for_month, date_in_period, recurring_day_in_period,
    month_key, parse_month_key, clamp_day, shift_month, is_current_month
)


@pytest.mark.parametrize("anchor", [
    date(2024, 2, 10),   # leap February
    date(2023, 2, 1),
    date(2024, 4, 30),
    date(2024, 12, 31),
])
def test_periods_cover_month_exactly_once(anchor):
    """Both periods together cover every day of the month once."""
    first, second = periods_for_month(anchor)

    assert first.start_date == date(anchor.year, anchor.month, 1)
    assert first.end_date.day == 15
    assert second.start_date == first.end_date + timedelta(days=1)
    assert (second.end_date + timedelta(days=1)).day == 1

    day = first.start_date
    while day.month == anchor.month:
        hits = [date_in_period(day, p) for p in (first, second)]
        assert hits.count(True) == 1
        day += timedelta(days=1)


def test_date_in_period_is_inclusive():
    """Period bounds are part of the period."""
    first, second = periods_for_month(date(2024, 3, 1))
    assert date_in_period(date(2024, 3, 1), first)
    assert date_in_period(date(2024, 3, 15), first)
    assert not date_in_period(date(2024, 3, 16), first)
    assert date_in_period(date(2024, 3, 31), second)
    assert not date_in_period(date(2024, 4, 1), second)


def test_recurring_day_direct_range():
    """Days inside the period's range match directly."""
    first, second = periods_for_month(date(2024, 1, 1))
    assert recurring_day_in_period(10, first)
    assert not recurring_day_in_period(10, second)
    assert recurring_day_in_period(20, second)
    assert not recurring_day_in_period(20, first)


def test_recurring_day_fallback_for_short_months():
    """Day 31 still belongs to the second half of a 30-day month."""
    first, second = periods_for_month(date(2024, 4, 1))
    assert second.end_date.day == 30
    assert recurring_day_in_period(31, second)
    assert not recurring_day_in_period(31, first)

    # February: days 29-31 fall back to the second half
    first, second = periods_for_month(date(2023, 2, 1))
    for day in (29, 30, 31):
        assert recurring_day_in_period(day, second)
        assert not recurring_day_in_period(day, first)


def test_month_key_helpers():
    """Month keys are zero padded and round trip to the first of the month."""
    assert month_key(date(2024, 3, 9)) == "2024-03"
    assert parse_month_key("2024-03") == date(2024, 3, 1)
    assert month_key(parse_month_key("1999-12")) == "1999-12"


def test_clamp_day():
    """Days past the end of the month clamp to the last day."""
    assert clamp_day(2023, 2, 31) == date(2023, 2, 28)
    assert clamp_day(2024, 2, 31) == date(2024, 2, 29)
    assert clamp_day(2024, 4, 31) == date(2024, 4, 30)
    assert clamp_day(2024, 5, 31) == date(2024, 5, 31)


def test_shift_month_crosses_years():
    """Navigation wraps around year boundaries."""
    assert shift_month(date(2024, 12, 20), 1) == date(2025, 1, 1)
    assert shift_month(date(2024, 1, 31), -1) == date(2023, 12, 1)
    assert shift_month(date(2024, 5, 5), 0) == date(2024, 5, 1)
    assert shift_month(date(2024, 5, 5), -17) == date(2022, 12, 1)


def test_is_current_month():
    assert is_current_month(date(2024, 6, 1), date(2024, 6, 30))
    assert not is_current_month(date(2023, 6, 1), date(2024, 6, 30))
