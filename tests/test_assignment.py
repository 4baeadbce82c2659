"""
Tests for assigning bills and card payments to pay periods.
"""
import pytest
from datetime import date
from budget.models import Bill, BillForecast, CreditCard
from budget.assignment import assign_bills_to_periods, credit_card_bills, bill_in_period
from budget.periods import periods_for_month


def make_card(**kwargs):
    data = dict(
        name="Visa",
        current_balance=1500.0,
        credit_limit=5000.0,
        apr=0.2199,
        minimum_payment=45.0,
        due_day=25,
    )
    data.update(kwargs)
    return CreditCard(**data)


def test_one_off_bill_assigned_by_due_date():
    """A bill due on the 20th of a 31-day month goes to the second period only."""
    bill = Bill(name="Dentist", amount=80.0, due_date=date(2024, 1, 20))
    first, second = assign_bills_to_periods([bill], [], date(2024, 1, 1))

    assert first.bills == []
    assert [b.id for b in second.bills] == [bill.id]
    assert second.bills[0].amount == 80.0


def test_one_off_bill_outside_month_not_assigned():
    """One-off bills only appear in the month they are due."""
    bill = Bill(name="Dentist", amount=80.0, due_date=date(2024, 1, 20))
    first, second = assign_bills_to_periods([bill], [], date(2024, 2, 1))
    assert first.bills == [] and second.bills == []


def test_recurring_bill_assigned_by_day_of_month():
    """Recurring bills follow their day of month into other months."""
    rent = Bill(name="Rent", amount=1400.0, due_date=date(2024, 1, 1), is_recurring=True, day_of_month=1)
    phone = Bill(name="Phone", amount=60.0, due_date=date(2024, 1, 22), is_recurring=True, day_of_month=22)

    first, second = assign_bills_to_periods([rent, phone], [], date(2024, 5, 10))
    assert [b.name for b in first.bills] == ["Rent"]
    assert [b.name for b in second.bills] == ["Phone"]


def test_recurring_day_31_in_30_day_month():
    """Day 31 lands in the second period of a 30-day month."""
    bill = Bill(name="Gym", amount=30.0, due_date=date(2024, 1, 31), is_recurring=True, day_of_month=31)
    first, second = assign_bills_to_periods([bill], [], date(2024, 4, 1))
    assert first.bills == []
    assert [b.name for b in second.bills] == ["Gym"]


def test_recurring_bill_without_day_uses_due_date_day():
    """Missing day of month falls back to the due date's day."""
    bill = Bill(name="Water", amount=40.0, due_date=date(2024, 1, 9), is_recurring=True)
    first, second = periods_for_month(date(2024, 6, 1))
    assert bill_in_period(bill, first)
    assert not bill_in_period(bill, second)


def test_recurring_amount_resolved_for_viewed_month():
    """Displayed amounts use the viewed month's forecast."""
    bill = Bill(
        name="Electric",
        amount=100.0,
        due_date=date(2024, 1, 5),
        is_recurring=True,
        day_of_month=5,
        forecasts=[BillForecast(month="2024-07", estimated_amount=175.0)],
    )
    july = assign_bills_to_periods([bill], [], date(2024, 7, 1))
    august = assign_bills_to_periods([bill], [], date(2024, 8, 1))

    assert july[0].bills[0].amount == 175.0
    assert august[0].bills[0].amount == 100.0
    assert july[0].total_bills == 175.0


def test_credit_card_minimum_payment_synthesized():
    """Cards appear as minimum payment entries after regular bills."""
    card = make_card()
    bill = Bill(name="Internet", amount=70.0, due_date=date(2024, 3, 18))
    first, second = assign_bills_to_periods([bill], [card], date(2024, 3, 1))

    assert first.bills == []
    assert [b.name for b in second.bills] == ["Internet", "Visa"]
    entry = second.bills[1]
    assert entry.is_credit_card
    assert entry.amount == 45.0
    assert entry.due_date == date(2024, 3, 25)
    assert entry.utilization == pytest.approx(30.0)


def test_credit_card_due_date_clamped_in_february():
    """A card due on the 31st is due on the last day of February."""
    card = make_card(due_day=31)
    first, second = periods_for_month(date(2023, 2, 1))

    assert credit_card_bills([card], first) == []
    entries = credit_card_bills([card], second)
    assert len(entries) == 1
    assert entries[0].due_date == date(2023, 2, 28)


def test_incomes_copied_onto_periods():
    """Income and estimates from the income store are attached to the periods."""
    first, second = assign_bills_to_periods([], [], date(2024, 3, 1), [(2000.0, None), (0.0, 1800.0)])
    assert first.income == 2000.0 and first.estimated_income is None
    assert second.income == 0.0 and second.estimated_income == 1800.0
    assert second.available_income == 1800.0


def test_remaining_after_bills():
    """Remaining is available income minus all assigned bills."""
    card = make_card(due_day=5, minimum_payment=50.0)
    bill = Bill(name="Rent", amount=1200.0, due_date=date(2024, 3, 1))
    first, _ = assign_bills_to_periods([bill], [card], date(2024, 3, 1), [(2000.0, None), (0.0, None)])
    assert first.total_bills == 1250.0
    assert first.remaining == 750.0
