"""
Assignment of bills and credit card minimum payments to pay periods.
"""
from typing import List, Optional, Sequence, Tuple
from datetime import date

from .models import Bill, CreditCard, PayPeriod, PeriodBill
from .periods import (
    periods_for_month, date_in_period, recurring_day_in_period,
    month_key, clamp_day
)
from .forecast import resolve_amount


def bill_in_period(bill: Bill, period: PayPeriod) -> bool:
    """
    Check if a bill belongs to a period.

    One-off bills match on their due date only. Recurring bills match on
    their due date first, then on their day of month.
    """
    if date_in_period(bill.due_date, period):
        return True
    if not bill.is_recurring:
        return False
    day_of_month = bill.day_of_month or bill.due_date.day
    return recurring_day_in_period(day_of_month, period)


def credit_card_bills(credit_cards: Sequence[CreditCard], period: PayPeriod) -> List[PeriodBill]:
    """
    Minimum payment entries for the cards due in a period.

    The due date combines the period's month with the card's due day,
    clamped to the month's last day.
    """
    entries = []
    for card in credit_cards:
        if not recurring_day_in_period(card.due_day, period):
            continue
        entries.append(PeriodBill(
            id=card.id,
            name=card.name,
            amount=card.minimum_payment,
            due_date=clamp_day(period.start_date.year, period.start_date.month, card.due_day),
            kind="credit_card",
            current_balance=card.current_balance,
            credit_limit=card.credit_limit,
            apr=card.apr,
        ))
    return entries


def assign_bills_to_periods(
    bills: Sequence[Bill],
    credit_cards: Sequence[CreditCard],
    anchor: date,
    incomes: Optional[Sequence[Tuple[float, Optional[float]]]] = None
) -> List[PayPeriod]:
    """
    Build both pay periods of the anchor month with their bills.

    Args:
        bills: All bills
        credit_cards: Credit card debts
        anchor: Any date in the viewed month
        incomes: (income, estimated_income) per period

    Returns:
        The two periods, each with its resolved bills followed by card payments
    """
    key = month_key(anchor)
    periods = periods_for_month(anchor)
    assigned = []

    for index, period in enumerate(periods):
        period_bills = [
            PeriodBill(
                id=bill.id,
                name=bill.name,
                amount=resolve_amount(bill, key),
                due_date=bill.due_date,
                is_auto_pay=bill.is_auto_pay,
                payment_method=bill.payment_method,
                is_recurring=bill.is_recurring,
            )
            for bill in bills
            if bill_in_period(bill, period)
        ]
        period_bills.extend(credit_card_bills(credit_cards, period))

        income, estimated_income = (0.0, None)
        if incomes is not None:
            income, estimated_income = incomes[index]

        assigned.append(period.model_copy(update={
            "bills": period_bills,
            "income": income,
            "estimated_income": estimated_income,
        }))

    return assigned
