"""
Tests for debt payments and bill bookkeeping.
"""
import pytest
from datetime import date
from budget.models import (
    Bill, BillForecast, BillStatus, CreditCard, Debt, DebtState
)
from budget import ledger


def make_card(**kwargs):
    data = dict(id="visa", name="Visa", current_balance=1000.0, apr=0.2, minimum_payment=30.0, due_day=12)
    data.update(kwargs)
    return CreditCard(**data)


def test_add_payment_reduces_balance_and_sets_snapshot():
    card = make_card()
    paid = ledger.add_payment(card, 200.0, date(2024, 3, 12))

    assert paid.current_balance == 800.0
    assert len(paid.payment_history) == 1
    assert paid.last_payment_date == date(2024, 3, 12)
    assert paid.last_payment_amount == 200.0
    # original left untouched
    assert card.current_balance == 1000.0
    assert card.payment_history == []


def test_add_payment_rejects_bad_amounts():
    card = make_card()
    with pytest.raises(ValueError):
        ledger.add_payment(card, 0, date(2024, 3, 12))
    with pytest.raises(ValueError):
        ledger.add_payment(card, 1000.01, date(2024, 3, 12))


def test_remove_last_payment_restores_previous_snapshot():
    """Undo restores the balance and the payment before the removed one."""
    card = make_card()
    card = ledger.add_payment(card, 100.0, date(2024, 2, 12))
    card = ledger.add_payment(card, 250.0, date(2024, 3, 12))

    undone = ledger.remove_last_payment(card)
    assert undone.current_balance == 900.0
    assert len(undone.payment_history) == 1
    assert undone.last_payment_date == date(2024, 2, 12)
    assert undone.last_payment_amount == 100.0

    undone = ledger.remove_last_payment(undone)
    assert undone.current_balance == 1000.0
    assert undone.payment_history == []
    assert undone.last_payment_date is None
    assert undone.last_payment_amount is None


def test_remove_last_payment_without_history_is_noop():
    card = make_card()
    assert ledger.remove_last_payment(card) == card


def test_payments_on_plain_debt():
    """Installment debts track history without the card snapshot."""
    loan = Debt(id="loan", name="Car", current_balance=5000.0, minimum_payment=250.0)
    loan = ledger.add_payment(loan, 250.0, date(2024, 1, 1))
    assert loan.current_balance == 4750.0
    assert ledger.remove_last_payment(loan).current_balance == 5000.0


def test_update_bill_drops_forecasts_when_no_longer_recurring():
    bill = Bill(
        id="b1", name="Electric", amount=100.0, due_date=date(2024, 1, 5), is_recurring=True,
        day_of_month=5, forecasts=[BillForecast(month="2024-02", estimated_amount=140.0)]
    )
    bills = ledger.update_bill([bill], "b1", {"is_recurring": False})
    assert bills[0].forecasts is None
    assert bills[0].day_of_month is None

    with pytest.raises(ValueError):
        ledger.update_bill([bill], "b1", {"amount": -1})


def test_bill_status_one_record_per_month():
    records = ledger.set_bill_status([], "b1", "2024-03", BillStatus.PAID)
    records = ledger.set_bill_status(records, "b1", "2024-03", BillStatus.UNPAID)
    records = ledger.set_bill_status(records, "b1", "2024-04", BillStatus.PAID)

    assert len(records) == 2
    assert ledger.get_bill_status(records, "b1", "2024-03") == BillStatus.UNPAID
    assert ledger.get_bill_status(records, "b1", "2024-04") == BillStatus.PAID
    assert ledger.get_bill_status(records, "other", "2024-04") == BillStatus.UNPAID

    assert ledger.delete_bill_statuses(records, "b1") == []


def test_debt_state_updates():
    state = ledger.add_debt(DebtState(), make_card())
    assert [d.id for d in state.credit_cards()] == ["visa"]

    state = ledger.update_debt(state, "visa", {"apr": 0.25, "kind": "debt"})
    card = state.get_debt("visa")
    assert isinstance(card, CreditCard)
    assert card.apr == 0.25

    state = ledger.update_settings(state, {"variable_threshold": 250})
    assert state.settings.variable_threshold == 250
    assert state.settings.minimum_extra_payment == 50
    with pytest.raises(ValueError):
        ledger.update_settings(state, {"minimum_extra_payment": -1})

    state = ledger.delete_debt(state, "visa")
    assert state.debts == []


def test_debt_state_round_trips_tagged_variants():
    """Stored debts come back as the right variant."""
    state = DebtState(debts=[make_card(), Debt(id="loan", name="Car", current_balance=10.0)])
    restored = DebtState.model_validate(state.model_dump(mode="json"))
    assert isinstance(restored.debts[0], CreditCard)
    assert not isinstance(restored.debts[1], CreditCard)
    assert restored == state
