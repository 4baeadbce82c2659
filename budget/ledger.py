"""
Bookkeeping transforms for bills, debts and payments.

Every function takes the current document and returns a new one; nothing is
mutated in place.
"""
from typing import Any, Dict, List, Union
from datetime import date

from .models import (
    Bill, BillStatus, BillStatusRecord, CreditCard, Debt, DebtPayment,
    DebtSettings, DebtState
)

AnyDebtModel = Union[CreditCard, Debt]


def add_payment(debt: AnyDebtModel, amount: float, paid_on: date) -> AnyDebtModel:
    """
    Record a payment against a debt.

    Args:
        debt: Debt being paid
        amount: Payment amount, must be positive and not above the balance
        paid_on: Payment date

    Returns:
        Copy of the debt with the payment appended and the balance reduced
    """
    if amount <= 0:
        raise ValueError(f"Payment amount must be positive, got {amount}")
    if amount > debt.current_balance:
        raise ValueError(
            f"Payment of {amount:.2f} exceeds balance of {debt.current_balance:.2f} on '{debt.name}'"
        )

    payment = DebtPayment(date=paid_on, amount=amount)
    update: Dict[str, Any] = {
        "current_balance": debt.current_balance - amount,
        "payment_history": [*debt.payment_history, payment],
    }
    if isinstance(debt, CreditCard):
        update["last_payment_date"] = paid_on
        update["last_payment_amount"] = amount
    return debt.model_copy(update=update)


def remove_last_payment(debt: AnyDebtModel) -> AnyDebtModel:
    """
    Undo the most recent payment on a debt.

    Restores the balance and the last-payment snapshot from the payment
    before it. A debt without payments is returned unchanged.
    """
    if not debt.payment_history:
        return debt

    last_payment = debt.payment_history[-1]
    history = debt.payment_history[:-1]
    update: Dict[str, Any] = {
        "current_balance": debt.current_balance + last_payment.amount,
        "payment_history": history,
    }
    if isinstance(debt, CreditCard):
        previous = history[-1] if history else None
        update["last_payment_date"] = previous.date if previous else None
        update["last_payment_amount"] = previous.amount if previous else None
    return debt.model_copy(update=update)


def add_bill(bills: List[Bill], bill: Bill) -> List[Bill]:
    return [*bills, bill]


def update_bill(bills: List[Bill], bill_id: str, updates: Dict[str, Any]) -> List[Bill]:
    """Apply field updates to one bill, re-validating it."""
    updated = []
    for bill in bills:
        if bill.id == bill_id:
            data = bill.model_dump()
            data.update(updates)
            bill = Bill.model_validate(data)
        updated.append(bill)
    return updated


def delete_bill(bills: List[Bill], bill_id: str) -> List[Bill]:
    return [bill for bill in bills if bill.id != bill_id]


def delete_bill_statuses(records: List[BillStatusRecord], bill_id: str) -> List[BillStatusRecord]:
    return [record for record in records if record.bill_id != bill_id]


def set_bill_status(
    records: List[BillStatusRecord],
    bill_id: str,
    period_key: str,
    status: BillStatus
) -> List[BillStatusRecord]:
    """Set the status of a bill for a month, keeping one record per pair."""
    new_record = BillStatusRecord(bill_id=bill_id, period_key=period_key, status=status)
    updated = []
    replaced = False
    for record in records:
        if record.bill_id == bill_id and record.period_key == period_key:
            updated.append(new_record)
            replaced = True
        else:
            updated.append(record)
    if not replaced:
        updated.append(new_record)
    return updated


def get_bill_status(records: List[BillStatusRecord], bill_id: str, period_key: str) -> BillStatus:
    for record in records:
        if record.bill_id == bill_id and record.period_key == period_key:
            return record.status
    return BillStatus.UNPAID


def add_debt(state: DebtState, debt: AnyDebtModel) -> DebtState:
    """Add a debt with an empty payment history."""
    debt = debt.model_copy(update={"payment_history": []})
    return state.model_copy(update={"debts": [*state.debts, debt]})


def update_debt(state: DebtState, debt_id: str, updates: Dict[str, Any]) -> DebtState:
    """Apply field updates to one debt, re-validating it as its own kind."""
    debts = []
    for debt in state.debts:
        if debt.id == debt_id:
            data = debt.model_dump()
            data.update(updates)
            data["kind"] = debt.kind
            debt = type(debt).model_validate(data)
        debts.append(debt)
    return state.model_copy(update={"debts": debts})


def replace_debt(state: DebtState, debt: AnyDebtModel) -> DebtState:
    debts = [debt if d.id == debt.id else d for d in state.debts]
    return state.model_copy(update={"debts": debts})


def delete_debt(state: DebtState, debt_id: str) -> DebtState:
    return state.model_copy(update={"debts": [d for d in state.debts if d.id != debt_id]})


def update_settings(state: DebtState, updates: Dict[str, Any]) -> DebtState:
    """Merge setting changes, re-validating the result."""
    data = state.settings.model_dump()
    data.update(updates)
    return state.model_copy(update={"settings": DebtSettings.model_validate(data)})
