"""
Planner service tying the pure budget engine to persisted documents.

Every change follows the same pattern: load the current document, apply a
pure transform, save the result. Invalid user input is rejected here with a
logged warning and leaves the stored state untouched.
"""
from typing import Any, Callable, Dict, List, Optional, Union
from datetime import date
import logging
import math

from db.repositories import Repositories
from .models import (
    Bill, BillStatus, CreditCard, Debt, DebtPaymentSuggestion, PayPeriod
)
from .assignment import assign_bills_to_periods
from .allocator import DebtPaymentAllocator
from .forecast import upsert_forecast, remove_forecast
from .income import period_incomes, set_income
from . import ledger

logger = logging.getLogger(__name__)


def parse_amount(raw: Any) -> Optional[float]:
    """
    Parse a user-entered money amount.

    Returns:
        The amount as a float, or None when it is not a finite, non-negative number
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", "").lstrip("$")
        if not raw:
            return None
    try:
        amount = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return None
    return amount


class BudgetPlanner:
    """Pay period planning and debt payoff operations over stored documents."""

    def __init__(self, repositories: Repositories, today: Callable[[], date] = date.today):
        self.repos = repositories
        self.today = today

    # Pay periods
    def pay_periods(self, anchor: date) -> List[PayPeriod]:
        """Both pay periods of the anchor month with bills and income."""
        bills = self.repos.bills.load()
        state = self.repos.debt_state.load()
        incomes = period_incomes(
            anchor,
            self.repos.estimates.load(),
            self.repos.pay_periods.load(),
            self.today()
        )
        return assign_bills_to_periods(bills, state.credit_cards(), anchor, incomes)

    def set_income(self, anchor: date, period_index: int, raw_amount: Any) -> bool:
        """Record income (current month) or an estimate (other months)."""
        amount = parse_amount(raw_amount)
        if amount is None:
            logger.warning(f"Ignoring invalid income amount {raw_amount!r}")
            return False
        if period_index not in (0, 1):
            logger.warning(f"Ignoring income for unknown period index {period_index}")
            return False

        estimates, live_periods = set_income(
            anchor,
            period_index,
            amount,
            self.repos.estimates.load(),
            self.repos.pay_periods.load(),
            self.today()
        )
        self.repos.pay_periods.save(live_periods)
        self.repos.estimates.save(estimates)
        return True

    def payment_suggestions(self, period: PayPeriod) -> List[DebtPaymentSuggestion]:
        """Extra debt payments for what is left in a period after bills."""
        state = self.repos.debt_state.load()
        allocator = DebtPaymentAllocator(state.settings)
        return allocator.suggest(period.remaining, state.debts)

    # Bills
    def bills(self) -> List[Bill]:
        return self.repos.bills.load()

    def add_bill(self, bill: Bill) -> Bill:
        self.repos.bills.update(lambda bills: ledger.add_bill(bills, bill))
        logger.info(f"Added bill '{bill.name}'")
        return bill

    def update_bill(self, bill_id: str, updates: Dict[str, Any]) -> Optional[Bill]:
        bills = self.repos.bills.load()
        if not any(b.id == bill_id for b in bills):
            logger.warning(f"Cannot update unknown bill {bill_id}")
            return None
        try:
            updated = ledger.update_bill(bills, bill_id, updates)
        except ValueError as e:
            logger.warning(f"Rejected update for bill {bill_id}: {e}")
            return None
        self.repos.bills.save(updated)
        return next(b for b in updated if b.id == bill_id)

    def delete_bill(self, bill_id: str) -> bool:
        bills = self.repos.bills.load()
        if not any(b.id == bill_id for b in bills):
            return False
        self.repos.bills.save(ledger.delete_bill(bills, bill_id))
        self.repos.bill_statuses.update(lambda records: ledger.delete_bill_statuses(records, bill_id))
        logger.info(f"Deleted bill {bill_id}")
        return True

    def set_forecast(self, bill_id: str, month_key: str, raw_amount: Any) -> bool:
        """Set a recurring bill's expected amount for one month."""
        amount = parse_amount(raw_amount)
        if amount is None:
            logger.warning(f"Ignoring invalid forecast amount {raw_amount!r}")
            return False
        return self._transform_bill(bill_id, lambda bill: upsert_forecast(bill, month_key, amount))

    def clear_forecast(self, bill_id: str, month_key: str) -> bool:
        return self._transform_bill(bill_id, lambda bill: remove_forecast(bill, month_key))

    def _transform_bill(self, bill_id: str, transform: Callable[[Bill], Bill]) -> bool:
        bills = self.repos.bills.load()
        updated = []
        found = False
        for bill in bills:
            if bill.id == bill_id:
                found = True
                try:
                    bill = transform(bill)
                except ValueError as e:
                    logger.warning(f"Rejected change for bill {bill_id}: {e}")
                    return False
            updated.append(bill)
        if not found:
            logger.warning(f"Unknown bill {bill_id}")
            return False
        self.repos.bills.save(updated)
        return True

    def set_bill_status(self, bill_id: str, period_key: str, status: BillStatus) -> None:
        self.repos.bill_statuses.update(
            lambda records: ledger.set_bill_status(records, bill_id, period_key, status)
        )

    def bill_status(self, bill_id: str, period_key: str) -> BillStatus:
        return ledger.get_bill_status(self.repos.bill_statuses.load(), bill_id, period_key)

    # Debts
    def debts(self) -> List[Union[CreditCard, Debt]]:
        return self.repos.debt_state.load().debts

    def add_debt(self, debt: Union[CreditCard, Debt]) -> Union[CreditCard, Debt]:
        self.repos.debt_state.update(lambda state: ledger.add_debt(state, debt))
        logger.info(f"Added debt '{debt.name}'")
        return debt

    def update_debt(self, debt_id: str, updates: Dict[str, Any]) -> bool:
        state = self.repos.debt_state.load()
        if state.get_debt(debt_id) is None:
            logger.warning(f"Cannot update unknown debt {debt_id}")
            return False
        try:
            state = ledger.update_debt(state, debt_id, updates)
        except ValueError as e:
            logger.warning(f"Rejected update for debt {debt_id}: {e}")
            return False
        self.repos.debt_state.save(state)
        return True

    def delete_debt(self, debt_id: str) -> bool:
        state = self.repos.debt_state.load()
        if state.get_debt(debt_id) is None:
            return False
        self.repos.debt_state.save(ledger.delete_debt(state, debt_id))
        self.repos.bill_statuses.update(lambda records: ledger.delete_bill_statuses(records, debt_id))
        logger.info(f"Deleted debt {debt_id}")
        return True

    def update_settings(self, updates: Dict[str, Any]) -> bool:
        state = self.repos.debt_state.load()
        try:
            state = ledger.update_settings(state, updates)
        except ValueError as e:
            logger.warning(f"Rejected settings update: {e}")
            return False
        self.repos.debt_state.save(state)
        return True

    def add_payment(self, debt_id: str, raw_amount: Any) -> bool:
        """Record a payment against a debt."""
        amount = parse_amount(raw_amount)
        if not amount:
            logger.warning(f"Ignoring invalid payment amount {raw_amount!r}")
            return False

        state = self.repos.debt_state.load()
        debt = state.get_debt(debt_id)
        if debt is None:
            logger.warning(f"Cannot record payment for unknown debt {debt_id}")
            return False
        try:
            paid = ledger.add_payment(debt, amount, self.today())
        except ValueError as e:
            logger.warning(f"Rejected payment: {e}")
            return False

        self.repos.debt_state.save(ledger.replace_debt(state, paid))
        logger.info(f"Recorded payment of {amount:.2f} on '{debt.name}'")
        return True

    def remove_last_payment(self, debt_id: str) -> bool:
        """Undo the latest payment on a debt. Nothing to undo is not an error."""
        state = self.repos.debt_state.load()
        debt = state.get_debt(debt_id)
        if debt is None or not debt.payment_history:
            return False
        self.repos.debt_state.save(ledger.replace_debt(state, ledger.remove_last_payment(debt)))
        logger.info(f"Removed last payment on '{debt.name}'")
        return True

    def toggle_credit_card_payment(self, card_id: str, period_key: str, status: BillStatus,
                                   raw_amount: Any = None) -> bool:
        """
        Mark a card's payment for a month as paid or unpaid.

        Paying records a payment of the given amount; unpaying undoes the
        card's last payment. The month's status is recorded either way.
        """
        status = BillStatus(status)
        if status == BillStatus.PAID:
            if not self.add_payment(card_id, raw_amount):
                return False
        else:
            self.remove_last_payment(card_id)
        self.set_bill_status(card_id, period_key, status)
        return True
