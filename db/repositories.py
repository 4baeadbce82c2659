"""
Typed repositories over document stores.
"""
from typing import Callable, Dict, Generic, List, TypeVar
from pydantic import TypeAdapter

from budget.models import Bill, BillStatusRecord, DebtState, PayPeriod, PayPeriodEstimate
from .store import DocumentStore

T = TypeVar("T")

BILLS_KEY = "bills"
DEBT_STATE_KEY = "debt_state"
PAY_PERIODS_KEY = "pay_periods"
ESTIMATES_KEY = "pay_period_estimates"
BILL_STATUSES_KEY = "bill_statuses"


class DocumentRepository(Generic[T]):
    """Loads, saves and updates one typed document."""

    def __init__(self, store: DocumentStore, key: str, adapter: TypeAdapter,
                 default_factory: Callable[[], T]):
        self.store = store
        self.key = key
        self.adapter = adapter
        self.default_factory = default_factory

    def load(self) -> T:
        raw = self.store.load(self.key)
        if raw is None:
            return self.default_factory()
        return self.adapter.validate_python(raw)

    def save(self, value: T) -> None:
        self.store.save(self.key, self.adapter.dump_python(value, mode="json"))

    def update(self, transform: Callable[[T], T]) -> T:
        """Read the document, apply a pure transform and write the result back."""
        value = transform(self.load())
        self.save(value)
        return value


class Repositories:
    """The planner's five documents."""

    def __init__(self, store: DocumentStore):
        self.store = store
        self.bills: DocumentRepository[List[Bill]] = DocumentRepository(
            store, BILLS_KEY, TypeAdapter(List[Bill]), list
        )
        self.debt_state: DocumentRepository[DebtState] = DocumentRepository(
            store, DEBT_STATE_KEY, TypeAdapter(DebtState), DebtState
        )
        self.pay_periods: DocumentRepository[Dict[str, List[PayPeriod]]] = DocumentRepository(
            store, PAY_PERIODS_KEY, TypeAdapter(Dict[str, List[PayPeriod]]), dict
        )
        self.estimates: DocumentRepository[List[PayPeriodEstimate]] = DocumentRepository(
            store, ESTIMATES_KEY, TypeAdapter(List[PayPeriodEstimate]), list
        )
        self.bill_statuses: DocumentRepository[List[BillStatusRecord]] = DocumentRepository(
            store, BILL_STATUSES_KEY, TypeAdapter(List[BillStatusRecord]), list
        )
