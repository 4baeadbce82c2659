"""
Budget models for bills, pay periods and revolving debt.
"""
import uuid
from typing import List, Optional, Union, Literal, Annotated
from datetime import date
from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator

MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def new_id() -> str:
    """Generate a new entity identifier."""
    return str(uuid.uuid4())


class PaymentMethod(str, Enum):
    """Account a bill is paid from."""
    CHECKING = "checking"
    CREDIT = "credit"


class RecurrenceFrequency(str, Enum):
    """Recurrence patterns for recurring bills."""
    WEEKLY = "weekly"
    BIWEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    ANNUALLY = "annually"


class BillStatus(str, Enum):
    """Payment status of a bill within a month."""
    PAID = "paid"
    UNPAID = "unpaid"


class BillForecast(BaseModel):
    """Expected amount of a recurring bill for one month."""
    month: str = Field(..., pattern=MONTH_KEY_PATTERN, description="Month key YYYY-MM")
    estimated_amount: float = Field(..., ge=0)


class Bill(BaseModel):
    """A one-off or recurring bill."""
    id: str = Field(default_factory=new_id)
    name: str
    amount: float = Field(..., ge=0)
    due_date: date
    notes: Optional[str] = None
    is_auto_pay: bool = False
    payment_method: PaymentMethod = PaymentMethod.CHECKING
    credit_card_name: Optional[str] = None
    is_recurring: bool = False
    recurrence_frequency: Optional[RecurrenceFrequency] = None
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    forecasts: Optional[List[BillForecast]] = None
    status: Optional[BillStatus] = None
    logo_url: Optional[str] = None
    company_domain: Optional[str] = None

    @field_validator('forecasts')
    @classmethod
    def forecast_months_unique(cls, v):
        if v is None:
            return v
        months = [f.month for f in v]
        if len(months) != len(set(months)):
            raise ValueError('At most one forecast per month is allowed')
        return v

    @model_validator(mode='after')
    def drop_recurrence_fields(self):
        # Recurrence details only exist on recurring bills
        if not self.is_recurring:
            self.forecasts = None
            self.day_of_month = None
            self.recurrence_frequency = None
        return self

    def forecast_for(self, month_key: str) -> Optional[BillForecast]:
        """Get the forecast entry for a month key, if any."""
        for forecast in self.forecasts or []:
            if forecast.month == month_key:
                return forecast
        return None


class BillStatusRecord(BaseModel):
    """Paid/unpaid flag of a bill for one month."""
    bill_id: str
    period_key: str = Field(..., pattern=MONTH_KEY_PATTERN)
    status: BillStatus = BillStatus.UNPAID


class PeriodBill(BaseModel):
    """A bill as displayed inside a pay period."""
    id: str
    name: str
    amount: float = Field(..., ge=0)
    due_date: date
    kind: Literal["bill", "credit_card"] = "bill"
    is_auto_pay: bool = False
    payment_method: PaymentMethod = PaymentMethod.CHECKING
    is_recurring: bool = False
    current_balance: Optional[float] = None
    credit_limit: Optional[float] = None
    apr: Optional[float] = None

    @property
    def is_credit_card(self) -> bool:
        return self.kind == "credit_card"

    @property
    def utilization(self) -> Optional[float]:
        """Credit utilization percentage for card entries."""
        if not self.is_credit_card or not self.credit_limit:
            return None
        return (self.current_balance or 0) / self.credit_limit * 100


class PayPeriod(BaseModel):
    """One half-month pay period."""
    start_date: date
    end_date: date
    income: float = Field(0.0, ge=0)
    estimated_income: Optional[float] = Field(None, ge=0)
    bills: List[PeriodBill] = Field(default_factory=list)

    @model_validator(mode='after')
    def dates_in_order(self):
        if self.end_date < self.start_date:
            raise ValueError('Pay period cannot end before it starts')
        return self

    @property
    def index(self) -> int:
        """0 for the 1st-15th period, 1 for the 16th-end period."""
        return 0 if self.start_date.day == 1 else 1

    @property
    def month_key(self) -> str:
        return self.start_date.strftime("%Y-%m")

    @property
    def total_bills(self) -> float:
        return sum(bill.amount for bill in self.bills)

    @property
    def available_income(self) -> float:
        """Actual income, else the estimate, else zero."""
        return self.income or self.estimated_income or 0.0

    @property
    def remaining(self) -> float:
        """Money left after the period's bills."""
        return self.available_income - self.total_bills


class PayPeriodEstimate(BaseModel):
    """User-entered income guess for a non-current pay period."""
    month: str = Field(..., pattern=MONTH_KEY_PATTERN)
    period_index: int = Field(..., ge=0, le=1)
    estimated_income: float = Field(..., ge=0)


class DebtPayment(BaseModel):
    """A payment made against a debt."""
    id: str = Field(default_factory=new_id)
    date: date
    amount: float = Field(..., gt=0)


class Debt(BaseModel):
    """An installment debt."""
    kind: Literal["debt"] = "debt"
    id: str = Field(default_factory=new_id)
    name: str
    total_amount: float = Field(0.0, ge=0)
    current_balance: float = Field(..., ge=0)
    interest_rate: float = Field(0.0, ge=0)
    minimum_payment: float = Field(0.0, ge=0)
    payment_history: List[DebtPayment] = Field(default_factory=list)

    @property
    def is_credit_card(self) -> bool:
        return False


class CreditCard(Debt):
    """A revolving credit card account."""
    kind: Literal["credit"] = "credit"
    credit_limit: float = Field(0.0, ge=0)
    utilization_target: float = Field(0.3, ge=0, le=1)
    apr: float = Field(0.0, ge=0, description="Annual percentage rate (0.0 to 1.0)")
    due_day: int = Field(..., ge=1, le=31, description="Payment due day of month")
    statement_balance: Optional[float] = None
    last_payment_date: Optional[date] = None
    last_payment_amount: Optional[float] = None

    @property
    def is_credit_card(self) -> bool:
        return True

    @property
    def utilization(self) -> float:
        """Calculate credit utilization percentage."""
        return (self.current_balance / self.credit_limit) * 100 if self.credit_limit > 0 else 0


AnyDebt = Annotated[Union[CreditCard, Debt], Field(discriminator="kind")]


class DebtPaymentSuggestion(BaseModel):
    """Suggested extra payment for a debt. Never persisted."""
    debt_id: str
    suggested_amount: float = Field(..., gt=0)
    reason: str
    priority: int


class DebtSettings(BaseModel):
    """User debt payoff settings."""
    variable_threshold: float = Field(500.0, ge=0, description="Leftover income kept before suggesting payments")
    aggressive_payoff: bool = Field(False)
    minimum_extra_payment: float = Field(50.0, ge=0, description="Floor on any suggested payment")


class DebtState(BaseModel):
    """All debts plus payoff settings, persisted as one document."""
    debts: List[AnyDebt] = Field(default_factory=list)
    settings: DebtSettings = Field(default_factory=DebtSettings)

    def get_debt(self, debt_id: str) -> Optional[Union[CreditCard, Debt]]:
        """Get debt by ID."""
        for debt in self.debts:
            if debt.id == debt_id:
                return debt
        return None

    def credit_cards(self) -> List[CreditCard]:
        """Get the credit card debts."""
        return [debt for debt in self.debts if isinstance(debt, CreditCard)]
