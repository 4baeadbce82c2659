"""
Tests for display helpers and configuration.
"""
from datetime import date

from app.config import AppConfig, DEFAULT_COMPANY_LOOKUP_URL
from app.utils import (
    format_currency, format_date, format_month, format_period_range,
    period_bill_rows, suggestion_rows
)
from budget.models import DebtPaymentSuggestion, PaymentMethod, PeriodBill
from budget.periods import periods_for_month


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(0) == "$0.00"
    assert format_currency(None) == "$0.00"


def test_format_dates():
    assert format_date(date(2024, 3, 7)) == "2024-03-07"
    assert format_month(date(2024, 3, 7)) == "March 2024"

    first, second = periods_for_month(date(2024, 2, 10))
    assert format_period_range(first) == "Feb 1 - Feb 15"
    assert format_period_range(second) == "Feb 16 - Feb 29"


def test_period_bill_rows():
    first, _ = periods_for_month(date(2024, 3, 1))
    period = first.model_copy(update={"bills": [
        PeriodBill(id="b1", name="Rent", amount=1400.0, due_date=date(2024, 3, 1), is_auto_pay=True),
        PeriodBill(id="b2", name="Gym", amount=40.0, due_date=date(2024, 3, 9),
                   payment_method=PaymentMethod.CREDIT),
        PeriodBill(id="visa", name="Visa", amount=50.0, due_date=date(2024, 3, 12), kind="credit_card",
                   current_balance=1000.0, credit_limit=4000.0, apr=0.2),
    ]})

    rows = period_bill_rows(period)
    assert [r["Paid From"] for r in rows] == ["Checking", "Credit", "Card (25.0% utilized)"]
    assert rows[0]["Amount"] == "$1,400.00"
    assert rows[0]["AutoPay"] == "⚡"
    assert rows[1]["Due"] == "Mar 09"


def test_suggestion_rows():
    rows = suggestion_rows([
        DebtPaymentSuggestion(debt_id="A", suggested_amount=391, reason="Suggested payment for Card A", priority=90)
    ])
    assert rows == [{"Priority": 90, "Suggestion": "Suggested payment for Card A", "Amount": "$391.00"}]


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("PLANNER_STORE", "memory")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("COMPANY_LOOKUP_URL", raising=False)

    config = AppConfig.from_env()
    assert config.store_backend == "memory"
    assert config.http_timeout_seconds == 2.5
    assert config.log_level == "DEBUG"
    assert config.company_lookup_url == DEFAULT_COMPANY_LOOKUP_URL
