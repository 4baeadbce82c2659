"""
Utility functions for the planner app.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from budget.models import PayPeriod, DebtPaymentSuggestion


def format_currency(amount: Optional[float]) -> str:
    """Format currency amount with commas and 2 decimal places."""
    return f"${(amount or 0):,.2f}"


def format_date(d: date) -> str:
    """Format date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def format_month(d: date) -> str:
    """Format a month heading, e.g. 'March 2025'."""
    return d.strftime("%B %Y")


def format_period_range(period: PayPeriod) -> str:
    """Label a pay period, e.g. 'Mar 1 - Mar 15'."""
    start = period.start_date
    end = period.end_date
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}"


def period_bill_rows(period: PayPeriod) -> List[Dict[str, Any]]:
    """Table rows for the bills of a period."""
    rows = []
    for bill in period.bills:
        if bill.is_credit_card:
            method = f"Card ({bill.utilization:.1f}% utilized)" if bill.utilization is not None else "Card"
        else:
            method = "Credit" if bill.payment_method.value == "credit" else "Checking"
        rows.append({
            "Name": bill.name,
            "Due": bill.due_date.strftime("%b %d"),
            "Amount": format_currency(bill.amount),
            "Paid From": method,
            "AutoPay": "⚡" if bill.is_auto_pay else "",
        })
    return rows


def suggestion_rows(suggestions: List[DebtPaymentSuggestion]) -> List[Dict[str, Any]]:
    return [
        {"Priority": s.priority, "Suggestion": s.reason, "Amount": format_currency(s.suggested_amount)}
        for s in suggestions
    ]
