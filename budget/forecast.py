"""
Month-specific amount resolution for bills.
"""
from typing import List

from .models import Bill, BillForecast


def resolve_amount(bill: Bill, month_key: str) -> float:
    """
    Resolve the amount a bill charges in a given month.

    Recurring bills use the forecast for the month when one exists and fall
    back to the flat amount otherwise. One-off bills always use the flat amount.

    Args:
        bill: Bill to resolve
        month_key: Target month as YYYY-MM

    Returns:
        Amount for that month
    """
    if not bill.is_recurring:
        return bill.amount or 0.0

    forecast = bill.forecast_for(month_key)
    if forecast is not None:
        return forecast.estimated_amount
    return bill.amount or 0.0


def upsert_forecast(bill: Bill, month_key: str, amount: float) -> Bill:
    """Return a copy of the bill with the month's forecast added or replaced."""
    if not bill.is_recurring:
        raise ValueError(f"Bill '{bill.name}' is not recurring and cannot have forecasts")

    new_forecast = BillForecast(month=month_key, estimated_amount=amount)
    forecasts: List[BillForecast] = [f for f in bill.forecasts or [] if f.month != month_key]
    forecasts.append(new_forecast)
    forecasts.sort(key=lambda f: f.month)
    return bill.model_copy(update={"forecasts": forecasts})


def remove_forecast(bill: Bill, month_key: str) -> Bill:
    """Return a copy of the bill without the month's forecast."""
    if not bill.forecasts:
        return bill
    forecasts = [f for f in bill.forecasts if f.month != month_key]
    return bill.model_copy(update={"forecasts": forecasts or None})
