"""
Per-period income and income estimates.

Income for the current calendar month is whatever the user entered on the
live pay period. Every other month shows an estimate: the one entered for
that exact month and period, or the most recent estimate for the same period
index.
"""
from typing import Dict, List, Optional, Tuple
from datetime import date
import logging

from .models import PayPeriod, PayPeriodEstimate
from .periods import periods_for_month, month_key, is_current_month

logger = logging.getLogger(__name__)

LivePeriods = Dict[str, List[PayPeriod]]


def _check_period_index(period_index: int) -> None:
    if period_index not in (0, 1):
        raise ValueError(f"Period index must be 0 or 1, got {period_index}")


def _stored_income(live_periods: LivePeriods, key: str, period_index: int) -> float:
    stored = live_periods.get(key) or []
    if period_index < len(stored):
        return stored[period_index].income
    return 0.0


def latest_estimate(
    estimates: List[PayPeriodEstimate],
    period_index: int
) -> Optional[PayPeriodEstimate]:
    """Most recent estimate for a period index, by month key descending."""
    candidates = [e for e in estimates if e.period_index == period_index]
    if not candidates:
        return None
    return max(candidates, key=lambda e: e.month)


def income_for(
    key: str,
    period_index: int,
    estimates: List[PayPeriodEstimate],
    live_periods: LivePeriods,
    today: date
) -> Optional[float]:
    """
    Income to show for a period.

    Args:
        key: Month key YYYY-MM
        period_index: 0 for the first half, 1 for the second
        estimates: Stored estimates
        live_periods: Stored pay periods by month key
        today: Current date

    Returns:
        Entered income for the current month, the best estimate for other
        months, or None when no estimate exists
    """
    _check_period_index(period_index)

    if key == month_key(today):
        return _stored_income(live_periods, key, period_index)

    for estimate in estimates:
        if estimate.month == key and estimate.period_index == period_index:
            return estimate.estimated_income

    fallback = latest_estimate(estimates, period_index)
    return fallback.estimated_income if fallback else None


def period_incomes(
    anchor: date,
    estimates: List[PayPeriodEstimate],
    live_periods: LivePeriods,
    today: date
) -> List[Tuple[float, Optional[float]]]:
    """(income, estimated_income) for both periods of the anchor month."""
    key = month_key(anchor)
    current = is_current_month(anchor, today)

    incomes = []
    for period_index in (0, 1):
        if current:
            incomes.append((income_for(key, period_index, estimates, live_periods, today), None))
        else:
            incomes.append((
                _stored_income(live_periods, key, period_index),
                income_for(key, period_index, estimates, live_periods, today),
            ))
    return incomes


def upsert_estimate(
    estimates: List[PayPeriodEstimate],
    key: str,
    period_index: int,
    amount: float
) -> List[PayPeriodEstimate]:
    """Replace the estimate for (month, period index), keeping one entry per pair."""
    kept = [
        e for e in estimates
        if not (e.month == key and e.period_index == period_index)
    ]
    kept.append(PayPeriodEstimate(month=key, period_index=period_index, estimated_income=amount))
    return kept


def set_income(
    anchor: date,
    period_index: int,
    amount: float,
    estimates: List[PayPeriodEstimate],
    live_periods: LivePeriods,
    today: date
) -> Tuple[List[PayPeriodEstimate], LivePeriods]:
    """
    Record income for a period of the anchor month.

    The current month writes actual income and clears the estimate. Other
    months store an estimate and show it on the period, leaving the actual
    income as it was.

    Returns:
        Updated (estimates, live_periods) documents
    """
    _check_period_index(period_index)
    if amount < 0:
        raise ValueError(f"Income cannot be negative, got {amount}")

    key = month_key(anchor)
    stored = [p.model_copy() for p in live_periods.get(key) or periods_for_month(anchor)]

    if is_current_month(anchor, today):
        stored[period_index] = stored[period_index].model_copy(
            update={"income": amount, "estimated_income": None}
        )
        new_estimates = list(estimates)
        logger.debug(f"Set income {amount:.2f} for {key} period {period_index}")
    else:
        new_estimates = upsert_estimate(estimates, key, period_index, amount)
        stored[period_index] = stored[period_index].model_copy(
            update={"estimated_income": amount}
        )
        logger.debug(f"Set estimated income {amount:.2f} for {key} period {period_index}")

    new_live_periods = dict(live_periods)
    new_live_periods[key] = stored
    return new_estimates, new_live_periods
