"""
Extra debt payment allocation engine.
"""
from typing import List, Sequence, Union
import logging
import math
from .models import CreditCard, Debt, DebtPaymentSuggestion, DebtSettings

logger = logging.getLogger(__name__)

TOP_PRIORITY = 90


class DebtPaymentAllocator:
    """Suggests extra credit card payments from money left over after bills."""

    def __init__(self, settings: DebtSettings):
        self.settings = settings

    def suggest(
        self,
        available_amount: float,
        debts: Sequence[Union[CreditCard, Debt]]
    ) -> List[DebtPaymentSuggestion]:
        """
        Suggest extra payments across credit cards.

        Order of operations:
        1. Keep the variable threshold aside
        2. Cover every card's minimum payment
        3. Split what is left by a blend of APR share and balance share

        Args:
            available_amount: Period income minus the period's bills
            debts: All debts; only credit cards with a balance are considered

        Returns:
            Suggestions sorted by priority, highest first
        """
        remaining_amount = available_amount - self.settings.variable_threshold
        if remaining_amount <= 0:
            return []

        cards = [
            debt for debt in debts
            if isinstance(debt, CreditCard) and debt.current_balance > 0
        ]
        if not cards:
            return []

        total_min_payments = sum(card.minimum_payment for card in cards)
        extra_amount = remaining_amount - total_min_payments
        if extra_amount <= 0:
            logger.debug(
                f"No surplus: {remaining_amount:.2f} does not cover minimums of {total_min_payments:.2f}"
            )
            return []

        # Highest APR first; sorted() keeps input order for ties
        prioritized_cards = sorted(cards, key=lambda c: c.apr, reverse=True)
        apr_total = sum(card.apr for card in prioritized_cards)
        balance_total = sum(card.current_balance for card in prioritized_cards)

        suggestions = []
        for index, card in enumerate(prioritized_cards):
            weight = self._combined_weight(card, apr_total, balance_total)
            suggested = min(
                max(self.settings.minimum_extra_payment, math.floor(extra_amount * weight)),
                card.current_balance
            )

            if suggested > 0:
                suggestions.append(DebtPaymentSuggestion(
                    debt_id=card.id,
                    suggested_amount=suggested,
                    reason=f"Suggested payment for {card.name}",
                    priority=TOP_PRIORITY - index
                ))

        suggestions.sort(key=lambda s: s.priority, reverse=True)
        return suggestions

    def _combined_weight(self, card: CreditCard, apr_total: float, balance_total: float) -> float:
        """Average of the card's APR share and balance share. Zero totals weigh nothing."""
        apr_weight = card.apr / apr_total if apr_total > 0 else 0.0
        balance_weight = card.current_balance / balance_total if balance_total > 0 else 0.0
        return (apr_weight + balance_weight) / 2
