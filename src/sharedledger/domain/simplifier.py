"""Debt simplification.

Greedy min-cash-flow: the largest debtor repeatedly pays the largest
creditor until every balance is zero. Each step zeroes at least one party,
so n non-zero balances need at most n - 1 transfers.
"""

import heapq
import logging
from typing import Sequence

from sharedledger.domain.entities import Balance, ParticipantId, SettlementSuggestion
from sharedledger.domain.errors import UnbalancedLedgerError, unbalanced_ledger

logger = logging.getLogger(__name__)


def simplify(balances: Sequence[Balance]) -> list[SettlementSuggestion]:
    """Suggest transfers that bring every balance to zero.

    Ties between equal balances are broken by position in ``balances``.

    Args:
        balances: Net balances of a group, in stable participant order

    Returns:
        Suggested transfers, largest debts first

    Raises:
        UnbalancedLedgerError: If the balances don't sum to zero
    """
    total = sum(b.balance for b in balances)
    if total != 0:
        raise UnbalancedLedgerError(unbalanced_ledger(total))

    # Heap entries: (-remaining, position, participant_id)
    creditors: list[tuple[int, int, ParticipantId]] = []
    debtors: list[tuple[int, int, ParticipantId]] = []
    for position, entry in enumerate(balances):
        if entry.balance > 0:
            creditors.append((-entry.balance, position, entry.participant_id))
        elif entry.balance < 0:
            debtors.append((entry.balance, position, entry.participant_id))
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    suggestions: list[SettlementSuggestion] = []
    while creditors and debtors:
        credit_neg, credit_pos, creditor = heapq.heappop(creditors)
        debt_neg, debt_pos, debtor = heapq.heappop(debtors)

        amount = min(-credit_neg, -debt_neg)
        suggestions.append(
            SettlementSuggestion(from_id=debtor, to_id=creditor, amount=amount)
        )

        remaining_credit = -credit_neg - amount
        remaining_debt = -debt_neg - amount
        if remaining_credit > 0:
            heapq.heappush(creditors, (-remaining_credit, credit_pos, creditor))
        if remaining_debt > 0:
            heapq.heappush(debtors, (-remaining_debt, debt_pos, debtor))

    logger.debug(
        "Simplified %d balances into %d transfers", len(balances), len(suggestions)
    )
    return suggestions
