"""Balance calculation from expenses and settlements."""

from typing import Iterable, Sequence

from sharedledger.domain.entities import (
    Balance,
    Expense,
    Participant,
    ParticipantId,
    Settlement,
)
from sharedledger.domain.errors import (
    ShareMismatchError,
    UnknownParticipantError,
    ValidationError,
    share_sum_mismatch,
    unknown_participant,
)


def compute_balances(
    participants: Sequence[Participant],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement],
) -> list[Balance]:
    """Compute each participant's net balance.

    balance = total_paid - total_owed + (settlements paid - settlements received)

    A settlement pays down a debt, so it raises the payer's balance and
    lowers the receiver's; recording every suggestion from ``simplify`` as
    a settlement brings the group to zero.

    Args:
        participants: Group participants; output follows this order
        expenses: Expenses with allocated shares
        settlements: Recorded settlement payments

    Returns:
        One Balance per participant. The balances always sum to zero.

    Raises:
        UnknownParticipantError: If an expense, share or settlement references
            a participant outside ``participants``
        ShareMismatchError: If an expense's shares don't sum to its amount
        ValidationError: If a settlement is a self-payment or not positive
    """
    paid: dict[ParticipantId, int] = {p.id: 0 for p in participants}
    owed: dict[ParticipantId, int] = {p.id: 0 for p in participants}
    net: dict[ParticipantId, int] = {p.id: 0 for p in participants}

    for expense in expenses:
        validate_expense(expense, paid)
        paid[expense.payer_id] += expense.amount
        for share in expense.shares:
            owed[share.participant_id] += share.amount

    for settlement in settlements:
        validate_settlement(settlement, net)
        net[settlement.from_id] += settlement.amount
        net[settlement.to_id] -= settlement.amount

    return [
        Balance(
            participant_id=p.id,
            total_paid=paid[p.id],
            total_owed=owed[p.id],
            net_from_settlements=net[p.id],
        )
        for p in participants
    ]


def validate_expense(expense: Expense, known_ids) -> None:
    """Check that an expense is internally consistent and references known participants."""
    context = f"Expense {expense.id}"
    if expense.payer_id not in known_ids:
        raise UnknownParticipantError(unknown_participant(expense.payer_id, context))
    if not expense.shares:
        raise ShareMismatchError(f"{context} has no shares")

    seen = set()
    for share in expense.shares:
        if share.participant_id not in known_ids:
            raise UnknownParticipantError(
                unknown_participant(share.participant_id, context)
            )
        if share.participant_id in seen:
            raise ShareMismatchError(
                f"{context} has more than one share for participant {share.participant_id!r}"
            )
        if share.amount < 0:
            raise ShareMismatchError(f"{context} has a negative share")
        seen.add(share.participant_id)

    shares_total = sum(share.amount for share in expense.shares)
    if shares_total != expense.amount:
        raise ShareMismatchError(f"{context}: {share_sum_mismatch(shares_total, expense.amount)}")


def validate_settlement(settlement: Settlement, known_ids=None) -> None:
    """Check settlement invariants (distinct parties, positive amount, known parties)."""
    context = f"Settlement {settlement.id}"
    if known_ids is not None:
        for pid in (settlement.from_id, settlement.to_id):
            if pid not in known_ids:
                raise UnknownParticipantError(unknown_participant(pid, context))
    if settlement.from_id == settlement.to_id:
        raise ValidationError(f"{context}: payer and receiver must be different participants")
    if settlement.amount <= 0:
        raise ValidationError(f"{context}: amount must be greater than zero")
