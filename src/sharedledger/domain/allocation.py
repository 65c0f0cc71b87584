"""Share allocation for new expenses.

Every allocation returns integer shares in minor units whose sum is exactly
the expense total. Rational arithmetic (``Fraction``) is used for weighted
splits so that no float ever touches a monetary value.
"""

import math
from fractions import Fraction
from typing import Sequence

from sharedledger.domain.entities import (
    EqualSplit,
    ExpenseShare,
    ManualSplit,
    Participant,
    PercentageSplit,
    SplitPolicy,
    SplitType,
    WeightedSplit,
)
from sharedledger.domain.errors import (
    InvalidSplitError,
    ShareMismatchError,
    UnknownParticipantError,
    ValidationError,
    share_sum_mismatch,
    unknown_participant,
)

FULL_PERCENTAGE = Fraction(100)


def allocate(
    total_amount: int,
    participants: Sequence[Participant],
    policy: SplitPolicy,
) -> list[ExpenseShare]:
    """Allocate an expense total among participants.

    Args:
        total_amount: Expense total in minor units (>= 0)
        participants: Participants sharing the expense, in the stable order
            used to break ties when distributing remainder units
        policy: Split policy variant

    Returns:
        One ExpenseShare per participant, in participant order

    Raises:
        ValidationError: If the total is negative or the participant set is
            empty or contains duplicates
        InvalidSplitError: If weights/percentages cannot be split
        ShareMismatchError: If manual amounts are negative or don't add up
        UnknownParticipantError: If manual amounts name a non-participant
    """
    if isinstance(total_amount, bool) or not isinstance(total_amount, int):
        raise ValidationError(f"Amount must be an integer number of minor units, got {total_amount!r}")
    if total_amount < 0:
        raise ValidationError(f"Amount must not be negative, got {total_amount}")
    if not participants:
        raise ValidationError("Cannot allocate an expense without participants")

    ids = [p.id for p in participants]
    if len(set(ids)) != len(ids):
        raise ValidationError("Participants must be unique within an expense")

    if isinstance(policy, EqualSplit):
        amounts = split_equal(total_amount, len(participants))
    elif isinstance(policy, WeightedSplit):
        amounts = split_weighted(total_amount, [Fraction(p.weight) for p in participants])
    elif isinstance(policy, PercentageSplit):
        amounts = split_percentage(total_amount, participants)
    elif isinstance(policy, ManualSplit):
        return split_manual(total_amount, participants, policy)
    else:
        raise ValidationError(f"Unsupported split policy: {policy!r}")

    return [
        ExpenseShare(participant_id=pid, amount=amount)
        for pid, amount in zip(ids, amounts)
    ]


def split_equal(total_amount: int, count: int) -> list[int]:
    """Split evenly; the first ``total % count`` parts get one extra unit."""
    base, remainder = divmod(total_amount, count)
    return [base + (1 if index < remainder else 0) for index in range(count)]


def split_weighted(total_amount: int, weights: Sequence[Fraction]) -> list[int]:
    """Split proportionally using the largest-remainder method.

    Each part is floored first; leftover units go to the parts with the
    largest fractional remainder, ties resolved by position.
    """
    if any(weight < 0 for weight in weights):
        raise InvalidSplitError("Weights must not be negative")
    mass = sum(weights, Fraction(0))
    if mass <= 0:
        raise InvalidSplitError("Total weight must be greater than zero")

    exact = [Fraction(total_amount) * weight / mass for weight in weights]
    floors = [math.floor(value) for value in exact]
    leftover = total_amount - sum(floors)

    # Largest fractional part first, input order breaks ties
    order = sorted(range(len(exact)), key=lambda i: (-(exact[i] - floors[i]), i))
    for index in order[:leftover]:
        floors[index] += 1
    return floors


def split_percentage(total_amount: int, participants: Sequence[Participant]) -> list[int]:
    """Split by percentage share; percentages must total exactly 100."""
    percentages = [
        Fraction(p.percentage_share) if p.percentage_share is not None else Fraction(0)
        for p in participants
    ]
    if any(pct < 0 or pct > FULL_PERCENTAGE for pct in percentages):
        raise InvalidSplitError("Percentages must be between 0 and 100")
    total_percentage = sum(percentages, Fraction(0))
    if total_percentage != FULL_PERCENTAGE:
        raise InvalidSplitError(
            f"Percentages must sum to 100, got {total_percentage}"
        )
    return split_weighted(total_amount, percentages)


def split_manual(
    total_amount: int,
    participants: Sequence[Participant],
    policy: ManualSplit,
) -> list[ExpenseShare]:
    """Validate caller-supplied amounts and return them as shares."""
    if not policy.amounts:
        raise ShareMismatchError("Manual split requires at least one share")

    known = {p.id for p in participants}
    for pid in policy.amounts:
        if pid not in known:
            raise UnknownParticipantError(unknown_participant(pid, "Manual split"))

    for pid, amount in policy.amounts.items():
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ShareMismatchError(f"Share for participant {pid!r} must be an integer")
        if amount < 0:
            raise ShareMismatchError(f"Share for participant {pid!r} must not be negative")

    shares_total = sum(policy.amounts.values())
    if shares_total != total_amount:
        raise ShareMismatchError(share_sum_mismatch(shares_total, total_amount))

    return [
        ExpenseShare(participant_id=p.id, amount=policy.amounts[p.id])
        for p in participants
        if p.id in policy.amounts
    ]


def split_policy_for(
    split_type: SplitType, manual_amounts: dict | None = None
) -> SplitPolicy:
    """Build the policy variant for a persisted split type."""
    if split_type == SplitType.EQUAL:
        return EqualSplit()
    if split_type == SplitType.WEIGHTED:
        return WeightedSplit()
    if split_type == SplitType.PERCENTAGE:
        return PercentageSplit()
    if manual_amounts is None:
        raise ShareMismatchError("Custom shares required for manual split")
    return ManualSplit(amounts=dict(manual_amounts))
