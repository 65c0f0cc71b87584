"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidSplitError(ValidationError):
    """Weight or percentage mass cannot be split (zero mass, percentages != 100)."""


class ShareMismatchError(ValidationError):
    """Manually supplied shares are negative or do not sum to the expense total."""


class UnknownParticipantError(NotFoundError):
    """An expense, share or settlement references a participant outside the group."""


class UnbalancedLedgerError(DomainError):
    """Balances handed to the settlement simplifier do not sum to zero."""


def group_not_found(group_id: int) -> str:
    """Return message for missing group."""
    return f"Group {group_id} not found"


def participant_not_found(participant_id) -> str:
    """Return message for missing participant."""
    return f"Participant {participant_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def settlement_not_found(settlement_id: int) -> str:
    """Return message for missing settlement."""
    return f"Settlement {settlement_id} not found"


def income_not_found(income_id: int) -> str:
    """Return message for missing income."""
    return f"Income {income_id} not found"


def charge_rule_not_found(rule_id: int) -> str:
    """Return message for missing charge rule."""
    return f"Charge rule {rule_id} not found"


def unknown_participant(participant_id, context: str) -> str:
    """Return message for a reference to a participant outside the group."""
    return f"{context} references unknown participant {participant_id!r}"


def share_sum_mismatch(shares_total: int, total_amount: int) -> str:
    """Return message when manual shares do not add up to the expense total."""
    return (
        f"Shares sum to {shares_total} but the expense total is {total_amount}"
    )


def unbalanced_ledger(total: int) -> str:
    """Return message when balances do not cancel out."""
    return f"Balances sum to {total}, expected 0"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a uniqueness violation on a name."""
    return f"{kind} with name '{name}' already exists"
