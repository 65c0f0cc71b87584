"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from sharedledger.domain.entities import (
    Budget,
    Category,
    ChargeRule,
    Expense,
    ExpenseShare,
    Group,
    Income,
    Participant,
    Settlement,
)


class Database(ABC):
    """Abstract database interface for sharedledger.

    Supplies group snapshots (participants, expenses, settlements, budgets,
    charge rules) to the ledger engine and persists new records.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Group operations
    @abstractmethod
    def create_group(self, name: str, currency: str, minor_units: int) -> int:
        """Create a group. Returns group ID."""
        pass

    @abstractmethod
    def get_group(self, group_id: int) -> Optional[Group]:
        """Get group by ID."""
        pass

    @abstractmethod
    def list_groups(self) -> list[Group]:
        """List all groups."""
        pass

    # Participant operations
    @abstractmethod
    def create_participant(
        self,
        group_id: int,
        display_name: str,
        weight: Decimal = Decimal(1),
        percentage_share: Optional[Decimal] = None,
    ) -> int:
        """Add a participant to a group. Returns participant ID."""
        pass

    @abstractmethod
    def get_participant(self, participant_id: int) -> Optional[Participant]:
        """Get participant by ID."""
        pass

    @abstractmethod
    def get_participant_group_id(self, participant_id: int) -> Optional[int]:
        """Get the group a participant belongs to."""
        pass

    @abstractmethod
    def list_participants(self, group_id: int) -> list[Participant]:
        """List participants of a group in creation order."""
        pass

    @abstractmethod
    def update_participant(
        self,
        participant_id: int,
        display_name: Optional[str] = None,
        weight: Optional[Decimal] = None,
        percentage_share: Optional[Decimal] = None,
        clear_percentage: bool = False,
    ) -> None:
        """Update participant name, weight or percentage share.

        None leaves a field unchanged; clear_percentage sets the share to NULL.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, group_id: int, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, group_id: int) -> list[Category]:
        """List categories of a group."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        group_id: int,
        amount: int,
        payer_id: int,
        shares: Sequence[ExpenseShare],
        occurred_at: date,
        split_type: str,
        title: Optional[str] = None,
        category_id: Optional[int] = None,
        period_key: Optional[str] = None,
    ) -> int:
        """Create an expense and its shares in one transaction. Returns expense ID."""
        pass

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """Get expense (with shares) by ID."""
        pass

    @abstractmethod
    def list_expenses(
        self,
        group_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        period_key: Optional[str] = None,
    ) -> list[Expense]:
        """List expenses of a group with optional date/period filters."""
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> None:
        """Delete an expense and its shares."""
        pass

    @abstractmethod
    def get_expense_group_id(self, expense_id: int) -> Optional[int]:
        """Get the group an expense belongs to."""
        pass

    # Income operations
    @abstractmethod
    def create_income(
        self,
        group_id: int,
        amount: int,
        received_by_id: int,
        occurred_at: date,
        title: Optional[str] = None,
        category_id: Optional[int] = None,
        source: Optional[str] = None,
    ) -> int:
        """Record an income. Returns income ID."""
        pass

    @abstractmethod
    def get_income(self, income_id: int) -> Optional[Income]:
        """Get income by ID."""
        pass

    @abstractmethod
    def list_incomes(
        self,
        group_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category_id: Optional[int] = None,
        received_by_id: Optional[int] = None,
        source: Optional[str] = None,
    ) -> list[Income]:
        """List incomes of a group with optional filters."""
        pass

    @abstractmethod
    def delete_income(self, income_id: int) -> None:
        """Delete an income."""
        pass

    @abstractmethod
    def get_income_group_id(self, income_id: int) -> Optional[int]:
        """Get the group an income belongs to."""
        pass

    # Settlement operations
    @abstractmethod
    def create_settlement(
        self,
        group_id: int,
        from_id: int,
        to_id: int,
        amount: int,
        occurred_at: date,
        note: Optional[str] = None,
    ) -> int:
        """Record a settlement. Returns settlement ID."""
        pass

    @abstractmethod
    def get_settlement(self, settlement_id: int) -> Optional[Settlement]:
        """Get settlement by ID."""
        pass

    @abstractmethod
    def list_settlements(self, group_id: int) -> list[Settlement]:
        """List settlements of a group."""
        pass

    @abstractmethod
    def delete_settlement(self, settlement_id: int) -> None:
        """Delete a settlement."""
        pass

    # Budget operations
    @abstractmethod
    def upsert_budget(self, group_id: int, category_id: int, period_key: str, amount: int) -> int:
        """Create or update the budget of a category for a period. Returns budget ID."""
        pass

    @abstractmethod
    def list_budgets(self, group_id: int, period_key: str) -> list[Budget]:
        """List budgets of a group for a period."""
        pass

    # Charge rule operations
    @abstractmethod
    def create_charge_rule(self, group_id: int, title: str, amount: int) -> int:
        """Create a charge rule. Returns rule ID."""
        pass

    @abstractmethod
    def list_charge_rules(self, group_id: int, active_only: bool = False) -> list[ChargeRule]:
        """List charge rules of a group."""
        pass

    @abstractmethod
    def set_charge_rule_active(self, rule_id: int, is_active: bool) -> None:
        """Activate or deactivate a charge rule."""
        pass
