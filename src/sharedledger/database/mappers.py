"""Mapper functions to convert SQLAlchemy models into domain entities."""

from decimal import Decimal

from sharedledger.domain import entities as domain
from sharedledger.database.models import (
    Group as ORMGroup,
    Participant as ORMParticipant,
    Category as ORMCategory,
    Expense as ORMExpense,
    Income as ORMIncome,
    Settlement as ORMSettlement,
    Budget as ORMBudget,
    ChargeRule as ORMChargeRule,
)


def group_to_domain(orm_group: ORMGroup) -> domain.Group:
    """Convert SQLAlchemy Group model to domain Group entity."""
    return domain.Group(
        id=orm_group.id,
        name=orm_group.name,
        currency=orm_group.currency,
        minor_units=orm_group.minor_units,
        created_at=orm_group.created_at,
    )


def participant_to_domain(orm_participant: ORMParticipant) -> domain.Participant:
    """Convert SQLAlchemy Participant model to domain Participant entity."""
    percentage = orm_participant.percentage_share
    return domain.Participant(
        id=orm_participant.id,
        display_name=orm_participant.display_name,
        weight=Decimal(orm_participant.weight),
        percentage_share=Decimal(percentage) if percentage is not None else None,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        group_id=orm_category.group_id,
        name=orm_category.name,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model (with shares) to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        amount=orm_expense.amount,
        payer_id=orm_expense.payer_id,
        shares=tuple(
            domain.ExpenseShare(participant_id=share.participant_id, amount=share.amount)
            for share in orm_expense.shares
        ),
        occurred_at=orm_expense.occurred_at,
        category_id=orm_expense.category_id,
        period_key=orm_expense.period_key,
        title=orm_expense.title,
    )


def income_to_domain(orm_income: ORMIncome) -> domain.Income:
    """Convert SQLAlchemy Income model to domain Income entity."""
    return domain.Income(
        id=orm_income.id,
        amount=orm_income.amount,
        received_by_id=orm_income.received_by_id,
        occurred_at=orm_income.occurred_at,
        title=orm_income.title,
        category_id=orm_income.category_id,
        source=orm_income.source,
    )


def settlement_to_domain(orm_settlement: ORMSettlement) -> domain.Settlement:
    """Convert SQLAlchemy Settlement model to domain Settlement entity."""
    return domain.Settlement(
        id=orm_settlement.id,
        from_id=orm_settlement.from_id,
        to_id=orm_settlement.to_id,
        amount=orm_settlement.amount,
        occurred_at=orm_settlement.occurred_at,
        note=orm_settlement.note,
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        category_id=orm_budget.category_id,
        amount=orm_budget.amount,
        period_key=orm_budget.period_key,
    )


def charge_rule_to_domain(orm_rule: ORMChargeRule) -> domain.ChargeRule:
    """Convert SQLAlchemy ChargeRule model to domain ChargeRule entity."""
    return domain.ChargeRule(
        id=orm_rule.id,
        title=orm_rule.title,
        amount=orm_rule.amount,
        is_active=orm_rule.is_active,
    )
