"""SQLAlchemy models for the sharedledger database.

Monetary columns hold integer minor units.
"""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Group(Base):
    """Cost-sharing group model."""

    __tablename__ = "groups"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    currency = Column(String, nullable=False, default="USD")
    minor_units = Column(Integer, nullable=False, default=2)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    participants = relationship(
        "Participant", back_populates="group", cascade="all, delete-orphan", order_by="Participant.id"
    )
    expenses = relationship("Expense", back_populates="group", cascade="all, delete-orphan")


class Participant(Base):
    """Group member model."""

    __tablename__ = "participants"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    display_name = Column(String, nullable=False)
    weight = Column(Numeric(12, 4), nullable=False, default=1)
    percentage_share = Column(Numeric(7, 4), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("group_id", "display_name", name="uq_group_participant_name"),)

    # Relationships
    group = relationship("Group", back_populates="participants")


class Category(Base):
    """Spending category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    name = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("group_id", "name", name="uq_group_category_name"),)


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    title = Column(String, nullable=True)
    amount = Column(Integer, nullable=False)
    payer_id = Column(Integer, ForeignKey("participants.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    period_key = Column(String, nullable=True)
    split_type = Column(String, nullable=False, default="equal")
    occurred_at = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    group = relationship("Group", back_populates="expenses")
    shares = relationship(
        "ExpenseShare", back_populates="expense", cascade="all, delete-orphan", order_by="ExpenseShare.id"
    )


class ExpenseShare(Base):
    """Per-participant share of an expense."""

    __tablename__ = "expense_shares"

    id = Column(Integer, primary_key=True)
    expense_id = Column(Integer, ForeignKey("expenses.id"), nullable=False)
    participant_id = Column(Integer, ForeignKey("participants.id"), nullable=False)
    amount = Column(Integer, nullable=False)

    __table_args__ = (UniqueConstraint("expense_id", "participant_id", name="uq_expense_participant"),)

    # Relationships
    expense = relationship("Expense", back_populates="shares")


class Income(Base):
    """Money received by a participant."""

    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    title = Column(String, nullable=True)
    amount = Column(Integer, nullable=False)
    received_by_id = Column(Integer, ForeignKey("participants.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    source = Column(String, nullable=True)
    occurred_at = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Settlement(Base):
    """Recorded payment between two participants."""

    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    from_id = Column(Integer, ForeignKey("participants.id"), nullable=False)
    to_id = Column(Integer, ForeignKey("participants.id"), nullable=False)
    amount = Column(Integer, nullable=False)
    occurred_at = Column(Date, nullable=False)
    note = Column(String, nullable=True)


class Budget(Base):
    """Category budget for a period."""

    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    period_key = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("group_id", "category_id", "period_key", name="uq_budget_category_period"),
    )


class ChargeRule(Base):
    """Recurring fixed charge component of a group."""

    __tablename__ = "charge_rules"

    id = Column(Integer, primary_key=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False)
    title = Column(String, nullable=False)
    amount = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
