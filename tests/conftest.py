"""Shared pytest fixtures for sharedledger tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from sharedledger.database.factories import create_sqlite_database
from sharedledger.domain.budget import BudgetService
from sharedledger.domain.charges import ChargeService
from sharedledger.domain.entities import Participant
from sharedledger.domain.expense import ExpenseService
from sharedledger.domain.group import GroupService
from sharedledger.domain.income import IncomeService
from sharedledger.domain.settlement import SettlementService
from sharedledger.domain.stats import StatsService
from sharedledger.domain.summary import SummaryService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def group_service(temp_db):
    """Create a GroupService with a temporary database."""
    return GroupService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def settlement_service(temp_db):
    """Create a SettlementService with a temporary database."""
    return SettlementService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def charge_service(temp_db):
    """Create a ChargeService with a temporary database."""
    return ChargeService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    """Create a BudgetService with a temporary database."""
    return BudgetService(temp_db)


@pytest.fixture
def income_service(temp_db):
    """Create an IncomeService with a temporary database."""
    return IncomeService(temp_db)


@pytest.fixture
def stats_service(temp_db):
    """Create a StatsService with a temporary database."""
    return StatsService(temp_db)


@pytest.fixture
def sample_group(group_service):
    """Create a trip group with three participants (Alice, Bob, Carol)."""
    group_id = group_service.create_group(name="Lisbon Trip", currency="EUR")
    ids = {}
    for name in ("Alice", "Bob", "Carol"):
        ids[name] = group_service.add_participant(group_id, display_name=name)
    return group_service.get_group(group_id), ids


@pytest.fixture
def building_group(group_service):
    """Create a zero-minor-unit building group with weighted units."""
    group_id = group_service.create_group(name="Building 12", currency="IRR", minor_units=0)
    ids = {}
    for name, weight, pct in (("Unit 1", "60", "50"), ("Unit 2", "90", "30"), ("Unit 3", "50", "20")):
        ids[name] = group_service.add_participant(
            group_id, display_name=name, weight=Decimal(weight), percentage_share=Decimal(pct)
        )
    return group_service.get_group(group_id), ids


@pytest.fixture
def abc_participants():
    """Three in-memory participants with string IDs."""
    return [Participant(id="A", display_name="A"), Participant(id="B", display_name="B"), Participant(id="C", display_name="C")]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
