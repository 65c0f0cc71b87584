"""Tests for the command line interface."""

from datetime import date

import pytest
from sharedledger.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_help_does_not_need_database(cli_runner):
    """Test top-level help."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "expense" in result.output
    assert "balance" in result.output


def test_group_create_and_list(cli_runner, temp_db):
    """Test creating and listing groups."""
    result = _invoke(cli_runner, temp_db, "group", "create", "Flat", "--currency", "eur")
    assert result.exit_code == 0
    assert "Created group 'Flat'" in result.output

    result = _invoke(cli_runner, temp_db, "group", "list")
    assert result.exit_code == 0
    assert "Flat" in result.output
    assert "EUR" in result.output


def test_group_list_empty(cli_runner, temp_db):
    """Test listing groups when none exist."""
    result = _invoke(cli_runner, temp_db, "group", "list")

    assert result.exit_code == 0
    assert "No groups found" in result.output


def test_group_create_duplicate(cli_runner, temp_db, sample_group):
    """Test duplicate group names fail."""
    result = _invoke(cli_runner, temp_db, "group", "create", "Lisbon Trip")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch):
    """Test the database path falls back to SHAREDLEDGER_DB_PATH."""
    monkeypatch.setenv("SHAREDLEDGER_DB_PATH", temp_db.database_path)

    result = cli_runner.invoke(cli, ["group", "create", "Flat"])

    assert result.exit_code == 0
    assert [g.name for g in temp_db.list_groups()] == ["Flat"]


def test_participant_add_and_list(cli_runner, temp_db, sample_group):
    """Test adding a weighted participant."""
    result = _invoke(
        cli_runner, temp_db, "participant", "add", "Lisbon Trip", "Dan", "--weight", "2", "--percentage", "10"
    )
    assert result.exit_code == 0
    assert "Added 'Dan'" in result.output

    result = _invoke(cli_runner, temp_db, "participant", "list", "Lisbon Trip")
    assert result.exit_code == 0
    assert "Alice" in result.output
    assert "Dan" in result.output


def test_participant_add_invalid_weight(cli_runner, temp_db, sample_group):
    """Test invalid weights are rejected."""
    result = _invoke(cli_runner, temp_db, "participant", "add", "Lisbon Trip", "Dan", "--weight", "heavy")

    assert result.exit_code == 1
    assert "Invalid weight" in result.output


def test_participant_update(cli_runner, temp_db, sample_group, group_service):
    """Test renaming a participant by name."""
    group, ids = sample_group

    result = _invoke(cli_runner, temp_db, "participant", "update", "Lisbon Trip", "Bob", "--name", "Robert")

    assert result.exit_code == 0
    names = [p.display_name for p in group_service.list_participants(group.id)]
    assert names == ["Alice", "Robert", "Carol"]


@pytest.mark.parametrize("weight", ["NaN", "Infinity", "-inf"])
def test_participant_add_non_finite_weight(cli_runner, temp_db, sample_group, weight):
    """Test NaN and infinite weights fail with an error message."""
    result = _invoke(cli_runner, temp_db, "participant", "add", "Lisbon Trip", "Dan", "--weight", weight)

    assert result.exit_code == 1
    assert "Error: Invalid weight" in result.output
    assert isinstance(result.exception, SystemExit)


def test_participant_add_too_precise_percentage(cli_runner, temp_db, sample_group):
    """Test percentages with more than four decimal places are rejected."""
    result = _invoke(
        cli_runner, temp_db, "participant", "add", "Lisbon Trip", "Dan", "--percentage", "33.33333"
    )

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "decimal places" in result.output


def test_participant_clear_percentage(cli_runner, temp_db, building_group, group_service):
    """Test removing a participant's percentage share."""
    group, ids = building_group

    result = _invoke(cli_runner, temp_db, "participant", "update", "Building 12", "Unit 2", "--clear-percentage")

    assert result.exit_code == 0
    unit2 = [p for p in group_service.list_participants(group.id) if p.id == ids["Unit 2"]][0]
    assert unit2.percentage_share is None


def test_participant_clear_and_set_percentage(cli_runner, temp_db, building_group):
    """Test --clear-percentage cannot be combined with --percentage."""
    result = _invoke(
        cli_runner,
        temp_db,
        "participant",
        "update",
        "Building 12",
        "Unit 2",
        "--clear-percentage",
        "--percentage",
        "30",
    )

    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_participant_update_nothing(cli_runner, temp_db, sample_group):
    """Test update without options fails."""
    result = _invoke(cli_runner, temp_db, "participant", "update", "Lisbon Trip", "Bob")

    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_unknown_group(cli_runner, temp_db):
    """Test commands on a missing group fail cleanly."""
    result = _invoke(cli_runner, temp_db, "participant", "list", "Nowhere")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_expense_add_equal(cli_runner, temp_db, sample_group, expense_service):
    """Test adding an equal split expense."""
    group, ids = sample_group

    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "Lisbon Trip",
        "--amount",
        "1.00",
        "--payer",
        "Bob",
        "--date",
        "2024-01-15",
        "--title",
        "Coffee",
    )

    assert result.exit_code == 0
    assert "Recorded expense" in result.output
    assert "1.00 EUR" in result.output
    (expense,) = expense_service.list_expenses(group.id)
    assert expense.occurred_at == date(2024, 1, 15)
    assert [s.amount for s in expense.shares] == [34, 33, 33]


def test_expense_add_manual(cli_runner, temp_db, sample_group, expense_service):
    """Test adding a manual split expense."""
    group, ids = sample_group

    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "Lisbon Trip",
        "--amount",
        "30",
        "--payer",
        "Alice",
        "--split",
        "manual",
        "--share",
        "Alice=10",
        "--share",
        "Carol=20",
    )

    assert result.exit_code == 0
    (expense,) = expense_service.list_expenses(group.id)
    assert [(s.participant_id, s.amount) for s in expense.shares] == [
        (ids["Alice"], 1000),
        (ids["Carol"], 2000),
    ]


def test_expense_add_manual_mismatch(cli_runner, temp_db, sample_group):
    """Test manual shares that don't add up."""
    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "Lisbon Trip",
        "--amount",
        "30",
        "--payer",
        "Alice",
        "--split",
        "manual",
        "--share",
        "Alice=10",
    )

    assert result.exit_code == 1
    assert "Shares sum to" in result.output


def test_expense_add_share_without_manual(cli_runner, temp_db, sample_group):
    """Test --share requires a manual split."""
    result = _invoke(
        cli_runner, temp_db, "expense", "add", "Lisbon Trip", "--amount", "30", "--payer", "Alice", "--share", "Alice=30"
    )

    assert result.exit_code == 1
    assert "--split manual" in result.output


def test_expense_add_only_subset(cli_runner, temp_db, sample_group, expense_service):
    """Test restricting the split to some participants."""
    group, ids = sample_group

    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "Lisbon Trip",
        "--amount",
        "10",
        "--payer",
        "Alice",
        "--only",
        "Bob",
        "--only",
        "Carol",
    )

    assert result.exit_code == 0
    (expense,) = expense_service.list_expenses(group.id)
    assert {s.participant_id for s in expense.shares} == {ids["Bob"], ids["Carol"]}


def test_expense_add_only_with_manual(cli_runner, temp_db, sample_group, expense_service):
    """Test --only is rejected for manual splits."""
    group, _ = sample_group

    result = _invoke(
        cli_runner,
        temp_db,
        "expense",
        "add",
        "Lisbon Trip",
        "--amount",
        "30",
        "--payer",
        "Alice",
        "--split",
        "manual",
        "--share",
        "Alice=30",
        "--only",
        "Bob",
    )

    assert result.exit_code == 1
    assert "--only is not valid with --split manual" in result.output
    assert expense_service.list_expenses(group.id) == []


def test_expense_add_invalid_amount(cli_runner, temp_db, sample_group):
    """Test amounts with too many decimals are rejected."""
    result = _invoke(
        cli_runner, temp_db, "expense", "add", "Lisbon Trip", "--amount", "1.005", "--payer", "Alice"
    )

    assert result.exit_code == 1
    assert "Invalid amount format" in result.output


def test_expense_add_unknown_payer(cli_runner, temp_db, sample_group):
    """Test unknown payers are rejected."""
    result = _invoke(cli_runner, temp_db, "expense", "add", "Lisbon Trip", "--amount", "5", "--payer", "Zed")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_expense_list_and_delete(cli_runner, temp_db, sample_group, expense_service):
    """Test listing and deleting expenses."""
    group, ids = sample_group
    expense_id = expense_service.add_expense(
        group.id, amount=4500, payer_id=ids["Carol"], occurred_at=date(2024, 1, 2), title="Taxi"
    )

    result = _invoke(cli_runner, temp_db, "expense", "list", "Lisbon Trip", "--verbose")
    assert result.exit_code == 0
    assert "Taxi" in result.output
    assert "45.00 EUR" in result.output
    assert "15.00 EUR" in result.output

    result = _invoke(cli_runner, temp_db, "expense", "delete", "Lisbon Trip", str(expense_id), "--yes")
    assert result.exit_code == 0
    assert f"Deleted expense {expense_id}" in result.output
    assert expense_service.list_expenses(group.id) == []


def test_expense_delete_requires_confirmation(cli_runner, temp_db, sample_group, expense_service):
    """Test declining the delete confirmation keeps the expense."""
    group, ids = sample_group
    expense_id = expense_service.add_expense(group.id, amount=100, payer_id=ids["Alice"], occurred_at=date(2024, 1, 2))

    result = _invoke(cli_runner, temp_db, "expense", "delete", "Lisbon Trip", str(expense_id), input="n\n")

    assert result.exit_code == 1
    assert len(expense_service.list_expenses(group.id)) == 1


def test_balance_and_settle(cli_runner, temp_db, sample_group, expense_service):
    """Test balances, suggestions and recording the suggested payments."""
    group, ids = sample_group
    expense_service.add_expense(group.id, amount=9000, payer_id=ids["Alice"], occurred_at=date(2024, 1, 1))
    expense_service.add_expense(group.id, amount=100, payer_id=ids["Bob"], occurred_at=date(2024, 1, 1))

    result = _invoke(cli_runner, temp_db, "balance", "Lisbon Trip")
    assert result.exit_code == 0
    assert "91.00 EUR" in result.output
    assert "59.66 EUR" in result.output
    assert "Carol pays Alice 30.33 EUR" in result.output
    assert "Bob pays Alice 29.33 EUR" in result.output

    for payer, amount in (("Carol", "30.33"), ("Bob", "29.33")):
        result = _invoke(
            cli_runner, temp_db, "settle", "record", "Lisbon Trip", "--from", payer, "--to", "Alice", "--amount", amount
        )
        assert result.exit_code == 0
        assert "Recorded settlement" in result.output

    result = _invoke(cli_runner, temp_db, "balance", "Lisbon Trip")
    assert result.exit_code == 0
    assert "All settled up." in result.output

    result = _invoke(cli_runner, temp_db, "settle", "list", "Lisbon Trip")
    assert result.exit_code == 0
    assert "Carol -> Alice" in result.output


def test_settle_to_self(cli_runner, temp_db, sample_group):
    """Test self payments are rejected."""
    result = _invoke(
        cli_runner, temp_db, "settle", "record", "Lisbon Trip", "--from", "Bob", "--to", "Bob", "--amount", "5"
    )

    assert result.exit_code == 1
    assert "must be different" in result.output


def test_settle_delete(cli_runner, temp_db, sample_group, settlement_service):
    """Test deleting a settlement."""
    group, ids = sample_group
    settlement_id = settlement_service.record_settlement(group.id, ids["Bob"], ids["Alice"], 100)

    result = _invoke(cli_runner, temp_db, "settle", "delete", "Lisbon Trip", str(settlement_id), "--yes")

    assert result.exit_code == 0
    assert settlement_service.list_settlements(group.id) == []


def test_category_commands(cli_runner, temp_db, sample_group):
    """Test creating and listing categories."""
    result = _invoke(cli_runner, temp_db, "category", "create", "Lisbon Trip", "Food")
    assert result.exit_code == 0
    assert "Created category 'Food'" in result.output

    result = _invoke(cli_runner, temp_db, "category", "list", "Lisbon Trip")
    assert result.exit_code == 0
    assert "Food" in result.output


def test_budget_commands(cli_runner, temp_db, sample_group, group_service, expense_service):
    """Test setting a budget and reading its status."""
    group, ids = sample_group
    food = group_service.create_category(group.id, "Food")
    expense_service.add_expense(
        group.id, amount=15000, payer_id=ids["Alice"], occurred_at=date(2024, 5, 10), category_id=food
    )

    result = _invoke(cli_runner, temp_db, "budget", "set", "Lisbon Trip", "Food", "2024-05", "100")
    assert result.exit_code == 0
    assert "100.00 EUR" in result.output

    result = _invoke(cli_runner, temp_db, "budget", "status", "Lisbon Trip", "2024-05")
    assert result.exit_code == 0
    assert "150.00%" in result.output
    assert "OVER" in result.output
    assert "1 over budget" in result.output


def test_budget_unknown_category(cli_runner, temp_db, sample_group):
    """Test budgets for a missing category."""
    result = _invoke(cli_runner, temp_db, "budget", "set", "Lisbon Trip", "Fun", "2024-05", "100")

    assert result.exit_code == 1
    assert "Category 'Fun' not found" in result.output


def test_budget_status_empty(cli_runner, temp_db, sample_group):
    """Test a period without budgets."""
    result = _invoke(cli_runner, temp_db, "budget", "status", "Lisbon Trip", "2024-05")

    assert result.exit_code == 0
    assert "No budgets set" in result.output


def test_charge_commands(cli_runner, temp_db, building_group, expense_service):
    """Test charge rules, debt and status."""
    group, ids = building_group
    expense_service.add_expense(
        group.id,
        amount=1500000,
        payer_id=ids["Unit 1"],
        occurred_at=date(2024, 1, 5),
        participant_ids=[ids["Unit 1"]],
        period_key="2024-01",
    )

    result = _invoke(cli_runner, temp_db, "charge", "rule-add", "Building 12", "Maintenance", "1500000")
    assert result.exit_code == 0
    assert "Added charge rule 'Maintenance'" in result.output

    result = _invoke(cli_runner, temp_db, "charge", "rules", "Building 12")
    assert result.exit_code == 0
    assert "Charge per period: 1,500,000 IRR" in result.output

    result = _invoke(
        cli_runner, temp_db, "charge", "debt", "Building 12", "--from-period", "2024-01", "--to-period", "2024-02"
    )
    assert result.exit_code == 0
    assert "3,000,000 IRR" in result.output

    result = _invoke(cli_runner, temp_db, "charge", "status", "Building 12", "2024-01")
    assert result.exit_code == 0
    assert "2024-01: paid 1, unpaid 2" in result.output


def test_charge_rule_toggle(cli_runner, temp_db, building_group, charge_service):
    """Test deactivating a charge rule."""
    group, _ = building_group
    rule_id = charge_service.add_rule(group.id, "Maintenance", 1000)

    result = _invoke(cli_runner, temp_db, "charge", "rule-toggle", "Building 12", str(rule_id), "--inactive")

    assert result.exit_code == 0
    assert charge_service.get_charge_per_period(group.id) == 0


@pytest.mark.parametrize("period", ["2024-13", "Jan"])
def test_charge_status_invalid_period(cli_runner, temp_db, building_group, period):
    """Test malformed period keys."""
    result = _invoke(cli_runner, temp_db, "charge", "status", "Building 12", period)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_income_add_list_and_delete(cli_runner, temp_db, sample_group, income_service):
    """Test recording, listing and deleting incomes."""
    group, ids = sample_group

    result = _invoke(
        cli_runner,
        temp_db,
        "income",
        "add",
        "Lisbon Trip",
        "--amount",
        "1250.50",
        "--received-by",
        "Bob",
        "--date",
        "2024-03-01",
        "--source",
        "salary",
    )
    assert result.exit_code == 0
    assert "1,250.50 EUR" in result.output
    (income,) = income_service.list_incomes(group.id)
    assert income.amount == 125050
    assert income.received_by_id == ids["Bob"]
    assert income.occurred_at == date(2024, 3, 1)

    result = _invoke(cli_runner, temp_db, "income", "list", "Lisbon Trip", "--received-by", "Bob")
    assert result.exit_code == 0
    assert "[salary]" in result.output
    assert "Total: 1,250.50 EUR" in result.output

    result = _invoke(cli_runner, temp_db, "income", "list", "Lisbon Trip", "--source", "gift")
    assert "No incomes found" in result.output

    result = _invoke(cli_runner, temp_db, "income", "delete", "Lisbon Trip", str(income.id), "--yes")
    assert result.exit_code == 0
    assert income_service.list_incomes(group.id) == []


def test_income_add_unknown_receiver(cli_runner, temp_db, sample_group):
    """Test unknown receivers are rejected."""
    result = _invoke(
        cli_runner, temp_db, "income", "add", "Lisbon Trip", "--amount", "10", "--received-by", "Zed"
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_income_add_zero_amount(cli_runner, temp_db, sample_group):
    """Test zero incomes fail with an error message."""
    result = _invoke(
        cli_runner, temp_db, "income", "add", "Lisbon Trip", "--amount", "0", "--received-by", "Alice"
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_stats_command(cli_runner, temp_db, sample_group, group_service, expense_service, income_service):
    """Test the period stats report."""
    group, ids = sample_group
    food = group_service.create_category(group.id, "Food")
    income_service.add_income(group.id, amount=10000, received_by_id=ids["Alice"], occurred_at=date(2024, 1, 3))
    expense_service.add_expense(
        group.id, amount=2500, payer_id=ids["Alice"], occurred_at=date(2024, 1, 10), category_id=food
    )
    expense_service.add_expense(group.id, amount=1500, payer_id=ids["Bob"], occurred_at=date(2024, 1, 11))

    result = _invoke(cli_runner, temp_db, "stats", "Lisbon Trip", "2024-01", "--daily")

    assert result.exit_code == 0
    assert "100.00 EUR" in result.output
    assert "40.00 EUR" in result.output
    assert "60.00%" in result.output
    assert "Food" in result.output
    assert "62.50%" in result.output
    assert "Uncategorized" in result.output
    assert "2024-01-31" in result.output


@pytest.mark.parametrize("period", ["2024-13", "soon"])
def test_stats_invalid_period(cli_runner, temp_db, sample_group, period):
    """Test invalid period keys fail cleanly."""
    result = _invoke(cli_runner, temp_db, "stats", "Lisbon Trip", period)

    assert result.exit_code == 1
    assert "Error:" in result.output
