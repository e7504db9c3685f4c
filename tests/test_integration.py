"""Integration tests for end-to-end workflows."""

from ledgerkeep.cli.main import cli


def _run(cli_runner, temp_db, *args):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])
    assert result.exit_code == 0, result.output
    return result.output


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: categories → account → transactions → status → analytics."""
    _run(cli_runner, temp_db, "category", "init")

    output = _run(cli_runner, temp_db, "account", "create", "Main Checking")
    assert "Created account 'Main Checking'" in output

    _run(
        cli_runner, temp_db,
        "add", "--account", "Main Checking", "--category", "Income", "--amount", "3200.00",
        "--type", "income", "--status", "cleared", "--description", "Payroll", "--date", "2024-03-01",
    )
    _run(
        cli_runner, temp_db,
        "add", "--account", "Main Checking", "--category", "Groceries", "--amount", "89.43",
        "--status", "cleared", "--description", "Groceries", "--date", "2024-03-01",
    )
    output = _run(
        cli_runner, temp_db,
        "add", "--account", "Main Checking", "--category", "Groceries", "--amount", "65.20",
        "--description", "Farmers market", "--date", "2024-03-02",
    )
    assert "Account balance: $3,045.37 (cleared: $3,110.57)" in output

    txn_id = output.split("Created transaction ")[1].split()[0]
    output = _run(cli_runner, temp_db, "transaction", "status", txn_id, "cleared")
    assert "is now cleared" in output

    output = _run(cli_runner, temp_db, "account", "show", "Main Checking")
    assert "Balance: $3,045.37" in output
    assert "Cleared balance: $3,045.37" in output
    assert "Pending transactions: 0" in output

    output = _run(
        cli_runner, temp_db,
        "analytics", "--start-date", "2024-03-01", "--end-date", "2024-03-31",
    )
    assert "Groceries" in output
    assert "$154.63" in output
    assert "$3,200.00" in output

    output = _run(cli_runner, temp_db, "recalculate-balances")
    assert "New balance: $3,045.37" in output
    assert "Successfully updated 1/1 accounts." in output
