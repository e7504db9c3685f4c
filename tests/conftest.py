"""Shared pytest fixtures for ledgerkeep tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from ledgerkeep.database.factories import create_sqlite_database
from ledgerkeep.domain.account import AccountService
from ledgerkeep.domain.category import CategoryService
from ledgerkeep.domain.ledger import BalanceLedger
from ledgerkeep.domain.transaction import TransactionService

OWNER_ID = 1
OTHER_OWNER_ID = 2


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create a BalanceLedger with a temporary database."""
    return BalanceLedger(temp_db)


@pytest.fixture
def transaction_service(temp_db, ledger):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db, ledger)


@pytest.fixture
def sample_account(account_service):
    """Create a checking account with a zero opening balance."""
    account_id = account_service.create_account(
        owner_id=OWNER_ID, name="Main Checking", type="checking", balance=Decimal("0.00")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def second_account(account_service):
    """Create a savings account for reassignment tests."""
    account_id = account_service.create_account(
        owner_id=OWNER_ID, name="Savings", type="savings", balance=Decimal("0.00")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_category(category_service):
    """Create a Groceries category."""
    category_id = category_service.create_category(
        owner_id=OWNER_ID, name="Groceries", color="#22C55E"
    )
    return category_service.get_category(category_id)


@pytest.fixture
def salary_category(category_service):
    category_id = category_service.create_category(
        owner_id=OWNER_ID, name="Salary", color="#10B981"
    )
    return category_service.get_category(category_id)


@pytest.fixture
def add_transaction(transaction_service, sample_account, sample_category):
    """Return a helper that records a transaction on the sample account."""

    def _add(amount, status="pending", account_id=None, category_id=None, txn_date=None, **kwargs):
        return transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=account_id or sample_account.id,
            category_id=category_id or sample_category.id,
            description=kwargs.pop("description", "Test transaction"),
            amount=Decimal(amount),
            date=txn_date or date(2024, 1, 15),
            status=status,
            **kwargs,
        )

    return _add


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
