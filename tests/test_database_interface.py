"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from ledgerkeep.domain import entities
from ledgerkeep.domain.errors import NotFoundError, ValidationError

from conftest import OWNER_ID


class TestDatabaseInterface:
    """Tests to verify the SQLAlchemy store behaves as the Database interface promises."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(
            owner_id=OWNER_ID,
            name="Checking",
            type="checking",
            balance=Decimal("12.34"),
            cleared_balance=Decimal("10.00"),
        )

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.type == entities.AccountType.CHECKING
        assert account.balance == Decimal("12.34")
        assert account.cleared_balance == Decimal("10.00")
        assert isinstance(account.balance, Decimal)
        assert isinstance(account.created_at, datetime)

    def test_get_missing_account(self, temp_db):
        assert temp_db.get_account(404) is None

    def test_list_accounts_filters_by_owner(self, temp_db):
        temp_db.create_account(OWNER_ID, "B", "checking", Decimal("0"), Decimal("0"))
        temp_db.create_account(OWNER_ID, "A", "savings", Decimal("0"), Decimal("0"))
        temp_db.create_account(2, "C", "credit", Decimal("0"), Decimal("0"))

        assert [a.name for a in temp_db.list_accounts(owner_id=OWNER_ID)] == ["A", "B"]
        assert len(temp_db.list_accounts()) == 3

    def test_update_account_balances_writes_both_fields(self, temp_db, sample_account):
        temp_db.update_account_balances(sample_account.id, Decimal("-1.10"), Decimal("-0.55"))

        account = temp_db.get_account(sample_account.id)
        assert account.balance == Decimal("-1.10")
        assert account.cleared_balance == Decimal("-0.55")

    def test_update_account_balances_missing_account(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_account_balances(404, Decimal("0"), Decimal("0"))

    def test_transaction_round_trip(self, temp_db, sample_account, sample_category):
        txn_id = temp_db.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=sample_category.id,
            description="Bus pass",
            amount=Decimal("-89.43"),
            date=date(2024, 1, 15),
            status="cleared",
            type="expense",
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.amount == Decimal("-89.43")
        assert txn.status == entities.TransactionStatus.CLEARED
        assert txn.type == entities.TransactionType.EXPENSE
        assert txn.recurring_frequency is None
        assert txn.is_cleared

    def test_list_account_transactions_is_complete(self, temp_db, sample_account, second_account, add_transaction):
        add_transaction("-1.00", txn_date=date(2023, 1, 1))
        add_transaction("-2.00", txn_date=date(2025, 1, 1))
        add_transaction("-3.00", account_id=second_account.id)

        amounts = sorted(t.amount for t in temp_db.list_account_transactions(sample_account.id))
        assert amounts == [Decimal("-2.00"), Decimal("-1.00")]

    def test_update_transaction_rejects_unknown_field(self, temp_db, add_transaction):
        txn_id = add_transaction("-1.00")
        with pytest.raises(ValidationError, match="owner_id"):
            temp_db.update_transaction(txn_id, owner_id=2)

    def test_pending_count(self, temp_db, sample_account, add_transaction):
        add_transaction("-1.00", status="pending")
        add_transaction("-1.00", status="cleared")

        assert temp_db.get_account_transaction_count(sample_account.id) == 2
        assert temp_db.get_account_transaction_count(sample_account.id, status="pending") == 1

    def test_category_lookup_by_name(self, temp_db, sample_category):
        found = temp_db.get_category_by_name(OWNER_ID, "Groceries")
        assert isinstance(found, entities.Category)
        assert found.id == sample_category.id
        assert temp_db.get_category_by_name(2, "Groceries") is None
