"""Tests for TransactionService and the balance recalculation it triggers."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkeep.domain.entities import RecurringFrequency, TransactionStatus, TransactionType
from ledgerkeep.domain.errors import NotFoundError, ValidationError
from ledgerkeep.domain.ledger import derive_balances

from conftest import OWNER_ID, OTHER_OWNER_ID


def _balances(account_service, account_id):
    account = account_service.get_account(account_id)
    return account.balance, account.cleared_balance


def test_create_recalculates_account(transaction_service, account_service, sample_account, add_transaction):
    add_transaction("3200.00", status="cleared")
    add_transaction("-89.43", status="cleared")
    add_transaction("-65.20", status="pending")

    assert _balances(account_service, sample_account.id) == (Decimal("3045.37"), Decimal("3110.57"))


def test_delete_pending_keeps_cleared_balance(
    transaction_service, account_service, sample_account, add_transaction
):
    add_transaction("3200.00", status="cleared")
    add_transaction("-89.43", status="cleared")
    pending_id = add_transaction("-65.20", status="pending")

    transaction_service.delete_transaction(OWNER_ID, pending_id)

    assert _balances(account_service, sample_account.id) == (Decimal("3110.57"), Decimal("3110.57"))
    assert transaction_service.get_transaction(pending_id) is None


def test_first_transaction_replaces_opening_balance(transaction_service, account_service, sample_category):
    account_id = account_service.create_account(
        owner_id=OWNER_ID, name="Card", type="credit", balance=Decimal("-250.00")
    )
    transaction_service.create_transaction(
        owner_id=OWNER_ID,
        account_id=account_id,
        category_id=sample_category.id,
        description="Coffee",
        amount=Decimal("-4.50"),
        date=date(2024, 2, 1),
    )

    assert _balances(account_service, account_id) == (Decimal("-4.50"), Decimal("0"))


def test_status_change_updates_cleared_only(transaction_service, account_service, sample_account, add_transaction):
    txn_id = add_transaction("-65.20", status="pending")
    assert _balances(account_service, sample_account.id) == (Decimal("-65.20"), Decimal("0"))

    new_status = transaction_service.update_status(OWNER_ID, txn_id, "cleared")

    assert new_status == TransactionStatus.CLEARED
    assert transaction_service.get_transaction(txn_id).status == TransactionStatus.CLEARED
    assert _balances(account_service, sample_account.id) == (Decimal("-65.20"), Decimal("-65.20"))


def test_status_update_recalculates_even_when_unchanged(
    transaction_service, temp_db, account_service, sample_account, add_transaction
):
    txn_id = add_transaction("-10.00", status="cleared")
    temp_db.update_account_balances(sample_account.id, Decimal("999.00"), Decimal("999.00"))

    transaction_service.update_status(OWNER_ID, txn_id, TransactionStatus.CLEARED)

    assert _balances(account_service, sample_account.id) == (Decimal("-10.00"), Decimal("-10.00"))


def test_update_amount_recalculates(transaction_service, account_service, sample_account, add_transaction):
    txn_id = add_transaction("-50.00", status="cleared")

    transaction_service.update_transaction(OWNER_ID, txn_id, amount=Decimal("-75.25"))

    assert _balances(account_service, sample_account.id) == (Decimal("-75.25"), Decimal("-75.25"))


def test_reassignment_recalculates_both_accounts(
    transaction_service, account_service, sample_account, second_account, add_transaction
):
    add_transaction("1000.00", status="cleared")
    moving_id = add_transaction("-200.00", status="cleared")
    add_transaction("50.00", status="pending", account_id=second_account.id)

    transaction_service.update_transaction(OWNER_ID, moving_id, account_id=second_account.id)

    # Old account as if the transaction never belonged to it
    assert _balances(account_service, sample_account.id) == (Decimal("1000.00"), Decimal("1000.00"))
    # New account as if it always did
    assert _balances(account_service, second_account.id) == (Decimal("-150.00"), Decimal("-200.00"))
    assert transaction_service.get_transaction(moving_id).account_id == second_account.id


def test_reassignment_matches_fresh_derivation(
    transaction_service, temp_db, account_service, sample_account, second_account, add_transaction
):
    ids = [
        add_transaction("12.34", status="cleared"),
        add_transaction("-5.67", status="pending"),
        add_transaction("-1.01", status="cleared"),
    ]
    transaction_service.update_transaction(OWNER_ID, ids[1], account_id=second_account.id, status="cleared")

    for account_id in (sample_account.id, second_account.id):
        expected = derive_balances(temp_db.list_account_transactions(account_id))
        assert _balances(account_service, account_id) == (expected.total, expected.cleared)


def test_update_without_changes_is_noop(transaction_service, temp_db, sample_account, add_transaction, monkeypatch):
    txn_id = add_transaction("-1.00")
    calls = []
    monkeypatch.setattr(transaction_service.ledger, "recalculate", lambda account_id: calls.append(account_id))

    transaction_service.update_transaction(OWNER_ID, txn_id)

    assert calls == []


def test_create_rejects_foreign_account(transaction_service, account_service, sample_category):
    foreign_id = account_service.create_account(
        owner_id=OTHER_OWNER_ID, name="Not Mine", type="checking", balance=Decimal("0")
    )
    with pytest.raises(NotFoundError, match="Account"):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=foreign_id,
            category_id=sample_category.id,
            description="Sneaky",
            amount=Decimal("-1.00"),
            date=date(2024, 1, 1),
        )


def test_create_rejects_missing_category(transaction_service, sample_account):
    with pytest.raises(NotFoundError, match="Category 999 not found"):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=999,
            description="Lunch",
            amount=Decimal("-12.00"),
            date=date(2024, 1, 1),
        )


def test_create_rejects_invalid_status(transaction_service, sample_account, sample_category):
    with pytest.raises(ValidationError, match="Invalid status"):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=sample_category.id,
            description="Lunch",
            amount=Decimal("-12.00"),
            date=date(2024, 1, 1),
            status="settled",
        )


def test_create_rejects_blank_description(transaction_service, sample_account, sample_category):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=sample_category.id,
            description="   ",
            amount=Decimal("-12.00"),
            date=date(2024, 1, 1),
        )


def test_failed_create_does_not_touch_balances(transaction_service, account_service, sample_account):
    with pytest.raises(NotFoundError):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=12345,
            description="Nope",
            amount=Decimal("-1.00"),
            date=date(2024, 1, 1),
        )
    assert _balances(account_service, sample_account.id) == (Decimal("0.00"), Decimal("0.00"))


def test_other_owner_cannot_touch_transaction(transaction_service, add_transaction):
    txn_id = add_transaction("-5.00")

    with pytest.raises(NotFoundError, match=f"Transaction {txn_id} not found"):
        transaction_service.delete_transaction(OTHER_OWNER_ID, txn_id)
    with pytest.raises(NotFoundError):
        transaction_service.update_status(OTHER_OWNER_ID, txn_id, "cleared")
    assert transaction_service.get_transaction(txn_id, owner_id=OTHER_OWNER_ID) is None
    assert transaction_service.get_transaction(txn_id, owner_id=OWNER_ID) is not None


def test_delete_missing_transaction(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(OWNER_ID, 42)


def test_recurrence_fields_round_trip(transaction_service, add_transaction):
    txn_id = add_transaction(
        "-1200.00",
        description="Rent",
        type="expense",
        is_recurring=True,
        recurring_frequency="monthly",
        recurring_end_date=date(2024, 12, 31),
    )
    txn = transaction_service.get_transaction(txn_id)
    assert txn.is_recurring is True
    assert txn.recurring_frequency == RecurringFrequency.MONTHLY
    assert txn.recurring_end_date == date(2024, 12, 31)
    assert txn.type == TransactionType.EXPENSE

    transaction_service.update_transaction(OWNER_ID, txn_id, clear_recurrence=True)

    txn = transaction_service.get_transaction(txn_id)
    assert txn.is_recurring is False
    assert txn.recurring_frequency is None
    assert txn.recurring_end_date is None


def test_clear_recurrence_conflicts_with_frequency(transaction_service, add_transaction):
    txn_id = add_transaction("-1.00")
    with pytest.raises(ValidationError):
        transaction_service.update_transaction(
            OWNER_ID, txn_id, recurring_frequency="weekly", clear_recurrence=True
        )


def test_list_transactions_filters(transaction_service, sample_account, second_account, add_transaction):
    add_transaction("-1.00", status="pending", txn_date=date(2024, 1, 1))
    cleared_id = add_transaction("-2.00", status="cleared", txn_date=date(2024, 2, 1))
    other_id = add_transaction("-3.00", account_id=second_account.id, txn_date=date(2024, 3, 1))

    everything = transaction_service.list_transactions(OWNER_ID)
    assert [t.id for t in everything][0] == other_id  # newest first
    assert len(everything) == 3

    cleared = transaction_service.list_transactions(OWNER_ID, status="cleared")
    assert [t.id for t in cleared] == [cleared_id]

    in_range = transaction_service.list_transactions(
        OWNER_ID, account_id=sample_account.id, start_date=date(2024, 1, 15)
    )
    assert [t.id for t in in_range] == [cleared_id]

    assert transaction_service.list_transactions(OTHER_OWNER_ID) == []


@pytest.mark.parametrize("amount", [Decimal("10.005"), Decimal("NaN"), Decimal("Infinity")])
def test_create_rejects_sub_cent_and_non_finite_amounts(
    transaction_service, account_service, sample_account, sample_category, amount
):
    with pytest.raises(ValidationError):
        transaction_service.create_transaction(
            owner_id=OWNER_ID,
            account_id=sample_account.id,
            category_id=sample_category.id,
            description="Interest",
            amount=amount,
            date=date(2024, 1, 15),
            status="cleared",
        )

    assert transaction_service.list_transactions(OWNER_ID) == []
    assert _balances(account_service, sample_account.id) == (Decimal("0.00"), Decimal("0.00"))


def test_update_rejects_sub_cent_amount(transaction_service, account_service, sample_account, add_transaction):
    txn_id = add_transaction("-10.00", status="cleared")

    with pytest.raises(ValidationError, match="more than two decimal places"):
        transaction_service.update_transaction(OWNER_ID, txn_id, amount=Decimal("-10.001"))

    assert transaction_service.get_transaction(txn_id).amount == Decimal("-10.00")
    assert _balances(account_service, sample_account.id) == (Decimal("-10.00"), Decimal("-10.00"))


def test_whole_amount_is_stored_in_cents(transaction_service, add_transaction):
    txn_id = add_transaction("-7")

    assert transaction_service.get_transaction(txn_id).amount == Decimal("-7.00")
