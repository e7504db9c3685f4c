"""Transaction domain service.

Every operation that changes a transaction goes through this service, and
each one finishes by recalculating the balances of the accounts it touched.
"""

import logging
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

from ledgerkeep.database.base import Database
from ledgerkeep.domain.entities import (
    RecurringFrequency,
    Transaction as TransactionEntity,
    TransactionStatus,
    TransactionType,
)
from ledgerkeep.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    transaction_not_found,
)
from ledgerkeep.domain.ledger import BalanceLedger
from ledgerkeep.domain.validation import (
    coerce_choice,
    coerce_optional_choice,
    require_money,
    require_name,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database, ledger: Optional[BalanceLedger] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            ledger: Balance ledger to notify after mutations (created from db if omitted)
        """
        self.db = db
        self.ledger = ledger if ledger is not None else BalanceLedger(db)

    @contextmanager
    def _recalculating(self, *account_ids: int) -> Iterator[list[int]]:
        """Recalculate the given accounts once the enclosed mutation succeeds.

        The yielded list can be extended with accounts that only become known
        inside the block, such as the target of a reassignment.
        """
        touched = list(account_ids)
        yield touched
        self.ledger.recalculate_many(touched)

    def _verify_account(self, owner_id: int, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None or account.owner_id != owner_id:
            raise NotFoundError(account_not_found(account_id))

    def _verify_category(self, owner_id: int, category_id: int) -> None:
        category = self.db.get_category(category_id)
        if category is None or category.owner_id != owner_id:
            raise NotFoundError(category_not_found(category_id))

    def create_transaction(
        self,
        owner_id: int,
        account_id: int,
        category_id: int,
        description: str,
        amount: Decimal,
        date: date,
        status: TransactionStatus | str = TransactionStatus.PENDING,
        type: TransactionType | str = TransactionType.EXPENSE,
        is_recurring: bool = False,
        recurring_frequency: Optional[RecurringFrequency | str] = None,
        recurring_end_date: Optional[date] = None,
    ) -> int:
        """Create a transaction.

        The amount must be a whole number of cents. Callers assign its sign
        from the transaction type (see validation.signed_amount).

        Args:
            owner_id: Owning user ID
            account_id: Account ID
            category_id: Category ID
            description: Description
            amount: Signed amount
            date: Transaction date
            status: pending or cleared
            type: expense, income or transfer
            is_recurring: Whether the transaction repeats
            recurring_frequency: weekly, monthly or yearly
            recurring_end_date: Last date of the recurrence

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the owner has no such account or category
            ValidationError: If description, amount or an enumerated value is invalid
        """
        description = require_name(description, "description")
        amount = require_money(amount)
        txn_status = coerce_choice(TransactionStatus, status, "status")
        txn_type = coerce_choice(TransactionType, type, "type")
        frequency = coerce_optional_choice(RecurringFrequency, recurring_frequency, "recurring frequency")

        self._verify_account(owner_id, account_id)
        self._verify_category(owner_id, category_id)

        with self._recalculating(account_id):
            transaction_id = self.db.create_transaction(
                owner_id=owner_id,
                account_id=account_id,
                category_id=category_id,
                description=description,
                amount=amount,
                date=date,
                status=txn_status.value,
                type=txn_type.value,
                is_recurring=is_recurring,
                recurring_frequency=frequency.value if frequency else None,
                recurring_end_date=recurring_end_date,
            )

        logger.debug("Created transaction %s on account %s", transaction_id, account_id)
        return transaction_id

    def get_transaction(self, transaction_id: int, owner_id: Optional[int] = None) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID
            owner_id: If given, transactions of other owners are treated as missing

        Returns:
            Transaction entity or None if not found
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            return None
        if owner_id is not None and txn.owner_id != owner_id:
            return None
        return txn

    def require_transaction(self, transaction_id: int, owner_id: Optional[int] = None) -> TransactionEntity:
        txn = self.get_transaction(transaction_id, owner_id=owner_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        owner_id: int,
        transaction_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        date: Optional[date] = None,
        status: Optional[TransactionStatus | str] = None,
        type: Optional[TransactionType | str] = None,
        is_recurring: Optional[bool] = None,
        recurring_frequency: Optional[RecurringFrequency | str] = None,
        recurring_end_date: Optional[date] = None,
        clear_recurrence: bool = False,
    ) -> None:
        """Update transaction fields.

        Only the fields that are provided are changed. Balances of the
        transaction's previous account are always recalculated, and those of
        the new account as well when the transaction moves.

        Args:
            clear_recurrence: If True, clear recurring flag, frequency and end date
                (cannot be combined with recurrence fields)

        Raises:
            NotFoundError: If transaction, account or category doesn't exist
            ValidationError: If a value is invalid
        """
        txn = self.require_transaction(transaction_id, owner_id=owner_id)

        fields: dict = {}
        if account_id is not None:
            self._verify_account(owner_id, account_id)
            fields["account_id"] = account_id
        if category_id is not None:
            self._verify_category(owner_id, category_id)
            fields["category_id"] = category_id
        if description is not None:
            fields["description"] = require_name(description, "description")
        if amount is not None:
            fields["amount"] = require_money(amount)
        if date is not None:
            fields["date"] = date
        if status is not None:
            fields["status"] = coerce_choice(TransactionStatus, status, "status").value
        if type is not None:
            fields["type"] = coerce_choice(TransactionType, type, "type").value

        if clear_recurrence:
            if is_recurring or recurring_frequency is not None or recurring_end_date is not None:
                raise ValidationError("Cannot set recurrence fields and clear_recurrence together")
            fields.update(is_recurring=False, recurring_frequency=None, recurring_end_date=None)
        else:
            if is_recurring is not None:
                fields["is_recurring"] = is_recurring
            frequency = coerce_optional_choice(RecurringFrequency, recurring_frequency, "recurring frequency")
            if frequency is not None:
                fields["recurring_frequency"] = frequency.value
            if recurring_end_date is not None:
                fields["recurring_end_date"] = recurring_end_date

        if not fields:
            return

        with self._recalculating(txn.account_id) as touched:
            self.db.update_transaction(transaction_id, **fields)
            if account_id is not None and account_id != txn.account_id:
                touched.append(account_id)
                logger.debug(
                    "Moved transaction %s from account %s to %s",
                    transaction_id,
                    txn.account_id,
                    account_id,
                )

    def update_status(
        self, owner_id: int, transaction_id: int, status: TransactionStatus | str
    ) -> TransactionStatus:
        """Set the clearing status of a transaction.

        The account is recalculated even when the status does not change.

        Returns:
            The new status

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If status is invalid
        """
        new_status = coerce_choice(TransactionStatus, status, "status")
        txn = self.require_transaction(transaction_id, owner_id=owner_id)

        with self._recalculating(txn.account_id):
            self.db.update_transaction(transaction_id, status=new_status.value)

        return new_status

    def delete_transaction(self, owner_id: int, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        txn = self.require_transaction(transaction_id, owner_id=owner_id)

        with self._recalculating(txn.account_id):
            self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        owner_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        status: Optional[TransactionStatus | str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TransactionEntity]:
        """List an owner's transactions with filters, newest first."""
        status_value = None
        if status is not None:
            status_value = coerce_choice(TransactionStatus, status, "status").value

        return self.db.list_transactions(
            owner_id=owner_id,
            account_id=account_id,
            category_id=category_id,
            status=status_value,
            start_date=start_date,
            end_date=end_date,
        )
