"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from ledgerkeep.database.base import Database
from ledgerkeep.domain.entities import (
    Account as AccountEntity,
    AccountSummary,
    AccountType,
    TransactionStatus,
)
from ledgerkeep.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)
from ledgerkeep.domain.validation import (
    coerce_choice,
    require_money,
    require_name,
    validate_currency,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        owner_id: int,
        name: str,
        type: AccountType | str,
        balance: Decimal,
        cleared_balance: Optional[Decimal] = None,
        currency: str = "USD",
    ) -> int:
        """Create a new account.

        The opening balances are stored as given. They are replaced by derived
        values as soon as the first transaction of the account is recorded.

        Args:
            owner_id: Owning user ID
            name: Account name
            type: Account type (checking, savings, credit)
            balance: Opening balance
            cleared_balance: Opening cleared balance (defaults to balance)
            currency: Three-letter currency code

        Returns:
            Account ID

        Raises:
            ValidationError: If name, type, currency or a balance is invalid
            ConflictError: If the owner already has an account with this name
        """
        name = require_name(name)
        account_type = coerce_choice(AccountType, type, "account type")
        currency = validate_currency(currency)
        self._ensure_unique_name(owner_id, name)

        balance = require_money(balance, "balance")
        if cleared_balance is None:
            cleared_balance = balance
        else:
            cleared_balance = require_money(cleared_balance, "cleared balance")

        account_id = self.db.create_account(
            owner_id=owner_id,
            name=name,
            type=account_type.value,
            balance=balance,
            cleared_balance=cleared_balance,
            currency=currency,
        )
        logger.info("Created account %s '%s' for owner %s", account_id, name, owner_id)
        return account_id

    def get_account(self, account_id: int, owner_id: Optional[int] = None) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID
            owner_id: If given, accounts of other owners are treated as missing

        Returns:
            Account entity or None if not found
        """
        account = self.db.get_account(account_id)
        if account is None:
            return None
        if owner_id is not None and account.owner_id != owner_id:
            return None
        return account

    def require_account(self, account_id: int, owner_id: Optional[int] = None) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.get_account(account_id, owner_id=owner_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, owner_id: int) -> list[AccountEntity]:
        """List an owner's accounts.

        Returns:
            List of account entities ordered by name
        """
        return self.db.list_accounts(owner_id=owner_id)

    def get_account_summary(self, account_id: int, owner_id: Optional[int] = None) -> AccountSummary:
        """Return an account with its number of pending transactions."""
        account = self.require_account(account_id, owner_id=owner_id)
        pending = self.db.get_account_transaction_count(
            account_id, status=TransactionStatus.PENDING.value
        )
        return AccountSummary(account=account, pending_transactions=pending)

    def list_account_summaries(self, owner_id: int) -> list[AccountSummary]:
        return [
            AccountSummary(
                account=account,
                pending_transactions=self.db.get_account_transaction_count(
                    account.id, status=TransactionStatus.PENDING.value
                ),
            )
            for account in self.list_accounts(owner_id)
        ]

    def update_account(
        self,
        owner_id: int,
        account_id: int,
        name: Optional[str] = None,
        type: Optional[AccountType | str] = None,
        balance: Optional[Decimal] = None,
        currency: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update account fields.

        A supplied balance is stored as-is; the next transaction mutation on
        the account recalculates it from its transactions.

        Raises:
            NotFoundError: If account not found
            ConflictError: If the new name is already used by another account
        """
        self.require_account(account_id, owner_id=owner_id)

        if name is not None:
            name = require_name(name)
            self._ensure_unique_name(owner_id, name, exclude_id=account_id)
        type_value = None
        if type is not None:
            type_value = coerce_choice(AccountType, type, "account type").value
        if balance is not None:
            balance = require_money(balance, "balance")
        if currency is not None:
            currency = validate_currency(currency)

        self.db.update_account(
            account_id,
            name=name,
            type=type_value,
            balance=balance,
            currency=currency,
            is_active=is_active,
        )

    def delete_account(self, owner_id: int, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account still has transactions
        """
        self.require_account(account_id, owner_id=owner_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)

    def _ensure_unique_name(self, owner_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts(owner_id=owner_id):
            if acc.name == name and acc.id != exclude_id:
                raise ConflictError(duplicate_account_name(name))
