"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkeep.domain.entities import (
    Account,
    Category,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for ledgerkeep.

    Every listing that is scoped to a user takes an explicit ``owner_id``;
    the store never consults any ambient notion of the current user.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        owner_id: int,
        name: str,
        type: str,
        balance: Decimal,
        cleared_balance: Decimal,
        currency: str = "USD",
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, owner_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally only those of one owner."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        type: Optional[str] = None,
        balance: Optional[Decimal] = None,
        currency: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update descriptive account fields."""
        pass

    @abstractmethod
    def update_account_balances(
        self, account_id: int, balance: Decimal, cleared_balance: Decimal
    ) -> None:
        """Persist both balance fields of an account in a single write."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(
        self, account_id: int, status: Optional[str] = None
    ) -> int:
        """Count transactions of an account, optionally with a given status."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        owner_id: int,
        name: str,
        color: str,
        icon: Optional[str] = None,
        is_default: bool = False,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, owner_id: int, name: str) -> Optional[Category]:
        """Get an owner's category by name."""
        pass

    @abstractmethod
    def list_categories(self, owner_id: int) -> list[Category]:
        """List an owner's categories ordered by name."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        is_default: Optional[bool] = None,
    ) -> None:
        """Update category fields."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    @abstractmethod
    def get_category_transaction_count(self, category_id: int) -> int:
        """Count transactions filed under a category."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        owner_id: int,
        account_id: int,
        category_id: int,
        description: str,
        amount: Decimal,
        date: date,
        status: str = "pending",
        type: str = "expense",
        is_recurring: bool = False,
        recurring_frequency: Optional[str] = None,
        recurring_end_date: Optional[date] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, **fields) -> None:
        """Update the given transaction columns."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_account_transactions(self, account_id: int) -> list[Transaction]:
        """Return the complete, unordered transaction set of an account."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        status: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List an owner's transactions with optional filters, newest first."""
        pass
