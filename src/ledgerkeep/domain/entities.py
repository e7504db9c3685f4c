"""Domain model entities for ledgerkeep.

These are pure data classes representing business concepts, independent of
database schema. Stores convert their rows into these before handing them to
the domain services, so balance derivation never touches ORM objects.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kinds of account a user can hold."""

    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT = "credit"


class TransactionStatus(str, Enum):
    """Clearing state of a transaction."""

    PENDING = "pending"
    CLEARED = "cleared"


class TransactionType(str, Enum):
    """Direction of a transaction, used to assign the amount sign."""

    EXPENSE = "expense"
    INCOME = "income"
    TRANSFER = "transfer"


class RecurringFrequency(str, Enum):
    """How often a recurring transaction repeats."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class Account:
    """Financial account domain entity."""

    id: int
    owner_id: int
    name: str
    type: AccountType
    balance: Decimal
    cleared_balance: Decimal
    currency: str
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Transaction category domain entity."""

    id: int
    owner_id: int
    name: str
    color: str
    icon: Optional[str]
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    owner_id: int
    account_id: int
    category_id: int
    description: str
    amount: Decimal
    date: date
    status: TransactionStatus
    type: TransactionType
    is_recurring: bool = False
    recurring_frequency: Optional[RecurringFrequency] = None
    recurring_end_date: Optional[date] = None
    created_at: Optional[datetime] = None

    @property
    def is_cleared(self) -> bool:
        return self.status == TransactionStatus.CLEARED


@dataclass(frozen=True)
class AccountBalances:
    """The two derived balance figures of an account."""

    total: Decimal
    cleared: Decimal

    @property
    def pending(self) -> Decimal:
        """Amount still waiting to clear."""
        return self.total - self.cleared


@dataclass(frozen=True)
class RecalculationResult:
    """Outcome of recalculating a single account during a batch run."""

    account_id: int
    account_name: str
    previous: AccountBalances
    current: AccountBalances

    @property
    def changed(self) -> bool:
        return self.previous != self.current


@dataclass(frozen=True)
class AccountSummary:
    """Account together with its pending transaction count."""

    account: Account
    pending_transactions: int


@dataclass(frozen=True)
class SpendingRow:
    """Absolute spending attributed to one category or account name."""

    name: str
    amount: Decimal


@dataclass(frozen=True)
class CashFlowPoint:
    """Income and expenses of a single day."""

    date: date
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class AnalyticsReport:
    """Spending breakdowns and cash-flow trend for a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    by_category: tuple[SpendingRow, ...]
    by_account: tuple[SpendingRow, ...]
    cash_flow: tuple[CashFlowPoint, ...]
    total_income: Decimal
    total_expenses: Decimal
    transaction_count: int

    @property
    def net_cash_flow(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def has_data(self) -> bool:
        return self.transaction_count > 0
