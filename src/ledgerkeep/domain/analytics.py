"""Spending and cash-flow analytics."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ledgerkeep.database.base import Database
from ledgerkeep.domain.entities import (
    AnalyticsReport,
    CashFlowPoint,
    SpendingRow,
    Transaction,
    TransactionType,
)
from ledgerkeep.domain.errors import ValidationError

TRANSFER_CATEGORY = "Transfer"
CURRENT_MONTH = "current-month"
YEAR_TO_DATE = "ytd"


def resolve_period(period: str | int, today: Optional[date] = None) -> tuple[date, date]:
    """Turn a period selector into an inclusive (start, end) date range.

    Args:
        period: Number of days back from today, "current-month" or "ytd"
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date), end_date being today
    """
    today = today or date.today()
    if period == CURRENT_MONTH:
        return today.replace(day=1), today
    if period == YEAR_TO_DATE:
        return today.replace(month=1, day=1), today
    try:
        days = int(period)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Invalid period '{period}'. Use a number of days, '{CURRENT_MONTH}' or '{YEAR_TO_DATE}'"
        ) from None
    if days < 0:
        raise ValidationError("Period length cannot be negative")
    return today - timedelta(days=days), today


class AnalyticsService:
    """Service for building spending and cash-flow reports."""

    def __init__(self, db: Database):
        """Initialize analytics service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_report(
        self,
        owner_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> AnalyticsReport:
        """Build the analytics report for an owner's transactions in a date range."""
        transactions = self.db.list_transactions(
            owner_id=owner_id, start_date=start_date, end_date=end_date
        )
        category_names = {cat.id: cat.name for cat in self.db.list_categories(owner_id)}
        account_names = {acc.id: acc.name for acc in self.db.list_accounts(owner_id=owner_id)}

        expenses = self.expense_transactions(transactions, category_names)
        total_expenses = sum((abs(txn.amount) for txn in expenses), Decimal("0.00"))
        total_income = sum(
            (txn.amount for txn in transactions if txn.amount > 0), Decimal("0.00")
        )

        return AnalyticsReport(
            start_date=start_date,
            end_date=end_date,
            by_category=tuple(
                self.spending_by(expenses, lambda t: category_names.get(t.category_id, "Unknown"))
            ),
            by_account=tuple(
                self.spending_by(expenses, lambda t: account_names.get(t.account_id, "Unknown"))
            ),
            cash_flow=tuple(self.cash_flow(transactions)),
            total_income=total_income,
            total_expenses=total_expenses,
            transaction_count=len(transactions),
        )

    def expense_transactions(
        self, transactions: Sequence[Transaction], category_names: dict[int, str]
    ) -> list[Transaction]:
        """Select outflows, leaving out transfers between accounts."""
        return [
            txn
            for txn in transactions
            if txn.amount < 0
            and txn.type != TransactionType.TRANSFER
            and category_names.get(txn.category_id) != TRANSFER_CATEGORY
        ]

    def spending_by(self, expenses: Sequence[Transaction], key) -> list[SpendingRow]:
        """Sum absolute expense amounts per key, largest first."""
        totals: dict[str, Decimal] = defaultdict(lambda: Decimal("0.00"))
        for txn in expenses:
            totals[key(txn)] += abs(txn.amount)
        rows = [SpendingRow(name=name, amount=amount) for name, amount in totals.items()]
        return sorted(rows, key=lambda row: (-row.amount, row.name))

    def cash_flow(self, transactions: Sequence[Transaction]) -> list[CashFlowPoint]:
        """Daily income and expenses in ascending date order.

        Unlike the spending breakdowns this includes transfers, since they
        move money in and out of the owner's accounts.
        """
        income: dict[date, Decimal] = defaultdict(lambda: Decimal("0.00"))
        spent: dict[date, Decimal] = defaultdict(lambda: Decimal("0.00"))
        days: set[date] = set()
        for txn in transactions:
            days.add(txn.date)
            if txn.amount > 0:
                income[txn.date] += txn.amount
            else:
                spent[txn.date] += abs(txn.amount)

        return [
            CashFlowPoint(date=day, income=income[day], expenses=spent[day])
            for day in sorted(days)
        ]
