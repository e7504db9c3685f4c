"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes. Enumerated columns are stored as plain strings
and turned back into their enum types here.
"""

from decimal import Decimal
from typing import Optional

from ledgerkeep.domain import entities as domain
from ledgerkeep.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
)


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_id=orm_account.owner_id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        balance=_to_decimal(orm_account.balance),
        cleared_balance=_to_decimal(orm_account.cleared_balance),
        currency=orm_account.currency or "USD",
        is_active=bool(orm_account.is_active) if orm_account.is_active is not None else True,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.owner_id,
        name=orm_category.name,
        color=orm_category.color,
        icon=orm_category.icon,
        is_default=bool(orm_category.is_default),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    frequency: Optional[domain.RecurringFrequency] = None
    if orm_transaction.recurring_frequency:
        frequency = domain.RecurringFrequency(orm_transaction.recurring_frequency)

    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        description=orm_transaction.description,
        amount=_to_decimal(orm_transaction.amount),
        date=orm_transaction.date,
        status=domain.TransactionStatus(orm_transaction.status or "pending"),
        type=domain.TransactionType(orm_transaction.type or "expense"),
        is_recurring=bool(orm_transaction.is_recurring),
        recurring_frequency=frequency,
        recurring_end_date=orm_transaction.recurring_end_date,
        created_at=orm_transaction.created_at,
    )
