"""Balance derivation for accounts.

An account's ``balance`` is the sum of all of its transaction amounts and its
``cleared_balance`` the sum over cleared transactions only. Both are always
recomputed from the full transaction set, never adjusted by deltas, so a
recalculation can be repeated any number of times with the same result.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from ledgerkeep.database.base import Database
from ledgerkeep.domain.entities import (
    AccountBalances,
    RecalculationResult,
    Transaction,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def derive_balances(transactions: Iterable[Transaction]) -> AccountBalances:
    """Sum transaction amounts into total and cleared balances.

    Args:
        transactions: Transactions belonging to a single account, in any order

    Returns:
        AccountBalances with the total over all transactions and the total
        over cleared ones. Both are zero for an empty input.
    """
    total = ZERO
    cleared = ZERO
    for txn in transactions:
        total += txn.amount
        if txn.is_cleared:
            cleared += txn.amount
    return AccountBalances(total=total, cleared=cleared)


class BalanceLedger:
    """Keeps stored account balances equal to their derived values."""

    def __init__(self, db: Database):
        """Initialize balance ledger.

        Args:
            db: Database instance
        """
        self.db = db

    def recalculate(self, account_id: int) -> Optional[AccountBalances]:
        """Recompute and persist the balances of one account.

        Args:
            account_id: Account ID

        Returns:
            The balances written, or None if the account does not exist

        Raises:
            PersistenceError: If the store fails to save the balances
        """
        account = self.db.get_account(account_id)
        if account is None:
            logger.debug("Skipping recalculation for missing account %s", account_id)
            return None

        balances = derive_balances(self.db.list_account_transactions(account_id))
        self.db.update_account_balances(
            account_id, balance=balances.total, cleared_balance=balances.cleared
        )
        logger.debug(
            "Account %s balances: total=%s cleared=%s",
            account_id,
            balances.total,
            balances.cleared,
        )
        return balances

    def recalculate_many(self, account_ids: Iterable[Optional[int]]) -> None:
        """Recalculate each distinct account once, in the order given."""
        seen: set[int] = set()
        for account_id in account_ids:
            if account_id is None or account_id in seen:
                continue
            seen.add(account_id)
            self.recalculate(account_id)

    def recalculate_all(self, owner_id: Optional[int] = None) -> list[RecalculationResult]:
        """Recalculate every account in the store.

        Args:
            owner_id: If given, only that owner's accounts are processed

        Returns:
            One RecalculationResult per account processed
        """
        accounts = self.db.list_accounts(owner_id=owner_id)
        logger.info("Recalculating balances for %d account(s)", len(accounts))

        results = []
        for account in accounts:
            previous = AccountBalances(total=account.balance, cleared=account.cleared_balance)
            current = self.recalculate(account.id)
            if current is None:
                # Removed between listing and recalculation
                continue
            results.append(
                RecalculationResult(
                    account_id=account.id,
                    account_name=account.name,
                    previous=previous,
                    current=current,
                )
            )

        logger.info("Recalculated %d/%d account(s)", len(results), len(accounts))
        return results
