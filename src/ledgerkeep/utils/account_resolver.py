"""Utility for resolving account names to IDs."""

from ledgerkeep.domain.account import AccountService
from ledgerkeep.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, owner_id: int, account: str | int) -> int:
    """Resolve an owner's account name or ID to the account ID.

    Args:
        account_service: AccountService instance
        owner_id: Owner whose accounts are searched
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If the owner has no such account
    """
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if account_service.get_account(account_id, owner_id=owner_id) is None:
            raise NotFoundError(f"Account ID {account_id} not found")
        return account_id

    for acc in account_service.list_accounts(owner_id):
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
