"""CLI helpers for resolving account and category references."""

from __future__ import annotations

import click
from ledgerkeep.domain.account import AccountService
from ledgerkeep.domain.category import CategoryService
from ledgerkeep.cli.error_handling import handle_domain_error
from ledgerkeep.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, owner_id: int, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, owner_id, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(
    ctx: click.Context, category_service: CategoryService, owner_id: int, category: str
) -> int:
    """Resolve category name or ID, or exit with a CLI error."""
    try:
        if category.isdigit():
            return category_service.require_category(int(category), owner_id=owner_id).id
        return category_service.require_category_by_name(owner_id, category).id
    except ValueError as exc:
        handle_domain_error(ctx, exc)
