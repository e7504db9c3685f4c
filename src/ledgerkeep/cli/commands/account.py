"""Account management commands."""

import click
from ledgerkeep.cli.error_handling import format_money, handle_domain_error
from ledgerkeep.cli.resolution import resolve_account_or_exit
from ledgerkeep.domain.account import AccountService
from ledgerkeep.domain.entities import AccountType
from ledgerkeep.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="checking",
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", show_default=True, help="Opening balance")
@click.option("--cleared-balance", help="Opening cleared balance (defaults to the opening balance)")
@click.option("--currency", default="USD", show_default=True, help="Three-letter currency code")
@click.pass_context
def create_account(
    ctx, name: str, account_type: str, balance: str, cleared_balance: str | None, currency: str
):
    """Create a new account.

    The opening balances are replaced by values derived from the account's
    transactions once the first transaction is recorded.

    Examples:
        ledgerkeep account create "Main Checking" --balance 2500.00
        ledgerkeep account create "Visa" --type credit
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = AccountService(db)

    try:
        opening = parse_amount(balance)
        opening_cleared = parse_amount(cleared_balance) if cleared_balance is not None else None
        account_id = service.create_account(
            owner_id=owner_id,
            name=name,
            type=account_type,
            balance=opening,
            cleared_balance=opening_cleared,
            currency=currency,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    summaries = service.list_account_summaries(ctx.obj["owner_id"])
    if not summaries:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 90)
    click.echo(
        f"{'ID':<5} {'Name':<20} {'Type':<10} {'Balance':>14} {'Cleared':>14} {'Pending':>8}"
    )
    click.echo("-" * 90)
    for summary in summaries:
        acc = summary.account
        name = acc.name if acc.is_active else f"{acc.name} (inactive)"
        click.echo(
            f"{acc.id:<5} {name:<20} {acc.type.value:<10} "
            f"{format_money(acc.balance):>14} {format_money(acc.cleared_balance):>14} "
            f"{summary.pending_transactions:>8}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show one account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, owner_id, account)
    summary = service.get_account_summary(account_id, owner_id=owner_id)
    acc = summary.account

    click.echo(f"Account: {acc.name} (ID: {acc.id})")
    click.echo(f"  Type: {acc.type.value}")
    click.echo(f"  Currency: {acc.currency}")
    click.echo(f"  Balance: {format_money(acc.balance)}")
    click.echo(f"  Cleared balance: {format_money(acc.cleared_balance)}")
    click.echo(f"  Pending transactions: {summary.pending_transactions}")
    click.echo(f"  Active: {'yes' if acc.is_active else 'no'}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--balance", help="Override the stored balance until the next recalculation")
@click.option("--currency", help="Three-letter currency code")
@click.option("--active/--inactive", default=None, help="Mark the account active or inactive")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    account_type: str | None,
    balance: str | None,
    currency: str | None,
    active: bool | None,
) -> None:
    """Update an account.

    ACCOUNT can be an account name or ID. Only the given fields change.

    Examples:
        ledgerkeep account update "Main Checking" --name "Joint Checking"
        ledgerkeep account update 2 --inactive
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, owner_id, account)

    try:
        service.update_account(
            owner_id=owner_id,
            account_id=account_id,
            name=name,
            type=account_type,
            balance=parse_amount(balance) if balance is not None else None,
            currency=currency,
            is_active=active,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated account {account_id}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no transactions. Use
    'transaction delete' or move them with 'transaction update --account'.

    Examples:
        ledgerkeep account delete "Old Savings"
        ledgerkeep account delete 3 --yes
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, owner_id, account)
    account_obj = service.get_account(account_id, owner_id=owner_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(owner_id, account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
