"""Add transaction command."""

import click
from ledgerkeep.cli.error_handling import format_money, handle_domain_error
from ledgerkeep.cli.resolution import resolve_account_or_exit, resolve_category_or_exit
from ledgerkeep.domain.account import AccountService
from ledgerkeep.domain.category import CategoryService
from ledgerkeep.domain.entities import RecurringFrequency, TransactionStatus, TransactionType
from ledgerkeep.domain.transaction import TransactionService
from ledgerkeep.domain.validation import signed_amount
from ledgerkeep.utils.amount_parser import parse_amount
from ledgerkeep.utils.date_parser import parse_date

TRANSACTION_TYPES = [t.value for t in TransactionType]
STATUSES = [s.value for s in TransactionStatus]
FREQUENCIES = [f.value for f in RecurringFrequency]


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--amount", required=True, help="Amount (sign is set from --type for expenses and income)")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--date",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(TRANSACTION_TYPES, case_sensitive=False),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option(
    "--status",
    type=click.Choice(STATUSES, case_sensitive=False),
    default="pending",
    show_default=True,
    help="Clearing status",
)
@click.option(
    "--recurring",
    type=click.Choice(FREQUENCIES, case_sensitive=False),
    help="Mark as recurring with this frequency",
)
@click.option("--recurring-until", help="Last date of the recurrence")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    category: str,
    amount: str,
    description: str,
    date: str,
    txn_type: str,
    status: str,
    recurring: str | None,
    recurring_until: str | None,
):
    """Add a transaction.

    Expenses are always stored as negative amounts and income as positive
    ones. Transfers keep the sign given with --amount.

    Examples:
        ledgerkeep add --account "Main Checking" --category Groceries --amount 89.43 --description "Weekly shop"
        ledgerkeep add --account 1 --category Salary --amount 3200 --type income --status cleared --description Payroll
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    account_id = resolve_account_or_exit(ctx, account_service, owner_id, account)
    category_id = resolve_category_or_exit(ctx, category_service, owner_id, category)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = signed_amount(parse_amount(amount), TransactionType(txn_type.lower()))
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    end_date = None
    if recurring_until:
        try:
            end_date = parse_date(recurring_until)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        transaction_id = transaction_service.create_transaction(
            owner_id=owner_id,
            account_id=account_id,
            category_id=category_id,
            description=description,
            amount=txn_amount,
            date=txn_date,
            status=status,
            type=txn_type,
            is_recurring=recurring is not None,
            recurring_frequency=recurring,
            recurring_end_date=end_date,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    account_obj = account_service.get_account(account_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {format_money(txn_amount)}")
    click.echo(f"  Description: {description}")
    click.echo(f"  Status: {status}")
    click.echo(
        f"  Account balance: {format_money(account_obj.balance)} "
        f"(cleared: {format_money(account_obj.cleared_balance)})"
    )


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
