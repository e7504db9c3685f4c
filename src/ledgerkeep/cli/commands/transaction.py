"""Transaction management commands."""

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


def _parse_date_or_exit(ctx, value: str | None, label: str):
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category name or ID")
@click.option("--status", type=click.Choice(STATUSES, case_sensitive=False), help="Only this status")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--limit", type=int, help="Show at most this many transactions")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    category: str | None,
    status: str | None,
    start_date: str | None,
    end_date: str | None,
    limit: int | None,
):
    """View transactions, newest first."""
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = TransactionService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    start = _parse_date_or_exit(ctx, start_date, "start date")
    end = _parse_date_or_exit(ctx, end_date, "end date")

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, owner_id, account)
    category_id = None
    if category:
        category_id = resolve_category_or_exit(ctx, category_service, owner_id, category)

    transactions = service.list_transactions(
        owner_id=owner_id,
        account_id=account_id,
        category_id=category_id,
        status=status,
        start_date=start,
        end_date=end,
    )
    if limit is not None:
        transactions = transactions[:limit]

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts(owner_id)}
    categories = {cat.id: cat.name for cat in category_service.list_categories(owner_id)}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>12}  {'Status':<8} {'Account':<18} "
        f"{'Category':<16} {'Description':<30}"
    )
    click.echo("-" * 110)

    for txn in transactions:
        recurring = f" ({txn.recurring_frequency.value})" if txn.recurring_frequency else ""
        click.echo(
            f"{txn.id:<6} {str(txn.date):<12} {format_money(txn.amount):>12}  {txn.status.value:<8} "
            f"{accounts.get(txn.account_id, 'Unknown'):<18} "
            f"{categories.get(txn.category_id, 'Unknown'):<16} "
            f"{(txn.description + recurring)[:30]:<30}"
        )

    total_expenses = sum(txn.amount for txn in transactions if txn.amount < 0)
    total_income = sum(txn.amount for txn in transactions if txn.amount > 0)
    click.echo("-" * 110)
    click.echo(
        f"{'TOTAL':<6} Expenses: {format_money(abs(total_expenses))} | "
        f"Income: {format_money(total_income)} | Count: {len(transactions)}"
    )


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Move to this account (name or ID)")
@click.option("--category", help="Category name or ID")
@click.option("--amount", help="Signed amount (e.g., -75.00)")
@click.option("--description", help="Transaction description")
@click.option("--date", help="Transaction date")
@click.option("--status", type=click.Choice(STATUSES, case_sensitive=False), help="Clearing status")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False), help="Transaction type")
@click.option("--recurring", type=click.Choice(FREQUENCIES, case_sensitive=False), help="Make recurring with this frequency")
@click.option("--recurring-until", help="Last date of the recurrence")
@click.option("--not-recurring", is_flag=True, help="Clear recurrence")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    category: str | None,
    amount: str | None,
    description: str | None,
    date: str | None,
    status: str | None,
    txn_type: str | None,
    recurring: str | None,
    recurring_until: str | None,
    not_recurring: bool,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Amounts follow the same sign
    rule as 'add', using --type if given and the current type otherwise;
    changing only --type re-signs the stored amount. Balances of the affected
    accounts are recalculated, including the previous account when the
    transaction is moved with --account.

    Examples:
        ledgerkeep transaction update 1 --amount 75.00
        ledgerkeep transaction update 1 --type income
        ledgerkeep transaction update 1 --account "Savings" --status cleared
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id, owner_id=owner_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), owner_id, account)
    category_id = None
    if category is not None:
        category_id = resolve_category_or_exit(ctx, CategoryService(db), owner_id, category)

    txn_date = _parse_date_or_exit(ctx, date, "date format")
    end_date = _parse_date_or_exit(ctx, recurring_until, "date format")

    effective_type = TransactionType(txn_type.lower()) if txn_type else txn.type
    txn_amount = None
    if amount is not None:
        try:
            txn_amount = signed_amount(parse_amount(amount), effective_type)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    elif txn_type is not None:
        txn_amount = signed_amount(txn.amount, effective_type)

    try:
        transaction_service.update_transaction(
            owner_id=owner_id,
            transaction_id=transaction_id,
            account_id=account_id,
            category_id=category_id,
            description=description,
            amount=txn_amount,
            date=txn_date,
            status=status,
            type=txn_type,
            is_recurring=True if recurring else None,
            recurring_frequency=recurring,
            recurring_end_date=end_date,
            clear_recurrence=not_recurring,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("status")
@click.argument("transaction_id", type=int)
@click.argument("status", type=click.Choice(STATUSES, case_sensitive=False))
@click.pass_context
def update_status(ctx, transaction_id: int, status: str) -> None:
    """Mark a transaction pending or cleared.

    Examples:
        ledgerkeep transaction status 12 cleared
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    service = TransactionService(db)

    try:
        new_status = service.update_status(owner_id, transaction_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction {transaction_id} is now {new_status.value}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Examples:
        ledgerkeep transaction delete 1
    """
    db = ctx.obj["db"]
    owner_id = ctx.obj["owner_id"]
    transaction_service = TransactionService(db)

    txn = transaction_service.get_transaction(transaction_id, owner_id=owner_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        transaction_service.delete_transaction(owner_id, transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
