"""Maintenance commands."""

import click
from ledgerkeep.cli.error_handling import format_money, handle_domain_error
from ledgerkeep.domain.ledger import BalanceLedger


@click.command("recalculate-balances")
@click.option(
    "--all-owners",
    is_flag=True,
    help="Recalculate every account in the database, not only the current owner's",
)
@click.pass_context
def recalculate_balances(ctx, all_owners: bool):
    """Recalculate account balances from their transactions.

    Balances are normally kept up to date on every transaction change; this
    repairs accounts whose stored balances were edited by hand or written by
    older versions.
    """
    db = ctx.obj["db"]
    ledger = BalanceLedger(db)
    owner_id = None if all_owners else ctx.obj["owner_id"]
    total_accounts = len(db.list_accounts(owner_id=owner_id))

    click.echo("Recalculating account balances...")
    try:
        results = ledger.recalculate_all(owner_id=owner_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    for result in results:
        click.echo(f"Processing account: {result.account_name}")
        click.echo(f"  - Old balance: {format_money(result.previous.total)}")
        click.echo(f"  - New balance: {format_money(result.current.total)}")
        click.echo(f"  - Old cleared: {format_money(result.previous.cleared)}")
        click.echo(f"  - New cleared: {format_money(result.current.cleared)}")

    click.echo(f"Successfully updated {len(results)}/{total_accounts} accounts.")


def register_commands(cli):
    """Register maintenance commands with main CLI."""
    cli.add_command(recalculate_balances)
