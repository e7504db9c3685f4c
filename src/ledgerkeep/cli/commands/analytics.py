"""Analytics command."""

import click
from ledgerkeep.cli.error_handling import format_money, handle_domain_error
from ledgerkeep.domain.analytics import CURRENT_MONTH, YEAR_TO_DATE, AnalyticsService, resolve_period
from ledgerkeep.utils.date_parser import parse_date


def _print_breakdown(title: str, rows, total) -> None:
    click.echo(f"\n{title}:")
    if not rows:
        click.echo("  (no expenses)")
        return
    for row in rows:
        share = (row.amount / total * 100) if total else 0
        click.echo(f"  {row.name:<24} {format_money(row.amount):>14} {share:5.1f}%")


@click.command("analytics")
@click.option("--days", type=int, help="Look back this many days (default: 30)")
@click.option("--current-month", is_flag=True, help="Only the current month")
@click.option("--ytd", is_flag=True, help="Year to date")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@click.pass_context
def analytics(
    ctx,
    days: int | None,
    current_month: bool,
    ytd: bool,
    start_date: str | None,
    end_date: str | None,
):
    """Show spending by category and account, and the daily cash flow.

    Transfers are left out of the spending breakdowns.

    Examples:
        ledgerkeep analytics
        ledgerkeep analytics --current-month
        ledgerkeep analytics --start-date 2024-01-01 --end-date 2024-03-31
    """
    db = ctx.obj["db"]
    service = AnalyticsService(db)

    period_count = sum(1 for is_set in (days is not None, current_month, ytd) if is_set)
    if period_count > 1:
        click.echo("Error: Only one of --days, --current-month and --ytd can be given.", err=True)
        ctx.exit(1)
    if period_count and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.", err=True
        )
        ctx.exit(1)

    try:
        if start_date or end_date:
            start = parse_date(start_date) if start_date else None
            end = parse_date(end_date) if end_date else None
        elif current_month:
            start, end = resolve_period(CURRENT_MONTH)
        elif ytd:
            start, end = resolve_period(YEAR_TO_DATE)
        else:
            start, end = resolve_period(days if days is not None else 30)
    except ValueError as e:
        handle_domain_error(ctx, e)

    report = service.build_report(ctx.obj["owner_id"], start_date=start, end_date=end)

    click.echo(f"Period: {start or 'beginning'} to {end or 'today'}")
    if not report.has_data:
        click.echo("No transactions found for this period.")
        return

    click.echo(f"Total income:   {format_money(report.total_income):>14}")
    click.echo(f"Total expenses: {format_money(report.total_expenses):>14}")
    click.echo(f"Net cash flow:  {format_money(report.net_cash_flow):>14}")

    _print_breakdown("Spending by category", report.by_category, report.total_expenses)
    _print_breakdown("Spending by account", report.by_account, report.total_expenses)

    click.echo("\nCash flow:")
    click.echo(f"  {'Date':<12} {'Income':>14} {'Expenses':>14} {'Net':>14}")
    for point in report.cash_flow:
        click.echo(
            f"  {str(point.date):<12} {format_money(point.income):>14} "
            f"{format_money(point.expenses):>14} {format_money(point.net):>14}"
        )


def register_commands(cli):
    """Register analytics command with main CLI."""
    cli.add_command(analytics)
