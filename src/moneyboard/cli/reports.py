#!/usr/bin/env python3
"""
Reports CLI - Period Summaries, Breakdowns and CSV Export

Every report covers the last N days (30, 90, 180 or 365).
"""

from pathlib import Path

import click

from ..analysis.aggregation import category_breakdown, monthly_breakdown, report_summary
from ..analysis.export import HEADERS, report_filename, write_transactions_csv
from ..core.config import get_config
from ..core.json_utils import format_json
from ..core.models import Transaction
from ..transactions.filters import ReportPeriod, within_last_days
from .client import auth_options, open_store, run

PERIOD_CHOICES = [str(period.value) for period in ReportPeriod]


def period_option(func):
    return click.option(
        "--period",
        type=click.Choice(PERIOD_CHOICES),
        default="30",
        show_default=True,
        help="Report period in days",
    )(func)


def _period_transactions(ctx: click.Context, email: str | None, password: str | None, period: str) -> list[Transaction]:
    """Fetch all transactions and keep the ones inside the report period."""

    async def operation():
        async with open_store(ctx, email, password) as store:
            await store.fetch()
            if store.error:
                raise click.ClickException(store.error)
            return store.transactions

    return within_last_days(run(operation), int(period))


@click.group()
def reports() -> None:
    """Period summaries, breakdowns, CSV export and dashboard charts."""
    pass


@reports.command()
@auth_options
@period_option
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text")
@click.pass_context
def summary(ctx: click.Context, email: str | None, password: str | None, period: str, as_json: bool) -> None:
    """Income, expense, balance and average transaction for the period."""
    result = report_summary(_period_transactions(ctx, email, password, period))

    if as_json:
        click.echo(format_json({"period_days": int(period), "summary": result}))
        return

    click.echo(f"📊 Last {period} days")
    click.echo(f"   Income:              {result.income}")
    click.echo(f"   Expense:             {result.expense}")
    click.echo(f"   Balance:             {result.balance}")
    click.echo(f"   Transactions:        {result.transaction_count}")
    click.echo(f"   Average transaction: {result.average_transaction}")


@reports.command()
@auth_options
@period_option
@click.pass_context
def monthly(ctx: click.Context, email: str | None, password: str | None, period: str) -> None:
    """Income and expense per calendar month."""
    months = monthly_breakdown(_period_transactions(ctx, email, password, period))

    if not months:
        click.echo("No dated transactions in this period")
        return

    for month in months:
        click.echo(
            f"{month.label:<16} income {month.income.format_plain():>12}  "
            f"expense {month.expense.format_plain():>12}  balance {month.balance.format_plain():>12}  "
            f"({month.transaction_count} txns)"
        )


@reports.command()
@auth_options
@period_option
@click.option("--all", "show_all", is_flag=True, help="Show every category, not just the top 10")
@click.pass_context
def categories(ctx: click.Context, email: str | None, password: str | None, period: str, show_all: bool) -> None:
    """Expense totals per category, largest first."""
    transactions = _period_transactions(ctx, email, password, period)
    breakdown = category_breakdown(transactions, limit=None if show_all else 10)

    if not breakdown:
        click.echo("No expenses in this period")
        return

    for entry in breakdown:
        name = entry.category or "-"
        click.echo(f"{name[:24]:<24} {entry.total.format_plain():>12}  {entry.percentage:5.1f}%  ({entry.count} txns)")


@reports.command()
@auth_options
@period_option
@click.option("--locale", type=click.Choice(list(HEADERS)), help="Label language (default: MONEYBOARD_LOCALE)")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the CSV file")
@click.pass_context
def export(
    ctx: click.Context,
    email: str | None,
    password: str | None,
    period: str,
    locale: str | None,
    output_dir: Path | None,
) -> None:
    """
    Export the period's transactions to CSV.

    Example:
      moneyboard reports export --period 90 --locale pt-BR
    """
    config = get_config()
    transactions = _period_transactions(ctx, email, password, period)

    target_dir = output_dir or config.reports.output_dir
    filepath = write_transactions_csv(
        target_dir / report_filename(int(period)), transactions, locale or config.reports.locale
    )

    click.echo(f"💾 Exported {len(transactions)} transactions to {filepath}")


@reports.command()
@auth_options
@period_option
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Directory for the PNG file")
@click.pass_context
def dashboard(
    ctx: click.Context, email: str | None, password: str | None, period: str, output_dir: Path | None
) -> None:
    """Render the monthly and category charts to a PNG."""
    from ..analysis.charts import generate_dashboard

    transactions = _period_transactions(ctx, email, password, period)
    chart_file = generate_dashboard(transactions, output_dir=output_dir)

    click.echo(f"📈 Dashboard saved to {chart_file}")
