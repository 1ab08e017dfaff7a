#!/usr/bin/env python3
"""
Transactions CLI - List, Add and Delete

Command-line front-end over the transaction store.
"""

from datetime import date

import click

from ..analysis.aggregation import compute_totals
from ..analysis.export import status_label, type_label
from ..core.config import get_config
from ..core.json_utils import format_json
from ..core.models import (
    ALL,
    DateRange,
    FilterCriteria,
    RecurrenceInterval,
    TransactionFormData,
    TransactionStatus,
    TransactionType,
)
from ..core.money import Money
from .client import auth_options, open_store, run

TYPE_CHOICES = {"income": TransactionType.INCOME, "expense": TransactionType.EXPENSE}
STATUS_CHOICES = {"pending": TransactionStatus.PENDING, "completed": TransactionStatus.COMPLETED}
RECURRENCE_CHOICES = {interval.name.lower(): interval for interval in RecurrenceInterval}


def _store_failure(error: str | None) -> None:
    if error:
        raise click.ClickException(error)


@click.group()
def transactions() -> None:
    """List, add and delete transactions."""
    pass


@transactions.command("list")
@auth_options
@click.option("--search", default="", help="Case-insensitive text in description or category")
@click.option("--category", default=ALL, help="Exact category name (default: all)")
@click.option("--type", "tx_type", type=click.Choice(["all", *TYPE_CHOICES]), default="all", help="Transaction type")
@click.option("--start", help="Start date (YYYY-MM-DD), inclusive")
@click.option("--end", help="End date (YYYY-MM-DD), inclusive")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def list_transactions(
    ctx: click.Context,
    email: str | None,
    password: str | None,
    search: str,
    category: str,
    tx_type: str,
    start: str | None,
    end: str | None,
    as_json: bool,
) -> None:
    """
    List transactions matching the given filters.

    Examples:
      moneyboard transactions list --type expense --start 2024-01-01
      moneyboard transactions list --search rent --json
    """
    locale = get_config().reports.locale
    criteria = FilterCriteria(
        search_term=search,
        selected_category=category,
        selected_type=TYPE_CHOICES.get(tx_type, ALL),
        date_range=DateRange(start_date=start, end_date=end),
    )

    async def operation():
        async with open_store(ctx, email, password) as store:
            await store.fetch()
            _store_failure(store.error)
            return store.filtered(criteria)

    visible = run(operation)

    if as_json:
        click.echo(format_json([t.to_dict() for t in visible]))
        return

    for t in visible:
        click.echo(
            f"{t.date[:10]:<10}  {type_label(t.type, locale):<8}  {t.description[:30]:<30}  "
            f"{t.category_name[:18]:<18}  {t.amount.format_plain():>12}  {status_label(t.status, locale)}"
        )

    totals = compute_totals(visible)
    click.echo()
    click.echo(f"{len(visible)} transactions")
    click.echo(f"   Income:  {totals.income}")
    click.echo(f"   Expense: {totals.expense}")
    click.echo(f"   Balance: {totals.balance}")


@transactions.command()
@auth_options
@click.option("--amount", required=True, help="Amount, e.g. 45.99 (always positive)")
@click.option("--description", required=True, help="Description")
@click.option("--type", "tx_type", type=click.Choice(list(TYPE_CHOICES)), default="expense", help="Transaction type")
@click.option("--category", "category_name", required=True, help="Category name (created if missing)")
@click.option("--account", "account_name", required=True, help="Account name (created if missing)")
@click.option("--date", "tx_date", help="Date (YYYY-MM-DD), defaults to today")
@click.option("--status", type=click.Choice(list(STATUS_CHOICES)), default="pending", help="Settlement status")
@click.option("--notes", default="", help="Free-form notes")
@click.option("--recurring", type=click.Choice(list(RECURRENCE_CHOICES)), help="Recurrence interval")
@click.pass_context
def add(
    ctx: click.Context,
    email: str | None,
    password: str | None,
    amount: str,
    description: str,
    tx_type: str,
    category_name: str,
    account_name: str,
    tx_date: str | None,
    status: str,
    notes: str,
    recurring: str | None,
) -> None:
    """
    Add a transaction, creating its category and account if needed.

    Example:
      moneyboard transactions add --amount 45.99 --description Groceries \\
        --category Food --account "Main Checking"
    """
    try:
        money = Money.from_dollars(amount)
    except ValueError as e:
        raise click.BadParameter(f"Invalid amount: {amount}", param_hint="--amount") from e

    async def operation():
        async with open_store(ctx, email, password) as store:
            # Both references must exist server-side before the transaction is sent
            category_id = await store.ensure_category(category_name)
            account_id = await store.ensure_account(account_name)

            data = TransactionFormData(
                amount=money,
                date=tx_date or date.today().isoformat(),
                description=description,
                type=TYPE_CHOICES[tx_type],
                account_id=account_id,
                category_id=category_id,
                status=STATUS_CHOICES[status],
                notes=notes,
                is_recurring=recurring is not None,
                recurrence_interval=RECURRENCE_CHOICES.get(recurring) if recurring else None,
            )
            return await store.create(data)

    try:
        created = run(operation)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if created is not None:
        click.echo(f"   id: {created.id}")


@transactions.command()
@auth_options
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx: click.Context, email: str | None, password: str | None, transaction_id: str, yes: bool) -> None:
    """Delete a transaction by id."""
    if not yes:
        click.confirm(f"Delete transaction {transaction_id}?", abort=True)

    async def operation():
        async with open_store(ctx, email, password) as store:
            await store.delete(transaction_id)
            return len(store.transactions)

    remaining = run(operation)
    click.echo(f"   {remaining} transactions remaining")
