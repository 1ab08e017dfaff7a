#!/usr/bin/env python3
"""
Transaction Aggregation

Pure summaries over a canonical transaction collection, consumed by the
dashboard cards, the charts and the report exporter.

All sums are integer cents, so results are exact to two decimal places and
identical for a given input regardless of accumulation order. None of these
functions raise on bad data:
- a negative amount counts as zero
- a transaction whose date cannot be parsed is left out of the monthly
  breakdown (it still counts towards totals and category breakdowns)
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.models import Transaction, TransactionTotals, TransactionType
from ..core.money import Money

logger = logging.getLogger(__name__)

TOP_CATEGORIES = 10
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class MonthlySummary:
    """Income and expense for one calendar month."""

    month: str  # YYYY-MM
    label: str  # e.g. "January 2024"
    income: Money
    expense: Money
    balance: Money
    transaction_count: int


@dataclass(frozen=True)
class CategorySummary:
    """Expense total for one category."""

    category: str
    total: Money
    count: int
    percentage: float


@dataclass(frozen=True)
class ReportSummary:
    """Headline numbers for a report period."""

    income: Money
    expense: Money
    balance: Money
    transaction_count: int
    average_transaction: Money


@dataclass(frozen=True)
class ChartSlice:
    """One category slice for the income/expense pie charts."""

    name: str
    value: Money
    type: TransactionType


def effective_amount(transaction: Transaction) -> Money:
    """The amount used for aggregation; negative amounts count as zero."""
    return transaction.amount.clamp_non_negative()


def _sum_cents(transactions: Iterable[Transaction], transaction_type: TransactionType) -> int:
    return sum(effective_amount(t).to_cents() for t in transactions if t.type is transaction_type)


def compute_totals(transactions: Iterable[Transaction]) -> TransactionTotals:
    """
    Income, expense and balance (income minus expense).

    Example:
        INCOME 1000, EXPENSE 250, EXPENSE 50 -> income 1000, expense 300, balance 700
    """
    transactions = list(transactions)
    income = _sum_cents(transactions, TransactionType.INCOME)
    expense = _sum_cents(transactions, TransactionType.EXPENSE)
    return TransactionTotals(
        income=Money.from_cents(income),
        expense=Money.from_cents(expense),
        balance=Money.from_cents(income - expense),
    )


def monthly_breakdown(transactions: Iterable[Transaction]) -> list[MonthlySummary]:
    """
    Group transactions by calendar month, oldest month first.

    Transactions with an unparseable date are dropped from the breakdown.
    """
    months: dict[str, dict] = {}
    skipped = 0

    for transaction in transactions:
        tx_date = transaction.parsed_date
        if tx_date is None:
            skipped += 1
            continue

        key = tx_date.month_key()
        bucket = months.setdefault(
            key, {"label": tx_date.month_label(), "income": 0, "expense": 0, "count": 0}
        )
        cents = effective_amount(transaction).to_cents()
        if transaction.is_income:
            bucket["income"] += cents
        else:
            bucket["expense"] += cents
        bucket["count"] += 1

    if skipped:
        logger.debug("Monthly breakdown skipped %d transactions without a usable date", skipped)

    return [
        MonthlySummary(
            month=key,
            label=bucket["label"],
            income=Money.from_cents(bucket["income"]),
            expense=Money.from_cents(bucket["expense"]),
            balance=Money.from_cents(bucket["income"] - bucket["expense"]),
            transaction_count=bucket["count"],
        )
        for key, bucket in sorted(months.items())
    ]


def category_breakdown(
    transactions: Iterable[Transaction], limit: int | None = TOP_CATEGORIES
) -> list[CategorySummary]:
    """
    Expense totals per category, largest first.

    Percentages are relative to all expenses (not only the categories
    returned) and are 0 when there are no expenses. Ties keep the order in
    which categories were first seen.

    Args:
        transactions: Canonical transactions; income is ignored
        limit: Maximum number of categories to return, None for all

    Example:
        Food 60, Food 40, Transport 100 ->
        [Food 100 (50%, 2 txns), Transport 100 (50%, 1 txn)]
    """
    totals: dict[str, int] = {}
    counts: dict[str, int] = {}

    for transaction in transactions:
        if not transaction.is_expense:
            continue
        name = transaction.category_name
        totals[name] = totals.get(name, 0) + effective_amount(transaction).to_cents()
        counts[name] = counts.get(name, 0) + 1

    total_expenses = sum(totals.values())

    # sorted() is stable and dicts keep first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]

    return [
        CategorySummary(
            category=name,
            total=Money.from_cents(cents),
            count=counts[name],
            percentage=(cents * 100 / total_expenses) if total_expenses > 0 else 0.0,
        )
        for name, cents in ranked
    ]


def report_summary(transactions: Iterable[Transaction]) -> ReportSummary:
    """
    Totals plus transaction count and average transaction size.

    The average is (income + expense) / count, rounded down to the cent,
    and zero for an empty period.
    """
    transactions = list(transactions)
    totals = compute_totals(transactions)
    count = len(transactions)
    volume = totals.income.to_cents() + totals.expense.to_cents()

    return ReportSummary(
        income=totals.income,
        expense=totals.expense,
        balance=totals.balance,
        transaction_count=count,
        average_transaction=Money.from_cents(volume // count if count else 0),
    )


def category_chart_data(transactions: Iterable[Transaction]) -> list[ChartSlice]:
    """
    Amount per category across both transaction types, in first-seen order.

    The first transaction seen for a category decides which chart (income
    or expense) the slice belongs to. Blank categories are grouped as
    "Uncategorized".
    """
    values: dict[str, int] = {}
    types: dict[str, TransactionType] = {}

    for transaction in transactions:
        name = transaction.category_name or UNCATEGORIZED
        values[name] = values.get(name, 0) + effective_amount(transaction).to_cents()
        types.setdefault(name, transaction.type)

    return [ChartSlice(name=name, value=Money.from_cents(cents), type=types[name]) for name, cents in values.items()]
