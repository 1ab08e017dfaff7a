#!/usr/bin/env python3
"""
Transaction Filters

Pure filtering over the canonical transaction collection. Each filter is
an independent predicate; a transaction is kept only if every active
predicate accepts it, so the order in which filters are applied never
changes the result and filtering twice with the same criteria is the same
as filtering once.

Functions:
- filter_transactions: Apply FilterCriteria to a collection
- within_last_days: Period window used by reports (last N days)
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, timedelta
from enum import Enum

from ..core.dates import FinancialDate, parse_financial_date
from ..core.models import ALL, DateRange, FilterCriteria, Transaction, TransactionType

logger = logging.getLogger(__name__)

TransactionPredicate = Callable[[Transaction], bool]


class ReportPeriod(Enum):
    """Preset report windows, in days."""

    LAST_30_DAYS = 30
    LAST_90_DAYS = 90
    LAST_180_DAYS = 180
    LAST_365_DAYS = 365


def _bound(value: str | date | FinancialDate | None) -> FinancialDate | None:
    """Parse a filter bound; an unparseable bound counts as unset."""
    if value in (None, ""):
        return None
    bound = parse_financial_date(value)
    if bound is None:
        logger.debug("Ignoring unparseable date bound %r", value)
    return bound


def matches_date_range(transaction: Transaction, date_range: DateRange) -> bool:
    """
    Inclusive calendar-date range check.

    A transaction whose date cannot be parsed is excluded as soon as any
    bound is set.
    """
    start = _bound(date_range.start_date)
    end = _bound(date_range.end_date)
    if start is None and end is None:
        return True

    tx_date = transaction.parsed_date
    if tx_date is None:
        return False
    return (start is None or tx_date >= start) and (end is None or tx_date <= end)


def matches_search(transaction: Transaction, search_term: str) -> bool:
    """Case-insensitive substring match on description or category name."""
    if not search_term:
        return True
    needle = search_term.casefold()
    return needle in transaction.description.casefold() or needle in transaction.category_name.casefold()


def matches_category(transaction: Transaction, category: str) -> bool:
    return category == ALL or transaction.category_name == category


def matches_type(transaction: Transaction, selected_type: TransactionType | str) -> bool:
    return selected_type == ALL or transaction.type == selected_type


def build_predicates(criteria: FilterCriteria) -> list[TransactionPredicate]:
    """The active predicates for ``criteria``; inactive filters are omitted."""
    predicates: list[TransactionPredicate] = []

    if not criteria.date_range.is_open:
        predicates.append(lambda t: matches_date_range(t, criteria.date_range))
    if criteria.search_term:
        predicates.append(lambda t: matches_search(t, criteria.search_term))
    if criteria.selected_category != ALL:
        predicates.append(lambda t: matches_category(t, criteria.selected_category))
    if criteria.selected_type != ALL:
        predicates.append(lambda t: matches_type(t, criteria.selected_type))

    return predicates


def filter_transactions(transactions: Iterable[Transaction], criteria: FilterCriteria) -> list[Transaction]:
    """
    Filter transactions by date range, search text, category and type.

    Args:
        transactions: Canonical transactions
        criteria: Current filter selection

    Returns:
        Transactions accepted by every active filter, in their original order
    """
    predicates = build_predicates(criteria)
    return [t for t in transactions if all(predicate(t) for predicate in predicates)]


def within_last_days(
    transactions: Iterable[Transaction], days: int | ReportPeriod, today: date | None = None
) -> list[Transaction]:
    """
    Keep transactions dated within the last ``days`` days (inclusive of the
    cut-off date). Undated transactions are excluded.

    Example:
        within_last_days(txs, ReportPeriod.LAST_90_DAYS)
    """
    if isinstance(days, ReportPeriod):
        days = days.value
    if days <= 0:
        raise ValueError(f"days must be positive, got {days}")

    cutoff = (today or date.today()) - timedelta(days=days)
    return filter_transactions(transactions, FilterCriteria(date_range=DateRange(start_date=cutoff.isoformat())))
