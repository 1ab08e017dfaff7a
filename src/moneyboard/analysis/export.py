#!/usr/bin/env python3
"""
Report Export

Serializes an already-filtered transaction collection to CSV. Formatting
is a pure in-memory operation; writing to disk and choosing a filename
are separate helpers.

Columns: Date, Type, Description, Category, Amount, Status, Notes.
Amounts are fixed to two decimals and, like every aggregation, a negative
amount is written as 0.00. Type and status labels are localized.
"""

import csv
import io
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ..core.models import Transaction, TransactionStatus, TransactionType
from .aggregation import effective_amount

DEFAULT_LOCALE = "en"

HEADERS: dict[str, list[str]] = {
    "en": ["Date", "Type", "Description", "Category", "Amount", "Status", "Notes"],
    "pt-BR": ["Data", "Tipo", "Descrição", "Categoria", "Valor", "Status", "Observações"],
}

TYPE_LABELS: dict[str, dict[TransactionType, str]] = {
    "en": {TransactionType.INCOME: "Income", TransactionType.EXPENSE: "Expense"},
    "pt-BR": {TransactionType.INCOME: "Entrada", TransactionType.EXPENSE: "Saída"},
}

STATUS_LABELS: dict[str, dict[TransactionStatus, str]] = {
    "en": {TransactionStatus.PENDING: "Pending", TransactionStatus.COMPLETED: "Completed"},
    "pt-BR": {TransactionStatus.PENDING: "Pendente", TransactionStatus.COMPLETED: "Concluída"},
}


def _check_locale(locale: str) -> str:
    if locale not in HEADERS:
        raise ValueError(f"Unsupported locale {locale!r}; expected one of {', '.join(HEADERS)}")
    return locale


def type_label(transaction_type: TransactionType, locale: str = DEFAULT_LOCALE) -> str:
    return TYPE_LABELS[_check_locale(locale)][transaction_type]


def status_label(status: TransactionStatus, locale: str = DEFAULT_LOCALE) -> str:
    return STATUS_LABELS[_check_locale(locale)][status]


def transaction_row(transaction: Transaction, locale: str = DEFAULT_LOCALE) -> list[str]:
    """One CSV row for ``transaction``."""
    return [
        transaction.date,
        type_label(transaction.type, locale),
        transaction.description,
        transaction.category_name,
        effective_amount(transaction).format_plain(),
        status_label(transaction.status, locale),
        transaction.notes,
    ]


def export_transactions_csv(transactions: Iterable[Transaction], locale: str = DEFAULT_LOCALE) -> str:
    """
    Render transactions as a comma-delimited document.

    Rows follow the input order. Fields containing a comma, a quote or a
    line break are quoted, with embedded quotes doubled.

    Args:
        transactions: Transactions already restricted to the report period
        locale: Label language ("en" or "pt-BR")

    Returns:
        CSV text with a header row
    """
    _check_locale(locale)

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(HEADERS[locale])
    for transaction in transactions:
        writer.writerow(transaction_row(transaction, locale))
    return buffer.getvalue()


def report_filename(period_days: int, today: date | None = None) -> str:
    """
    Download name for an exported period, e.g. transactions_30days_2024-03-01.csv.
    """
    today = today or date.today()
    return f"transactions_{period_days}days_{today.isoformat()}.csv"


def write_transactions_csv(
    filepath: str | Path, transactions: Iterable[Transaction], locale: str = DEFAULT_LOCALE
) -> Path:
    """Write the CSV export to ``filepath`` as UTF-8 and return the path."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    content = export_transactions_csv(transactions, locale)
    with open(filepath, "w", encoding="utf-8", newline="") as f:
        f.write(content)

    return filepath
