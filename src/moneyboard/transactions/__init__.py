"""
Transactions Package

Canonicalization of API records, the authoritative transaction store and
the filter engine.
"""

from .canonicalizer import (
    canonicalize_transaction,
    canonicalize_transactions,
    parse_transaction_status,
    parse_transaction_type,
)
from .filters import ReportPeriod, filter_transactions, within_last_days
from .store import LoggingNotifier, Notifier, StoreState, TransactionStore

__all__ = [
    "LoggingNotifier",
    "Notifier",
    "ReportPeriod",
    "StoreState",
    "TransactionStore",
    "canonicalize_transaction",
    "canonicalize_transactions",
    "filter_transactions",
    "parse_transaction_status",
    "parse_transaction_type",
    "within_last_days",
]
