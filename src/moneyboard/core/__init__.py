"""
Core Utilities Package

Shared primitives, data models and ambient configuration used by every
other moneyboard package.

This package provides:
- Currency handling with integer arithmetic for precision
- Canonical models for transactions, accounts, categories and filters
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    get_output_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)
from .dates import FinancialDate, parse_financial_date
from .models import (
    ALL,
    Account,
    AccountType,
    Category,
    DateRange,
    FilterCriteria,
    RecurrenceInterval,
    Transaction,
    TransactionFormData,
    TransactionStatus,
    TransactionTotals,
    TransactionType,
)
from .money import Money

__all__ = [
    "ALL",
    "Account",
    "AccountType",
    "Category",
    # Configuration
    "Config",
    "DateRange",
    "Environment",
    "FilterCriteria",
    "FinancialDate",
    "Money",
    "RecurrenceInterval",
    # Data models
    "Transaction",
    "TransactionFormData",
    "TransactionStatus",
    "TransactionTotals",
    "TransactionType",
    # Currency utilities
    "cents_to_dollars_str",
    "format_cents",
    "get_config",
    "get_output_dir",
    "is_development",
    "is_production",
    "is_test",
    "parse_dollars_to_cents",
    "parse_financial_date",
    "reload_config",
    "safe_currency_to_cents",
]
