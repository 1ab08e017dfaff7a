"""
moneyboard - Personal Finance Tracking Client

Client-side data layer for a personal-finance API: authenticates against
the server, keeps the user's transactions in sync, and derives filtered
views, totals, monthly and category breakdowns and CSV reports.

Domain Packages:
- core: Money and date primitives, canonical models, configuration
- api: Async HTTP gateway, session and error taxonomy
- transactions: Canonicalizer, transaction store and filters
- analysis: Aggregations, CSV export and dashboard charts
- cli: Command-line interface

Example Usage:
    from moneyboard.api import Session, TransactionGateway
    from moneyboard.transactions import TransactionStore
    from moneyboard.analysis import compute_totals
"""

__version__ = "0.1.0"
__author__ = "moneyboard contributors"

from .core.config import Environment, get_config
from .core.models import Transaction, TransactionStatus, TransactionType
from .core.money import Money

__all__ = [
    "Environment",
    "Money",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "get_config",
]
