#!/usr/bin/env python3
"""
Core Data Models for moneyboard

Canonical data structures shared by the gateway, the transaction store and
the analysis layer. Enumeration values match the numeric codes used on the
wire by the remote API.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .dates import FinancialDate, parse_financial_date
from .money import Money

# Sentinel used by the category and type filters to mean "no filter"
ALL = "all"


class TransactionType(Enum):
    """Direction of a transaction. The sign of the amount is never used."""

    INCOME = 0
    EXPENSE = 1


class TransactionStatus(Enum):
    """Settlement state of a transaction."""

    PENDING = 0
    COMPLETED = 1


class RecurrenceInterval(Enum):
    """Repeat interval for recurring transactions."""

    DAILY = 0
    WEEKLY = 1
    MONTHLY = 2
    YEARLY = 3


class AccountType(Enum):
    """Kinds of account a transaction can be booked against."""

    BANK = 0
    CREDIT_CARD = 1
    CASH = 2
    DIGITAL_WALLET = 3


@dataclass
class Transaction:
    """
    Canonical transaction.

    Every transaction returned by the API is normalized into this shape
    before any filtering or aggregation runs. ``amount`` is non-negative;
    whether it adds to or subtracts from the balance is decided by ``type``.

    ``date`` keeps the ISO string as received so that a record with an
    unusable date survives canonicalization; use ``parsed_date`` for
    comparisons.
    """

    id: str
    date: str
    description: str
    category_name: str
    type: TransactionType
    amount: Money
    status: TransactionStatus = TransactionStatus.PENDING
    is_recurring: bool = False
    notes: str = ""

    @property
    def parsed_date(self) -> FinancialDate | None:
        """Calendar date of the transaction, or None if it cannot be parsed."""
        return parse_financial_date(self.date)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    def to_dict(self) -> dict[str, Any]:
        """Convert to the canonical wire shape."""
        return {
            "id": self.id,
            "date": self.date,
            "description": self.description,
            "categoryName": self.category_name,
            "type": self.type.value,
            "amount": self.amount.to_float(),
            "status": self.status.value,
            "isRecurring": self.is_recurring,
            "notes": self.notes,
        }


@dataclass
class TransactionFormData:
    """
    Payload for creating or updating a transaction.

    Accounts and categories are referenced by id only; both must already
    exist on the server before the transaction is submitted.
    """

    amount: Money
    date: str
    description: str
    type: TransactionType
    account_id: str
    category_id: str
    status: TransactionStatus = TransactionStatus.PENDING
    notes: str = ""
    is_recurring: bool = False
    recurrence_interval: RecurrenceInterval | None = None

    def validate(self) -> list[str]:
        """Validate the payload and return a list of errors."""
        errors = []

        if self.amount.is_negative():
            errors.append("amount must not be negative")
        if parse_financial_date(self.date) is None:
            errors.append(f"date is not a valid ISO date: {self.date!r}")
        if not self.account_id:
            errors.append("account_id is required")
        if not self.category_id:
            errors.append("category_id is required")
        if self.is_recurring and self.recurrence_interval is None:
            errors.append("recurrence_interval is required for recurring transactions")

        return errors

    def to_payload(self) -> dict[str, Any]:
        """
        Convert to the JSON body expected by the API.

        Raises:
            ValueError: If the payload does not validate
        """
        errors = self.validate()
        if errors:
            raise ValueError(f"Invalid transaction: {'; '.join(errors)}")

        payload: dict[str, Any] = {
            "amount": self.amount.to_float(),
            "date": self.date,
            "description": self.description,
            "notes": self.notes,
            "type": self.type.value,
            "status": self.status.value,
            "accountId": self.account_id,
            "categoryId": self.category_id,
            "isRecurring": self.is_recurring,
        }
        if self.is_recurring and self.recurrence_interval is not None:
            payload["recurrenceInterval"] = self.recurrence_interval.value
        return payload


def _first_present(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class Account:
    """Account a transaction is booked against."""

    id: str
    name: str
    initial_balance: Money
    type: AccountType

    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        """Create Account from API dict (the API capitalizes some keys)."""
        raw_type = _first_present(data, "type", "Type", default=AccountType.BANK.value)
        try:
            account_type = AccountType(int(raw_type))
        except (TypeError, ValueError):
            account_type = AccountType.BANK

        return cls(
            id=str(_first_present(data, "id", "Id", default="")),
            name=_first_present(data, "name", "Name", default=""),
            initial_balance=Money.from_amount(
                _first_present(data, "initialBalance", "InitialBalance", default=0)
            ),
            type=account_type,
            user_id=_first_present(data, "userId", "UserId"),
        )


@dataclass
class Category:
    """Transaction category with the server's running spend total."""

    id: str
    category_name: str
    total_spent: Money = field(default_factory=Money.zero)

    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        """Create Category from API dict."""
        return cls(
            id=str(_first_present(data, "id", "Id", default="")),
            category_name=_first_present(data, "categoryName", "CategoryName", "name", default=""),
            total_spent=Money.from_amount(_first_present(data, "totalSpent", "TotalSpent", default=0)),
            user_id=_first_present(data, "userId", "UserId"),
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive date bounds; either side may be open."""

    start_date: str | None = None
    end_date: str | None = None

    @property
    def is_open(self) -> bool:
        """True when neither bound is set."""
        return not self.start_date and not self.end_date


@dataclass(frozen=True)
class FilterCriteria:
    """Current filter selection for the transaction list."""

    search_term: str = ""
    selected_category: str = ALL
    selected_type: TransactionType | str = ALL
    date_range: DateRange = field(default_factory=DateRange)

    def cleared(self) -> "FilterCriteria":
        """Return criteria with every filter disabled."""
        return FilterCriteria()

    def with_date_range(self, start_date: str | None, end_date: str | None) -> "FilterCriteria":
        return replace(self, date_range=DateRange(start_date=start_date, end_date=end_date))


@dataclass(frozen=True)
class TransactionTotals:
    """Running totals over a set of transactions. Never persisted."""

    income: Money
    expense: Money
    balance: Money


# Type aliases for common data structures
TransactionList = list[Transaction]
AccountList = list[Account]
CategoryList = list[Category]
