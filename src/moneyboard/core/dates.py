#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for financial operations.
Transactions are compared by calendar date only; any time-of-day component
sent by the API is discarded.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Calendar year-month as YYYY-MM, sortable chronologically."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    def month_label(self) -> str:
        """Human-readable month, e.g. 'January 2024'."""
        return self.date.strftime("%B %Y")

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"


def parse_financial_date(value: Any) -> FinancialDate | None:
    """
    Leniently parse a date value coming from the API or from user input.

    Accepts FinancialDate, date, datetime, "YYYY-MM-DD" and ISO date-time
    strings such as "2024-01-05T10:30:00Z". Returns None for anything that
    cannot be read as a calendar date (including empty strings).

    Examples:
        parse_financial_date("2024-02-10") -> FinancialDate(2024-02-10)
        parse_financial_date("2024-02-10T23:59:59.000Z") -> FinancialDate(2024-02-10)
        parse_financial_date("not a date") -> None
    """
    if value is None:
        return None
    if isinstance(value, FinancialDate):
        return value
    if isinstance(value, datetime):
        return FinancialDate(date=value.date())
    if isinstance(value, date):
        return FinancialDate(date=value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if len(text) < 10 or (len(text) > 10 and text[10] not in "T "):
        return None

    # Only the calendar part matters; time and offset are ignored
    try:
        return FinancialDate(date=date.fromisoformat(text[:10]))
    except ValueError:
        return None
