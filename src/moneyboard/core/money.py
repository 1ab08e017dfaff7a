#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from .currency import (
    cents_to_dollars_str,
    decimal_to_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Transaction amounts are always non-negative; the direction of a
    transaction is carried by its type. Negative values still arise from
    arithmetic (e.g. a balance of income minus expense).

    Examples:
        >>> income = Money.from_cents(100000)
        >>> expense = Money.from_dollars("300.00")
        >>> str(income - expense)
        '$700.00'
        >>> (expense - income).format_plain()
        '-700.00'
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """The zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_dollars(cls, dollars: str | int) -> "Money":
        """
        Parse from dollar string like '$123.45' or integer dollars.

        Args:
            dollars: String like "$12.34" or integer like 12

        Returns:
            Money object
        """
        if isinstance(dollars, int):
            return cls(cents=dollars * 100)
        return cls(cents=parse_dollars_to_cents(dollars))

    @classmethod
    def from_decimal(cls, amount: Decimal) -> "Money":
        """Create Money from a Decimal, rounding half-up to cents."""
        return cls(cents=decimal_to_cents(amount))

    @classmethod
    def from_amount(cls, amount: Union[str, int, float, Decimal, None]) -> "Money":
        """
        Create Money from a loosely-typed amount as sent by the API.

        Unparseable or missing values become zero.
        """
        return cls(cents=safe_currency_to_cents(amount))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a two-place Decimal."""
        return Decimal(self.cents).scaleb(-2)

    def to_float(self) -> float:
        """Get value as a float, for JSON payloads and plotting only."""
        return self.cents / 100

    def format_plain(self) -> str:
        """Fixed two-decimal string without currency symbol."""
        return cents_to_dollars_str(self.cents)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def clamp_non_negative(self) -> "Money":
        """Return this amount, or zero if it is negative."""
        return self if self.cents >= 0 else Money.zero()

    def is_negative(self) -> bool:
        return self.cents < 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __bool__(self) -> bool:
        return self.cents != 0

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        return f"${cents_to_dollars_str(self.cents)}"

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
