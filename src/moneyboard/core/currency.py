#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All monetary values inside moneyboard are held as integer cents so that
totals and breakdowns are exact to two decimal places.

Currency Systems:
- The remote API sends amounts as JSON numbers (floating point) or strings
- Internal calculations use cents: 100 cents = 1.00
- Display and export use fixed two-decimal strings: "12.34"

Key Principles:
- Never accumulate floating-point amounts
- Convert once, at the boundary, using Decimal with half-up rounding
- Invalid input converts to zero instead of raising
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

CENT = Decimal("0.01")


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to a fixed two-decimal string using integer arithmetic.

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def decimal_to_cents(amount: Decimal) -> int:
    """Round a Decimal amount half-up to whole cents."""
    return int(amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def safe_currency_to_cents(value: Union[str, int, float, Decimal, None]) -> int:
    """
    Safely convert a loosely-typed amount to integer cents.

    Accepts numbers, numeric strings ("12.34", "$1,234.50") and Decimals.
    Booleans, None, NaN/infinite values and unparseable strings yield 0.

    Examples:
        safe_currency_to_cents(45.99) -> 4599
        safe_currency_to_cents("1,234.5") -> 123450
        safe_currency_to_cents("abc") -> 0
    """
    if value is None or isinstance(value, bool):
        return 0

    try:
        if isinstance(value, Decimal):
            decimal_amount = value
        elif isinstance(value, (int, float)):
            # str() keeps the shortest repr, so 0.1 stays 0.1 rather than 0.1000000000000000055
            decimal_amount = Decimal(str(value))
        else:
            clean_str = str(value).replace("$", "").replace(",", "").strip()
            if not clean_str:
                return 0
            decimal_amount = Decimal(clean_str)

        if not decimal_amount.is_finite():
            return 0
        return decimal_to_cents(decimal_amount)
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse a dollar string to cents using integer arithmetic only.

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$12.34") -> 1234
        parse_dollars_to_cents("1,234.56") -> 123456
        parse_dollars_to_cents("12") -> 1200
        parse_dollars_to_cents("12.5") -> 1250
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()

    if not clean:
        return 0

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        parts = clean.split(".")
        dollars = int(parts[0]) if parts[0] else 0
        # Pad to 2 digits, truncate beyond 2
        cents_str = parts[1].ljust(2, "0")[:2]
        total = dollars * 100 + int(cents_str)
    else:
        total = int(clean) * 100

    return -total if is_negative else total


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix."""
    return f"${cents_to_dollars_str(cents)}"
