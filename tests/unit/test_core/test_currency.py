#!/usr/bin/env python3
"""Tests for core currency utilities."""

from decimal import Decimal

import pytest

from moneyboard.core.currency import (
    cents_to_dollars_str,
    decimal_to_cents,
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)


class TestCurrencyConversions:
    """Test core currency conversion functions."""

    @pytest.mark.currency
    def test_cents_to_dollars_str(self):
        """Test formatting cents as dollar strings."""
        assert cents_to_dollars_str(4599) == "45.99"
        assert cents_to_dollars_str(100) == "1.00"
        assert cents_to_dollars_str(0) == "0.00"
        assert cents_to_dollars_str(5) == "0.05"
        assert cents_to_dollars_str(-4599) == "-45.99"
        assert cents_to_dollars_str(-5) == "-0.05"

    @pytest.mark.currency
    def test_safe_currency_to_cents_strings(self):
        """Test safe parsing of API amount strings."""
        assert safe_currency_to_cents("$45.99") == 4599
        assert safe_currency_to_cents("45.99") == 4599
        assert safe_currency_to_cents("1,234.5") == 123450
        assert safe_currency_to_cents("") == 0
        assert safe_currency_to_cents("   ") == 0
        assert safe_currency_to_cents("invalid") == 0

    @pytest.mark.currency
    def test_safe_currency_to_cents_numbers(self):
        """Test JSON numbers are converted without float drift."""
        assert safe_currency_to_cents(45.99) == 4599
        assert safe_currency_to_cents(0.1) == 10
        assert safe_currency_to_cents(1000) == 100000
        assert safe_currency_to_cents(Decimal("2.675")) == 268

    @pytest.mark.currency
    def test_safe_currency_to_cents_rounds_half_up(self):
        """Test amounts with more than two decimals round half-up."""
        assert safe_currency_to_cents(1.005) == 101
        assert safe_currency_to_cents("0.004") == 0
        assert safe_currency_to_cents("0.005") == 1

    @pytest.mark.currency
    def test_safe_currency_to_cents_rejects_non_amounts(self):
        """Test values that are not amounts become zero instead of raising."""
        assert safe_currency_to_cents(None) == 0
        assert safe_currency_to_cents(True) == 0
        assert safe_currency_to_cents(float("nan")) == 0
        assert safe_currency_to_cents(float("inf")) == 0

    @pytest.mark.currency
    def test_decimal_to_cents(self):
        """Test Decimal rounding to whole cents."""
        assert decimal_to_cents(Decimal("12.345")) == 1235
        assert decimal_to_cents(Decimal("12.344")) == 1234
        assert decimal_to_cents(Decimal("-1.005")) == -101

    @pytest.mark.currency
    def test_parse_dollars_to_cents(self):
        """Test detailed dollar string parsing."""
        assert parse_dollars_to_cents("12.34") == 1234
        assert parse_dollars_to_cents("$12.34") == 1234
        assert parse_dollars_to_cents("1,234.56") == 123456
        assert parse_dollars_to_cents("12") == 1200
        assert parse_dollars_to_cents("12.5") == 1250
        assert parse_dollars_to_cents("-12.34") == -1234
        assert parse_dollars_to_cents("") == 0

    @pytest.mark.currency
    def test_format_cents(self):
        """Test formatting convenience functions."""
        assert format_cents(4599) == "$45.99"
        assert format_cents(0) == "$0.00"
