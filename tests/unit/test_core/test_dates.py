#!/usr/bin/env python3
"""Tests for FinancialDate and lenient date parsing."""

from datetime import date, datetime

from moneyboard.core.dates import FinancialDate, parse_financial_date


class TestFinancialDate:
    """Test FinancialDate formatting and ordering."""

    def test_from_string(self):
        fd = FinancialDate.from_string("2024-01-15")
        assert fd.date == date(2024, 1, 15)
        assert fd.to_iso_string() == "2024-01-15"

    def test_month_key_and_label(self):
        fd = FinancialDate(date=date(2024, 3, 9))
        assert fd.month_key() == "2024-03"
        assert fd.month_label() == "March 2024"

    def test_ordering(self):
        earlier = FinancialDate(date=date(2024, 1, 1))
        later = FinancialDate(date=date(2024, 1, 2))
        assert earlier < later
        assert later >= earlier
        assert earlier <= FinancialDate(date=date(2024, 1, 1))


class TestParseFinancialDate:
    """Test parsing of date values from the API and user input."""

    def test_plain_iso_date(self):
        assert parse_financial_date("2024-02-10") == FinancialDate(date=date(2024, 2, 10))

    def test_datetime_string_ignores_time_and_offset(self):
        """Dates compare by calendar day only."""
        assert parse_financial_date("2024-02-10T23:59:59.000Z") == FinancialDate(date=date(2024, 2, 10))
        assert parse_financial_date("2024-02-10 08:00:00") == FinancialDate(date=date(2024, 2, 10))

    def test_date_objects(self):
        assert parse_financial_date(date(2024, 5, 1)) == FinancialDate(date=date(2024, 5, 1))
        assert parse_financial_date(datetime(2024, 5, 1, 12, 30)) == FinancialDate(date=date(2024, 5, 1))

    def test_unparseable_values_return_none(self):
        assert parse_financial_date(None) is None
        assert parse_financial_date("") is None
        assert parse_financial_date("not a date") is None
        assert parse_financial_date("2024-13-40") is None
        assert parse_financial_date("2024-02-10garbage") is None
        assert parse_financial_date(20240210) is None
