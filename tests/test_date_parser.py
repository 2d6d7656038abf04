"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from diamondbook.utils.date_parser import parse_date


def test_parse_absolute_date():
    """Test parsing ISO dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_day_first():
    """Slash dates are read day first, as written on Indian invoices."""
    assert parse_date("05/03/2024") == date(2024, 3, 5)
    assert parse_date("5 Mar 2024") == date(2024, 3, 5)


def test_parse_today():
    """Test parsing 'today'."""
    result = parse_date("today")
    assert result == date.today()


def test_parse_yesterday():
    """Test parsing 'yesterday'."""
    result = parse_date("Yesterday")
    assert result == date.today() - timedelta(days=1)


def test_parse_tomorrow():
    """Test parsing 'tomorrow'."""
    result = parse_date("tomorrow")
    assert result == date.today() + timedelta(days=1)


def test_parse_in_days():
    assert parse_date("in 30 days") == date.today() + timedelta(days=30)


def test_parse_months_ago():
    assert parse_date("2 months ago") == date.today() - relativedelta(months=2)


def test_parse_invalid_relative():
    """Test parsing a relative date with a non-numeric count."""
    with pytest.raises(ValueError):
        parse_date("in many days")


def test_parse_invalid_date():
    """Test parsing invalid date."""
    with pytest.raises(ValueError):
        parse_date("not a date")
