"""Tests for amount and weight parsing."""

import pytest
from decimal import Decimal

from diamondbook.utils.amount_parser import parse_amount, parse_weight


@pytest.mark.parametrize(
    "text,expected",
    [
        ("5000", Decimal("5000")),
        ("₹5000", Decimal("5000")),
        ("₹ 12,34,567", Decimal("1234567")),
        ("Rs. 5,000.50", Decimal("5000.50")),
        ("INR 1,234,567", Decimal("1234567")),
        ("-250", Decimal("-250")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "lots", "NaN", None])
def test_parse_amount_invalid(text):
    with pytest.raises(ValueError):
        parse_amount(text)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("10.5", Decimal("10.5")),
        ("10.5ct", Decimal("10.5")),
        ("8 cts", Decimal("8")),
        ("2 carats", Decimal("2")),
    ],
)
def test_parse_weight(text, expected):
    assert parse_weight(text) == expected


@pytest.mark.parametrize("text", ["", "heavy", "inf"])
def test_parse_weight_invalid(text):
    with pytest.raises(ValueError):
        parse_weight(text)
