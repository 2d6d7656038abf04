"""Utility functions for diamondbook."""

from diamondbook.utils.date_parser import parse_date
from diamondbook.utils.amount_parser import parse_amount, parse_weight
from diamondbook.utils.formatting import format_currency, format_date, format_weight

__all__ = [
    "parse_date",
    "parse_amount",
    "parse_weight",
    "format_currency",
    "format_date",
    "format_weight",
]
