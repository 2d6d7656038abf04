"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date typed on the command line.

    Supports:
    - ISO dates: "2024-03-05"
    - Day-first dates as written on Indian invoices: "05/03/2024", "5 Mar 2024"
    - Relative dates: "today", "yesterday", "tomorrow", "in 30 days", "30 days ago"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    parts = text.split()
    if len(parts) == 3 and parts[0] == "in" and parts[2] in ("day", "days", "month", "months"):
        return today + _offset(parts[1], parts[2], date_str)
    if len(parts) == 3 and parts[2] == "ago" and parts[1] in ("day", "days", "month", "months"):
        return today - _offset(parts[0], parts[1], date_str)

    # ISO strings are year-first; everything else is read day-first
    try:
        if len(text) >= 10 and text[4] == "-":
            return date_parser.isoparse(text).date()
        return date_parser.parse(text, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def _offset(amount: str, unit: str, original: str) -> relativedelta:
    try:
        count = int(amount)
    except ValueError:
        raise ValueError(f"Could not parse date '{original}': '{amount}' is not a number")
    if unit.startswith("month"):
        return relativedelta(months=count)
    return relativedelta(days=count)
