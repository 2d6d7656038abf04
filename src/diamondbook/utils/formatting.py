"""Display formatting for amounts, weights and dates."""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Union

from dateutil import parser as date_parser

from diamondbook.domain.entities import PaymentMethod, to_decimal

CURRENCY_SYMBOL = "₹"
NOT_AVAILABLE = "N/A"

DATE_STYLES = {
    "short": "%d/%m/%Y",
    "compact": "%d/%m/%y",
    "long": "%d %b %Y",
}


def group_indian(digits: str) -> str:
    """Insert commas into a digit string using lakh/crore grouping.

    The last three digits form one group, everything before that is split
    into pairs: "1234567" -> "12,34,567".
    """
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Any) -> str:
    """Format an amount in whole rupees with Indian digit grouping.

    Examples:
        format_currency(1234567) -> "₹12,34,567"
        format_currency(0) -> "₹0"
        format_currency(-1500) -> "-₹1,500"
    """
    value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{group_indian(str(abs(int(value))))}"


def format_rate(amount: Any, unit: str) -> str:
    """Format a per-unit rate, e.g. "₹5,000/ct"."""
    return f"{format_currency(amount)}/{unit}"


def format_weight(weight: Any) -> str:
    """Format a carat weight with two decimals."""
    value = to_decimal(weight).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:.2f}"


def _coerce_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def format_date(value: Union[str, date, datetime, None], style: str = "short") -> str:
    """Format an ISO date string (or date) for display.

    Styles:
        short: 05/03/2024
        compact: 05/03/24
        long: 05 Mar 2024

    Missing or unparseable input gives "N/A". The calendar date written in
    the input is shown as-is, without timezone conversion.

    Raises:
        ValueError: If style is not one of the supported styles
    """
    try:
        pattern = DATE_STYLES[style]
    except KeyError:
        raise ValueError(
            f"Unknown date style '{style}'. Supported styles: {', '.join(DATE_STYLES)}"
        ) from None

    parsed = _coerce_date(value)
    if parsed is None:
        return NOT_AVAILABLE
    return parsed.strftime(pattern)


def payment_method_label(method: Any) -> str:
    """Human-readable payment method."""
    if method is None or method == "":
        return NOT_AVAILABLE
    try:
        return PaymentMethod.resolve(method).label
    except ValueError:
        return "Other Payment Method"
