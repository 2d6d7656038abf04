"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles the ways rupee amounts are usually written:
    - "5000"
    - "₹5000"
    - "Rs. 5,000.50"
    - "12,34,567" (lakh grouping)
    - "1,234,567" (thousand grouping)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    text = str(amount_str).strip()
    text = re.sub(r"^(₹|rs\.?|inr)\s*", "", text, flags=re.IGNORECASE)
    # Grouping commas can sit anywhere, so drop them all
    text = text.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_weight(weight_str: str) -> Decimal:
    """Parse a carat weight such as "10.5" or "10.5ct"."""
    if weight_str is None or not str(weight_str).strip():
        raise ValueError("Empty weight string")
    text = re.sub(r"\s*(ct|cts|carats?)$", "", str(weight_str).strip(), flags=re.IGNORECASE)
    try:
        weight = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse weight '{weight_str}'")
    if not weight.is_finite():
        raise ValueError(f"Could not parse weight '{weight_str}'")
    return weight
