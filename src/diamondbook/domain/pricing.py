"""Category and value rules applied when a diamond parcel is entered."""

from decimal import Decimal
from typing import Any, Optional

from diamondbook.domain.entities import ClientRates, DiamondCategory, to_decimal, to_int

DEFAULT_PLUS_THRESHOLD = Decimal("0.15")


def weight_per_piece(weight_in_karats: Any, number_of_diamonds: Any) -> Decimal:
    """Average carat weight of one stone in a parcel (0 for an empty parcel)."""
    pieces = to_int(number_of_diamonds)
    if pieces <= 0:
        return Decimal("0")
    return to_decimal(weight_in_karats) / pieces


def determine_category(
    weight_in_karats: Any,
    number_of_diamonds: Any,
    threshold: Any = DEFAULT_PLUS_THRESHOLD,
) -> DiamondCategory:
    """Classify a parcel by average stone weight.

    Stones heavier than the threshold (in carats per piece) are 4P Plus,
    everything else is 4P Minus.
    """
    if weight_per_piece(weight_in_karats, number_of_diamonds) > to_decimal(threshold):
        return DiamondCategory.PLUS
    return DiamondCategory.MINUS


def adjusted_weight(weight_in_karats: Any, raw_damage_weight: Any = None) -> Decimal:
    """Billable weight after deducting raw damage, never below zero."""
    weight = to_decimal(weight_in_karats)
    if raw_damage_weight:
        weight -= to_decimal(raw_damage_weight)
    return max(weight, Decimal("0"))


def calculate_value(
    category: DiamondCategory,
    rates: Optional[ClientRates],
    weight_in_karats: Any,
    number_of_diamonds: Any,
    raw_damage_weight: Any = None,
) -> Decimal:
    """Value of a parcel at the client's rates.

    4P Plus is billed on adjusted weight times the per-carat rate, 4P Minus
    on pieces times the per-piece rate. Without rates the value is 0.
    """
    if rates is None:
        return Decimal("0")
    if category is DiamondCategory.PLUS:
        return adjusted_weight(weight_in_karats, raw_damage_weight) * rates.plus
    return Decimal(to_int(number_of_diamonds)) * rates.minus
