"""Invoice financial aggregation.

Turns an invoice header and its diamond entries into the figures an invoice
shows: per-category piece counts, weights and values, an effective rate for
each category, a display rate for every line, and the grand total.

Everything here is a pure function of its arguments. Nothing is formatted
for display; use ``diamondbook.utils.formatting`` for that.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from diamondbook.domain.entities import (
    ClientRates,
    DiamondCategory,
    DiamondEntry,
    Invoice,
    InvoiceSummary,
    LineItem,
    to_decimal,
)

ZERO = Decimal("0")


def round_half_away(value: Decimal) -> int:
    """Round to a whole number, halves away from zero."""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def safe_rate(value: Decimal, denominator: Decimal) -> int:
    """Divide and round, returning 0 when the denominator is not positive.

    Rates are floored at 0, like the client fallback rates.
    """
    if denominator <= 0:
        return 0
    return max(round_half_away(value / denominator), 0)


def entry_display_rate(entry: DiamondEntry) -> int:
    """Per-unit rate of a single entry: per carat for 4P Plus, per piece otherwise."""
    if entry.is_plus:
        return safe_rate(entry.total_value, entry.weight_in_karats)
    return safe_rate(entry.total_value, Decimal(entry.number_of_diamonds))


@dataclass
class _Bucket:
    count: int = 0
    weight: Decimal = ZERO
    value: Decimal = ZERO

    def add(self, entry: DiamondEntry) -> None:
        self.count += entry.number_of_diamonds
        self.weight += entry.weight_in_karats
        self.value += entry.total_value


def _fallback_rate(rate: Optional[Decimal]) -> int:
    if rate is None:
        return 0
    return max(round_half_away(rate), 0)


def summarize(
    invoice: Optional[Invoice],
    entries: Iterable[DiamondEntry],
    client_rates: Optional[ClientRates] = None,
) -> InvoiceSummary:
    """Aggregate an invoice's diamond entries into an InvoiceSummary.

    Args:
        invoice: Invoice header; its stored total_amount wins over the
            recomputed total when set and non-zero
        entries: Diamond entries on the invoice, in display order
        client_rates: Client's configured rates, used as the effective rate
            of a category that has no weight (plus) or no pieces (minus)

    Returns:
        InvoiceSummary with subtotals, rates, grand total and line items.
        Rates are never negative; subtotals and the grand total are the
        plain sums, so they are only non-negative for non-negative values.
    """
    entries = tuple(entries)
    buckets = {DiamondCategory.PLUS: _Bucket(), DiamondCategory.MINUS: _Bucket()}
    for entry in entries:
        buckets[entry.category].add(entry)

    plus = buckets[DiamondCategory.PLUS]
    minus = buckets[DiamondCategory.MINUS]

    if plus.weight > 0:
        plus_rate = safe_rate(plus.value, plus.weight)
    else:
        plus_rate = _fallback_rate(client_rates.plus if client_rates else None)

    if minus.count > 0:
        minus_rate = safe_rate(minus.value, Decimal(minus.count))
    else:
        minus_rate = _fallback_rate(client_rates.minus if client_rates else None)

    stored_total = invoice.total_amount if invoice is not None else None
    if stored_total:
        grand_total = round_half_away(stored_total)
    else:
        grand_total = round_half_away(plus.value + minus.value)

    line_items = tuple(
        LineItem(entry=entry, display_rate=entry_display_rate(entry)) for entry in entries
    )

    return InvoiceSummary(
        plus_count=plus.count,
        plus_weight=plus.weight,
        plus_value=plus.value,
        plus_rate=plus_rate,
        minus_count=minus.count,
        minus_weight=minus.weight,
        minus_value=minus.value,
        minus_rate=minus_rate,
        grand_total=grand_total,
        line_items=line_items,
    )
