"""Domain model entities for diamondbook.

These are pure data classes representing business concepts, independent of
database schema. Records coming from the store are converted into these
entities once, so numeric defaulting and category normalization happen in
one place and the rest of the code can rely on well-typed values.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from diamondbook.domain.errors import ValidationError

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric field to Decimal, treating missing values as zero."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str so 10.5 stays 10.5 instead of its binary expansion
        value = repr(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def to_int(value: Any) -> int:
    """Coerce a count field to int, treating missing values as zero.

    Fractional values are truncated toward zero ("2.7" -> 2), not rounded.
    """
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return int(to_decimal(value))


class DiamondCategory(str, Enum):
    """Pricing category of a diamond parcel.

    4P Plus parcels are priced per carat, 4P Minus parcels per piece.
    """

    PLUS = "4P Plus"
    MINUS = "4P Minus"

    @classmethod
    def normalize(cls, label: Any) -> "DiamondCategory":
        """Map any category label onto the two pricing buckets.

        Only a case-insensitive "4P Plus" is PLUS; everything else,
        including unknown labels, is MINUS.
        """
        if isinstance(label, cls):
            return label
        text = str(label).casefold() if label is not None else ""
        if text == cls.PLUS.value.casefold():
            return cls.PLUS
        if text and text != cls.MINUS.value.casefold():
            logger.warning("Unrecognized diamond category %r, treating as %s", label, cls.MINUS.value)
        return cls.MINUS

    @property
    def unit(self) -> str:
        """Short pricing unit used next to rates (ct or pc)."""
        return "ct" if self is DiamondCategory.PLUS else "pc"


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    PENDING = "pending"
    PAID = "paid"

    @classmethod
    def resolve(cls, value: Any) -> "InvoiceStatus":
        """Resolve a stored or user-supplied status string."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for status in cls:
            if status.value == text:
                return status
        raise ValidationError(f"Unknown invoice status '{value}'. Use 'pending' or 'paid'")


class PaymentMethod(str, Enum):
    """Accepted ways of settling an invoice."""

    CASH = "cash"
    CHEQUE = "cheque"
    UPI = "upi"
    NETBANKING = "netbanking"
    CARD = "card"
    OTHER = "other"

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]

    @classmethod
    def resolve(cls, value: Any) -> "PaymentMethod":
        """Resolve a payment method from its id or label (case-insensitive).

        Raises:
            ValidationError: If the value names no known payment method
        """
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        compact = text.replace(" ", "").replace("-", "").replace("_", "")
        for method in cls:
            if compact == method.value or text == method.label.lower():
                return method
        choices = ", ".join(method.value for method in cls)
        raise ValidationError(f"Unknown payment method '{value}'. Choose one of: {choices}")


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Cash",
    PaymentMethod.CHEQUE: "Cheque",
    PaymentMethod.UPI: "UPI",
    PaymentMethod.NETBANKING: "Net Banking",
    PaymentMethod.CARD: "Card Payment",
    PaymentMethod.OTHER: "Other",
}


@dataclass(frozen=True)
class ClientRates:
    """Per-client pricing: plus is per carat, minus is per piece."""

    plus: Decimal = Decimal("0")
    minus: Decimal = Decimal("0")

    def __post_init__(self):
        object.__setattr__(self, "plus", to_decimal(self.plus))
        object.__setattr__(self, "minus", to_decimal(self.minus))


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    contact_person: Optional[str]
    phone: Optional[str]
    email: Optional[str]
    company: Optional[str]
    location: Optional[str]
    plus_rate: Decimal
    minus_rate: Decimal
    payment_terms: Optional[str]
    notes: Optional[str]
    created_at: datetime

    @property
    def rates(self) -> ClientRates:
        return ClientRates(plus=self.plus_rate, minus=self.minus_rate)


@dataclass(frozen=True)
class DiamondEntry:
    """A parcel of diamonds entered into inventory.

    Missing numeric fields are treated as zero and the category label is
    normalized when the entry is built.
    """

    id: Optional[int]
    kapan_id: Optional[str]
    number_of_diamonds: int = 0
    weight_in_karats: Decimal = Decimal("0")
    category: DiamondCategory = DiamondCategory.MINUS
    total_value: Decimal = Decimal("0")
    client_id: Optional[int] = None
    entry_date: Optional[date] = None
    market_rate: Decimal = Decimal("0")
    raw_damage_weight: Optional[Decimal] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "number_of_diamonds", to_int(self.number_of_diamonds))
        object.__setattr__(self, "weight_in_karats", to_decimal(self.weight_in_karats))
        object.__setattr__(self, "total_value", to_decimal(self.total_value))
        object.__setattr__(self, "market_rate", to_decimal(self.market_rate))
        object.__setattr__(self, "category", DiamondCategory.normalize(self.category))
        if self.raw_damage_weight is not None:
            object.__setattr__(self, "raw_damage_weight", to_decimal(self.raw_damage_weight))

    @property
    def is_plus(self) -> bool:
        return self.category is DiamondCategory.PLUS


@dataclass(frozen=True)
class Invoice:
    """Invoice header with the ordered IDs of its diamond entries."""

    id: Optional[int]
    invoice_number: str
    issue_date: Optional[date]
    due_date: Optional[date]
    client_id: Optional[int]
    status: InvoiceStatus = InvoiceStatus.PENDING
    total_amount: Optional[Decimal] = None
    payment_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None
    diamond_ids: tuple[int, ...] = ()
    created_at: Optional[datetime] = None

    def __post_init__(self):
        object.__setattr__(self, "status", InvoiceStatus.resolve(self.status))
        if self.total_amount is not None:
            object.__setattr__(self, "total_amount", to_decimal(self.total_amount))
        if self.payment_method is not None:
            object.__setattr__(self, "payment_method", PaymentMethod.resolve(self.payment_method))
        object.__setattr__(self, "diamond_ids", tuple(self.diamond_ids))

    @property
    def is_paid(self) -> bool:
        return self.status is InvoiceStatus.PAID


@dataclass(frozen=True)
class CompanyDetails:
    """The trading company's own letterhead and bank details."""

    id: int
    company_name: str
    address: str
    bank_name: str
    account_number: str
    ifsc_code: str
    branch: Optional[str] = None
    account_holder_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    gst_number: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class MarketRate:
    """Market rate snapshot for both pricing categories."""

    id: int
    rate_date: date
    plus_rate: Decimal
    minus_rate: Decimal
    created_at: datetime

    def rate_for(self, category: DiamondCategory) -> Decimal:
        return self.plus_rate if category is DiamondCategory.PLUS else self.minus_rate


@dataclass(frozen=True)
class LineItem:
    """A diamond entry as shown on an invoice, with its per-unit rate."""

    entry: DiamondEntry
    display_rate: int


@dataclass(frozen=True)
class InvoiceSummary:
    """Category subtotals, effective rates and grand total of an invoice.

    Weights and values are exact sums; rates and the grand total are whole
    currency units.
    """

    plus_count: int
    plus_weight: Decimal
    plus_value: Decimal
    plus_rate: int
    minus_count: int
    minus_weight: Decimal
    minus_value: Decimal
    minus_rate: int
    grand_total: int
    line_items: tuple[LineItem, ...] = ()


@dataclass(frozen=True)
class InvoiceView:
    """Everything needed to display or print one invoice."""

    invoice: Invoice
    client: Optional[Client]
    company: Optional[CompanyDetails]
    entries: tuple[DiamondEntry, ...]
    summary: InvoiceSummary


@dataclass(frozen=True)
class ClientValue:
    """Aggregate value of inventory entered for one client."""

    client_id: Optional[int]
    client_name: str
    pieces: int
    value: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """Business overview figures."""

    total_pieces: int
    total_weight: Decimal
    total_value: Decimal
    recent_value: Decimal
    category_pieces: dict[DiamondCategory, int] = field(default_factory=dict)
    top_clients: tuple[ClientValue, ...] = ()
    receivables: Decimal = Decimal("0")
    overdue_count: int = 0
    invoice_count: int = 0
