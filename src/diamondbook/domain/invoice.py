"""Invoice domain service."""

import logging
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from typing import Any, Optional, Sequence

from diamondbook.database.base import Database
from diamondbook.domain.entities import (
    DiamondEntry,
    Invoice,
    InvoiceStatus,
    InvoiceView,
    PaymentMethod,
)
from diamondbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    diamond_already_invoiced,
    diamond_client_mismatch,
    diamond_not_found,
    invoice_not_found,
    invoice_number_not_found,
)
from diamondbook.domain.invoice_summary import summarize

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_TERMS_DAYS = 30
DEFAULT_INVOICE_PREFIX = "INV"


def is_overdue(invoice: Invoice, today: Optional[date] = None) -> bool:
    """An unpaid invoice is overdue once its due date has passed."""
    if invoice.is_paid or invoice.due_date is None:
        return False
    return (today or date.today()) > invoice.due_date


class InvoiceService:
    """Service for creating invoices and recording their payment."""

    def __init__(
        self,
        db: Database,
        payment_terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS,
        invoice_prefix: str = DEFAULT_INVOICE_PREFIX,
    ):
        """Initialize invoice service.

        Args:
            db: Database instance
            payment_terms_days: Days from issue date to the default due date
            invoice_prefix: Prefix of generated invoice numbers
        """
        self.db = db
        self.payment_terms_days = payment_terms_days
        self.invoice_prefix = invoice_prefix

    def next_invoice_number(self, issue_date: date) -> str:
        """Next free invoice number for an issue date, e.g. INV-20240305-1."""
        sequence = self.db.count_invoices_issued_on(issue_date) + 1
        while True:
            number = f"{self.invoice_prefix}-{issue_date:%Y%m%d}-{sequence}"
            if self.db.get_invoice_by_number(number) is None:
                return number
            sequence += 1

    def _resolve_entries(
        self, client_id: int, diamond_ids: Sequence[int], invoice_id: Optional[int] = None
    ) -> list[DiamondEntry]:
        """Load the entries for an invoice, checking ownership and availability."""
        if not diamond_ids:
            raise ValidationError("Please select at least one diamond entry")

        ids = list(dict.fromkeys(diamond_ids))
        entries = self.db.get_diamonds(ids)
        found = {entry.id for entry in entries}
        for diamond_id in ids:
            if diamond_id not in found:
                raise NotFoundError(diamond_not_found(diamond_id))

        current_number = None
        if invoice_id is not None:
            current = self.db.get_invoice(invoice_id)
            current_number = current.invoice_number if current else None

        for entry in entries:
            if entry.client_id != client_id:
                raise ValidationError(diamond_client_mismatch(entry.id, client_id))
            invoice_number = self.db.get_diamond_invoice_number(entry.id)
            if invoice_number is not None and invoice_number != current_number:
                raise ConflictError(diamond_already_invoiced(entry.id, invoice_number))
        return entries

    def create_invoice(
        self,
        client_id: int,
        diamond_ids: Sequence[int],
        issue_date: Optional[date] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a pending invoice for a client's diamond entries.

        The invoice total is fixed here as the sum of the entries' values.

        Args:
            client_id: Client being billed
            diamond_ids: Entries to bill, in display order
            issue_date: Issue date (defaults to today)
            due_date: Due date (defaults to issue date plus payment terms)
            notes: Optional notes

        Returns:
            Invoice ID

        Raises:
            NotFoundError: If client or an entry is not found
            ValidationError: If no entries are given, an entry belongs to another
                client, or the due date is before the issue date
            ConflictError: If an entry is already on another invoice
        """
        if self.db.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))

        issue = issue_date or date.today()
        due = due_date or issue + timedelta(days=self.payment_terms_days)
        if due < issue:
            raise ValidationError("Due date cannot be before the issue date")

        entries = self._resolve_entries(client_id, diamond_ids)
        total_amount = sum((entry.total_value for entry in entries), Decimal("0"))
        invoice_number = self.next_invoice_number(issue)

        invoice_id = self.db.create_invoice(
            invoice_number=invoice_number,
            client_id=client_id,
            issue_date=issue,
            due_date=due,
            diamond_ids=[entry.id for entry in entries],
            total_amount=total_amount,
            status=InvoiceStatus.PENDING.value,
            notes=notes,
        )
        logger.info(
            "Created invoice %s (%s) for client %s with %d entries, total %s",
            invoice_number,
            invoice_id,
            client_id,
            len(entries),
            total_amount,
        )
        return invoice_id

    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        return self.db.get_invoice(invoice_id)

    def require_invoice(self, invoice_id: int) -> Invoice:
        """Get invoice by ID or raise NotFoundError."""
        invoice = self.db.get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def resolve_invoice(self, reference: str | int) -> Invoice:
        """Find an invoice by ID or invoice number.

        Raises:
            NotFoundError: If nothing matches
        """
        if isinstance(reference, int) or str(reference).strip().isdigit():
            return self.require_invoice(int(reference))
        invoice = self.db.get_invoice_by_number(str(reference).strip())
        if invoice is None:
            raise NotFoundError(invoice_number_not_found(str(reference)))
        return invoice

    def list_invoices(
        self, client_id: Optional[int] = None, status: Optional[Any] = None
    ) -> list[Invoice]:
        """List invoices, newest first."""
        status_value = InvoiceStatus.resolve(status).value if status is not None else None
        return self.db.list_invoices(client_id=client_id, status=status_value)

    def update_invoice(
        self,
        invoice_id: int,
        client_id: Optional[int] = None,
        diamond_ids: Optional[Sequence[int]] = None,
        issue_date: Optional[date] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Edit an invoice and recompute its total from its entries.

        Changing the client requires a new set of entries for that client.

        Raises:
            NotFoundError: If invoice, client or an entry is not found
            ValidationError: If the edit leaves the invoice inconsistent
            ConflictError: If an entry is already on another invoice
        """
        current = self.require_invoice(invoice_id)

        new_client_id = client_id if client_id is not None else current.client_id
        if new_client_id != current.client_id:
            if self.db.get_client(new_client_id) is None:
                raise NotFoundError(client_not_found(new_client_id))
            if diamond_ids is None:
                raise ValidationError("Select diamond entries for the new client")

        ids = list(diamond_ids) if diamond_ids is not None else list(current.diamond_ids)
        entries = self._resolve_entries(new_client_id, ids, invoice_id=invoice_id)

        issue = issue_date or current.issue_date
        due = due_date or current.due_date
        if due < issue:
            raise ValidationError("Due date cannot be before the issue date")

        total_amount = sum((entry.total_value for entry in entries), Decimal("0"))
        fields: dict[str, Any] = {
            "client_id": new_client_id,
            "issue_date": issue,
            "due_date": due,
            "total_amount": total_amount,
        }
        if notes is not None:
            fields["notes"] = notes

        self.db.update_invoice(invoice_id, diamond_ids=[entry.id for entry in entries], **fields)
        logger.info("Updated invoice %s, total %s", current.invoice_number, total_amount)

    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice; its diamond entries become available again."""
        invoice = self.require_invoice(invoice_id)
        self.db.delete_invoice(invoice_id)
        logger.info("Deleted invoice %s", invoice.invoice_number)

    def mark_paid(
        self, invoice_id: int, payment_method: Any, paid_on: Optional[datetime] = None
    ) -> Invoice:
        """Record payment of an invoice.

        Args:
            invoice_id: Invoice ID
            payment_method: PaymentMethod, or its id or label
            paid_on: Payment timestamp (defaults to now, UTC)

        Returns:
            The updated invoice

        Raises:
            NotFoundError: If invoice not found
            ValidationError: If the payment method is unknown
        """
        invoice = self.require_invoice(invoice_id)
        method = PaymentMethod.resolve(payment_method)
        paid_at = paid_on or datetime.now(UTC)
        self.db.update_invoice_payment(
            invoice_id,
            status=InvoiceStatus.PAID.value,
            payment_date=paid_at,
            payment_method=method.value,
        )
        logger.info("Invoice %s marked paid via %s", invoice.invoice_number, method.label)
        return self.require_invoice(invoice_id)

    def mark_pending(self, invoice_id: int) -> Invoice:
        """Return an invoice to pending, clearing its payment details."""
        invoice = self.require_invoice(invoice_id)
        self.db.update_invoice_payment(
            invoice_id, status=InvoiceStatus.PENDING.value, payment_date=None, payment_method=None
        )
        logger.info("Invoice %s marked pending", invoice.invoice_number)
        return self.require_invoice(invoice_id)

    def toggle_payment_status(self, invoice_id: int, payment_method: Any = None) -> Invoice:
        """Flip an invoice between paid and pending.

        Raises:
            ValidationError: If marking paid without a payment method
        """
        invoice = self.require_invoice(invoice_id)
        if invoice.is_paid:
            return self.mark_pending(invoice_id)
        if payment_method is None or payment_method == "":
            raise ValidationError("A payment method is required to mark an invoice as paid")
        return self.mark_paid(invoice_id, payment_method)

    def get_invoice_view(self, invoice_id: int) -> InvoiceView:
        """Collect an invoice with its client, company details and summary.

        Raises:
            NotFoundError: If invoice not found
        """
        invoice = self.require_invoice(invoice_id)
        client = self.db.get_client(invoice.client_id) if invoice.client_id is not None else None
        entries = tuple(self.db.get_diamonds(list(invoice.diamond_ids)))
        if len(entries) != len(invoice.diamond_ids):
            logger.warning(
                "Invoice %s references %d missing diamond entries",
                invoice.invoice_number,
                len(invoice.diamond_ids) - len(entries),
            )
        summary = summarize(invoice, entries, client.rates if client else None)
        return InvoiceView(
            invoice=invoice,
            client=client,
            company=self.db.get_company_details(),
            entries=entries,
            summary=summary,
        )
