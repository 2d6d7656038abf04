"""Tests for invoice service."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from diamondbook.domain.entities import InvoiceStatus, PaymentMethod
from diamondbook.domain.errors import ConflictError, NotFoundError, ValidationError
from diamondbook.domain.invoice import InvoiceService, is_overdue


class TestCreateInvoice:
    """Tests for creating invoices."""

    def test_create_invoice(self, invoice_service, sample_invoice, sample_diamonds):
        assert sample_invoice.invoice_number == "INV-20240305-1"
        assert sample_invoice.status is InvoiceStatus.PENDING
        assert sample_invoice.total_amount == Decimal("80000")
        assert sample_invoice.issue_date == date(2024, 3, 5)
        assert sample_invoice.due_date == date(2024, 4, 4)
        assert sample_invoice.diamond_ids == tuple(d.id for d in sample_diamonds)

    def test_sequence_per_issue_date(self, invoice_service, diamond_service, sample_client, sample_invoice):
        extra = diamond_service.add_entry(
            client_id=sample_client.id, kapan_id="K-103", number_of_diamonds=10, weight_in_karats=1
        )
        invoice_id = invoice_service.create_invoice(
            sample_client.id, [extra], issue_date=date(2024, 3, 5)
        )
        assert invoice_service.get_invoice(invoice_id).invoice_number == "INV-20240305-2"

    def test_custom_prefix_and_terms(self, temp_db, sample_client, sample_diamonds):
        service = InvoiceService(temp_db, payment_terms_days=15, invoice_prefix="SD")
        invoice_id = service.create_invoice(
            sample_client.id, [sample_diamonds[0].id], issue_date=date(2024, 3, 5)
        )
        invoice = service.get_invoice(invoice_id)
        assert invoice.invoice_number == "SD-20240305-1"
        assert invoice.due_date == date(2024, 3, 20)

    def test_entry_order_preserved(self, invoice_service, sample_client, sample_diamonds):
        ids = [sample_diamonds[1].id, sample_diamonds[0].id]
        invoice_id = invoice_service.create_invoice(sample_client.id, ids)
        assert list(invoice_service.get_invoice(invoice_id).diamond_ids) == ids

    def test_requires_entries(self, invoice_service, sample_client):
        with pytest.raises(ValidationError):
            invoice_service.create_invoice(sample_client.id, [])

    def test_unknown_entry(self, invoice_service, sample_client):
        with pytest.raises(NotFoundError):
            invoice_service.create_invoice(sample_client.id, [999])

    def test_unknown_client(self, invoice_service, sample_diamonds):
        with pytest.raises(NotFoundError):
            invoice_service.create_invoice(999, [sample_diamonds[0].id])

    def test_entry_of_other_client(self, invoice_service, client_service, sample_diamonds):
        other_id = client_service.create_client(name="Shah Exports")
        with pytest.raises(ValidationError) as exc_info:
            invoice_service.create_invoice(other_id, [sample_diamonds[0].id])
        assert "does not belong" in str(exc_info.value)

    def test_entry_already_invoiced(self, invoice_service, sample_client, sample_invoice):
        with pytest.raises(ConflictError) as exc_info:
            invoice_service.create_invoice(sample_client.id, [sample_invoice.diamond_ids[0]])
        assert "INV-20240305-1" in str(exc_info.value)

    def test_due_before_issue(self, invoice_service, sample_client, sample_diamonds):
        with pytest.raises(ValidationError):
            invoice_service.create_invoice(
                sample_client.id,
                [sample_diamonds[0].id],
                issue_date=date(2024, 3, 5),
                due_date=date(2024, 3, 1),
            )


class TestLookupAndList:
    """Tests for finding invoices."""

    def test_resolve_by_number_or_id(self, invoice_service, sample_invoice):
        assert invoice_service.resolve_invoice("INV-20240305-1").id == sample_invoice.id
        assert invoice_service.resolve_invoice(str(sample_invoice.id)).id == sample_invoice.id
        assert invoice_service.resolve_invoice(sample_invoice.id).id == sample_invoice.id

    def test_resolve_missing(self, invoice_service):
        with pytest.raises(NotFoundError):
            invoice_service.resolve_invoice("INV-19990101-1")
        with pytest.raises(NotFoundError):
            invoice_service.resolve_invoice(999)

    def test_list_by_status(self, invoice_service, sample_invoice):
        assert len(invoice_service.list_invoices(status="pending")) == 1
        assert invoice_service.list_invoices(status=InvoiceStatus.PAID) == []

    def test_list_by_client(self, invoice_service, client_service, sample_invoice):
        other_id = client_service.create_client(name="Shah Exports")
        assert invoice_service.list_invoices(client_id=other_id) == []
        assert len(invoice_service.list_invoices(client_id=sample_invoice.client_id)) == 1


class TestUpdateAndDelete:
    """Tests for editing and deleting invoices."""

    def test_update_entries_recomputes_total(self, invoice_service, sample_invoice, sample_diamonds):
        invoice_service.update_invoice(sample_invoice.id, diamond_ids=[sample_diamonds[1].id])
        invoice = invoice_service.get_invoice(sample_invoice.id)
        assert invoice.diamond_ids == (sample_diamonds[1].id,)
        assert invoice.total_amount == Decimal("30000")

    def test_update_same_entries_reordered(self, invoice_service, sample_invoice, sample_diamonds):
        ids = [sample_diamonds[1].id, sample_diamonds[0].id]
        invoice_service.update_invoice(sample_invoice.id, diamond_ids=ids, notes="Reordered")
        invoice = invoice_service.get_invoice(sample_invoice.id)
        assert list(invoice.diamond_ids) == ids
        assert invoice.notes == "Reordered"
        assert invoice.total_amount == Decimal("80000")

    def test_update_released_entry_can_be_billed_again(
        self, invoice_service, diamond_service, sample_client, sample_invoice, sample_diamonds
    ):
        invoice_service.update_invoice(sample_invoice.id, diamond_ids=[sample_diamonds[0].id])
        assert [e.id for e in diamond_service.list_entries(uninvoiced=True)] == [sample_diamonds[1].id]

    def test_change_client_requires_entries(self, invoice_service, client_service, sample_invoice):
        other_id = client_service.create_client(name="Shah Exports")
        with pytest.raises(ValidationError):
            invoice_service.update_invoice(sample_invoice.id, client_id=other_id)

    def test_delete_releases_entries(self, invoice_service, diamond_service, sample_invoice):
        invoice_service.delete_invoice(sample_invoice.id)
        assert invoice_service.get_invoice(sample_invoice.id) is None
        assert len(diamond_service.list_entries(uninvoiced=True)) == 2

    def test_delete_missing(self, invoice_service):
        with pytest.raises(NotFoundError):
            invoice_service.delete_invoice(999)


class TestPayment:
    """Tests for recording payments."""

    def test_mark_paid(self, invoice_service, sample_invoice):
        paid_on = datetime(2024, 3, 20, 10, 30, tzinfo=UTC)
        invoice = invoice_service.mark_paid(sample_invoice.id, "Net Banking", paid_on=paid_on)
        assert invoice.is_paid
        assert invoice.payment_method is PaymentMethod.NETBANKING
        assert invoice.payment_date.date() == date(2024, 3, 20)

    def test_mark_paid_unknown_method(self, invoice_service, sample_invoice):
        with pytest.raises(ValidationError):
            invoice_service.mark_paid(sample_invoice.id, "barter")

    def test_mark_pending_clears_payment(self, invoice_service, sample_invoice):
        invoice_service.mark_paid(sample_invoice.id, "cash")
        invoice = invoice_service.mark_pending(sample_invoice.id)
        assert invoice.status is InvoiceStatus.PENDING
        assert invoice.payment_date is None
        assert invoice.payment_method is None

    def test_toggle(self, invoice_service, sample_invoice):
        with pytest.raises(ValidationError):
            invoice_service.toggle_payment_status(sample_invoice.id)
        assert invoice_service.toggle_payment_status(sample_invoice.id, "upi").is_paid
        assert not invoice_service.toggle_payment_status(sample_invoice.id).is_paid


class TestOverdue:
    """Tests for is_overdue."""

    def test_pending_past_due(self, sample_invoice):
        assert is_overdue(sample_invoice, today=date(2024, 4, 5))

    def test_due_today_is_not_overdue(self, sample_invoice):
        assert not is_overdue(sample_invoice, today=date(2024, 4, 4))

    def test_paid_is_never_overdue(self, invoice_service, sample_invoice):
        paid = invoice_service.mark_paid(sample_invoice.id, "cash")
        assert not is_overdue(paid, today=date(2030, 1, 1))


class TestInvoiceView:
    """Tests for get_invoice_view."""

    def test_view_summary(self, invoice_service, sample_invoice, sample_company):
        view = invoice_service.get_invoice_view(sample_invoice.id)
        summary = view.summary
        assert view.client.name == "Sunrise Gems"
        assert view.company.company_name == "Shree Diamonds"
        assert summary.plus_count == 40
        assert summary.plus_weight == Decimal("10")
        assert summary.plus_value == Decimal("50000")
        assert summary.plus_rate == 5000
        assert summary.minus_count == 100
        assert summary.minus_value == Decimal("30000")
        assert summary.minus_rate == 300
        assert summary.grand_total == 80000
        assert [item.display_rate for item in summary.line_items] == [5000, 300]

    def test_view_uses_client_rate_for_empty_category(
        self, invoice_service, sample_client, sample_diamonds
    ):
        invoice_id = invoice_service.create_invoice(sample_client.id, [sample_diamonds[1].id])
        summary = invoice_service.get_invoice_view(invoice_id).summary
        assert summary.plus_count == 0
        assert summary.plus_rate == 5000

    def test_view_without_company(self, invoice_service, sample_invoice):
        assert invoice_service.get_invoice_view(sample_invoice.id).company is None

    def test_stored_total_kept_after_entry_revalued(
        self, invoice_service, diamond_service, client_service, sample_client, sample_invoice
    ):
        """Editing a billed entry does not change the total already invoiced."""
        client_service.update_client(sample_client.id, minus_rate=400)
        diamond_service.update_entry(sample_invoice.diamond_ids[1], number_of_diamonds=100)
        view = invoice_service.get_invoice_view(sample_invoice.id)
        assert view.summary.minus_value == Decimal("40000")
        assert view.summary.grand_total == 80000
