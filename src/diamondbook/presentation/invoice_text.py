"""Print-ready invoice rendering.

Builds a fixed-width text invoice (and a CSV of its line items) from an
InvoiceView. All numbers go through the formatting helpers; nothing here
recomputes totals.
"""

import csv
from typing import Optional, TextIO

from diamondbook.domain.entities import CompanyDetails, Client, InvoiceView
from diamondbook.domain.invoice import is_overdue
from diamondbook.utils.formatting import (
    NOT_AVAILABLE,
    format_currency,
    format_date,
    format_rate,
    format_weight,
    payment_method_label,
)

WIDTH = 96
CSV_HEADER = ["#", "Diamond ID", "Kapan", "Category", "Pieces", "Weight (ct)", "Rate", "Amount"]


def _or_na(value: Optional[str]) -> str:
    return value if value else NOT_AVAILABLE


def _status_label(view: InvoiceView) -> str:
    if view.invoice.is_paid:
        return "PAID"
    if is_overdue(view.invoice):
        return "PAST DUE"
    return "PENDING"


def _company_lines(company: Optional[CompanyDetails]) -> list[str]:
    if company is None:
        return ["(company details not set up)"]
    lines = [company.company_name, company.address]
    if company.phone:
        lines.append(f"Ph: {company.phone}")
    if company.email:
        lines.append(f"Email: {company.email}")
    if company.gst_number:
        lines.append(f"GSTIN: {company.gst_number}")
    return lines


def _client_lines(client: Optional[Client]) -> list[str]:
    if client is None:
        return ["Unknown Client"]
    return [
        client.name,
        _or_na(client.company),
        f"Contact: {_or_na(client.contact_person)}",
        f"Ph: {_or_na(client.phone)}",
        f"Email: {_or_na(client.email)}",
    ]


def _bank_lines(company: Optional[CompanyDetails]) -> list[str]:
    if company is None:
        return []
    lines = [
        "Bank Details",
        f"  Bank: {company.bank_name}",
        f"  A/C No: {company.account_number}",
        f"  IFSC: {company.ifsc_code}",
    ]
    if company.branch:
        lines.append(f"  Branch: {company.branch}")
    if company.account_holder_name:
        lines.append(f"  A/C Holder: {company.account_holder_name}")
    return lines


def render_invoice(view: InvoiceView, date_style: str = "long") -> str:
    """Render an invoice as plain text ready to print.

    Args:
        view: Invoice with client, company details and summary
        date_style: Style passed to format_date for every date shown

    Returns:
        Multi-line string ending with a newline
    """
    invoice = view.invoice
    summary = view.summary
    lines: list[str] = []

    lines.append("=" * WIDTH)
    header_left = "INVOICE"
    header_right = f"#{invoice.invoice_number}  [{_status_label(view)}]"
    lines.append(f"{header_left}{header_right:>{WIDTH - len(header_left)}}")
    lines.append("=" * WIDTH)

    lines.extend(_company_lines(view.company))
    lines.append("")
    lines.append("Bill To:")
    lines.extend(f"  {line}" for line in _client_lines(view.client))
    lines.append("")
    lines.append(f"Issue Date: {format_date(invoice.issue_date, date_style)}")
    lines.append(f"Due Date:   {format_date(invoice.due_date, date_style)}")
    if invoice.is_paid:
        lines.append(f"Paid On:    {format_date(invoice.payment_date, date_style)}")
        lines.append(f"Payment:    {payment_method_label(invoice.payment_method)}")
    lines.append("-" * WIDTH)

    lines.append(
        f"{'#':>3}  {'ID':<6} {'Kapan':<10} {'Category':<9} {'Pieces':>7} "
        f"{'Weight':>9} {'Rate':>16} {'Amount':>18}"
    )
    lines.append("-" * WIDTH)
    for index, item in enumerate(summary.line_items, start=1):
        entry = item.entry
        rate = format_rate(item.display_rate, entry.category.unit)
        lines.append(
            f"{index:>3}  {str(entry.id or NOT_AVAILABLE):<6} {_or_na(entry.kapan_id):<10.10} "
            f"{entry.category.value:<9} {entry.number_of_diamonds:>7} "
            f"{format_weight(entry.weight_in_karats):>9} {rate:>16} "
            f"{format_currency(entry.total_value):>18}"
        )
    if not summary.line_items:
        lines.append("  No diamond entries on this invoice.")
    lines.append("-" * WIDTH)

    lines.append(
        f"4P Plus:  {summary.plus_count:>6} pcs {format_weight(summary.plus_weight):>9} ct"
        f"   Rate: {format_rate(summary.plus_rate, 'ct'):<16} {format_currency(summary.plus_value):>18}"
    )
    lines.append(
        f"4P Minus: {summary.minus_count:>6} pcs {format_weight(summary.minus_weight):>9} ct"
        f"   Rate: {format_rate(summary.minus_rate, 'pc'):<16} {format_currency(summary.minus_value):>18}"
    )
    total_label = "Grand Total:"
    total_value = format_currency(summary.grand_total)
    lines.append(f"{total_label}{total_value:>{WIDTH - len(total_label)}}")
    lines.append("=" * WIDTH)

    if invoice.is_paid:
        paid_line = f"Payment Received via {payment_method_label(invoice.payment_method)}"
        if invoice.payment_date is not None:
            paid_line += f" on {format_date(invoice.payment_date, 'short')}"
        lines.append(paid_line)

    bank = _bank_lines(view.company)
    if bank:
        lines.append("")
        lines.extend(bank)
    if invoice.notes:
        lines.append("")
        lines.append(f"Notes: {invoice.notes}")

    return "\n".join(lines) + "\n"


def export_line_items_csv(view: InvoiceView, stream: TextIO) -> int:
    """Write an invoice's line items as CSV.

    Returns:
        Number of rows written (excluding the header)
    """
    writer = csv.writer(stream)
    writer.writerow(CSV_HEADER)
    count = 0
    for index, item in enumerate(view.summary.line_items, start=1):
        entry = item.entry
        writer.writerow(
            [
                index,
                entry.id,
                entry.kapan_id or "",
                entry.category.value,
                entry.number_of_diamonds,
                format_weight(entry.weight_in_karats),
                item.display_rate,
                entry.total_value,
            ]
        )
        count += 1
    return count
