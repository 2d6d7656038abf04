"""Invoice commands."""

import io
from datetime import datetime, time, UTC

import click
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.cli.resolution import resolve_client_or_exit, resolve_invoice_or_exit
from diamondbook.domain.client import ClientService
from diamondbook.domain.entities import InvoiceStatus, PaymentMethod
from diamondbook.domain.invoice import InvoiceService, is_overdue
from diamondbook.presentation.invoice_text import export_line_items_csv, render_invoice
from diamondbook.utils.date_parser import parse_date
from diamondbook.utils.formatting import (
    DATE_STYLES,
    format_currency,
    format_date,
    format_rate,
    format_weight,
    payment_method_label,
)


def _invoice_service(ctx) -> InvoiceService:
    settings = ctx.obj["settings"]
    return InvoiceService(
        ctx.obj["db"],
        payment_terms_days=settings.payment_terms_days,
        invoice_prefix=settings.invoice_prefix,
    )


def _parse_optional_date(ctx, label: str, value: str | None):
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _status_text(invoice) -> str:
    if invoice.is_paid:
        return "Paid"
    if is_overdue(invoice):
        return "Past Due"
    return "Pending"


@click.group()
def invoice_group():
    """Create, view and settle invoices."""
    pass


@invoice_group.command("create")
@click.argument("client", metavar="CLIENT")
@click.argument("diamond_ids", nargs=-1, type=int)
@click.option("--all-uninvoiced", is_flag=True, help="Bill every uninvoiced entry of the client")
@click.option("--issue-date", help="Issue date (default: today)")
@click.option("--due-date", help="Due date (default: issue date plus payment terms)")
@click.option("--notes", help="Notes printed on the invoice")
@click.pass_context
def create_invoice(
    ctx,
    client: str,
    diamond_ids: tuple[int, ...],
    all_uninvoiced: bool,
    issue_date: str | None,
    due_date: str | None,
    notes: str | None,
):
    """Bill diamond entries to a client.

    CLIENT can be a client name or ID, followed by the diamond entry IDs in
    the order they should appear on the invoice.

    Examples:
        diamondbook invoice create "Sunrise Gems" 4 5 7
        diamondbook invoice create 2 --all-uninvoiced --due-date "in 15 days"
    """
    db = ctx.obj["db"]
    service = _invoice_service(ctx)
    client_id = resolve_client_or_exit(ctx, ClientService(db), client)

    ids = list(diamond_ids)
    if all_uninvoiced:
        ids.extend(entry.id for entry in db.list_diamonds(client_id=client_id, uninvoiced=True))

    issue = _parse_optional_date(ctx, "issue date", issue_date)
    due = _parse_optional_date(ctx, "due date", due_date)

    try:
        invoice_id = service.create_invoice(
            client_id=client_id, diamond_ids=ids, issue_date=issue, due_date=due, notes=notes
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    invoice = service.get_invoice(invoice_id)
    click.echo(f"Created invoice {invoice.invoice_number} (ID: {invoice_id})")
    click.echo(f"  Entries: {len(invoice.diamond_ids)}")
    click.echo(f"  Total: {format_currency(invoice.total_amount)}")
    click.echo(f"  Due: {format_date(invoice.due_date)}")


@invoice_group.command("list")
@click.option("--client", help="Only invoices for this client (name or ID)")
@click.option(
    "--status",
    type=click.Choice([s.value for s in InvoiceStatus], case_sensitive=False),
    help="Only invoices with this status",
)
@click.option("--overdue", is_flag=True, help="Only pending invoices past their due date")
@click.pass_context
def list_invoices(ctx, client: str | None, status: str | None, overdue: bool):
    """List invoices, newest first."""
    db = ctx.obj["db"]
    service = _invoice_service(ctx)
    client_service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, client_service, client) if client else None

    invoices = service.list_invoices(client_id=client_id, status=status)
    if overdue:
        invoices = [inv for inv in invoices if is_overdue(inv)]
    if not invoices:
        click.echo("No invoices found.")
        return

    names = {c.id: c.name for c in client_service.list_clients()}
    click.echo(
        f"{'ID':>4}  {'Number':<20} {'Client':<20} {'Issued':<10}  {'Due':<10}  "
        f"{'Status':<9} {'Total':>16}"
    )
    click.echo("-" * 96)
    for inv in invoices:
        click.echo(
            f"{inv.id:>4}  {inv.invoice_number:<20} {names.get(inv.client_id, 'Unknown Client'):<20.20} "
            f"{format_date(inv.issue_date):<10}  {format_date(inv.due_date):<10}  "
            f"{_status_text(inv):<9} {format_currency(inv.total_amount):>16}"
        )


@invoice_group.command("show")
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def show_invoice(ctx, invoice: str):
    """Show an invoice summary.

    INVOICE can be an invoice ID or number (e.g. INV-20240305-1).
    """
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)
    view = service.get_invoice_view(inv.id)
    summary = view.summary

    click.echo(f"\nInvoice {inv.invoice_number} (ID: {inv.id})")
    click.echo(f"  Client: {view.client.name if view.client else 'Unknown Client'}")
    click.echo(f"  Issued: {format_date(inv.issue_date)}")
    click.echo(f"  Due: {format_date(inv.due_date)}")
    click.echo(f"  Status: {_status_text(inv)}")
    if inv.is_paid:
        click.echo(f"  Paid: {format_date(inv.payment_date)} via {payment_method_label(inv.payment_method)}")
    click.echo(
        f"  4P Plus: {summary.plus_count} pcs, {format_weight(summary.plus_weight)} ct "
        f"@ {format_rate(summary.plus_rate, 'ct')} = {format_currency(summary.plus_value)}"
    )
    click.echo(
        f"  4P Minus: {summary.minus_count} pcs, {format_weight(summary.minus_weight)} ct "
        f"@ {format_rate(summary.minus_rate, 'pc')} = {format_currency(summary.minus_value)}"
    )
    click.echo(f"  Grand Total: {format_currency(summary.grand_total)}")
    if inv.notes:
        click.echo(f"  Notes: {inv.notes}")


@invoice_group.command("update")
@click.argument("invoice", metavar="INVOICE")
@click.argument("diamond_ids", nargs=-1, type=int)
@click.option("--client", help="Bill a different client (name or ID); entry IDs are then required")
@click.option("--issue-date", help="Issue date")
@click.option("--due-date", help="Due date")
@click.option("--notes", help="Notes printed on the invoice")
@click.pass_context
def update_invoice(
    ctx,
    invoice: str,
    diamond_ids: tuple[int, ...],
    client: str | None,
    issue_date: str | None,
    due_date: str | None,
    notes: str | None,
):
    """Edit an invoice and recompute its total.

    Diamond entry IDs, when given, replace the invoice's entries in that
    order. Entries dropped from the invoice can be billed again.

    Examples:
        diamondbook invoice update INV-20240305-1 5 4
        diamondbook invoice update 3 --due-date "in 15 days" --notes "Revised"
    """
    if not diamond_ids and all(v is None for v in (client, issue_date, due_date, notes)):
        click.echo("Nothing to update.")
        return

    db = ctx.obj["db"]
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)
    client_id = resolve_client_or_exit(ctx, ClientService(db), client) if client else None

    issue = _parse_optional_date(ctx, "issue date", issue_date)
    due = _parse_optional_date(ctx, "due date", due_date)

    try:
        service.update_invoice(
            inv.id,
            client_id=client_id,
            diamond_ids=list(diamond_ids) if diamond_ids else None,
            issue_date=issue,
            due_date=due,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    updated = service.get_invoice(inv.id)
    click.echo(f"Updated invoice {updated.invoice_number}")
    click.echo(f"  Entries: {len(updated.diamond_ids)}")
    click.echo(f"  Total: {format_currency(updated.total_amount)}")
    click.echo(f"  Due: {format_date(updated.due_date)}")


@invoice_group.command("print")
@click.argument("invoice", metavar="INVOICE")
@click.option(
    "--date-style",
    type=click.Choice(sorted(DATE_STYLES)),
    default="long",
    show_default=True,
    help="How dates are written on the invoice",
)
@click.pass_context
def print_invoice(ctx, invoice: str, date_style: str):
    """Print a full invoice ready to hand to the client."""
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)
    view = service.get_invoice_view(inv.id)
    click.echo(render_invoice(view, date_style=date_style), nl=False)


@invoice_group.command("pay")
@click.argument("invoice", metavar="INVOICE")
@click.option(
    "--method",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    help="Payment method",
)
@click.option("--date", "paid_date", help="Payment date (default: now)")
@click.pass_context
def pay_invoice(ctx, invoice: str, method: str, paid_date: str | None):
    """Mark an invoice as paid."""
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)

    paid_on = None
    parsed = _parse_optional_date(ctx, "payment date", paid_date)
    if parsed is not None:
        paid_on = datetime.combine(parsed, time(), tzinfo=UTC)

    try:
        updated = service.mark_paid(inv.id, method, paid_on=paid_on)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Invoice {updated.invoice_number} marked as paid via "
        f"{payment_method_label(updated.payment_method)}"
    )


@invoice_group.command("unpay")
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def unpay_invoice(ctx, invoice: str):
    """Return a paid invoice to pending."""
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)
    if not inv.is_paid:
        click.echo(f"Invoice {inv.invoice_number} is already pending.")
        return
    service.mark_pending(inv.id)
    click.echo(f"Invoice {inv.invoice_number} marked as pending")


@invoice_group.command("delete")
@click.argument("invoice", metavar="INVOICE")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_invoice(ctx, invoice: str, yes: bool):
    """Delete an invoice. Its diamond entries can be billed again."""
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)

    if not yes and not click.confirm(f"Are you sure you want to delete invoice {inv.invoice_number}?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_invoice(inv.id)
    click.echo(f"Deleted invoice {inv.invoice_number}")


@invoice_group.command("export")
@click.argument("invoice", metavar="INVOICE")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="CSV file to write (default: standard output)",
)
@click.pass_context
def export_invoice(ctx, invoice: str, output: str | None):
    """Export an invoice's line items as CSV."""
    service = _invoice_service(ctx)
    inv = resolve_invoice_or_exit(ctx, service, invoice)
    view = service.get_invoice_view(inv.id)

    if output is None:
        buffer = io.StringIO()
        export_line_items_csv(view, buffer)
        click.echo(buffer.getvalue(), nl=False)
        return

    with open(output, "w", newline="", encoding="utf-8") as f:
        rows = export_line_items_csv(view, f)
    click.echo(f"Exported {rows} line items to {output}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
