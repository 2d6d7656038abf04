"""CLI helpers for resolving clients and invoices from user input."""

from __future__ import annotations

import click
from diamondbook.domain.client import ClientService
from diamondbook.domain.entities import Invoice
from diamondbook.domain.invoice import InvoiceService
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.utils.client_resolver import resolve_client


def resolve_client_or_exit(ctx: click.Context, client_service: ClientService, client: str | int) -> int:
    """Resolve client name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_client(client_service, client)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_invoice_or_exit(ctx: click.Context, invoice_service: InvoiceService, reference: str) -> Invoice:
    """Resolve invoice ID or number, or exit with a CLI error."""
    try:
        return invoice_service.resolve_invoice(reference)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
