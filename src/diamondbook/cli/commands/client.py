"""Client management commands."""

import click
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.cli.resolution import resolve_client_or_exit
from diamondbook.domain.client import ClientService
from diamondbook.utils.amount_parser import parse_amount
from diamondbook.utils.formatting import NOT_AVAILABLE, format_currency


def _parse_rate(ctx, label: str, value: str | None):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--plus-rate", help="4P Plus rate per carat (e.g. 5000 or '₹5,000')")
@click.option("--minus-rate", help="4P Minus rate per piece")
@click.option("--contact", "contact_person", help="Contact person")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--company", help="Company name (defaults to client name)")
@click.option("--location", help="Location")
@click.option("--terms", "payment_terms", help="Payment terms (e.g. 'Net 30')")
@click.option("--notes", help="Notes")
@click.pass_context
def create_client(
    ctx,
    name: str,
    plus_rate: str | None,
    minus_rate: str | None,
    contact_person: str | None,
    phone: str | None,
    email: str | None,
    company: str | None,
    location: str | None,
    payment_terms: str | None,
    notes: str | None,
):
    """Create a new client.

    Examples:
        diamondbook client create "Sunrise Gems" --plus-rate 5000 --minus-rate 300
        diamondbook client create "Shah Exports" --plus-rate "₹5,200" --minus-rate 310 --phone 9876543210
    """
    db = ctx.obj["db"]
    service = ClientService(db)

    plus = _parse_rate(ctx, "4P Plus rate", plus_rate)
    minus = _parse_rate(ctx, "4P Minus rate", minus_rate)

    try:
        client_id = service.create_client(
            name=name,
            plus_rate=plus or 0,
            minus_rate=minus or 0,
            contact_person=contact_person,
            phone=phone,
            email=email,
            company=company,
            location=location,
            payment_terms=payment_terms,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created client '{name}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List all clients."""
    db = ctx.obj["db"]
    service = ClientService(db)

    clients = service.list_clients()
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 90)
    click.echo(f"{'ID':>4}  {'Name':<25} {'Phone':<15} {'4P Plus /ct':>16} {'4P Minus /pc':>16}")
    click.echo("-" * 90)
    for c in clients:
        click.echo(
            f"{c.id:>4}  {c.name:<25.25} {(c.phone or ''):<15} "
            f"{format_currency(c.plus_rate):>16} {format_currency(c.minus_rate):>16}"
        )


@client_group.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show client details.

    CLIENT can be a client name or ID.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    c = service.get_client(client_id)

    click.echo(f"\nClient ID: {c.id}")
    click.echo(f"  Name: {c.name}")
    click.echo(f"  Company: {c.company or NOT_AVAILABLE}")
    click.echo(f"  Contact: {c.contact_person or NOT_AVAILABLE}")
    click.echo(f"  Phone: {c.phone or NOT_AVAILABLE}")
    click.echo(f"  Email: {c.email or NOT_AVAILABLE}")
    if c.location:
        click.echo(f"  Location: {c.location}")
    click.echo(f"  4P Plus rate: {format_currency(c.plus_rate)}/ct")
    click.echo(f"  4P Minus rate: {format_currency(c.minus_rate)}/pc")
    if c.payment_terms:
        click.echo(f"  Payment terms: {c.payment_terms}")
    if c.notes:
        click.echo(f"  Notes: {c.notes}")


@client_group.command("update")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New client name")
@click.option("--plus-rate", help="New 4P Plus rate per carat")
@click.option("--minus-rate", help="New 4P Minus rate per piece")
@click.option("--contact", "contact_person", help="Contact person")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--company", help="Company name")
@click.option("--location", help="Location")
@click.option("--terms", "payment_terms", help="Payment terms")
@click.option("--notes", help="Notes")
@click.pass_context
def update_client(ctx, client: str, **options):
    """Update client details.

    CLIENT can be a client name or ID. Only the options given are changed.
    New rates apply to diamond entries added afterwards.

    Examples:
        diamondbook client update "Sunrise Gems" --plus-rate 5100
        diamondbook client update 2 --phone "+91 98765 43210"
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)

    changes = {key: value for key, value in options.items() if value is not None}
    if "plus_rate" in changes:
        changes["plus_rate"] = _parse_rate(ctx, "4P Plus rate", changes["plus_rate"])
    if "minus_rate" in changes:
        changes["minus_rate"] = _parse_rate(ctx, "4P Minus rate", changes["minus_rate"])

    if not changes:
        click.echo("Nothing to update.")
        return

    try:
        service.update_client(client_id, **changes)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated client {client_id}: {', '.join(sorted(changes))}")


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, yes: bool) -> None:
    """Delete a client.

    CLIENT can be a client name or ID. A client can only be deleted when it
    has no diamond entries or invoices.
    """
    db = ctx.obj["db"]
    service = ClientService(db)
    client_id = resolve_client_or_exit(ctx, service, client)
    client_obj = service.get_client(client_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete client '{client_obj.name}' (ID: {client_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted client '{client_obj.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
