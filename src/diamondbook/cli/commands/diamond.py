"""Diamond entry commands."""

import click
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.cli.resolution import resolve_client_or_exit
from diamondbook.domain.client import ClientService
from diamondbook.domain.diamond import DiamondService
from diamondbook.domain.entities import DiamondCategory
from diamondbook.utils.amount_parser import parse_weight
from diamondbook.utils.date_parser import parse_date
from diamondbook.utils.formatting import format_currency, format_date, format_weight

CATEGORY_CHOICES = {"plus": DiamondCategory.PLUS, "minus": DiamondCategory.MINUS}


def _diamond_service(ctx) -> DiamondService:
    settings = ctx.obj["settings"]
    return DiamondService(ctx.obj["db"], plus_threshold=settings.plus_threshold)


@click.group()
def diamond_group():
    """Manage diamond entries."""
    pass


@diamond_group.command("add")
@click.argument("client", metavar="CLIENT")
@click.argument("kapan")
@click.argument("pieces", type=int)
@click.argument("weight")
@click.option("--date", "entry_date", help="Entry date (default: today)")
@click.option("--damage", help="Raw damage weight in carats (deducted for 4P Plus)")
@click.option(
    "--category",
    type=click.Choice(sorted(CATEGORY_CHOICES), case_sensitive=False),
    help="Override the category derived from weight per piece",
)
@click.pass_context
def add_diamond(
    ctx,
    client: str,
    kapan: str,
    pieces: int,
    weight: str,
    entry_date: str | None,
    damage: str | None,
    category: str | None,
):
    """Enter a parcel of diamonds for a client.

    CLIENT can be a client name or ID. The category is 4P Plus when the
    average stone is heavier than the plus threshold, otherwise 4P Minus.

    Examples:
        diamondbook diamond add "Sunrise Gems" K-101 40 10.5
        diamondbook diamond add 2 K-102 100 8ct --damage 0.4 --date yesterday
    """
    service = _diamond_service(ctx)
    client_id = resolve_client_or_exit(ctx, ClientService(ctx.obj["db"]), client)

    try:
        carats = parse_weight(weight)
        damage_carats = parse_weight(damage) if damage is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid weight: {e}", err=True)
        ctx.exit(1)

    parsed_date = None
    if entry_date:
        try:
            parsed_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        diamond_id = service.add_entry(
            client_id=client_id,
            kapan_id=kapan,
            number_of_diamonds=pieces,
            weight_in_karats=carats,
            entry_date=parsed_date,
            raw_damage_weight=damage_carats,
            category=CATEGORY_CHOICES[category.lower()] if category else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    entry = service.get_entry(diamond_id)
    click.echo(f"Added diamond entry {diamond_id}")
    click.echo(f"  Kapan: {entry.kapan_id}")
    click.echo(f"  Category: {entry.category.value}")
    click.echo(f"  Pieces: {entry.number_of_diamonds}")
    click.echo(f"  Weight: {format_weight(entry.weight_in_karats)} ct")
    if entry.raw_damage_weight:
        click.echo(f"  Raw damage: {format_weight(entry.raw_damage_weight)} ct")
    click.echo(f"  Value: {format_currency(entry.total_value)}")


@diamond_group.command("list")
@click.option("--client", help="Only entries for this client (name or ID)")
@click.option("--kapan", help="Only entries from this kapan")
@click.option("--uninvoiced", is_flag=True, help="Only entries not yet on an invoice")
@click.option("--start-date", help="Start date (inclusive)")
@click.option("--end-date", help="End date (inclusive)")
@click.pass_context
def list_diamonds(
    ctx,
    client: str | None,
    kapan: str | None,
    uninvoiced: bool,
    start_date: str | None,
    end_date: str | None,
):
    """List diamond entries, newest first."""
    service = _diamond_service(ctx)
    client_service = ClientService(ctx.obj["db"])

    client_id = resolve_client_or_exit(ctx, client_service, client) if client else None

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    entries = service.list_entries(
        client_id=client_id,
        kapan_id=kapan,
        uninvoiced=uninvoiced,
        start_date=start,
        end_date=end,
    )
    if not entries:
        click.echo("No diamond entries found.")
        return

    names = {c.id: c.name for c in client_service.list_clients()}
    click.echo(
        f"{'ID':>5}  {'Date':<10}  {'Client':<20} {'Kapan':<10} {'Category':<9} "
        f"{'Pieces':>7} {'Weight':>9} {'Value':>16}"
    )
    click.echo("-" * 96)
    for entry in entries:
        click.echo(
            f"{entry.id:>5}  {format_date(entry.entry_date):<10}  "
            f"{names.get(entry.client_id, 'Unknown Client'):<20.20} {(entry.kapan_id or ''):<10.10} "
            f"{entry.category.value:<9} {entry.number_of_diamonds:>7} "
            f"{format_weight(entry.weight_in_karats):>9} {format_currency(entry.total_value):>16}"
        )
    click.echo("-" * 96)
    click.echo(f"{len(entries)} entries")


@diamond_group.command("update")
@click.argument("diamond_id", type=int)
@click.option("--kapan", help="Kapan (lot) identifier")
@click.option("--pieces", type=int, help="Number of diamonds")
@click.option("--weight", help="Total weight in carats")
@click.option("--damage", help="Raw damage weight in carats")
@click.option("--date", "entry_date", help="Entry date")
@click.option(
    "--category",
    type=click.Choice(sorted(CATEGORY_CHOICES), case_sensitive=False),
    help="Change the category (kept as entered otherwise)",
)
@click.pass_context
def update_diamond(
    ctx,
    diamond_id: int,
    kapan: str | None,
    pieces: int | None,
    weight: str | None,
    damage: str | None,
    entry_date: str | None,
    category: str | None,
):
    """Update a diamond entry and revalue it at the client's rates.

    Updates only the fields that are provided.

    Examples:
        diamondbook diamond update 4 --pieces 38 --weight 9.8
        diamondbook diamond update 4 --category minus
    """
    if all(v is None for v in (kapan, pieces, weight, damage, entry_date, category)):
        click.echo("Nothing to update.")
        return

    service = _diamond_service(ctx)

    try:
        carats = parse_weight(weight) if weight is not None else None
        damage_carats = parse_weight(damage) if damage is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid weight: {e}", err=True)
        ctx.exit(1)

    parsed_date = None
    if entry_date:
        try:
            parsed_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_entry(
            diamond_id,
            kapan_id=kapan,
            number_of_diamonds=pieces,
            weight_in_karats=carats,
            entry_date=parsed_date,
            raw_damage_weight=damage_carats,
            category=CATEGORY_CHOICES[category.lower()] if category else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    entry = service.get_entry(diamond_id)
    click.echo(f"Updated diamond entry {diamond_id}")
    click.echo(f"  Category: {entry.category.value}")
    click.echo(f"  Value: {format_currency(entry.total_value)}")


@diamond_group.command("delete")
@click.argument("diamond_id", type=int)
@click.pass_context
def delete_diamond(ctx, diamond_id: int):
    """Delete a diamond entry that is not on any invoice."""
    service = _diamond_service(ctx)
    try:
        service.delete_entry(diamond_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted diamond entry {diamond_id}")


def register_commands(cli):
    """Register diamond commands with main CLI."""
    cli.add_command(diamond_group, name="diamond")
