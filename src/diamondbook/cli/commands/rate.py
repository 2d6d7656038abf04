"""Market rate commands."""

import click
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.domain.market_rate import MarketRateService
from diamondbook.utils.amount_parser import parse_amount
from diamondbook.utils.date_parser import parse_date
from diamondbook.utils.formatting import format_date, format_rate


@click.group()
def rate_group():
    """Record and view market rates."""
    pass


@rate_group.command("set")
@click.argument("plus_rate")
@click.argument("minus_rate")
@click.option("--date", "rate_date", help="Date the rate applies to (default: today)")
@click.pass_context
def set_rate(ctx, plus_rate: str, minus_rate: str, rate_date: str | None):
    """Record today's market rate.

    PLUS_RATE is per carat, MINUS_RATE is per piece. New diamond entries
    remember the latest rate for their category.

    Example:
        diamondbook rate set 5200 320
    """
    service = MarketRateService(ctx.obj["db"])

    try:
        plus = parse_amount(plus_rate)
        minus = parse_amount(minus_rate)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    parsed_date = None
    if rate_date:
        try:
            parsed_date = parse_date(rate_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        service.record_rate(plus, minus, rate_date=parsed_date)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Market rate recorded: 4P Plus {format_rate(plus, 'ct')}, 4P Minus {format_rate(minus, 'pc')}")


@rate_group.command("show")
@click.option("--history", is_flag=True, help="Show every recorded rate")
@click.pass_context
def show_rate(ctx, history: bool):
    """Show the current market rate."""
    service = MarketRateService(ctx.obj["db"])

    rates = service.list_rates() if history else [r for r in [service.current_rate()] if r]
    if not rates:
        click.echo("No market rate recorded.")
        return

    for rate in rates:
        click.echo(
            f"{format_date(rate.rate_date)}  4P Plus: {format_rate(rate.plus_rate, 'ct'):<14} "
            f"4P Minus: {format_rate(rate.minus_rate, 'pc')}"
        )


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
