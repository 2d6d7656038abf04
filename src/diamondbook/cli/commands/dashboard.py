"""Dashboard command."""

import click
from diamondbook.domain.dashboard import DashboardService
from diamondbook.domain.entities import DiamondCategory
from diamondbook.domain.market_rate import MarketRateService
from diamondbook.utils.formatting import format_currency, format_date, format_rate, format_weight


@click.command("dashboard")
@click.option("--days", default=7, show_default=True, type=int, help="Days counted as recent")
@click.option("--top", default=5, show_default=True, type=int, help="Number of top clients to show")
@click.pass_context
def dashboard(ctx, days: int, top: int):
    """Show a business overview.

    Inventory totals, recent entry value, top clients by value and
    outstanding receivables.
    """
    db = ctx.obj["db"]
    stats = DashboardService(db).build_stats(recent_days=days, top_n=top)
    market = MarketRateService(db).current_rate()

    click.echo("\nInventory")
    click.echo("-" * 50)
    click.echo(f"  Total pieces:      {stats.total_pieces:>12}")
    click.echo(f"  Total weight:      {format_weight(stats.total_weight):>12} ct")
    click.echo(f"  Total value:       {format_currency(stats.total_value):>12}")
    click.echo(f"  Last {days} days:      {format_currency(stats.recent_value):>12}")
    for category in DiamondCategory:
        click.echo(f"  {category.value + ' pieces:':<19}{stats.category_pieces.get(category, 0):>12}")

    if market is not None:
        click.echo(
            f"\nMarket rate ({format_date(market.rate_date)}): "
            f"4P Plus {format_rate(market.plus_rate, 'ct')}, 4P Minus {format_rate(market.minus_rate, 'pc')}"
        )

    click.echo("\nTop clients")
    click.echo("-" * 50)
    if not stats.top_clients:
        click.echo("  No diamond entries yet.")
    for rank, item in enumerate(stats.top_clients, start=1):
        click.echo(f"  {rank}. {item.client_name:<24.24} {item.pieces:>6} pcs {format_currency(item.value):>14}")

    click.echo("\nInvoices")
    click.echo("-" * 50)
    click.echo(f"  Invoices:          {stats.invoice_count:>12}")
    click.echo(f"  Receivables:       {format_currency(stats.receivables):>12}")
    click.echo(f"  Past due:          {stats.overdue_count:>12}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
