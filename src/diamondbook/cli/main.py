"""Main CLI entry point."""

import click
from diamondbook.config import configure_logging, load_settings
from diamondbook.database.factories import create_sqlite_database
from diamondbook.domain.errors import DomainError

# Import and register all commands at module level
from diamondbook.cli.commands import (
    client,
    diamond,
    rate,
    invoice,
    company,
    dashboard,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides DIAMONDBOOK_DB_PATH environment variable)",
    envvar="DIAMONDBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for diagnostics on stderr (overrides DIAMONDBOOK_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Diamondbook - Diamond trading ledger.

    Enter diamond parcels for clients, bill them on invoices with 4P Plus
    and 4P Minus subtotals, and record payments.
    """
    ctx.ensure_object(dict)

    try:
        settings = load_settings()
    except DomainError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    configure_logging(log_level or settings.log_level)
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
diamond.register_commands(cli)
rate.register_commands(cli)
invoice.register_commands(cli)
company.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
