"""Company details commands."""

import click
from diamondbook.cli.error_handling import handle_domain_error
from diamondbook.domain.company import CompanyService
from diamondbook.utils.formatting import NOT_AVAILABLE


@click.group()
def company_group():
    """Manage the company details printed on invoices."""
    pass


@company_group.command("set")
@click.option("--name", "company_name", required=True, help="Company name")
@click.option("--address", required=True, help="Postal address")
@click.option("--bank", "bank_name", required=True, help="Bank name")
@click.option("--account-number", required=True, help="Bank account number")
@click.option("--ifsc", "ifsc_code", required=True, help="IFSC code")
@click.option("--branch", help="Bank branch")
@click.option("--account-holder", "account_holder_name", help="Account holder name")
@click.option("--phone", help="Phone number")
@click.option("--email", help="Email address")
@click.option("--gst", "gst_number", help="GST number")
@click.pass_context
def set_company(ctx, **details):
    """Set the company details, replacing any saved before.

    Example:
        diamondbook company set --name "Shree Diamonds" --address "Varachha, Surat" \\
            --bank "HDFC Bank" --account-number 50100012345678 --ifsc hdfc0001234
    """
    service = CompanyService(ctx.obj["db"])
    try:
        service.save_details(**details)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Saved company details for {details['company_name']}")


@company_group.command("show")
@click.pass_context
def show_company(ctx):
    """Show the saved company details."""
    service = CompanyService(ctx.obj["db"])
    company = service.get_details()
    if company is None:
        click.echo("Company details have not been set up. Use 'diamondbook company set'.")
        return

    click.echo(f"\n{company.company_name}")
    click.echo(f"  Address: {company.address}")
    click.echo(f"  Phone: {company.phone or NOT_AVAILABLE}")
    click.echo(f"  Email: {company.email or NOT_AVAILABLE}")
    click.echo(f"  GSTIN: {company.gst_number or NOT_AVAILABLE}")
    click.echo("  Bank:")
    click.echo(f"    {company.bank_name}")
    click.echo(f"    A/C No: {company.account_number}")
    click.echo(f"    IFSC: {company.ifsc_code}")
    click.echo(f"    Branch: {company.branch or NOT_AVAILABLE}")
    click.echo(f"    A/C Holder: {company.account_holder_name or NOT_AVAILABLE}")


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
