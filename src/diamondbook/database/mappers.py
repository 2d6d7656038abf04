"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic; the domain entities apply their own
defaulting and normalization when constructed here.
"""

from diamondbook.domain import entities as domain
from diamondbook.database.models import (
    Client as ORMClient,
    Diamond as ORMDiamond,
    Invoice as ORMInvoice,
    CompanyDetails as ORMCompanyDetails,
    MarketRate as ORMMarketRate,
)


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        name=orm_client.name,
        contact_person=orm_client.contact_person,
        phone=orm_client.phone,
        email=orm_client.email,
        company=orm_client.company,
        location=orm_client.location,
        plus_rate=domain.to_decimal(orm_client.plus_rate),
        minus_rate=domain.to_decimal(orm_client.minus_rate),
        payment_terms=orm_client.payment_terms,
        notes=orm_client.notes,
        created_at=orm_client.created_at,
    )


def diamond_to_domain(orm_diamond: ORMDiamond) -> domain.DiamondEntry:
    """Convert SQLAlchemy Diamond model to domain DiamondEntry entity."""
    return domain.DiamondEntry(
        id=orm_diamond.id,
        kapan_id=orm_diamond.kapan_id,
        number_of_diamonds=orm_diamond.number_of_diamonds,
        weight_in_karats=orm_diamond.weight_in_karats,
        category=orm_diamond.category,
        total_value=orm_diamond.total_value,
        client_id=orm_diamond.client_id,
        entry_date=orm_diamond.entry_date,
        market_rate=orm_diamond.market_rate,
        raw_damage_weight=orm_diamond.raw_damage_weight,
        created_at=orm_diamond.created_at,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        client_id=orm_invoice.client_id,
        status=orm_invoice.status,
        total_amount=orm_invoice.total_amount,
        payment_date=orm_invoice.payment_date,
        payment_method=orm_invoice.payment_method,
        notes=orm_invoice.notes,
        diamond_ids=tuple(link.diamond_id for link in orm_invoice.diamond_links),
        created_at=orm_invoice.created_at,
    )


def company_details_to_domain(orm_company: ORMCompanyDetails) -> domain.CompanyDetails:
    """Convert SQLAlchemy CompanyDetails model to domain CompanyDetails entity."""
    return domain.CompanyDetails(
        id=orm_company.id,
        company_name=orm_company.company_name,
        address=orm_company.address,
        bank_name=orm_company.bank_name,
        account_number=orm_company.account_number,
        ifsc_code=orm_company.ifsc_code,
        branch=orm_company.branch,
        account_holder_name=orm_company.account_holder_name,
        phone=orm_company.phone,
        email=orm_company.email,
        gst_number=orm_company.gst_number,
        updated_at=orm_company.updated_at,
    )


def market_rate_to_domain(orm_rate: ORMMarketRate) -> domain.MarketRate:
    """Convert SQLAlchemy MarketRate model to domain MarketRate entity."""
    return domain.MarketRate(
        id=orm_rate.id,
        rate_date=orm_rate.rate_date,
        plus_rate=domain.to_decimal(orm_rate.plus_rate),
        minus_rate=domain.to_decimal(orm_rate.minus_rate),
        created_at=orm_rate.created_at,
    )
