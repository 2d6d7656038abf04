"""Shared pytest fixtures for diamondbook tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from diamondbook.config import Settings
from diamondbook.database.factories import create_sqlite_database
from diamondbook.domain.client import ClientService
from diamondbook.domain.company import CompanyService
from diamondbook.domain.dashboard import DashboardService
from diamondbook.domain.diamond import DiamondService
from diamondbook.domain.invoice import InvoiceService
from diamondbook.domain.market_rate import MarketRateService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep DIAMONDBOOK_* variables from the developer's shell out of tests."""
    for name in list(os.environ):
        if name.startswith("DIAMONDBOOK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Default settings."""
    return Settings()


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def diamond_service(temp_db):
    """Create a DiamondService with a temporary database."""
    return DiamondService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def market_rate_service(temp_db):
    """Create a MarketRateService with a temporary database."""
    return MarketRateService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a client billing 5000/ct for 4P Plus and 300/pc for 4P Minus."""
    client_id = client_service.create_client(
        name="Sunrise Gems",
        plus_rate=Decimal("5000"),
        minus_rate=Decimal("300"),
        contact_person="Ramesh Patel",
        phone="9876543210",
        email="ramesh@sunrisegems.example",
    )
    return client_service.get_client(client_id)


@pytest.fixture
def sample_diamonds(diamond_service, sample_client):
    """Enter one 4P Plus and one 4P Minus parcel for the sample client.

    Plus: 40 pcs, 10 ct (0.25 ct/pc) -> 10 * 5000 = 50000
    Minus: 100 pcs, 8 ct (0.08 ct/pc) -> 100 * 300 = 30000
    """
    plus_id = diamond_service.add_entry(
        client_id=sample_client.id,
        kapan_id="K-101",
        number_of_diamonds=40,
        weight_in_karats=Decimal("10"),
        entry_date=date(2024, 3, 1),
    )
    minus_id = diamond_service.add_entry(
        client_id=sample_client.id,
        kapan_id="K-102",
        number_of_diamonds=100,
        weight_in_karats=Decimal("8"),
        entry_date=date(2024, 3, 2),
    )
    return [diamond_service.get_entry(plus_id), diamond_service.get_entry(minus_id)]


@pytest.fixture
def sample_invoice(invoice_service, sample_client, sample_diamonds):
    """Create a pending invoice issued 2024-03-05 for both sample parcels."""
    invoice_id = invoice_service.create_invoice(
        client_id=sample_client.id,
        diamond_ids=[d.id for d in sample_diamonds],
        issue_date=date(2024, 3, 5),
    )
    return invoice_service.get_invoice(invoice_id)


@pytest.fixture
def sample_company(company_service):
    """Save company details."""
    company_service.save_details(
        company_name="Shree Diamonds",
        address="Varachha Road, Surat",
        bank_name="HDFC Bank",
        account_number="50100012345678",
        ifsc_code="hdfc0001234",
        branch="Varachha",
        account_holder_name="Shree Diamonds",
        phone="0261 2345678",
        gst_number="24abcde1234f1z5",
    )
    return company_service.get_details()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
