"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from diamondbook.domain.entities import (
    Client,
    CompanyDetails,
    DiamondEntry,
    Invoice,
    MarketRate,
)


class Database(ABC):
    """Abstract record store for diamondbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(self, name: str, **fields: Any) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def get_client_by_name(self, name: str) -> Optional[Client]:
        """Get client by exact name."""
        pass

    @abstractmethod
    def list_clients(self) -> list[Client]:
        """List all clients ordered by name."""
        pass

    @abstractmethod
    def update_client(self, client_id: int, **fields: Any) -> None:
        """Update the given client fields."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client."""
        pass

    @abstractmethod
    def get_client_dependency_counts(self, client_id: int) -> tuple[int, int]:
        """Return (diamond_count, invoice_count) for a client."""
        pass

    # Diamond operations
    @abstractmethod
    def create_diamond(
        self,
        client_id: int,
        kapan_id: str,
        entry_date: date,
        number_of_diamonds: int,
        weight_in_karats: Decimal,
        category: str,
        total_value: Decimal,
        market_rate: Decimal = Decimal("0"),
        raw_damage_weight: Optional[Decimal] = None,
    ) -> int:
        """Create a diamond entry. Returns diamond ID."""
        pass

    @abstractmethod
    def get_diamond(self, diamond_id: int) -> Optional[DiamondEntry]:
        """Get diamond entry by ID."""
        pass

    @abstractmethod
    def get_diamonds(self, diamond_ids: list[int]) -> list[DiamondEntry]:
        """Get diamond entries by ID, in the order the IDs are given."""
        pass

    @abstractmethod
    def list_diamonds(
        self,
        client_id: Optional[int] = None,
        kapan_id: Optional[str] = None,
        uninvoiced: bool = False,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DiamondEntry]:
        """List diamond entries with optional filters.

        Args:
            client_id: Optional client ID filter
            kapan_id: Optional kapan (lot) filter
            uninvoiced: If True, only return entries not on any invoice
            start_date: Optional earliest entry date
            end_date: Optional latest entry date
        """
        pass

    @abstractmethod
    def update_diamond(self, diamond_id: int, **fields: Any) -> None:
        """Update the given diamond entry fields."""
        pass

    @abstractmethod
    def delete_diamond(self, diamond_id: int) -> None:
        """Delete a diamond entry."""
        pass

    @abstractmethod
    def get_diamond_invoice_number(self, diamond_id: int) -> Optional[str]:
        """Return the number of the invoice a diamond entry is on, if any."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        invoice_number: str,
        client_id: int,
        issue_date: date,
        due_date: date,
        diamond_ids: list[int],
        total_amount: Decimal,
        status: str = "pending",
        notes: Optional[str] = None,
    ) -> int:
        """Create an invoice linked to diamond entries. Returns invoice ID."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, invoice_number: str) -> Optional[Invoice]:
        """Get invoice by invoice number."""
        pass

    @abstractmethod
    def list_invoices(
        self, client_id: Optional[int] = None, status: Optional[str] = None
    ) -> list[Invoice]:
        """List invoices, newest first, with optional filters."""
        pass

    @abstractmethod
    def count_invoices_issued_on(self, issue_date: date) -> int:
        """Count invoices issued on a given date."""
        pass

    @abstractmethod
    def update_invoice(
        self,
        invoice_id: int,
        diamond_ids: Optional[list[int]] = None,
        **fields: Any,
    ) -> None:
        """Update invoice fields and, when given, replace its diamond links."""
        pass

    @abstractmethod
    def update_invoice_payment(
        self,
        invoice_id: int,
        status: str,
        payment_date: Optional[datetime],
        payment_method: Optional[str],
    ) -> None:
        """Set invoice payment status, date and method."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: int) -> None:
        """Delete an invoice and release its diamond entries."""
        pass

    # Company details operations
    @abstractmethod
    def get_company_details(self) -> Optional[CompanyDetails]:
        """Get the company profile, if one has been saved."""
        pass

    @abstractmethod
    def save_company_details(self, **fields: Any) -> int:
        """Create or replace the company profile. Returns its ID."""
        pass

    # Market rate operations
    @abstractmethod
    def create_market_rate(self, rate_date: date, plus_rate: Decimal, minus_rate: Decimal) -> int:
        """Record a market rate. Returns rate ID."""
        pass

    @abstractmethod
    def get_latest_market_rate(self) -> Optional[MarketRate]:
        """Get the most recent market rate."""
        pass

    @abstractmethod
    def list_market_rates(self) -> list[MarketRate]:
        """List market rates, newest first."""
        pass
