"""Client domain service."""

import logging
import re
from decimal import Decimal
from typing import Any, Optional

from diamondbook.database.base import Database
from diamondbook.domain.entities import Client as ClientEntity, ClientRates, to_decimal
from diamondbook.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    client_delete_blocked,
    client_not_found,
    duplicate_client_name,
)

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"^[0-9+\- ]{10,15}$")
EDITABLE_FIELDS = (
    "name",
    "contact_person",
    "phone",
    "email",
    "company",
    "location",
    "plus_rate",
    "minus_rate",
    "payment_terms",
    "notes",
)


def _validate_rate(label: str, value: Any) -> Decimal:
    rate = to_decimal(value)
    if rate < 0:
        raise ValidationError(f"{label} cannot be negative")
    return rate


def _validate_phone(phone: Optional[str]) -> Optional[str]:
    if phone is None or not phone.strip():
        return None
    phone = phone.strip()
    if not PHONE_PATTERN.match(phone):
        raise ValidationError(f"Invalid phone number '{phone}'")
    return phone


class ClientService:
    """Service for managing clients and their rates."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_client(
        self,
        name: str,
        plus_rate: Any = 0,
        minus_rate: Any = 0,
        contact_person: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        company: Optional[str] = None,
        location: Optional[str] = None,
        payment_terms: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a new client.

        Args:
            name: Client name (unique)
            plus_rate: Rate per carat for 4P Plus parcels
            minus_rate: Rate per piece for 4P Minus parcels
            contact_person: Optional contact person
            phone: Optional phone number
            email: Optional email
            company: Optional company name (defaults to the client name)
            location: Optional location
            payment_terms: Optional payment terms, e.g. "Net 30"
            notes: Optional notes

        Returns:
            Client ID

        Raises:
            ValidationError: If name is empty, a rate is negative or phone is malformed
            ConflictError: If client name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Client name is required")
        if self.db.get_client_by_name(name) is not None:
            raise ConflictError(duplicate_client_name(name))

        client_id = self.db.create_client(
            name=name,
            plus_rate=_validate_rate("4P Plus rate", plus_rate),
            minus_rate=_validate_rate("4P Minus rate", minus_rate),
            contact_person=contact_person,
            phone=_validate_phone(phone),
            email=email,
            company=company if company else name,
            location=location,
            payment_terms=payment_terms,
            notes=notes,
        )
        logger.info("Created client %s (%s)", client_id, name)
        return client_id

    def get_client(self, client_id: int) -> Optional[ClientEntity]:
        """Get client by ID.

        Args:
            client_id: Client ID

        Returns:
            Client entity or None if not found
        """
        return self.db.get_client(client_id)

    def require_client(self, client_id: int) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self) -> list[ClientEntity]:
        """List all clients.

        Returns:
            List of client entities
        """
        return self.db.list_clients()

    def get_rates(self, client_id: int) -> ClientRates:
        """Get a client's configured rates.

        Raises:
            NotFoundError: If client not found
        """
        return self.require_client(client_id).rates

    def update_client(self, client_id: int, **changes: Any) -> None:
        """Update client fields.

        Only the keyword arguments given are changed. A change of rates does
        not revalue diamond entries that were already entered.

        Raises:
            NotFoundError: If client not found
            ConflictError: If the new name belongs to another client
            ValidationError: If a field value is invalid
        """
        self.require_client(client_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown client field(s): {', '.join(sorted(unknown))}")

        if "name" in changes:
            name = (changes["name"] or "").strip()
            if not name:
                raise ValidationError("Client name is required")
            existing = self.db.get_client_by_name(name)
            if existing is not None and existing.id != client_id:
                raise ConflictError(duplicate_client_name(name))
            changes["name"] = name
        if "plus_rate" in changes:
            changes["plus_rate"] = _validate_rate("4P Plus rate", changes["plus_rate"])
        if "minus_rate" in changes:
            changes["minus_rate"] = _validate_rate("4P Minus rate", changes["minus_rate"])
        if "phone" in changes:
            changes["phone"] = _validate_phone(changes["phone"])

        if not changes:
            return
        self.db.update_client(client_id, **changes)
        logger.info("Updated client %s: %s", client_id, ", ".join(sorted(changes)))

    def delete_client(self, client_id: int) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If client not found
            DependencyError: If the client has diamond entries or invoices
        """
        self.require_client(client_id)

        diamond_count, invoice_count = self.db.get_client_dependency_counts(client_id)
        if diamond_count > 0 or invoice_count > 0:
            raise DependencyError(client_delete_blocked(client_id, diamond_count, invoice_count))

        self.db.delete_client(client_id)
        logger.info("Deleted client %s", client_id)
