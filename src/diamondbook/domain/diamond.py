"""Diamond entry domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from diamondbook.database.base import Database
from diamondbook.domain.entities import DiamondCategory, DiamondEntry, to_decimal, to_int
from diamondbook.domain.errors import (
    DependencyError,
    NotFoundError,
    ValidationError,
    client_not_found,
    diamond_delete_blocked,
    diamond_not_found,
)
from diamondbook.domain.pricing import (
    DEFAULT_PLUS_THRESHOLD,
    calculate_value,
    determine_category,
)

logger = logging.getLogger(__name__)


class DiamondService:
    """Service for entering and maintaining diamond parcels."""

    def __init__(self, db: Database, plus_threshold: Any = DEFAULT_PLUS_THRESHOLD):
        """Initialize diamond service.

        Args:
            db: Database instance
            plus_threshold: Carats per piece above which a parcel is 4P Plus
        """
        self.db = db
        self.plus_threshold = to_decimal(plus_threshold)

    def _validate(
        self,
        kapan_id: str,
        number_of_diamonds: int,
        weight_in_karats: Decimal,
        raw_damage_weight: Optional[Decimal],
    ) -> None:
        if not kapan_id:
            raise ValidationError("Kapan ID is required")
        if number_of_diamonds <= 0:
            raise ValidationError("Number of diamonds must be greater than zero")
        if weight_in_karats <= 0:
            raise ValidationError("Weight must be greater than zero")
        if raw_damage_weight is not None:
            if raw_damage_weight < 0:
                raise ValidationError("Raw damage weight cannot be negative")
            if raw_damage_weight >= weight_in_karats:
                raise ValidationError("Raw damage weight must be less than the total weight")

    def _price(
        self,
        client_id: int,
        number_of_diamonds: int,
        weight_in_karats: Decimal,
        raw_damage_weight: Optional[Decimal],
        category: Any,
    ) -> tuple[DiamondCategory, Decimal, Decimal]:
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))

        if category is None:
            resolved = determine_category(weight_in_karats, number_of_diamonds, self.plus_threshold)
        else:
            resolved = DiamondCategory.normalize(category)

        total_value = calculate_value(
            resolved, client.rates, weight_in_karats, number_of_diamonds, raw_damage_weight
        )

        market = self.db.get_latest_market_rate()
        market_rate = market.rate_for(resolved) if market is not None else Decimal("0")
        return resolved, total_value, market_rate

    def add_entry(
        self,
        client_id: int,
        kapan_id: str,
        number_of_diamonds: Any,
        weight_in_karats: Any,
        entry_date: Optional[date] = None,
        raw_damage_weight: Any = None,
        category: Any = None,
    ) -> int:
        """Enter a diamond parcel into inventory.

        The category is derived from the average stone weight unless given,
        and the value is computed from the client's rates.

        Args:
            client_id: Owning client ID
            kapan_id: Kapan (lot) identifier
            number_of_diamonds: Pieces in the parcel
            weight_in_karats: Total parcel weight
            entry_date: Entry date (defaults to today)
            raw_damage_weight: Optional weight deducted before valuing 4P Plus parcels
            category: Optional category override

        Returns:
            Diamond entry ID

        Raises:
            NotFoundError: If client not found
            ValidationError: If any quantity is invalid
        """
        kapan_id = (kapan_id or "").strip()
        pieces = to_int(number_of_diamonds)
        weight = to_decimal(weight_in_karats)
        damage = to_decimal(raw_damage_weight) if raw_damage_weight not in (None, "") else None
        self._validate(kapan_id, pieces, weight, damage)

        resolved, total_value, market_rate = self._price(client_id, pieces, weight, damage, category)

        diamond_id = self.db.create_diamond(
            client_id=client_id,
            kapan_id=kapan_id,
            entry_date=entry_date or date.today(),
            number_of_diamonds=pieces,
            weight_in_karats=weight,
            category=resolved.value,
            total_value=total_value,
            market_rate=market_rate,
            raw_damage_weight=damage,
        )
        logger.info(
            "Added diamond entry %s: kapan %s, %s pcs, %s ct, %s, value %s",
            diamond_id,
            kapan_id,
            pieces,
            weight,
            resolved.value,
            total_value,
        )
        return diamond_id

    def get_entry(self, diamond_id: int) -> Optional[DiamondEntry]:
        """Get diamond entry by ID."""
        return self.db.get_diamond(diamond_id)

    def require_entry(self, diamond_id: int) -> DiamondEntry:
        """Get diamond entry by ID or raise NotFoundError."""
        entry = self.db.get_diamond(diamond_id)
        if entry is None:
            raise NotFoundError(diamond_not_found(diamond_id))
        return entry

    def list_entries(
        self,
        client_id: Optional[int] = None,
        kapan_id: Optional[str] = None,
        uninvoiced: bool = False,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[DiamondEntry]:
        """List diamond entries, newest first."""
        return self.db.list_diamonds(
            client_id=client_id,
            kapan_id=kapan_id,
            uninvoiced=uninvoiced,
            start_date=start_date,
            end_date=end_date,
        )

    def update_entry(
        self,
        diamond_id: int,
        kapan_id: Optional[str] = None,
        number_of_diamonds: Any = None,
        weight_in_karats: Any = None,
        entry_date: Optional[date] = None,
        raw_damage_weight: Any = None,
        category: Any = None,
    ) -> None:
        """Update a diamond entry and revalue it at the client's current rates.

        The stored category is kept unless a new one is given.

        Raises:
            NotFoundError: If entry not found
            ValidationError: If any quantity is invalid
        """
        current = self.require_entry(diamond_id)

        kapan = (kapan_id.strip() if kapan_id is not None else current.kapan_id) or ""
        pieces = to_int(number_of_diamonds) if number_of_diamonds is not None else current.number_of_diamonds
        weight = to_decimal(weight_in_karats) if weight_in_karats is not None else current.weight_in_karats
        damage = (
            to_decimal(raw_damage_weight) if raw_damage_weight is not None else current.raw_damage_weight
        )
        self._validate(kapan, pieces, weight, damage)

        if category is None:
            category = current.category
        resolved, total_value, _ = self._price(current.client_id, pieces, weight, damage, category)

        self.db.update_diamond(
            diamond_id,
            kapan_id=kapan,
            number_of_diamonds=pieces,
            weight_in_karats=weight,
            raw_damage_weight=damage,
            entry_date=entry_date or current.entry_date,
            category=resolved.value,
            total_value=total_value,
        )
        logger.info("Updated diamond entry %s (value %s)", diamond_id, total_value)

    def delete_entry(self, diamond_id: int) -> None:
        """Delete a diamond entry.

        Raises:
            NotFoundError: If entry not found
            DependencyError: If the entry is on an invoice
        """
        self.require_entry(diamond_id)
        invoice_number = self.db.get_diamond_invoice_number(diamond_id)
        if invoice_number is not None:
            raise DependencyError(diamond_delete_blocked(diamond_id, invoice_number))
        self.db.delete_diamond(diamond_id)
        logger.info("Deleted diamond entry %s", diamond_id)
