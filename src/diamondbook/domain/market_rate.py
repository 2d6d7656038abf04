"""Market rate domain service."""

import logging
from datetime import date
from typing import Any, Optional

from diamondbook.database.base import Database
from diamondbook.domain.entities import MarketRate, to_decimal
from diamondbook.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class MarketRateService:
    """Service for recording daily market rates."""

    def __init__(self, db: Database):
        self.db = db

    def record_rate(self, plus_rate: Any, minus_rate: Any, rate_date: Optional[date] = None) -> int:
        """Record the market rate for both categories.

        Args:
            plus_rate: Market rate per carat for 4P Plus
            minus_rate: Market rate per piece for 4P Minus
            rate_date: Date the rate applies to (defaults to today)

        Returns:
            Market rate ID

        Raises:
            ValidationError: If a rate is not positive
        """
        plus = to_decimal(plus_rate)
        minus = to_decimal(minus_rate)
        if plus <= 0 or minus <= 0:
            raise ValidationError("Market rates must be greater than zero")

        rate_id = self.db.create_market_rate(
            rate_date=rate_date or date.today(), plus_rate=plus, minus_rate=minus
        )
        logger.info("Recorded market rate %s (plus=%s, minus=%s)", rate_id, plus, minus)
        return rate_id

    def current_rate(self) -> Optional[MarketRate]:
        """Latest market rate, or None if none has been recorded."""
        return self.db.get_latest_market_rate()

    def list_rates(self) -> list[MarketRate]:
        return self.db.list_market_rates()
