"""Dashboard domain service."""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from diamondbook.database.base import Database
from diamondbook.domain.entities import (
    ClientValue,
    DashboardStats,
    DiamondCategory,
    DiamondEntry,
    Invoice,
)
from diamondbook.domain.invoice import is_overdue


class DashboardService:
    """Service for building the business overview."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_stats(
        self, today: Optional[date] = None, recent_days: int = 7, top_n: int = 5
    ) -> DashboardStats:
        """Build dashboard figures from all entries and invoices.

        Args:
            today: Reference date (defaults to today)
            recent_days: Window, in days up to and including today, counted as recent
            top_n: Number of top clients to include

        Returns:
            DashboardStats
        """
        today = today or date.today()
        entries = self.db.list_diamonds()
        invoices = self.db.list_invoices()

        recent_since = today - timedelta(days=recent_days)
        recent_value = sum(
            (e.total_value for e in entries if e.entry_date is not None and e.entry_date >= recent_since),
            Decimal("0"),
        )

        category_pieces = {category: 0 for category in DiamondCategory}
        for entry in entries:
            category_pieces[entry.category] += entry.number_of_diamonds

        pending = [inv for inv in invoices if not inv.is_paid]
        receivables = sum((inv.total_amount or Decimal("0") for inv in pending), Decimal("0"))

        return DashboardStats(
            total_pieces=sum(e.number_of_diamonds for e in entries),
            total_weight=sum((e.weight_in_karats for e in entries), Decimal("0")),
            total_value=sum((e.total_value for e in entries), Decimal("0")),
            recent_value=recent_value,
            category_pieces=category_pieces,
            top_clients=tuple(self.top_clients(entries, top_n)),
            receivables=receivables,
            overdue_count=self.count_overdue(invoices, today),
            invoice_count=len(invoices),
        )

    def top_clients(self, entries: Sequence[DiamondEntry], limit: int = 5) -> list[ClientValue]:
        """Clients ranked by total entered value, highest first."""
        totals: dict[Optional[int], dict] = defaultdict(lambda: {"pieces": 0, "value": Decimal("0")})
        for entry in entries:
            totals[entry.client_id]["pieces"] += entry.number_of_diamonds
            totals[entry.client_id]["value"] += entry.total_value

        names = {client.id: client.name for client in self.db.list_clients()}
        ranked = [
            ClientValue(
                client_id=client_id,
                client_name=names.get(client_id, "Unknown Client"),
                pieces=data["pieces"],
                value=data["value"],
            )
            for client_id, data in totals.items()
        ]
        ranked.sort(key=lambda item: (-item.value, item.client_name))
        return ranked[:limit]

    def count_overdue(self, invoices: Sequence[Invoice], today: Optional[date] = None) -> int:
        return sum(1 for inv in invoices if is_overdue(inv, today))
