"""Domain layer for diamondbook application.

Services are imported lazily: they depend on the database layer, which in
turn imports domain entities.
"""

_SERVICES = {
    "ClientService": "diamondbook.domain.client",
    "DiamondService": "diamondbook.domain.diamond",
    "InvoiceService": "diamondbook.domain.invoice",
    "CompanyService": "diamondbook.domain.company",
    "MarketRateService": "diamondbook.domain.market_rate",
    "DashboardService": "diamondbook.domain.dashboard",
    "summarize": "diamondbook.domain.invoice_summary",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
