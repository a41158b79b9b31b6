from __future__ import annotations

from . import api_categories, api_customers, api_equipment, api_penalties, api_suppliers, api_transactions

ROUTERS = [
    api_customers.router,
    api_categories.router,
    api_equipment.router,
    api_suppliers.router,
    api_transactions.router,
    api_penalties.router,
]

__all__ = ["ROUTERS"]
