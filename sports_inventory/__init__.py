"""Sports equipment inventory: customers, stock, sales and penalties.

The FastAPI application lives in :mod:`sports_inventory.main`; the business
rules live in :mod:`sports_inventory.services` and the CRUD layer in
:mod:`sports_inventory.crud`.
"""

__version__ = "1.0.0"
