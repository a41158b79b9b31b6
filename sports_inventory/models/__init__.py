"""SQLAlchemy models for the six inventory tables.

Importing this package registers every table on ``Base.metadata``.
"""

from __future__ import annotations

from .category import Category
from .customer import Customer
from .equipment import Equipment
from .penalty import Penalty
from .supplier import Supplier
from .transaction import Transaction

__all__ = ["Category", "Customer", "Equipment", "Penalty", "Supplier", "Transaction"]
