"""Demo dataset: five rows per table.

Loaded on startup when ``SEED_SAMPLE_DATA`` is set, or on demand through
``sports-inventory seed``. The historical transactions are inserted as-is
(they predate the stock figures below) instead of going through the
transaction processor.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Category, Customer, Equipment, Penalty, Supplier, Transaction
from .session import atomic

logger = logging.getLogger(__name__)

CUSTOMERS = [
    ("John Doe", "john@example.com", "1234567890", "123 Street, City"),
    ("Jane Smith", "jane@example.com", "9876543210", "456 Avenue, City"),
    ("Alice Johnson", "alice@example.com", "5551234567", "789 Road, Town"),
    ("Bob Brown", "bob@example.com", "4449876543", "321 Lane, Village"),
    ("Charlie Davis", "charlie@example.com", "3334567890", "654 Boulevard, County"),
]

CATEGORIES = ["Cricket", "Football", "Tennis", "Basketball", "Badminton"]

# (name, category index, quantity, price)
EQUIPMENT = [
    ("Cricket Bat", 0, 10, Decimal("1200.50")),
    ("Football", 1, 15, Decimal("800.75")),
    ("Tennis Racket", 2, 8, Decimal("1500.00")),
    ("Basketball", 3, 20, Decimal("600.00")),
    ("Badminton Racket", 4, 12, Decimal("900.00")),
]

SUPPLIERS = [
    ("ABC Sports", "123-456", "abc@sports.com", "789 Street, City"),
    ("XYZ Equipment", "987-654", "xyz@equip.com", "101 Avenue, City"),
    ("Sports World", "555-123", "sports@world.com", "202 Road, Town"),
    ("Global Gear", "444-987", "global@gear.com", "303 Lane, Village"),
    ("Elite Sports", "333-456", "elite@sports.com", "404 Boulevard, County"),
]

# (customer index, equipment index, quantity, total price)
TRANSACTIONS = [
    (0, 0, 2, Decimal("2401.00")),
    (1, 1, 1, Decimal("800.75")),
    (2, 2, 1, Decimal("1500.00")),
    (3, 3, 3, Decimal("1800.00")),
    (4, 4, 2, Decimal("1800.00")),
]

# (customer index, amount, reason)
PENALTIES = [
    (0, Decimal("100.00"), "Late return"),
    (1, Decimal("50.00"), "Damaged equipment"),
    (2, Decimal("75.00"), "Lost item"),
    (3, Decimal("200.00"), "Late payment"),
    (4, Decimal("150.00"), "Unauthorized use"),
]


def seed_sample_data(db: Session) -> bool:
    """Insert the demo rows into an empty database.

    Returns ``False`` without writing anything when customers already exist.
    """

    if db.execute(select(func.count(Customer.id))).scalar_one():
        return False

    with atomic(db):
        customers = [Customer(name=n, email=e, phone=p, address=a) for n, e, p, a in CUSTOMERS]
        categories = [Category(name=name) for name in CATEGORIES]
        db.add_all(customers + categories)
        db.flush()

        equipment = [
            Equipment(name=name, category_id=categories[idx].id, quantity=qty, price=price)
            for name, idx, qty, price in EQUIPMENT
        ]
        db.add_all(equipment)
        db.add_all(Supplier(name=n, contact=c, email=e, address=a) for n, c, e, a in SUPPLIERS)
        db.flush()

        db.add_all(
            Transaction(
                customer_id=customers[c_idx].id,
                equipment_id=equipment[e_idx].id,
                quantity=qty,
                total_price=total,
            )
            for c_idx, e_idx, qty, total in TRANSACTIONS
        )
        db.add_all(
            Penalty(customer_id=customers[c_idx].id, amount=amount, reason=reason)
            for c_idx, amount, reason in PENALTIES
        )

    logger.info("seed.loaded", extra={"extra_data": {"customers": len(CUSTOMERS)}})
    return True
