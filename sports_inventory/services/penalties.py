"""Read-only customer views: penalty totals and purchase history."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

from sqlalchemy import asc, desc, func, select
from sqlalchemy.orm import Session

from ..core.money import quantize_currency
from ..crud.customers import get_customer
from ..models.penalty import Penalty
from ..models.transaction import Transaction


def get_total_penalty(db: Session, customer_id: int) -> Decimal:
    """Sum of every penalty issued to the customer; ``0.00`` when there are none."""

    get_customer(db, customer_id)
    stmt = select(func.coalesce(func.sum(Penalty.amount), 0)).where(Penalty.customer_id == customer_id)
    total = db.execute(stmt).scalar_one()
    return quantize_currency(Decimal(str(total)))


class TransactionHistory:
    """Lazy, re-iterable view of one customer's transactions.

    Nothing is queried until iteration starts, and each new iteration runs the
    query again, so the view always reflects committed rows.
    """

    def __init__(self, db: Session, customer_id: int, *, newest_first: bool | None = None) -> None:
        self._db = db
        self.customer_id = customer_id
        self.newest_first = newest_first

    def statement(self):
        stmt = select(Transaction).where(Transaction.customer_id == self.customer_id)
        if self.newest_first is None:
            return stmt.order_by(Transaction.id)
        direction = desc if self.newest_first else asc
        return stmt.order_by(direction(Transaction.created_at), direction(Transaction.id))

    def __iter__(self) -> Iterator[Transaction]:
        yield from self._db.execute(self.statement()).scalars()


def get_customer_transactions(
    db: Session, customer_id: int, *, newest_first: bool | None = None
) -> TransactionHistory:
    get_customer(db, customer_id)
    return TransactionHistory(db, customer_id, newest_first=newest_first)
