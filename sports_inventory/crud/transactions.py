"""Read access to recorded sales.

Transactions are written only by ``services.transactions.process_transaction``
and are never updated or deleted.
"""

from __future__ import annotations

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..models.transaction import Transaction
from ._fields import get_or_404


def get_transaction(db: Session, transaction_id: int) -> Transaction:
    return get_or_404(db, Transaction, transaction_id, entity="transaction")


def list_transactions(
    db: Session,
    *,
    customer_id: int | None = None,
    equipment_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Transaction]:
    """Most recent sales first, optionally filtered by customer or equipment."""

    stmt = select(Transaction)
    if customer_id is not None:
        stmt = stmt.where(Transaction.customer_id == customer_id)
    if equipment_id is not None:
        stmt = stmt.where(Transaction.equipment_id == equipment_id)
    stmt = stmt.order_by(desc(Transaction.created_at), desc(Transaction.id)).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()
