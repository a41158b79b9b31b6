from __future__ import annotations

import logging

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..core.errors import ConstraintViolation
from ..core.money import to_decimal
from ..db.session import atomic
from ..models.customer import Customer
from ..models.penalty import Penalty
from ._fields import clean_text, get_or_404, require_reference

logger = logging.getLogger(__name__)


def get_penalty(db: Session, penalty_id: int) -> Penalty:
    return get_or_404(db, Penalty, penalty_id, entity="penalty")


def list_penalties(
    db: Session,
    *,
    customer_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Penalty]:
    stmt = select(Penalty)
    if customer_id is not None:
        stmt = stmt.where(Penalty.customer_id == customer_id)
    stmt = stmt.order_by(desc(Penalty.issued_at), desc(Penalty.id)).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def issue_penalty(db: Session, *, customer_id: int, amount: object, reason: str | None = None) -> Penalty:
    """Charge a customer. Penalties are immutable once issued."""

    clean_amount = to_decimal(amount, field="amount")
    if clean_amount <= 0:
        raise ConstraintViolation("amount must be greater than zero")
    clean_reason = clean_text(reason, field="reason")
    with atomic(db):
        require_reference(db, Customer, customer_id, entity="customer")
        penalty = Penalty(customer_id=customer_id, amount=clean_amount, reason=clean_reason)
        db.add(penalty)
    db.refresh(penalty)
    logger.info(
        "penalty.issued",
        extra={"extra_data": {"penalty_id": penalty.id, "customer_id": customer_id, "amount": str(clean_amount)}},
    )
    return penalty
