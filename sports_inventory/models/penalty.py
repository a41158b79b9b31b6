from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from ..core.timeutil import utcnow_iso
from ..db.session import Base


class Penalty(Base):
    """A charge levied on a customer (late return, damage, ...). Immutable."""

    __tablename__ = "penalties"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_penalty_amount_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    reason = Column(Text, nullable=True)
    issued_at = Column(Text, nullable=False, default=utcnow_iso)

    customer = relationship("Customer")


__all__ = ["Penalty"]
