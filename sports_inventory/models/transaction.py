"""Sales transactions. Rows are historical facts and never change once written."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from ..core.timeutil import utcnow_iso
from ..db.session import Base


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_transaction_quantity_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True)
    equipment_id = Column(Integer, ForeignKey("equipment.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    # price × quantity frozen at the moment of sale
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(Text, nullable=False, default=utcnow_iso)

    customer = relationship("Customer")
    equipment = relationship("Equipment")


__all__ = ["Transaction"]
