"""Equipment rows: the stock that sales draw down."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from ..db.session import Base


class Equipment(Base):
    """A stocked item. ``quantity`` must never drop below zero."""

    __tablename__ = "equipment"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_equipment_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_equipment_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=True, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False)

    category = relationship("Category", back_populates="equipment")

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category else None


__all__ = ["Equipment"]
