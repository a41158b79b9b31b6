from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text

from ..db.session import Base


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True, unique=True)
    phone = Column(String(15), nullable=True)
    address = Column(Text, nullable=True)


__all__ = ["Customer"]
