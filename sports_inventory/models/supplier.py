from __future__ import annotations

from sqlalchemy import Column, Integer, String, Text

from ..db.session import Base


class Supplier(Base):
    """A vendor we buy from. Not linked to stock yet."""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    contact = Column(String(50), nullable=True)
    email = Column(String(100), nullable=True, unique=True)
    address = Column(Text, nullable=True)


__all__ = ["Supplier"]
