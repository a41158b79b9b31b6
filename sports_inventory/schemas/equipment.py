from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class EquipmentBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    category_id: Optional[int] = None
    quantity: int = Field(ge=0)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class EquipmentCreate(EquipmentBase):
    pass


class EquipmentUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    category_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class StockAdjustment(BaseModel):
    delta: int
    note: Optional[str] = None


class EquipmentOut(BaseModel):
    id: int
    name: str
    category_id: Optional[int]
    category_name: Optional[str] = None
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True
