from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class TransactionCreate(BaseModel):
    customer_id: int
    equipment_id: int
    quantity: int


class TransactionOut(BaseModel):
    id: int
    customer_id: int
    equipment_id: int
    quantity: int
    total_price: Decimal
    created_at: str

    class Config:
        from_attributes = True


class TransactionReceipt(BaseModel):
    message: str
    transaction: TransactionOut
