from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class PenaltyCreate(BaseModel):
    customer_id: int
    amount: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    reason: Optional[str] = None


class PenaltyOut(BaseModel):
    id: int
    customer_id: int
    amount: Decimal
    reason: Optional[str]
    issued_at: str

    class Config:
        from_attributes = True


class PenaltyTotal(BaseModel):
    customer_id: int
    total: Decimal
