from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.transactions import get_transaction, list_transactions
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.transaction import TransactionCreate, TransactionOut, TransactionReceipt
from ..services.transactions import SUCCESS_MESSAGE, process_transaction

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[TransactionOut])
def api_list_transactions(
    customer_id: int | None = None,
    equipment_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    return list_transactions(db, customer_id=customer_id, equipment_id=equipment_id, limit=limit, offset=offset)


@router.post("", response_model=TransactionReceipt, status_code=201)
def api_process_transaction(payload: TransactionCreate, db: Session = Depends(get_db)):
    transaction = process_transaction(db, payload.customer_id, payload.equipment_id, payload.quantity)
    return TransactionReceipt(
        message=SUCCESS_MESSAGE,
        transaction=TransactionOut.model_validate(transaction, from_attributes=True),
    )


@router.get("/{transaction_id}", response_model=TransactionOut)
def api_get_transaction(transaction_id: int, db: Session = Depends(get_db)):
    return get_transaction(db, transaction_id)
