from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.customers import create_customer, delete_customer, get_customer, list_customers, update_customer
from ..crud.penalties import list_penalties
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.customer import CustomerCreate, CustomerOut, CustomerUpdate
from ..schemas.penalty import PenaltyOut, PenaltyTotal
from ..schemas.transaction import TransactionOut
from ..services.penalties import get_customer_transactions, get_total_penalty

router = APIRouter(prefix="/api/v1/customers", tags=["customers"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[CustomerOut])
def api_list_customers(limit: int = 100, offset: int = 0, db: Session = Depends(get_db)):
    return list_customers(db, limit=limit, offset=offset)


@router.post("", response_model=CustomerOut, status_code=201)
def api_create_customer(payload: CustomerCreate, db: Session = Depends(get_db)):
    return create_customer(db, payload.model_dump())


@router.get("/{customer_id}", response_model=CustomerOut)
def api_get_customer(customer_id: int, db: Session = Depends(get_db)):
    return get_customer(db, customer_id)


@router.patch("/{customer_id}", response_model=CustomerOut)
def api_update_customer(customer_id: int, payload: CustomerUpdate, db: Session = Depends(get_db)):
    return update_customer(db, customer_id, payload.model_dump(exclude_unset=True))


@router.delete("/{customer_id}")
def api_delete_customer(customer_id: int, db: Session = Depends(get_db)):
    delete_customer(db, customer_id)
    return {"status": "deleted"}


@router.get("/{customer_id}/transactions", response_model=list[TransactionOut])
def api_customer_transactions(customer_id: int, newest_first: bool | None = None, db: Session = Depends(get_db)):
    return list(get_customer_transactions(db, customer_id, newest_first=newest_first))


@router.get("/{customer_id}/penalties", response_model=list[PenaltyOut])
def api_customer_penalties(customer_id: int, db: Session = Depends(get_db)):
    get_customer(db, customer_id)
    return list_penalties(db, customer_id=customer_id)


@router.get("/{customer_id}/penalty-total", response_model=PenaltyTotal)
def api_customer_penalty_total(customer_id: int, db: Session = Depends(get_db)):
    return PenaltyTotal(customer_id=customer_id, total=get_total_penalty(db, customer_id))
