from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.penalties import get_penalty, issue_penalty, list_penalties
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.penalty import PenaltyCreate, PenaltyOut

router = APIRouter(prefix="/api/v1/penalties", tags=["penalties"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[PenaltyOut])
def api_list_penalties(
    customer_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    return list_penalties(db, customer_id=customer_id, limit=limit, offset=offset)


@router.post("", response_model=PenaltyOut, status_code=201)
def api_issue_penalty(payload: PenaltyCreate, db: Session = Depends(get_db)):
    return issue_penalty(db, customer_id=payload.customer_id, amount=payload.amount, reason=payload.reason)


@router.get("/{penalty_id}", response_model=PenaltyOut)
def api_get_penalty(penalty_id: int, db: Session = Depends(get_db)):
    return get_penalty(db, penalty_id)
