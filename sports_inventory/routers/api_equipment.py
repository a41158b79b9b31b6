from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.equipment import (
    add_equipment,
    adjust_stock,
    delete_equipment,
    get_equipment,
    list_equipment,
    update_equipment,
)
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.equipment import EquipmentCreate, EquipmentOut, EquipmentUpdate, StockAdjustment

router = APIRouter(prefix="/api/v1/equipment", tags=["equipment"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[EquipmentOut])
def api_list_equipment(
    category_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    return list_equipment(db, category_id=category_id, limit=limit, offset=offset)


@router.post("", response_model=EquipmentOut, status_code=201)
def api_add_equipment(payload: EquipmentCreate, db: Session = Depends(get_db)):
    return add_equipment(
        db,
        name=payload.name,
        category_id=payload.category_id,
        quantity=payload.quantity,
        price=payload.price,
    )


@router.get("/{equipment_id}", response_model=EquipmentOut)
def api_get_equipment(equipment_id: int, db: Session = Depends(get_db)):
    return get_equipment(db, equipment_id)


@router.patch("/{equipment_id}", response_model=EquipmentOut)
def api_update_equipment(equipment_id: int, payload: EquipmentUpdate, db: Session = Depends(get_db)):
    return update_equipment(db, equipment_id, payload.model_dump(exclude_unset=True))


@router.post("/{equipment_id}/adjust", response_model=EquipmentOut)
def api_adjust_stock(equipment_id: int, payload: StockAdjustment, db: Session = Depends(get_db)):
    return adjust_stock(db, equipment_id, payload.delta, note=payload.note)


@router.delete("/{equipment_id}")
def api_delete_equipment(equipment_id: int, db: Session = Depends(get_db)):
    delete_equipment(db, equipment_id)
    return {"status": "deleted"}
