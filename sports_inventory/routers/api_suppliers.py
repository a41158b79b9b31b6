from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.suppliers import create_supplier, delete_supplier, get_supplier, list_suppliers, update_supplier
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate

router = APIRouter(prefix="/api/v1/suppliers", tags=["suppliers"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[SupplierOut])
def api_list_suppliers(limit: int = 100, offset: int = 0, db: Session = Depends(get_db)):
    return list_suppliers(db, limit=limit, offset=offset)


@router.post("", response_model=SupplierOut, status_code=201)
def api_create_supplier(payload: SupplierCreate, db: Session = Depends(get_db)):
    return create_supplier(db, payload.model_dump())


@router.get("/{supplier_id}", response_model=SupplierOut)
def api_get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return get_supplier(db, supplier_id)


@router.patch("/{supplier_id}", response_model=SupplierOut)
def api_update_supplier(supplier_id: int, payload: SupplierUpdate, db: Session = Depends(get_db)):
    return update_supplier(db, supplier_id, payload.model_dump(exclude_unset=True))


@router.delete("/{supplier_id}")
def api_delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    delete_supplier(db, supplier_id)
    return {"status": "deleted"}
