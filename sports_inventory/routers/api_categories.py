from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.categories import create_category, delete_category, get_category, list_categories, update_category
from ..db.session import get_db
from ..deps.auth import require_api_key
from ..schemas.category import CategoryCreate, CategoryOut, CategoryUpdate

router = APIRouter(prefix="/api/v1/categories", tags=["categories"], dependencies=[Depends(require_api_key)])


@router.get("", response_model=list[CategoryOut])
def api_list_categories(limit: int = 100, offset: int = 0, db: Session = Depends(get_db)):
    return list_categories(db, limit=limit, offset=offset)


@router.post("", response_model=CategoryOut, status_code=201)
def api_create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return create_category(db, payload.model_dump())


@router.get("/{category_id}", response_model=CategoryOut)
def api_get_category(category_id: int, db: Session = Depends(get_db)):
    return get_category(db, category_id)


@router.patch("/{category_id}", response_model=CategoryOut)
def api_update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    return update_category(db, category_id, payload.model_dump(exclude_unset=True))


@router.delete("/{category_id}")
def api_delete_category(category_id: int, db: Session = Depends(get_db)):
    delete_category(db, category_id)
    return {"status": "deleted"}
