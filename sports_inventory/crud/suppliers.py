from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.session import atomic
from ..models.supplier import Supplier
from ._fields import clean_email, clean_text, ensure_email_free, get_or_404, require_text


def _supplier_fields(payload: dict, *, partial: bool) -> dict:
    data: dict = {}
    if not partial or "name" in payload:
        data["name"] = require_text(payload.get("name"), field="name", max_length=100)
    if not partial or "contact" in payload:
        data["contact"] = clean_text(payload.get("contact"), field="contact", max_length=50)
    if not partial or "email" in payload:
        data["email"] = clean_email(payload.get("email"))
    if not partial or "address" in payload:
        data["address"] = clean_text(payload.get("address"), field="address")
    return data


def list_suppliers(db: Session, limit: int = 100, offset: int = 0) -> list[Supplier]:
    stmt = select(Supplier).order_by(Supplier.id).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_supplier(db: Session, supplier_id: int) -> Supplier:
    return get_or_404(db, Supplier, supplier_id, entity="supplier")


def create_supplier(db: Session, payload: dict) -> Supplier:
    data = _supplier_fields(payload, partial=False)
    with atomic(db):
        ensure_email_free(db, Supplier, data["email"])
        supplier = Supplier(**data)
        db.add(supplier)
    db.refresh(supplier)
    return supplier


def update_supplier(db: Session, supplier_id: int, payload: dict) -> Supplier:
    data = _supplier_fields(payload, partial=True)
    with atomic(db):
        supplier = get_supplier(db, supplier_id)
        if "email" in data:
            ensure_email_free(db, Supplier, data["email"], exclude_id=supplier.id)
        for key, value in data.items():
            setattr(supplier, key, value)
    db.refresh(supplier)
    return supplier


def delete_supplier(db: Session, supplier_id: int) -> None:
    with atomic(db):
        db.delete(get_supplier(db, supplier_id))
