from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.session import atomic
from ..models.category import Category
from ..models.equipment import Equipment
from ._fields import ensure_unreferenced, get_or_404, require_text


def list_categories(db: Session, limit: int = 100, offset: int = 0) -> list[Category]:
    stmt = select(Category).order_by(Category.name, Category.id).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_category(db: Session, category_id: int) -> Category:
    return get_or_404(db, Category, category_id, entity="category")


def create_category(db: Session, payload: dict) -> Category:
    name = require_text(payload.get("name"), field="name", max_length=100)
    with atomic(db):
        category = Category(name=name)
        db.add(category)
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, payload: dict) -> Category:
    with atomic(db):
        category = get_category(db, category_id)
        if "name" in payload:
            category.name = require_text(payload.get("name"), field="name", max_length=100)
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    # Equipment keeps its category; empty the category first.
    with atomic(db):
        category = get_category(db, category_id)
        ensure_unreferenced(db, Equipment.category_id, category.id, entity="category", referenced_by="equipment")
        db.delete(category)
