"""Equipment CRUD plus the administrative stock adjustment."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..core.errors import ConstraintViolation, InsufficientStock, InvalidArgument
from ..core.money import to_decimal
from ..db.session import atomic
from ..models.category import Category
from ..models.equipment import Equipment
from ..models.transaction import Transaction
from ..services.stock_guard import validate_stock
from ._fields import (
    clean_quantity,
    ensure_unreferenced,
    get_or_404,
    require_reference,
    require_text,
)

logger = logging.getLogger(__name__)


def _clean_price(value: object):
    price = to_decimal(value, field="price")
    if price < 0:
        raise ConstraintViolation("price cannot be negative")
    return price


def list_equipment(
    db: Session,
    *,
    category_id: int | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Equipment]:
    stmt = select(Equipment)
    if category_id is not None:
        stmt = stmt.where(Equipment.category_id == category_id)
    stmt = stmt.order_by(Equipment.id).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_equipment(db: Session, equipment_id: int) -> Equipment:
    return get_or_404(db, Equipment, equipment_id, entity="equipment")


def lock_equipment(db: Session, equipment_id: int) -> Equipment:
    """Load an equipment row with ``SELECT ... FOR UPDATE`` where supported.

    SQLite has no row locks and ignores the clause; its single writer lock is
    taken by the first UPDATE instead.
    """

    stmt = select(Equipment).where(Equipment.id == equipment_id).with_for_update()
    equipment = db.execute(stmt).scalars().first()
    if equipment is None:
        return get_equipment(db, equipment_id)
    return equipment


def add_equipment(
    db: Session,
    *,
    name: str,
    category_id: int | None,
    quantity: int,
    price: object,
) -> Equipment:
    """Create a stocked item and return it with its assigned id."""

    clean_name = require_text(name, field="name", max_length=100)
    clean_qty = clean_quantity(quantity)
    clean_price = _clean_price(price)
    with atomic(db):
        if category_id is not None:
            require_reference(db, Category, category_id, entity="category")
        equipment = Equipment(
            name=clean_name,
            category_id=category_id,
            quantity=clean_qty,
            price=clean_price,
        )
        db.add(equipment)
    db.refresh(equipment)
    return equipment


def update_equipment(db: Session, equipment_id: int, payload: dict) -> Equipment:
    """Apply a partial update; ``category_id: None`` detaches the category."""

    with atomic(db):
        equipment = lock_equipment(db, equipment_id)
        if "name" in payload:
            equipment.name = require_text(payload.get("name"), field="name", max_length=100)
        if "category_id" in payload:
            category_id = payload.get("category_id")
            if category_id is not None:
                require_reference(db, Category, category_id, entity="category")
            equipment.category_id = category_id
        if "price" in payload:
            equipment.price = _clean_price(payload.get("price"))
        if "quantity" in payload:
            equipment.quantity = clean_quantity(payload.get("quantity"))
            validate_stock(equipment)
    db.refresh(equipment)
    return equipment


def adjust_stock(db: Session, equipment_id: int, delta: int, *, note: str | None = None) -> Equipment:
    """Restock (positive ``delta``) or write off (negative) an item.

    The change is applied in the database as ``quantity = quantity + delta``
    guarded by ``quantity + delta >= 0``, so a sale committed by another
    session between our read and our write is never overwritten. A write-off
    larger than the stock on hand is vetoed by the stock guard and nothing is
    written.
    """

    if isinstance(delta, bool) or not isinstance(delta, int) or delta == 0:
        raise InvalidArgument("delta must be a non-zero integer", details={"delta": delta})
    with atomic(db):
        equipment = get_equipment(db, equipment_id)
        result = db.execute(
            update(Equipment)
            .where(Equipment.id == equipment_id, Equipment.quantity + delta >= 0)
            .values(quantity=Equipment.quantity + delta)
            .execution_options(synchronize_session=False)
        )
        db.refresh(equipment)
        if result.rowcount != 1:
            # Let the guard report the rejected quantity.
            equipment.quantity = equipment.quantity + delta
            validate_stock(equipment)
            raise InsufficientStock(equipment_id, -delta, equipment.quantity - delta)
        validate_stock(equipment)
    db.refresh(equipment)
    logger.info(
        "stock.adjusted",
        extra={
            "extra_data": {
                "equipment_id": equipment.id,
                "delta": delta,
                "quantity_before": equipment.quantity - delta,
                "quantity_after": equipment.quantity,
                "note": note,
            }
        },
    )
    return equipment


def delete_equipment(db: Session, equipment_id: int) -> None:
    with atomic(db):
        equipment = get_equipment(db, equipment_id)
        ensure_unreferenced(
            db, Transaction.equipment_id, equipment.id, entity="equipment", referenced_by="transactions"
        )
        db.delete(equipment)
