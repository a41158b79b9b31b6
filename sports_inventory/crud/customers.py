"""Customer CRUD helpers."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.session import atomic
from ..models.customer import Customer
from ..models.penalty import Penalty
from ..models.transaction import Transaction
from ._fields import (
    clean_email,
    clean_text,
    ensure_email_free,
    ensure_unreferenced,
    get_or_404,
    require_text,
)


def _customer_fields(payload: dict, *, partial: bool) -> dict:
    data: dict = {}
    if not partial or "name" in payload:
        data["name"] = require_text(payload.get("name"), field="name", max_length=100)
    if not partial or "email" in payload:
        data["email"] = clean_email(payload.get("email"))
    if not partial or "phone" in payload:
        data["phone"] = clean_text(payload.get("phone"), field="phone", max_length=15)
    if not partial or "address" in payload:
        data["address"] = clean_text(payload.get("address"), field="address")
    return data


def list_customers(db: Session, limit: int = 100, offset: int = 0) -> list[Customer]:
    stmt = select(Customer).order_by(Customer.id).limit(limit).offset(offset)
    return db.execute(stmt).scalars().all()


def get_customer(db: Session, customer_id: int) -> Customer:
    return get_or_404(db, Customer, customer_id, entity="customer")


def create_customer(db: Session, payload: dict) -> Customer:
    """Register a customer. Emails are unique across customers."""

    data = _customer_fields(payload, partial=False)
    with atomic(db):
        ensure_email_free(db, Customer, data["email"])
        customer = Customer(**data)
        db.add(customer)
    db.refresh(customer)
    return customer


def update_customer(db: Session, customer_id: int, payload: dict) -> Customer:
    """Apply a partial update. Unknown keys are ignored."""

    data = _customer_fields(payload, partial=True)
    with atomic(db):
        customer = get_customer(db, customer_id)
        if "email" in data:
            ensure_email_free(db, Customer, data["email"], exclude_id=customer.id)
        for key, value in data.items():
            setattr(customer, key, value)
    db.refresh(customer)
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    """Delete a customer with no purchase or penalty history."""

    with atomic(db):
        customer = get_customer(db, customer_id)
        ensure_unreferenced(
            db, Transaction.customer_id, customer.id, entity="customer", referenced_by="transactions"
        )
        ensure_unreferenced(db, Penalty.customer_id, customer.id, entity="customer", referenced_by="penalties")
        db.delete(customer)
