"""Input normalisers and lookup helpers shared by the CRUD modules."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import ConstraintViolation, NotFound, ReferentialIntegrityViolation

ModelT = TypeVar("ModelT")


def clean_text(value: object, *, field: str, max_length: int | None = None) -> str | None:
    """Strip a free-text value; blanks collapse to ``None``."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise ConstraintViolation(f"{field} must be a string")
    cleaned = value.strip()
    if not cleaned:
        return None
    if max_length is not None and len(cleaned) > max_length:
        raise ConstraintViolation(f"{field} must be at most {max_length} characters")
    return cleaned


def require_text(value: object, *, field: str, max_length: int | None = None) -> str:
    cleaned = clean_text(value, field=field, max_length=max_length)
    if cleaned is None:
        raise ConstraintViolation(f"{field} is required")
    return cleaned


def clean_email(value: object) -> str | None:
    email = clean_text(value, field="email", max_length=100)
    if email is None:
        return None
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise ConstraintViolation("email must be a valid address")
    return email.lower()


def clean_quantity(value: object, *, field: str = "quantity") -> int:
    """Stock counts are whole, non-negative numbers."""

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConstraintViolation(f"{field} must be an integer")
    if value < 0:
        raise ConstraintViolation(f"{field} cannot be negative")
    return value


def get_or_404(db: Session, model: type[ModelT], row_id: int, *, entity: str) -> ModelT:
    row = db.get(model, row_id)
    if row is None:
        raise NotFound(entity, row_id)
    return row


def require_reference(db: Session, model: type[ModelT], row_id: int, *, entity: str) -> ModelT:
    """Resolve a foreign key or fail with ``ReferentialIntegrityViolation``."""

    row = db.get(model, row_id)
    if row is None:
        raise ReferentialIntegrityViolation(
            f"{entity} {row_id} does not exist",
            details={"entity": entity, "id": row_id},
        )
    return row


def ensure_email_free(db: Session, model, email: str | None, *, exclude_id: int | None = None) -> None:
    if email is None:
        return
    stmt = select(model.id).where(model.email == email)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    if db.execute(stmt).scalars().first() is not None:
        raise ConstraintViolation("email is already registered", details={"email": email})


def ensure_unreferenced(db: Session, column, row_id: int, *, entity: str, referenced_by: str) -> None:
    """RESTRICT semantics: refuse to delete a row other rows still point at."""

    if db.execute(select(column).where(column == row_id).limit(1)).first() is not None:
        raise ReferentialIntegrityViolation(
            f"{entity} {row_id} is referenced by {referenced_by}",
            details={"entity": entity, "id": row_id, "referenced_by": referenced_by},
        )
