"""SQLAlchemy engine, session factory and the atomic transaction scope."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ..core.config import settings
from ..core.errors import ConstraintViolation


def sqlite_connect_args(url: str) -> dict[str, object]:
    # ``check_same_thread=False`` lets FastAPI worker threads share a pooled
    # connection; ``timeout`` makes a second writer wait for the first commit.
    if not url.startswith("sqlite"):
        return {}
    return {"check_same_thread": False, "timeout": settings.SQLITE_BUSY_TIMEOUT}


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""

    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_URL = settings.database_url
engine = create_engine(DATABASE_URL, connect_args=sqlite_connect_args(DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """FastAPI dependency that yields a session and guarantees cleanup."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run a block as one all-or-nothing unit of work.

    Commits when the block exits cleanly. Any exception rolls the session back
    before it propagates; ``IntegrityError`` raised by the database is surfaced
    as ``ConstraintViolation``.
    """

    try:
        yield db
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConstraintViolation(str(exc.orig)) from exc
    except BaseException:
        db.rollback()
        raise


def init_db(bind: Engine | None = None) -> None:
    # Importing the models registers their tables on ``Base.metadata``.
    from .. import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
