import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATA_DIR", str(ROOT / "data"))

from sports_inventory.core.errors import ConstraintViolation, NotFound, ReferentialIntegrityViolation
from sports_inventory.crud.customers import create_customer
from sports_inventory.crud.equipment import add_equipment
from sports_inventory.crud.penalties import get_penalty, issue_penalty, list_penalties
from sports_inventory.db.session import Base
from sports_inventory.models.transaction import Transaction
from sports_inventory.services.penalties import TransactionHistory, get_customer_transactions, get_total_penalty
from sports_inventory.services.transactions import process_transaction

from sports_inventory import models  # noqa: F401


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def john(db_session):
    return create_customer(db_session, {"name": "John Doe", "email": "john@example.com"})


def test_total_penalty_sums_amounts(db_session, john):
    issue_penalty(db_session, customer_id=john.id, amount="100.00", reason="Late return")
    issue_penalty(db_session, customer_id=john.id, amount=Decimal("50.25"), reason="Damaged equipment")

    assert get_total_penalty(db_session, john.id) == Decimal("150.25")


def test_total_penalty_is_zero_without_penalties(db_session, john):
    total = get_total_penalty(db_session, john.id)
    assert total == Decimal("0")
    assert str(total) == "0.00"


def test_total_penalty_ignores_other_customers_and_transactions(db_session, john):
    jane = create_customer(db_session, {"name": "Jane Smith", "email": "jane@example.com"})
    bat = add_equipment(db_session, name="Cricket Bat", category_id=None, quantity=10, price="1200.50")
    issue_penalty(db_session, customer_id=john.id, amount="100.00", reason="Late return")
    issue_penalty(db_session, customer_id=jane.id, amount="75.00", reason="Lost item")

    before = get_total_penalty(db_session, john.id)
    process_transaction(db_session, john.id, bat.id, 2)

    assert before == Decimal("100.00")
    assert get_total_penalty(db_session, john.id) == before


def test_total_penalty_for_unknown_customer(db_session):
    with pytest.raises(NotFound):
        get_total_penalty(db_session, 404)


def test_issue_penalty_validation(db_session, john):
    with pytest.raises(ConstraintViolation):
        issue_penalty(db_session, customer_id=john.id, amount="0", reason="Nothing")
    with pytest.raises(ConstraintViolation):
        issue_penalty(db_session, customer_id=john.id, amount="-5", reason="Refund")
    with pytest.raises(ReferentialIntegrityViolation):
        issue_penalty(db_session, customer_id=999, amount="5", reason="Ghost")
    assert list_penalties(db_session) == []


def test_issue_penalty_stamps_issue_time(db_session, john):
    penalty = issue_penalty(db_session, customer_id=john.id, amount="200", reason="  Late payment ")

    fetched = get_penalty(db_session, penalty.id)
    assert fetched.amount == Decimal("200.00")
    assert fetched.reason == "Late payment"
    assert fetched.issued_at.endswith("Z")
    assert [p.id for p in list_penalties(db_session, customer_id=john.id)] == [penalty.id]


def test_customer_transactions_is_lazy_and_restartable(db_session, john):
    bat = add_equipment(db_session, name="Cricket Bat", category_id=None, quantity=10, price="1200.50")
    history = get_customer_transactions(db_session, john.id)
    assert isinstance(history, TransactionHistory)

    # Rows written after the view was created still show up when iterated.
    process_transaction(db_session, john.id, bat.id, 2)
    first_pass = [t.id for t in history]
    process_transaction(db_session, john.id, bat.id, 1)
    second_pass = [t.id for t in history]

    assert len(first_pass) == 1
    assert second_pass[:1] == first_pass
    assert len(second_pass) == 2


def test_customer_transactions_only_returns_that_customer(db_session, john):
    jane = create_customer(db_session, {"name": "Jane Smith", "email": "jane@example.com"})
    ball = add_equipment(db_session, name="Football", category_id=None, quantity=15, price="800.75")
    mine = process_transaction(db_session, john.id, ball.id, 1)
    process_transaction(db_session, jane.id, ball.id, 1)

    assert [t.id for t in get_customer_transactions(db_session, john.id)] == [mine.id]


def test_customer_transactions_ordering(db_session, john):
    ball = add_equipment(db_session, name="Football", category_id=None, quantity=15, price="800.75")
    for stamp in ("2024-03-01T10:00:00Z", "2024-01-01T10:00:00Z", "2024-02-01T10:00:00Z"):
        db_session.add(
            Transaction(
                customer_id=john.id,
                equipment_id=ball.id,
                quantity=1,
                total_price=Decimal("800.75"),
                created_at=stamp,
            )
        )
    db_session.commit()

    stored = [t.created_at for t in get_customer_transactions(db_session, john.id)]
    newest = [t.created_at for t in get_customer_transactions(db_session, john.id, newest_first=True)]
    oldest = [t.created_at for t in get_customer_transactions(db_session, john.id, newest_first=False)]

    assert stored == ["2024-03-01T10:00:00Z", "2024-01-01T10:00:00Z", "2024-02-01T10:00:00Z"]
    assert newest == ["2024-03-01T10:00:00Z", "2024-02-01T10:00:00Z", "2024-01-01T10:00:00Z"]
    assert oldest == list(reversed(newest))


def test_customer_transactions_for_unknown_customer(db_session):
    with pytest.raises(NotFound):
        get_customer_transactions(db_session, 12345)
