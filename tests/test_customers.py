"""Customer, category and supplier records."""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATA_DIR", str(ROOT / "data"))

from sports_inventory.core.errors import ConstraintViolation, NotFound, ReferentialIntegrityViolation
from sports_inventory.crud.categories import create_category, delete_category, get_category, list_categories, update_category
from sports_inventory.crud.customers import create_customer, delete_customer, get_customer, list_customers, update_customer
from sports_inventory.crud.equipment import add_equipment
from sports_inventory.crud.penalties import issue_penalty
from sports_inventory.crud.suppliers import create_supplier, delete_supplier, get_supplier, list_suppliers, update_supplier
from sports_inventory.db.session import Base

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


def test_create_customer_normalizes_fields(db_session):
    customer = create_customer(
        db_session,
        {"name": "  John Doe ", "email": " John@Example.com ", "phone": "1234567890", "address": ""},
    )

    assert customer.id is not None
    assert customer.name == "John Doe"
    assert customer.email == "john@example.com"
    assert customer.address is None


def test_customer_email_must_be_unique(db_session):
    create_customer(db_session, {"name": "John Doe", "email": "john@example.com"})

    with pytest.raises(ConstraintViolation):
        create_customer(db_session, {"name": "Johnny", "email": "JOHN@example.com"})
    assert len(list_customers(db_session)) == 1


def test_customers_without_email_do_not_collide(db_session):
    create_customer(db_session, {"name": "Walk-in A"})
    create_customer(db_session, {"name": "Walk-in B", "email": ""})
    assert len(list_customers(db_session)) == 2


def test_customer_name_is_required(db_session):
    with pytest.raises(ConstraintViolation):
        create_customer(db_session, {"email": "nobody@example.com"})
    with pytest.raises(ConstraintViolation):
        create_customer(db_session, {"name": "Bad Email", "email": "not-an-email"})


def test_update_customer(db_session):
    john = create_customer(db_session, {"name": "John Doe", "email": "john@example.com"})
    jane = create_customer(db_session, {"name": "Jane Smith", "email": "jane@example.com"})

    updated = update_customer(db_session, john.id, {"phone": "5550000000", "address": "123 Street, City"})
    assert updated.phone == "5550000000"
    assert updated.email == "john@example.com"

    with pytest.raises(ConstraintViolation):
        update_customer(db_session, john.id, {"email": "jane@example.com"})
    assert get_customer(db_session, john.id).email == "john@example.com"

    # Keeping your own email is not a conflict.
    update_customer(db_session, jane.id, {"email": "jane@example.com", "name": "Jane S."})
    assert get_customer(db_session, jane.id).name == "Jane S."


def test_missing_customer_raises_not_found(db_session):
    with pytest.raises(NotFound):
        get_customer(db_session, 1)
    with pytest.raises(NotFound):
        update_customer(db_session, 1, {"name": "Ghost"})
    with pytest.raises(NotFound):
        delete_customer(db_session, 1)


def test_delete_customer_is_restricted_by_penalties(db_session):
    john = create_customer(db_session, {"name": "John Doe", "email": "john@example.com"})
    carl = create_customer(db_session, {"name": "Carl", "email": "carl@example.com"})
    issue_penalty(db_session, customer_id=john.id, amount="100.00", reason="Late return")

    with pytest.raises(ReferentialIntegrityViolation):
        delete_customer(db_session, john.id)
    assert get_customer(db_session, john.id).name == "John Doe"

    delete_customer(db_session, carl.id)
    assert [c.id for c in list_customers(db_session)] == [john.id]


def test_category_crud_and_restricted_delete(db_session):
    cricket = create_category(db_session, {"name": "Cricket"})
    empty = create_category(db_session, {"name": "Archery"})
    add_equipment(db_session, name="Cricket Bat", category_id=cricket.id, quantity=10, price="1200.50")

    assert update_category(db_session, empty.id, {"name": "Archery & Darts"}).name == "Archery & Darts"
    assert [c.name for c in list_categories(db_session)] == ["Archery & Darts", "Cricket"]

    with pytest.raises(ReferentialIntegrityViolation):
        delete_category(db_session, cricket.id)
    delete_category(db_session, empty.id)
    with pytest.raises(NotFound):
        get_category(db_session, empty.id)
    with pytest.raises(ConstraintViolation):
        create_category(db_session, {"name": ""})


def test_supplier_crud(db_session):
    abc = create_supplier(
        db_session,
        {"name": "ABC Sports", "contact": "123-456", "email": "abc@sports.com", "address": "789 Street, City"},
    )
    create_supplier(db_session, {"name": "XYZ Equipment", "contact": "987-654", "email": "xyz@equip.com"})

    with pytest.raises(ConstraintViolation):
        create_supplier(db_session, {"name": "ABC Clone", "email": "abc@sports.com"})

    assert update_supplier(db_session, abc.id, {"contact": "123-999"}).contact == "123-999"
    assert len(list_suppliers(db_session)) == 2

    delete_supplier(db_session, abc.id)
    with pytest.raises(NotFound):
        get_supplier(db_session, abc.id)
