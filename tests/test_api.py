"""HTTP API smoke tests against an isolated in-memory database."""

import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATA_DIR", str(ROOT / "data"))

from sports_inventory.core.config import settings
from sports_inventory.db.session import Base, get_db
from sports_inventory.main import app

from sports_inventory import models  # noqa: F401


@pytest.fixture()
def client():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        engine.dispose()


def _setup_store(client):
    customer = client.post("/api/v1/customers", json={"name": "John Doe", "email": "john@example.com"}).json()
    category = client.post("/api/v1/categories", json={"name": "Cricket"}).json()
    equipment = client.post(
        "/api/v1/equipment",
        json={"name": "Cricket Bat", "category_id": category["id"], "quantity": 10, "price": "1200.50"},
    ).json()
    return customer, category, equipment


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_process_transaction_endpoint(client):
    customer, _, equipment = _setup_store(client)

    response = client.post(
        "/api/v1/transactions",
        json={"customer_id": customer["id"], "equipment_id": equipment["id"], "quantity": 2},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Transaction Processed Successfully"
    assert Decimal(body["transaction"]["total_price"]) == Decimal("2401.00")
    assert "X-Request-ID" in response.headers

    stock = client.get(f"/api/v1/equipment/{equipment['id']}").json()
    assert stock["quantity"] == 8
    assert stock["category_name"] == "Cricket"

    history = client.get(f"/api/v1/customers/{customer['id']}/transactions").json()
    assert [t["id"] for t in history] == [body["transaction"]["id"]]


def test_error_envelopes(client):
    customer, _, equipment = _setup_store(client)

    response = client.post(
        "/api/v1/transactions",
        json={"customer_id": customer["id"], "equipment_id": equipment["id"], "quantity": 11},
    )
    assert response.status_code == 409
    assert response.json()["code"] == "insufficient_stock"
    assert response.json()["details"]["available"] == 10

    response = client.post(
        "/api/v1/transactions",
        json={"customer_id": customer["id"], "equipment_id": equipment["id"], "quantity": 0},
    )
    assert response.status_code == 422
    assert response.json()["code"] == "invalid_argument"

    response = client.get("/api/v1/customers/999")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"

    response = client.post("/api/v1/customers", json={"name": "Dup", "email": "john@example.com"})
    assert response.status_code == 422
    assert response.json()["code"] == "constraint_violation"

    response = client.post("/api/v1/equipment", json={"name": "Ball", "quantity": -1, "price": "1"})
    assert response.status_code == 422
    assert response.json()["code"] == "validation_error"

    response = client.post(f"/api/v1/equipment/{equipment['id']}/adjust", json={"delta": -50})
    assert response.status_code == 500
    assert response.json()["code"] == "invariant_violation"
    assert client.get(f"/api/v1/equipment/{equipment['id']}").json()["quantity"] == 10


def test_penalty_endpoints(client):
    customer, _, _ = _setup_store(client)

    zero = client.get(f"/api/v1/customers/{customer['id']}/penalty-total").json()
    assert Decimal(zero["total"]) == Decimal("0")

    issued = client.post(
        "/api/v1/penalties",
        json={"customer_id": customer["id"], "amount": "100.00", "reason": "Late return"},
    )
    assert issued.status_code == 201
    client.post("/api/v1/penalties", json={"customer_id": customer["id"], "amount": "50.00", "reason": "Damage"})

    total = client.get(f"/api/v1/customers/{customer['id']}/penalty-total").json()
    assert Decimal(total["total"]) == Decimal("150.00")
    assert len(client.get(f"/api/v1/customers/{customer['id']}/penalties").json()) == 2

    response = client.delete(f"/api/v1/customers/{customer['id']}")
    assert response.status_code == 409
    assert response.json()["code"] == "referential_integrity_violation"


def test_api_key_required_when_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", "s3cret")

    response = client.get("/api/v1/customers")
    assert response.status_code == 401
    assert response.json()["code"] == "http_error"

    response = client.get("/api/v1/customers", headers={"X-API-Key": "s3cret"})
    assert response.status_code == 200


def test_request_id_is_echoed_only_when_well_formed(client):
    echoed = client.get("/health", headers={"X-Request-ID": "till-7.sale-42"})
    assert echoed.headers["X-Request-ID"] == "till-7.sale-42"

    replaced = client.get("/health", headers={"X-Request-ID": "not a token at all"})
    assert replaced.headers["X-Request-ID"] != "not a token at all"
    assert len(replaced.headers["X-Request-ID"]) == 32
