"""Pytest configuration to ensure local testing defaults."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# During pytest runs we force SQLAlchemy to use a local sqlite database so that tests
# do not require a running PostgreSQL server.
default_sqlite_url = f"sqlite:///{(BACKEND_DIR / 'tests' / 'test_jersey_shop.db').resolve().as_posix()}"
os.environ.setdefault("DATABASE_URL", default_sqlite_url)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from jersey_shop.database import Base, engine, get_db  # noqa: E402
from jersey_shop.main import app  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


CUSTOMER_PAYLOAD = {
    "name": "John Doe",
    "phone": "081234567890",
    "address": "Jl. Sudirman 5",
    "city": "Jakarta",
    "province": "DKI Jakarta",
    "notes": "Regular customer",
}

COURIER_PAYLOAD = {"name": "JNE Express", "code": "JNE", "notes": "Nationwide shipping"}


@pytest.fixture
def make_customer(client):
    def _make(**overrides):
        response = client.post("/customers/", json={**CUSTOMER_PAYLOAD, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_courier(client):
    def _make(**overrides):
        response = client.post("/couriers/", json={**COURIER_PAYLOAD, **overrides})
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def make_transaction(client):
    def _make(customer_id, courier_id=None, **overrides):
        payload = {
            "customer_id": customer_id,
            "jersey_name": "Real Madrid Home 2024",
            "jersey_size": "L",
            "price": 150000,
            "quantity": 2,
            "total_payment": 300000,
            "payment_method": "Transfer",
            "courier_id": courier_id,
            "transaction_date": "2024-01-15T14:30:00",
            "notes": None,
        }
        payload.update(overrides)
        response = client.post("/transactions/", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
