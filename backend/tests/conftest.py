import os
import sys
import tempfile
from decimal import Decimal

# The app reads its settings at import time; point it at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "pharma-erp-test-logs"))

BACKEND_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

import pytest
from fastapi.testclient import TestClient

from database import Base, engine, SessionLocal
from main import app
from crud.chart_of_accounts import seed_default_accounts
from utils import eta_client
from utils.financial_data import load_financial_data


@pytest.fixture(autouse=True)
def reset_state():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    eta_client.reset_session()
    load_financial_data.cache_clear()
    yield
    eta_client.reset_session()
    load_financial_data.cache_clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded(db):
    seed_default_accounts(db)
    return db


@pytest.fixture
def customer(client):
    resp = client.post("/api/customers", json={
        "name": "Cairo Medical Center",
        "email": "orders@cairomedical.example",
        "company": "Cairo Medical Center",
        "tax_number": "123456789",
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def balance_of(client):
    """Ledger balance of an account code, as returned by GET /api/accounts."""
    def _balance(code):
        accounts = {a["code"]: a for a in client.get("/api/accounts").json()}
        return Decimal(accounts[code]["balance"])
    return _balance
