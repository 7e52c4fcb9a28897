import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from ledgerbook.utils.database import Base, get_db
from ledgerbook.utils.summary_cache import SummaryCache
from ledgerbook.initial_data import seed

TEST_ENGINE = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture
def db_session():
    """Fresh schema per test, seeded with the default settings."""
    Base.metadata.create_all(bind=TEST_ENGINE)
    session = TestingSessionLocal()
    seed(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=TEST_ENGINE)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.summary_cache = SummaryCache(max_keys=8)

    # no context manager: startup would create tables on the configured engine
    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def mahajan(client):
    res = client.post(
        "/accounts",
        json={"account_type": "mahajan", "name": "Ramesh Traders", "phone": "9800000001"},
    )
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def customer(client):
    res = client.post(
        "/accounts",
        json={"account_type": "customer", "name": "Sita Devi", "gst_number": "19ABCDE1234F1Z5"},
    )
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def make_obligation(client):
    def _make(account_id, **overrides):
        body = {
            "account_id": account_id,
            "obligation_type": "bill",
            "principal_amount": "1000.00",
            "obligation_date": "2024-01-01",
        }
        body.update(overrides)
        res = client.post("/obligations", json=body)
        assert res.status_code == 201, res.text
        return res.json()

    return _make
