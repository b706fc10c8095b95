"""
Shared fixtures: in-memory SQLite database, fixed clock, issuers, clients
and an API client wired to the same database.
"""
import os

# Must be set before the app modules read configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth import create_access_token
from database import get_session
from main import app
from models import Base, Client, User
from schemas.invoice import InvoiceCreate
from services.invoice_service import InvoiceService
from utils.clock import get_clock


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 18, 9, 30, 0))


@pytest.fixture
def issuer(db):
    user = User(
        email="jane@example.com",
        first_name="Jane",
        last_name="Doe",
        business_name="Jane Doe Studio",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def other_user(db):
    user = User(email="mallory@example.com", first_name="Mallory", last_name="Smith")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def client_record(db, issuer):
    client = Client(issuer_id=issuer.id, name="Acme Corp", email="billing@acme.test")
    db.add(client)
    db.commit()
    return client


@pytest.fixture
def invoice_payload():
    """Factory for a valid invoice request body (total 1000.00)."""

    def _payload(client_id: int, **overrides) -> dict:
        payload = {
            "client_id": client_id,
            "issue_date": date(2026, 10, 18),
            "due_date": date(2026, 11, 17),
            "currency": "USD",
            "subtotal": Decimal("900.00"),
            "tax": Decimal("100.00"),
            "total_amount": Decimal("1000.00"),
            "items": [
                {"product": "Logo design", "quantity": 1, "unit_price": Decimal("600.00")},
                {"product": "Revisions", "quantity": 3, "unit_price": Decimal("100.00")},
            ],
        }
        payload.update(overrides)
        return payload

    return _payload


@pytest.fixture
def issued_invoice(db, issuer, client_record, clock, invoice_payload):
    data = InvoiceCreate(**invoice_payload(client_record.id))
    return InvoiceService.create_invoice(db, issuer.id, data, clock)


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token({'id': user.id})}"}

    return _headers


@pytest.fixture
def api(session_factory, clock):
    def override_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
