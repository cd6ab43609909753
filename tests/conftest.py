"""
Shared fixtures: in-memory database, test client, users, signed webhooks.
"""
import hashlib
import hmac
import json
import time

import pytest
import stripe
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core import config
from app.core.security import hash_password, create_access_token
from app.db.base import Base
from app.db.models.user import User
from app.db.session import get_db

WEBHOOK_SECRET = "whsec_test_secret"

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def stripe_settings(monkeypatch):
    """Configure fake Stripe keys; no test talks to the real API."""
    monkeypatch.setattr(stripe, "api_key", "sk_test_123")
    monkeypatch.setattr(config, "STRIPE_WEBHOOK_SECRET", WEBHOOK_SECRET)
    monkeypatch.setattr(config, "STRIPE_PUBLISHABLE_KEY", "pk_test_123")


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Factory for users with a Stripe customer id."""
    def _make_user(email="test@example.com", plan="starter", customer_id="cus_test_1",
                   subscription_status="incomplete", password="testpass123"):
        user = User(
            email=email,
            password_hash=hash_password(password),
            plan=plan,
            stripe_customer_id=customer_id,
            subscription_status=subscription_status,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Build a Stripe-Signature header the way Stripe signs deliveries."""
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.{payload}"
    signature = hmac.new(secret.encode("utf-8"), signed_payload.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def build_event(event_type: str, data_object: dict, event_id: str = "evt_test_1") -> str:
    return json.dumps({
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {"object": data_object},
    })


def subscription_object(customer_id: str, status: str, lookup_keys=("pro",), subscription_id="sub_test_1") -> dict:
    return {
        "id": subscription_id,
        "object": "subscription",
        "customer": customer_id,
        "status": status,
        "items": {
            "object": "list",
            "data": [
                {
                    "id": f"si_test_{i}",
                    "object": "subscription_item",
                    "price": {"id": f"price_{key}", "object": "price", "lookup_key": key},
                }
                for i, key in enumerate(lookup_keys)
            ],
        },
    }


def checkout_session_object(customer_id: str, session_id: str = "cs_test_1") -> dict:
    return {
        "id": session_id,
        "object": "checkout.session",
        "customer": customer_id,
        "mode": "subscription",
        "subscription": "sub_test_1",
        "status": "complete",
    }
