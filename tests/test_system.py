"""
Tests for health, billing config, and logging helpers.
"""
import logging

from app.core.logging_config import sanitize_log_data, setup_logging


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_root(client):
    assert client.get("/").json() == {"status": "Billing Portal API running"}


def test_billing_config(client):
    response = client.get("/billing/config")

    assert response.status_code == 200
    assert response.json() == {
        "publishable_key": "pk_test_123",
        "plans": ["starter", "pro", "enterprise"],
    }


def test_sanitize_log_data_redacts_secrets():
    data = {
        "customer_id": "cus_1",
        "stripe_webhook_secret": "whsec_1",
        "Stripe-Signature": "t=1,v1=abc",
        "password": "hunter22",
    }

    sanitized = sanitize_log_data(data)

    assert sanitized["customer_id"] == "cus_1"
    assert sanitized["stripe_webhook_secret"] == "***REDACTED***"
    assert sanitized["Stripe-Signature"] == "***REDACTED***"
    assert sanitized["password"] == "***REDACTED***"
    assert data["password"] == "hunter22"


def test_setup_logging_writes_file(tmp_path):
    root = logging.getLogger()
    previous_handlers = list(root.handlers)
    previous_level = root.level
    try:
        setup_logging("debug", log_dir=str(tmp_path))
        logging.getLogger("app.test").debug("webhook received")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert logging.getLogger("stripe").level == logging.WARNING
        assert "webhook received" in (tmp_path / "billing_portal.log").read_text()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
