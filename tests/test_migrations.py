"""
Tests for the Alembic migration runner against a file-backed SQLite database.
"""
import pytest
from sqlalchemy import create_engine, inspect, text

from app.db.migrate import run_migrations
from app.db.models.user import User

HEAD_REVISION = "4c1e9a7d2b30"


@pytest.fixture
def migrated_url(tmp_path):
    url = f"sqlite:///{tmp_path}/migrations.db"
    run_migrations(url)
    return url


@pytest.fixture
def migrated_engine(migrated_url):
    engine = create_engine(migrated_url)
    yield engine
    engine.dispose()


def test_migration_creates_model_columns(migrated_engine):
    columns = {column["name"] for column in inspect(migrated_engine).get_columns("users")}
    assert columns == {column.name for column in User.__table__.columns}


def test_migration_creates_model_indexes(migrated_engine):
    migrated = {
        (index["name"], bool(index["unique"]))
        for index in inspect(migrated_engine).get_indexes("users")
    }
    expected = {(index.name, bool(index.unique)) for index in User.__table__.indexes}

    assert migrated == expected
    assert ("ix_users_stripe_customer_id", True) in migrated
    assert ("ix_users_email", True) in migrated


def test_migration_defaults_subscription_status(migrated_engine):
    with migrated_engine.begin() as conn:
        conn.execute(text(
            "INSERT INTO users (email, password_hash, plan) VALUES ('a@example.com', 'x', 'starter')"
        ))
        status = conn.execute(text("SELECT subscription_status FROM users")).scalar_one()

    assert status == "incomplete"


def test_migration_rerun_is_noop(migrated_url, migrated_engine):
    with migrated_engine.begin() as conn:
        conn.execute(text(
            "INSERT INTO users (email, password_hash, plan, stripe_customer_id) "
            "VALUES ('keep@example.com', 'x', 'pro', 'cus_keep')"
        ))

    run_migrations(migrated_url)

    with migrated_engine.connect() as conn:
        revisions = conn.execute(text("SELECT version_num FROM alembic_version")).scalars().all()
        emails = conn.execute(text("SELECT email FROM users")).scalars().all()

    assert revisions == [HEAD_REVISION]
    assert emails == ["keep@example.com"]
