"""
Database models module.

Import every model here so it is registered on Base.metadata before
Alembic autogenerate or create_all runs.
"""
from app.db.models.user import User, SubscriptionStatus

__all__ = [
    "User",
    "SubscriptionStatus",
]
