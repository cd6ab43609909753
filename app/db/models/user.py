from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.db.base import Base


class SubscriptionStatus:
    """Subscription statuses as Stripe spells them."""
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"
    PAUSED = "paused"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    # Price lookup key: starter | pro | enterprise
    plan = Column(String, nullable=False)

    # Assigned once at signup, never reassigned
    stripe_customer_id = Column(String, unique=True, index=True, nullable=True)

    # Written only by webhook handlers after signup
    subscription_status = Column(
        String,
        nullable=False,
        default=SubscriptionStatus.INCOMPLETE,
        server_default=SubscriptionStatus.INCOMPLETE,
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def has_active_subscription(self) -> bool:
        return self.subscription_status == SubscriptionStatus.ACTIVE
