"""
Billing service: applies verified Stripe webhook events to User rows.

Stripe owns the subscription lifecycle. This module only mirrors two
fields, ``subscription_status`` and ``plan``, onto the user whose
``stripe_customer_id`` the event names.

There is no idempotency key, ordering or locking: two deliveries for the
same customer race and the last commit wins. Stripe redelivers failed
events, so nothing is retried here either.
"""
import logging
from typing import Callable, Dict, Optional
from sqlalchemy.orm import Session

from app.core.config import PLANS
from app.db.models.user import User, SubscriptionStatus

logger = logging.getLogger(__name__)


def find_user_by_customer(db: Session, customer_id: Optional[str]) -> Optional[User]:
    """Look up the user owning a Stripe customer id."""
    if not customer_id:
        return None
    return db.query(User).filter(User.stripe_customer_id == customer_id).first()


def get_lookup_key(subscription) -> Optional[str]:
    """
    Return the price lookup key of the subscription's line item.

    Subscriptions are created with exactly one item; if Stripe ever sends
    more, only the first is read.
    """
    line_items = subscription["items"]["data"]
    if not line_items:
        return None
    if len(line_items) > 1:
        logger.warning(
            f"Subscription {subscription['id']} has {len(line_items)} items, using the first"
        )
    return line_items[0]["price"]["lookup_key"]


def handle_checkout_session_completed(event_data, db: Session) -> Optional[User]:
    """
    Handle checkout.session.completed webhook event.

    Marks the customer's subscription active. Nothing else on the user changes.
    """
    session_data = event_data["object"]
    customer_id = session_data["customer"]

    user = find_user_by_customer(db, customer_id)
    if not user:
        logger.warning(f"checkout.session.completed: no user for customer_id={customer_id}")
        return None

    user.subscription_status = SubscriptionStatus.ACTIVE
    db.commit()
    db.refresh(user)

    logger.info(f"Checkout completed: user_id={user.id}, customer_id={customer_id}")
    return user


def handle_subscription_changed(event_data, db: Session) -> Optional[User]:
    """
    Handle customer.subscription.updated and customer.subscription.deleted.

    Copies the subscription's status verbatim and sets the plan to the
    lookup key of its price when that key is one of PLANS. A deleted subscription still carries the price
    the user was on, so the plan stays put and only the status moves to
    ``canceled``.
    """
    subscription_data = event_data["object"]
    customer_id = subscription_data["customer"]
    status = subscription_data["status"]

    user = find_user_by_customer(db, customer_id)
    if not user:
        logger.warning(f"Subscription event: no user for customer_id={customer_id}")
        return None

    user.subscription_status = status

    lookup_key = get_lookup_key(subscription_data)
    if lookup_key in PLANS:
        user.plan = lookup_key
    elif lookup_key:
        logger.warning(
            f"Subscription {subscription_data['id']} has unknown price lookup key '{lookup_key}', plan unchanged"
        )
    else:
        logger.warning(f"Subscription {subscription_data['id']} has no price lookup key, plan unchanged")

    db.commit()
    db.refresh(user)

    logger.info(f"Subscription synced: user_id={user.id}, plan={user.plan}, status={status}")
    return user


WEBHOOK_HANDLERS: Dict[str, Callable] = {
    "checkout.session.completed": handle_checkout_session_completed,
    "customer.subscription.updated": handle_subscription_changed,
    "customer.subscription.deleted": handle_subscription_changed,
}


def process_webhook_event(event, db: Session) -> bool:
    """
    Dispatch a verified event to its handler.

    Returns:
        True if a user row was updated, False for ignored event types and
        for events naming a customer we have no user for.
    """
    event_type = event["type"]
    handler = WEBHOOK_HANDLERS.get(event_type)

    if handler is None:
        logger.debug(f"Ignoring webhook event type {event_type}, id={event['id']}")
        return False

    return handler(event["data"], db) is not None
