"""
Stripe service for customers, checkout, billing portal, and webhook verification.

Every call goes straight to the Stripe SDK. Nothing here retries; errors
from Stripe propagate to the route, which surfaces them to the caller.
"""
import logging
from typing import Optional
import stripe
from app.core import config

logger = logging.getLogger(__name__)

# Initialize Stripe client
if config.STRIPE_SECRET_KEY:
    stripe.api_key = config.STRIPE_SECRET_KEY
else:
    logger.warning("STRIPE_SECRET_KEY not configured - Stripe features disabled")


class BillingNotConfiguredError(ValueError):
    """A Stripe setting this operation needs is missing."""


class WebhookVerificationError(ValueError):
    """Webhook payload is malformed or not signed with our secret."""


def _require_api_key() -> None:
    if not stripe.api_key:
        raise BillingNotConfiguredError("Stripe not configured - STRIPE_SECRET_KEY required")


def create_customer(email: str, plan: str) -> str:
    """
    Create the Stripe customer for a new account.

    Returns:
        The Stripe customer id (``cus_...``)
    """
    _require_api_key()
    customer = stripe.Customer.create(email=email, metadata={"plan": plan})
    logger.info(f"Created Stripe customer: customer_id={customer.id}, plan={plan}")
    return customer.id


def get_price_id(lookup_key: str) -> str:
    """Resolve a price lookup key to the current Stripe price id."""
    _require_api_key()
    prices = stripe.Price.list(lookup_keys=[lookup_key], active=True, limit=1)
    if not prices.data:
        raise BillingNotConfiguredError(f"No active Stripe price with lookup key '{lookup_key}'")
    return prices.data[0].id


def create_checkout_session(
    customer_id: str,
    plan: str,
    success_url: Optional[str] = None,
    cancel_url: Optional[str] = None
) -> str:
    """
    Create a subscription-mode Checkout Session for ``plan``.

    Args:
        customer_id: Stripe customer id created at signup
        plan: Price lookup key (starter, pro or enterprise)
        success_url: Defaults to CHECKOUT_SUCCESS_URL
        cancel_url: Defaults to CHECKOUT_CANCEL_URL

    Returns:
        Hosted checkout URL
    """
    price_id = get_price_id(plan)

    session = stripe.checkout.Session.create(
        customer=customer_id,
        mode="subscription",
        line_items=[{
            "price": price_id,
            "quantity": 1,
        }],
        success_url=success_url or config.CHECKOUT_SUCCESS_URL,
        cancel_url=cancel_url or config.CHECKOUT_CANCEL_URL,
    )

    logger.info(f"Created checkout session: session_id={session.id}, customer_id={customer_id}, plan={plan}")
    return session.url


def create_billing_portal_session(customer_id: str, return_url: Optional[str] = None) -> str:
    """
    Create a Stripe Billing Portal session for managing a subscription.

    Args:
        customer_id: Stripe customer id of the signed-in user
        return_url: Where the portal sends the customer back (defaults to PORTAL_RETURN_URL)

    Returns:
        Portal session URL, exactly as Stripe returned it
    """
    _require_api_key()

    session = stripe.billing_portal.Session.create(
        customer=customer_id,
        return_url=return_url or config.PORTAL_RETURN_URL,
    )

    logger.info(f"Created billing portal session for customer_id={customer_id}")
    return session.url


def verify_webhook(request_body: bytes, signature: Optional[str]):
    """
    Verify and parse a Stripe webhook event.

    Args:
        request_body: Raw request body bytes
        signature: Stripe-Signature header value

    Returns:
        The verified ``stripe.Event``

    Raises:
        BillingNotConfiguredError: STRIPE_WEBHOOK_SECRET is not set
        WebhookVerificationError: Missing/invalid signature or unparseable payload
    """
    if not config.STRIPE_WEBHOOK_SECRET:
        raise BillingNotConfiguredError("STRIPE_WEBHOOK_SECRET not configured")

    if not signature:
        raise WebhookVerificationError("Missing Stripe-Signature header")

    try:
        event = stripe.Webhook.construct_event(
            request_body, signature, config.STRIPE_WEBHOOK_SECRET
        )
    except ValueError as e:
        logger.error(f"Invalid webhook payload: {e}")
        raise WebhookVerificationError(f"Invalid webhook payload: {e}") from e
    except stripe.SignatureVerificationError as e:
        logger.error(f"Webhook signature verification failed: {e}")
        raise WebhookVerificationError(f"Invalid signature: {e}") from e

    logger.info(f"Verified webhook event: {event['type']}, id={event['id']}")
    return event
