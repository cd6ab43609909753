"""
Translation of Stripe errors into HTTP responses.
"""
import logging
import stripe
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def provider_http_exception(error: stripe.StripeError, action: str) -> HTTPException:
    """
    Surface a Stripe error to the caller.

    Stripe's own 4xx status is passed through (bad customer id, unknown
    price, ...). Anything else, including network failures, becomes 502.
    """
    provider_status = error.http_status
    if provider_status is not None and 400 <= provider_status < 500:
        status_code = provider_status
    else:
        status_code = status.HTTP_502_BAD_GATEWAY

    message = error.user_message or str(error)
    logger.error(f"Stripe error during {action}: status={provider_status}, error={message}")

    return HTTPException(
        status_code=status_code,
        detail={
            "error": "billing_provider_error",
            "detail": message,
        },
    )


def not_configured_http_exception(error: ValueError) -> HTTPException:
    logger.error(f"Billing not configured: {error}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail={
            "error": "billing_not_configured",
            "detail": str(error),
        },
    )
