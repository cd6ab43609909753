import logging
import stripe
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from app.core import config
from app.core.auth_dependency import get_current_user_obj
from app.core.errors import provider_http_exception, not_configured_http_exception
from app.db.models.user import User
from app.schemas.billing import BILLING_ERROR_RESPONSES, BillingConfigResponse
from app.services import stripe_service
from app.services.stripe_service import BillingNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Billing"])


@router.get("/billing/config", response_model=BillingConfigResponse)
def billing_config():
    return BillingConfigResponse(
        publishable_key=config.STRIPE_PUBLISHABLE_KEY,
        plans=list(config.PLANS),
    )


@router.post("/customer_portal_sessions", responses=BILLING_ERROR_RESPONSES)
def create_customer_portal_session(user: User = Depends(get_current_user_obj)):
    """
    Send the signed-in user to the Stripe-hosted billing portal.

    Responds 303 to the portal URL. Plan and status are not touched here;
    whatever the customer changes in the portal arrives later as webhooks.
    """
    if not user.stripe_customer_id:
        raise HTTPException(
            status_code=400,
            detail={"error": "no_billing_customer", "detail": "No billing customer on file"},
        )

    try:
        portal_url = stripe_service.create_billing_portal_session(user.stripe_customer_id)
    except BillingNotConfiguredError as e:
        raise not_configured_http_exception(e)
    except stripe.StripeError as e:
        raise provider_http_exception(e, "portal session creation")

    return RedirectResponse(portal_url, status_code=status.HTTP_303_SEE_OTHER)
