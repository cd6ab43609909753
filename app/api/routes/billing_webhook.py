import logging
from fastapi import APIRouter, Depends, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.errors import not_configured_http_exception
from app.db.session import get_db
from app.schemas.billing import WebhookAck
from app.services import stripe_service
from app.services.billing_service import process_webhook_event
from app.services.stripe_service import BillingNotConfiguredError, WebhookVerificationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Billing Webhook"])


def ingest_event(payload: bytes, signature: str, db: Session) -> WebhookAck:
    """Verify a delivery and apply it. Blocking: SDK HMAC check and DB commit."""
    try:
        event = stripe_service.verify_webhook(payload, signature)
    except BillingNotConfiguredError as e:
        raise not_configured_http_exception(e)
    except WebhookVerificationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    handled = process_webhook_event(event, db)

    return WebhookAck(type=event["type"], handled=handled)


@router.post("/webhooks", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header(None),
    db: Session = Depends(get_db),
):
    """
    Receive Stripe events.

    Unsigned or badly signed payloads get 400 and are not processed.
    Verified events are acknowledged with 200 even when ignored, so Stripe
    only redelivers on real failures.
    """
    payload = await request.body()
    return await run_in_threadpool(ingest_event, payload, stripe_signature, db)
