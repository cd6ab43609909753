"""
Pydantic schemas for billing endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class BillingConfigResponse(BaseModel):
    """Public billing settings for the frontend."""
    publishable_key: Optional[str] = Field(None, description="Stripe publishable key")
    plans: List[str] = Field(..., description="Price lookup keys a user can sign up for")

    class Config:
        json_schema_extra = {
            "example": {
                "publishable_key": "pk_test_...",
                "plans": ["starter", "pro", "enterprise"]
            }
        }


class WebhookAck(BaseModel):
    """Acknowledgement returned to Stripe for a verified event."""
    received: bool = True
    type: str = Field(..., description="Stripe event type")
    handled: bool = Field(..., description="Whether a user row was updated")


class BillingErrorResponse(BaseModel):
    """Error response schema for billing operations."""
    error: str = Field(..., description="Error code")
    detail: Optional[str] = Field(None, description="Message from Stripe or configuration check")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "billing_provider_error",
                "detail": "No such customer: 'cus_123'"
            }
        }


class BillingHTTPError(BaseModel):
    """Body FastAPI sends for a billing HTTPException."""
    detail: BillingErrorResponse


BILLING_ERROR_RESPONSES = {
    400: {"model": BillingHTTPError, "description": "Stripe rejected the request"},
    502: {"model": BillingHTTPError, "description": "Stripe unreachable or failed"},
    503: {"model": BillingHTTPError, "description": "Stripe settings missing"},
}


class Episode(BaseModel):
    id: int
    title: str
    tier: str


class EpisodeListResponse(BaseModel):
    plan: str
    episodes: List[Episode]
