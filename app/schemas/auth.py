"""
Pydantic schemas for authentication and account endpoints.
"""
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.config import PLANS


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=8, description="User's password (min 8 characters)")
    plan: str = Field(..., description="Price lookup key: 'starter', 'pro' or 'enterprise'")

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Validate password length in bytes (bcrypt limit is 72 bytes)."""
        if len(v.encode("utf-8")) > 72:
            raise ValueError("Password too long (bcrypt limit 72 bytes)")
        return v

    @field_validator("plan")
    @classmethod
    def validate_plan(cls, v: str) -> str:
        plan = v.strip().lower()
        if plan not in PLANS:
            raise ValueError(f"Unknown plan. Must be one of: {', '.join(PLANS)}")
        return plan

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "plan": "pro"
            }
        }


class SignupResponse(BaseModel):
    """Response schema for signup: where to send the browser to pay."""
    user_id: int = Field(..., description="New user id")
    checkout_url: str = Field(..., description="Stripe Checkout URL for the chosen plan")


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class MeResponse(BaseModel):
    """Billing-relevant view of the signed-in user."""
    email: str
    plan: str
    subscription_status: str
