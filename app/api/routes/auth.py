import logging
import stripe
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.db.models.user import User, SubscriptionStatus
from app.core.security import hash_password, verify_password, create_access_token
from app.core.errors import provider_http_exception, not_configured_http_exception
from app.schemas.auth import SignupRequest, SignupResponse, TokenResponse
from app.schemas.billing import BILLING_ERROR_RESPONSES
from app.services import stripe_service
from app.services.stripe_service import BillingNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BILLING_ERROR_RESPONSES,
)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a user, create their Stripe customer, and start checkout.

    The row is committed before checkout is created, so a checkout failure
    leaves an ``incomplete`` user who can retry from the billing portal.
    """
    email = payload.email.lower()

    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(status_code=409, detail="Email already registered")

    try:
        customer_id = stripe_service.create_customer(email, payload.plan)
    except BillingNotConfiguredError as e:
        raise not_configured_http_exception(e)
    except stripe.StripeError as e:
        raise provider_http_exception(e, "customer creation")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        plan=payload.plan,
        stripe_customer_id=customer_id,
        subscription_status=SubscriptionStatus.INCOMPLETE,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent signup for the same email committed first
        db.rollback()
        logger.warning(f"Duplicate signup for existing email, Stripe customer {customer_id} left unused")
        raise HTTPException(status_code=409, detail="Email already registered")
    db.refresh(user)

    logger.info(f"User signed up: user_id={user.id}, plan={user.plan}, customer_id={customer_id}")

    try:
        checkout_url = stripe_service.create_checkout_session(customer_id, payload.plan)
    except BillingNotConfiguredError as e:
        raise not_configured_http_exception(e)
    except stripe.StripeError as e:
        raise provider_http_exception(e, "checkout session creation")

    return SignupResponse(user_id=user.id, checkout_url=checkout_url)


@router.post("/login", response_model=TokenResponse)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    # OAuth2 form calls it "username"; it is the email
    user = db.query(User).filter(User.email == form_data.username.lower()).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": user.email})

    return TokenResponse(access_token=token)
