from fastapi import APIRouter, Depends

from app.core.auth_dependency import get_current_user_obj
from app.db.models.user import User
from app.schemas.auth import MeResponse

router = APIRouter(prefix="/me", tags=["Account"])


@router.get("", response_model=MeResponse)
def read_me(user: User = Depends(get_current_user_obj)):
    return MeResponse(
        email=user.email,
        plan=user.plan,
        subscription_status=user.subscription_status,
    )
