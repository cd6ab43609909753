from fastapi import APIRouter, Depends

from app.core.auth_dependency import require_active_subscription
from app.db.models.user import User
from app.schemas.billing import EpisodeListResponse
from app.services.episode_catalog import episodes_for_plan

router = APIRouter(prefix="/episodes", tags=["Episodes"])


@router.get("", response_model=EpisodeListResponse)
def list_episodes(user: User = Depends(require_active_subscription)):
    """Episodes for the user's plan. Requires an active subscription."""
    return {"plan": user.plan, "episodes": episodes_for_plan(user.plan)}
