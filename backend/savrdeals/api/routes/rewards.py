"""Per-user rewards API routes: coin balance, tier, equipped badge."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from savrdeals.core.exceptions import BadgeLockedError, SupabaseError, UnknownBadgeError
from savrdeals.integrations.supabase import SupabaseClient, get_supabase_client
from savrdeals.schemas.badges import BadgeSummaryResponse, EquipBadgeRequest
from savrdeals.services.rewards_service import RewardsService

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_rewards_service(client: SupabaseClient = Depends(get_supabase_client)) -> RewardsService:
    return RewardsService(client)


@router.get("/{user_id}/rewards", response_model=BadgeSummaryResponse)
async def get_rewards(
    user_id: str,
    service: RewardsService = Depends(get_rewards_service),
) -> BadgeSummaryResponse:
    try:
        summary = await service.get_rewards(user_id)
    except SupabaseError as e:
        logger.error("rewards_fetch_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=502, detail="Could not load rewards")
    return BadgeSummaryResponse.from_summary(summary)


@router.put("/{user_id}/equipped-badge", response_model=BadgeSummaryResponse)
async def equip_badge(
    user_id: str,
    request: EquipBadgeRequest,
    service: RewardsService = Depends(get_rewards_service),
) -> BadgeSummaryResponse:
    """Equip a badge the user has unlocked.

    Raises:
        HTTPException(404): unknown badge id
        HTTPException(403): badge not unlocked yet
        HTTPException(502): Supabase unavailable
    """
    try:
        summary = await service.equip_badge(user_id, request.badge_id)
    except UnknownBadgeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BadgeLockedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except SupabaseError as e:
        logger.error("badge_equip_failed", user_id=user_id, badge_id=request.badge_id, error=str(e))
        raise HTTPException(status_code=502, detail="Could not update equipped badge")
    return BadgeSummaryResponse.from_summary(summary)
