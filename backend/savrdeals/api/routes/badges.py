"""Badge catalog API routes.

These endpoints are pure: they need no user and never touch Supabase.
"""

from fastapi import APIRouter, Query

from savrdeals.domain.badges import MILESTONES, summarize_badges
from savrdeals.schemas.badges import BadgeSummaryResponse, MilestoneResponse

router = APIRouter()


@router.get("", response_model=list[MilestoneResponse])
async def list_badges() -> list[MilestoneResponse]:
    """Full milestone catalog, lowest threshold first."""
    return [MilestoneResponse.from_milestone(m) for m in MILESTONES]


@router.get("/progress", response_model=BadgeSummaryResponse)
async def badge_progress(
    coins: float = Query(0, description="Coin balance; negatives are treated as 0"),
    equipped: str | None = Query(None, description="Currently equipped badge id"),
) -> BadgeSummaryResponse:
    """Current tier, next tier and progress for an arbitrary balance."""
    return BadgeSummaryResponse.from_summary(summarize_badges(coins, equipped))
