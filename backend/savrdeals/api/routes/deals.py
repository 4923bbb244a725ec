"""Deal listing API routes.

- GET  /api/deals           search the static catalog (q, category)
- GET  /api/deals/hot       hot deals from Supabase, most liked first
- POST /api/deals/hot/rank  rank caller-supplied listings and likes
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from savrdeals.core.exceptions import DealCatalogError, SupabaseError
from savrdeals.domain.hot_deals import rank_hot_deals
from savrdeals.integrations.supabase import SupabaseClient, get_supabase_client
from savrdeals.schemas.deals import RankHotDealsRequest
from savrdeals.services.deal_catalog import DealCatalog, get_deal_catalog
from savrdeals.services.hot_deals_service import HotDealsService

logger = structlog.get_logger(__name__)

router = APIRouter()


def get_hot_deals_service(client: SupabaseClient = Depends(get_supabase_client)) -> HotDealsService:
    return HotDealsService(client)


@router.get("", response_model=list[dict[str, Any]])
async def search_deals(
    q: str | None = Query(None, description="Matches title or category, case-insensitive"),
    category: str | None = Query(None, description="Exact category; 'All' disables the filter"),
    catalog: DealCatalog = Depends(get_deal_catalog),
) -> list[dict[str, Any]]:
    """Search the static deal catalog.

    A broken catalog yields an empty list rather than an error so the grid
    can still render.
    """
    try:
        return catalog.search(q=q, category=category)
    except DealCatalogError as e:
        logger.error("deal_catalog_unavailable", error=str(e))
        return []


@router.get("/hot", response_model=list[dict[str, Any]])
async def get_hot_deals(
    service: HotDealsService = Depends(get_hot_deals_service),
) -> list[dict[str, Any]]:
    try:
        return await service.get_hot_deals()
    except SupabaseError as e:
        logger.error("hot_deals_fetch_failed", error=str(e), status_code=e.status_code)
        raise HTTPException(status_code=502, detail="Failed to load hot deals")


@router.post("/hot/rank", response_model=list[dict[str, Any]])
async def rank_deals(request: RankHotDealsRequest) -> list[dict[str, Any]]:
    return rank_hot_deals(request.listings, request.likes)
