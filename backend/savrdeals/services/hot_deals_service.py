"""HotDealsService: fetches deals and likes from Supabase and ranks them.

All ranking rules live in savrdeals.domain.hot_deals; this layer only
orchestrates the two queries.
"""

import structlog

from savrdeals.domain.hot_deals import eligible_deal_ids, rank_hot_deals
from savrdeals.integrations.supabase import SupabaseClient

logger = structlog.get_logger(__name__)


class HotDealsService:
    def __init__(self, client: SupabaseClient):
        self.client = client

    async def get_hot_deals(self) -> list[dict]:
        """Return published deals with >= 55% discount, most liked first.

        Likes are fetched only for the discounted candidates. When nothing
        qualifies the likes query is skipped entirely.
        """
        deals = await self.client.fetch_published_deals()
        candidate_ids = eligible_deal_ids(deals)
        if not candidate_ids:
            logger.info("hot_deals_none_eligible", published=len(deals))
            return []

        likes = await self.client.fetch_likes(candidate_ids)
        ranked = rank_hot_deals(deals, likes)
        logger.info(
            "hot_deals_ranked",
            published=len(deals),
            hot=len(ranked),
            likes=len(likes),
        )
        return ranked
