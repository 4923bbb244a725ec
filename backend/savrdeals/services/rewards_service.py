"""RewardsService: coin balance, badge tiers and the equipped badge per user."""

import structlog

from savrdeals.core.exceptions import BadgeLockedError, UnknownBadgeError
from savrdeals.domain.badges import (
    BadgeSummary,
    get_milestone,
    is_unlocked,
    summarize_badges,
)
from savrdeals.integrations.supabase import SupabaseClient

logger = structlog.get_logger(__name__)


class RewardsService:
    """Service layer for the rewards page.

    Balances are read-only here; coins are awarded by database triggers.
    """

    def __init__(self, client: SupabaseClient):
        self.client = client

    async def get_rewards(self, user_id: str) -> BadgeSummary:
        coins = await self.client.fetch_coin_balance(user_id)
        equipped = await self.client.fetch_equipped_badge(user_id)
        return summarize_badges(coins, equipped)

    async def equip_badge(self, user_id: str, badge_id: str) -> BadgeSummary:
        """Equip an unlocked badge on the user's profile.

        Raises:
            UnknownBadgeError: badge_id is not in the catalog
            BadgeLockedError: the user's balance has not reached the badge
        """
        milestone = get_milestone(badge_id)
        if milestone is None:
            raise UnknownBadgeError(badge_id)

        coins = await self.client.fetch_coin_balance(user_id)
        if not is_unlocked(badge_id, coins):
            logger.info(
                "badge_equip_rejected",
                user_id=user_id,
                badge_id=badge_id,
                coins=coins,
                required_coins=milestone.required_coins,
            )
            raise BadgeLockedError(badge_id, milestone.required_coins, coins)

        await self.client.update_equipped_badge(user_id, badge_id)
        logger.info("badge_equipped", user_id=user_id, badge_id=badge_id)
        return summarize_badges(coins, badge_id)
