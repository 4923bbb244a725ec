"""Supabase integration: read and write the tables the backend needs.

Talks to the PostgREST interface Supabase exposes under /rest/v1:
- deals (published listings)
- likes (one row per user upvote)
- coins (per-user balance, maintained by database triggers)
- profiles (equipped badge reference)
"""

from typing import Any

import httpx
import structlog

from savrdeals.core.config import get_settings
from savrdeals.core.exceptions import SupabaseError

logger = structlog.get_logger(__name__)


def _quote_filter_value(value) -> str:
    """Double-quote a value for a PostgREST in.(...) list so , and ) stay literal."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


class SupabaseClient:
    """Client for the Supabase REST API using the service role key."""

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Supabase client.

        Args:
            base_url: Project URL, e.g. https://xyz.supabase.co (defaults to settings)
            service_key: Service role key (defaults to settings)
            transport: Optional httpx transport, used by tests to stub the API
        """
        self.settings = get_settings()
        self.base_url = (base_url if base_url is not None else self.settings.supabase_url).rstrip("/")
        self.service_key = service_key if service_key is not None else self.settings.supabase_service_key
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        if not self.base_url or not self.service_key:
            raise SupabaseError("Supabase not configured")
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Accept": "application/json",
        }

    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, str],
        data: dict | None = None,
        prefer: str | None = None,
    ) -> Any:
        """Make an authenticated request against one table."""
        headers = self._headers()
        if prefer:
            headers["Prefer"] = prefer

        url = f"{self.base_url}/rest/v1/{table}"
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.settings.supabase_timeout_seconds,
            ) as client:
                response = await client.request(method, url, params=params, json=data, headers=headers)
        except httpx.HTTPError as e:
            logger.error("supabase_request_failed", table=table, method=method, error=str(e))
            raise SupabaseError(f"Supabase request to '{table}' failed: {e}") from e

        if response.status_code >= 400:
            logger.error(
                "supabase_error_response",
                table=table,
                method=method,
                status_code=response.status_code,
            )
            raise SupabaseError(
                f"Supabase {method} {table} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def fetch_published_deals(self) -> list[dict]:
        rows = await self._request("GET", "deals", {"select": "*", "published": "eq.true"})
        return rows or []

    async def fetch_likes(self, deal_ids: list) -> list[dict]:
        """Fetch like rows (deal_id only) for the given deals."""
        if not deal_ids:
            return []
        id_list = ",".join(_quote_filter_value(deal_id) for deal_id in deal_ids)
        rows = await self._request(
            "GET", "likes", {"select": "deal_id", "deal_id": f"in.({id_list})"}
        )
        return rows or []

    async def fetch_coin_balance(self, user_id: str) -> int:
        """Return the user's coin balance, 0 when no coins row exists yet."""
        rows = await self._request(
            "GET", "coins", {"select": "balance", "user_id": f"eq.{user_id}", "limit": "1"}
        )
        if not rows:
            return 0
        return rows[0].get("balance") or 0

    async def fetch_equipped_badge(self, user_id: str) -> str | None:
        rows = await self._request(
            "GET", "profiles", {"select": "equipped_badge", "user_id": f"eq.{user_id}", "limit": "1"}
        )
        if not rows:
            return None
        return rows[0].get("equipped_badge")

    async def update_equipped_badge(self, user_id: str, badge_id: str) -> None:
        await self._request(
            "PATCH",
            "profiles",
            {"user_id": f"eq.{user_id}"},
            data={"equipped_badge": badge_id},
            prefer="return=minimal",
        )


def get_supabase_client() -> SupabaseClient:
    """FastAPI dependency returning a client bound to the configured project."""
    return SupabaseClient()
