"""Pydantic schemas for deal endpoints.

Deal rows are passed through as plain dicts: the frontend owns their shape
and the backend only reads id, price, old_price, published, title, category.
"""

from typing import Any

from pydantic import BaseModel, Field


class RankHotDealsRequest(BaseModel):
    """Listings and like rows to rank without touching the database."""

    listings: list[dict[str, Any]] = Field(default_factory=list)
    likes: list[dict[str, Any]] = Field(default_factory=list, description="Rows with a deal_id")
