"""Hot deals ranking.

Pure functions -- no DB access, deterministic outputs. A hot deal is a
published listing discounted by at least HOT_DEAL_MIN_DISCOUNT percent;
hot deals are ordered by how many likes they collected.
"""
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

HOT_DEAL_MIN_DISCOUNT = 55


def parse_price(value: Any) -> Decimal | None:
    """Parse a price column that may hold a number or a numeric string.

    Returns None for anything that is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip()
    else:
        return None

    try:
        price = Decimal(text)
    except InvalidOperation:
        return None
    if not price.is_finite():
        return None
    return price


def discount_percent(price: Any, old_price: Any) -> int | None:
    """Whole-number discount, rounding halves up (55.5 -> 56).

    Returns None when either price is malformed or negative, or when
    old_price <= price.
    """
    current = parse_price(price)
    original = parse_price(old_price)
    if current is None or original is None or current < 0 or original <= current:
        return None

    try:
        percent = (original - current) / original * 100
        return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except ArithmeticError:
        # decimal.InvalidOperation / Overflow on absurd magnitudes
        return None


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _is_published(listing: Mapping[str, Any]) -> bool:
    # Rows without the flag come from queries that already filtered on it
    return bool(listing.get("published", True))


def _hot_discount(listing: Mapping[str, Any], min_discount: int) -> int | None:
    if not _is_published(listing) or not _is_hashable(listing.get("id")):
        return None
    percent = discount_percent(listing.get("price"), listing.get("old_price"))
    if percent is None or percent < min_discount:
        return None
    return percent


def eligible_deal_ids(
    listings: Iterable[Mapping[str, Any]],
    min_discount: int = HOT_DEAL_MIN_DISCOUNT,
) -> list[Any]:
    """Ids of the listings that clear the hot-deal discount threshold."""
    return [
        listing.get("id")
        for listing in listings
        if _hot_discount(listing, min_discount) is not None
    ]


def count_likes(like_events: Iterable[Mapping[str, Any]]) -> dict[Any, int]:
    """Map deal_id -> number of like events referencing it.

    Events whose deal_id cannot be a key (lists, objects) are skipped.
    """
    counts: dict[Any, int] = {}
    for like in like_events:
        deal_id = like.get("deal_id")
        if not _is_hashable(deal_id):
            continue
        counts[deal_id] = counts.get(deal_id, 0) + 1
    return counts


def rank_hot_deals(
    listings: Iterable[Mapping[str, Any]],
    like_events: Iterable[Mapping[str, Any]],
    min_discount: int = HOT_DEAL_MIN_DISCOUNT,
) -> list[dict[str, Any]]:
    """Filter listings down to hot deals and sort them by like count.

    Args:
        listings: deal rows with at least id, price and old_price
        like_events: like rows, each with a deal_id
        min_discount: inclusive discount threshold in percent

    Returns:
        New dicts carrying the listing fields plus discount_percent and
        like_count, most-liked first. Equal like counts keep input order.
        Malformed or non-discounted listings are dropped, never raised on.
    """
    likes = count_likes(like_events)

    ranked = []
    for listing in listings:
        percent = _hot_discount(listing, min_discount)
        if percent is None:
            continue
        ranked.append({
            **listing,
            "discount_percent": percent,
            "like_count": likes.get(listing.get("id"), 0),
        })

    # list.sort is stable, so ties stay in input order
    ranked.sort(key=lambda deal: deal["like_count"], reverse=True)
    return ranked
