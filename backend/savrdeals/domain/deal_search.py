"""Search and category filtering for the static deal catalog.

Pure domain logic with no external dependencies.
"""
from collections.abc import Iterable, Mapping
from typing import Any

ALL_CATEGORIES = "all"


def matches_query(deal: Mapping[str, Any], query: str) -> bool:
    """Case-insensitive substring match against title or category.

    Expects an already trimmed, lowercased query.
    """
    title = str(deal.get("title") or "").lower()
    category = str(deal.get("category") or "").lower()
    return query in title or query in category


def filter_deals(
    deals: Iterable[Mapping[str, Any]],
    q: str | None = None,
    category: str | None = None,
) -> list[Mapping[str, Any]]:
    """Apply the search box and the category dropdown to a list of deals.

    Args:
        deals: deal records (title, category, ...)
        q: free text; blank means no text filter
        category: exact category name; blank or "all" means every category

    Returns:
        Matching deals in their original order
    """
    query = (q or "").strip().lower()
    wanted = (category or "").strip()

    result = list(deals)
    if query:
        result = [d for d in result if matches_query(d, query)]
    if wanted and wanted.lower() != ALL_CATEGORIES:
        result = [d for d in result if (d.get("category") or "") == wanted]
    return result
