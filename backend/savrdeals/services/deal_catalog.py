"""DealCatalog: serves the static deals.json file behind GET /api/deals."""

import json
from pathlib import Path

import structlog

from savrdeals.core.config import get_settings
from savrdeals.core.exceptions import DealCatalogError
from savrdeals.domain.deal_search import filter_deals

logger = structlog.get_logger(__name__)


class DealCatalog:
    """Read-only deal list loaded once from a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._deals: list[dict] | None = None

    def load(self) -> list[dict]:
        """Load (and cache) the catalog.

        Raises:
            DealCatalogError: file missing, unreadable, or not a JSON array
        """
        if self._deals is not None:
            return self._deals

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise DealCatalogError(f"Could not load deal catalog {self.path}: {e}") from e

        if not isinstance(data, list):
            raise DealCatalogError(f"Deal catalog {self.path} must contain a JSON array")

        self._deals = data
        logger.info("deal_catalog_loaded", path=str(self.path), count=len(data))
        return self._deals

    def search(self, q: str | None = None, category: str | None = None) -> list[dict]:
        return filter_deals(self.load(), q=q, category=category)


_catalog: DealCatalog | None = None


def get_deal_catalog() -> DealCatalog:
    """FastAPI dependency returning the process-wide catalog."""
    global _catalog
    if _catalog is None:
        _catalog = DealCatalog(get_settings().deals_json_path)
    return _catalog
