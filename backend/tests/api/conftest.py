"""API-specific test fixtures."""

import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from savrdeals.integrations.supabase import get_supabase_client
from savrdeals.main import app
from savrdeals.notifications.mailer import get_mailer
from savrdeals.services.deal_catalog import DealCatalog, get_deal_catalog


@pytest.fixture
def api_client():
    """Test client without lifespan; collaborators are injected per test."""
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fake_supabase():
    client = AsyncMock()
    client.fetch_published_deals.return_value = []
    client.fetch_likes.return_value = []
    client.fetch_coin_balance.return_value = 0
    client.fetch_equipped_badge.return_value = None
    app.dependency_overrides[get_supabase_client] = lambda: client
    return client


@pytest.fixture
def fake_mailer():
    mailer = AsyncMock()
    # send_deal_live is blocking and runs in a worker thread
    mailer.send_deal_live = lambda *args, **kwargs: None
    app.dependency_overrides[get_mailer] = lambda: mailer
    return mailer


@pytest.fixture
def deal_catalog(tmp_path):
    path = tmp_path / "deals.json"
    path.write_text(json.dumps([
        {"id": 1, "title": "Wireless Earbuds", "category": "Electronics"},
        {"id": 2, "title": "Yoga Mat", "category": "Sports"},
        {"id": 3, "title": "Bluetooth Speaker", "category": "Electronics"},
    ]), encoding="utf-8")
    catalog = DealCatalog(path)
    app.dependency_overrides[get_deal_catalog] = lambda: catalog
    return catalog
