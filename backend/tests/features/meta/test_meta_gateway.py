"""
Tests for the live meta gateway.
"""

from unittest.mock import AsyncMock

import pytest

from dashboard.core.cache import TTLCache
from dashboard.core.deadlock_api import ServiceUnavailableError
from dashboard.core.enums import DataSource
from dashboard.core.exceptions import EmptyMetaSampleError
from dashboard.features.meta.gateway import LIVE_META_NOTES, LiveMetaGateway
from dashboard.features.meta.transformers import LIVE_PATCH_FALLBACK_LABEL


@pytest.fixture
def mock_client():
    client = AsyncMock()
    client.get_hero_analytics.return_value = [
        {"hero_id": 1, "wins": 60, "losses": 40, "matches": 100, "players": 80},
        {"hero_id": 2, "wins": 20, "losses": 30, "matches": 50, "players": 45},
        {"hero_id": 3, "matches": 0},
    ]
    client.get_item_analytics.return_value = [
        {"bucket": 1, "item_id": 501, "wins": 30, "losses": 10, "matches": 40, "avg_buy_time_s": 100},
    ]
    client.get_patches.return_value = [
        {"title": "Gameplay Update", "pub_date": "2025-03-01T00:00:00Z"}
    ]
    return client


@pytest.fixture
def gateway(mock_client, catalog):
    assets = AsyncMock()
    assets.get_assets_catalog.return_value = catalog
    return LiveMetaGateway(mock_client, assets, TTLCache("live_meta", ttl=300, maxsize=1))


async def test_build_snapshot(gateway):
    payload = await gateway.build_live_meta_snapshot()

    assert payload.source == DataSource.LIVE_API
    assert payload.patch_label == "Gameplay Update"
    assert payload.population_matches == 13
    assert payload.population_players == 80
    assert [stat.hero for stat in payload.hero_stats] == ["Infernus", "Seven"]
    assert payload.hero_stats[0].pick_rate == 66.7
    assert all(stat.ban_rate is None for stat in payload.hero_stats)
    assert len(payload.item_stats) == 1
    assert payload.notes == LIVE_META_NOTES


async def test_snapshot_is_cached(gateway, mock_client):
    first = await gateway.build_live_meta_snapshot()
    second = await gateway.build_live_meta_snapshot()

    assert first == second
    mock_client.get_hero_analytics.assert_awaited_once()


async def test_patch_failure_uses_fallback_label(gateway, mock_client):
    mock_client.get_patches.side_effect = ServiceUnavailableError("down")

    payload = await gateway.build_live_meta_snapshot()

    assert payload.patch_label == LIVE_PATCH_FALLBACK_LABEL


async def test_no_usable_hero_rows_raises(gateway, mock_client):
    mock_client.get_hero_analytics.return_value = [{"hero_id": 1, "matches": 0}]

    with pytest.raises(EmptyMetaSampleError):
        await gateway.build_live_meta_snapshot()


async def test_item_analytics_failure_is_fatal(gateway, mock_client):
    mock_client.get_item_analytics.side_effect = ServiceUnavailableError("down")

    with pytest.raises(ServiceUnavailableError):
        await gateway.build_live_meta_snapshot()
