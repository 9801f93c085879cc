"""
Tests for live leaderboard mapping and the leaderboard gateway.
"""

from unittest.mock import AsyncMock

import pytest

from dashboard.core.cache import TTLCache
from dashboard.core.enums import DataSource, LeaderboardRegion
from dashboard.core.exceptions import EmptyLeaderboardError
from dashboard.features.leaderboard.gateway import LiveLeaderboardGateway, leaderboard_cache_key
from dashboard.features.leaderboard.transformers import (
    build_leaderboard_entries,
    leaderboard_rows,
    map_leaderboard_entry,
)


class TestMapLeaderboardEntry:
    """Single row mapping."""

    def test_full_row(self, catalog):
        row = {
            "rank": 3,
            "account_name": "",
            "possible_account_ids": [0, 123456, 7],
            "badge_level": 45,
            "top_hero_ids": [1, 0, 2],
        }

        entry = map_leaderboard_entry(row, 0, catalog)

        assert entry.position == 3
        assert entry.account_name == "Account_123456"
        assert entry.primary_account_id == 123456
        assert entry.steam_id64 == "76561197960389184"
        assert entry.badge_level == 45
        assert entry.rank_label == "Badge 45"
        assert entry.rank_badge_icon_url == "https://assets.test/ranks/badge_45.png"
        assert [(hero.hero_id, hero.hero) for hero in entry.top_heroes] == [
            (1, "Infernus"),
            (2, "Seven"),
        ]

    def test_position_falls_back_to_index(self, catalog):
        entry = map_leaderboard_entry({"account_name": "Someone"}, 4, catalog)

        assert entry.position == 5
        assert entry.account_name == "Someone"
        assert entry.primary_account_id is None
        assert entry.steam_id64 is None
        assert entry.badge_level is None
        assert entry.rank_label is None
        assert entry.top_heroes == []

    def test_rank_and_subrank_label(self, catalog):
        row = {"rank": 1, "badge_level": 0, "ranked_rank": 11, "ranked_subrank": 3}
        entry = map_leaderboard_entry(row, 0, catalog)
        assert entry.rank_label == "Rank 11.3"
        assert entry.rank_badge_icon_url is None

    def test_unknown_account(self, catalog):
        assert map_leaderboard_entry({"rank": 1}, 0, catalog).account_name == "Unknown"


def test_leaderboard_rows_shapes():
    assert leaderboard_rows({"entries": [{"rank": 1}, "junk"]}) == [{"rank": 1}]
    assert leaderboard_rows([{"rank": 2}]) == [{"rank": 2}]
    assert leaderboard_rows("nope") == []


def test_entries_sorted_and_truncated(catalog):
    raw = {"entries": [{"rank": 3}, {"rank": 1}, {"rank": 2}]}

    entries = build_leaderboard_entries(raw, catalog, limit=2)

    assert [entry.position for entry in entries] == [1, 2]


def test_cache_key():
    assert leaderboard_cache_key("Europe", None, 100) == "Europe:all:100"
    assert leaderboard_cache_key("Asia", 7, 10) == "Asia:7:10"


@pytest.fixture
def mock_client():
    client = AsyncMock()
    client.get_leaderboard.return_value = {
        "entries": [
            {"rank": 2, "account_name": "Second", "badge_level": 44},
            {"rank": 1, "account_name": "First", "badge_level": 45},
        ]
    }
    return client


@pytest.fixture
def gateway(mock_client, catalog):
    assets = AsyncMock()
    assets.get_assets_catalog.return_value = catalog
    return LiveLeaderboardGateway(mock_client, assets, TTLCache("leaderboard", ttl=300))


async def test_build_live_leaderboard(gateway, mock_client):
    payload = await gateway.build_live_leaderboard(LeaderboardRegion.EUROPE, 100, 7)

    assert payload.source == DataSource.LIVE_API
    assert payload.region == LeaderboardRegion.EUROPE
    assert payload.total_entries == 2
    assert [entry.account_name for entry in payload.entries] == ["First", "Second"]
    mock_client.get_leaderboard.assert_awaited_once_with("Europe", 7)


async def test_leaderboard_cached_per_view(gateway, mock_client):
    await gateway.build_live_leaderboard(LeaderboardRegion.ASIA, 10)
    await gateway.build_live_leaderboard(LeaderboardRegion.ASIA, 10)
    await gateway.build_live_leaderboard(LeaderboardRegion.ASIA, 5)

    assert mock_client.get_leaderboard.await_count == 2


async def test_empty_leaderboard_raises(gateway, mock_client):
    mock_client.get_leaderboard.return_value = {"entries": []}

    with pytest.raises(EmptyLeaderboardError):
        await gateway.build_live_leaderboard(LeaderboardRegion.OCEANIA, 100)
