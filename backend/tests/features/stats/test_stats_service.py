"""
Tests for the stats service fallback policy and its data sources.
"""

import threading
from unittest.mock import AsyncMock, patch

import pytest

from dashboard.core.cache import TTLCache
from dashboard.core.config import Settings
from dashboard.core.dependencies import CoreContainer
from dashboard.core.enums import DataSource, LeaderboardRegion
from dashboard.core.exceptions import EmptyMatchHistoryError
from dashboard.features.meta.schemas import MetaPayload
from dashboard.features.stats.dependencies import (
    get_live_source,
    get_stats_service,
    get_synthetic_source,
)
from dashboard.features.stats.service import DeadlockStatsService
from dashboard.features.stats.sources import LiveDataSource, SyntheticDataSource
from dashboard.features.synthetic.generator import build_mock_leaderboard, build_mock_player_profile

STEAM_ID64 = "76561198000000000"


@pytest.fixture
def mock_live():
    return AsyncMock()


@pytest.fixture
def synthetic():
    return SyntheticDataSource(TTLCache("mock_meta", ttl=None, maxsize=1))


def make_service(live, synthetic, allow_mock_fallback=True):
    return DeadlockStatsService(
        live=live, synthetic=synthetic, allow_mock_fallback=allow_mock_fallback
    )


async def test_live_result_returned_untouched(mock_live, synthetic, fixed_now):
    live_payload = build_mock_player_profile(STEAM_ID64, 3, fixed_now)
    mock_live.get_player_profile.return_value = live_payload

    result = await make_service(mock_live, synthetic).get_player_profile(STEAM_ID64, 3)

    assert result is live_payload
    mock_live.get_player_profile.assert_awaited_once_with(STEAM_ID64, 3)


async def test_empty_history_falls_back_to_synthetic(mock_live, synthetic):
    mock_live.get_player_profile.side_effect = EmptyMatchHistoryError(39734272)

    result = await make_service(mock_live, synthetic).get_player_profile(STEAM_ID64, 20)

    assert result.source == DataSource.MOCK
    assert result.player.steam_id64 == STEAM_ID64
    assert len(result.matches) == 20
    assert result.aggregates.total_matches == 20
    assert "EmptyMatchHistoryError" in result.notes[0]


async def test_fallback_disabled_propagates(mock_live, synthetic):
    error = EmptyMatchHistoryError(39734272)
    mock_live.get_player_profile.side_effect = error

    service = make_service(mock_live, synthetic, allow_mock_fallback=False)

    with pytest.raises(EmptyMatchHistoryError) as exc_info:
        await service.get_player_profile(STEAM_ID64, 20)

    assert exc_info.value is error


async def test_leaderboard_fallback_keeps_arguments(mock_live, fixed_now):
    mock_live.get_leaderboard.side_effect = TimeoutError()
    mock_synthetic = AsyncMock()
    mock_synthetic.get_leaderboard.return_value = build_mock_leaderboard(
        LeaderboardRegion.ASIA, 10, 3, fixed_now
    )

    result = await make_service(mock_live, mock_synthetic).get_leaderboard(
        LeaderboardRegion.ASIA, 10, 3
    )

    mock_synthetic.get_leaderboard.assert_awaited_once_with(LeaderboardRegion.ASIA, 10, 3)
    assert result.notes[0].startswith("Live data unavailable (TimeoutError)")
    assert result.notes[1:] == mock_synthetic.get_leaderboard.return_value.notes


async def test_meta_fallback(mock_live):
    mock_live.get_meta_stats.side_effect = RuntimeError("boom")
    mock_synthetic = AsyncMock()
    mock_synthetic.get_meta_stats.return_value = MetaPayload(
        source=DataSource.MOCK,
        fetched_at="2026-01-15T12:00:00.000Z",
        patch_label="Sample",
        population_players=0,
        population_matches=0,
        hero_stats=[],
        item_stats=[],
        notes=["synthetic"],
    )

    result = await make_service(mock_live, mock_synthetic).get_meta_stats()

    assert result.source == DataSource.MOCK
    assert result.notes == [
        "Live data unavailable (RuntimeError); showing synthetic demo data instead.",
        "synthetic",
    ]
    mock_synthetic.get_meta_stats.assert_awaited_once_with()


def test_is_valid_steam_id64():
    assert DeadlockStatsService.is_valid_steam_id64(STEAM_ID64)
    assert not DeadlockStatsService.is_valid_steam_id64("123")


async def test_synthetic_meta_built_once(synthetic):
    with patch("dashboard.features.stats.sources.build_mock_meta_snapshot") as build:
        build.return_value = {"patch": "mock"}

        first = await synthetic.get_meta_stats()
        second = await synthetic.get_meta_stats()

    build.assert_called_once_with()
    assert first == second == {"patch": "mock"}


async def test_synthetic_meta_built_off_the_event_loop(synthetic):
    loop_thread = threading.get_ident()
    build_threads = []

    def build():
        build_threads.append(threading.get_ident())
        return {"patch": "mock"}

    with patch("dashboard.features.stats.sources.build_mock_meta_snapshot", side_effect=build):
        await synthetic.get_meta_stats()

    assert len(build_threads) == 1
    assert build_threads[0] != loop_thread


async def test_synthetic_leaderboard(synthetic):
    payload = await synthetic.get_leaderboard(LeaderboardRegion.OCEANIA, 5)
    assert payload.source == DataSource.MOCK
    assert payload.total_entries == 5


async def test_live_source_delegates_to_gateways():
    players, meta, leaderboard = AsyncMock(), AsyncMock(), AsyncMock()
    source = LiveDataSource(players=players, meta=meta, leaderboard=leaderboard)

    await source.get_player_profile(STEAM_ID64, 7)
    await source.get_meta_stats()
    await source.get_leaderboard(LeaderboardRegion.EUROPE, 50, None)

    players.build_live_player_profile.assert_awaited_once_with(STEAM_ID64, 7)
    meta.build_live_meta_snapshot.assert_awaited_once_with()
    leaderboard.build_live_leaderboard.assert_awaited_once_with(LeaderboardRegion.EUROPE, 50, None)


@pytest.mark.parametrize("environment,expected", [("dev", True), ("production", False)])
def test_service_wiring_follows_settings(environment, expected):
    container = CoreContainer(Settings(environment=environment))

    live = get_live_source(container)
    synthetic = get_synthetic_source(container)
    service = get_stats_service(container, live, synthetic)

    assert isinstance(service.live, LiveDataSource)
    assert isinstance(service.synthetic, SyntheticDataSource)
    assert service.allow_mock_fallback is expected
