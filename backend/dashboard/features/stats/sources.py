"""Live and synthetic implementations of :class:`StatsDataSource`."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from dashboard.core.cache import TTLCache
from dashboard.core.enums import LeaderboardRegion
from dashboard.features.leaderboard.schemas import LeaderboardPayload
from dashboard.features.meta.schemas import MetaPayload
from dashboard.features.players.schemas import PlayerProfilePayload
from dashboard.features.synthetic.generator import (
    build_mock_leaderboard,
    build_mock_meta_snapshot,
    build_mock_player_profile,
)

if TYPE_CHECKING:
    from dashboard.features.leaderboard.gateway import LiveLeaderboardGateway
    from dashboard.features.meta.gateway import LiveMetaGateway
    from dashboard.features.players.gateway import LivePlayerGateway

MOCK_META_CACHE_KEY = "mock-meta"


class LiveDataSource:
    """Data from the Deadlock live API, through the feature gateways."""

    def __init__(
        self,
        players: "LivePlayerGateway",
        meta: "LiveMetaGateway",
        leaderboard: "LiveLeaderboardGateway",
    ):
        self._players = players
        self._meta = meta
        self._leaderboard = leaderboard

    async def get_player_profile(self, steam_id64: str, count: int) -> PlayerProfilePayload:
        return await self._players.build_live_player_profile(steam_id64, count)

    async def get_meta_stats(self) -> MetaPayload:
        return await self._meta.build_live_meta_snapshot()

    async def get_leaderboard(
        self,
        region: LeaderboardRegion,
        limit: int,
        hero_id: Optional[int] = None,
    ) -> LeaderboardPayload:
        return await self._leaderboard.build_live_leaderboard(region, limit, hero_id)


class SyntheticDataSource:
    """Deterministic synthetic data; never touches the network.

    The meta snapshot (64 full profiles) does not depend on the request. It is
    built once in a worker thread and kept in ``meta_cache``.
    """

    def __init__(self, meta_cache: TTLCache[MetaPayload]):
        self._meta_cache = meta_cache

    async def get_player_profile(self, steam_id64: str, count: int) -> PlayerProfilePayload:
        return build_mock_player_profile(steam_id64, count)

    async def get_meta_stats(self) -> MetaPayload:
        return await self._meta_cache.get_or_load(MOCK_META_CACHE_KEY, self._build_meta)

    async def get_leaderboard(
        self,
        region: LeaderboardRegion,
        limit: int,
        hero_id: Optional[int] = None,
    ) -> LeaderboardPayload:
        return build_mock_leaderboard(region, limit, hero_id)

    @staticmethod
    async def _build_meta() -> MetaPayload:
        # CPU-bound; keep it off the event loop
        return await asyncio.to_thread(build_mock_meta_snapshot)
