"""
Deadlock API Gateway - Anti-Corruption Layer for the leaderboard feature.

Fetches a regional (optionally per-hero) leaderboard, resolves hero and rank
assets, and caches the result per region, hero and limit.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

import structlog

from dashboard.core.cache import TTLCache
from dashboard.core.enums import DataSource, LeaderboardRegion
from dashboard.core.exceptions import EmptyLeaderboardError
from dashboard.utils import to_iso, utc_now

from .schemas import LeaderboardPayload
from .transformers import build_leaderboard_entries

if TYPE_CHECKING:
    from dashboard.core.deadlock_api.client import DeadlockAPIClient
    from dashboard.features.assets.gateway import AssetCatalogGateway

logger = structlog.get_logger(__name__)

LIVE_LEADERBOARD_NOTES = [
    "Live source: deadlock-api.com leaderboard endpoint.",
    "SteamID64 is derived from the first known account ID of each entry.",
]


def leaderboard_cache_key(region: str, hero_id: Optional[int], limit: int) -> str:
    """Cache key of one leaderboard view."""
    return f"{region}:{hero_id or 'all'}:{limit}"


class LiveLeaderboardGateway:
    """Builds leaderboards from the Deadlock live API."""

    def __init__(
        self,
        client: "DeadlockAPIClient",
        assets: "AssetCatalogGateway",
        cache: TTLCache[LeaderboardPayload],
    ):
        """
        Initialize gateway.

        :param client: Deadlock API client
        :param assets: Asset catalog gateway used for hero and rank icons
        :param cache: Cache keyed by region, hero and limit
        """
        self._client = client
        self._assets = assets
        self._cache = cache

    async def build_live_leaderboard(
        self,
        region: LeaderboardRegion,
        limit: int,
        hero_id: Optional[int] = None,
    ) -> LeaderboardPayload:
        """
        Return a live leaderboard.

        :param region: Leaderboard region
        :param limit: Maximum number of entries
        :param hero_id: Restrict to one hero when given
        :returns: Leaderboard payload with source ``live_api``
        :raises EmptyLeaderboardError: If the upstream returned no entries
        :raises DeadlockAPIError: If the leaderboard fetch failed
        """
        region = LeaderboardRegion(region)
        key = leaderboard_cache_key(region.value, hero_id, limit)
        return await self._cache.get_or_load(
            key, lambda: self._build(region, limit, hero_id)
        )

    async def _build(
        self, region: LeaderboardRegion, limit: int, hero_id: Optional[int]
    ) -> LeaderboardPayload:
        catalog, raw = await asyncio.gather(
            self._assets.get_assets_catalog(),
            self._client.get_leaderboard(region.value, hero_id),
        )

        entries = build_leaderboard_entries(raw, catalog, limit)
        if not entries:
            raise EmptyLeaderboardError(region.value, hero_id)

        logger.info(
            "Live leaderboard built",
            region=region.value,
            hero_id=hero_id,
            entries=len(entries),
        )

        return LeaderboardPayload(
            source=DataSource.LIVE_API,
            fetched_at=to_iso(utc_now()),
            region=region,
            total_entries=len(entries),
            entries=entries,
            notes=list(LIVE_LEADERBOARD_NOTES),
        )
