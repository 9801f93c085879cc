"""Stats service: live data first, synthetic data when the live path fails.

Thin orchestration layer:
- every call goes to the live source
- failures fall back to the synthetic source when the policy allows it
- otherwise the original exception propagates to the HTTP boundary
"""

from typing import Optional

from dashboard.core.decorators import with_synthetic_fallback
from dashboard.core.enums import LeaderboardRegion
from dashboard.core.validation import is_valid_steam_id64
from dashboard.features.leaderboard.schemas import LeaderboardPayload
from dashboard.features.meta.schemas import MetaPayload
from dashboard.features.players.schemas import PlayerProfilePayload
from dashboard.protocols import StatsDataSource

SERVICE_NAME = "DeadlockStatsService"


class DeadlockStatsService:
    """Orchestrates the live and synthetic data sources."""

    def __init__(
        self,
        live: StatsDataSource,
        synthetic: StatsDataSource,
        allow_mock_fallback: bool,
    ):
        """
        Initialize the service.

        :param live: Live data source, tried first
        :param synthetic: Synthetic data source used as fallback
        :param allow_mock_fallback: Whether live failures may be masked
        """
        self.live = live
        self.synthetic = synthetic
        self.allow_mock_fallback = allow_mock_fallback

    @staticmethod
    def is_valid_steam_id64(value: object) -> bool:
        """Whether ``value`` is a 17-digit SteamID64."""
        return is_valid_steam_id64(value)

    @with_synthetic_fallback(SERVICE_NAME)
    async def get_player_profile(self, steam_id64: str, count: int) -> PlayerProfilePayload:
        """Player profile with its most recent matches."""
        return await self.live.get_player_profile(steam_id64, count)

    @with_synthetic_fallback(SERVICE_NAME)
    async def get_meta_stats(self) -> MetaPayload:
        """Hero and item meta statistics."""
        return await self.live.get_meta_stats()

    @with_synthetic_fallback(SERVICE_NAME)
    async def get_leaderboard(
        self,
        region: LeaderboardRegion,
        limit: int,
        hero_id: Optional[int] = None,
    ) -> LeaderboardPayload:
        """Regional leaderboard, optionally for one hero."""
        return await self.live.get_leaderboard(region, limit, hero_id)
