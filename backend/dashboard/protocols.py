"""Protocol definitions for the interchangeable stats data sources."""

from typing import Optional, Protocol
from abc import abstractmethod

from dashboard.core.enums import LeaderboardRegion
from dashboard.features.leaderboard.schemas import LeaderboardPayload
from dashboard.features.meta.schemas import MetaPayload
from dashboard.features.players.schemas import PlayerProfilePayload


class StatsDataSource(Protocol):
    """Anything that can produce player profiles, meta snapshots and leaderboards."""

    @abstractmethod
    async def get_player_profile(self, steam_id64: str, count: int) -> PlayerProfilePayload:
        """Profile and recent matches of one player."""
        ...

    @abstractmethod
    async def get_meta_stats(self) -> MetaPayload:
        """Population hero and item statistics."""
        ...

    @abstractmethod
    async def get_leaderboard(
        self,
        region: LeaderboardRegion,
        limit: int,
        hero_id: Optional[int] = None,
    ) -> LeaderboardPayload:
        """Regional leaderboard, optionally for one hero."""
        ...
