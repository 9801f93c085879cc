"""Leaderboard feature module."""

from .gateway import LiveLeaderboardGateway
from .schemas import LeaderboardEntry, LeaderboardHeroRef, LeaderboardPayload

__all__ = [
    "LiveLeaderboardGateway",
    "LeaderboardEntry",
    "LeaderboardHeroRef",
    "LeaderboardPayload",
]
