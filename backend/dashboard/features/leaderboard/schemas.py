"""Pydantic schemas for leaderboard payloads."""

from typing import List, Literal, Optional

from pydantic import Field

from dashboard.core.enums import DataSource, LeaderboardRegion
from dashboard.core.schemas import CamelModel


class LeaderboardHeroRef(CamelModel):
    """A hero shown next to a leaderboard entry."""

    hero_id: int = Field(..., gt=0)
    hero: str
    hero_icon_url: Optional[str] = None


class LeaderboardEntry(CamelModel):
    """One ranked player."""

    position: int = Field(..., ge=1)
    account_name: str
    primary_account_id: Optional[int] = None
    steam_id64: Optional[str] = None
    badge_level: Optional[int] = None
    rank_label: Optional[str] = None
    rank_badge_icon_url: Optional[str] = None
    top_heroes: List[LeaderboardHeroRef] = Field(default_factory=list)


class LeaderboardPayload(CamelModel):
    """Leaderboard response."""

    ok: Literal[True] = True
    source: DataSource
    fetched_at: str
    region: LeaderboardRegion
    total_entries: int = Field(..., ge=0)
    entries: List[LeaderboardEntry]
    notes: List[str] = Field(default_factory=list)
