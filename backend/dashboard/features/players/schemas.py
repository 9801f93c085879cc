"""Pydantic schemas for player profile payloads."""

from typing import List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from dashboard.core.enums import DataSource, MatchMode, MatchOutcome
from dashboard.core.schemas import CamelModel
from dashboard.core.validation import is_valid_steam_id64


class PlayerIdentity(CamelModel):
    """Who the profile belongs to."""

    steam_id64: str = Field(..., description="17-digit SteamID64")
    persona_name: str
    region: str
    account_level: Optional[int] = None
    total_playtime_seconds: int = Field(..., ge=0)
    rank_tier: Optional[str] = None
    hidden_mmr: Optional[int] = None
    profile_seed: str
    avatar_url: Optional[str] = None
    rank_badge_icon_url: Optional[str] = None

    @field_validator("steam_id64")
    @classmethod
    def validate_steam_id64(cls, v: str) -> str:
        """SteamID64 must be exactly 17 digits."""
        if not is_valid_steam_id64(v):
            raise ValueError("steamId64 must contain exactly 17 digits")
        return v


class KdaStats(CamelModel):
    """Kills, deaths, assists and derived ratios."""

    kills: int = Field(..., ge=0)
    deaths: int = Field(..., ge=0)
    assists: int = Field(..., ge=0)
    ratio: float
    per_minute: float


class SoulBreakdown(CamelModel):
    """Where souls came from."""

    creeps: int = Field(..., ge=0)
    players: int = Field(..., ge=0)
    objectives: int = Field(..., ge=0)
    other: int = Field(..., ge=0)

    @property
    def total(self) -> int:
        return self.creeps + self.players + self.objectives + self.other


class EconomyStats(CamelModel):
    """Souls earned during a match."""

    total_souls: int = Field(..., ge=0)
    souls_per_minute: float
    breakdown: SoulBreakdown

    @model_validator(mode="after")
    def breakdown_sums_to_total(self) -> "EconomyStats":
        """The breakdown buckets must account for every soul."""
        if self.breakdown.total != self.total_souls:
            raise ValueError("souls breakdown must sum to totalSouls")
        return self


class CombatStats(CamelModel):
    """Damage dealt and healing done."""

    player_damage: int = Field(..., ge=0)
    objective_damage: int = Field(..., ge=0)
    healing: int = Field(..., ge=0)


class ItemPurchase(CamelModel):
    """One item in the purchase order."""

    order: int = Field(..., ge=1)
    item_name: str
    tier: int = Field(..., ge=1, le=4)
    cost: int = Field(..., ge=0)
    at_second: int = Field(..., ge=45)
    icon_url: Optional[str] = None


class SkillUpgrade(CamelModel):
    """One ability point in the skill build."""

    order: int = Field(..., ge=1)
    ability: str
    level_after: int = Field(..., ge=1)
    at_second: int = Field(..., ge=30)


class MatchBuild(CamelModel):
    """Item and skill order of a match."""

    items: List[ItemPurchase] = Field(default_factory=list)
    skills: List[SkillUpgrade] = Field(default_factory=list)


class MatchDetail(CamelModel):
    """One match from the player's history."""

    match_id: str
    hero: str
    hero_icon_url: Optional[str] = None
    result: MatchOutcome
    mode: MatchMode
    patch_version: str
    started_at: str
    duration_seconds: int = Field(..., gt=0)
    kda: KdaStats
    economy: EconomyStats
    combat: CombatStats
    build: MatchBuild


class PlayerAggregates(CamelModel):
    """Totals and averages derived from the returned matches."""

    total_matches: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)
    winrate: float
    average_kda_ratio: float
    average_kda_per_minute: float
    average_spm: float
    total_souls: int
    total_hero_damage: int
    total_objective_damage: int
    total_healing: int
    favorite_hero: Optional[str] = None
    last_match_at: Optional[str] = None


class PlayerProfilePayload(CamelModel):
    """Player profile response."""

    ok: Literal[True] = True
    source: DataSource
    fetched_at: str
    player: PlayerIdentity
    aggregates: PlayerAggregates
    matches: List[MatchDetail]
    notes: List[str] = Field(default_factory=list)
