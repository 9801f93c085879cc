"""Players feature module.

Live player profiles: match history mapping, per-hero build enrichment and
profile aggregates.
"""

from .gateway import LivePlayerGateway
from .schemas import (
    PlayerIdentity,
    KdaStats,
    SoulBreakdown,
    EconomyStats,
    CombatStats,
    ItemPurchase,
    SkillUpgrade,
    MatchBuild,
    MatchDetail,
    PlayerAggregates,
    PlayerProfilePayload,
)

__all__ = [
    # Gateway
    "LivePlayerGateway",
    # Schemas
    "PlayerIdentity",
    "KdaStats",
    "SoulBreakdown",
    "EconomyStats",
    "CombatStats",
    "ItemPurchase",
    "SkillUpgrade",
    "MatchBuild",
    "MatchDetail",
    "PlayerAggregates",
    "PlayerProfilePayload",
]
