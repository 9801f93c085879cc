"""Transformers for converting live API rows into player profile schemas.

This module provides the pure mapping functions used by the live player
gateway:
- match history rows → MatchDetail
- per-hero item/ability aggregates → build order
- ranked card / MMR history → rank label and badge level
- MatchDetail list → PlayerAggregates (shared with the synthetic generator)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Set

from dashboard.core.enums import MatchMode, MatchOutcome
from dashboard.features.assets.catalog import AssetCatalog, infer_tier_from_cost
from dashboard.utils import (
    as_dict,
    as_list,
    finite_or_infinity,
    finite_or_none,
    mode,
    percentage,
    round1,
    round2,
    round_half_up,
    safe_mean,
    to_int,
    unix_seconds_to_iso,
)

from .schemas import (
    CombatStats,
    EconomyStats,
    ItemPurchase,
    KdaStats,
    MatchBuild,
    MatchDetail,
    PlayerAggregates,
    SkillUpgrade,
    SoulBreakdown,
)

LIVE_PATCH_VERSION = "Deadlock API"
MAX_BUILD_ITEMS = 12
MAX_SKILL_STEPS = 16
MIN_ITEM_SECOND = 45
MAX_ITEM_TIER = 4
MIN_SKILL_SECOND = 30
DEFAULT_ITEM_SPACING_SECONDS = 180
CUSTOM_MATCH_MODE_THRESHOLD = 100


@dataclass
class HeroEnrichment:
    """Per-hero analytics fetched for one player."""

    metrics: Optional[Dict[str, Any]] = None
    item_rows: List[Dict[str, Any]] = field(default_factory=list)
    ability_orders: List[Dict[str, Any]] = field(default_factory=list)


def build_kda(kills: int, deaths: int, assists: int, minutes: float) -> KdaStats:
    """KDA block with ratio and per-minute rate."""
    return KdaStats(
        kills=kills,
        deaths=deaths,
        assists=assists,
        ratio=round2((kills + assists) / max(1, deaths)),
        per_minute=round2((kills + assists) / max(1, minutes)),
    )


def map_match_mode(entry: Dict[str, Any], ranked_match_ids: Set[int], match_id: int) -> MatchMode:
    """
    Classify a match history row.

    Ranked matches are the ones present in the MMR history. Rows carrying both
    brawl scores are quickplay; a high match_mode marks a custom lobby.
    """
    if match_id in ranked_match_ids:
        return MatchMode.RANKED
    if entry.get("brawl_score_team0") is not None and entry.get("brawl_score_team1") is not None:
        return MatchMode.QUICKPLAY
    if to_int(entry.get("match_mode")) >= CUSTOM_MATCH_MODE_THRESHOLD:
        return MatchMode.CUSTOM
    return MatchMode.QUICKPLAY


def derive_rank_badge_level(card: Optional[Dict[str, Any]], mmr: Optional[Dict[str, Any]]) -> int:
    """Badge level from the ranked card, else the latest MMR entry, else 0."""
    card_badge = to_int(as_dict(card).get("ranked_badge_level"))
    if card_badge > 0:
        return card_badge
    mmr_rank = to_int(as_dict(mmr).get("rank"))
    if mmr_rank > 0:
        return mmr_rank
    return 0


def format_rank_tier(card: Optional[Dict[str, Any]], mmr: Optional[Dict[str, Any]]) -> Optional[str]:
    """Human-readable rank label."""
    badge_level = derive_rank_badge_level(card, mmr)
    if badge_level > 0:
        return f"Badge {badge_level}"
    card = as_dict(card)
    ranked_rank = to_int(card.get("ranked_rank"))
    ranked_subrank = to_int(card.get("ranked_subrank"))
    if ranked_rank > 0 or ranked_subrank > 0:
        return f"Rank {max(0, ranked_rank)}.{max(0, ranked_subrank)}"
    return None


def _buy_order_key(row: Dict[str, Any]):
    return (finite_or_infinity(row.get("avg_buy_time_s")), -to_int(row.get("matches")))


def sort_item_rows_by_buy_order(rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Item rows with an item and matches, earliest average purchase first."""
    usable = [
        row for row in rows if to_int(row.get("item_id")) > 0 and to_int(row.get("matches")) > 0
    ]
    return sorted(usable, key=_buy_order_key)


def build_hero_item_order(
    catalog: AssetCatalog, item_rows: Sequence[Dict[str, Any]]
) -> List[ItemPurchase]:
    """Typical purchase order of a player on a hero."""
    rows = sort_item_rows_by_buy_order(item_rows)[:MAX_BUILD_ITEMS]

    items = []
    for index, row in enumerate(rows):
        item_id = to_int(row.get("item_id"))
        record = catalog.items_by_id.get(item_id)
        avg_buy_time = finite_or_none(row.get("avg_buy_time_s"))
        if avg_buy_time is None:
            avg_buy_time = (index + 1) * DEFAULT_ITEM_SPACING_SECONDS
        cost = record.cost if record else 0
        items.append(
            ItemPurchase(
                order=index + 1,
                item_name=catalog.item_name(item_id),
                tier=min(MAX_ITEM_TIER, record.tier) if record else infer_tier_from_cost(cost),
                cost=cost,
                at_second=max(MIN_ITEM_SECOND, round_half_up(avg_buy_time)),
                icon_url=record.icon_url if record else None,
            )
        )
    return items


def build_hero_skill_order(
    hero_id: int,
    catalog: AssetCatalog,
    ability_orders: Sequence[Dict[str, Any]],
    duration_seconds: int,
) -> List[SkillUpgrade]:
    """Most played ability order of a player on a hero, spread over a match."""
    candidates = [row for row in ability_orders if as_list(row.get("abilities"))]
    if not candidates:
        return []

    best = max(candidates, key=lambda row: (to_int(row.get("matches")), to_int(row.get("wins"))))
    ability_ids = as_list(best.get("abilities"))[:MAX_SKILL_STEPS]

    hero = catalog.heroes_by_id.get(hero_id)
    labels = hero.abilities if hero else {}
    counters: Dict[str, int] = {}
    total_steps = len(ability_ids)

    skills = []
    for index, raw_id in enumerate(ability_ids):
        ability_id = to_int(raw_id)
        label = labels.get(ability_id) or f"Ability {ability_id}"
        counters[label] = counters.get(label, 0) + 1
        skills.append(
            SkillUpgrade(
                order=index + 1,
                ability=label,
                level_after=counters[label],
                at_second=max(
                    MIN_SKILL_SECOND,
                    round_half_up((index + 1) * duration_seconds / (total_steps + 2)),
                ),
            )
        )
    return skills


def _per_minute_rate(*candidates: Any) -> float:
    for candidate in candidates:
        value = finite_or_none(candidate)
        if value is not None:
            return value
    return 0.0


def _metric_avg(metrics: Optional[Dict[str, Any]], name: str) -> Any:
    return as_dict(as_dict(metrics).get(name)).get("avg")


def map_live_match_entry(
    entry: Dict[str, Any],
    catalog: AssetCatalog,
    hero_stats: Optional[Dict[str, Any]],
    enrichment: Optional[HeroEnrichment],
    ranked_match_ids: Set[int],
    now: Optional[datetime] = None,
) -> MatchDetail:
    """
    Map one match history row to a MatchDetail.

    Combat totals are per-minute rates from the player's hero aggregates
    scaled to the match length. The upstream exposes only net worth, so the
    whole soul total lands in ``other``.
    """
    enrichment = enrichment or HeroEnrichment()
    hero_stats = hero_stats or {}

    match_id = to_int(entry.get("match_id"))
    hero_id = to_int(entry.get("hero_id"))
    duration_seconds = max(1, to_int(entry.get("match_duration_s")))
    minutes = duration_seconds / 60

    kills = max(0, to_int(entry.get("player_kills")))
    deaths = max(0, to_int(entry.get("player_deaths")))
    assists = max(0, to_int(entry.get("player_assists")))
    total_souls = max(0, to_int(entry.get("net_worth")))

    metrics = enrichment.metrics
    damage_rate = _per_minute_rate(
        hero_stats.get("damage_per_min"), _metric_avg(metrics, "player_damage_per_min")
    )
    objective_rate = _per_minute_rate(
        hero_stats.get("obj_damage_per_min"), _metric_avg(metrics, "boss_damage_per_min")
    )
    healing_rate = _per_minute_rate(
        _metric_avg(metrics, "healing_per_min"),
        _metric_avg(metrics, "player_healing_per_min"),
        _metric_avg(metrics, "self_healing_per_min"),
    )

    matches_played = to_int(hero_stats.get("matches_played"))
    skill_duration = duration_seconds
    if matches_played > 0:
        average_duration = round_half_up(to_int(hero_stats.get("time_played")) / matches_played)
        if average_duration > 0:
            skill_duration = average_duration

    return MatchDetail(
        match_id=str(match_id),
        hero=catalog.hero_name(hero_id),
        hero_icon_url=catalog.hero_icon(hero_id),
        result=MatchOutcome.WIN if to_int(entry.get("match_result")) > 0 else MatchOutcome.LOSS,
        mode=map_match_mode(entry, ranked_match_ids, match_id),
        patch_version=LIVE_PATCH_VERSION,
        started_at=unix_seconds_to_iso(to_int(entry.get("start_time")), now),
        duration_seconds=duration_seconds,
        kda=build_kda(kills, deaths, assists, minutes),
        economy=EconomyStats(
            total_souls=total_souls,
            souls_per_minute=round1(total_souls / max(1, minutes)),
            breakdown=SoulBreakdown(creeps=0, players=0, objectives=0, other=total_souls),
        ),
        combat=CombatStats(
            player_damage=max(0, round_half_up(damage_rate * minutes)),
            objective_damage=max(0, round_half_up(objective_rate * minutes)),
            healing=max(0, round_half_up(healing_rate * minutes)),
        ),
        build=MatchBuild(
            items=build_hero_item_order(catalog, enrichment.item_rows),
            skills=build_hero_skill_order(
                hero_id, catalog, enrichment.ability_orders, skill_duration
            ),
        ),
    )


def aggregate_matches(
    matches: Sequence[MatchDetail], favorite_hero: Optional[str] = None
) -> PlayerAggregates:
    """
    Totals and averages over a list of matches.

    :param matches: Matches, most recent first
    :param favorite_hero: Preferred favourite hero; defaults to the most
        played hero in ``matches``
    :returns: Player aggregates
    """
    total = len(matches)
    wins = sum(1 for match in matches if match.result == MatchOutcome.WIN)

    return PlayerAggregates(
        total_matches=total,
        wins=wins,
        losses=total - wins,
        winrate=percentage(wins, total),
        average_kda_ratio=round2(safe_mean([m.kda.ratio for m in matches])),
        average_kda_per_minute=round2(safe_mean([m.kda.per_minute for m in matches])),
        average_spm=round1(safe_mean([m.economy.souls_per_minute for m in matches])),
        total_souls=sum(m.economy.total_souls for m in matches),
        total_hero_damage=sum(m.combat.player_damage for m in matches),
        total_objective_damage=sum(m.combat.objective_damage for m in matches),
        total_healing=sum(m.combat.healing for m in matches),
        favorite_hero=favorite_hero or mode(m.hero for m in matches),
        last_match_at=matches[0].started_at if matches else None,
    )
