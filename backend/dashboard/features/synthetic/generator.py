"""
Deterministic synthetic Deadlock data.

Every value is drawn from a :class:`Mulberry32` stream seeded from the input
(SteamID64, match ID or leaderboard view), so the same input and the same
``now`` always produce the same payload. Nothing here performs I/O or raises
for well-formed input.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from dashboard.core.deadlock_api.constants import STEAM_ID64_OFFSET
from dashboard.core.enums import DataSource, LeaderboardRegion, MatchMode, MatchOutcome
from dashboard.core.validation import (
    LEADERBOARD_LIMIT_MAX,
    LEADERBOARD_LIMIT_MIN,
    MOCK_PROFILE_COUNT_MIN,
    account_id_to_steam_id64,
    clamp_count,
)
from dashboard.features.leaderboard.schemas import (
    LeaderboardEntry,
    LeaderboardHeroRef,
    LeaderboardPayload,
)
from dashboard.features.meta.schemas import HeroMetaStat, ItemMetaStat, MetaPayload
from dashboard.features.meta.transformers import sort_hero_stats, top_item_stats
from dashboard.features.players.schemas import (
    CombatStats,
    EconomyStats,
    ItemPurchase,
    MatchBuild,
    MatchDetail,
    PlayerIdentity,
    PlayerProfilePayload,
    SkillUpgrade,
    SoulBreakdown,
)
from dashboard.features.players.transformers import aggregate_matches, build_kda
from dashboard.utils import clamp, percentage, round1, round_half_up, to_iso, utc_now

from .rng import Mulberry32, fnv1a_32
from .roster import (
    HEROES,
    ITEMS,
    MAX_ABILITY_LEVEL,
    MAX_ULTIMATE_LEVEL,
    MODES,
    PATCHES,
    PERSONA_NOUNS,
    PERSONA_PREFIXES,
    REGIONS,
    SKILL_SEQUENCE,
    ULTIMATE,
    healing_profile,
    rank_tier_from_mmr,
)

MINUTE_MS = 60_000
MATCH_ID_STRIDE = 7919

META_POPULATION_SIZE = 64
META_MATCHES_PER_PLAYER = 24
META_POPULATION_BASE = 76561198000000000
META_POPULATION_STRIDE = 12345
META_MIN_ITEM_SAMPLE = 18
MOCK_META_PATCH_LABEL = "Deadlock EA • Sample Meta (mock)"

LEADERBOARD_TOP_HEROES = 3
LEADERBOARD_TOP_BADGE_RANK = 11
LEADERBOARD_BADGE_STEP_CHANCE = 0.3

MOCK_PROFILE_NOTES = [
    "Demo mode: consistent synthetic data generated from the SteamID64.",
    "Schema ready for a Deadlock ingestion pipeline once a reliable source is available.",
]
MOCK_META_NOTES = [
    "Pick/Win/Ban rates are computed over the local synthetic population until a real collector is connected.",
    "The data structure is ready to be fed from a database.",
]
MOCK_LEADERBOARD_NOTES = [
    "Demo mode: synthetic leaderboard generated from the region and hero filter.",
]


def hero_bias(hero: str) -> float:
    """Stable per-hero strength in [0, 1)."""
    return (fnv1a_32(hero) % 100) / 100


def build_persona_name(steam_id64: str, rng: Mulberry32) -> str:
    return f"{rng.pick(PERSONA_PREFIXES)}{rng.pick(PERSONA_NOUNS)}_{steam_id64[-5:]}"


def choose_hero(main_pool: Sequence[str], rng: Mulberry32) -> str:
    """Main pool 62% of the time, any hero 22%, an off-pool hero otherwise."""
    roll = rng.next_float()
    if roll < 0.62:
        return rng.pick(main_pool)
    if roll < 0.84:
        return rng.pick(HEROES)
    candidates = [hero for hero in HEROES if hero not in main_pool]
    return rng.pick(candidates or HEROES)


def split_souls(total_souls: int, rng: Mulberry32) -> SoulBreakdown:
    """Split souls into sources; each share is capped by what is left."""
    creep_pct = 0.44 + rng.next_float() * 0.22
    player_pct = 0.15 + rng.next_float() * 0.18
    objective_pct = 0.12 + rng.next_float() * 0.16

    creeps = min(round_half_up(total_souls * creep_pct), total_souls)
    players = min(round_half_up(total_souls * player_pct), total_souls - creeps)
    objectives = min(round_half_up(total_souls * objective_pct), total_souls - creeps - players)
    other = total_souls - creeps - players - objectives
    return SoulBreakdown(creeps=creeps, players=players, objectives=objectives, other=other)


def build_item_purchase_order(duration_seconds: int, rng: Mulberry32) -> List[ItemPurchase]:
    """8-12 distinct items, cheapest tiers first, spread over the match."""
    count = rng.randint(8, 12)
    picked = rng.sample(ITEMS, count)
    picked.sort(key=lambda item: (item.tier, item.cost, item.name))

    items = []
    for index, item in enumerate(picked):
        time_floor = round_half_up(duration_seconds * (index + 1) / (count + 2))
        items.append(
            ItemPurchase(
                order=index + 1,
                item_name=item.name,
                tier=item.tier,
                cost=item.cost,
                at_second=max(45, time_floor + rng.randint(-45, 60)),
            )
        )
    return items


def build_skill_build(duration_seconds: int, rng: Mulberry32) -> List[SkillUpgrade]:
    """Canonical 16-step skill order with capped ability levels."""
    steps = len(SKILL_SEQUENCE)
    counters: Dict[str, int] = {}
    skills = []
    for index, ability in enumerate(SKILL_SEQUENCE):
        order = index + 1
        counters[ability] = counters.get(ability, 0) + 1
        cap = MAX_ULTIMATE_LEVEL if ability == ULTIMATE else MAX_ABILITY_LEVEL
        even_spacing = round_half_up(duration_seconds * order / (steps + 2))
        skills.append(
            SkillUpgrade(
                order=order,
                ability=ability,
                level_after=min(cap, counters[ability]),
                at_second=max(30, even_spacing + rng.randint(-20, 40)),
            )
        )
    return skills


def build_mock_player_profile(
    steam_id64: str, count: int, now: Optional[datetime] = None
) -> PlayerProfilePayload:
    """
    Synthetic player profile for a SteamID64.

    :param steam_id64: 17-digit SteamID64 (seeds every draw)
    :param count: Number of matches (clamped to 5-50)
    :param now: Reference time; match start times walk backwards from it
    :returns: Profile payload with source ``mock``
    """
    count = clamp_count(count, MOCK_PROFILE_COUNT_MIN)
    now = now or utc_now()
    seed = fnv1a_32(f"player:{steam_id64}")
    rng = Mulberry32(seed)

    persona_name = build_persona_name(steam_id64, rng)
    region = rng.pick(REGIONS)
    account_level = rng.randint(18, 240)
    total_playtime = rng.randint(90, 1800) * 3600 + rng.randint(0, 3599)
    hidden_mmr = rng.randint(950, 3400)

    main_pool = rng.sample(HEROES, 4)
    elapsed_ms = rng.randint(40, 360) * MINUTE_MS
    matches: List[MatchDetail] = []

    for index in range(count):
        hero = choose_hero(main_pool, rng)
        match_mode = rng.pick(MODES)
        duration_seconds = rng.randint(980, 2450)
        performance_bias = (hidden_mmr - 1800) / 1000 + (hero_bias(hero) - 0.5) * 0.25
        win_chance = clamp(0.48 + performance_bias * 0.08 + (rng.next_float() - 0.5) * 0.08, 0, 1)
        did_win = rng.next_float() <= win_chance

        kills_base = rng.randint(5, 18) if did_win else rng.randint(2, 14)
        deaths_base = rng.randint(1, 8) if did_win else rng.randint(4, 13)
        assists_base = rng.randint(7, 24) if did_win else rng.randint(4, 20)
        kills = max(0, kills_base + rng.randint(-2, 2))
        deaths = max(0, deaths_base + rng.randint(-1, 2))
        assists = max(0, assists_base + rng.randint(-3, 3))
        minutes = duration_seconds / 60

        spm_base = rng.randint(560, 930) if did_win else rng.randint(420, 780)
        souls_per_minute = round1(spm_base + (hidden_mmr - 1800) / 30 + rng.randint(-55, 55))
        total_souls = max(6500, round_half_up(souls_per_minute * minutes))

        breakdown = split_souls(total_souls, rng)
        player_damage = max(2000, round_half_up(total_souls * (0.55 + rng.next_float() * 0.85)))
        objective_damage = max(300, round_half_up(total_souls * (0.12 + rng.next_float() * 0.4)))
        healing = max(
            0,
            round_half_up(total_souls * (healing_profile(hero) * (0.08 + rng.next_float() * 0.25))),
        )

        items = build_item_purchase_order(duration_seconds, rng)
        skills = build_skill_build(duration_seconds, rng)

        elapsed_ms += duration_seconds * 1000
        elapsed_ms += rng.randint(25, 230) * MINUTE_MS

        matches.append(
            MatchDetail(
                match_id=f"DL-{int(steam_id64) + seed + index * MATCH_ID_STRIDE}",
                hero=hero,
                result=MatchOutcome.WIN if did_win else MatchOutcome.LOSS,
                mode=MatchMode(match_mode),
                patch_version=rng.pick(PATCHES),
                started_at=to_iso(now - timedelta(milliseconds=elapsed_ms)),
                duration_seconds=duration_seconds,
                kda=build_kda(kills, deaths, assists, minutes),
                economy=EconomyStats(
                    total_souls=total_souls,
                    souls_per_minute=souls_per_minute,
                    breakdown=breakdown,
                ),
                combat=CombatStats(
                    player_damage=player_damage,
                    objective_damage=objective_damage,
                    healing=healing,
                ),
                build=MatchBuild(items=items, skills=skills),
            )
        )

    return PlayerProfilePayload(
        source=DataSource.MOCK,
        fetched_at=to_iso(now),
        player=PlayerIdentity(
            steam_id64=steam_id64,
            persona_name=persona_name,
            region=region,
            account_level=account_level,
            total_playtime_seconds=total_playtime,
            rank_tier=rank_tier_from_mmr(hidden_mmr),
            hidden_mmr=hidden_mmr,
            profile_seed=f"mock-{seed}",
        ),
        aggregates=aggregate_matches(matches),
        matches=matches,
        notes=list(MOCK_PROFILE_NOTES),
    )


def population_steam_ids() -> List[str]:
    """SteamID64s of the synthetic meta population."""
    return [
        str(META_POPULATION_BASE + index * META_POPULATION_STRIDE + 7)
        for index in range(META_POPULATION_SIZE)
    ]


def simulate_bans(match_id: str) -> List[str]:
    """2-6 distinct heroes banned in a ranked match."""
    rng = Mulberry32.from_key(f"ban:{match_id}")
    ban_count = rng.randint(2, 6)
    banned: List[str] = []
    while len(banned) < ban_count:
        hero = rng.pick(HEROES)
        if hero not in banned:
            banned.append(hero)
    return banned


def build_mock_meta_snapshot(now: Optional[datetime] = None) -> MetaPayload:
    """
    Meta snapshot computed over a synthetic population.

    :param now: Reference time shared by every synthetic profile
    :returns: Meta payload with source ``mock``
    """
    now = now or utc_now()
    profiles = [
        build_mock_player_profile(steam_id64, META_MATCHES_PER_PLAYER, now)
        for steam_id64 in population_steam_ids()
    ]
    all_matches = [match for profile in profiles for match in profile.matches]
    total_matches = len(all_matches)

    picks = {hero: 0 for hero in HEROES}
    wins = {hero: 0 for hero in HEROES}
    bans = {hero: 0 for hero in HEROES}
    # (hero, item) -> [wins, total, order sum]
    item_pairs: Dict[tuple, List[int]] = {}
    ranked_matches = 0

    for match in all_matches:
        won = match.result == MatchOutcome.WIN
        if match.hero in picks:
            picks[match.hero] += 1
            wins[match.hero] += int(won)

        if match.mode == MatchMode.RANKED:
            ranked_matches += 1
            for hero in simulate_bans(match.match_id):
                bans[hero] += 1

        for purchase in match.build.items:
            pair = item_pairs.setdefault((match.hero, purchase.item_name), [0, 0, 0])
            pair[0] += int(won)
            pair[1] += 1
            pair[2] += purchase.order

    hero_stats = sort_hero_stats(
        HeroMetaStat(
            hero=hero,
            picks=picks[hero],
            wins=wins[hero],
            matches=total_matches,
            pick_rate=percentage(picks[hero], total_matches),
            win_rate=percentage(wins[hero], picks[hero]),
            ban_rate=percentage(bans[hero], ranked_matches) if ranked_matches > 0 else None,
        )
        for hero in HEROES
    )

    item_stats = top_item_stats(
        ItemMetaStat(
            hero=hero,
            item=item,
            sample_size=total,
            win_rate=round1(pair_wins / total * 100),
            avg_purchase_order=round1(order_sum / total),
        )
        for (hero, item), (pair_wins, total, order_sum) in item_pairs.items()
        if total >= META_MIN_ITEM_SAMPLE
    )

    return MetaPayload(
        source=DataSource.MOCK,
        fetched_at=to_iso(now),
        patch_label=MOCK_META_PATCH_LABEL,
        population_players=len(profiles),
        population_matches=total_matches,
        hero_stats=hero_stats,
        item_stats=item_stats,
        notes=list(MOCK_META_NOTES),
    )


def _badge_ladder() -> List[int]:
    """Badge levels from the highest rank and subrank downwards."""
    return [
        rank * 10 + subrank
        for rank in range(LEADERBOARD_TOP_BADGE_RANK, 0, -1)
        for subrank in range(6, 0, -1)
    ]


def build_mock_leaderboard(
    region: LeaderboardRegion,
    limit: int,
    hero_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> LeaderboardPayload:
    """
    Synthetic leaderboard for a region and optional hero.

    Badge levels never increase down the board. Hero IDs are 1-based
    positions in the synthetic hero roster.

    :param region: Leaderboard region
    :param limit: Number of entries (clamped to 1-200)
    :param hero_id: Hero every entry lists first, when given
    :param now: Timestamp used for ``fetchedAt``
    :returns: Leaderboard payload with source ``mock``
    """
    region = LeaderboardRegion(region)
    limit = int(clamp(limit, LEADERBOARD_LIMIT_MIN, LEADERBOARD_LIMIT_MAX))
    now = now or utc_now()
    rng = Mulberry32.from_key(f"leaderboard:{region.value}:{hero_id or 'all'}")

    ladder = _badge_ladder()
    ladder_index = 0
    roster_ids = list(range(1, len(HEROES) + 1))
    entries = []

    for position in range(1, limit + 1):
        if position > 1 and rng.next_float() < LEADERBOARD_BADGE_STEP_CHANCE:
            ladder_index = min(ladder_index + 1, len(ladder) - 1)
        badge_level = ladder[ladder_index]

        account_id = rng.randint(1_000_000, 1_999_999_999)
        steam_id64 = account_id_to_steam_id64(account_id) or str(account_id + STEAM_ID64_OFFSET)
        account_name = build_persona_name(steam_id64, rng)

        others = [candidate for candidate in roster_ids if candidate != hero_id]
        top_ids = ([hero_id] if hero_id else []) + rng.sample(others, LEADERBOARD_TOP_HEROES)
        top_ids = top_ids[:LEADERBOARD_TOP_HEROES]

        entries.append(
            LeaderboardEntry(
                position=position,
                account_name=account_name,
                primary_account_id=account_id,
                steam_id64=steam_id64,
                badge_level=badge_level,
                rank_label=f"Badge {badge_level}",
                top_heroes=[
                    LeaderboardHeroRef(
                        hero_id=top_id,
                        hero=HEROES[top_id - 1] if top_id <= len(HEROES) else f"Hero {top_id}",
                    )
                    for top_id in top_ids
                ],
            )
        )

    return LeaderboardPayload(
        source=DataSource.MOCK,
        fetched_at=to_iso(now),
        region=region,
        total_entries=len(entries),
        entries=entries,
        notes=list(MOCK_LEADERBOARD_NOTES),
    )
