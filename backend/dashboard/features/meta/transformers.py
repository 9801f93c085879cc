"""Transformers for hero and item analytics into meta statistics."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from dashboard.core.deadlock_api.constants import PLAYERS_PER_MATCH
from dashboard.features.assets.catalog import AssetCatalog
from dashboard.features.players.transformers import sort_item_rows_by_buy_order
from dashboard.utils import first_str, percentage, round_half_up, to_int

from .schemas import HeroMetaStat, ItemMetaStat

MAX_ITEM_META_STATS = 14
LIVE_PATCH_FALLBACK_LABEL = "Deadlock API (live)"


def sort_hero_stats(stats: Iterable[HeroMetaStat]) -> List[HeroMetaStat]:
    """Most picked first, then highest win rate."""
    return sorted(stats, key=lambda stat: (-stat.picks, -stat.win_rate))


def top_item_stats(stats: Iterable[ItemMetaStat]) -> List[ItemMetaStat]:
    """Highest win rate first, then largest sample, capped."""
    ranked = sorted(stats, key=lambda stat: (-stat.win_rate, -stat.sample_size))
    return ranked[:MAX_ITEM_META_STATS]


def usable_hero_rows(rows: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Hero analytics rows with a hero and at least one match."""
    return [
        row for row in rows if to_int(row.get("hero_id")) > 0 and to_int(row.get("matches")) > 0
    ]


def population_sizes(hero_rows: Sequence[Dict[str, Any]]) -> Tuple[int, int, int]:
    """
    Estimate the sample behind the hero analytics.

    :returns: (total hero picks, population matches, population players)
    """
    total_picks = sum(max(0, to_int(row.get("matches"))) for row in hero_rows)
    population_matches = max(
        [0, *(to_int(row.get("matches_per_bucket")) for row in hero_rows)]
    ) or max(0, round_half_up(total_picks / PLAYERS_PER_MATCH))
    population_players = max([0, *(to_int(row.get("players")) for row in hero_rows)]) or sum(
        max(0, to_int(row.get("players"))) for row in hero_rows
    )
    return total_picks, population_matches, population_players


def build_hero_meta_stats(
    hero_rows: Sequence[Dict[str, Any]], catalog: AssetCatalog, total_picks: int
) -> List[HeroMetaStat]:
    """Hero pick and win rates. Ban data is not published, so banRate stays null."""
    stats = []
    for row in hero_rows:
        hero_id = to_int(row.get("hero_id"))
        wins = to_int(row.get("wins"))
        losses = to_int(row.get("losses"))
        matches = max(0, to_int(row.get("matches")))
        picks = wins + losses if wins + losses > 0 else matches
        stats.append(
            HeroMetaStat(
                hero=catalog.hero_name(hero_id),
                hero_icon_url=catalog.hero_icon(hero_id),
                picks=picks,
                wins=wins,
                matches=matches,
                pick_rate=percentage(picks, total_picks),
                win_rate=percentage(wins, picks),
                ban_rate=None,
            )
        )
    return sort_hero_stats(stats)


def purchase_ranks(item_rows: Sequence[Dict[str, Any]]) -> Dict[Tuple[int, int], int]:
    """1-based purchase position of each (hero, item) within its hero bucket."""
    grouped: Dict[int, List[Dict[str, Any]]] = {}
    for row in item_rows:
        hero_id = to_int(row.get("bucket"))
        if hero_id > 0:
            grouped.setdefault(hero_id, []).append(row)

    ranks: Dict[Tuple[int, int], int] = {}
    for hero_id, rows in grouped.items():
        for index, row in enumerate(sort_item_rows_by_buy_order(rows)):
            ranks[(hero_id, to_int(row.get("item_id")))] = index + 1
    return ranks


def build_item_meta_stats(
    item_rows: Sequence[Dict[str, Any]], catalog: AssetCatalog
) -> List[ItemMetaStat]:
    """Best performing hero/item pairs from hero-bucketed item analytics."""
    usable = [
        row
        for row in item_rows
        if to_int(row.get("item_id")) > 0 and to_int(row.get("matches")) > 0
    ]
    ranks = purchase_ranks(usable)

    stats = []
    for row in usable:
        hero_id = to_int(row.get("bucket"))
        item_id = to_int(row.get("item_id"))
        wins = to_int(row.get("wins"))
        losses = to_int(row.get("losses"))
        matches = max(0, to_int(row.get("matches")))
        denominator = wins + losses if wins + losses > 0 else matches
        order = ranks.get((hero_id, item_id), 0)
        if matches <= 0 or order <= 0:
            continue
        stats.append(
            ItemMetaStat(
                hero=catalog.hero_name(hero_id),
                hero_icon_url=catalog.hero_icon(hero_id),
                item=catalog.item_name(item_id),
                item_icon_url=catalog.item_icon(item_id),
                sample_size=matches,
                win_rate=percentage(wins, denominator),
                avg_purchase_order=order,
            )
        )
    return top_item_stats(stats)


def _published_at(value: Any) -> float:
    """Unix time of a patch date; 0 when missing or unparseable."""
    text = first_str(value)
    if not text:
        return 0.0
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        try:
            moment = parsedate_to_datetime(text)
        except (TypeError, ValueError):
            return 0.0
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def latest_patch_label(patches: Sequence[Dict[str, Any]]) -> str:
    """Title of the most recently published patch."""
    titled = [patch for patch in patches if isinstance(patch.get("title"), str)]
    if not titled:
        return LIVE_PATCH_FALLBACK_LABEL
    latest = max(titled, key=lambda patch: _published_at(patch.get("pub_date")))
    return first_str(latest.get("title")) or LIVE_PATCH_FALLBACK_LABEL
