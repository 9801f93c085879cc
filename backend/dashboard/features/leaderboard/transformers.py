"""Transformers for live leaderboard rows."""

from typing import Any, Dict, List, Sequence

from dashboard.core.validation import account_id_to_steam_id64
from dashboard.features.assets.catalog import AssetCatalog
from dashboard.features.players.transformers import derive_rank_badge_level, format_rank_tier
from dashboard.utils import as_dict, as_list, dict_rows, first_positive, first_str, to_int

from .schemas import LeaderboardEntry, LeaderboardHeroRef


def leaderboard_rows(raw: Any) -> List[Dict[str, Any]]:
    """Entries of a leaderboard response, which may also be a bare list."""
    if isinstance(raw, list):
        return dict_rows(raw)
    return dict_rows(as_dict(raw).get("entries"))


def build_hero_refs(hero_ids: Sequence[Any], catalog: AssetCatalog) -> List[LeaderboardHeroRef]:
    """Resolve top hero IDs against the catalog, skipping invalid IDs."""
    refs = []
    for raw_id in hero_ids:
        hero_id = to_int(raw_id)
        if hero_id <= 0:
            continue
        refs.append(
            LeaderboardHeroRef(
                hero_id=hero_id,
                hero=catalog.hero_name(hero_id),
                hero_icon_url=catalog.hero_icon(hero_id),
            )
        )
    return refs


def map_leaderboard_entry(
    row: Dict[str, Any], index: int, catalog: AssetCatalog
) -> LeaderboardEntry:
    """
    Map one upstream leaderboard row.

    The position falls back to the row's index when ``rank`` is missing. The
    rank label follows the same cascade as player profiles, with the row's
    badge level standing in for the ranked card.
    """
    rank = to_int(row.get("rank"))
    primary_account_id = first_positive(as_list(row.get("possible_account_ids")))
    badge_level = to_int(row.get("badge_level"))
    card = {
        "ranked_badge_level": badge_level,
        "ranked_rank": row.get("ranked_rank"),
        "ranked_subrank": row.get("ranked_subrank"),
    }

    account_name = first_str(row.get("account_name"))
    if not account_name:
        account_name = f"Account_{primary_account_id}" if primary_account_id else "Unknown"

    return LeaderboardEntry(
        position=rank if rank > 0 else index + 1,
        account_name=account_name,
        primary_account_id=primary_account_id or None,
        steam_id64=account_id_to_steam_id64(primary_account_id) if primary_account_id else None,
        badge_level=badge_level if badge_level > 0 else None,
        rank_label=format_rank_tier(card, None),
        rank_badge_icon_url=catalog.rank_icon(derive_rank_badge_level(card, None)),
        top_heroes=build_hero_refs(as_list(row.get("top_hero_ids")), catalog),
    )


def build_leaderboard_entries(
    raw: Any, catalog: AssetCatalog, limit: int
) -> List[LeaderboardEntry]:
    """All mappable entries ordered by position and truncated to ``limit``."""
    entries = [
        map_leaderboard_entry(row, index, catalog)
        for index, row in enumerate(leaderboard_rows(raw))
    ]
    entries.sort(key=lambda entry: entry.position)
    return entries[:limit]
