"""
Deadlock API Gateway - Anti-Corruption Layer for the players feature.

Combines the live player endpoints (Steam profile, match history, ranked
card, MMR history, per-hero stats) and per-hero analytics into a single
:class:`PlayerProfilePayload`. Match history failures are fatal; every other
player fetch degrades to an empty value with a warning.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import TYPE_CHECKING, Any, Awaitable, Dict, List, Optional, Set

import structlog

from dashboard.core.enums import DataSource
from dashboard.core.exceptions import EmptyMatchHistoryError
from dashboard.core.validation import clamp_count, steam_id64_to_account_id
from dashboard.utils import dict_rows, first_str, finite_or_none, round_half_up, to_int, to_iso, utc_now

from .schemas import PlayerIdentity, PlayerProfilePayload
from .transformers import (
    HeroEnrichment,
    aggregate_matches,
    derive_rank_badge_level,
    format_rank_tier,
    map_live_match_entry,
)

if TYPE_CHECKING:
    from dashboard.core.deadlock_api.client import DeadlockAPIClient
    from dashboard.features.assets.gateway import AssetCatalogGateway

logger = structlog.get_logger(__name__)

LIVE_PROFILE_NOTES = [
    "Live source: deadlock-api.com (no API key required for these endpoints).",
    "Profile, match history, KDA, duration, result, net worth (souls), rank and meta are real data.",
    "Damage, healing, item build and skill build are enriched from the player's per-hero "
    "analytics aggregates because per-match metadata is not decoded.",
    "The souls breakdown (creeps/players/objectives) is not exposed as JSON by the endpoints used here.",
]


async def _or_default(
    awaitable: Awaitable[Any], default: Any, operation: str, **context: Any
) -> Any:
    """Await a secondary fetch, replacing any failure with ``default``."""
    try:
        return await awaitable
    except Exception as e:
        logger.warning(
            "Secondary fetch failed, degrading",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        return default


class LivePlayerGateway:
    """Builds player profiles from the Deadlock live API."""

    def __init__(self, client: "DeadlockAPIClient", assets: "AssetCatalogGateway"):
        """
        Initialize gateway.

        :param client: Deadlock API client
        :param assets: Asset catalog gateway used for names and icons
        """
        self._client = client
        self._assets = assets

    async def build_live_player_profile(
        self, steam_id64: str, count: int, now: Optional[datetime] = None
    ) -> PlayerProfilePayload:
        """
        Build a player profile from live data.

        :param steam_id64: 17-digit SteamID64
        :param count: Number of most recent matches (clamped to 1-50)
        :param now: Timestamp used for ``fetchedAt`` and missing start times
        :returns: Profile payload with source ``live_api``
        :raises InvalidSteamIdError: If the SteamID64 maps to no valid account
        :raises EmptyMatchHistoryError: If no usable match history came back
        :raises DeadlockAPIError: If the match history or Steam profile fetch failed
        :raises AssetCatalogUnavailableError: If no asset table could be loaded
        """
        account_id = steam_id64_to_account_id(steam_id64)
        count = clamp_count(count)
        now = now or utc_now()
        log_context = {"account_id": account_id}

        logger.debug("Building live player profile", count=count, **log_context)

        catalog, steam_raw, history_raw, card_raw, mmr_raw, hero_stats_raw = await asyncio.gather(
            self._assets.get_assets_catalog(),
            self._client.get_steam_profiles([account_id]),
            self._client.get_match_history(account_id),
            _or_default(self._client.get_player_card(account_id), None, "player_card", **log_context),
            _or_default(self._client.get_mmr_history(account_id), [], "mmr_history", **log_context),
            _or_default(
                self._client.get_player_hero_stats([account_id]), [], "player_hero_stats", **log_context
            ),
        )

        history = [row for row in dict_rows(history_raw) if to_int(row.get("match_id")) > 0]
        history.sort(key=lambda row: to_int(row.get("start_time")), reverse=True)
        history = history[:count]
        if not history:
            raise EmptyMatchHistoryError(account_id)

        steam_profile = next(
            (p for p in dict_rows(steam_raw) if to_int(p.get("account_id")) == account_id), {}
        )
        hero_stats = [
            row for row in dict_rows(hero_stats_raw) if to_int(row.get("account_id")) == account_id
        ]
        hero_stats_by_id: Dict[int, Dict[str, Any]] = {}
        for row in hero_stats:
            hero_id = to_int(row.get("hero_id"))
            if hero_id > 0:
                hero_stats_by_id[hero_id] = row

        mmr_rows = dict_rows(mmr_raw)
        ranked_match_ids: Set[int] = {
            match_id for match_id in (to_int(row.get("match_id")) for row in mmr_rows) if match_id > 0
        }

        hero_ids = list(
            dict.fromkeys(
                hero_id for hero_id in (to_int(row.get("hero_id")) for row in history) if hero_id > 0
            )
        )
        enrichments = await self.load_hero_enrichments(account_id, hero_ids)

        matches = [
            map_live_match_entry(
                entry=row,
                catalog=catalog,
                hero_stats=hero_stats_by_id.get(to_int(row.get("hero_id"))),
                enrichment=enrichments.get(to_int(row.get("hero_id"))),
                ranked_match_ids=ranked_match_ids,
                now=now,
            )
            for row in history
        ]

        card = _latest_card(card_raw)
        latest_mmr = max(mmr_rows, key=lambda row: to_int(row.get("start_time")), default=None)
        badge_level = derive_rank_badge_level(card, latest_mmr)
        player_score = finite_or_none((latest_mmr or {}).get("player_score"))

        hero_playtime = sum(max(0, to_int(row.get("time_played"))) for row in hero_stats)
        total_playtime = hero_playtime or sum(match.duration_seconds for match in matches)

        favorite_hero: Optional[str] = None
        if hero_stats:
            top = max(hero_stats, key=lambda row: to_int(row.get("matches_played")))
            top_hero_id = to_int(top.get("hero_id"))
            if top_hero_id in catalog.heroes_by_id:
                favorite_hero = catalog.heroes_by_id[top_hero_id].name

        player = PlayerIdentity(
            steam_id64=steam_id64,
            persona_name=first_str(steam_profile.get("personaname")) or f"Account_{account_id}",
            region=first_str(steam_profile.get("countrycode")).upper() or "N/A",
            account_level=None,
            total_playtime_seconds=total_playtime,
            rank_tier=format_rank_tier(card, latest_mmr),
            hidden_mmr=round_half_up(player_score) if player_score is not None else None,
            profile_seed=f"deadlock-api-{account_id}",
            avatar_url=first_str(
                steam_profile.get("avatarfull"),
                steam_profile.get("avatarmedium"),
                steam_profile.get("avatar"),
            )
            or None,
            rank_badge_icon_url=catalog.rank_icon(badge_level),
        )

        logger.info(
            "Live player profile built",
            matches=len(matches),
            heroes=len(hero_ids),
            ranked_matches=len(ranked_match_ids),
            **log_context,
        )

        return PlayerProfilePayload(
            source=DataSource.LIVE_API,
            fetched_at=to_iso(now),
            player=player,
            aggregates=aggregate_matches(matches, favorite_hero),
            matches=matches,
            notes=list(LIVE_PROFILE_NOTES),
        )

    async def load_hero_enrichments(
        self, account_id: int, hero_ids: List[int]
    ) -> Dict[int, HeroEnrichment]:
        """Fetch metrics, item stats and ability orders for each hero in parallel."""

        async def load(hero_id: int) -> HeroEnrichment:
            context = {"account_id": account_id, "hero_id": hero_id}
            metrics, item_rows, ability_orders = await asyncio.gather(
                _or_default(
                    self._client.get_player_metrics(account_id, hero_id), None, "player_metrics", **context
                ),
                _or_default(
                    self._client.get_player_item_stats(account_id, hero_id), [], "player_item_stats", **context
                ),
                _or_default(
                    self._client.get_player_ability_orders(account_id, hero_id),
                    [],
                    "player_ability_orders",
                    **context,
                ),
            )
            return HeroEnrichment(
                metrics=metrics if isinstance(metrics, dict) else None,
                item_rows=dict_rows(item_rows),
                ability_orders=dict_rows(ability_orders),
            )

        results = await asyncio.gather(*(load(hero_id) for hero_id in hero_ids))
        return dict(zip(hero_ids, results))


def _latest_card(card_raw: Any) -> Optional[Dict[str, Any]]:
    """The card endpoint answers with a list or a single object."""
    if isinstance(card_raw, dict):
        return card_raw
    rows = dict_rows(card_raw)
    return rows[0] if rows else None
