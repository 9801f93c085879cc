"""
Deadlock API Gateway - Anti-Corruption Layer for the meta feature.

Turns population-wide hero and item analytics into a :class:`MetaPayload`,
cached for a short window so that every dashboard hit does not re-run the
analytics queries.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog

from dashboard.core.cache import TTLCache
from dashboard.core.enums import DataSource
from dashboard.core.exceptions import EmptyMetaSampleError
from dashboard.utils import dict_rows, to_iso, utc_now

from .schemas import MetaPayload
from .transformers import (
    build_hero_meta_stats,
    build_item_meta_stats,
    latest_patch_label,
    population_sizes,
    usable_hero_rows,
)

if TYPE_CHECKING:
    from dashboard.core.deadlock_api.client import DeadlockAPIClient
    from dashboard.features.assets.gateway import AssetCatalogGateway

logger = structlog.get_logger(__name__)

META_CACHE_KEY = "live-meta"

LIVE_META_NOTES = [
    "Live source: deadlock-api.com analytics endpoints.",
    "Ban rate is not provided by the hero-stats endpoint used here (shown as N/A).",
    "Item purchase order is derived from `avg_buy_time_s` (estimated average order per hero).",
]


class LiveMetaGateway:
    """Builds meta snapshots from the Deadlock analytics endpoints."""

    def __init__(
        self,
        client: "DeadlockAPIClient",
        assets: "AssetCatalogGateway",
        cache: TTLCache[MetaPayload],
    ):
        """
        Initialize gateway.

        :param client: Deadlock API client
        :param assets: Asset catalog gateway used for names and icons
        :param cache: Cache holding the latest snapshot
        """
        self._client = client
        self._assets = assets
        self._cache = cache

    async def build_live_meta_snapshot(self) -> MetaPayload:
        """
        Return the live meta snapshot, rebuilding it when the cache expired.

        :returns: Meta payload with source ``live_api``
        :raises EmptyMetaSampleError: If hero analytics had no usable rows
        :raises DeadlockAPIError: If hero or item analytics could not be fetched
        """
        return await self._cache.get_or_load(META_CACHE_KEY, self._build_snapshot)

    async def _build_snapshot(self) -> MetaPayload:
        catalog, hero_raw, item_raw, patches_raw = await asyncio.gather(
            self._assets.get_assets_catalog(),
            self._client.get_hero_analytics(),
            self._client.get_item_analytics(),
            self._fetch_patches(),
        )

        hero_rows = usable_hero_rows(dict_rows(hero_raw))
        if not hero_rows:
            raise EmptyMetaSampleError()

        total_picks, population_matches, population_players = population_sizes(hero_rows)
        hero_stats = build_hero_meta_stats(hero_rows, catalog, total_picks)
        item_stats = build_item_meta_stats(dict_rows(item_raw), catalog)

        logger.info(
            "Live meta snapshot built",
            heroes=len(hero_stats),
            items=len(item_stats),
            population_matches=population_matches,
        )

        return MetaPayload(
            source=DataSource.LIVE_API,
            fetched_at=to_iso(utc_now()),
            patch_label=latest_patch_label(dict_rows(patches_raw)),
            population_players=population_players,
            population_matches=population_matches,
            hero_stats=hero_stats,
            item_stats=item_stats,
            notes=list(LIVE_META_NOTES),
        )

    async def _fetch_patches(self) -> Any:
        try:
            return await self._client.get_patches()
        except Exception as e:
            logger.warning(
                "Patch list unavailable, using default label",
                error=str(e),
                error_type=type(e).__name__,
            )
            return []
