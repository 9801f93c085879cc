"""
Asset catalog gateway.

Translates the assets API's loosely-typed hero, item and rank lists into the
ID-keyed :class:`AssetCatalog` used by every live mapper, and caches the
result for the configured window.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, List

import structlog

from dashboard.core.cache import TTLCache
from dashboard.core.exceptions import AssetCatalogUnavailableError

from .catalog import AssetCatalog, build_catalog

if TYPE_CHECKING:
    from dashboard.core.deadlock_api.client import DeadlockAPIClient

logger = structlog.get_logger(__name__)

CATALOG_CACHE_KEY = "catalog"


class AssetCatalogGateway:
    """Loads and caches the hero/item/rank reference data."""

    def __init__(self, client: "DeadlockAPIClient", cache: TTLCache[AssetCatalog]):
        """
        Initialize gateway.

        :param client: Deadlock API client
        :param cache: Cache holding the built catalog
        """
        self._client = client
        self._cache = cache

    async def get_assets_catalog(self) -> AssetCatalog:
        """
        Return the asset catalog, loading it when the cache window has passed.

        :returns: Asset catalog (an independent copy)
        :raises AssetCatalogUnavailableError: If every asset fetch failed
        """
        return await self._cache.get_or_load(CATALOG_CACHE_KEY, self._load_catalog)

    async def _load_catalog(self) -> AssetCatalog:
        results = await asyncio.gather(
            self._client.get_heroes(),
            self._client.get_items(),
            self._client.get_ranks(),
            return_exceptions=True,
        )

        failures = [result for result in results if isinstance(result, Exception)]
        if len(failures) == len(results):
            logger.error(
                "Asset catalog unavailable",
                error=str(failures[0]),
                error_type=type(failures[0]).__name__,
            )
            raise AssetCatalogUnavailableError(original_error=failures[0])

        heroes_raw, items_raw, ranks_raw = (
            self._degrade(name, result)
            for name, result in zip(("heroes", "items", "ranks"), results)
        )
        catalog = build_catalog(
            heroes_raw, items_raw, ranks_raw, self._client.endpoints.asset_url
        )

        logger.info(
            "Asset catalog loaded",
            heroes=len(catalog.heroes_by_id),
            items=len(catalog.items_by_id),
            ranks=len(catalog.ranks_by_badge_level),
        )
        return catalog

    @staticmethod
    def _degrade(name: str, result: Any) -> List[Any]:
        """Replace a failed fetch with an empty list."""
        if isinstance(result, BaseException):
            logger.warning(
                "Asset fetch failed, using empty table",
                asset=name,
                error=str(result),
                error_type=type(result).__name__,
            )
            return []
        return result
