"""Dependencies for the stats feature.

Builds the feature gateways on top of the core container and injects the
live and synthetic sources into the stats service.
"""

from typing import Annotated

from fastapi import Depends

from dashboard.core.dependencies import CoreContainerDep
from dashboard.features.assets.gateway import AssetCatalogGateway
from dashboard.features.leaderboard.gateway import LiveLeaderboardGateway
from dashboard.features.meta.gateway import LiveMetaGateway
from dashboard.features.players.gateway import LivePlayerGateway

from .service import DeadlockStatsService
from .sources import LiveDataSource, SyntheticDataSource


def get_live_source(container: CoreContainerDep) -> LiveDataSource:
    """Get the live data source.

    :param container: Core container holding the client and caches
    :returns: Live data source wired to the shared caches
    """
    assets = AssetCatalogGateway(container.client, container.assets_cache)
    return LiveDataSource(
        players=LivePlayerGateway(container.client, assets),
        meta=LiveMetaGateway(container.client, assets, container.meta_cache),
        leaderboard=LiveLeaderboardGateway(
            container.client, assets, container.leaderboard_cache
        ),
    )


def get_synthetic_source(container: CoreContainerDep) -> SyntheticDataSource:
    """Get the synthetic data source.

    :param container: Core container holding the synthetic meta cache
    :returns: Synthetic data source
    """
    return SyntheticDataSource(container.mock_meta_cache)


def get_stats_service(
    container: CoreContainerDep,
    live: Annotated[LiveDataSource, Depends(get_live_source)],
    synthetic: Annotated[SyntheticDataSource, Depends(get_synthetic_source)],
) -> DeadlockStatsService:
    """Get the stats service.

    :param container: Core container, for the fallback policy
    :param live: Live data source
    :param synthetic: Synthetic data source
    :returns: Stats service with injected sources
    """
    return DeadlockStatsService(
        live=live,
        synthetic=synthetic,
        allow_mock_fallback=container.settings.allow_mock_fallback,
    )


# Type aliases for cleaner dependency injection
StatsServiceDep = Annotated[DeadlockStatsService, Depends(get_stats_service)]

__all__ = [
    "get_live_source",
    "get_synthetic_source",
    "get_stats_service",
    "StatsServiceDep",
]
