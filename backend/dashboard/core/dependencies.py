"""Core dependencies for the FastAPI application.

The :class:`CoreContainer` is the composition root for process-wide state:
one Deadlock API client and one cache per cached concern. Feature
dependencies build their gateways and services on top of it.
"""

from typing import Annotated, Optional

from fastapi import Depends

from .cache import Clock, TTLCache
from .config import Settings, get_global_settings
from .deadlock_api import DeadlockAPIClient


class CoreContainer:
    """Process-wide client and caches."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[DeadlockAPIClient] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the container.

        :param settings: Application settings
        :param client: Deadlock API client (built from settings if None)
        :param clock: Time source shared by the caches (``time.time`` if None)
        """
        self.settings = settings
        self.client = client or DeadlockAPIClient(
            api_base_url=settings.deadlock_api_base_url,
            assets_base_url=settings.deadlock_assets_base_url,
            api_key=settings.deadlock_api_key,
            timeout_seconds=settings.api_timeout_seconds,
        )

        cache_kwargs = {"clock": clock} if clock else {}
        self.assets_cache = TTLCache(
            "assets", ttl=settings.assets_cache_ttl_seconds, maxsize=1, **cache_kwargs
        )
        self.meta_cache = TTLCache(
            "live_meta", ttl=settings.meta_cache_ttl_seconds, maxsize=1, **cache_kwargs
        )
        self.leaderboard_cache = TTLCache(
            "leaderboard", ttl=settings.leaderboard_cache_ttl_seconds, **cache_kwargs
        )
        # Synthetic meta never changes within a process
        self.mock_meta_cache = TTLCache("mock_meta", ttl=None, maxsize=1, **cache_kwargs)

    async def close(self) -> None:
        """Release the HTTP session."""
        await self.client.close()


_container: Optional[CoreContainer] = None


def get_core_container() -> CoreContainer:
    """Get or create the global container."""
    global _container
    if _container is None:
        _container = CoreContainer(get_global_settings())
    return _container


async def close_core_container() -> None:
    """Close and drop the global container, if one was created."""
    global _container
    if _container is not None:
        await _container.close()
        _container = None


# Type aliases for cleaner dependency injection
CoreContainerDep = Annotated[CoreContainer, Depends(get_core_container)]

__all__ = [
    "CoreContainer",
    "get_core_container",
    "close_core_container",
    "CoreContainerDep",
]
