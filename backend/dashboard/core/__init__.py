"""Core infrastructure module.

This module exports core utilities used across features.
Never imports from features - only from external libraries.
"""

from .config import Settings, get_settings, get_global_settings
from .exceptions import (
    ServiceException,
    ValidationError,
    InvalidSteamIdError,
    LiveDataUnavailableError,
    EmptyMatchHistoryError,
    EmptyMetaSampleError,
    EmptyLeaderboardError,
    AssetCatalogUnavailableError,
)
from .enums import (
    DataSource,
    MatchOutcome,
    MatchMode,
    LeaderboardRegion,
    AssetKind,
    ErrorCode,
)
from .cache import TTLCache

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_global_settings",
    # Exceptions
    "ServiceException",
    "ValidationError",
    "InvalidSteamIdError",
    "LiveDataUnavailableError",
    "EmptyMatchHistoryError",
    "EmptyMetaSampleError",
    "EmptyLeaderboardError",
    "AssetCatalogUnavailableError",
    # Enums
    "DataSource",
    "MatchOutcome",
    "MatchMode",
    "LeaderboardRegion",
    "AssetKind",
    "ErrorCode",
    # Cache
    "TTLCache",
]
