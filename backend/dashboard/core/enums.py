"""Shared enums used across features.

This module provides a single source of truth for enums used in both
transformers and schemas.
"""

from enum import Enum


class DataSource(str, Enum):
    """Which path produced a payload."""

    MOCK = "mock"
    DATABASE = "database"
    LIVE_API = "live_api"


class MatchOutcome(str, Enum):
    """Match result from the player's point of view."""

    WIN = "WIN"
    LOSS = "LOSS"


class MatchMode(str, Enum):
    """Deadlock match modes shown on the dashboard."""

    QUICKPLAY = "Quickplay"
    RANKED = "Ranked"
    CUSTOM = "Custom"


class LeaderboardRegion(str, Enum):
    """Regions served by the Deadlock leaderboard."""

    EUROPE = "Europe"
    ASIA = "Asia"
    NAMERICA = "NAmerica"
    SAMERICA = "SAmerica"
    OCEANIA = "Oceania"


class AssetKind(str, Enum):
    """Asset families with distinct image field conventions."""

    HERO = "hero"
    ITEM = "item"
    RANK = "rank"


class ErrorCode(str, Enum):
    """Machine-readable codes for error payloads."""

    INVALID_STEAM_ID64 = "INVALID_STEAM_ID64"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_COUNT = "INVALID_COUNT"
    BAD_REQUEST = "BAD_REQUEST"
