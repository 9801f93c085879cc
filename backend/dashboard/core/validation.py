"""Validation helpers shared by the HTTP boundary and the data sources."""

import re

from .deadlock_api.constants import MAX_SAFE_INTEGER, STEAM_ID64_OFFSET
from .exceptions import InvalidSteamIdError

STEAM_ID64_PATTERN = re.compile(r"^\d{17}$")

PROFILE_COUNT_MIN = 1
PROFILE_COUNT_MAX = 50
# Synthetic profiles always show at least a handful of matches
MOCK_PROFILE_COUNT_MIN = 5
LEADERBOARD_LIMIT_MIN = 1
LEADERBOARD_LIMIT_MAX = 200


def is_valid_steam_id64(value: object) -> bool:
    """Return True for exactly 17 ASCII digits."""
    if not isinstance(value, str):
        return False
    return STEAM_ID64_PATTERN.fullmatch(value) is not None and value.isascii()


def steam_id64_to_account_id(steam_id64: str) -> int:
    """
    Convert a SteamID64 to the game's native account ID.

    :param steam_id64: 17-digit SteamID64 string
    :returns: Positive account ID (SteamID3)
    :raises InvalidSteamIdError: If the string is not numeric or the result is
        non-positive or beyond the safe integer range
    """
    try:
        value = int(steam_id64)
    except (TypeError, ValueError):
        raise InvalidSteamIdError(str(steam_id64), "not numeric") from None

    account_id = value - STEAM_ID64_OFFSET
    if account_id <= 0:
        raise InvalidSteamIdError(steam_id64, "non-positive account id")
    if account_id > MAX_SAFE_INTEGER:
        raise InvalidSteamIdError(steam_id64, "account id out of safe range")
    return account_id


def account_id_to_steam_id64(account_id: int) -> str | None:
    """Convert an account ID back to a SteamID64, or None if it does not fit."""
    if account_id <= 0:
        return None
    steam_id64 = str(account_id + STEAM_ID64_OFFSET)
    return steam_id64 if is_valid_steam_id64(steam_id64) else None


def clamp_count(count: int, minimum: int = PROFILE_COUNT_MIN) -> int:
    """Clamp a match count to [minimum, PROFILE_COUNT_MAX]."""
    return min(max(count, minimum), PROFILE_COUNT_MAX)
