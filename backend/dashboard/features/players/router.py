from typing import Optional

from fastapi import APIRouter, Query

from dashboard.core.enums import ErrorCode
from dashboard.core.http_errors import ApiRequestError, api_error_from_exception
from dashboard.core.validation import PROFILE_COUNT_MAX, PROFILE_COUNT_MIN, is_valid_steam_id64
from dashboard.features.players.schemas import PlayerProfilePayload
from dashboard.features.stats.dependencies import StatsServiceDep
from dashboard.utils import to_int

router = APIRouter(tags=["players"])


def parse_profile_query(steam_id64: Optional[str], count: Optional[str]) -> tuple[str, int]:
    """Validate the raw player query parameters.

    :returns: The trimmed SteamID64 and the match count
    :raises ApiRequestError: With BAD_REQUEST, INVALID_STEAM_ID64 or INVALID_COUNT
    """
    steam_id64 = (steam_id64 or "").strip()
    if not steam_id64:
        raise ApiRequestError.bad_request("Missing steamId64 query parameter.")
    if not is_valid_steam_id64(steam_id64):
        raise ApiRequestError(
            ErrorCode.INVALID_STEAM_ID64,
            400,
            "steamId64 must be exactly 17 digits.",
            details=steam_id64,
        )

    parsed_count = to_int((count or "").strip() or "20")
    if not PROFILE_COUNT_MIN <= parsed_count <= PROFILE_COUNT_MAX:
        raise ApiRequestError(
            ErrorCode.INVALID_COUNT,
            400,
            f"count must be between {PROFILE_COUNT_MIN} and {PROFILE_COUNT_MAX}.",
            details=count,
        )
    return steam_id64, parsed_count


@router.get("/player", response_model=PlayerProfilePayload)
async def get_player_profile(
    service: StatsServiceDep,
    steam_id64: Optional[str] = Query(None, alias="steamId64"),
    count: Optional[str] = Query(None),
) -> PlayerProfilePayload:
    """Get a player profile with recent matches"""
    steam_id64, parsed_count = parse_profile_query(steam_id64, count)
    try:
        return await service.get_player_profile(steam_id64, parsed_count)
    except Exception as e:
        raise api_error_from_exception(e, "Failed to load the Deadlock player profile.")
