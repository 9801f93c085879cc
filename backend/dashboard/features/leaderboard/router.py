from typing import Optional

from fastapi import APIRouter, Query

from dashboard.core.enums import LeaderboardRegion
from dashboard.core.http_errors import ApiRequestError, api_error_from_exception
from dashboard.core.validation import LEADERBOARD_LIMIT_MAX, LEADERBOARD_LIMIT_MIN
from dashboard.features.leaderboard.schemas import LeaderboardPayload
from dashboard.features.stats.dependencies import StatsServiceDep
from dashboard.utils import to_int

router = APIRouter(tags=["leaderboard"])

DEFAULT_REGION = LeaderboardRegion.EUROPE.value
DEFAULT_LIMIT = 100


def parse_region(raw: Optional[str]) -> LeaderboardRegion:
    value = (raw or "").strip() or DEFAULT_REGION
    try:
        return LeaderboardRegion(value)
    except ValueError:
        allowed = ", ".join(region.value for region in LeaderboardRegion)
        raise ApiRequestError.bad_request(
            f"Unknown leaderboard region: {value}.",
            details=f"Allowed values: {allowed}",
        ) from None


def parse_limit(raw: Optional[str]) -> int:
    value = (raw or "").strip()
    limit = to_int(value) if value else DEFAULT_LIMIT
    if not LEADERBOARD_LIMIT_MIN <= limit <= LEADERBOARD_LIMIT_MAX:
        raise ApiRequestError.bad_request(
            f"limit must be between {LEADERBOARD_LIMIT_MIN} and {LEADERBOARD_LIMIT_MAX}.",
            details=raw,
        )
    return limit


def parse_hero_id(raw: Optional[str]) -> Optional[int]:
    value = (raw or "").strip()
    if not value:
        return None
    hero_id = to_int(value)
    if hero_id < 1:
        raise ApiRequestError.bad_request("heroId must be a positive integer.", details=raw)
    return hero_id


@router.get("/leaderboard", response_model=LeaderboardPayload)
async def get_leaderboard(
    service: StatsServiceDep,
    region: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    hero_id: Optional[str] = Query(None, alias="heroId"),
) -> LeaderboardPayload:
    """Get the regional leaderboard, optionally filtered to one hero"""
    parsed_region = parse_region(region)
    parsed_limit = parse_limit(limit)
    parsed_hero_id = parse_hero_id(hero_id)
    try:
        return await service.get_leaderboard(parsed_region, parsed_limit, parsed_hero_id)
    except Exception as e:
        raise api_error_from_exception(e, "Failed to load the Deadlock leaderboard.")
