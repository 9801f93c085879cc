"""UTC timestamp helpers producing ISO-8601 strings with millisecond precision."""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def unix_seconds_to_iso(seconds: int, now: Optional[datetime] = None) -> str:
    """ISO string for a unix timestamp; non-positive values map to ``now``."""
    if seconds <= 0:
        return to_iso(now or utc_now())
    try:
        return to_iso(datetime.fromtimestamp(seconds, tz=timezone.utc))
    except (OverflowError, OSError, ValueError):
        return to_iso(now or utc_now())
