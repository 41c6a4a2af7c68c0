"""Time utilities for consistent timestamp handling."""

import time
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from guestdesk.observability.logging import get_logger

logger = get_logger(__name__)

FALLBACK_TIMEZONE = "UTC"


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def desk_today(tz_name: str) -> date:
    """Return today's date in the front desk's timezone."""
    try:
        tz = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(
            "Invalid timezone %s, falling back to %s",
            tz_name,
            FALLBACK_TIMEZONE,
        )
        tz = ZoneInfo(FALLBACK_TIMEZONE)
    return utc_now().astimezone(tz).date()
