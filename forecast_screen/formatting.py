# ABOUTME: Pure display formatters for forecast values.
# ABOUTME: Temperatures, precipitation, wind, and dates rendered in the forecast's own timezone.

import logging
from datetime import datetime, timezone

from babel.dates import format_datetime, get_timezone

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"

HEADER_DATE_PATTERN = "EEEE, MMM d"
DAY_CELL_PATTERN = "EEE"


def format_temperature(temperature: int) -> str:
    return f"{temperature}°"


def format_precipitation(probability: float) -> str:
    """Render a 0..1 probability as a whole percentage."""
    return f"{round(probability * 100)}%"


def format_wind_speed(speed: int) -> str:
    return f"{speed} MPH"


def format_wind_direction(bearing: int) -> str:
    """Map a bearing in degrees to one of four 90° compass sectors.

    Sectors are half-open: NORTH is (315, 360] and [0, 45], EAST (45, 135],
    SOUTH (135, 225] and WEST (225, 315]. Bearings outside 0..359 wrap.
    """
    bearing %= 360
    if bearing > 315 or bearing <= 45:
        return "NORTH"
    if bearing <= 135:
        return "EAST"
    if bearing <= 225:
        return "SOUTH"
    return "WEST"


def format_date(epoch_seconds: int, timezone_name: str, pattern: str, locale: str = DEFAULT_LOCALE) -> str:
    """Format a UTC epoch timestamp with a CLDR pattern in the given IANA timezone.

    The device's local timezone never affects the result; unknown zone names fall back to UTC.
    """
    moment = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return format_datetime(moment, pattern, tzinfo=_zone(timezone_name), locale=locale)


def _zone(timezone_name: str):
    if timezone_name:
        try:
            return get_timezone(timezone_name)
        except (LookupError, ValueError):
            logger.warning("Unknown timezone %r, formatting dates in UTC", timezone_name)
    return get_timezone("UTC")
