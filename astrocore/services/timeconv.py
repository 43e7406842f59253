"""Civil time to Universal Time, Julian Day and sidereal time.

The Julian Day is computed directly from the Gregorian calendar date rather
than through the Swiss Ephemeris so the engine has no native dependency.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..errors import IncompleteLocationError, InvalidTimezoneError
from .constants import normalize

logger = logging.getLogger(__name__)

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0


def resolve_zone(tz: str) -> ZoneInfo:
    """Return the zone for an IANA identifier or raise ``InvalidTimezoneError``."""

    if not isinstance(tz, str) or not tz.strip():
        raise InvalidTimezoneError(tz)
    try:
        return ZoneInfo(tz.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        logger.warning("timezone_unresolved", extra={"tz": tz})
        raise InvalidTimezoneError(tz) from exc


def to_utc(local: datetime, tz: Optional[str] = None) -> datetime:
    """Convert a civil datetime to UTC.

    A naive ``local`` is read as wall-clock time in ``tz`` (the zone's DST
    rules apply; ambiguous times take the first occurrence). An aware
    ``local`` already fixes the instant, in which case ``tz`` is only
    validated when supplied.
    """

    if local.tzinfo is not None and local.utcoffset() is not None:
        if tz is not None:
            resolve_zone(tz)
        return local.astimezone(timezone.utc)
    if tz is None:
        raise IncompleteLocationError("A timezone id is required for a naive datetime")
    return local.replace(tzinfo=resolve_zone(tz)).astimezone(timezone.utc)


def julian_day(dt_utc: datetime) -> float:
    """Julian Day for a UTC datetime (Gregorian calendar)."""

    if dt_utc.tzinfo is not None and dt_utc.utcoffset() is not None:
        dt_utc = dt_utc.astimezone(timezone.utc)
    year, month, day = dt_utc.year, dt_utc.month, dt_utc.day
    hour = (
        dt_utc.hour
        + dt_utc.minute / 60
        + dt_utc.second / 3600
        + dt_utc.microsecond / 3_600_000_000
    )
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + hour / 24.0
        + b
        - 1524.5
    )


def julian_centuries(jd: float) -> float:
    return (jd - J2000) / DAYS_PER_CENTURY


def greenwich_sidereal_time(jd: float) -> float:
    """Greenwich mean sidereal time in degrees."""

    t = julian_centuries(jd)
    theta = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return normalize(theta)


def local_sidereal_time(jd: float, longitude: float) -> float:
    """Local mean sidereal time in degrees for an east-positive longitude."""

    return normalize(greenwich_sidereal_time(jd) + longitude)


__all__ = [
    "J2000",
    "greenwich_sidereal_time",
    "julian_centuries",
    "julian_day",
    "local_sidereal_time",
    "resolve_zone",
    "to_utc",
]
