"""Clock reads and the fixed English renderings served by the API.

Every builder takes a single sampled instant so all fields of one response
describe the same moment. Month names and AM/PM markers are spelled out here
instead of going through ``strftime`` so output does not depend on the host
locale.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from clock_server.schemas.clock import DateTimeInfo, HealthStatus

Clock = Callable[[], datetime]

HEALTHY = "healthy"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def utc_now() -> datetime:
    """Current wall-clock instant, timezone-aware in UTC."""
    return datetime.now(timezone.utc)


def sample_instant(clock: Clock = utc_now) -> datetime:
    """Read ``clock`` once and normalize to UTC at millisecond precision."""
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_iso(instant: datetime) -> str:
    """ISO-8601 with milliseconds and a ``Z`` suffix, e.g. 2024-01-05T14:30:45.123Z."""
    utc = instant.astimezone(timezone.utc)
    return utc.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


def to_epoch_ms(instant: datetime) -> int:
    return (instant - EPOCH) // _ONE_MS


def format_long_date(instant: datetime) -> str:
    """'January 5, 2024'"""
    return f"{MONTH_NAMES[instant.month - 1]} {instant.day}, {instant.year}"


def format_clock_time(instant: datetime) -> str:
    """'02:30:45 PM' (12-hour clock, midnight is 12 AM)."""
    hour = instant.hour % 12 or 12
    marker = "AM" if instant.hour < 12 else "PM"
    return f"{hour:02d}:{instant.minute:02d}:{instant.second:02d} {marker}"


def build_health_status(clock: Clock = utc_now) -> HealthStatus:
    return HealthStatus(status=HEALTHY, timestamp=to_iso(sample_instant(clock)))


def build_datetime_info(clock: Clock = utc_now) -> DateTimeInfo:
    instant = sample_instant(clock)
    return DateTimeInfo(
        date=format_long_date(instant),
        time=format_clock_time(instant),
        iso=to_iso(instant),
        timestamp=to_epoch_ms(instant),
    )
