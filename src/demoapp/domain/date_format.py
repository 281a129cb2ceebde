"""
Named date formats served by the status API.
"""

import time
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

RFC3339 = "RFC3339"
RFC3339_NANO = "RFC3339Nano"
RFC1123 = "RFC1123"
UNIX_DATE = "UnixDate"
UNIX = "Unix"


def _zone_offset(now: datetime) -> str:
    offset = now.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _rfc3339(now: datetime) -> str:
    return now.strftime("%Y-%m-%dT%H:%M:%S") + _zone_offset(now)


def _rfc3339_nano(now: datetime) -> str:
    # Trailing zeros of the fraction are dropped
    fraction = f"{now.microsecond:06d}".rstrip("0")
    stamp = now.strftime("%Y-%m-%dT%H:%M:%S")
    if fraction:
        stamp += "." + fraction
    return stamp + _zone_offset(now)


def _rfc1123(now: datetime) -> str:
    return now.strftime("%a, %d %b %Y %H:%M:%S ") + (now.tzname() or "UTC")


def _unix_date(now: datetime) -> str:
    return (
        f"{now:%a %b} {now.day:>2} {now:%H:%M:%S} "
        f"{now.tzname() or 'UTC'} {now:%Y}"
    )


def _unix(now: datetime) -> str:
    return str(int(now.timestamp()))


def _default(now: datetime) -> str:
    return now.strftime("%Y-%m-%d %H:%M:%S")


FORMATTERS: Dict[str, Callable[[datetime], str]] = {
    RFC3339: _rfc3339,
    RFC3339_NANO: _rfc3339_nano,
    RFC1123: _rfc1123,
    UNIX_DATE: _unix_date,
    UNIX: _unix,
}


def format_date(format_name: str, now: Optional[datetime] = None) -> str:
    """
    Format a timestamp using a named format.

    Unknown or empty names fall back to ``YYYY-MM-DD HH:MM:SS``.

    Args:
        format_name: One of RFC3339, RFC3339Nano, RFC1123, UnixDate, Unix
        now: Timestamp to format (defaults to the current local time)

    Returns:
        Formatted timestamp
    """
    if now is None:
        now = datetime.fromtimestamp(time.time()).astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()

    return FORMATTERS.get(format_name, _default)(now)
