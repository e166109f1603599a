"""Calendar bucketing and timestamp helpers for compliance checks."""

import math
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import parser, tz

# ISO weeks start on Monday. date.weekday() numbers Monday as 0.
MONDAY = 0
WEEK_START = MONDAY

DAY_KEY_FORMAT = "%Y-%m-%d"
MONTH_KEY_FORMAT = "%Y-%m"


class InvalidTimezoneError(ValueError):
    """Raised when a timezone name does not resolve to an IANA zone."""


def resolve_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone by name."""
    zone = tz.gettz(name) if name else None
    if zone is None:
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}")
    return zone


def parse_day(day: str) -> Optional[date]:
    """Parse a "YYYY-MM-DD" day key, or return None."""
    try:
        return datetime.strptime(day, DAY_KEY_FORMAT).date()
    except (TypeError, ValueError):
        return None


def local_date(day: str, zone: tzinfo) -> Optional[date]:
    """Calendar date of a day key as seen in ``zone``.

    The key is read as UTC midnight of that date and converted into the
    zone, so zones behind UTC land on the previous calendar date.
    """
    parsed = parse_day(day)
    if parsed is None:
        return None
    midnight_utc = datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)
    return midnight_utc.astimezone(zone).date()


def week_start(d: date, first_weekday: int = WEEK_START) -> date:
    """First day of the week containing ``d``."""
    return d - timedelta(days=(d.weekday() - first_weekday) % 7)


def week_key(day: str, zone: tzinfo) -> Optional[str]:
    local = local_date(day, zone)
    if local is None:
        return None
    return week_start(local).strftime(DAY_KEY_FORMAT)


def month_key(day: str, zone: tzinfo) -> Optional[str]:
    local = local_date(day, zone)
    if local is None:
        return None
    return local.strftime(MONTH_KEY_FORMAT)


def parse_instant(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 instant with an explicit offset, or return None."""
    if not isinstance(value, str):
        return None
    try:
        parsed = parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def round_minutes(delta: timedelta) -> int:
    """Whole minutes in ``delta``, halves rounded up."""
    return math.floor(delta.total_seconds() / 60 + 0.5)


def rest_minutes(from_end_iso: str, to_start_iso: str) -> Optional[int]:
    """Minutes between two instants, or None when either fails to parse."""
    from_end = parse_instant(from_end_iso)
    to_start = parse_instant(to_start_iso)
    if from_end is None or to_start is None:
        return None
    return round_minutes(to_start - from_end)
