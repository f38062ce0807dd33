"""Wall-clock conversions for stored instants."""

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo


def local_time(timestamp: datetime, tz: ZoneInfo) -> datetime:
    """Convert an instant to wall-clock time in ``tz``; naive means UTC."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz)


def local_date(timestamp: datetime, tz: ZoneInfo) -> date:
    """Return the local calendar date of an instant in ``tz``."""
    return local_time(timestamp, tz).date()
