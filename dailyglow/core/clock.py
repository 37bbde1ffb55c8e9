"""Time helpers: aware timestamps and calendar-day truncation."""

from datetime import date, datetime, timezone, tzinfo
from typing import Optional


def utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def ensure_aware(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def calendar_day(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Midnight-aligned day of `moment` in the calendar timezone."""
    return ensure_aware(moment).astimezone(tz or timezone.utc).date()


def days_between(earlier: datetime, later: datetime, tz: Optional[tzinfo] = None) -> int:
    """Whole calendar days from `earlier` to `later` (negative if reversed)."""
    return (calendar_day(later, tz) - calendar_day(earlier, tz)).days


def local_time(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return ensure_aware(moment).astimezone(tz or timezone.utc)


def parse_now(value: Optional[str]) -> datetime:
    """Parse an optional ISO timestamp (API `now` parameters); default to current time."""
    if not value:
        return utc_now()
    return ensure_aware(datetime.fromisoformat(value))
