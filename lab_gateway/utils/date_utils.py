"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone


def window_start(days: int, today: date) -> date:
    """First day of a trailing window of `days` days ending on `today` (inclusive)"""
    return today - timedelta(days=days - 1)


def utc_now() -> datetime:
    """Timezone-aware current time"""
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
