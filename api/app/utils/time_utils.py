"""
Time helpers shared by models and the local store.
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(moment: datetime) -> datetime:
    """
    Attach UTC to a naive datetime.

    SQLite hands stored timestamps back without an offset; every value
    written by this app is UTC.
    """
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Read an ISO timestamp from the local store as aware UTC."""
    return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Render a timestamp relative to now.

    Returns "just now" under a minute, minutes under an hour, hours under a
    day and the formatted date beyond that.
    """
    moment = ensure_utc(moment)
    now = ensure_utc(now or utc_now())
    diff = (now - moment).total_seconds()
    if diff < 60:
        return "just now"
    if diff < 3600:
        return f"{int(diff // 60)} min ago"
    if diff < 86400:
        return f"{int(diff // 3600)} h ago"
    return moment.strftime("%Y-%m-%d %H:%M")
