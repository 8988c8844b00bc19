"""Date manipulation utilities"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def to_iso_timestamp(value: datetime) -> str:
    """ISO-8601 timestamp with millisecond precision and a Z suffix"""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def now_iso() -> str:
    """Current UTC time as an ISO-8601 timestamp"""
    return to_iso_timestamp(utc_now())
