"""
Utility functions and helpers
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time, timezone-naive for database storage"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware timestamp to naive UTC; naive values pass through"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
