from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def convert_datetime_to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert datetime to UTC timezone-aware datetime"""
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime (SQLite drops tzinfo), stored values are UTC
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
