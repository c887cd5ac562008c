"""
Time utilities for month boundaries and snapshot timestamps.
"""

from datetime import datetime
from typing import Optional


def local_now() -> datetime:
    """Current wall-clock time as a timezone-aware local datetime."""
    return datetime.now().astimezone()


def month_start(now: datetime) -> datetime:
    """
    First instant of the calendar month containing ``now``.

    The result keeps the tzinfo of ``now`` (naive in, naive out).
    """
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def format_iso(ts: datetime) -> str:
    """Format a timestamp for storage."""
    return ts.isoformat()


def parse_iso(value: str, tz_reference: Optional[datetime] = None) -> datetime:
    """
    Parse an ISO-8601 timestamp read back from storage.

    A trailing ``Z`` (as written by JavaScript's toISOString) is accepted.
    When ``tz_reference`` is given, aware results are converted to its
    timezone and naive results are interpreted in it, so that loaded
    timestamps compare cleanly with that reference.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)

    if tz_reference is None:
        return parsed

    if tz_reference.tzinfo is None:
        if parsed.tzinfo is not None:
            return parsed.astimezone().replace(tzinfo=None)
        return parsed

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz_reference.tzinfo)
    return parsed.astimezone(tz_reference.tzinfo)
