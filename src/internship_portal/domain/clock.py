"""
Time source shared by entities, services and tokens

Timestamps are naive UTC throughout, matching the timezone-less DateTime
columns.
"""
import calendar
from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_seconds(moment: datetime) -> int:
    """Unix time of a naive-UTC (or aware) datetime"""
    return calendar.timegm(moment.utctimetuple())
