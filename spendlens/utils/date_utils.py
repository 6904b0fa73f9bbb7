"""Date manipulation utilities"""

from datetime import datetime
from typing import Iterable, List

SECONDS_PER_DAY = 24 * 60 * 60
DAYS_PER_MONTH = 30


def month_key(moment: datetime) -> str:
    """Calendar month bucket as YYYY-MM (sorts chronologically as text)"""
    return f"{moment.year:04d}-{moment.month:02d}"


def whole_days_between(start: datetime, end: datetime) -> int:
    """Number of whole days elapsed from start to end"""
    return (end - start).days


def interval_days(dates: Iterable[datetime]) -> List[float]:
    """Gaps in (fractional) days between consecutive dates, after sorting ascending"""
    ordered = sorted(dates)
    return [
        (later - earlier).total_seconds() / SECONDS_PER_DAY
        for earlier, later in zip(ordered, ordered[1:])
    ]
