"""Date manipulation utilities"""

from datetime import date, datetime, timezone
from typing import Optional, TypeVar

from dateutil.relativedelta import relativedelta

D = TypeVar("D", date, datetime)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def add_months(start: D, months: int) -> D:
    """Add calendar months, clamping to the last day of shorter months (Jan 31 + 1 -> Feb 28/29)"""
    return start + relativedelta(months=months)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC"""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
