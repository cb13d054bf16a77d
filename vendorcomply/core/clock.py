"""UTC time helpers.

SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
columns; everything stored by this app is UTC, so naive values are read as
UTC before they are compared with an aware ``now``.
"""

from __future__ import annotations

import calendar
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def end_of_month(now: datetime) -> datetime:
    """Last microsecond of the month containing ``now``."""
    last_day = calendar.monthrange(now.year, now.month)[1]
    return now.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999999)
