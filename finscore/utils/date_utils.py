"""Calendar month helpers"""

from datetime import date, datetime, tzinfo
from typing import List


def to_local(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert an aware timestamp to the display timezone. Naive timestamps are already local."""
    if tz is None or moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    return to_local(moment, tz).date()


def month_key(moment: datetime, tz: tzinfo | None = None) -> str:
    """Calendar month of a timestamp as 'YYYY-MM'"""
    local = to_local(moment, tz)
    return f"{local.year:04d}-{local.month:02d}"


def month_window(now: datetime, months: int, tz: tzinfo | None = None) -> List[str]:
    """Month keys for the `months` most recent calendar months ending at `now`, oldest first"""
    local = to_local(now, tz)
    # Months since year 0 makes stepping back across year boundaries trivial
    index = local.year * 12 + (local.month - 1)
    keys = []
    for offset in range(months - 1, -1, -1):
        year, month0 = divmod(index - offset, 12)
        keys.append(f"{year:04d}-{month0 + 1:02d}")
    return keys


def wall_clock(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Naive local time, so aware and naive timestamps order together"""
    return to_local(moment, tz).replace(tzinfo=None)
