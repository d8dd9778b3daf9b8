"""Time Utilities for UTC management and calendar-month arithmetic"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Tuple

# A clock returns "now". Services take one so tests can pin the current time.
Clock = Callable[[], datetime]


def get_utc_now() -> datetime:
    """
    Returns a naive UTC datetime. 
    Matches the DB schema (TIMESTAMP WITHOUT TIME ZONE).
    Avoids 'datetime.utcnow()' deprecation warnings.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Return (year, month) moved by `offset` calendar months (negative = back)."""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def start_of_month(moment: datetime, offset: int = 0) -> datetime:
    """
    First instant of the calendar month containing `moment`, shifted by
    `offset` months.

    Example:
        start_of_month(datetime(2024, 1, 15), -1) == datetime(2023, 12, 1)
    """
    year, month = shift_month(moment.year, moment.month, offset)
    return datetime(year, month, 1)


def end_of_previous_month(moment: datetime) -> datetime:
    """Last representable instant of the month before the one containing `moment`."""
    return start_of_month(moment) - timedelta(microseconds=1)
