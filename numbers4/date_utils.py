"""
Numbers4 Date Utilities
=======================

Draw schedule helpers. Numbers4 is drawn every weekday except Japanese
public holidays.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

import pytz
from loguru import logger

DRAW_TIMEZONE = pytz.timezone('Asia/Tokyo')

# Japanese public holidays (2024-2025); extend through [schedule] extra_holidays
HOLIDAYS = frozenset([
    '2024-01-01', '2024-01-08', '2024-02-11', '2024-02-12', '2024-02-23',
    '2024-03-20', '2024-04-29', '2024-05-03', '2024-05-04', '2024-05-05',
    '2024-05-06', '2024-07-15', '2024-08-11', '2024-08-12', '2024-09-16',
    '2024-09-22', '2024-09-23', '2024-10-14', '2024-11-03', '2024-11-04',
    '2024-11-23', '2024-12-23', '2025-01-01', '2025-01-13', '2025-02-11',
    '2025-02-23', '2025-02-24', '2025-03-20', '2025-04-29', '2025-05-03',
    '2025-05-04', '2025-05-05', '2025-05-06', '2025-07-21', '2025-08-11',
    '2025-09-15', '2025-09-23', '2025-10-13', '2025-11-03', '2025-11-23',
    '2025-11-24',
])


def get_current_jst_time(timezone: Optional[str] = None) -> datetime:
    """Current time in the draw time zone, or in `timezone` when given"""
    tz = pytz.timezone(timezone) if timezone else DRAW_TIMEZONE
    return datetime.now(pytz.UTC).astimezone(tz)


def is_draw_day(day: date, holidays: Optional[Iterable[str]] = None) -> bool:
    """Weekday that is not a holiday"""
    holiday_set = HOLIDAYS if holidays is None else HOLIDAYS | frozenset(holidays)
    return day.weekday() < 5 and day.isoformat() not in holiday_set


def calculate_next_draw_date(
    from_date: Union[date, datetime, None] = None,
    holidays: Optional[Iterable[str]] = None,
    timezone: Optional[str] = None,
) -> date:
    """
    First draw day strictly after `from_date`.

    Args:
        from_date: Reference day; defaults to today in `timezone`
        holidays: Additional YYYY-MM-DD holidays on top of the built-in list
        timezone: pytz zone name used when from_date is omitted
    """
    if from_date is None:
        from_date = get_current_jst_time(timezone)
    if isinstance(from_date, datetime):
        from_date = from_date.date()

    candidate = from_date + timedelta(days=1)
    while not is_draw_day(candidate, holidays):
        candidate += timedelta(days=1)

    logger.debug(f"Next draw date after {from_date}: {candidate}")
    return candidate
