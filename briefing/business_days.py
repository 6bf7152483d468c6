"""
Business-day arithmetic for the standup reporting windows.

Business day = not Saturday/Sunday AND not in the configured holiday set.
Works on dates and timezone-aware datetimes alike; datetimes keep their
wall-clock time when stepped.
"""

import calendar
import logging
from collections.abc import Collection
from datetime import date, timedelta

log = logging.getLogger(__name__)


def is_weekend(check_date: date) -> bool:
    """Check if date is a weekend (ISO Saturday=6, Sunday=7)."""
    return check_date.isoweekday() in (6, 7)


def is_holiday(check_date: date, holidays: Collection[str]) -> bool:
    """Check if date is one of the YYYY-MM-DD holidays."""
    return check_date.strftime("%Y-%m-%d") in holidays


def add_business_days(start: date, num_days: int, holidays: Collection[str] = ()) -> date:
    """
    Move `num_days` business days away from `start` (negative goes back).

    Example:
        start = Monday April 15, num_days = -1
        result = Friday April 12 (weekend skipped)

    The result is never a weekend or holiday unless num_days is 0,
    in which case `start` is returned unchanged.
    """
    step = timedelta(days=1 if num_days > 0 else -1)
    result = start
    days_counted = 0

    while days_counted < abs(num_days):
        result = result + step

        if is_weekend(result):
            continue

        if is_holiday(result, holidays):
            log.debug("Skipping holiday %s", result.strftime("%Y-%m-%d"))
            continue

        days_counted += 1

    return result


def add_months(value: date, months: int) -> date:
    """Calendar-month arithmetic; the day is clamped to the target month's length."""
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
