"""Pure calendar calculations: no UI dependencies.

Weekdays follow the 0 = Sunday .. 6 = Saturday convention used by the
date-picker, not Python's ``date.weekday()`` (0 = Monday).
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta

DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_ONE_DAY = timedelta(days=1)


def as_date(d: date) -> date:
    """Drop the time-of-day from a datetime; plain dates pass through."""
    if isinstance(d, datetime):
        return d.date()
    return d


def weekday(d: date) -> int:
    """Return the weekday of *d* with Sunday as 0."""
    return (d.weekday() + 1) % 7


def first_day_of_month(d: date) -> date:
    return as_date(d).replace(day=1)


def start_of_month(d: date) -> date:
    """Return the first day of the month of *d*, time-of-day dropped."""
    return first_day_of_month(d)


def days_in_month(d: date) -> int:
    """Number of days in the month of *d* (first of next month minus one day)."""
    y, m = next_month(d.year, d.month)
    return (date(y, m, 1) - _ONE_DAY).day


def months_diff(d1: date, d2: date) -> int:
    """Whole calendar months from *d1* to *d2* (negative if *d2* is earlier)."""
    return d2.month - d1.month + 12 * (d2.year - d1.year)


def add_months(d: date, n: int) -> date:
    """Shift *d* by *n* months, clamping the day to the target month's length."""
    d = as_date(d)
    total = d.year * 12 + (d.month - 1) + n
    year, month = divmod(total, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last))


def week_grid(
    anchor: date, first_day_of_week: int = 0, fixed_weeks: bool = False,
) -> list[list[date]]:
    """Return the weeks to display for the month containing *anchor*.

    Every week holds exactly 7 dates starting on *first_day_of_week*
    (0 = Sunday). The first and last weeks are padded with days of the
    neighbouring months. With *fixed_weeks* the grid is extended with whole
    weeks to 6 rows so the calendar height stays constant.

    *first_day_of_week* must be within 0..6; other values are not checked and
    give an unspecified grid.
    """
    start = first_day_of_month(anchor)
    month_days = [start + timedelta(days=i) for i in range(days_in_month(start))]

    weeks: list[list[date]] = []
    week: list[date] = []
    for day in month_days:
        if week and weekday(day) == first_day_of_week:
            weeks.append(week)
            week = []
        week.append(day)
    weeks.append(week)

    first = weeks[0]
    lead = 7 - len(first)
    weeks[0] = [first[0] - timedelta(days=i) for i in range(lead, 0, -1)] + first

    last = weeks[-1]
    trail = 7 - len(last)
    weeks[-1] = last + [last[-1] + timedelta(days=i) for i in range(1, trail + 1)]

    if fixed_weeks:
        while len(weeks) < 6:
            after = weeks[-1][-1]
            weeks.append([after + timedelta(days=i) for i in range(1, 8)])

    return weeks


def weekday_labels(first_day_of_week: int = 0) -> list[str]:
    """Weekday abbreviations rotated to start on *first_day_of_week*."""
    return DAY_ABBR[first_day_of_week:] + DAY_ABBR[:first_day_of_week]


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1
