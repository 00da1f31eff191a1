"""
dates.py — Calendar-day helpers
Every progress key is a local-calendar "YYYY-MM-DD" string; streak and trend
math depends on all keys being produced here.
"""

from datetime import date, datetime, timedelta

DATE_KEY_FORMAT = "%Y-%m-%d"


def date_key(d: date | datetime) -> str:
    """Local calendar day of ``d`` as YYYY-MM-DD. Datetimes are not shifted."""
    if isinstance(d, datetime):
        d = d.date()
    return d.strftime(DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """Parse a YYYY-MM-DD key. Raises ValueError on anything else."""
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def to_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def local_now() -> datetime:
    return datetime.now().astimezone()


def each_day(start: date, end: date) -> list[date]:
    """All days from start to end, both inclusive. Empty when start > end."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def trailing_window(today: date, days: int) -> list[date]:
    """The ``days`` calendar days ending at (and including) today."""
    if days <= 0:
        return []
    return each_day(today - timedelta(days=days - 1), today)
