# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Calendar-date helpers
Pure computation, no side effects.
All dates are date-only values; no time-of-day, no timezone.
"""

from datetime import date, datetime, timedelta
from typing import Iterator

from rota.core.exceptions import ValidationError

DATE_FORMAT = "%Y-%m-%d"


def strip_time_component(value: str) -> str:
    """Drop a trailing ``T...`` time part from an ISO timestamp string."""
    return value.split("T", 1)[0].strip()


def parse_date(value, field: str = "date") -> date:
    """
    Strictly parse a calendar date.
    Accepts ``date`` objects or ``YYYY-MM-DD`` strings; datetimes and
    anything else raise ValidationError.
    """
    if isinstance(value, datetime):
        raise ValidationError(f"{field} must be a calendar date, not a timestamp")
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required (YYYY-MM-DD)")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"{field} '{value}' is not a valid YYYY-MM-DD date")


def parse_range(start, end, max_days: int | None = None) -> tuple[date, date]:
    """Parse an inclusive date range. Raises ValidationError when start > end."""
    start_date = parse_date(start, "start_date")
    end_date = parse_date(end, "end_date")
    if start_date > end_date:
        raise ValidationError(
            f"start_date {start_date.isoformat()} is after end_date {end_date.isoformat()}"
        )
    if max_days is not None and (end_date - start_date).days + 1 > max_days:
        raise ValidationError(f"Date range exceeds the maximum of {max_days} days")
    return start_date, end_date


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def weekdays_between(start: date, end: date) -> list[date]:
    """Monday–Friday dates of the inclusive range, in calendar order."""
    return [d for d in iter_days(start, end) if d.weekday() < 5]


def next_monday(day: date) -> date:
    """The Monday on or after ``day``."""
    return day + timedelta(days=(7 - day.weekday()) % 7)


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start <= b_end and a_end >= b_start
