# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Availability resolution
Pure computation, no side effects.
Decides whether a member is free on a date or across a date range.
"""

from datetime import date
from typing import Any, Optional

from rota.services.dates import iter_days, parse_date, ranges_overlap


def legacy_range(member: dict[str, Any]) -> Optional[tuple[date, date]]:
    """The member's single legacy unavailable range, if both ends are set."""
    start = member.get("unavailable_start")
    end = member.get("unavailable_end")
    if start is None or end is None:
        return None
    return parse_date(start, "unavailable_start"), parse_date(end, "unavailable_end")


def is_available(
    member: dict[str, Any],
    day,
    holidays: list[dict[str, Any]],
) -> bool:
    """
    False when the member is paused, inside the legacy unavailable range,
    or inside any of their holidays (inclusive on both ends).
    """
    day = parse_date(day)
    if not member.get("is_available", True):
        return False

    legacy = legacy_range(member)
    if legacy and legacy[0] <= day <= legacy[1]:
        return False

    for holiday in holidays:
        if parse_date(holiday["start_date"]) <= day <= parse_date(holiday["end_date"]):
            return False
    return True


def is_available_for_range(
    member: dict[str, Any],
    start,
    end,
    holidays: list[dict[str, Any]],
) -> bool:
    """True only if the member is available on every calendar day of the range."""
    start = parse_date(start, "start_date")
    end = parse_date(end, "end_date")
    return all(is_available(member, day, holidays) for day in iter_days(start, end))


def is_available_for_days(
    member: dict[str, Any],
    days: list[date],
    holidays: list[dict[str, Any]],
) -> bool:
    """True only if the member is available on each of the given days."""
    return all(is_available(member, day, holidays) for day in days)


def has_overlap(
    member: dict[str, Any],
    start: date,
    end: date,
    holidays: list[dict[str, Any]],
) -> bool:
    """Whether any holiday (or the legacy range) touches [start, end] at any point."""
    legacy = legacy_range(member)
    if legacy and ranges_overlap(start, end, legacy[0], legacy[1]):
        return True
    return any(
        ranges_overlap(
            start, end, parse_date(h["start_date"]), parse_date(h["end_date"])
        )
        for h in holidays
    )


def available_members(
    members: list[dict[str, Any]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    start,
    end,
) -> list[dict[str, Any]]:
    """
    Looser filter used to pick a starting week: excludes paused members and
    anyone with a holiday overlapping the range, without a per-day walk.
    """
    start = parse_date(start, "start_date")
    end = parse_date(end, "end_date")
    return [
        m
        for m in members
        if m.get("is_available", True)
        and not has_overlap(m, start, end, holidays_by_member.get(m["id"], []))
    ]
