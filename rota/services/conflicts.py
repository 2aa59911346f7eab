# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Conflict reporting
Pure computation, no side effects.

Answers "is anyone on this assignment on holiday during it?" and resolves
which of several overlapping assignments applies to a given day.
"""

from datetime import date
from typing import Any, Optional

from rota.core.exceptions import ValidationError
from rota.models.domain import REGION_LABELS
from rota.services.availability import legacy_range
from rota.services.dates import parse_date, parse_range, ranges_overlap

MEMBER_REFERENCES: tuple[tuple[str, str], ...] = (
    ("us", "us_member_id"),
    ("uk", "uk_member_id"),
)


def _stamped(member: dict[str, Any], start: date, end: date, description=None) -> dict[str, Any]:
    """Copy of the member carrying the blocking range, for display."""
    stamped = dict(member)
    stamped["holiday_start"] = start
    stamped["holiday_end"] = end
    stamped["holiday_description"] = description
    return stamped


def first_conflict(
    member: dict[str, Any],
    start: date,
    end: date,
    holidays: list[dict[str, Any]],
) -> Optional[dict[str, Any]]:
    """The member stamped with the first overlapping range, or None."""
    legacy = legacy_range(member)
    if legacy and ranges_overlap(start, end, legacy[0], legacy[1]):
        return _stamped(member, legacy[0], legacy[1], "Unavailable")

    for holiday in holidays:
        h_start = parse_date(holiday["start_date"])
        h_end = parse_date(holiday["end_date"])
        if ranges_overlap(start, end, h_start, h_end):
            return _stamped(member, h_start, h_end, holiday.get("description"))
    return None


def check_conflicts(
    assignment: dict[str, Any],
    members_by_id: dict[int, dict[str, Any]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
) -> dict[str, Any]:
    """
    Check each member named on the assignment against their holidays.
    A member is reported at most once, stamped with the first match.
    Raises ValidationError for a malformed range or an unknown member id.
    """
    start, end = parse_range(assignment.get("start_date"), assignment.get("end_date"))

    conflicting: list[dict[str, Any]] = []
    seen: set[int] = set()
    for _region, key in MEMBER_REFERENCES:
        member_id = assignment.get(key)
        if member_id is None or member_id in seen:
            continue
        member = members_by_id.get(member_id)
        if member is None:
            raise ValidationError(f"{key} references unknown team member {member_id}")
        seen.add(member_id)
        hit = first_conflict(member, start, end, holidays_by_member.get(member_id, []))
        if hit is not None:
            conflicting.append(hit)

    return {"has_conflict": len(conflicting) > 0, "conflicting_members": conflicting}


def period_conflicts(
    members: list[dict[str, Any]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    start: date,
    end: date,
) -> list[dict[str, Any]]:
    """Every holiday or legacy range of every member that touches the period."""
    details: list[dict[str, Any]] = []
    for member in sorted(members, key=lambda m: (m["region"], m["id"])):
        label = REGION_LABELS.get(member["region"], member["region"].upper())
        ranges: list[tuple[date, date, Optional[str]]] = []
        legacy = legacy_range(member)
        if legacy:
            ranges.append((legacy[0], legacy[1], "Unavailable"))
        for holiday in holidays_by_member.get(member["id"], []):
            ranges.append(
                (
                    parse_date(holiday["start_date"]),
                    parse_date(holiday["end_date"]),
                    holiday.get("description"),
                )
            )
        for r_start, r_end, description in ranges:
            if not ranges_overlap(start, end, r_start, r_end):
                continue
            details.append({
                "member_id": member["id"],
                "name": member["name"],
                "region": member["region"],
                "start_date": r_start,
                "end_date": r_end,
                "description": description,
                "message": (
                    f"{member['name']} ({label}): On holiday "
                    f"{r_start.isoformat()} to {r_end.isoformat()}"
                ),
            })
    return details


def resolve_assignment_for_date(
    assignments: list[dict[str, Any]],
    day,
) -> Optional[dict[str, Any]]:
    """
    Most specific wins: a single-day assignment on ``day`` beats any
    multi-day assignment covering it. Among equals the latest (highest id)
    wins.
    """
    day = parse_date(day)
    covering = [
        a
        for a in assignments
        if parse_date(a["start_date"]) <= day <= parse_date(a["end_date"])
    ]
    if not covering:
        return None

    def specificity(a: dict[str, Any]) -> tuple[int, int]:
        span = (parse_date(a["end_date"]) - parse_date(a["start_date"])).days
        return (-span, a["id"])

    return max(covering, key=specificity)
