# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Next workable week
Pure computation, no side effects.
"""

from datetime import date, timedelta
from typing import Any

from rota.core.exceptions import HorizonExhausted, ValidationError
from rota.models.domain import REGIONS
from rota.services.availability import available_members
from rota.services.dates import next_monday, parse_date


def find_next_available_week(
    today,
    members: list[dict[str, Any]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    max_weeks_ahead: int = 8,
) -> tuple[date, date]:
    """
    Scan Mon–Sun weeks from the Monday on/after ``today`` and return the
    first one with at least one free member in every region.
    Raises HorizonExhausted after ``max_weeks_ahead`` weeks.
    """
    if max_weeks_ahead < 1:
        raise ValidationError("max_weeks_ahead must be at least 1")
    monday = next_monday(parse_date(today, "today"))

    for _ in range(max_weeks_ahead):
        sunday = monday + timedelta(days=6)
        if all(
            available_members(
                [m for m in members if m["region"] == region],
                holidays_by_member,
                monday,
                sunday,
            )
            for region in REGIONS
        ):
            return monday, sunday
        monday += timedelta(days=7)

    raise HorizonExhausted(max_weeks_ahead)
