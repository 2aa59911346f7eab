# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Period assignment planning
Pure computation, no I/O.

Given a date range, the roster, holidays and a history snapshot, decide
who covers each weekday:

    1. full period   one US + one UK member free on every weekday
                     -> the same pair on every weekday
    2. day by day    otherwise, each weekday on its own; days where a
                     region has nobody free are skipped with a reason

The caller persists the proposals. Running counts live in a
PlanningContext created per call, so concurrent plans never share state.
"""

from datetime import date
from typing import Any, Optional

from rota.core.exceptions import ValidationError
from rota.models.domain import REGIONS, REGION_LABELS
from rota.services.availability import is_available, is_available_for_days
from rota.services.dates import parse_date, parse_range, weekdays_between
from rota.services.fairness import FairnessStrategy, select_candidate

MODE_FULL_PERIOD = "full_period"
MODE_DAY_BY_DAY = "day_by_day"

NOTES_BY_MODE: dict[str, str] = {
    MODE_FULL_PERIOD: "Auto-assigned (full week)",
    MODE_DAY_BY_DAY: "Auto-assigned (partial week)",
}


class PlanningContext:
    """Mutable per-call state: running counts, last dates, rotation indices."""

    def __init__(
        self,
        counts: dict[int, int],
        last_assigned: dict[int, date],
        strategy: FairnessStrategy,
    ) -> None:
        self.counts = dict(counts)
        self.last_assigned = dict(last_assigned)
        self.strategy = strategy
        self.rotation_index: dict[str, int] = {region: 0 for region in REGIONS}

    def select(
        self,
        region: str,
        candidates: list[dict[str, Any]],
        reference: date,
        rotate: bool = True,
    ) -> Optional[dict[str, Any]]:
        return select_candidate(
            candidates,
            self.counts,
            self.last_assigned,
            reference,
            self.strategy,
            self.rotation_index[region] if rotate else 0,
        )

    def record(self, member: dict[str, Any], days: int, last_day: date) -> None:
        self.counts[member["id"]] = self.counts.get(member["id"], 0) + days
        previous = self.last_assigned.get(member["id"])
        if previous is None or last_day > previous:
            self.last_assigned[member["id"]] = last_day


def history_snapshot(
    members: list[dict[str, Any]],
    history_rows: list[dict[str, Any]],
) -> tuple[dict[int, int], dict[int, date]]:
    """
    Region-scoped counts and last assignment end dates per member.
    Only rows recorded in the member's own region contribute.
    """
    region_of = {m["id"]: m["region"] for m in members}
    counts: dict[int, int] = {m["id"]: 0 for m in members}
    last: dict[int, date] = {}
    for row in history_rows:
        member_id = row["member_id"]
        if region_of.get(member_id) != row["region"]:
            continue
        counts[member_id] += 1
        end = parse_date(row["end_date"])
        if member_id not in last or end > last[member_id]:
            last[member_id] = end
    return counts, last


def _by_region(members: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    grouped: dict[str, list[dict[str, Any]]] = {region: [] for region in REGIONS}
    for member in members:
        grouped.setdefault(member["region"], []).append(member)
    return grouped


def _proposal(day: date, us_member: dict[str, Any], uk_member: dict[str, Any], mode: str) -> dict[str, Any]:
    return {
        "date": day,
        "us_member_id": us_member["id"],
        "us_member": us_member["name"],
        "uk_member_id": uk_member["id"],
        "uk_member": uk_member["name"],
        "notes": NOTES_BY_MODE[mode],
    }


def skip_reason(available: dict[str, list[dict[str, Any]]]) -> str:
    return ", ".join(
        f"No {REGION_LABELS[region]} members available"
        for region in REGIONS
        if not available[region]
    )


def _plan_full_period(
    weekdays: list[date],
    roster: dict[str, list[dict[str, Any]]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    ctx: PlanningContext,
) -> Optional[list[dict[str, Any]]]:
    fully_available = {
        region: [
            m
            for m in roster[region]
            if is_available_for_days(m, weekdays, holidays_by_member.get(m["id"], []))
        ]
        for region in REGIONS
    }
    if not all(fully_available[region] for region in REGIONS):
        return None

    selected = {
        region: ctx.select(region, fully_available[region], weekdays[0], rotate=False)
        for region in REGIONS
    }
    for member in selected.values():
        ctx.record(member, len(weekdays), weekdays[-1])
    return [
        _proposal(day, selected["us"], selected["uk"], MODE_FULL_PERIOD)
        for day in weekdays
    ]


def _plan_day_by_day(
    weekdays: list[date],
    roster: dict[str, list[dict[str, Any]]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    ctx: PlanningContext,
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    proposals: list[dict[str, Any]] = []
    skipped: list[dict[str, Any]] = []

    # Strictly in calendar order: each day sees the previous day's counts.
    for day in weekdays:
        available = {
            region: [
                m
                for m in roster[region]
                if is_available(m, day, holidays_by_member.get(m["id"], []))
            ]
            for region in REGIONS
        }
        if not all(available[region] for region in REGIONS):
            skipped.append({"date": day, "reason": skip_reason(available)})
            continue

        selected = {
            region: ctx.select(region, available[region], day) for region in REGIONS
        }
        for region, member in selected.items():
            ctx.record(member, 1, day)
            ctx.rotation_index[region] += 1
        proposals.append(_proposal(day, selected["us"], selected["uk"], MODE_DAY_BY_DAY))

    return proposals, skipped


def plan_assignments(
    start,
    end,
    members: list[dict[str, Any]],
    holidays_by_member: dict[int, list[dict[str, Any]]],
    counts: dict[int, int],
    last_assigned: dict[int, date] | None = None,
    strategy: FairnessStrategy = FairnessStrategy.LOAD_BALANCING,
    max_days: int | None = None,
) -> dict[str, Any]:
    """
    Plan coverage for [start, end].

    Returns ``{"mode", "period", "proposals", "skipped_days", "counts"}``.
    ``counts`` is the running count map after planning. Raises
    ValidationError on a malformed range or a range without weekdays.
    """
    start_date, end_date = parse_range(start, end, max_days)
    weekdays = weekdays_between(start_date, end_date)
    if not weekdays:
        raise ValidationError(
            f"No weekdays between {start_date.isoformat()} and {end_date.isoformat()}"
        )

    roster = _by_region(members)
    ctx = PlanningContext(counts, last_assigned or {}, FairnessStrategy.parse(strategy))

    mode = MODE_FULL_PERIOD
    skipped: list[dict[str, Any]] = []
    proposals = _plan_full_period(weekdays, roster, holidays_by_member, ctx)
    if proposals is None:
        mode = MODE_DAY_BY_DAY
        proposals, skipped = _plan_day_by_day(weekdays, roster, holidays_by_member, ctx)

    return {
        "mode": mode,
        "period": {"start_date": start_date, "end_date": end_date},
        "proposals": proposals,
        "skipped_days": skipped,
        "counts": ctx.counts,
    }
