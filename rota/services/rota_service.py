# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Rota assignment — business logic around the scheduler core.

Loads roster, holidays and history from the repositories, runs the pure
planner / week finder / conflict reporter, persists the outcome and keeps
metrics, logs and notifications in step.
"""

import time
from datetime import date
from typing import Any, Callable, Optional

from rota.core.config import settings
from rota.core.exceptions import (
    AssignmentConflictError,
    HorizonExhausted,
    NoCandidateError,
    RecordNotFoundError,
    ValidationError,
)
from rota.core.logging import get_logger
from rota.metrics.prometheus import (
    ASSIGNMENTS_CREATED,
    AUTO_ASSIGN_RUNS,
    CONFLICT_CHECKS,
    PLANNER_DURATION,
    SKIPPED_DAYS,
)
from rota.repositories.assignment_repository import AssignmentRepository
from rota.repositories.history_repository import HistoryRepository
from rota.repositories.holiday_repository import HolidayRepository
from rota.repositories.member_repository import MemberRepository
from rota.services import conflicts
from rota.services.dates import parse_date, parse_range
from rota.services.fairness import FairnessStrategy
from rota.services.notification_client import NotificationClient
from rota.services.planner import history_snapshot, plan_assignments
from rota.services.week_finder import find_next_available_week

logger = get_logger(__name__)


class RotaService:
    """Business logic for rota assignments, auto-assignment and conflicts."""

    def __init__(
        self,
        member_repo: MemberRepository,
        holiday_repo: HolidayRepository,
        assignment_repo: AssignmentRepository,
        history_repo: HistoryRepository,
        notification_client: NotificationClient,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._members = member_repo
        self._holidays = holiday_repo
        self._assignments = assignment_repo
        self._history = history_repo
        self._notifications = notification_client
        self._today = today

    # ── Assignments: commands ──

    def create_assignment(
        self,
        data: dict[str, Any],
        allow_conflicts: bool = False,
    ) -> dict[str, Any]:
        """
        Create a manual assignment.
        Raises ValidationError on bad input and AssignmentConflictError when a
        named member is on holiday, unless ``allow_conflicts`` is set.
        """
        start, end = parse_range(data.get("start_date"), data.get("end_date"))
        us_id = data.get("us_member_id")
        uk_id = data.get("uk_member_id")
        if us_id is None and uk_id is None:
            raise ValidationError("At least one of us_member_id / uk_member_id is required")
        self._check_region("us_member_id", us_id, "us")
        self._check_region("uk_member_id", uk_id, "uk")

        report = self.check_conflicts({
            "start_date": start,
            "end_date": end,
            "us_member_id": us_id,
            "uk_member_id": uk_id,
        })
        if report["has_conflict"] and not allow_conflicts:
            raise AssignmentConflictError(report["conflicting_members"])

        return self._persist(
            start,
            end,
            us_id,
            uk_id,
            notes=data.get("notes"),
            is_manual=data.get("is_manual", True),
        )

    def update_assignment(self, assignment_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        """Only notes and the manual flag are editable; history stays untouched."""
        self.get_assignment(assignment_id)
        editable = {k: v for k, v in changes.items() if k in ("notes", "is_manual")}
        if "is_manual" in editable and editable["is_manual"] is None:
            raise ValidationError("is_manual cannot be null")
        return self._assignments.update(assignment_id, editable)

    def delete_assignment(self, assignment_id: int) -> dict[str, Any]:
        """Delete an assignment together with its history rows."""
        self.get_assignment(assignment_id)
        removed = self._history.delete_by_assignment(assignment_id)
        self._assignments.delete(assignment_id)
        logger.info("Assignment deleted: id=%d, history_rows=%d", assignment_id, removed)
        return {"status": "deleted", "assignment_id": assignment_id}

    # ── Assignments: queries ──

    def list_assignments(self) -> list[dict[str, Any]]:
        return self._assignments.get_all()

    def get_assignment(self, assignment_id: int) -> dict[str, Any]:
        assignment = self._assignments.get_by_id(assignment_id)
        if assignment is None:
            raise RecordNotFoundError(f"Rota assignment {assignment_id} not found")
        return assignment

    def assignment_for_date(self, day) -> dict[str, Any]:
        """The assignment that applies on ``day`` (most specific wins)."""
        day = parse_date(day)
        assignment = conflicts.resolve_assignment_for_date(self._assignments.get_all(), day)
        if assignment is None:
            raise RecordNotFoundError(f"No assignment found for {day.isoformat()}")
        return assignment

    def current_assignment(self) -> dict[str, Any]:
        return self.assignment_for_date(self._today())

    def upcoming_assignments(self) -> list[dict[str, Any]]:
        today = self._today()
        upcoming = [
            a for a in self._assignments.get_all() if parse_date(a["start_date"]) > today
        ]
        return sorted(upcoming, key=lambda a: (parse_date(a["start_date"]), a["id"]))

    # ── Conflicts ──

    def check_conflicts(self, assignment: dict[str, Any]) -> dict[str, Any]:
        """Holiday conflicts of the members named on a (proposed) assignment."""
        if assignment.get("us_member_id") is None and assignment.get("uk_member_id") is None:
            CONFLICT_CHECKS.labels(result="clear").inc()
            return {"has_conflict": False, "conflicting_members": []}

        members_by_id = {m["id"]: m for m in self._members.get_all()}
        report = conflicts.check_conflicts(
            assignment, members_by_id, self._holidays.group_by_member()
        )
        CONFLICT_CHECKS.labels(result="conflict" if report["has_conflict"] else "clear").inc()
        return report

    # ── Planning ──

    def plan_period(self, start, end, strategy=None) -> dict[str, Any]:
        """
        Plan and persist coverage for [start, end].
        Partial coverage is a success carrying ``skipped_days``; zero
        coverage raises NoCandidateError with the blocking holidays.
        """
        strategy = FairnessStrategy.parse(strategy or settings.DEFAULT_FAIRNESS_STRATEGY)
        members = self._members.get_all()
        holidays_by_member = self._holidays.group_by_member()
        counts, last_assigned = history_snapshot(members, self._history.list_all())

        started = time.perf_counter()
        plan = plan_assignments(
            start,
            end,
            members,
            holidays_by_member,
            counts,
            last_assigned,
            strategy,
            max_days=settings.MAX_PLAN_DAYS,
        )
        PLANNER_DURATION.observe(time.perf_counter() - started)

        period = plan["period"]
        skipped = plan["skipped_days"]
        SKIPPED_DAYS.inc(len(skipped))

        if not plan["proposals"]:
            AUTO_ASSIGN_RUNS.labels(outcome="no_candidate").inc()
            logger.warning(
                "Auto-assign found no coverage: %s..%s, skipped=%d",
                period["start_date"].isoformat(),
                period["end_date"].isoformat(),
                len(skipped),
            )
            raise NoCandidateError(
                "No days could be assigned - conflicts on all days",
                period=period,
                conflicts=conflicts.period_conflicts(
                    members, holidays_by_member, period["start_date"], period["end_date"]
                ),
                skipped_days=skipped,
            )

        assignments: list[dict[str, Any]] = []
        for proposal in plan["proposals"]:
            record = self._persist(
                proposal["date"],
                proposal["date"],
                proposal["us_member_id"],
                proposal["uk_member_id"],
                notes=proposal["notes"],
                is_manual=False,
            )
            assignments.append({**proposal, "assignment_id": record["id"]})

        outcome = "partial" if skipped else "complete"
        AUTO_ASSIGN_RUNS.labels(outcome=outcome).inc()
        logger.info(
            "Auto-assign %s: mode=%s, strategy=%s, assigned=%d, skipped=%d",
            outcome, plan["mode"], strategy.value, len(assignments), len(skipped),
        )

        if skipped:
            message = (
                f"Partial assignment completed: {len(assignments)} days assigned, "
                f"{len(skipped)} days skipped"
            )
        else:
            message = f"Assignment completed: {len(assignments)} days assigned"
        return {
            "message": message,
            "mode": plan["mode"],
            "strategy": strategy.value,
            "period": period,
            "assignments": assignments,
            "skipped_days": skipped,
        }

    def find_next_week(self, max_weeks: Optional[int] = None) -> tuple[date, date]:
        """The next Mon–Sun week with at least one free member per region."""
        return find_next_available_week(
            self._today(),
            self._members.get_all(),
            self._holidays.group_by_member(),
            max_weeks or settings.WEEK_FINDER_MAX_WEEKS,
        )

    def auto_assign(self, start=None, end=None, strategy=None) -> dict[str, Any]:
        """
        Plan an explicit range, or the next workable week when no range is
        given. Raises HorizonExhausted when no week qualifies.
        """
        if (start is None) != (end is None):
            raise ValidationError("start_date and end_date must be given together")
        if start is None:
            try:
                start, end = self.find_next_week()
            except HorizonExhausted:
                AUTO_ASSIGN_RUNS.labels(outcome="horizon_exhausted").inc()
                raise
            logger.info("Week finder selected %s..%s", start.isoformat(), end.isoformat())
        return self.plan_period(start, end, strategy)

    # ── Reports ──

    def fairness_report(self) -> list[dict[str, Any]]:
        """Region-scoped assignment counts and last assignment per member."""
        members = self._members.get_all()
        counts, last_assigned = history_snapshot(members, self._history.list_all())
        return [
            {
                "id": m["id"],
                "name": m["name"],
                "region": m["region"],
                "assignment_count": counts.get(m["id"], 0),
                "last_assigned": last_assigned.get(m["id"]),
            }
            for m in members
        ]

    def list_history(
        self,
        member_id: Optional[int] = None,
        region: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        return self._history.get_all(member_id=member_id, region=region, limit=limit)

    # ── Internal ──

    def _check_region(self, field: str, member_id: Optional[int], region: str) -> None:
        if member_id is None:
            return
        member = self._members.get_by_id(member_id)
        if member is None:
            raise ValidationError(f"{field} references unknown team member {member_id}")
        if member["region"] != region:
            raise ValidationError(
                f"{field} must reference a {region.upper()} member, "
                f"member {member_id} is {member['region'].upper()}"
            )

    def _persist(
        self,
        start: date,
        end: date,
        us_id: Optional[int],
        uk_id: Optional[int],
        notes: Optional[str],
        is_manual: bool,
    ) -> dict[str, Any]:
        """Write one assignment plus one history row per named member."""
        assignment = self._assignments.create({
            "start_date": start,
            "end_date": end,
            "us_member_id": us_id,
            "uk_member_id": uk_id,
            "notes": notes,
            "is_manual": is_manual,
        })
        for region, member_id in (("us", us_id), ("uk", uk_id)):
            if member_id is None:
                continue
            self._history.record(assignment["id"], member_id, region, start, end)
            member = self._members.get_by_id(member_id)
            if member is not None:
                self._notifications.notify_assignment(
                    assignment["id"], member, region, start, end
                )

        ASSIGNMENTS_CREATED.labels(source="manual" if is_manual else "auto").inc()
        logger.info(
            "Assignment created: id=%d, %s..%s, us=%s, uk=%s, manual=%s",
            assignment["id"], start.isoformat(), end.isoformat(), us_id, uk_id, is_manual,
        )
        return assignment
