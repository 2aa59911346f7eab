# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team member and holiday management — business logic for CRUD.
Coordinates repository writes with metrics and validation.
"""

from datetime import date
from typing import Any

from rota.core.exceptions import MemberNotFoundError, RecordNotFoundError, ValidationError
from rota.core.logging import get_logger
from rota.metrics.prometheus import HOLIDAYS_RECORDED, TEAM_MEMBERS
from rota.models.domain import REGIONS
from rota.repositories.assignment_repository import AssignmentRepository
from rota.repositories.holiday_repository import HolidayRepository
from rota.repositories.member_repository import MemberRepository
from rota.services.dates import parse_date

logger = get_logger(__name__)

REQUIRED_MEMBER_FIELDS = ("name", "email", "region", "is_available")

DEFAULT_ROSTER: list[dict[str, Any]] = [
    {"name": "Sarah Chen", "email": "sarah.chen@company.com", "region": "us"},
    {"name": "Mike Rodriguez", "email": "mike.rodriguez@company.com", "region": "us"},
    {"name": "Alex Kumar", "email": "alex.kumar@company.com", "region": "us"},
    {"name": "James Wilson", "email": "james.wilson@company.com", "region": "uk"},
    {"name": "Emma Knight", "email": "emma.knight@company.com", "region": "uk"},
    {
        "name": "David Parker",
        "email": "david.parker@company.com",
        "region": "uk",
        "holidays": [(date(2024, 12, 10), date(2024, 12, 20), "Winter leave")],
    },
]


class MemberService:
    """Business logic for the team roster and member holidays."""

    def __init__(
        self,
        member_repo: MemberRepository,
        holiday_repo: HolidayRepository,
        assignment_repo: AssignmentRepository,
    ) -> None:
        self._members = member_repo
        self._holidays = holiday_repo
        self._assignments = assignment_repo

    # ── Members: commands ──

    def create_member(self, data: dict[str, Any]) -> dict[str, Any]:
        """Add a member. Raises ValidationError on duplicate email or bad region."""
        if data["region"] not in REGIONS:
            raise ValidationError(f"region must be one of {REGIONS}")
        if self._members.get_by_email(data["email"]) is not None:
            raise ValidationError(f"A member with email '{data['email']}' already exists")

        member = self._members.create({
            "name": data["name"],
            "email": data["email"],
            "region": data["region"],
            "is_available": data.get("is_available", True),
            "unavailable_start": data.get("unavailable_start"),
            "unavailable_end": data.get("unavailable_end"),
        })
        self._refresh_gauges()
        logger.info("Member created: id=%d, region=%s", member["id"], member["region"])
        return member

    def update_member(self, member_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        """Partially update a member. Raises MemberNotFoundError / ValidationError."""
        member = self.get_member(member_id)

        for field in REQUIRED_MEMBER_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"{field} cannot be null")
        if "region" in changes and changes["region"] not in REGIONS:
            raise ValidationError(f"region must be one of {REGIONS}")
        if (
            "region" in changes
            and changes["region"] != member["region"]
            and self._assignments.references_member(member_id)
        ):
            raise ValidationError(
                f"Team member {member_id} is referenced by existing assignments; "
                "region cannot change"
            )
        if "email" in changes:
            other = self._members.get_by_email(changes["email"])
            if other is not None and other["id"] != member_id:
                raise ValidationError(f"A member with email '{changes['email']}' already exists")

        start = changes.get("unavailable_start", member.get("unavailable_start"))
        end = changes.get("unavailable_end", member.get("unavailable_end"))
        if (start is None) != (end is None):
            raise ValidationError("unavailable_start and unavailable_end must be set together")
        if start is not None and parse_date(start) > parse_date(end):
            raise ValidationError("unavailable_start must not be after unavailable_end")

        updated = self._members.update(member_id, changes)
        self._refresh_gauges()
        logger.info("Member updated: id=%d, fields=%s", member_id, sorted(changes))
        return updated

    def delete_member(self, member_id: int) -> dict[str, Any]:
        """Delete a member and their holidays. Refused while assignments reference them."""
        self.get_member(member_id)
        if self._assignments.references_member(member_id):
            raise ValidationError(
                f"Team member {member_id} is referenced by existing assignments"
            )
        removed_holidays = self._holidays.delete_by_member(member_id)
        self._members.delete(member_id)
        self._refresh_gauges()
        logger.info("Member deleted: id=%d, holidays_removed=%d", member_id, removed_holidays)
        return {"status": "deleted", "member_id": member_id}

    # ── Members: queries ──

    def list_members(self, region: str | None = None) -> list[dict[str, Any]]:
        if region is None:
            return self._members.get_all()
        if region not in REGIONS:
            raise ValidationError(f"region must be one of {REGIONS}")
        return self._members.list_by_region(region)

    def get_member(self, member_id: int) -> dict[str, Any]:
        member = self._members.get_by_id(member_id)
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    # ── Holidays ──

    def list_holidays(self) -> list[dict[str, Any]]:
        return self._holidays.get_all()

    def list_member_holidays(self, member_id: int) -> list[dict[str, Any]]:
        self.get_member(member_id)
        return self._holidays.list_by_member(member_id)

    def create_holiday(self, data: dict[str, Any]) -> dict[str, Any]:
        """Record a holiday. Raises ValidationError for an unknown member or bad range."""
        if not self._members.exists(data["member_id"]):
            raise ValidationError(f"member_id references unknown team member {data['member_id']}")
        start = parse_date(data["start_date"], "start_date")
        end = parse_date(data["end_date"], "end_date")
        if start > end:
            raise ValidationError("start_date must not be after end_date")

        holiday = self._holidays.create({
            "member_id": data["member_id"],
            "start_date": start,
            "end_date": end,
            "description": data.get("description"),
        })
        self._refresh_gauges()
        logger.info(
            "Holiday created: id=%d, member_id=%d, %s..%s",
            holiday["id"], holiday["member_id"], start.isoformat(), end.isoformat(),
        )
        return holiday

    def update_holiday(self, holiday_id: int, changes: dict[str, Any]) -> dict[str, Any]:
        holiday = self._holidays.get_by_id(holiday_id)
        if holiday is None:
            raise RecordNotFoundError(f"Holiday {holiday_id} not found")
        if "member_id" in changes and not self._members.exists(changes["member_id"]):
            raise ValidationError(
                f"member_id references unknown team member {changes['member_id']}"
            )
        start = parse_date(changes.get("start_date", holiday["start_date"]), "start_date")
        end = parse_date(changes.get("end_date", holiday["end_date"]), "end_date")
        if start > end:
            raise ValidationError("start_date must not be after end_date")
        return self._holidays.update(holiday_id, changes)

    def delete_holiday(self, holiday_id: int) -> dict[str, Any]:
        if self._holidays.delete(holiday_id) is None:
            raise RecordNotFoundError(f"Holiday {holiday_id} not found")
        self._refresh_gauges()
        logger.info("Holiday deleted: id=%d", holiday_id)
        return {"status": "deleted", "holiday_id": holiday_id}

    # ── Seed ──

    def seed_defaults(self) -> None:
        """Create a default roster so the service is usable immediately."""
        if self._members.count() > 0:
            logger.info("Roster already present, skipping seed")
            return
        for entry in DEFAULT_ROSTER:
            member = self.create_member(entry)
            for start, end, description in entry.get("holidays", []):
                self.create_holiday({
                    "member_id": member["id"],
                    "start_date": start,
                    "end_date": end,
                    "description": description,
                })
        logger.info("Seeded %d default team members", len(DEFAULT_ROSTER))

    # ── Internal ──

    def _refresh_gauges(self) -> None:
        by_region = self._members.count_by_region()
        for region in REGIONS:
            TEAM_MEMBERS.labels(region=region).set(by_region.get(region, 0))
        HOLIDAYS_RECORDED.set(self._holidays.count())
