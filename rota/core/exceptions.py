# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain exceptions raised by the service layer.
Controllers translate them to HTTP status codes; nothing here knows about HTTP.
"""

from typing import Any


class ValidationError(ValueError):
    """Malformed or missing input (dates, ranges, regions, references)."""


class MemberNotFoundError(KeyError):
    """A member id that does not exist was referenced."""

    def __init__(self, member_id: int) -> None:
        super().__init__(f"Team member {member_id} not found")
        self.member_id = member_id

    def __str__(self) -> str:
        return self.args[0]


class RecordNotFoundError(KeyError):
    """Holiday or assignment lookup by id failed."""

    def __str__(self) -> str:
        return self.args[0]


class AssignmentConflictError(Exception):
    """A manual assignment names a member who is on holiday for its span."""

    def __init__(self, conflicting_members: list[dict[str, Any]]) -> None:
        names = ", ".join(m["name"] for m in conflicting_members)
        super().__init__(f"Holiday conflict for: {names}")
        self.conflicting_members = conflicting_members


class NoCandidateError(Exception):
    """No day of the requested period could be assigned."""

    def __init__(
        self,
        message: str,
        period: dict[str, str],
        conflicts: list[dict[str, Any]],
        skipped_days: list[dict[str, str]],
    ) -> None:
        super().__init__(message)
        self.period = period
        self.conflicts = conflicts
        self.skipped_days = skipped_days

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "period": self.period,
            "conflicts": self.conflicts,
            "skipped_days": self.skipped_days,
        }


class HorizonExhausted(Exception):
    """The week finder found no workable week within its bound."""

    def __init__(self, max_weeks: int) -> None:
        super().__init__(
            f"No available weeks found in the next {max_weeks} weeks. "
            "Please check team availability or assign manually."
        )
        self.max_weeks = max_weeks
