# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
Every date field goes through the same rule: strip a time part, then
parse strictly as YYYY-MM-DD.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from rota.models.domain import Holiday, Member, normalise_date_field

STRATEGY_PATTERN = "^(load_balancing|recency_weighted)$"


def _required(value, field: str):
    """Omitting a field leaves it unchanged; an explicit null is refused."""
    if value is None:
        raise ValueError(f"{field} cannot be null")
    return value


# ── Member Schemas ──

class MemberCreateRequest(Member):
    pass


class MemberUpdateRequest(BaseModel):
    """Partial update model for PATCH /api/v1/members/{id}."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=3, max_length=255)
    region: Optional[str] = Field(default=None, pattern="^(us|uk)$")
    is_available: Optional[bool] = None
    unavailable_start: Optional[date] = None
    unavailable_end: Optional[date] = None

    @field_validator("unavailable_start", "unavailable_end", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)

    @field_validator("name", "email", "region", "is_available", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        return _required(v, info.field_name)

    @field_validator("region", mode="before")
    @classmethod
    def normalise_region(cls, v):
        return v.lower().strip() if isinstance(v, str) else v


class MemberResponse(BaseModel):
    id: int
    name: str
    email: str
    region: str
    is_available: bool
    unavailable_start: Optional[date] = None
    unavailable_end: Optional[date] = None


# ── Holiday Schemas ──

class HolidayCreateRequest(Holiday):
    pass


class HolidayUpdateRequest(BaseModel):
    member_id: Optional[int] = Field(default=None, ge=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)


class HolidayResponse(BaseModel):
    id: int
    member_id: int
    start_date: date
    end_date: date
    description: Optional[str] = None
    created_at: str


# ── Assignment Schemas ──

class AssignmentSpan(BaseModel):
    start_date: date
    end_date: date
    us_member_id: Optional[int] = Field(default=None, ge=1)
    uk_member_id: Optional[int] = Field(default=None, ge=1)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class AssignmentCreateRequest(AssignmentSpan):
    notes: Optional[str] = Field(default=None, max_length=2000)
    is_manual: bool = True
    allow_conflicts: bool = Field(
        default=False, description="Create even if a member is on holiday"
    )


class AssignmentUpdateRequest(BaseModel):
    notes: Optional[str] = Field(default=None, max_length=2000)
    is_manual: Optional[bool] = None

    @field_validator("is_manual", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        return _required(v, info.field_name)


class ConflictCheckRequest(AssignmentSpan):
    pass


class AssignmentResponse(BaseModel):
    id: int
    start_date: date
    end_date: date
    us_member_id: Optional[int] = None
    uk_member_id: Optional[int] = None
    notes: Optional[str] = None
    is_manual: bool
    created_at: str


# ── Auto-assign Schemas ──

class AutoAssignRequest(BaseModel):
    """Both dates or neither; with neither the next workable week is used."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    strategy: Optional[str] = Field(default=None, pattern=STRATEGY_PATTERN)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)

    @model_validator(mode="after")
    def check_pair(self):
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("start_date and end_date must be given together")
        if self.start_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class PlanPeriodRequest(BaseModel):
    start_date: date
    end_date: date
    strategy: Optional[str] = Field(default=None, pattern=STRATEGY_PATTERN)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)


# ── Roster sync (stub) ──

class RosterSyncRequest(BaseModel):
    provider_url: str = Field(..., min_length=1, max_length=500)
    group: Optional[str] = Field(default=None, max_length=255)
