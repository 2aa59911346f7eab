# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from rota.services.dates import parse_date, strip_time_component

REGIONS: tuple[str, ...] = ("us", "uk")
REGION_LABELS: dict[str, str] = {"us": "US", "uk": "UK"}


def normalise_date_field(value):
    """Boundary rule shared by every date field: strip time, then parse strictly."""
    if value is None or isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date(strip_time_component(value))
    raise ValueError("expected a YYYY-MM-DD date")


class Member(BaseModel):
    """A single rota team member."""
    name: str = Field(..., min_length=1, max_length=255, description="Member name")
    email: str = Field(..., min_length=3, max_length=255, description="Member email")
    region: str = Field(..., pattern="^(us|uk)$", description="Region: us or uk")
    is_available: bool = Field(default=True, description="False pauses auto-assignment")
    unavailable_start: Optional[date] = Field(
        default=None, description="Legacy single unavailable range (start)"
    )
    unavailable_end: Optional[date] = Field(
        default=None, description="Legacy single unavailable range (end)"
    )

    @field_validator("region", mode="before")
    @classmethod
    def normalise_region(cls, v):
        return v.lower().strip() if isinstance(v, str) else v

    @field_validator("unavailable_start", "unavailable_end", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)

    @model_validator(mode="after")
    def check_unavailable_range(self):
        if (self.unavailable_start is None) != (self.unavailable_end is None):
            raise ValueError("unavailable_start and unavailable_end must be set together")
        if self.unavailable_start and self.unavailable_start > self.unavailable_end:
            raise ValueError("unavailable_start must not be after unavailable_end")
        return self


class Holiday(BaseModel):
    """A member-owned inclusive date range of unavailability."""
    member_id: int = Field(..., ge=1)
    start_date: date
    end_date: date
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_dates(cls, v):
        return normalise_date_field(v)

    @model_validator(mode="after")
    def check_order(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self
