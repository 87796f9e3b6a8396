"""Senate floor calendar DTOs."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class CalendarId(BaseModel):
    """Calendar number within a session year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Session year")
    number: int = Field(..., ge=0, description="Calendar number within the year")

    def __str__(self) -> str:
        return f"{self.year}#{self.number}"


class Calendar(BaseModel):
    """Calendar with the bill print numbers listed on it."""

    calendar_id: CalendarId
    cal_date: date = Field(..., description="Date the calendar is in effect")
    published_at: datetime | None = Field(
        None, description="Time the calendar was published by its source, in local time"
    )
    entries: list[str] = Field(
        default_factory=list, description="Bill print numbers listed on the calendar"
    )

    @field_validator("published_at")
    @classmethod
    def _published_at_local(cls, value: datetime | None) -> datetime | None:
        return to_local_naive(value) if value is not None else None
