"""Interview booking Pydantic models.

Admin configuration: AvailabilityRule, BlockedDate, AdminSetting
Candidate side: CandidateInfo → Booking
"""

from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from interviewbook.config import (
    MAX_EMAIL_LENGTH,
    MAX_MEETING_LINK_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_REASON_LENGTH,
    MAX_ROLE_LENGTH,
)

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class BookingStatus(str, Enum):
    """Lifecycle states of a booking."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


TERMINAL_STATUSES = frozenset(
    {BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW}
)


class Role(str, Enum):
    """Application roles granted to users."""

    ADMIN = "admin"
    USER = "user"


# =============================================================================
# Response Models (full resources)
# =============================================================================


class AvailabilityRule(BaseModel):
    """Recurring weekly window in which interviews can be booked."""

    id: str
    admin_user_id: str
    day_of_week: int = Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    start_time: time
    end_time: time
    slot_duration_minutes: int = Field(gt=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]


class BlockedDate(BaseModel):
    """A whole calendar day removed from availability."""

    id: str
    admin_user_id: str
    blocked_date: date
    reason: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class Booking(BaseModel):
    """A candidate's reservation of one slot."""

    id: str
    candidate_name: str
    candidate_email: str
    candidate_phone: str | None = None
    role_applied: str
    notes: str | None = None
    booking_date: date
    booking_time: time
    duration_minutes: int = 30
    status: BookingStatus = BookingStatus.SCHEDULED
    meeting_link: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class AdminSetting(BaseModel):
    """Key/value setting owned by one admin."""

    id: str
    admin_user_id: str
    setting_key: str
    setting_value: str
    updated_at: datetime = Field(default_factory=datetime.now)


class User(BaseModel):
    """An authenticated identity."""

    id: str
    email: str
    full_name: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class TimeSlot(BaseModel):
    """A bookable time of day on the resolved date."""

    time_of_day: time = Field(serialization_alias="time")
    available: bool

    @property
    def label(self) -> str:
        """Display form, e.g. '09:30'."""
        return self.time_of_day.strftime("%H:%M")


class SlotListing(BaseModel):
    """Slots for one date, echoed with the caller's sequence number."""

    booking_date: date = Field(serialization_alias="date")
    seq: int | None = None
    slots: list[TimeSlot]


class BookingCalendar(BaseModel):
    """What the date picker needs to disable unbookable days."""

    from_date: date
    to_date: date
    available_days: list[int] = Field(description="Weekdays with an active rule")
    blocked_dates: list[date]


class DashboardStats(BaseModel):
    """Summary counts for the admin dashboard."""

    today: int
    week: int
    total_upcoming: int
    upcoming: list[Booking]


# =============================================================================
# Request Models (for creation)
# =============================================================================


class CandidateInfo(BaseModel):
    """Contact details submitted by a candidate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    candidate_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    candidate_email: EmailStr
    candidate_phone: str | None = Field(default=None, max_length=MAX_PHONE_LENGTH)
    role_applied: str = Field(min_length=1, max_length=MAX_ROLE_LENGTH)
    notes: str | None = Field(default=None, max_length=MAX_NOTES_LENGTH)

    @field_validator("candidate_email")
    @classmethod
    def email_within_limit(cls, value: str) -> str:
        if len(value) > MAX_EMAIL_LENGTH:
            raise ValueError(f"email must be at most {MAX_EMAIL_LENGTH} characters")
        return value

    @field_validator("candidate_phone", "notes")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class CreateBooking(CandidateInfo):
    """Request to book a slot."""

    booking_date: date
    booking_time: time


class CreateRule(BaseModel):
    """Request to add a weekly availability window."""

    day_of_week: int = Field(ge=0, le=6)
    start_time: time
    end_time: time
    slot_duration_minutes: int = Field(default=30, gt=0, le=24 * 60)

    @model_validator(mode="after")
    def start_before_end(self) -> "CreateRule":
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class UpdateRule(BaseModel):
    """Request to toggle a rule on or off."""

    is_active: bool


class CreateBlockedDate(BaseModel):
    """Request to block a whole day."""

    model_config = ConfigDict(str_strip_whitespace=True)

    blocked_date: date
    reason: str | None = Field(default=None, max_length=MAX_REASON_LENGTH)

    @field_validator("reason")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class UpdateStatus(BaseModel):
    """Request to move a booking to another status."""

    status: BookingStatus


class MeetingLink(BaseModel):
    """Default meeting link included in confirmation emails."""

    model_config = ConfigDict(str_strip_whitespace=True)

    value: str | None = Field(default=None, max_length=MAX_MEETING_LINK_LENGTH)


# =============================================================================
# Store filters
# =============================================================================


class RuleFilter(BaseModel):
    """Typed filter for availability rule queries."""

    day_of_week: int | None = Field(default=None, ge=0, le=6)
    is_active: bool | None = None


class BookingFilter(BaseModel):
    """Typed filter for booking queries."""

    status: BookingStatus | None = None
    booking_date: date | None = None
    from_date: date | None = None
    to_date: date | None = None
    search: str | None = None
    ascending: bool = False
    limit: int | None = Field(default=None, gt=0)
