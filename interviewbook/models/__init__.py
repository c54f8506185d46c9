"""Interviewbook models - domain resources, requests, and errors."""

from interviewbook.models.errors import (
    BookingError,
    BookingErrorType,
    BookingNotFound,
    EmailConfigurationError,
    InvalidStatusTransition,
    SchedulingError,
)
from interviewbook.models.schemas import (
    DAY_NAMES,
    TERMINAL_STATUSES,
    AdminSetting,
    AvailabilityRule,
    BlockedDate,
    Booking,
    BookingCalendar,
    BookingFilter,
    BookingStatus,
    CandidateInfo,
    CreateBlockedDate,
    CreateBooking,
    CreateRule,
    DashboardStats,
    MeetingLink,
    Role,
    RuleFilter,
    SlotListing,
    TimeSlot,
    UpdateRule,
    UpdateStatus,
    User,
)

__all__ = [
    # Resources
    "AdminSetting",
    "AvailabilityRule",
    "BlockedDate",
    "Booking",
    "BookingStatus",
    "Role",
    "User",
    "DAY_NAMES",
    "TERMINAL_STATUSES",
    # Derived views
    "BookingCalendar",
    "DashboardStats",
    "SlotListing",
    "TimeSlot",
    # Requests
    "CandidateInfo",
    "CreateBlockedDate",
    "CreateBooking",
    "CreateRule",
    "MeetingLink",
    "UpdateRule",
    "UpdateStatus",
    # Filters
    "BookingFilter",
    "RuleFilter",
    # Errors
    "BookingError",
    "BookingErrorType",
    "BookingNotFound",
    "EmailConfigurationError",
    "InvalidStatusTransition",
    "SchedulingError",
]
