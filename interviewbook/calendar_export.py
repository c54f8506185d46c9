"""iCalendar export for confirmed bookings."""

from datetime import datetime, timezone

from interviewbook.config import CALENDAR_EVENT_MINUTES
from interviewbook.models import Booking

ICS_FILENAME = "interview-booking.ics"
ICS_MEDIA_TYPE = "text/calendar"
PRODID = "-//InterviewBook//Interview Booking//EN"


def escape_text(value: str) -> str:
    """Escape a TEXT property value."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def booking_to_ics(booking: Booking, stamp: datetime | None = None) -> str:
    """Render a single-event calendar file for a booking.

    DTSTART is a floating local time; the event always lasts
    CALENDAR_EVENT_MINUTES regardless of the booking's own duration.
    """
    stamp = stamp or datetime.now(timezone.utc)
    dtstart = f"{booking.booking_date:%Y%m%d}T{booking.booking_time:%H%M}00"

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "BEGIN:VEVENT",
        f"UID:{booking.id}@interviewbook",
        f"DTSTAMP:{stamp.astimezone(timezone.utc):%Y%m%dT%H%M%SZ}",
        f"DTSTART:{dtstart}",
        f"SUMMARY:{escape_text(f'Interview - {booking.role_applied}')}",
        f"DESCRIPTION:{escape_text(f'Interview booking for {booking.candidate_name}')}",
        f"DURATION:PT{CALENDAR_EVENT_MINUTES}M",
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines) + "\r\n"
