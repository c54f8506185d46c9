"""Confirmation email sending using Resend API."""

import logging
from datetime import date, time

import resend
from jinja2 import Environment, FileSystemLoader, select_autoescape

from interviewbook import config
from interviewbook.models import BookingNotFound, EmailConfigurationError
from interviewbook.storage import BookingDB

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "confirmation_email.html"

_env = Environment(
    loader=FileSystemLoader(config.TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def format_long_date(value: date) -> str:
    """e.g. 'Monday, October 19, 2026'."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_short_time(value: time) -> str:
    return value.strftime("%H:%M")


def render_confirmation(
    candidate_name: str,
    booking_date: date,
    booking_time: time,
    role_applied: str,
    meeting_link: str | None = None,
) -> str:
    """Render the confirmation email body."""
    template = _env.get_template(TEMPLATE_NAME)
    return template.render(
        candidate_name=candidate_name,
        formatted_date=format_long_date(booking_date),
        formatted_time=format_short_time(booking_time),
        role_applied=role_applied,
        meeting_link=meeting_link,
    )


def send_confirmation(db: BookingDB, booking_id: str, api_key: str | None = None) -> dict:
    """Send the confirmation email for a booking.

    Copies the default meeting link onto the booking before sending so the
    admin view shows the link the candidate received.

    Raises:
        EmailConfigurationError: No Resend API key configured
        BookingNotFound: Unknown booking id
    """
    api_key = api_key or config.RESEND_API_KEY
    if not api_key:
        raise EmailConfigurationError("RESEND_API_KEY is not configured")

    booking = db.get_booking(booking_id)
    if booking is None:
        raise BookingNotFound(booking_id)

    meeting_link = db.get_setting(config.MEETING_LINK_SETTING)
    if meeting_link:
        db.set_meeting_link(booking_id, meeting_link)

    html = render_confirmation(
        candidate_name=booking.candidate_name,
        booking_date=booking.booking_date,
        booking_time=booking.booking_time,
        role_applied=booking.role_applied,
        meeting_link=meeting_link,
    )
    subject = (
        f"Interview Confirmed — {format_long_date(booking.booking_date)}"
        f" at {format_short_time(booking.booking_time)}"
    )

    resend.api_key = api_key
    resend.Emails.send(
        {
            "from": config.CONFIRMATION_FROM_EMAIL,
            "to": [booking.candidate_email],
            "subject": subject,
            "html": html,
        }
    )

    logger.info(f"📬 Confirmation sent to {booking.candidate_email} for {booking_id}")
    return {"success": True, "meeting_link": meeting_link}


def dispatch_confirmation(db: BookingDB, booking_id: str) -> dict:
    """Fire-and-forget wrapper around send_confirmation. Never raises."""
    try:
        return send_confirmation(db, booking_id)
    except Exception as e:
        logger.warning(f"⚠️ Confirmation email for {booking_id} failed: {e}")
        return {"success": False, "error": str(e)}
